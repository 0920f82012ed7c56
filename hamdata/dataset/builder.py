"""Dataset builder: fill a Hamiltonian and a non-Hamiltonian bucket to quota.

Loop per candidate: generate a graph, optionally reject it with a cheap
structural filter, label it with the exact oracle, offer its adjacency
matrix to the bucket of its class. Candidates for a full class are
discarded. The build stops once both buckets are full.

With builder.n_workers > 1, candidate generation and labeling run in a
process pool. Every batch gets its own seed from a stream derived from
config.seed; buckets are only touched by the parent process.
"""

import logging
import time
from concurrent.futures import FIRST_COMPLETED, Future, ProcessPoolExecutor, wait

import numpy as np

from hamdata.config.experiment import (
    BuilderConfig,
    DatasetConfig,
    GraphConfig,
    check_graph_dimensions,
    max_edge_count,
)
from hamdata.dataset.types import (
    BuildStats,
    ClassBucket,
    DatasetMetadata,
    GraphClass,
    LabeledDataset,
)
from hamdata.errors import DatasetBuildError
from hamdata.graph.generator import generate_graph
from hamdata.graph.hamiltonian import is_hamiltonian
from hamdata.graph.types import Graph
from hamdata.graph.validation import MIN_DEGREE
from hamdata.reproducibility.seed import make_rng, seed_stream

log = logging.getLogger(__name__)

# Edge targets below this multiple of node_count overshoot on most seedings
SPARSE_TARGET_RATIO = 1.2

# Candidates generated per process-pool task
BATCH_SIZE = 32

# (adjacency or None if filtered, label or None if filtered, restarts, oracle seconds)
CandidateRecord = tuple[np.ndarray | None, GraphClass | None, int, float]


def label_graph(graph: Graph) -> GraphClass:
    """Class of a graph as decided by the exact oracle."""
    return GraphClass.of(is_hamiltonian(graph))


def filter_reason(
    graph: Graph,
    open_classes: frozenset[GraphClass],
    builder: BuilderConfig,
) -> str | None:
    """Structural pre-oracle rejection.

    Only active with builder.filter_candidates. Rejects:
    - graphs with a node of degree < 2 (never Hamiltonian, and trivial as
      non-Hamiltonian examples);
    - while only the non-Hamiltonian class is open, graphs denser than
      builder.density_threshold of the complete graph (dense graphs are
      almost always Hamiltonian, so labeling them is wasted work).

    Labels are still decided by the oracle alone; the filter only decides
    which candidates get labeled.

    Returns:
        Reason string, or None if the candidate should be labeled.
    """
    if not builder.filter_candidates:
        return None

    min_degree = int(graph.degrees().min())
    if min_degree < MIN_DEGREE:
        return f"node degree {min_degree} < {MIN_DEGREE}"

    if open_classes == {GraphClass.NON_HAMILTONIAN}:
        limit = builder.density_threshold * max_edge_count(graph.node_count)
        edges = graph.edge_count()
        if edges > limit:
            return f"{edges} edges above density limit {limit:.1f}"

    return None


def _open_classes(buckets: dict[GraphClass, ClassBucket]) -> frozenset[GraphClass]:
    return frozenset(c for c, bucket in buckets.items() if not bucket.is_full)


def _generate_candidate(
    graph_config: GraphConfig,
    builder: BuilderConfig,
    open_classes: frozenset[GraphClass],
    rng: np.random.Generator,
) -> tuple[Graph, GraphClass | None, int, float]:
    """Generate, filter and label one candidate."""
    result = generate_graph(graph_config, rng)
    reason = filter_reason(result.graph, open_classes, builder)
    if reason is not None:
        log.debug("Candidate filtered: %s", reason)
        return result.graph, None, result.restarts, 0.0

    t0 = time.perf_counter()
    label = label_graph(result.graph)
    return result.graph, label, result.restarts, time.perf_counter() - t0


def _label_batch(
    graph_config: GraphConfig,
    builder: BuilderConfig,
    open_classes: frozenset[GraphClass],
    seed: np.random.SeedSequence,
    batch_size: int,
) -> list[CandidateRecord]:
    """Process-pool task: generate and label batch_size candidates."""
    rng = np.random.default_rng(seed)
    records: list[CandidateRecord] = []
    for _ in range(batch_size):
        graph, label, restarts, seconds = _generate_candidate(
            graph_config, builder, open_classes, rng
        )
        adjacency = graph.copy_adjacency() if label is not None else None
        records.append((adjacency, label, restarts, seconds))
    return records


def _check_budget(
    builder: BuilderConfig,
    buckets: dict[GraphClass, ClassBucket],
    stats: BuildStats,
) -> None:
    if builder.max_candidates is None or stats.candidates < builder.max_candidates:
        return
    counts = ", ".join(
        f"{c.value}={len(b)}/{b.quota}" for c, b in buckets.items()
    )
    raise DatasetBuildError(
        f"Quota not reached after {stats.candidates} candidates ({counts})"
    )


def _accept(
    record: CandidateRecord,
    buckets: dict[GraphClass, ClassBucket],
    stats: BuildStats,
) -> None:
    """Account for one candidate and offer it to its class bucket."""
    adjacency, label, restarts, seconds = record
    stats.candidates += 1
    stats.restarts += restarts
    stats.oracle_seconds += seconds

    if label is None:
        stats.filtered += 1
        return

    bucket = buckets[label]
    if not bucket.offer(adjacency):
        stats.discarded_full += 1
        return
    if bucket.is_full:
        log.info(
            "%s class complete (%d graphs) after %d candidates",
            label.value,
            bucket.quota,
            stats.candidates,
        )


def _fill_serial(
    config: DatasetConfig,
    rng: np.random.Generator,
    buckets: dict[GraphClass, ClassBucket],
    stats: BuildStats,
) -> None:
    while True:
        open_classes = _open_classes(buckets)
        if not open_classes:
            return
        _check_budget(config.builder, buckets, stats)
        graph, label, restarts, seconds = _generate_candidate(
            config.graph, config.builder, open_classes, rng
        )
        adjacency = graph.adjacency if label is not None else None
        _accept((adjacency, label, restarts, seconds), buckets, stats)


def _fill_parallel(
    config: DatasetConfig,
    buckets: dict[GraphClass, ClassBucket],
    stats: BuildStats,
) -> None:
    builder = config.builder
    seeds = seed_stream(config.seed)

    with ProcessPoolExecutor(max_workers=builder.n_workers) as executor:
        pending: set[Future] = set()

        def top_up() -> None:
            open_classes = _open_classes(buckets)
            while len(pending) < builder.n_workers:
                pending.add(
                    executor.submit(
                        _label_batch,
                        config.graph,
                        builder,
                        open_classes,
                        next(seeds),
                        BATCH_SIZE,
                    )
                )

        top_up()
        try:
            while _open_classes(buckets):
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    for record in future.result():
                        if not _open_classes(buckets):
                            break
                        _check_budget(builder, buckets, stats)
                        _accept(record, buckets, stats)
                if _open_classes(buckets):
                    top_up()
        finally:
            for future in pending:
                future.cancel()


def _warn_if_sparse(graph_config: GraphConfig) -> None:
    target = graph_config.target_edge_count
    if target is None:
        return
    if target < SPARSE_TARGET_RATIO * graph_config.node_count:
        log.warning(
            "target_edge_count=%d is close to node_count=%d; seeding will "
            "overshoot often and generation may restart many times",
            target,
            graph_config.node_count,
        )


def build_dataset(
    config: DatasetConfig, rng: np.random.Generator | None = None
) -> LabeledDataset:
    """Build a dataset with exactly graphs_per_class graphs in each class.

    Args:
        config: Dataset configuration (validated on construction).
        rng: Random Generator for the serial build. Defaults to
            make_rng(config.seed). Ignored when builder.n_workers > 1, where
            per-batch seeds are derived from config.seed.

    Returns:
        LabeledDataset whose class lists keep discovery order.

    Raises:
        ConfigError: If node/edge counts are out of range.
        DatasetBuildError: If builder.max_candidates is exceeded.
        GraphGenerationError: If graph.max_restarts is exceeded.
    """
    g = config.graph
    quota = config.builder.graphs_per_class
    check_graph_dimensions(g.node_count, g.target_edge_count)
    _warn_if_sparse(g)

    buckets = {c: ClassBucket(c, quota) for c in GraphClass}
    stats = BuildStats()

    log.info(
        "Building dataset: node_count=%d, target_edge_count=%s, mode=%s, "
        "graphs_per_class=%d, workers=%d",
        g.node_count,
        g.target_edge_count,
        g.mode,
        quota,
        config.builder.n_workers,
    )

    t0 = time.monotonic()
    if config.builder.n_workers > 1:
        _fill_parallel(config, buckets, stats)
    else:
        _fill_serial(
            config, rng if rng is not None else make_rng(config.seed), buckets, stats
        )
    stats.elapsed_seconds = time.monotonic() - t0

    log.info(
        "Dataset complete: %d candidates (%d filtered, %d discarded as "
        "surplus, %d generator restarts), oracle %.2fs of %.2fs",
        stats.candidates,
        stats.filtered,
        stats.discarded_full,
        stats.restarts,
        stats.oracle_seconds,
        stats.elapsed_seconds,
    )

    return LabeledDataset(
        metadata=DatasetMetadata(
            node_count=g.node_count,
            target_edge_count=g.target_edge_count,
            graphs_per_class=quota,
        ),
        hamiltonian=buckets[GraphClass.HAMILTONIAN].graphs,
        non_hamiltonian=buckets[GraphClass.NON_HAMILTONIAN].graphs,
        stats=stats,
    )


def build_class(
    config: DatasetConfig,
    graph_class: GraphClass,
    rng: np.random.Generator,
    max_attempts: int | None = None,
) -> tuple[Graph, int]:
    """Generate graphs until one of the requested class appears.

    Applies the candidate filter as if graph_class were the only open class.

    Returns:
        (frozen graph, number of candidates generated).

    Raises:
        DatasetBuildError: If max_attempts candidates yield no match.
    """
    open_classes = frozenset({graph_class})
    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        graph, label, _, _ = _generate_candidate(
            config.graph, config.builder, open_classes, rng
        )
        if label is graph_class:
            log.debug("Found %s graph after %d candidates", graph_class.value, attempts)
            return graph, attempts
    raise DatasetBuildError(
        f"No {graph_class.value} graph found in {max_attempts} candidates"
    )
