"""Random graph generator with a degree floor and an exact edge count.

Two-phase seed-then-repair:
1. Seeding gives every node degree >= 2 (a Hamiltonian cycle needs it).
2. Count repair adds uniformly sampled absent pairs until the edge count
   reaches the target. Adding edges never lowers a degree, so the floor
   from phase 1 survives.

If seeding already overshot the target, generation restarts from an empty
graph instead of removing edges. This terminates quickly for moderate
densities. Seeding alone adds at least node_count edges and often a few
more, so targets close to node_count overshoot on most attempts, hence the
optional max_restarts budget.

The "bernoulli" mode reproduces plain G(n, p) sampling with no edge target
and no degree floor.
"""

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np

from hamdata.config.experiment import GraphConfig
from hamdata.errors import GenerationOverrun, GraphGenerationError
from hamdata.graph.types import Graph
from hamdata.graph.validation import check_integrity

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """A frozen, validated graph and the number of overshoot restarts it took."""

    graph: Graph
    restarts: int


def _connect_to_random_nodes(
    graph: Graph,
    node: int,
    count: int,
    rng: np.random.Generator,
    exclude: list[int] | None = None,
) -> None:
    """Connect node to `count` distinct, uniformly chosen other nodes."""
    excluded = set(exclude or ())
    excluded.add(node)
    candidates = [v for v in range(graph.node_count) if v not in excluded]
    for v in rng.choice(candidates, size=count, replace=False):
        graph.set_edge(node, int(v))


def seed_degree_floor(graph: Graph, rng: np.random.Generator) -> None:
    """Raise every node to degree >= 2, visiting nodes in a random order.

    Degree 0 nodes get two new neighbors, degree 1 nodes get one neighbor
    other than the existing one, nodes already at degree >= 2 are skipped.
    """
    for node in rng.permutation(graph.node_count):
        node = int(node)
        deg = graph.degree(node)
        if deg == 0:
            _connect_to_random_nodes(graph, node, 2, rng)
        elif deg == 1:
            _connect_to_random_nodes(
                graph, node, 1, rng, exclude=graph.neighbors(node)
            )


def seed_two_edges(graph: Graph, rng: np.random.Generator) -> None:
    """Give every node edges to two random distinct partners, unconditionally.

    Overshoots the edge target more often than seed_degree_floor.
    """
    for node in rng.permutation(graph.node_count):
        _connect_to_random_nodes(graph, int(node), 2, rng)


def repair_edge_count(
    graph: Graph, target_edge_count: int, rng: np.random.Generator
) -> int:
    """Top the graph up to exactly target_edge_count edges.

    Samples the missing number of absent pairs uniformly without replacement.

    Returns:
        Number of edges added.

    Raises:
        GenerationOverrun: If the graph already has more edges than the target.
    """
    delta = target_edge_count - graph.edge_count()
    if delta < 0:
        raise GenerationOverrun(
            f"Seeding produced {graph.edge_count()} edges, "
            f"target is {target_edge_count}"
        )
    if delta == 0:
        return 0

    pairs = graph.absent_pairs()
    chosen = rng.choice(len(pairs), size=delta, replace=False)
    for i, j in pairs[chosen]:
        graph.set_edge(int(i), int(j))
    return delta


def sample_bernoulli(
    graph: Graph, edge_probability: float, rng: np.random.Generator
) -> None:
    """Set each pair (i < j) present independently with edge_probability."""
    rows, cols = np.triu_indices(graph.node_count, k=1)
    present = rng.random(rows.size) < edge_probability
    for i, j in zip(rows[present], cols[present]):
        graph.set_edge(int(i), int(j))


SEEDERS: dict[str, Callable[[Graph, np.random.Generator], None]] = {
    "degree_floor": seed_degree_floor,
    "two_edges": seed_two_edges,
}


def generate_graph(
    config: GraphConfig, rng: np.random.Generator
) -> GenerationResult:
    """Generate one frozen graph according to the configured mode.

    Args:
        config: Graph generation parameters (validated by DatasetConfig).
        rng: numpy random Generator, the only source of randomness.

    Returns:
        GenerationResult with the graph and the restart count.

    Raises:
        ConfigError: If node/edge counts are out of range.
        GraphGenerationError: If config.max_restarts is exceeded.
        IntegrityViolation: If the produced graph breaks an invariant.
    """
    if config.mode == "bernoulli":
        graph = Graph(config.node_count)
        sample_bernoulli(graph, config.edge_probability, rng)
        check_integrity(graph, min_degree=0)
        graph.freeze()
        return GenerationResult(graph=graph, restarts=0)

    seeder = SEEDERS[config.mode]
    restarts = 0
    while True:
        graph = Graph.new(config.node_count, config.target_edge_count)
        seeder(graph, rng)
        try:
            repair_edge_count(graph, config.target_edge_count, rng)
        except GenerationOverrun as exc:
            restarts += 1
            log.debug("Generation restart %d: %s", restarts, exc)
            if config.max_restarts is not None and restarts > config.max_restarts:
                raise GraphGenerationError(
                    f"Failed to generate a graph with "
                    f"{config.target_edge_count} edges on "
                    f"{config.node_count} nodes after "
                    f"{config.max_restarts} restarts"
                ) from exc
            continue

        check_integrity(graph)
        graph.freeze()
        return GenerationResult(graph=graph, restarts=restarts)
