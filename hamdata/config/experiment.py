"""Dataset configuration dataclasses: all frozen and slotted for immutability."""

from dataclasses import dataclass, field

from hamdata.errors import ConfigError

# Generation strategies understood by hamdata.graph.generator
GENERATION_MODES: tuple[str, ...] = ("degree_floor", "two_edges", "bernoulli")

# Largest node count the exhaustive Hamiltonicity search is allowed to see
MAX_ORACLE_NODES = 16

MIN_NODES = 3


def max_edge_count(node_count: int) -> int:
    """Number of edges in the complete graph on node_count nodes."""
    return node_count * (node_count - 1) // 2


def forced_hamiltonian_edge_count(node_count: int) -> int:
    """Edge count from which every graph on node_count nodes is Hamiltonian.

    Ore (1960): a graph with at least C(n-1, 2) + 2 edges has a Hamiltonian
    cycle.
    """
    return max_edge_count(node_count - 1) + 2


def check_graph_dimensions(node_count: int, target_edge_count: int | None) -> None:
    """Reject node/edge counts that cannot describe a Hamiltonian candidate.

    Raises:
        ConfigError: If node_count < 3, or target_edge_count (when given) lies
            outside [node_count, node_count * (node_count - 1) / 2].
    """
    if node_count < MIN_NODES:
        raise ConfigError(
            f"node_count ({node_count}) must be >= {MIN_NODES}"
        )
    if target_edge_count is None:
        return
    if target_edge_count < node_count:
        raise ConfigError(
            f"target_edge_count ({target_edge_count}) must be >= "
            f"node_count ({node_count})"
        )
    upper = max_edge_count(node_count)
    if target_edge_count > upper:
        raise ConfigError(
            f"target_edge_count ({target_edge_count}) must be <= "
            f"{upper} for node_count={node_count}"
        )


@dataclass(frozen=True, slots=True)
class GraphConfig:
    """Random graph generation parameters."""

    node_count: int = 8
    target_edge_count: int | None = 12  # must be None in "bernoulli" mode
    mode: str = "degree_floor"  # one of GENERATION_MODES
    edge_probability: float = 0.5  # "bernoulli" mode only
    max_restarts: int | None = None  # None = restart until the target is hit


@dataclass(frozen=True, slots=True)
class BuilderConfig:
    """Dataset builder loop parameters."""

    graphs_per_class: int = 100
    filter_candidates: bool = False  # structural pre-oracle rejection
    density_threshold: float = 0.5  # edge fraction cap while only non-Hamiltonian is open
    max_candidates: int | None = None  # None = no bound on candidate generations
    n_workers: int = 1


@dataclass(frozen=True, slots=True)
class DatasetConfig:
    """Top-level dataset configuration composing all sub-configs.

    All fields are frozen and typed. Cross-parameter validation runs
    in __post_init__ so invalid configurations fail before any generation.
    """

    graph: GraphConfig = field(default_factory=GraphConfig)
    builder: BuilderConfig = field(default_factory=BuilderConfig)
    seed: int = 42
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        g = self.graph
        b = self.builder

        if g.mode not in GENERATION_MODES:
            raise ConfigError(
                f"mode must be one of {GENERATION_MODES}, got {g.mode!r}"
            )
        if g.node_count > MAX_ORACLE_NODES:
            raise ConfigError(
                f"node_count ({g.node_count}) exceeds {MAX_ORACLE_NODES}; "
                f"exhaustive Hamiltonicity search is exponential in node_count"
            )
        if g.mode == "bernoulli":
            if g.target_edge_count is not None:
                raise ConfigError(
                    "target_edge_count must be null in bernoulli mode, "
                    f"got {g.target_edge_count}"
                )
            if not 0.0 < g.edge_probability <= 1.0:
                raise ConfigError(
                    f"edge_probability must be in (0, 1], got {g.edge_probability}"
                )
        elif g.target_edge_count is None:
            raise ConfigError(f"target_edge_count is required in {g.mode} mode")
        check_graph_dimensions(g.node_count, g.target_edge_count)
        if (
            g.target_edge_count is not None
            and g.target_edge_count >= forced_hamiltonian_edge_count(g.node_count)
        ):
            raise ConfigError(
                f"every graph with {g.target_edge_count} edges on "
                f"{g.node_count} nodes is Hamiltonian; the non-Hamiltonian "
                f"class could never be filled (need target_edge_count < "
                f"{forced_hamiltonian_edge_count(g.node_count)})"
            )

        if g.max_restarts is not None and g.max_restarts < 1:
            raise ConfigError(
                f"max_restarts must be >= 1 or null, got {g.max_restarts}"
            )
        if b.graphs_per_class < 1:
            raise ConfigError(
                f"graphs_per_class must be >= 1, got {b.graphs_per_class}"
            )
        if not 0.0 < b.density_threshold <= 1.0:
            raise ConfigError(
                f"density_threshold must be in (0, 1], got {b.density_threshold}"
            )
        if (
            b.filter_candidates
            and g.target_edge_count is not None
            and g.target_edge_count > b.density_threshold * max_edge_count(g.node_count)
        ):
            # Fixed edge count above the threshold: the density filter would
            # reject every candidate once only the non-Hamiltonian class is open.
            raise ConfigError(
                f"target_edge_count ({g.target_edge_count}) exceeds "
                f"density_threshold ({b.density_threshold}) of "
                f"{max_edge_count(g.node_count)} edges; the candidate filter "
                f"would reject every graph"
            )
        if b.n_workers < 1:
            raise ConfigError(f"n_workers must be >= 1, got {b.n_workers}")
        if (
            b.max_candidates is not None
            and b.max_candidates < 2 * b.graphs_per_class
        ):
            raise ConfigError(
                f"max_candidates ({b.max_candidates}) must be >= "
                f"2 * graphs_per_class ({2 * b.graphs_per_class})"
            )
