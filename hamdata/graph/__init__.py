"""Graph data model, random generation, validation, and the Hamiltonicity oracle."""

from hamdata.graph.generator import (
    SEEDERS,
    GenerationResult,
    generate_graph,
    repair_edge_count,
    sample_bernoulli,
    seed_degree_floor,
    seed_two_edges,
)
from hamdata.graph.hamiltonian import get_cycle, is_hamiltonian, verify_cycle
from hamdata.graph.types import Graph
from hamdata.graph.validation import (
    check_integrity,
    count_components,
    is_connected,
    validate_graph,
)

__all__ = [
    "GenerationResult",
    "Graph",
    "SEEDERS",
    "check_integrity",
    "count_components",
    "generate_graph",
    "get_cycle",
    "is_connected",
    "is_hamiltonian",
    "repair_edge_count",
    "sample_bernoulli",
    "seed_degree_floor",
    "seed_two_edges",
    "validate_graph",
    "verify_cycle",
]
