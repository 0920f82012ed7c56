"""Structural validation of completed graphs.

validate_graph() collects every broken invariant as an error string;
check_integrity() turns a non-empty list into an IntegrityViolation.
"""

import logging

import numpy as np
from scipy.sparse.csgraph import connected_components

from hamdata.errors import IntegrityViolation
from hamdata.graph.types import Graph

log = logging.getLogger(__name__)

MIN_DEGREE = 2


def validate_graph(
    graph: Graph,
    target_edge_count: int | None = None,
    min_degree: int = MIN_DEGREE,
) -> list[str]:
    """Validate a completed graph against the generator's postconditions.

    Checks (cheapest first):
    1. No self-loops
    2. Symmetric adjacency
    3. Minimum degree >= min_degree
    4. Edge count equals target_edge_count (when given)

    Args:
        graph: Graph to check.
        target_edge_count: Expected number of edges, or None to skip.
        min_degree: Required minimum degree (0 disables the check).

    Returns:
        List of error strings (empty = valid graph).
    """
    errors: list[str] = []
    adj = graph.adjacency

    # 1. No self-loops
    diag_sum = int(adj.diagonal().sum())
    if diag_sum != 0:
        errors.append(f"Self-loops detected: diagonal sum = {diag_sum}")

    # 2. Symmetry
    asymmetric = int((adj != adj.T).sum()) // 2
    if asymmetric:
        errors.append(f"Adjacency not symmetric: {asymmetric} mismatched pairs")

    # 3. Minimum degree
    if min_degree > 0:
        degrees = graph.degrees()
        low = np.flatnonzero(degrees < min_degree)
        if low.size:
            errors.append(
                f"Nodes {low.tolist()} have degree < {min_degree} "
                f"(degrees {degrees[low].tolist()})"
            )

    # 4. Exact edge count
    if target_edge_count is not None:
        actual = graph.edge_count()
        if actual != target_edge_count:
            errors.append(
                f"Edge count {actual} != target {target_edge_count}"
            )

    return errors


def check_integrity(graph: Graph, min_degree: int = MIN_DEGREE) -> None:
    """Raise IntegrityViolation if the graph breaks any invariant.

    The edge count is checked against graph.target_edge_count when set.
    """
    errors = validate_graph(graph, graph.target_edge_count, min_degree)
    if errors:
        raise IntegrityViolation("; ".join(errors))


def count_components(graph: Graph) -> int:
    """Number of connected components (undirected)."""
    n_components, _ = connected_components(graph.to_sparse(), directed=False)
    return int(n_components)


def is_connected(graph: Graph) -> bool:
    return count_components(graph) == 1
