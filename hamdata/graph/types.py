"""Graph data structure for Hamiltonicity dataset generation."""

import numpy as np
import scipy.sparse

from hamdata.config.experiment import check_graph_dimensions
from hamdata.errors import IntegrityViolation


class Graph:
    """Undirected simple graph on a fixed node set, stored as a dense boolean
    adjacency matrix.

    The matrix is symmetric with a false diagonal at every observable point:
    set_edge() is the only mutation path and writes both halves at once.
    The adjacency property hands out read-only views. Once the generator is
    done it calls freeze(), after which set_edge() raises.
    """

    __slots__ = ("node_count", "target_edge_count", "_adjacency", "_frozen")

    def __init__(self, node_count: int, target_edge_count: int | None = None) -> None:
        check_graph_dimensions(node_count, target_edge_count)
        self.node_count = node_count
        self.target_edge_count = target_edge_count
        self._adjacency = np.zeros((node_count, node_count), dtype=bool)
        self._frozen = False

    @classmethod
    def new(cls, node_count: int, target_edge_count: int) -> "Graph":
        """Allocate an empty graph shell with a required edge target."""
        return cls(node_count, target_edge_count)

    @classmethod
    def from_adjacency(
        cls, matrix, target_edge_count: int | None = None
    ) -> "Graph":
        """Rebuild a frozen Graph from a stored adjacency matrix.

        Raises:
            IntegrityViolation: If the matrix is not square, not symmetric,
                or has a self-loop.
            ConfigError: If the dimensions are out of range.
        """
        arr = np.asarray(matrix, dtype=bool)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise IntegrityViolation(
                f"Adjacency matrix must be square, got shape {arr.shape}"
            )
        if arr.diagonal().any():
            raise IntegrityViolation("Self-loops present in adjacency matrix")
        if not np.array_equal(arr, arr.T):
            raise IntegrityViolation("Adjacency matrix is not symmetric")

        graph = cls(arr.shape[0], target_edge_count)
        graph._adjacency[:] = arr
        graph.freeze()
        return graph

    @property
    def adjacency(self) -> np.ndarray:
        view = self._adjacency.view()
        view.flags.writeable = False
        return view

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True
        self._adjacency.flags.writeable = False

    def set_edge(self, i: int, j: int, present: bool = True) -> None:
        """Set edge {i, j} present or absent, writing both matrix halves.

        Raises:
            ValueError: On a self-loop, an out-of-range node, or a frozen graph.
        """
        if self._frozen:
            raise ValueError("Cannot modify a frozen graph")
        if i == j:
            raise ValueError(f"Self-loops are not allowed (node {i})")
        n = self.node_count
        if not (0 <= i < n and 0 <= j < n):
            raise ValueError(f"Edge ({i}, {j}) out of range for {n} nodes")
        self._adjacency[i, j] = present
        self._adjacency[j, i] = present

    def has_edge(self, i: int, j: int) -> bool:
        return bool(self._adjacency[i, j])

    def degree(self, i: int) -> int:
        return int(self._adjacency[i].sum())

    def degrees(self) -> np.ndarray:
        return self._adjacency.sum(axis=1)

    def edge_count(self) -> int:
        return int(self.degrees().sum()) // 2

    def neighbors(self, i: int) -> list[int]:
        """Neighbors of node i in increasing index order."""
        return np.flatnonzero(self._adjacency[i]).tolist()

    def absent_pairs(self) -> np.ndarray:
        """All absent node pairs (i, j) with i < j, as an (k, 2) int array."""
        rows, cols = np.triu_indices(self.node_count, k=1)
        mask = ~self._adjacency[rows, cols]
        return np.column_stack((rows[mask], cols[mask]))

    def copy_adjacency(self) -> np.ndarray:
        """Detached, writable copy of the adjacency matrix."""
        return self._adjacency.copy()

    def to_lists(self) -> list[list[bool]]:
        """Adjacency as nested Python lists, rows in node-index order."""
        return self._adjacency.tolist()

    def to_sparse(self) -> scipy.sparse.csr_matrix:
        return scipy.sparse.csr_matrix(self._adjacency.astype(np.int8))

    def __repr__(self) -> str:
        return (
            f"Graph(node_count={self.node_count}, "
            f"target_edge_count={self.target_edge_count}, "
            f"edges={self.edge_count()}, frozen={self._frozen})"
        )
