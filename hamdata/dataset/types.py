"""Dataset data structures: class labels, quota buckets, and the labeled dataset."""

import threading
from dataclasses import dataclass, field
from enum import Enum

import numpy as np


class GraphClass(Enum):
    """Hamiltonicity label of a graph.

    Values double as the stem of the per-class dataset file names.
    """

    HAMILTONIAN = "hamiltonian"
    NON_HAMILTONIAN = "non_hamiltonian"

    @classmethod
    def of(cls, hamiltonian: bool) -> "GraphClass":
        return cls.HAMILTONIAN if hamiltonian else cls.NON_HAMILTONIAN


class ClassBucket:
    """Quota-bounded, insertion-ordered collection of adjacency matrices.

    offer() performs the quota check and the append as one locked step, so
    concurrent producers can never push a bucket past its quota.
    """

    def __init__(self, graph_class: GraphClass, quota: int) -> None:
        self.graph_class = graph_class
        self.quota = quota
        self._graphs: list[np.ndarray] = []
        self._lock = threading.Lock()

    def offer(self, adjacency: np.ndarray) -> bool:
        """Append a copy of adjacency unless the bucket is full.

        Returns:
            True if accepted, False if the quota was already reached.
        """
        with self._lock:
            if len(self._graphs) >= self.quota:
                return False
            self._graphs.append(np.array(adjacency, dtype=bool, copy=True))
            return True

    @property
    def is_full(self) -> bool:
        with self._lock:
            return len(self._graphs) >= self.quota

    @property
    def graphs(self) -> list[np.ndarray]:
        with self._lock:
            return list(self._graphs)

    def __len__(self) -> int:
        with self._lock:
            return len(self._graphs)


@dataclass(frozen=True, slots=True)
class DatasetMetadata:
    """Parameters describing how a dataset was produced."""

    node_count: int
    target_edge_count: int | None  # None for edge-probability generation
    graphs_per_class: int


@dataclass
class BuildStats:
    """Counters collected by the dataset builder loop.

    Attributes:
        candidates: Graphs produced by the generator.
        filtered: Candidates rejected by the pre-oracle filter (never labeled).
        discarded_full: Labeled candidates whose class bucket was already full.
        restarts: Generator restarts caused by edge-count overshoot.
        oracle_seconds: Time spent in the Hamiltonicity oracle.
        elapsed_seconds: Wall-clock time of the whole build.
    """

    candidates: int = 0
    filtered: int = 0
    discarded_full: int = 0
    restarts: int = 0
    oracle_seconds: float = 0.0
    elapsed_seconds: float = 0.0


@dataclass(frozen=True)
class LabeledDataset:
    """Two quota-filled graph classes plus their metadata.

    Uses frozen=True but omits slots=True since numpy arrays don't interact
    well with __slots__. Graph lists keep discovery order.
    """

    metadata: DatasetMetadata
    hamiltonian: list[np.ndarray]  # bool arrays of shape (n, n)
    non_hamiltonian: list[np.ndarray]
    stats: BuildStats = field(default_factory=BuildStats)

    def graphs(self, graph_class: GraphClass) -> list[np.ndarray]:
        if graph_class is GraphClass.HAMILTONIAN:
            return self.hamiltonian
        return self.non_hamiltonian
