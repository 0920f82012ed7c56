"""Tests for the dataset builder loop, class buckets, and candidate filter."""

import threading
from unittest.mock import patch

import numpy as np
import pytest

from hamdata.config import BuilderConfig, DatasetConfig, GraphConfig
from hamdata.dataset import (
    ClassBucket,
    GraphClass,
    build_class,
    build_dataset,
    filter_reason,
    label_graph,
)
from hamdata.dataset import builder as builder_module
from hamdata.errors import DatasetBuildError
from hamdata.graph import Graph, is_hamiltonian


def _small_config(**builder_kwargs) -> DatasetConfig:
    builder_kwargs.setdefault("graphs_per_class", 10)
    return DatasetConfig(
        graph=GraphConfig(node_count=5, target_edge_count=6),
        builder=BuilderConfig(**builder_kwargs),
        seed=3,
    )


def _from_edges(n: int, edges: list[tuple[int, int]]) -> Graph:
    graph = Graph(n)
    for a, b in edges:
        graph.set_edge(a, b)
    graph.freeze()
    return graph


class TestClassBucket:
    def test_offer_until_full(self):
        bucket = ClassBucket(GraphClass.HAMILTONIAN, 2)
        matrix = np.zeros((3, 3), dtype=bool)
        assert bucket.offer(matrix)
        assert bucket.offer(matrix)
        assert bucket.is_full
        assert not bucket.offer(matrix)
        assert len(bucket) == 2

    def test_offer_stores_copy(self):
        bucket = ClassBucket(GraphClass.HAMILTONIAN, 1)
        matrix = np.zeros((3, 3), dtype=bool)
        bucket.offer(matrix)
        matrix[0, 1] = True
        assert not bucket.graphs[0].any()

    def test_concurrent_offers_never_exceed_quota(self):
        bucket = ClassBucket(GraphClass.NON_HAMILTONIAN, 50)
        matrix = np.zeros((3, 3), dtype=bool)
        accepted = []

        def producer():
            accepted.append(sum(bucket.offer(matrix) for _ in range(40)))

        threads = [threading.Thread(target=producer) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(bucket) == 50
        assert sum(accepted) == 50

    def test_graph_class_of(self):
        assert GraphClass.of(True) is GraphClass.HAMILTONIAN
        assert GraphClass.of(False) is GraphClass.NON_HAMILTONIAN


class TestFilterReason:
    BOTH = frozenset(GraphClass)
    NON_HAM = frozenset({GraphClass.NON_HAMILTONIAN})

    def test_disabled_filter_accepts_everything(self):
        graph = _from_edges(4, [(0, 1)])
        assert filter_reason(graph, self.NON_HAM, BuilderConfig()) is None

    def test_low_degree_rejected(self):
        graph = _from_edges(4, [(0, 1), (1, 2), (2, 0), (2, 3)])
        reason = filter_reason(graph, self.BOTH, BuilderConfig(filter_candidates=True))
        assert reason is not None
        assert "degree" in reason

    def test_dense_rejected_only_when_non_hamiltonian_open(self):
        k5 = _from_edges(5, [(i, j) for i in range(5) for j in range(i + 1, 5)])
        builder = BuilderConfig(filter_candidates=True, density_threshold=0.5)
        assert filter_reason(k5, self.BOTH, builder) is None
        assert filter_reason(k5, frozenset({GraphClass.HAMILTONIAN}), builder) is None
        assert "density" in filter_reason(k5, self.NON_HAM, builder)

    def test_sparse_passes(self):
        c5 = _from_edges(5, [(i, (i + 1) % 5) for i in range(5)])
        builder = BuilderConfig(filter_candidates=True)
        assert filter_reason(c5, self.NON_HAM, builder) is None


class TestBuildDataset:
    def test_exact_quotas(self):
        dataset = build_dataset(_small_config())
        assert len(dataset.hamiltonian) == 10
        assert len(dataset.non_hamiltonian) == 10
        assert dataset.metadata.node_count == 5
        assert dataset.metadata.target_edge_count == 6
        assert dataset.metadata.graphs_per_class == 10

    def test_labels_match_oracle(self):
        dataset = build_dataset(_small_config())
        for graph_class in GraphClass:
            for matrix in dataset.graphs(graph_class):
                graph = Graph.from_adjacency(matrix, 6)
                assert label_graph(graph) is graph_class

    def test_every_graph_meets_postconditions(self):
        dataset = build_dataset(_small_config())
        for matrix in dataset.hamiltonian + dataset.non_hamiltonian:
            assert matrix.shape == (5, 5)
            assert np.array_equal(matrix, matrix.T)
            assert not matrix.diagonal().any()
            assert matrix.sum() // 2 == 6
            assert matrix.sum(axis=1).min() >= 2

    def test_stats_account_for_every_candidate(self):
        dataset = build_dataset(_small_config())
        s = dataset.stats
        assert s.candidates == 20 + s.filtered + s.discarded_full
        assert s.elapsed_seconds >= s.oracle_seconds >= 0.0

    def test_deterministic_under_seed(self):
        a = build_dataset(_small_config())
        b = build_dataset(_small_config())
        for graph_class in GraphClass:
            for x, y in zip(a.graphs(graph_class), b.graphs(graph_class)):
                assert np.array_equal(x, y)

    def test_explicit_rng_overrides_seed(self):
        a = build_dataset(_small_config(), rng=np.random.default_rng(1))
        b = build_dataset(_small_config(), rng=np.random.default_rng(1))
        assert a.stats.candidates == b.stats.candidates

    def test_single_graph_per_class(self):
        dataset = build_dataset(_small_config(graphs_per_class=1))
        assert len(dataset.hamiltonian) == len(dataset.non_hamiltonian) == 1

    def test_max_candidates_exceeded(self):
        config = _small_config(graphs_per_class=5, max_candidates=30)
        with patch.object(
            builder_module, "label_graph", return_value=GraphClass.HAMILTONIAN
        ):
            with pytest.raises(DatasetBuildError, match="30 candidates"):
                build_dataset(config)

    def test_sparse_target_logs_warning(self, caplog):
        moderate = DatasetConfig(
            graph=GraphConfig(node_count=8, target_edge_count=12),
            builder=BuilderConfig(graphs_per_class=1),
        )
        sparse = DatasetConfig(
            graph=GraphConfig(node_count=8, target_edge_count=9),
            builder=BuilderConfig(graphs_per_class=1),
        )
        with caplog.at_level("WARNING", logger="hamdata.dataset.builder"):
            with patch.object(builder_module, "_fill_serial", return_value=None):
                build_dataset(moderate)
                assert not any("overshoot" in r.message for r in caplog.records)
                build_dataset(sparse)
        assert any("overshoot" in r.message for r in caplog.records)


class TestFilteredBuild:
    def test_filter_never_changes_labels(self):
        config = DatasetConfig(
            graph=GraphConfig(node_count=6, target_edge_count=None, mode="bernoulli"),
            builder=BuilderConfig(graphs_per_class=8, filter_candidates=True),
            seed=11,
        )
        dataset = build_dataset(config)
        assert len(dataset.hamiltonian) == len(dataset.non_hamiltonian) == 8
        for matrix in dataset.hamiltonian:
            assert is_hamiltonian(Graph.from_adjacency(matrix))
        for matrix in dataset.non_hamiltonian:
            graph = Graph.from_adjacency(matrix)
            assert not is_hamiltonian(graph)
            assert graph.degrees().min() >= 2

    def test_unfiltered_bernoulli_keeps_low_degree_graphs(self):
        config = DatasetConfig(
            graph=GraphConfig(
                node_count=6, target_edge_count=None, mode="bernoulli",
                edge_probability=0.3,
            ),
            builder=BuilderConfig(graphs_per_class=10),
            seed=2,
        )
        dataset = build_dataset(config)
        assert dataset.stats.filtered == 0
        min_degrees = [m.sum(axis=1).min() for m in dataset.non_hamiltonian]
        assert min(min_degrees) < 2


class TestParallelBuild:
    def test_process_pool_exact_quotas(self):
        config = _small_config(graphs_per_class=6, n_workers=2)
        dataset = build_dataset(config)
        assert len(dataset.hamiltonian) == 6
        assert len(dataset.non_hamiltonian) == 6
        for graph_class in GraphClass:
            for matrix in dataset.graphs(graph_class):
                assert label_graph(Graph.from_adjacency(matrix, 6)) is graph_class


class TestBuildClass:
    @pytest.mark.parametrize("graph_class", list(GraphClass))
    def test_returns_requested_class(self, graph_class):
        graph, attempts = build_class(
            _small_config(), graph_class, np.random.default_rng(0)
        )
        assert attempts >= 1
        assert graph.is_frozen
        assert label_graph(graph) is graph_class

    def test_attempt_budget(self):
        with patch.object(
            builder_module, "label_graph", return_value=GraphClass.HAMILTONIAN
        ):
            with pytest.raises(DatasetBuildError):
                build_class(
                    _small_config(),
                    GraphClass.NON_HAMILTONIAN,
                    np.random.default_rng(0),
                    max_attempts=5,
                )
