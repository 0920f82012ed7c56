"""Dataset persistence as pretty-printed JSON, plus config-hash keyed caching.

Layout of a dataset directory:
- hamiltonian_graphs.json / non_hamiltonian_graphs.json:
  {"info": {node_count, target_edge_count, graphs_per_class},
   "graphs": [[[bool, ...], ...], ...]}  (rows in node-index order)
- manifest.json: config, hashes, code version, builder statistics

Files are written only for a complete dataset, so a failed build never
leaves a partial dataset on disk.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

import numpy as np

from hamdata.config.experiment import DatasetConfig
from hamdata.config.hashing import dataset_config_hash
from hamdata.dataset.builder import build_dataset, label_graph
from hamdata.dataset.types import (
    BuildStats,
    DatasetMetadata,
    GraphClass,
    LabeledDataset,
)
from hamdata.errors import IntegrityViolation
from hamdata.graph.types import Graph
from hamdata.graph.validation import validate_graph
from hamdata.results.manifest import (
    MANIFEST_FILENAME,
    build_manifest,
    load_manifest,
    write_manifest,
)

log = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path(".cache/datasets")


def class_filename(graph_class: GraphClass) -> str:
    return f"{graph_class.value}_graphs.json"


def dataset_cache_key(config: DatasetConfig) -> str:
    """Compute cache key for a dataset configuration.

    Key = dataset_config_hash + seed. Same generation params + same seed =
    cache hit. Description, tags and worker count don't affect the key.

    Returns:
        Cache key string like "a1b2c3d4e5f6g7h8_s42".
    """
    return f"{dataset_config_hash(config)}_s{config.seed}"


def _class_document(
    metadata: DatasetMetadata, graphs: list[np.ndarray]
) -> dict[str, Any]:
    return {
        "info": asdict(metadata),
        "graphs": [np.asarray(g, dtype=bool).tolist() for g in graphs],
    }


def save_dataset(
    dataset: LabeledDataset,
    config: DatasetConfig,
    out_dir: str | Path,
) -> Path:
    """Write both class files and the manifest into out_dir.

    Args:
        dataset: Complete dataset from build_dataset().
        config: Configuration the dataset was built from.
        out_dir: Target directory. Created if absent.

    Returns:
        Path to the dataset directory.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    files: dict[str, str] = {}
    for graph_class in GraphClass:
        name = class_filename(graph_class)
        document = _class_document(dataset.metadata, dataset.graphs(graph_class))
        with open(out_dir / name, "w") as f:
            json.dump(document, f, indent=2)
        files[graph_class.value] = name

    manifest = build_manifest(config, asdict(dataset.stats), files)
    write_manifest(manifest, out_dir)

    log.info(
        "Dataset saved to %s (%d graphs per class)",
        out_dir,
        dataset.metadata.graphs_per_class,
    )
    return out_dir


def _load_class(
    path: Path, graph_class: GraphClass, verify_labels: bool
) -> tuple[DatasetMetadata, list[np.ndarray]]:
    with open(path) as f:
        document = json.load(f)

    metadata = DatasetMetadata(**document["info"])
    graphs: list[np.ndarray] = []
    for idx, rows in enumerate(document["graphs"]):
        graph = Graph.from_adjacency(rows, metadata.target_edge_count)
        if graph.node_count != metadata.node_count:
            raise IntegrityViolation(
                f"{path.name}[{idx}]: {graph.node_count} nodes, "
                f"expected {metadata.node_count}"
            )
        errors = validate_graph(graph, metadata.target_edge_count, min_degree=0)
        if errors:
            raise IntegrityViolation(f"{path.name}[{idx}]: {'; '.join(errors)}")
        if verify_labels and label_graph(graph) is not graph_class:
            raise IntegrityViolation(
                f"{path.name}[{idx}]: graph is not {graph_class.value}"
            )
        graphs.append(graph.copy_adjacency())

    if len(graphs) != metadata.graphs_per_class:
        raise IntegrityViolation(
            f"{path.name}: {len(graphs)} graphs, expected "
            f"{metadata.graphs_per_class}"
        )
    return metadata, graphs


def load_dataset(
    dataset_dir: str | Path, verify_labels: bool = False
) -> LabeledDataset:
    """Load a dataset directory written by save_dataset().

    Every matrix is checked for symmetry, self-loops, size and edge count.

    Args:
        dataset_dir: Directory with both class files (manifest optional).
        verify_labels: Re-run the oracle on every graph to confirm its class.

    Raises:
        FileNotFoundError: If a class file is missing.
        IntegrityViolation: If a stored graph or class size is invalid, or
            the two class files disagree on their metadata.
    """
    dataset_dir = Path(dataset_dir)
    loaded = {
        c: _load_class(dataset_dir / class_filename(c), c, verify_labels)
        for c in GraphClass
    }
    metadata, hamiltonian = loaded[GraphClass.HAMILTONIAN]
    other_metadata, non_hamiltonian = loaded[GraphClass.NON_HAMILTONIAN]
    if metadata != other_metadata:
        raise IntegrityViolation(
            f"Class files disagree on metadata: {metadata} vs {other_metadata}"
        )

    stats = BuildStats()
    manifest_path = dataset_dir / MANIFEST_FILENAME
    if manifest_path.exists():
        stats = BuildStats(**load_manifest(manifest_path)["stats"])

    return LabeledDataset(
        metadata=metadata,
        hamiltonian=hamiltonian,
        non_hamiltonian=non_hamiltonian,
        stats=stats,
    )


def generate_or_load_dataset(
    config: DatasetConfig,
    cache_dir: str | Path = DEFAULT_CACHE_DIR,
) -> tuple[LabeledDataset, Path]:
    """Build a dataset or load it from cache if available.

    On cache miss: builds the dataset and saves it under the cache key.
    On cache hit: loads from disk without regeneration.

    Returns:
        (dataset, path of the cached dataset directory).
    """
    key = dataset_cache_key(config)
    path = Path(cache_dir) / key

    required = [class_filename(c) for c in GraphClass] + [MANIFEST_FILENAME]
    if all((path / name).exists() for name in required):
        log.info("Cache hit for %s", key)
        return load_dataset(path), path

    log.info("Cache miss for %s, generating...", key)
    dataset = build_dataset(config)
    save_dataset(dataset, config, path)
    return dataset, path
