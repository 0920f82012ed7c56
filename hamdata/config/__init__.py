"""Dataset configuration system with frozen, hashable, serializable dataclasses."""

from hamdata.config.experiment import (
    GENERATION_MODES,
    MAX_ORACLE_NODES,
    BuilderConfig,
    DatasetConfig,
    GraphConfig,
    check_graph_dimensions,
    forced_hamiltonian_edge_count,
    max_edge_count,
)
from hamdata.config.defaults import ANCHOR_CONFIG
from hamdata.config.hashing import config_hash, dataset_config_hash, full_config_hash
from hamdata.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "DatasetConfig",
    "GraphConfig",
    "BuilderConfig",
    "GENERATION_MODES",
    "MAX_ORACLE_NODES",
    "ANCHOR_CONFIG",
    "check_graph_dimensions",
    "forced_hamiltonian_edge_count",
    "max_edge_count",
    "config_hash",
    "dataset_config_hash",
    "full_config_hash",
    "config_to_json",
    "config_from_json",
    "config_to_dict",
    "config_from_dict",
]
