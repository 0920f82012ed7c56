"""Anchor configuration: single source of truth for default dataset parameters."""

from hamdata.config.experiment import DatasetConfig

# All-default values: node_count=8, target_edge_count=12, degree_floor mode,
# graphs_per_class=100, seed=42.
ANCHOR_CONFIG = DatasetConfig()
