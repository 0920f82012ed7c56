"""Dataset building and persistence: class buckets, builder loop, JSON storage."""

from hamdata.dataset.builder import (
    build_class,
    build_dataset,
    filter_reason,
    label_graph,
)
from hamdata.dataset.io import (
    class_filename,
    dataset_cache_key,
    generate_or_load_dataset,
    load_dataset,
    save_dataset,
)
from hamdata.dataset.types import (
    BuildStats,
    ClassBucket,
    DatasetMetadata,
    GraphClass,
    LabeledDataset,
)

__all__ = [
    "BuildStats",
    "ClassBucket",
    "DatasetMetadata",
    "GraphClass",
    "LabeledDataset",
    "build_class",
    "build_dataset",
    "class_filename",
    "dataset_cache_key",
    "filter_reason",
    "generate_or_load_dataset",
    "label_graph",
    "load_dataset",
    "save_dataset",
]
