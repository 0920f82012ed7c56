"""Deterministic config hashing using SHA-256 over canonical JSON."""

import hashlib
import json
from dataclasses import asdict
from typing import Any

from hamdata.config.experiment import DatasetConfig

HASH_LENGTH = 16

# Fields that never change which graphs belong in a dataset
DATASET_HASH_EXCLUDES = ("seed", "description", "tags", "builder.n_workers")


def _drop_path(d: dict[str, Any], dotted: str) -> None:
    """Delete a dotted key ("builder.n_workers") from nested dicts, if present."""
    *parents, leaf = dotted.split(".")
    for key in parents:
        d = d.get(key)
        if not isinstance(d, dict):
            return
    d.pop(leaf, None)


def _canonical_json(d: dict[str, Any]) -> str:
    return json.dumps(d, sort_keys=True, ensure_ascii=True, separators=(",", ":"))


def config_hash(config: Any, exclude_fields: list[str] | None = None) -> str:
    """Deterministic SHA-256 hash of a config dataclass.

    Args:
        config: Any dataclass instance (or sub-config).
        exclude_fields: Optional dotted field paths left out of the hash.

    Returns:
        First 16 hex characters of the SHA-256 digest.
    """
    d = asdict(config)
    for dotted in exclude_fields or ():
        _drop_path(d, dotted)
    digest = hashlib.sha256(_canonical_json(d).encode("utf-8")).hexdigest()
    return digest[:HASH_LENGTH]


def dataset_config_hash(config: DatasetConfig) -> str:
    """Hash for dataset caching. Two configs differing only in seed, labels or
    worker count share it."""
    return config_hash(config, exclude_fields=list(DATASET_HASH_EXCLUDES))


def full_config_hash(config: DatasetConfig) -> str:
    """Hash for full run identity, seed included."""
    return config_hash(config)
