"""JSON serialization and deserialization for dataset configs."""

import json
from dataclasses import asdict
from typing import Any

from dacite import from_dict, Config as DaciteConfig

from hamdata.config.experiment import DatasetConfig

_DACITE_CONFIG = DaciteConfig(
    cast=[tuple],
    check_types=True,
    strict=True,
)


def config_to_json(config: DatasetConfig) -> str:
    """Serialize a DatasetConfig to a JSON string.

    Uses sorted keys and 2-space indent for human readability and diffability.
    """
    return json.dumps(asdict(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> DatasetConfig:
    """Deserialize a JSON string to a DatasetConfig.

    Uses dacite with strict=True to reject unknown keys (catches schema drift)
    and cast=[tuple] to convert JSON arrays back to tuples for tags.
    Missing sections fall back to their defaults.
    """
    return config_from_dict(json.loads(json_str))


def config_to_dict(config: DatasetConfig) -> dict[str, Any]:
    """Convert a DatasetConfig to a plain dictionary."""
    return asdict(config)


def config_from_dict(d: dict[str, Any]) -> DatasetConfig:
    """Reconstruct a DatasetConfig from a plain dictionary."""
    return from_dict(data_class=DatasetConfig, data=d, config=_DACITE_CONFIG)
