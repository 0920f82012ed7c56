"""Dataset manifest assembly, validation, and writing.

Uses a Python validation function (not jsonschema) to check required fields
and types before a manifest.json is written or after one is read.
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from hamdata.config.experiment import DatasetConfig
from hamdata.config.hashing import dataset_config_hash, full_config_hash
from hamdata.reproducibility.git_hash import get_git_hash

SCHEMA_VERSION = "1.0"
MANIFEST_FILENAME = "manifest.json"

REQUIRED_TOP_FIELDS = {
    "schema_version",
    "timestamp",
    "description",
    "tags",
    "config",
    "stats",
    "metadata",
}

REQUIRED_STATS_FIELDS = {"candidates", "filtered", "discarded_full", "restarts"}


def build_manifest(
    config: DatasetConfig,
    stats: dict[str, Any],
    files: dict[str, str],
) -> dict[str, Any]:
    """Assemble the manifest dict for a finished dataset.

    Args:
        config: Configuration the dataset was built from.
        stats: Builder counters (BuildStats as a dict).
        files: Mapping from class name to dataset file name.
    """
    return {
        "schema_version": SCHEMA_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "description": config.description,
        "tags": list(config.tags),
        "config": asdict(config),
        "stats": stats,
        "files": files,
        "metadata": {
            "code_hash": get_git_hash(),
            "config_hash": full_config_hash(config),
            "dataset_config_hash": dataset_config_hash(config),
        },
    }


def validate_manifest(manifest: dict[str, Any]) -> list[str]:
    """Validate a manifest dict.

    Returns a list of error strings. An empty list means the manifest is valid.

    Checks:
    - All required top-level fields are present
    - schema_version is a string
    - tags is a list, config and stats are dicts
    - timestamp parses as ISO 8601
    - stats carries every builder counter
    """
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(manifest.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "schema_version" in manifest and not isinstance(manifest["schema_version"], str):
        errors.append("schema_version must be a string")

    if "tags" in manifest and not isinstance(manifest["tags"], list):
        errors.append("tags must be a list")

    if "config" in manifest and not isinstance(manifest["config"], dict):
        errors.append("config must be a dict")

    if "timestamp" in manifest:
        ts = manifest["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    if "stats" in manifest:
        stats = manifest["stats"]
        if not isinstance(stats, dict):
            errors.append("stats must be a dict")
        else:
            missing_stats = REQUIRED_STATS_FIELDS - set(stats.keys())
            if missing_stats:
                errors.append(f"stats missing fields: {sorted(missing_stats)}")

    return errors


def write_manifest(manifest: dict[str, Any], out_dir: str | Path) -> Path:
    """Validate and write manifest.json into out_dir.

    Raises:
        ValueError: If the manifest fails validation.
    """
    errors = validate_manifest(manifest)
    if errors:
        raise ValueError(
            "Manifest validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )
    path = Path(out_dir) / MANIFEST_FILENAME
    with open(path, "w") as f:
        json.dump(manifest, f, indent=2)
    return path


def load_manifest(path: str | Path) -> dict[str, Any]:
    """Load and validate a manifest.json file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the loaded manifest fails validation.
    """
    path = Path(path)
    with open(path) as f:
        manifest = json.load(f)

    errors = validate_manifest(manifest)
    if errors:
        raise ValueError(
            f"Manifest validation failed for {path}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
    return manifest
