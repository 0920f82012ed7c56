"""Dataset manifest validation, writing, and run ID generation."""

from hamdata.results.manifest import (
    build_manifest,
    load_manifest,
    validate_manifest,
    write_manifest,
)
from hamdata.results.run_id import generate_run_id

__all__ = [
    "build_manifest",
    "validate_manifest",
    "write_manifest",
    "load_manifest",
    "generate_run_id",
]
