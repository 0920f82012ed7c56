"""Reproducibility infrastructure: seed management and code provenance tracking."""

from hamdata.reproducibility.seed import (
    make_rng,
    set_seed,
    seed_stream,
    verify_seed_determinism,
)
from hamdata.reproducibility.git_hash import get_git_hash

__all__ = [
    "set_seed",
    "make_rng",
    "seed_stream",
    "verify_seed_determinism",
    "get_git_hash",
]
