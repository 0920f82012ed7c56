"""Centralized seed management for full reproducibility.

Graph generation draws only from an explicit numpy Generator built by
make_rng(); set_seed() additionally pins the global Python and NumPy RNGs
for any library code that still reads them.
"""

import random
from typing import Iterator

import numpy as np


def set_seed(seed: int) -> None:
    """Set the global random seeds.

    Seeds are set in this order:

    1. Python random module
    2. NumPy legacy global RNG

    Args:
        seed: Master seed value (e.g., 42).
    """
    # 1. Python stdlib random
    random.seed(seed)

    # 2. NumPy legacy global RNG (many libraries still use this)
    np.random.seed(seed)


def make_rng(seed: int) -> np.random.Generator:
    """Create the numpy Generator that drives graph generation."""
    return np.random.default_rng(seed)


def seed_stream(seed: int) -> Iterator[np.random.SeedSequence]:
    """Endless stream of independent child seed sequences from a master seed.

    Each parallel generation batch draws its own child, so batches never
    share a random stream and the order of children is fixed by the seed.
    """
    root = np.random.SeedSequence(seed)
    while True:
        yield root.spawn(1)[0]


def verify_seed_determinism(seed: int) -> bool:
    """Verify that setting the seed produces identical sequences.

    Sets the seed, draws 10 values from random, numpy's global RNG and a
    make_rng() Generator. Resets and draws again. Returns True if all three
    sequences are identical.

    Args:
        seed: Seed value to test.

    Returns:
        True if all RNG sources produce identical sequences after re-seeding.
    """
    set_seed(seed)
    r1 = [random.random() for _ in range(10)]
    n1 = np.random.rand(10).tolist()
    g1 = make_rng(seed).random(10).tolist()

    set_seed(seed)
    r2 = [random.random() for _ in range(10)]
    n2 = np.random.rand(10).tolist()
    g2 = make_rng(seed).random(10).tolist()

    return r1 == r2 and n1 == n2 and g1 == g2
