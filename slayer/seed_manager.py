"""Deterministic seed derivation to avoid global random state order dependencies."""

from __future__ import annotations

import hashlib
from typing import Any, Optional

import numpy as np


class SeedManager:
    """Manages deterministic seed derivation for reproducible simulations.

    Seeding one global generator ties results to execution order. SeedManager
    derives a unique seed per component from a master seed using SHA-256, so
    a simulation chunk gets the same stream whether it runs in the parent
    process or in any worker.

    Usage:
        seed_mgr = SeedManager(42)
        chunk_seed = seed_mgr.derive_seed("monte_carlo", "chunk", 3)
    """

    def __init__(self, master_seed: Optional[int] = None) -> None:
        """Initialize the seed manager.

        Args:
            master_seed: Master seed for deterministic operations. If None,
                        seed derivation will return None (non-deterministic).
        """
        self.master_seed = master_seed

    def derive_seed(self, *components: Any) -> Optional[int]:
        """Derive a deterministic seed from master seed and component identifiers.

        Args:
            *components: Component identifiers (strings, integers, etc.) that
                        uniquely identify the consumer of the seed.

        Returns:
            Derived seed as positive integer, or None if no master seed set.
        """
        if self.master_seed is None:
            return None

        seed_input = f"{self.master_seed}:" + ":".join(str(c) for c in components)
        hash_digest = hashlib.sha256(seed_input.encode()).digest()

        # Convert first 4 bytes to a positive integer
        seed_value = int.from_bytes(hash_digest[:4], byteorder="big")
        return seed_value & 0x7FFFFFFF

    def create_generator(self, *components: Any) -> np.random.Generator:
        """Create a numpy Generator seeded with the derived seed.

        Args:
            *components: Component identifiers for seed derivation.

        Returns:
            New Generator, or an entropy-seeded one if no master seed is set.
        """
        return np.random.default_rng(self.derive_seed(*components))
