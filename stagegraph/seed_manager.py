"""Deterministic seed derivation for reproducible random graphs."""

from __future__ import annotations

import hashlib
import random
from typing import Any, Optional

#: Master seed used when the caller does not pick one.
DEFAULT_SEED = 42


class SeedManager:
    """Derives a separate seed for each random component from one master seed.

    Each component (for example ``"random_layers"``) gets its own ``Random``
    instance, so adding draws to one component does not shift another's
    sequence.

    Usage:
        seed_mgr = SeedManager(42)
        rng = seed_mgr.create_random_state("random_layers")
    """

    def __init__(self, master_seed: Optional[int] = DEFAULT_SEED) -> None:
        """Initialize the seed manager.

        Args:
            master_seed: Master seed. If None, derived seeds are None and the
                random states are seeded from the operating system.
        """
        self.master_seed = master_seed

    def derive_seed(self, *components: Any) -> Optional[int]:
        """Derive a deterministic seed from the master seed and component ids.

        Args:
            *components: Identifiers of the component needing a seed.

        Returns:
            Derived seed as a positive 32-bit integer, or None if no master seed.
        """
        if self.master_seed is None:
            return None

        seed_input = f"{self.master_seed}:" + ":".join(str(c) for c in components)
        hash_digest = hashlib.sha256(seed_input.encode()).digest()
        seed_value = int.from_bytes(hash_digest[:4], byteorder="big")
        return seed_value & 0x7FFFFFFF

    def create_random_state(self, *components: Any) -> random.Random:
        """Create a new Random instance seeded for the given component."""
        derived_seed = self.derive_seed(*components)
        rng = random.Random()
        if derived_seed is not None:
            rng.seed(derived_seed)
        return rng
