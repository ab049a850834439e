"""Seeded random draws keyed by a per-call unique seed.

Every random decision in the world (terrain preset choice, noise offsets,
island placement, decoration sites) is drawn from a fresh generator seeded
with ``abs(unique_seed + world_seed)``. Draws are therefore independent of
call order and reproducible from the world seed alone.
"""

import numpy as np


class SeededRandom:
    """Stateless random source bound to a world seed."""

    def __init__(self, world_seed: int):
        self.world_seed = int(world_seed)

    def _generator(self, unique_seed: float) -> np.random.Generator:
        return np.random.default_rng(abs(round(unique_seed + self.world_seed)))

    def random_int(self, unique_seed: float, low: int, high: int) -> int:
        """Draw an int in ``[low, high)``, or ``low`` when the range is empty."""
        if high <= low:
            return low
        return int(self._generator(unique_seed).integers(low, high))

    def random_float(self, unique_seed: float, low: float, high: float) -> float:
        """Draw a float in ``[low, high)``."""
        return float(self._generator(unique_seed).random() * (high - low) + low)
