"""Single source of randomness for ids, scores and name picks."""

import math
import random
import uuid
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """
    Injectable random-number and id generator.

    PATTERN: All pipeline non-determinism goes through one instance
    CRITICAL: A seeded instance reproduces ids, scores and picks exactly
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize random source.

        Args:
            seed: Seed for reproducible output (None for system entropy)
        """
        self.seed = seed
        self.random = random.Random(seed)  # Use instance for reproducibility

    def score(self, low: float, high: float) -> float:
        """
        Draw a float from the half-open range [low, high).

        Args:
            low: Inclusive lower bound
            high: Exclusive upper bound

        Returns:
            Random score (low when the range is empty)
        """
        if high <= low:
            return low
        value = low + (high - low) * self.random.random()
        return min(value, math.nextafter(high, low))

    def choice(self, options: Sequence[T]) -> T:
        return self.random.choice(options)

    def new_id(self, prefix: str) -> str:
        """Random UUID4-shaped id with a readable prefix."""
        token = uuid.UUID(int=self.random.getrandbits(128), version=4)
        return f"{prefix}-{token.hex}"
