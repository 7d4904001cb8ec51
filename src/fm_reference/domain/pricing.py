"""Player pricing policy.

Upstream has no market value, so a price is generated per lookup. Whether
that is meant as dynamic pricing or a placeholder is undecided; the policy
is injectable so either reading can be configured.
"""

import random
from typing import Protocol


class PricePolicy(Protocol):
    def price_for(self, player_id: str) -> int: ...


class UniformRandomPricer:
    """Uniform integer price in [low, high], fresh on every call."""

    def __init__(self, low: int, high: int, seed: int | None = None) -> None:
        if not (0 < low <= high):
            raise ValueError(f"Price range must satisfy 0 < low <= high, got [{low}, {high}]")
        self._low = low
        self._high = high
        self._rng = random.Random(seed)

    def price_for(self, player_id: str) -> int:
        return self._rng.randint(self._low, self._high)
