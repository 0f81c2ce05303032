import random

from ..config import MIN_CRASH_POINT, MAX_CRASH_POINT


class RandomCrashGenerator:
    """Draws the crash point of a round, uniform over [1.00, 10.00] at 2 decimals."""

    def __init__(self, rng=None, low: float = MIN_CRASH_POINT, high: float = MAX_CRASH_POINT):
        # defaults to the process-wide source of the random module
        self._rng = rng or random
        self.low = low
        self.high = high

    def next(self) -> float:
        value = round(self._rng.uniform(self.low, self.high), 2)
        return min(max(value, self.low), self.high)


class FixedCrashGenerator:
    """Replays a fixed sequence of crash points, cycling when exhausted."""

    def __init__(self, values: list[float]):
        if not values:
            raise ValueError("FixedCrashGenerator needs at least one value")
        self._values = list(values)
        self._index = 0

    def next(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value
