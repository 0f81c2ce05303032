import math

# Value shown once the curve has passed the crash point: the top of the axis.
PLATEAU = 10.0


def multiplier_at(elapsed: float, crash_point: float) -> float:
    """Quadratic ramp from 0 reaching ``crash_point`` at ``elapsed == crash_point``.

    Past the crash point the curve sits on the plateau, not on the crash
    point itself.
    """
    if elapsed > crash_point:
        return PLATEAU
    ratio = elapsed / crash_point
    return crash_point * ratio * ratio


def sample_count(crash_point: float, step: float = 0.1) -> int:
    """Index of the last sample of a round, ``floor(crash_point / step)``."""
    # rounding first keeps 4.1 / 0.1 from flooring to 40
    return math.floor(round(crash_point / step, 6))


def sample(index: int, crash_point: float, step: float = 0.1) -> tuple[float, float]:
    """Return ``(elapsed, multiplier)`` for the given tick, both at 2 decimals."""
    elapsed = round(index * step, 2)
    return elapsed, round(multiplier_at(elapsed, crash_point), 2)
