import math
from typing import Any


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up (towards +infinity).

    Python's round() uses banker's rounding; the published figures
    (reheat minutes, V-speeds, FL clamping) are defined with half-up rounding.
    """
    return int(math.floor(value + 0.5))


def round_to(value: float, step: float = 0.1) -> float:
    """Round half-up to a multiple of step (0.1 kt for wind components)."""
    scale = 1.0 / step
    return round_half_up(value * scale) / scale


def is_finite_number(value: Any) -> bool:
    """True for int/float values that are not NaN or infinite (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))
