"""
Argument validation helpers

Shared by validate_config and by the component constructors, so every
public entry point rejects the same out-of-domain values.
"""

import math
import numbers
from typing import Tuple

from .errors import InvalidArgument


def check_finite(name: str, value) -> float:
    """Return value as float, rejecting non-numbers, NaN and infinities"""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgument(f"{name} must be a real number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidArgument(f"{name} must be finite, got {value}")
    return float(value)


def check_positive(name: str, value) -> float:
    value = check_finite(name, value)
    if value <= 0:
        raise InvalidArgument(f"{name} must be positive, got {value}")
    return value


def check_non_negative(name: str, value) -> float:
    value = check_finite(name, value)
    if value < 0:
        raise InvalidArgument(f"{name} must be >= 0, got {value}")
    return value


def check_count(name: str, value, minimum: int = 1) -> int:
    """Integer (not bool) no smaller than minimum"""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidArgument(f"{name} must be >= {minimum}, got {value}")
    return int(value)


def check_probability(name: str, value) -> float:
    value = check_finite(name, value)
    if not 0.0 <= value <= 1.0:
        raise InvalidArgument(f"{name} must be within [0, 1], got {value}")
    return value


def check_band(name: str, band, lower: float = 0.0, upper: float = 1.0) -> Tuple[float, float]:
    """(low, high) pair with lower <= low <= high <= upper"""
    try:
        low, high = band
    except (TypeError, ValueError):
        raise InvalidArgument(f"{name} must be a (low, high) pair, got {band!r}")
    low = check_finite(name, low)
    high = check_finite(name, high)
    if not lower <= low <= high <= upper:
        raise InvalidArgument(f"{name} must satisfy {lower} <= low <= high <= {upper}, got {band}")
    return low, high


def check_thresholds(left: float, right: float, lower: float, upper: float) -> Tuple[float, float]:
    """Hit thresholds must sit on the track with left strictly below right"""
    left = check_finite("Left hit threshold", left)
    right = check_finite("Right hit threshold", right)
    if not lower <= left < right <= upper:
        raise InvalidArgument(
            f"Hit thresholds must satisfy {lower} <= left ({left}) < right ({right}) <= {upper}"
        )
    return left, right
