"""
scoring/scaling.py — Exponential Scaling

Formula:
    f(L) = (e^(α·L) − 1) / (e^α − 1)        α = 5.5

f(0) = 0 and f(1) = 1 exactly, since numerator and denominator are the
same expression at L = 1. For L > 1 growth is super-linear.

Negative levels return e^(α·L), which lies in (0, 1) and approaches 1 as
L → 0⁻. Exponents are capped at MAX_EXPONENT so huge levels saturate
instead of overflowing.
"""

import math
from typing import Iterable

ALPHA = 5.5
MAX_EXPONENT = 700.0
POINTS_PER_LEVEL = 1000


def exponential_scaling(level: float, alpha: float = ALPHA) -> float:
    """
    Map a user level onto a points multiplier.

    Examples:
        >>> exponential_scaling(0)
        0.0
        >>> exponential_scaling(1)
        1.0
    """
    if level < 0:
        return math.exp(max(alpha * level, -MAX_EXPONENT))

    numerator = math.exp(min(alpha * level, MAX_EXPONENT)) - 1
    denominator = math.exp(min(alpha, MAX_EXPONENT)) - 1
    return numerator / denominator


def user_level(base_points: Iterable[float], points_per_level: int = POINTS_PER_LEVEL) -> int:
    """Level = floor(total historical base points / points_per_level)."""
    total = sum(base_points)
    if total <= 0:
        return 0
    return int(total // points_per_level)
