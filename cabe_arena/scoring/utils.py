"""
Decimal Utilities
cabe_arena/scoring/utils.py

Provides precision-safe decimal math for points calculations.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Sequence


def round_points(value: Decimal) -> int:
    """Round half away from zero to a whole number of points."""
    # to_integral_value, unlike quantize, cannot overflow the context precision
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("100"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def weighted_mean(
    values: Sequence[Decimal],
    weights: Sequence[Decimal],
    places: Optional[int] = 4,
) -> Decimal:
    """
    Calculate weighted mean.

    Formula: Σ(value_i × weight_i) / Σ(weight_i)
    Returns Decimal("0") if all weights are zero. Pass places=None to
    skip quantization.
    """
    if len(values) != len(weights):
        raise ValueError("values and weights must have same length")

    total_weight = sum(weights, Decimal("0"))
    if total_weight == 0:
        return Decimal("0")

    numerator = sum((v * w for v, w in zip(values, weights)), Decimal("0"))
    mean = numerator / total_weight
    if places is None:
        return mean
    return mean.quantize(Decimal(10) ** -places, rounding=ROUND_HALF_UP)


def as_decimals(values: Sequence[float]) -> List[Decimal]:
    """Convert a sequence of numbers to Decimals without float noise."""
    return [Decimal(str(v)) for v in values]
