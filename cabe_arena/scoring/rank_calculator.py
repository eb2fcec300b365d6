"""
scoring/rank_calculator.py — Rank Calculator

Tiers are half-open intervals [lower, upper):

    Bronze      0      – 1,000
    Silver      1,000  – 5,000
    Gold        5,000  – 15,000
    Platinum    15,000 – 50,000
    Diamond     50,000 +          (progress fixed at 100)

Progress = (points − lower) / (upper − lower) × 100, clamped to [0, 100].
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Tuple

from cabe_arena.models.enumerations import RankTier
from cabe_arena.scoring.utils import clamp

# (tier, inclusive lower bound, exclusive upper bound)
RANK_TIERS: List[Tuple[RankTier, int, Optional[int]]] = [
    (RankTier.BRONZE, 0, 1000),
    (RankTier.SILVER, 1000, 5000),
    (RankTier.GOLD, 5000, 15000),
    (RankTier.PLATINUM, 15000, 50000),
    (RankTier.DIAMOND, 50000, None),
]


@dataclass
class RankResult:
    """Output of RankCalculator.calculate()."""
    rank: RankTier
    progress: Decimal            # [0, 100] quantized to 0.01
    next_rank: Optional[RankTier]
    points_to_next: Decimal      # 0 at Diamond


class RankCalculator:
    """Map cumulative points to a rank tier and progress percentage."""

    def __init__(self, tiers: Optional[List[Tuple[RankTier, int, Optional[int]]]] = None):
        self.tiers = list(tiers or RANK_TIERS)

    def calculate(self, total_points: float) -> RankResult:
        points = Decimal(str(total_points))

        for index, (tier, lower, upper) in enumerate(self.tiers):
            if upper is not None and points >= upper:
                continue

            if upper is None:
                return RankResult(
                    rank=tier,
                    progress=Decimal("100.00"),
                    next_rank=None,
                    points_to_next=Decimal("0"),
                )

            span = Decimal(upper - lower)
            progress = clamp((points - lower) / span * Decimal("100"))
            return RankResult(
                rank=tier,
                progress=progress.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP),
                next_rank=self.tiers[index + 1][0],
                points_to_next=Decimal(upper) - max(points, Decimal(lower)),
            )

        # Unreachable with a terminal open-ended tier
        raise ValueError("Rank tiers must end with an open-ended tier")

    def rank_for(self, total_points: float) -> RankTier:
        return self.calculate(total_points).rank
