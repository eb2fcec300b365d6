"""
scoring/bonus_calculator.py — Bonus Calculator

Formula:
    avg     = Σ(Wᵢ × Nᵢ) / ΣWᵢ              Nᵢ = completed tasks per skill
    raw     = MaxBonus × avg + R            R  = proof strength
    capped  = min(raw, MAX_BONUS_CAP)
    bonus   = capped × OVER_CAP_BOOST   if raw ≥ MAX_BONUS_CAP
            = capped                     otherwise

The boost is applied after clamping, so a capped-out user receives
exactly MAX_BONUS_CAP × OVER_CAP_BOOST. Negative raw values floor at 0.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

import structlog

from cabe_arena.scoring.utils import as_decimals, weighted_mean

logger = structlog.get_logger(__name__)

MAX_BONUS_CAP = 1000
OVER_CAP_BOOST = 1.5


@dataclass
class BonusResult:
    """Output of BonusCalculator.calculate()."""
    bonus: Decimal              # final bonus, after boost
    raw_bonus: Decimal          # MaxBonus × avg + R, before clamping
    capped_bonus: Decimal       # min(raw, cap), floored at 0
    weighted_average: Decimal   # Σ(W×N)/ΣW, quantized to 0.0001
    over_cap: bool              # raw reached the cap and was boosted


class BonusCalculator:
    """Combine skill history and proof strength into a bounded bonus."""

    def __init__(
        self,
        max_bonus_cap: float = MAX_BONUS_CAP,
        over_cap_boost: float = OVER_CAP_BOOST,
    ):
        self.max_bonus_cap = Decimal(str(max_bonus_cap))
        self.over_cap_boost = Decimal(str(over_cap_boost))

    def calculate(
        self,
        max_bonus: float,
        skill_weights: Sequence[float],
        skill_counts: Sequence[int],
        proof_strength: float,
    ) -> BonusResult:
        """
        Args:
            max_bonus: Task max points minus base points.
            skill_weights: One weight per skill category.
            skill_counts: Historical completions per skill category, same order.
            proof_strength: Proof strength R, added directly.

        Examples:
            >>> BonusCalculator().calculate(150, [1, 1, 1, 1], [2, 1, 0, 1], 25).bonus
            Decimal('175.0000')
        """
        if len(skill_weights) != len(skill_counts):
            raise ValueError("skill_weights and skill_counts must have same length")

        avg = weighted_mean(as_decimals(skill_counts), as_decimals(skill_weights))
        raw = Decimal(str(max_bonus)) * avg + Decimal(str(proof_strength))

        capped = max(Decimal("0"), min(raw, self.max_bonus_cap))
        over_cap = raw >= self.max_bonus_cap
        bonus = capped * self.over_cap_boost if over_cap else capped

        logger.debug(
            "bonus_calculated",
            max_bonus=float(max_bonus),
            weighted_average=float(avg),
            raw_bonus=float(raw),
            bonus=float(bonus),
            over_cap=over_cap,
        )

        return BonusResult(
            bonus=bonus,
            raw_bonus=raw,
            capped_bonus=capped,
            weighted_average=avg,
            over_cap=over_cap,
        )
