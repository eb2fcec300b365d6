"""
scoring/points_calculator.py — Points Orchestrator

Composes the Service Points Formula v5 for one submission:

    level    = floor(Σ history.base_points / 1000)
    scaled   = base_points × f(level)
    bonus    = BonusCalculator(max_points − base_points, W, N, proof_strength)
    awarded  = round(scaled + bonus)                  floored at 0
    total    = Σ history.base_points + awarded
    rank     = RankCalculator(total)

Pure computation. History is read, never mutated; persisting the result is
the caller's job.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

import structlog

from cabe_arena.config import Settings
from cabe_arena.models.enumerations import RankTier, SkillCategory
from cabe_arena.models.submission import SubmissionRecord, TaskSubmission
from cabe_arena.scoring.bonus_calculator import (
    MAX_BONUS_CAP,
    OVER_CAP_BOOST,
    BonusCalculator,
)
from cabe_arena.scoring.rank_calculator import RankCalculator
from cabe_arena.scoring.scaling import (
    ALPHA,
    POINTS_PER_LEVEL,
    exponential_scaling,
    user_level,
)
from cabe_arena.scoring.skill_config import SkillConfigTable
from cabe_arena.scoring.utils import round_points

logger = structlog.get_logger(__name__)

# Equal weighting across the four categories, in SkillCategory order
UNIFORM_SKILL_WEIGHTS: Tuple[float, ...] = (1.0, 1.0, 1.0, 1.0)


@dataclass(frozen=True)
class ScoringConfig:
    """Immutable parameters of the points formula."""
    alpha: float = ALPHA
    max_bonus_cap: float = MAX_BONUS_CAP
    over_cap_boost: float = OVER_CAP_BOOST
    points_per_level: int = POINTS_PER_LEVEL
    skill_weights: Tuple[float, ...] = UNIFORM_SKILL_WEIGHTS
    skill_table: SkillConfigTable = field(default_factory=SkillConfigTable)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScoringConfig":
        return cls(
            alpha=settings.SCORING_ALPHA,
            max_bonus_cap=settings.MAX_BONUS_CAP,
            over_cap_boost=settings.OVER_CAP_BOOST,
            points_per_level=settings.POINTS_PER_LEVEL,
        )


@dataclass
class ScoringResult:
    """Output of PointsCalculator.calculate()."""
    points_awarded: int
    bonus_points: int
    total_points: int
    rank_progress: Decimal        # [0, 100] quantized to 0.01
    new_rank: RankTier
    user_level: int
    scaled_base_points: Decimal
    next_rank: Optional[RankTier]
    points_to_next: int


class PointsCalculator:
    """Compute awarded points and the resulting rank for a submission."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()
        self.bonus_calculator = BonusCalculator(
            max_bonus_cap=self.config.max_bonus_cap,
            over_cap_boost=self.config.over_cap_boost,
        )
        self.rank_calculator = RankCalculator()

    def skill_counts(self, history: Sequence[SubmissionRecord]) -> List[int]:
        """Completed submissions per skill category, in table order."""
        categories = list(self.config.skill_table) or list(SkillCategory)
        counts = [0] * len(categories)
        for record in history:
            if record.skill_category in categories:
                counts[categories.index(record.skill_category)] += 1
        return counts

    def skill_weights(self, history: Sequence[SubmissionRecord]) -> List[float]:
        # History-independent for now; kept as a seam for per-user weighting
        return list(self.config.skill_weights)

    def calculate(
        self,
        submission: TaskSubmission,
        history: Sequence[SubmissionRecord],
    ) -> ScoringResult:
        """
        Args:
            submission: The submission being scored.
            history: The user's prior submissions (any order).

        Returns:
            ScoringResult with awarded points, running total and rank.
        """
        historical_base = sum(
            (Decimal(str(r.base_points)) for r in history), Decimal("0")
        )
        level = user_level(
            (r.base_points for r in history), self.config.points_per_level
        )

        multiplier = Decimal(str(exponential_scaling(level, self.config.alpha)))
        scaled = Decimal(str(submission.base_points)) * multiplier

        bonus = self.bonus_calculator.calculate(
            max_bonus=submission.max_points - submission.base_points,
            skill_weights=self.skill_weights(history),
            skill_counts=self.skill_counts(history),
            proof_strength=submission.proof_strength,
        )

        points_awarded = max(0, round_points(scaled + bonus.bonus))
        total_points = max(0, round_points(historical_base) + points_awarded)
        rank = self.rank_calculator.calculate(total_points)

        logger.info(
            "points_calculated",
            task_id=submission.task_id,
            skill_category=submission.skill_category.value,
            user_level=level,
            scaled_base=float(scaled),
            bonus=float(bonus.bonus),
            over_cap=bonus.over_cap,
            points_awarded=points_awarded,
            total_points=total_points,
            rank=rank.rank.value,
        )

        return ScoringResult(
            points_awarded=points_awarded,
            bonus_points=max(0, round_points(bonus.bonus)),
            total_points=total_points,
            rank_progress=rank.progress,
            new_rank=rank.rank,
            user_level=level,
            scaled_base_points=scaled,
            next_rank=rank.next_rank,
            points_to_next=round_points(rank.points_to_next),
        )

    def calculate_batch(
        self,
        submissions: Sequence[TaskSubmission],
        history: Sequence[SubmissionRecord],
    ) -> List[ScoringResult]:
        """
        Score submissions in order, each one seeing the ones before it.

        Works on a copy of `history`; the caller's sequence is untouched.
        """
        working = list(history)
        results = []
        for index, submission in enumerate(submissions):
            result = self.calculate(submission, working)
            results.append(result)
            working.append(
                SubmissionRecord(
                    submission_id=submission.task_id or f"batch-{index}",
                    timestamp=submission.timestamp,
                    proof_text=submission.proof_text or "",
                    points_awarded=result.points_awarded,
                    skill_category=submission.skill_category,
                    base_points=submission.base_points,
                )
            )
        return results
