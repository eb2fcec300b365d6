"""
scoring/task_points.py — Task-Factor Points Formula

Scores a task from its six effort factors and a 0-100 performance score.

Formula:
    L        = Σ(Wᵢ × Fᵢ) / ΣWᵢ                      skill-specific weights
    f(L)     = (e^(5.5·L) − 1) / (e^5.5 − 1)
    MaxBonus = 1000 × bonus_multiplier
    Bonus    = min(MaxBonus × f(L), MaxBonus)
    Base     = score / 100 × 1000 × base_multiplier
    Total    = Base + Bonus + R
             → Cap + OverCapBoost   if L ≥ 0.95, R = 50 and Total > Cap
             → min(Total, Cap)      otherwise

Factors are in [0, 1]; R ∈ {0, 10, 25, 50}.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import structlog

from cabe_arena.core.exceptions import (
    InvalidProofStrengthException,
    InvalidScoreException,
    InvalidTaskFactorsException,
)
from cabe_arena.models.enumerations import ProofStrength
from cabe_arena.models.submission import TaskFactors
from cabe_arena.scoring.scaling import ALPHA, exponential_scaling
from cabe_arena.scoring.skill_config import SkillConfigTable
from cabe_arena.scoring.utils import as_decimals, round_points, weighted_mean

logger = structlog.get_logger(__name__)

BASE_MAX_BONUS = 1000
OVER_CAP_EFFORT_THRESHOLD = 0.95
FAIRNESS_THRESHOLD_PCT = 20.0
FACTOR_NAMES: Tuple[str, ...] = (
    "duration", "skill", "complexity", "visibility", "prestige", "autonomy",
)
ACCEPTED_PROOF_STRENGTHS = tuple(int(p) for p in ProofStrength)


@dataclass
class TaskPointsBreakdown:
    base: int
    bonus: int
    proof_bonus: int
    total: int
    weighted_average: Decimal
    nonlinear_bonus: float
    factors: Dict[str, float]
    weights: Dict[str, float]
    max_bonus: int
    cap: int
    over_cap_boost: int          # amount by which the raw total exceeded the cap
    skill_multiplier: float
    skill_category: str


@dataclass
class TaskPointsResult:
    """Output of TaskPointsCalculator.calculate()."""
    points_awarded: int
    breakdown: Optional[TaskPointsBreakdown] = None


@dataclass
class TaskPointsSummary:
    """Output of TaskPointsCalculator.calculate_many()."""
    total_points: int
    average_points: float
    task_breakdown: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class FairnessReport:
    """Output of TaskPointsCalculator.analyze_fairness()."""
    is_fair: bool
    min_points: int
    max_points: int
    difference: int
    skill_breakdown: List[Dict[str, Any]]
    recommendations: List[str]


def validate_task_factors(task: Mapping[str, Any]) -> Tuple[bool, List[str]]:
    """Report every missing or out-of-range factor without raising."""
    errors: List[str] = []
    for name in FACTOR_NAMES:
        value = task.get(name)
        if value is None:
            errors.append(f"Missing required factor: {name}")
        elif not 0.0 <= value <= 1.0:
            errors.append(f"{name} must be between 0.0 and 1.0, got: {value}")
    return not errors, errors


class TaskPointsCalculator:
    """Points for a task from its effort factors and a performance score."""

    def __init__(
        self,
        skill_table: Optional[SkillConfigTable] = None,
        alpha: float = ALPHA,
    ):
        self.skill_table = skill_table or SkillConfigTable()
        self.alpha = alpha

    def calculate(
        self,
        score: float,
        task: TaskFactors,
        proof_strength: int = 0,
        include_breakdown: bool = False,
    ) -> TaskPointsResult:
        """
        Args:
            score: Performance score in [0, 100].
            task: Task with its six factors in [0, 1].
            proof_strength: 0, 10, 25 or 50.
            include_breakdown: Attach a TaskPointsBreakdown to the result.

        Raises:
            InvalidScoreException, InvalidProofStrengthException,
            InvalidTaskFactorsException
        """
        if not 0 <= score <= 100:
            raise InvalidScoreException(score)

        factors = task.factor_values()
        is_valid, errors = validate_task_factors(factors)
        if not is_valid:
            raise InvalidTaskFactorsException(errors)

        if proof_strength not in ACCEPTED_PROOF_STRENGTHS:
            raise InvalidProofStrengthException(proof_strength, ACCEPTED_PROOF_STRENGTHS)

        config = self.skill_table.resolve(task.skill_area)
        weights = config.weights.as_dict()

        # Step 1: weighted effort score L
        effort = weighted_mean(
            as_decimals([factors[n] for n in FACTOR_NAMES]),
            as_decimals([weights[n] for n in FACTOR_NAMES]),
            places=None,
        )

        # Step 2: nonlinear bonus f(L)
        f_l = exponential_scaling(float(effort), self.alpha)

        # Step 3: bonus, capped at the skill's max bonus
        max_bonus = Decimal(BASE_MAX_BONUS) * Decimal(str(config.bonus_multiplier))
        bonus = min(max_bonus * Decimal(str(f_l)), max_bonus)

        # Step 4: base from performance score
        base = (
            Decimal(str(score)) / Decimal("100")
            * Decimal(BASE_MAX_BONUS)
            * Decimal(str(config.base_multiplier))
        )

        # Step 5: proof bonus
        total = base + bonus + Decimal(proof_strength)

        # Step 6: cap, with the over-cap path for top effort and strong proof
        over_cap_amount = Decimal("0")
        cap = Decimal(config.cap)
        if effort >= Decimal(str(OVER_CAP_EFFORT_THRESHOLD)) and proof_strength == ProofStrength.STRONG:
            if total > cap:
                over_cap_amount = total - cap
                total = cap + Decimal(config.over_cap_boost)
        else:
            total = min(total, cap)

        points = max(0, round_points(total))

        logger.debug(
            "task_points_calculated",
            task_id=task.task_id,
            skill_area=task.skill_area,
            effort=float(effort),
            bonus=float(bonus),
            base=float(base),
            points=points,
        )

        breakdown = None
        if include_breakdown:
            breakdown = TaskPointsBreakdown(
                base=round_points(base),
                bonus=round_points(bonus),
                proof_bonus=proof_strength,
                total=points,
                weighted_average=effort,
                nonlinear_bonus=f_l,
                factors=factors,
                weights=weights,
                max_bonus=round_points(max_bonus),
                cap=config.cap,
                over_cap_boost=round_points(over_cap_amount),
                skill_multiplier=config.base_multiplier,
                skill_category=config.name,
            )

        return TaskPointsResult(points_awarded=points, breakdown=breakdown)

    def calculate_many(
        self,
        score: float,
        tasks: Sequence[TaskFactors],
        proof_strength: int = 0,
    ) -> TaskPointsSummary:
        """Score several tasks with the same performance score."""
        if not tasks:
            return TaskPointsSummary(total_points=0, average_points=0.0)

        breakdown = [
            {
                "task_id": task.task_id,
                "task_title": task.title,
                "points_awarded": self.calculate(score, task, proof_strength).points_awarded,
            }
            for task in tasks
        ]
        total = sum(item["points_awarded"] for item in breakdown)
        return TaskPointsSummary(
            total_points=total,
            average_points=total / len(tasks),
            task_breakdown=breakdown,
        )

    def max_points(self, task: TaskFactors, proof_strength: int = 50) -> int:
        """Theoretical maximum: perfect score."""
        return self.calculate(100, task, proof_strength).points_awarded

    def min_points(self, task: TaskFactors, proof_strength: int = 0) -> int:
        """Theoretical minimum: zero score."""
        return self.calculate(0, task, proof_strength).points_awarded

    def analyze_fairness(
        self,
        tasks: Sequence[TaskFactors],
        score: float,
        proof_strength: int = 0,
    ) -> FairnessReport:
        """
        Compare points across skills for tasks of equal difficulty.

        Fair when the spread (max − min) is within 20% of the mean.
        """
        if not tasks:
            return FairnessReport(
                is_fair=False,
                min_points=0,
                max_points=0,
                difference=0,
                skill_breakdown=[],
                recommendations=["No tasks provided for analysis"],
            )

        skill_breakdown = []
        for task in tasks:
            config = self.skill_table.resolve(task.skill_area)
            skill_breakdown.append({
                "skill": task.skill_area,
                "points": self.calculate(score, task, proof_strength).points_awarded,
                "multiplier": config.base_multiplier,
                "cap": config.cap,
            })

        points = [item["points"] for item in skill_breakdown]
        low, high = min(points), max(points)
        difference = high - low
        average = sum(points) / len(points)
        variance_pct = (difference / average * 100) if average > 0 else 0.0
        is_fair = variance_pct <= FAIRNESS_THRESHOLD_PCT

        recommendations: List[str] = []
        if is_fair:
            recommendations.append("Points distribution is fair across skills")
        else:
            recommendations.append(
                f"Points variance is {variance_pct:.1f}%, which exceeds the "
                f"{FAIRNESS_THRESHOLD_PCT:.0f}% fairness threshold"
            )
            higher = [i["skill"] for i in skill_breakdown if i["points"] > average * 1.1]
            lower = [i["skill"] for i in skill_breakdown if i["points"] < average * 0.9]
            if higher:
                recommendations.append(f"Skills with higher points: {', '.join(higher)}")
            if lower:
                recommendations.append(f"Skills with lower points: {', '.join(lower)}")

        return FairnessReport(
            is_fair=is_fair,
            min_points=low,
            max_points=high,
            difference=difference,
            skill_breakdown=skill_breakdown,
            recommendations=recommendations,
        )
