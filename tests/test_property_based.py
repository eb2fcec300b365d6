# tests/test_property_based.py
"""
Property-Based Tests — scoring and integrity invariants

Hypothesis tests with max_examples=500, covering:
  - 3 exponential scaling properties
  - 2 bonus properties
  - 1 rank property
  - 2 orchestrator properties
  - 2 integrity properties
"""

import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from cabe_arena.integrity.checker import IntegrityChecker
from cabe_arena.models.enumerations import SkillCategory
from cabe_arena.models.submission import (
    IntegrityCheckInput,
    SubmissionRecord,
    TaskSubmission,
)
from cabe_arena.scoring.bonus_calculator import BonusCalculator
from cabe_arena.scoring.points_calculator import PointsCalculator
from cabe_arena.scoring.rank_calculator import RankCalculator
from cabe_arena.scoring.scaling import exponential_scaling

# ---------------------------------------------------------------------------
# Shared strategies
# ---------------------------------------------------------------------------

NOW = datetime(2026, 1, 5, 14, 12, tzinfo=timezone.utc)
ALL_SKILLS = [c.value for c in SkillCategory]

alpha_st = st.floats(min_value=0.1, max_value=20.0, allow_nan=False, allow_infinity=False)
points_st = st.floats(min_value=0.0, max_value=5000.0, allow_nan=False, allow_infinity=False)
proof_st = st.sampled_from([10, 25, 50])


@st.composite
def history_record_st(draw):
    """Draw a prior submission within the last three days."""
    return SubmissionRecord(
        submission_id=f"sub-{draw(st.integers(0, 10_000))}",
        timestamp=NOW - timedelta(minutes=draw(st.integers(0, 3 * 24 * 60))),
        proof_text=draw(st.text(max_size=60)),
        points_awarded=draw(points_st),
        skill_category=draw(st.sampled_from(ALL_SKILLS)),
        base_points=draw(st.floats(min_value=0.0, max_value=500.0, allow_nan=False)),
    )


history_st = st.lists(history_record_st(), max_size=30)


def _submission(base_points: float, max_points: float, proof_strength: int) -> TaskSubmission:
    return TaskSubmission(
        skill_category="fullstack-dev",
        base_points=base_points,
        max_points=max_points,
        proof_strength=proof_strength,
        proof_text="Built and deployed the service with tests and docs",
        timestamp=NOW,
    )


# ---------------------------------------------------------------------------
# Exponential scaling
# ---------------------------------------------------------------------------

class TestScalingProperties:

    @given(alpha=alpha_st)
    @settings(max_examples=500)
    def test_anchors(self, alpha):
        assert exponential_scaling(0, alpha) == 0
        assert exponential_scaling(1, alpha) == 1

    @given(level=st.integers(min_value=0, max_value=99))
    @settings(max_examples=500)
    def test_strictly_increasing_by_level(self, level):
        assert exponential_scaling(level + 1) > exponential_scaling(level)

    @given(level=st.floats(min_value=-50.0, max_value=-0.001, allow_nan=False))
    @settings(max_examples=500)
    def test_negative_levels_in_unit_interval(self, level):
        assert 0 <= exponential_scaling(level) < 1


# ---------------------------------------------------------------------------
# Bonus
# ---------------------------------------------------------------------------

class TestBonusProperties:

    @given(
        max_bonus=points_st,
        weights=st.lists(st.floats(min_value=0.0, max_value=5.0, allow_nan=False), min_size=4, max_size=4),
        counts=st.lists(st.integers(min_value=0, max_value=500), min_size=4, max_size=4),
        proof=proof_st,
    )
    @settings(max_examples=500)
    def test_bonus_bounded(self, max_bonus, weights, counts, proof):
        result = BonusCalculator().calculate(max_bonus, weights, counts, proof)
        assert Decimal("0") <= result.bonus <= Decimal("1500")

    @given(
        max_bonus=points_st,
        counts=st.lists(st.integers(min_value=0, max_value=50), min_size=4, max_size=4),
    )
    @settings(max_examples=500)
    def test_stronger_proof_never_lowers_bonus(self, max_bonus, counts):
        calc = BonusCalculator()
        weak = calc.calculate(max_bonus, [1.0] * 4, counts, 10)
        strong = calc.calculate(max_bonus, [1.0] * 4, counts, 50)
        assert strong.bonus >= weak.bonus


# ---------------------------------------------------------------------------
# Rank
# ---------------------------------------------------------------------------

class TestRankProperties:

    @given(points=st.floats(min_value=-1e6, max_value=1e7, allow_nan=False, allow_infinity=False))
    @settings(max_examples=500)
    def test_progress_in_bounds(self, points):
        result = RankCalculator().calculate(points)
        assert Decimal("0") <= result.progress <= Decimal("100")


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------

class TestOrchestratorProperties:

    @given(
        base=st.floats(min_value=0.0, max_value=1000.0, allow_nan=False),
        extra=st.floats(min_value=0.0, max_value=1000.0, allow_nan=False),
        proof=proof_st,
        history=history_st,
    )
    @settings(max_examples=500, deadline=None, suppress_health_check=[HealthCheck.too_slow])
    def test_results_are_consistent(self, base, extra, proof, history):
        result = PointsCalculator().calculate(_submission(base, base + extra, proof), history)

        assert result.points_awarded >= 0
        assert result.total_points >= result.points_awarded
        assert Decimal("0") <= result.rank_progress <= Decimal("100")
        assert result.new_rank == RankCalculator().rank_for(result.total_points)

    @given(
        base=st.floats(min_value=0.0, max_value=1000.0, allow_nan=False),
        extra=st.floats(min_value=0.0, max_value=1000.0, allow_nan=False),
    )
    @settings(max_examples=500)
    def test_new_user_strong_proof_beats_weak(self, base, extra):
        calc = PointsCalculator()
        strong = calc.calculate(_submission(base, base + extra, 50), [])
        weak = calc.calculate(_submission(base, base + extra, 10), [])
        assert strong.points_awarded > weak.points_awarded


# ---------------------------------------------------------------------------
# Integrity
# ---------------------------------------------------------------------------

class TestIntegrityProperties:

    @given(proof=st.text(max_size=300), history=history_st)
    @settings(max_examples=500, deadline=None, suppress_health_check=[HealthCheck.too_slow])
    def test_risk_in_unit_interval(self, proof, history):
        result = IntegrityChecker(rng=random.Random(0)).check(
            IntegrityCheckInput(proof_text=proof, submission_time=NOW, user_history=history)
        )

        assert Decimal("0") <= result.risk_score <= Decimal("1")
        assert len(result.flags) == len(set(result.flags))
        if result.auto_reject:
            assert result.deterrent_message is None

    @given(proof=st.text(max_size=300))
    @settings(max_examples=500)
    def test_verdicts_are_nested(self, proof):
        result = IntegrityChecker(rng=random.Random(0)).check(
            IntegrityCheckInput(proof_text=proof, submission_time=NOW)
        )

        if result.auto_reject:
            assert result.requires_review
        if result.requires_review:
            assert result.is_suspicious
