# tests/conftest.py

"""
Pytest Fixtures - Shared submissions, histories and calculators

All timestamps are fixed. REFERENCE_TIME is 14:12 UTC so the timing
heuristics (2-6 AM, minute 0/30) stay quiet unless a test asks for them.
"""

import random
from datetime import datetime, timedelta, timezone

import pytest

from cabe_arena.integrity.checker import IntegrityChecker
from cabe_arena.models.submission import (
    IntegrityCheckInput,
    SubmissionRecord,
    TaskFactors,
    TaskSubmission,
)
from cabe_arena.scoring.points_calculator import PointsCalculator
from cabe_arena.scoring.task_points import TaskPointsCalculator

REFERENCE_TIME = datetime(2026, 1, 5, 14, 12, 0, tzinfo=timezone.utc)

GENUINE_PROOF = (
    "I completed the React component task by creating a responsive navigation "
    "bar with proper state management."
)


# =============================================================================
# CALCULATOR FIXTURES
# =============================================================================

@pytest.fixture
def points_calculator():
    return PointsCalculator()


@pytest.fixture
def integrity_checker():
    """Checker with a seeded random source for reproducible deterrents."""
    return IntegrityChecker(rng=random.Random(42))


@pytest.fixture
def task_points_calculator():
    return TaskPointsCalculator()


# =============================================================================
# SUBMISSION FIXTURES
# =============================================================================

@pytest.fixture
def reference_time():
    return REFERENCE_TIME


@pytest.fixture
def genuine_proof():
    return GENUINE_PROOF


@pytest.fixture
def base_submission():
    """Practice task: 50 base, 200 max, moderate proof."""
    return TaskSubmission(
        task_id="task-1",
        skill_category="Full-Stack Software Development",
        task_type="practice",
        base_points=50,
        max_points=200,
        proof_strength=25,
        proof_text=GENUINE_PROOF,
        timestamp=REFERENCE_TIME,
    )


@pytest.fixture
def make_record():
    """Factory for history records relative to REFERENCE_TIME."""

    def _make(
        index: int = 0,
        minutes_ago: float = 120,
        proof_text: str = "Valid proof",
        points_awarded: float = 100,
        status: str = "approved",
        skill_category: str = "fullstack-dev",
        base_points: float = 100,
    ) -> SubmissionRecord:
        return SubmissionRecord(
            submission_id=f"sub-{index}",
            timestamp=REFERENCE_TIME - timedelta(minutes=minutes_ago),
            proof_text=proof_text,
            points_awarded=points_awarded,
            status=status,
            skill_category=skill_category,
            base_points=base_points,
        )

    return _make


@pytest.fixture
def make_check():
    """Factory for integrity inputs at REFERENCE_TIME."""

    def _make(proof_text: str = GENUINE_PROOF, history=None, submission_time=None):
        return IntegrityCheckInput(
            submission_id="sub-new",
            user_id="user-1",
            proof_text=proof_text,
            proof_type="text",
            submission_time=submission_time or REFERENCE_TIME,
            user_history=history or [],
        )

    return _make


@pytest.fixture
def make_task():
    """Factory for task-factor tasks; every factor defaults to 0.5."""

    def _make(skill_area: str = "fullstack-dev", task_id: str = "task-1", **factors):
        values = {
            "duration": 0.5,
            "skill": 0.5,
            "complexity": 0.5,
            "visibility": 0.5,
            "prestige": 0.5,
            "autonomy": 0.5,
        }
        values.update(factors)
        return TaskFactors(task_id=task_id, title=f"Task {task_id}", skill_area=skill_area, **values)

    return _make
