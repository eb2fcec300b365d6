from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime, timezone
from typing import List, Optional

from cabe_arena.models.enumerations import (
    ProofType,
    SkillCategory,
    SubmissionStatus,
    TaskType,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _ensure_aware(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so history windows compare cleanly."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TaskSubmission(BaseModel):
    """
    A task completion submitted by a user. Immutable once created.

    Numeric fields only have to be finite: the points calculator
    saturates on negative or out-of-order values instead of rejecting them.
    """

    model_config = ConfigDict(frozen=True)

    task_id: Optional[str] = Field(default=None, description="Task identifier")

    skill_category: SkillCategory = Field(
        ...,
        description="Skill category slug or display name"
    )

    task_type: TaskType = Field(
        default=TaskType.PRACTICE,
        description="practice or mini_project"
    )

    base_points: float = Field(..., allow_inf_nan=False, description="Base points of the task")

    max_points: float = Field(..., allow_inf_nan=False, description="Maximum points of the task")

    proof_strength: int = Field(
        default=0,
        description="Self-reported proof strength (10, 25 or 50)"
    )

    proof_text: Optional[str] = Field(default=None, description="Proof of completion")

    timestamp: datetime = Field(default_factory=_utc_now)

    @field_validator("skill_category", mode="before")
    @classmethod
    def resolve_skill_category(cls, v):
        category = SkillCategory.lookup(v)
        if category is None:
            raise ValueError(f"Unknown skill category: {v}")
        return category

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return _ensure_aware(v)


class SubmissionRecord(BaseModel):
    """
    One entry of a user's append-only submission history.

    `skill_category` and `base_points` feed the points calculator; the
    remaining fields feed the integrity checker.
    """

    model_config = ConfigDict(frozen=True)

    submission_id: str = Field(..., description="Submission identifier")

    timestamp: datetime = Field(..., description="When the submission was made")

    proof_text: str = Field(default="", description="Proof text as submitted")

    points_awarded: float = Field(default=0, allow_inf_nan=False, description="Points awarded")

    status: SubmissionStatus = Field(default=SubmissionStatus.PENDING)

    skill_category: Optional[SkillCategory] = Field(
        default=None,
        description="Skill category; unrecognised labels are stored as None"
    )

    base_points: float = Field(default=0, allow_inf_nan=False, description="Base points of the task")

    @field_validator("skill_category", mode="before")
    @classmethod
    def resolve_skill_category(cls, v):
        if v is None:
            return None
        return SkillCategory.lookup(v)

    @field_validator("proof_text", mode="before")
    @classmethod
    def coerce_proof_text(cls, v):
        return "" if v is None else v

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return _ensure_aware(v)


class IntegrityCheckInput(BaseModel):
    """Everything the integrity checker looks at for one submission."""

    model_config = ConfigDict(frozen=True)

    submission_id: str = Field(default="", description="Submission identifier")

    user_id: str = Field(default="", description="Submitting user")

    proof_text: str = Field(default="", description="Proof text, may be empty")

    proof_type: ProofType = Field(default=ProofType.TEXT)

    proof_url: Optional[str] = Field(default=None)

    submission_time: datetime = Field(default_factory=_utc_now)

    user_history: List[SubmissionRecord] = Field(default_factory=list)

    @field_validator("proof_text", mode="before")
    @classmethod
    def coerce_proof_text(cls, v):
        return "" if v is None else v

    @field_validator("submission_time")
    @classmethod
    def normalize_submission_time(cls, v: datetime) -> datetime:
        return _ensure_aware(v)


class TaskFactors(BaseModel):
    """
    Task definition for the task-factor points formula.

    Factor ranges are checked by TaskPointsCalculator so that callers get
    every violation at once, not just the first one pydantic trips over.
    """

    task_id: str = Field(default="", description="Task identifier")
    title: str = Field(default="", description="Task title")
    skill_area: str = Field(..., description="Skill slug or display name")

    duration: float
    skill: float
    complexity: float
    visibility: float
    prestige: float
    autonomy: float

    def factor_values(self) -> dict:
        return {
            "duration": self.duration,
            "skill": self.skill,
            "complexity": self.complexity,
            "visibility": self.visibility,
            "prestige": self.prestige,
            "autonomy": self.autonomy,
        }
