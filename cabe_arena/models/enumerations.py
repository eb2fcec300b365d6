from enum import Enum, IntEnum
from typing import Optional

from cabe_arena.core.exceptions import UnknownSkillCategoryException


class SkillCategory(str, Enum):
    FULLSTACK_DEV = "fullstack-dev"
    CLOUD_DEVOPS = "cloud-devops"
    DATA_ANALYTICS = "data-analytics"
    AI_ML = "ai-ml"

    @property
    def display_name(self) -> str:
        return SKILL_DISPLAY_NAMES[self]

    @classmethod
    def lookup(cls, label: str) -> Optional["SkillCategory"]:
        """Resolve a slug or display name; None when unrecognised."""
        if isinstance(label, cls):
            return label
        if not isinstance(label, str):
            return None
        cleaned = label.strip()
        for category in cls:
            if cleaned == category.value or cleaned == category.display_name:
                return category
        return None

    @classmethod
    def from_label(cls, label: str) -> "SkillCategory":
        """Resolve a slug or display name, raising on anything else."""
        category = cls.lookup(label)
        if category is None:
            raise UnknownSkillCategoryException(str(label))
        return category


# Literal strings are part of the external contract; UI and tests key off them.
SKILL_DISPLAY_NAMES = {
    SkillCategory.FULLSTACK_DEV: "Full-Stack Software Development",
    SkillCategory.CLOUD_DEVOPS: "Cloud Computing & DevOps",
    SkillCategory.DATA_ANALYTICS: "Data Science & Analytics",
    SkillCategory.AI_ML: "AI / Machine Learning",
}


class TaskType(str, Enum):
    PRACTICE = "practice"
    MINI_PROJECT = "mini_project"


class ProofStrength(IntEnum):
    NONE = 0        # Task-factor formula only
    WEAK = 10
    MODERATE = 25
    STRONG = 50


class SubmissionStatus(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"
    PENDING = "pending"


class ProofType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    FILE = "file"
    LINK = "link"


class RankTier(str, Enum):
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"
    DIAMOND = "Diamond"
