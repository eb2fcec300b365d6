"""
scoring/skill_config.py — Skill Configuration Table

Per-skill parameters for fair point distribution across the four
categories. Loaded once and shared read-only; calculators take a
SkillConfigTable argument so tests can swap in alternate tables.

Validation ranges:
    base / bonus multiplier   [0.5, 2.0]
    cap                       [1000, 5000]
    over-cap boost            [100, 1000]
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

import structlog

from cabe_arena.core.exceptions import UnknownSkillCategoryException
from cabe_arena.models.enumerations import SkillCategory

logger = structlog.get_logger(__name__)

BASE_CAP = 2000
BASE_OVER_CAP_BOOST = 500


@dataclass(frozen=True)
class TaskFactorWeights:
    """Weights Wᵢ of the six task factors."""
    duration: float = 1.0
    skill: float = 1.0
    complexity: float = 1.0
    visibility: float = 1.0
    prestige: float = 1.0
    autonomy: float = 1.0

    def as_dict(self) -> Dict[str, float]:
        return {
            "duration": self.duration,
            "skill": self.skill,
            "complexity": self.complexity,
            "visibility": self.visibility,
            "prestige": self.prestige,
            "autonomy": self.autonomy,
        }


@dataclass(frozen=True)
class SkillConfiguration:
    name: str
    slug: str
    base_multiplier: float
    bonus_multiplier: float
    cap: int
    over_cap_boost: int
    weights: TaskFactorWeights = field(default_factory=TaskFactorWeights)
    description: str = ""


@dataclass
class SkillValidationResult:
    """Output of SkillConfigTable.validate()."""
    is_valid: bool
    config: Optional[SkillConfiguration]
    errors: List[str]


DEFAULT_SKILL_CONFIGURATIONS: Mapping[SkillCategory, SkillConfiguration] = MappingProxyType({
    SkillCategory.FULLSTACK_DEV: SkillConfiguration(
        name=SkillCategory.FULLSTACK_DEV.display_name,
        slug=SkillCategory.FULLSTACK_DEV.value,
        base_multiplier=1.2,    # broad skill surface
        bonus_multiplier=1.1,
        cap=2200,
        over_cap_boost=600,
        weights=TaskFactorWeights(skill=1.2, complexity=1.1),
        description="Comprehensive full-stack development with frontend, backend, and database integration",
    ),
    SkillCategory.CLOUD_DEVOPS: SkillConfiguration(
        name=SkillCategory.CLOUD_DEVOPS.display_name,
        slug=SkillCategory.CLOUD_DEVOPS.value,
        base_multiplier=1.3,    # highest, infrastructure complexity
        bonus_multiplier=1.2,
        cap=2400,
        over_cap_boost=700,
        weights=TaskFactorWeights(
            duration=1.1, skill=1.3, complexity=1.2, prestige=1.1, autonomy=1.1
        ),
        description="Infrastructure, deployment, and operational excellence",
    ),
    SkillCategory.DATA_ANALYTICS: SkillConfiguration(
        name=SkillCategory.DATA_ANALYTICS.display_name,
        slug=SkillCategory.DATA_ANALYTICS.value,
        base_multiplier=1.15,
        bonus_multiplier=1.05,
        cap=2100,
        over_cap_boost=550,
        weights=TaskFactorWeights(skill=1.1, visibility=1.1),
        description="Data analysis, visualization, and business intelligence",
    ),
    SkillCategory.AI_ML: SkillConfiguration(
        name=SkillCategory.AI_ML.display_name,
        slug=SkillCategory.AI_ML.value,
        base_multiplier=1.25,
        bonus_multiplier=1.15,
        cap=2300,
        over_cap_boost=650,
        weights=TaskFactorWeights(
            skill=1.25, complexity=1.15, prestige=1.1, autonomy=1.05
        ),
        description="Machine learning, AI models, and intelligent systems",
    ),
})


def default_configuration(skill_area: str) -> SkillConfiguration:
    """Neutral configuration used for skill areas outside the table."""
    return SkillConfiguration(
        name=skill_area,
        slug=skill_area,
        base_multiplier=1.0,
        bonus_multiplier=1.0,
        cap=BASE_CAP,
        over_cap_boost=BASE_OVER_CAP_BOOST,
        description="Standard skill configuration",
    )


class SkillConfigTable(Mapping[SkillCategory, SkillConfiguration]):
    """Immutable mapping from SkillCategory to its SkillConfiguration."""

    def __init__(
        self,
        configurations: Optional[Mapping[SkillCategory, SkillConfiguration]] = None,
    ):
        source = DEFAULT_SKILL_CONFIGURATIONS if configurations is None else configurations
        self._configs = MappingProxyType(dict(source))

    def __getitem__(self, key: SkillCategory) -> SkillConfiguration:
        return self._configs[key]

    def __iter__(self) -> Iterator[SkillCategory]:
        return iter(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def find(self, skill_area: str) -> Optional[SkillConfiguration]:
        """Look up by slug or display name; None when absent."""
        category = SkillCategory.lookup(skill_area)
        if category is None:
            return None
        return self._configs.get(category)

    def get_configuration(self, skill_area: str) -> SkillConfiguration:
        """Look up by slug or display name, raising for unknown areas."""
        config = self.find(skill_area)
        if config is None:
            raise UnknownSkillCategoryException(str(skill_area))
        return config

    def resolve(self, skill_area: str) -> SkillConfiguration:
        """Look up by slug or display name, falling back to the neutral default."""
        config = self.find(skill_area)
        if config is None:
            logger.warning("unknown_skill_area", skill_area=skill_area)
            return default_configuration(skill_area)
        return config

    def validate(self, skill_area: str) -> SkillValidationResult:
        """Check that a skill area exists and its parameters are sane."""
        config = self.find(skill_area)
        if config is None:
            return SkillValidationResult(
                is_valid=False,
                config=None,
                errors=[f"Unknown skill area: {skill_area}"],
            )

        errors: List[str] = []
        if not 0.5 <= config.base_multiplier <= 2.0:
            errors.append(
                f"Invalid base multiplier: {config.base_multiplier} (should be between 0.5 and 2.0)"
            )
        if not 0.5 <= config.bonus_multiplier <= 2.0:
            errors.append(
                f"Invalid bonus multiplier: {config.bonus_multiplier} (should be between 0.5 and 2.0)"
            )
        if not 1000 <= config.cap <= 5000:
            errors.append(f"Invalid cap: {config.cap} (should be between 1000 and 5000)")
        if not 100 <= config.over_cap_boost <= 1000:
            errors.append(
                f"Invalid over-cap boost: {config.over_cap_boost} (should be between 100 and 1000)"
            )

        return SkillValidationResult(is_valid=not errors, config=config, errors=errors)
