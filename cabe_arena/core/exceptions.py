"""
Custom Exceptions - CaBE Arena Scoring Engine
cabe_arena/core/exceptions.py

Raised only for caller misuse. Numeric and textual edge values inside a
well-formed submission never raise; the calculators saturate instead.
"""

from typing import List


class ScoringException(Exception):
    """Base exception for scoring and integrity operations."""

    pass


class UnknownSkillCategoryException(ScoringException):
    """Skill label matches neither a slug nor a display name."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Unknown skill category: {label}")


class InvalidTaskFactorsException(ScoringException):
    """One or more task factors are missing or outside [0, 1]."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid task factors")


class InvalidProofStrengthException(ScoringException):
    """Proof strength outside the accepted set."""

    def __init__(self, value: int, allowed=(0, 10, 25, 50)):
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"Proof strength must be one of {', '.join(str(a) for a in self.allowed)}, got {value}"
        )


class InvalidScoreException(ScoringException):
    """Performance score outside [0, 100]."""

    def __init__(self, value: float):
        self.value = value
        super().__init__(f"Score must be between 0 and 100, got {value}")
