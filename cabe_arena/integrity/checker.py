"""
integrity/checker.py — Submission Integrity Heuristics

Rule-based risk accumulator. Each triggered check adds its weight; the
sum is clamped to [0, 1]. Checks are independent, so the same substring
can trip several of them.

    Check                           Flag                         Weight
    suspicious token (per pattern)  SUSPICIOUS_PATTERN           0.20
    6+ identical characters         REPEATED_CHARACTERS          0.20
    10+ letters, no whitespace      RANDOM_CHARACTERS            0.20
    proof < 20 characters           PROOF_TOO_SHORT              0.30
    > 10 submissions in 1 hour      TOO_MANY_SUBMISSIONS         0.25
    < 5 min since last submission   SUBMISSIONS_TOO_CLOSE        0.25
    exact duplicate proof           DUPLICATE_SUBMISSION         0.40
    > 2000 points in 24 hours       RAPID_POINT_ACCUMULATION     0.30
    hour in [2, 6)                  UNUSUAL_SUBMISSION_TIME      0.20
    minute is 0 or 30               REGULAR_SUBMISSION_PATTERN   0.20
    empty proof                     EMPTY_PROOF                  risk = 1

    suspicious       risk > 0.3
    requires review  risk > 0.7
    auto reject      risk > 0.9
"""

import random
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

import structlog

from cabe_arena.config import Settings
from cabe_arena.integrity.messages import DeterrentMessagePicker
from cabe_arena.models.submission import IntegrityCheckInput, SubmissionRecord

logger = structlog.get_logger(__name__)

SUSPICIOUS_PATTERN = "SUSPICIOUS_PATTERN"
REPEATED_CHARACTERS = "REPEATED_CHARACTERS"
RANDOM_CHARACTERS = "RANDOM_CHARACTERS"
PROOF_TOO_SHORT = "PROOF_TOO_SHORT"
EMPTY_PROOF = "EMPTY_PROOF"
TOO_MANY_SUBMISSIONS = "TOO_MANY_SUBMISSIONS"
SUBMISSIONS_TOO_CLOSE = "SUBMISSIONS_TOO_CLOSE"
DUPLICATE_SUBMISSION = "DUPLICATE_SUBMISSION"
RAPID_POINT_ACCUMULATION = "RAPID_POINT_ACCUMULATION"
UNUSUAL_SUBMISSION_TIME = "UNUSUAL_SUBMISSION_TIME"
REGULAR_SUBMISSION_PATTERN = "REGULAR_SUBMISSION_PATTERN"

SUSPICIOUS_PATTERNS: Tuple[re.Pattern, ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"fake",
        r"test",
        r"placeholder",
        r"lorem ipsum",
        r"asdf",
        r"qwerty",
        r"123456",
        r"password",
    )
)
REPEATED_CHARS_RE = re.compile(r"(.)\1{5,}")
LETTER_RUN_RE = re.compile(r"[a-z]{10,}", re.IGNORECASE)
WHITESPACE_RE = re.compile(r"\s")

PATTERN_WEIGHT = Decimal("0.2")
SHORT_PROOF_WEIGHT = Decimal("0.3")
FREQUENCY_WEIGHT = Decimal("0.25")
DUPLICATE_WEIGHT = Decimal("0.4")
ACCUMULATION_WEIGHT = Decimal("0.3")
TIMING_WEIGHT = Decimal("0.2")

UNUSUAL_HOURS = range(2, 6)
REGULAR_MINUTES = (0, 30)


@dataclass(frozen=True)
class IntegrityConfig:
    """Immutable thresholds of the integrity heuristics."""
    min_proof_length: int = 20
    max_submissions_per_hour: int = 10
    min_seconds_between_submissions: int = 300
    daily_points_limit: int = 2000
    suspicious_threshold: Decimal = Decimal("0.3")
    high_risk_threshold: Decimal = Decimal("0.7")
    auto_reject_threshold: Decimal = Decimal("0.9")

    @classmethod
    def from_settings(cls, settings: Settings) -> "IntegrityConfig":
        return cls(
            min_proof_length=settings.MIN_PROOF_LENGTH,
            max_submissions_per_hour=settings.MAX_SUBMISSIONS_PER_HOUR,
            min_seconds_between_submissions=settings.MIN_SECONDS_BETWEEN_SUBMISSIONS,
            daily_points_limit=settings.DAILY_POINTS_LIMIT,
            suspicious_threshold=Decimal(str(settings.SUSPICIOUS_THRESHOLD)),
            high_risk_threshold=Decimal(str(settings.HIGH_RISK_THRESHOLD)),
            auto_reject_threshold=Decimal(str(settings.AUTO_REJECT_THRESHOLD)),
        )


@dataclass
class IntegrityResult:
    """Output of IntegrityChecker.check()."""
    is_suspicious: bool
    risk_score: Decimal              # [0, 1]
    flags: List[str] = field(default_factory=list)
    deterrent_message: Optional[str] = None
    requires_review: bool = False
    auto_reject: bool = False


class IntegrityChecker:
    """Score a submission for signs of fabricated or automated proof."""

    def __init__(
        self,
        config: Optional[IntegrityConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or IntegrityConfig()
        self.deterrents = DeterrentMessagePicker(rng=rng)

    def check(self, submission: IntegrityCheckInput) -> IntegrityResult:
        flags: List[str] = []
        risk = Decimal("0")

        pattern_flags = self.check_suspicious_patterns(submission.proof_text)
        flags.extend(pattern_flags)
        risk += PATTERN_WEIGHT * len(pattern_flags)

        if len(submission.proof_text) < self.config.min_proof_length:
            flags.append(PROOF_TOO_SHORT)
            risk += SHORT_PROOF_WEIGHT

        frequency_flags = self.check_submission_frequency(
            submission.submission_time, submission.user_history
        )
        flags.extend(frequency_flags)
        risk += FREQUENCY_WEIGHT * len(frequency_flags)

        if self.is_duplicate(submission.proof_text, submission.user_history):
            flags.append(DUPLICATE_SUBMISSION)
            risk += DUPLICATE_WEIGHT

        if self.is_rapid_accumulation(submission.submission_time, submission.user_history):
            flags.append(RAPID_POINT_ACCUMULATION)
            risk += ACCUMULATION_WEIGHT

        timing_flags = self.check_timing(submission.submission_time)
        flags.extend(timing_flags)
        risk += TIMING_WEIGHT * len(timing_flags)

        if not submission.proof_text.strip():
            flags.append(EMPTY_PROOF)
            risk = Decimal("1")

        risk = min(max(risk, Decimal("0")), Decimal("1"))
        is_suspicious = risk > self.config.suspicious_threshold
        requires_review = risk > self.config.high_risk_threshold
        auto_reject = risk > self.config.auto_reject_threshold

        unique_flags = list(dict.fromkeys(flags))
        deterrent = None
        if is_suspicious and not auto_reject:
            deterrent = self.deterrents.pick(unique_flags)

        if requires_review:
            logger.warning(
                "submission_flagged",
                submission_id=submission.submission_id,
                user_id=submission.user_id,
                risk_score=float(risk),
                flags=unique_flags,
                auto_reject=auto_reject,
            )
        else:
            logger.debug(
                "integrity_checked",
                submission_id=submission.submission_id,
                risk_score=float(risk),
                flags=unique_flags,
            )

        return IntegrityResult(
            is_suspicious=is_suspicious,
            risk_score=risk,
            flags=unique_flags,
            deterrent_message=deterrent,
            requires_review=requires_review,
            auto_reject=auto_reject,
        )

    def check_suspicious_patterns(self, proof_text: str) -> List[str]:
        """One SUSPICIOUS_PATTERN entry per matching token pattern."""
        flags = [SUSPICIOUS_PATTERN for p in SUSPICIOUS_PATTERNS if p.search(proof_text)]

        if REPEATED_CHARS_RE.search(proof_text):
            flags.append(REPEATED_CHARACTERS)

        if LETTER_RUN_RE.search(proof_text) and not WHITESPACE_RE.search(proof_text):
            flags.append(RANDOM_CHARACTERS)

        return flags

    def check_submission_frequency(
        self,
        submission_time: datetime,
        history: Sequence[SubmissionRecord],
    ) -> List[str]:
        flags: List[str] = []
        if not history:
            return flags

        window_start = submission_time - timedelta(hours=1)
        in_window = sum(1 for h in history if h.timestamp > window_start)
        # The submission under review counts toward the hourly total
        if in_window + 1 > self.config.max_submissions_per_hour:
            flags.append(TOO_MANY_SUBMISSIONS)

        latest = max(h.timestamp for h in history)
        gap = (submission_time - latest).total_seconds()
        if gap < self.config.min_seconds_between_submissions:
            flags.append(SUBMISSIONS_TOO_CLOSE)

        return flags

    def is_duplicate(self, proof_text: str, history: Sequence[SubmissionRecord]) -> bool:
        normalized = proof_text.strip().lower()
        return any(h.proof_text.strip().lower() == normalized for h in history)

    def is_rapid_accumulation(
        self,
        submission_time: datetime,
        history: Sequence[SubmissionRecord],
    ) -> bool:
        window_start = submission_time - timedelta(days=1)
        recent_points = sum(h.points_awarded for h in history if h.timestamp > window_start)
        return recent_points > self.config.daily_points_limit

    def check_timing(self, submission_time: datetime) -> List[str]:
        flags: List[str] = []
        if submission_time.hour in UNUSUAL_HOURS:
            flags.append(UNUSUAL_SUBMISSION_TIME)
        if submission_time.minute in REGULAR_MINUTES:
            flags.append(REGULAR_SUBMISSION_PATTERN)
        return flags
