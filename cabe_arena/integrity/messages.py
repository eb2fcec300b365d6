"""
integrity/messages.py

Message pickers driven by an injected random source. Pass a seeded
random.Random to get reproducible picks.
"""

import random
from typing import List, Optional, Sequence

from cabe_arena.config import Settings

DETERRENT_MESSAGES: Sequence[str] = (
    "We've noticed some unusual activity with your submission. Please ensure your proof "
    "demonstrates genuine effort and learning.",
    "Your submission has been flagged for review. High-quality proofs typically include "
    "detailed explanations and evidence of work completed.",
    "We're reviewing your submission to ensure it meets our quality standards. Please "
    "provide more detailed proof of your work.",
    "Your submission appears to be incomplete. Please provide a more comprehensive proof "
    "of task completion.",
    "We've detected patterns that suggest this submission may not reflect genuine work. "
    "Please review and resubmit with more detailed proof.",
)

ENGAGEMENT_MESSAGES: Sequence[str] = (
    "Congratulations! You've been selected for an exclusive internship opportunity!",
    "New gig opportunity: $500 for a 2-hour coding session",
    "You've unlocked the premium features! Access advanced analytics now.",
    "You're in the top 5% of users! Special rewards await.",
    "Your profile has been featured on our leaderboard!",
    "New achievement unlocked: Speed Demon - Complete 10 tasks in 1 hour",
    "Diamond rank users get exclusive access to premium job opportunities",
    "You've been nominated for our monthly excellence award!",
)


class DeterrentMessagePicker:
    """Pick a deterrent message without revealing which checks fired."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        messages: Sequence[str] = DETERRENT_MESSAGES,
    ):
        if not messages:
            raise ValueError("messages must not be empty")
        self.rng = rng or random.Random()
        self.messages = list(messages)

    def pick(self, flags: Sequence[str] = ()) -> str:
        # Flags are accepted but unused: the message must not leak detection logic
        return self.rng.choice(self.messages)


class EngagementNotifier:
    """Occasionally surface an opportunity message to the user."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        probability: float = 0.1,
        messages: Sequence[str] = ENGAGEMENT_MESSAGES,
        weights: Optional[Sequence[float]] = None,
    ):
        if not messages:
            raise ValueError("messages must not be empty")
        if weights is not None and len(weights) != len(messages):
            raise ValueError("weights and messages must have same length")
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"probability must be in [0, 1], got {probability}")
        self.rng = rng or random.Random()
        self.probability = probability
        self.messages: List[str] = list(messages)
        self.weights: List[float] = list(weights) if weights is not None else [1.0] * len(messages)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        rng: Optional[random.Random] = None,
    ) -> "EngagementNotifier":
        return cls(rng=rng, probability=settings.ENGAGEMENT_MESSAGE_PROBABILITY)

    def should_show(self) -> bool:
        return self.rng.random() < self.probability

    def pick(self) -> str:
        return self.rng.choices(self.messages, weights=self.weights, k=1)[0]

    def maybe_pick(self) -> Optional[str]:
        """A message with probability `probability`, else None."""
        if self.should_show():
            return self.pick()
        return None
