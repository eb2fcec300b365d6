#!/usr/bin/env python
"""
Score a submission file: points, rank, integrity verdict and an occasional
engagement message.

The payload is a JSON document:

    {
      "user_id": "user-1",
      "submission_id": "sub-42",
      "proof_type": "text",
      "submission": {"skill_category": "fullstack-dev", "task_type": "practice",
                     "base_points": 50, "max_points": 200, "proof_strength": 25,
                     "proof_text": "...", "timestamp": "2026-01-05T14:12:00Z"},
      "history": [{"submission_id": "sub-41", "timestamp": "...", "proof_text": "...",
                   "points_awarded": 120, "status": "approved",
                   "skill_category": "ai-ml", "base_points": 100}]
    }

Usage:
    python -m cabe_arena.scripts.score_submission payload.json
    python -m cabe_arena.scripts.score_submission payload.json --seed 7
    python -m cabe_arena.scripts.score_submission - < payload.json
"""

import argparse
import json
import logging
import random
import sys
from dataclasses import asdict
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from cabe_arena.config import get_settings
from cabe_arena.integrity.checker import IntegrityChecker, IntegrityConfig
from cabe_arena.integrity.messages import EngagementNotifier
from cabe_arena.logging_config import configure_logging
from cabe_arena.models.submission import (
    IntegrityCheckInput,
    SubmissionRecord,
    TaskSubmission,
)
from cabe_arena.scoring.points_calculator import PointsCalculator, ScoringConfig

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_PAYLOAD = 2


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def load_payload(path: str) -> Dict[str, Any]:
    if path == "-":
        payload = json.load(sys.stdin)
    else:
        with open(path, "r", encoding="utf-8") as fh:
            payload = json.load(fh)
    if not isinstance(payload, dict):
        raise ValueError(f"Payload must be a JSON object, got {type(payload).__name__}")
    return payload


def score_payload(
    payload: Dict[str, Any],
    seed: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Run the points calculator and the integrity checker over one payload."""
    settings = get_settings()

    submission = TaskSubmission.model_validate(payload["submission"])
    history: List[SubmissionRecord] = [
        SubmissionRecord.model_validate(item) for item in payload.get("history", [])
    ]

    check_input = IntegrityCheckInput(
        submission_id=payload.get("submission_id", submission.task_id or ""),
        user_id=payload.get("user_id", ""),
        proof_text=submission.proof_text or "",
        proof_type=payload.get("proof_type", "text"),
        proof_url=payload.get("proof_url"),
        submission_time=now or submission.timestamp,
        user_history=history,
    )

    seed = seed if seed is not None else settings.RANDOM_SEED
    rng = random.Random(seed)
    scoring = PointsCalculator(ScoringConfig.from_settings(settings)).calculate(
        submission, history
    )
    integrity = IntegrityChecker(
        IntegrityConfig.from_settings(settings), rng=rng
    ).check(check_input)
    engagement = EngagementNotifier.from_settings(settings, rng=rng).maybe_pick()

    return {
        "scoring": asdict(scoring),
        "integrity": asdict(integrity),
        "engagement_message": engagement,
    }


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    configure_logging()

    parser = argparse.ArgumentParser(description="Score a CaBE Arena submission payload")
    parser.add_argument("payload", help="Path to a JSON payload, or - for stdin")
    parser.add_argument("--seed", type=int, default=None, help="Seed for message selection")
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        help="Override the submission time used by integrity checks (ISO 8601)",
    )
    args = parser.parse_args(argv)

    try:
        payload = load_payload(args.payload)
        result = score_payload(payload, seed=args.seed, now=args.now)
    except (ValidationError, KeyError, TypeError, OSError, ValueError) as e:
        logger.error(f"Invalid payload {args.payload}: {e}")
        print(f"Invalid payload: {e}", file=sys.stderr)
        return EXIT_INVALID_PAYLOAD

    print(json.dumps(result, indent=2, default=_json_default))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
