"""
Leaderboard data structures and score normalisation.

A Snapshot is an immutable tuple of Entry objects ordered by score,
highest first. Every mutation builds a new tuple and swaps it in whole,
so a reader holding a Snapshot never sees a half-sorted sequence.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Tuple

logger = logging.getLogger(__name__)

MIN_SCORE = 50


def clamp_score(value: Any) -> int:
    """
    Normalise a raw score to a leaderboard score.

    Non-numeric and non-finite values collapse to MIN_SCORE; everything
    else is floored and clamped to at least MIN_SCORE.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning("Non-numeric score %r clamped to %d", value, MIN_SCORE)
        return MIN_SCORE
    if not math.isfinite(number):
        logger.warning("Non-finite score %r clamped to %d", value, MIN_SCORE)
        return MIN_SCORE
    return max(MIN_SCORE, math.floor(number))


@dataclass(frozen=True)
class Entry:
    """One leaderboard row."""

    identifier: str  # display name
    score: int  # metres, always >= MIN_SCORE
    is_live: bool = False  # highlight as "just appeared"

    def __post_init__(self):
        object.__setattr__(self, "score", clamp_score(self.score))

    def to_dict(self):
        return {"identifier": self.identifier, "score": self.score, "is_live": self.is_live}


Snapshot = Tuple[Entry, ...]

EMPTY_SNAPSHOT: Snapshot = ()


def sort_entries(entries: Iterable[Entry]) -> Snapshot:
    """
    Order entries by score, highest first.

    The sort is stable: entries with equal scores keep the order in which
    they were supplied.
    """
    return tuple(sorted(entries, key=lambda e: -e.score))


def is_sorted(snapshot: Snapshot) -> bool:
    return all(a.score >= b.score for a, b in zip(snapshot, snapshot[1:]))
