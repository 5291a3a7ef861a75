"""
Milestone lookups over an unlock tier table.

Tiers are any objects with an ``unlock_score`` attribute, supplied in
ascending order of unlock_score. Only unlock_score is read; the tier
object is handed back untouched for presentation.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence


@dataclass(frozen=True)
class Milestone:
    """The next tier to unlock and the distance still needed."""

    tier: Any
    remaining: float

    def progress(self, best_score: float) -> float:
        """Percentage of the way to this tier, capped at 100."""
        threshold = self.tier.unlock_score
        if threshold <= 0:
            return 100.0
        return min(100.0, max(best_score, 0.0) / threshold * 100.0)


def next_milestone(best_score: float, tiers: Sequence[Any]) -> Optional[Milestone]:
    """First tier whose unlock_score exceeds best_score, or None if all are reached."""
    for tier in tiers:
        if tier.unlock_score > best_score:
            return Milestone(tier=tier, remaining=tier.unlock_score - best_score)
    return None


def newly_unlocked(prev_best: float, new_best: float, tiers: Sequence[Any]) -> Optional[Any]:
    """
    The tier unlocked by moving from prev_best to new_best.

    Returns the lowest tier whose threshold lies in (prev_best, new_best],
    or None if the run crossed no threshold.
    """
    for tier in tiers:
        if prev_best < tier.unlock_score <= new_best:
            return tier
    return None


def unlocked_tiers(best_score: float, tiers: Sequence[Any]) -> List[Any]:
    return [t for t in tiers if best_score >= t.unlock_score]
