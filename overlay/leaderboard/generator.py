"""
Synthetic rival generation.

A batch is anchored to a reference score: references above the threshold
are used directly as the base, smaller ones fall back to a fixed base so
a fresh run still faces a believable field. Scores are drawn as

    floor(base + (u - skew) * base * variance_ratio)

with u uniform in [0, 1), so roughly 70% of the field sits above the
base. Names are drawn without repetition within a batch.
"""

import logging
import math
import random
from typing import Optional, Sequence

from overlay.leaderboard.data import Entry, Snapshot, clamp_score, sort_entries

logger = logging.getLogger(__name__)


class EntryGenerator:
    """Produces batches of synthetic competitor entries."""

    def __init__(
        self,
        names: Sequence[str],
        rng: Optional[random.Random] = None,
        batch_size: int = 15,
        live_probability: float = 0.3,
        fallback_reference: int = 500,
        reference_threshold: int = 100,
        variance_ratio: float = 0.8,
        variance_skew: float = 0.3,
    ):
        # deduplicated so a batch never repeats a name
        self._names = list(dict.fromkeys(names))
        if not self._names:
            raise ValueError("Name pool must not be empty")
        self._rng = rng if rng is not None else random.Random()
        self.batch_size = batch_size
        self.live_probability = live_probability
        self.fallback_reference = fallback_reference
        self.reference_threshold = reference_threshold
        self.variance_ratio = variance_ratio
        self.variance_skew = variance_skew

    @property
    def names(self):
        return list(self._names)

    def base_score(self, reference_score: float) -> float:
        """Anchor for a batch generated around reference_score."""
        try:
            reference = float(reference_score)
        except (TypeError, ValueError):
            reference = 0.0
        if math.isfinite(reference) and reference > self.reference_threshold:
            return reference
        return float(self.fallback_reference)

    def generate(self, reference_score: float, count: Optional[int] = None) -> Snapshot:
        """
        Generate a batch of rivals around reference_score.

        Args:
            reference_score: Player score the field is anchored to
            count: Number of entries (default: batch_size). Capped at the
                number of distinct names in the pool.

        Returns:
            Snapshot sorted by score, highest first
        """
        if count is None:
            count = self.batch_size
        if count <= 0:
            return ()
        if count > len(self._names):
            logger.warning(
                "Requested %d entries but the name pool has %d names; batch capped",
                count, len(self._names),
            )
            count = len(self._names)

        base = self.base_score(reference_score)
        variance = base * self.variance_ratio
        names = self._rng.sample(self._names, count)

        entries = []
        for name in names:
            raw = base + (self._rng.random() - self.variance_skew) * variance
            entries.append(Entry(
                identifier=name,
                score=clamp_score(raw),
                is_live=self._rng.random() < self.live_probability,
            ))

        snapshot = sort_entries(entries)
        logger.debug(
            "Generated %d entries around %.0f (top=%d, bottom=%d)",
            len(snapshot), base, snapshot[0].score, snapshot[-1].score,
        )
        return snapshot
