"""
Authoritative owner of the current leaderboard Snapshot.

All writes build a complete new tuple off to the side and swap it in with
a single assignment, then publish it to subscribers. Readers only ever see
a fully sorted Snapshot.
"""

import logging
from typing import Callable, Iterable, List, Optional

from overlay.leaderboard.data import EMPTY_SNAPSHOT, Entry, Snapshot, sort_entries

logger = logging.getLogger(__name__)

Listener = Callable[[Snapshot], None]


class LeaderboardStore:
    """Holds one Snapshot and applies capacity-bounded updates to it."""

    def __init__(self, capacity: int = 15):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._snapshot: Snapshot = EMPTY_SNAPSHOT
        self._listeners: List[Listener] = []

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callable that receives every newly published Snapshot.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def replace(self, entries: Iterable[Entry]) -> Snapshot:
        """Swap in a whole new Snapshot (phase transitions)."""
        return self._publish(sort_entries(entries))

    def clear(self) -> Snapshot:
        return self._publish(EMPTY_SNAPSHOT)

    def insert_live(self, entry: Entry) -> Snapshot:
        """
        Add a live entry, keeping at most `capacity` entries.

        The new entry goes in front of the previous order and only the
        first capacity - 1 previous entries survive, so eviction follows
        prior position rather than score.
        """
        candidates = (entry,) + self._snapshot[:self.capacity - 1]
        logger.debug("Live entry %s (%d), %d candidates", entry.identifier, entry.score, len(candidates))
        return self._publish(sort_entries(candidates))

    def insert_player(self, entry: Entry, board: Optional[Iterable[Entry]] = None) -> Snapshot:
        """
        Merge the player's own entry without trimming; may exceed capacity.

        Args:
            entry: The player's row
            board: Entries to merge into instead of the current Snapshot.
                The merged result is published in a single swap.
        """
        base = self._snapshot if board is None else tuple(board)
        return self._publish(sort_entries(base + (entry,)))

    def _publish(self, snapshot: Snapshot) -> Snapshot:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot
