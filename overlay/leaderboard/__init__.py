"""
Simulated multiplayer leaderboard for the Bounce Runner overlay.

Components:
- data: Entry, Snapshot and score clamping
- generator: synthetic rival batches anchored to a reference score
- store: the single owned Snapshot with capacity-bounded updates
- windowing: the slice shown for the active phase
- ranking / milestones: rank and unlock-progress lookups
- scheduler: the periodic live-update driver

Programmatic
------------
    from overlay.leaderboard import EntryGenerator, LeaderboardStore, find_rank

    store = LeaderboardStore()
    store.replace(EntryGenerator(names).generate(800))
    store.insert_player(Entry("YOU", 800, True))
    find_rank(store.snapshot, "YOU")
"""

from overlay.leaderboard.data import (
    MIN_SCORE,
    Entry,
    Snapshot,
    clamp_score,
    sort_entries,
)
from overlay.leaderboard.generator import EntryGenerator
from overlay.leaderboard.store import LeaderboardStore
from overlay.leaderboard.windowing import visible_entries, next_window_start
from overlay.leaderboard.ranking import find_rank, rank_label
from overlay.leaderboard.milestones import (
    Milestone,
    next_milestone,
    newly_unlocked,
    unlocked_tiers,
)
from overlay.leaderboard.scheduler import LiveUpdateScheduler

__all__ = [
    "MIN_SCORE",
    "Entry",
    "Snapshot",
    "clamp_score",
    "sort_entries",
    "EntryGenerator",
    "LeaderboardStore",
    "visible_entries",
    "next_window_start",
    "find_rank",
    "rank_label",
    "Milestone",
    "next_milestone",
    "newly_unlocked",
    "unlocked_tiers",
    "LiveUpdateScheduler",
]
