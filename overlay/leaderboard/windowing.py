"""Selection of the slice of a Snapshot that the presentation layer shows."""

from core.run_state import Phase
from overlay.leaderboard.data import Snapshot

LIVE_WINDOW_SIZE = 4
SUMMARY_WINDOW_SIZE = 10


def visible_entries(
    snapshot: Snapshot,
    window_start: int,
    phase: Phase,
    live_size: int = LIVE_WINDOW_SIZE,
    summary_size: int = SUMMARY_WINDOW_SIZE,
) -> Snapshot:
    """
    Entries visible for the given phase.

    PLAYING shows live_size entries from window_start (fewer near the end,
    no wraparound); GAME_OVER shows the top summary_size; MENU shows nothing.
    """
    if phase == Phase.PLAYING:
        start = max(window_start, 0)
        return snapshot[start:start + live_size]
    if phase == Phase.GAME_OVER:
        return snapshot[:summary_size]
    return ()


def next_window_start(window_start: int, store_size: int, live_size: int = LIVE_WINDOW_SIZE) -> int:
    """Advance the live window by one, cycling over max(1, size - (live_size - 1)) positions."""
    return (window_start + 1) % max(1, store_size - (live_size - 1))
