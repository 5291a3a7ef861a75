"""Player rank lookup."""

from typing import Optional

from overlay.leaderboard.data import Snapshot


def find_rank(snapshot: Snapshot, identifier: str) -> Optional[int]:
    """Return the 1-based position of the first entry named identifier, or None."""
    for index, entry in enumerate(snapshot):
        if entry.identifier == identifier:
            return index + 1
    return None


def rank_label(rank: Optional[int], total: int) -> str:
    if rank is None:
        return ""
    if rank == 1:
        return "CHAMPION"
    return f"Out of {total} players"
