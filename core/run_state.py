"""
Run phase and per-session run state.

RunState belongs to the session controller; the overlay reads it on every
phase transition and the live-update scheduler advances its window_start
while the run is active.
"""

from dataclasses import dataclass
from enum import Enum


class Phase(Enum):
    """Phases of a Bounce Runner session."""
    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class RunState:
    """Mutable state of the current run."""

    phase: Phase = Phase.MENU
    player_score: float = 0.0  # running distance, metres
    high_score: float = 0.0  # best-ever distance before this run ended
    window_start: int = 0  # only meaningful while PLAYING
    coins: int = 0
    max_combo: int = 0

    @property
    def best_score(self) -> float:
        return max(self.player_score, self.high_score)
