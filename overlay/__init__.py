"""
Bounce Runner overlay - simulated live leaderboard and run summary.

While a run is active the overlay shows a rotating window of rival scores
that keeps changing; when the run ends it ranks the player against a
fresh field and reports unlock progress.

Components:
- leaderboard: generation, storage, windowing, ranking, milestones, live updates
- session: phase state machine wiring the components together
- config: overlay configuration
- display: Rich terminal rendering
- cli: scripted simulation from the command line
"""

from overlay.config import OverlayConfig, create_config, load_config
from overlay.session import InvalidTransitionError, OverlaySession, OverlayView

__all__ = [
    "OverlayConfig",
    "create_config",
    "load_config",
    "InvalidTransitionError",
    "OverlaySession",
    "OverlayView",
]
