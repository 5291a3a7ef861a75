"""
Core primitives for the Bounce Runner overlay.

This module provides the engine-agnostic pieces the overlay is built on:
run phases and state, and the timer contract used for periodic work.
"""

from core.run_state import Phase, RunState
from core.timer import Timer, TimerHandle, ManualTimer, ManualTimerHandle

__all__ = [
    "Phase",
    "RunState",
    "Timer",
    "TimerHandle",
    "ManualTimer",
    "ManualTimerHandle",
]
