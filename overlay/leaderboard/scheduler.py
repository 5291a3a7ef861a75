"""
Live-update scheduler for the PLAYING phase.

Every tick optionally injects one synthetic rival scored around the
player's current distance, then rotates the live window by one position.
Ticks run synchronously to completion and never overlap.

The scheduler is a scoped resource: start() acquires a timer handle and
stop() cancels it. Each start() bumps a generation token, and a fired
callback carrying an older token does nothing, so a tick queued before
stop() can never touch a discarded board.
"""

import logging
import random
from typing import Callable, Optional, Sequence

from core.run_state import RunState
from core.timer import Timer
from overlay.leaderboard.data import Entry, clamp_score
from overlay.leaderboard.store import LeaderboardStore
from overlay.leaderboard.windowing import LIVE_WINDOW_SIZE, next_window_start

logger = logging.getLogger(__name__)


class LiveUpdateScheduler:
    """Periodic driver of live leaderboard activity."""

    def __init__(
        self,
        store: LeaderboardStore,
        state: RunState,
        names: Sequence[str],
        timer: Timer,
        rng: Optional[random.Random] = None,
        interval: float = 3.0,
        insert_probability: float = 0.5,
        live_window_size: int = LIVE_WINDOW_SIZE,
        score_source: Optional[Callable[[], float]] = None,
        on_tick: Optional[Callable[[], None]] = None,
    ):
        if not names:
            raise ValueError("Name pool must not be empty")
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._store = store
        self._state = state
        self._names = list(names)
        self._timer = timer
        self._rng = rng if rng is not None else random.Random()
        self.interval = interval
        self.insert_probability = insert_probability
        self.live_window_size = live_window_size
        self._score_source = score_source or (lambda: state.player_score)
        self._on_tick = on_tick

        self._handle = None
        self._generation = 0
        self._running = False
        self._in_tick = False
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Begin ticking every `interval` seconds. No-op if already running."""
        if self._running:
            return
        self._generation += 1
        self._running = True
        self._schedule()
        logger.debug("Live updates started (generation %d)", self._generation)

    def stop(self) -> None:
        """Cancel the pending tick. Safe to call repeatedly."""
        if not self._running:
            return
        self._running = False
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        logger.debug("Live updates stopped after %d ticks", self.ticks)

    def __enter__(self) -> "LiveUpdateScheduler":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def tick(self) -> bool:
        """
        Run one update.

        Returns:
            False if the scheduler is stopped or a tick is already running
        """
        if not self._running or self._in_tick:
            return False
        self._in_tick = True
        try:
            if self._rng.random() < self.insert_probability:
                entry = Entry(
                    identifier=self._rng.choice(self._names),
                    score=clamp_score(self._score_source() * (0.5 + self._rng.random())),
                    is_live=True,
                )
                self._store.insert_live(entry)

            self._state.window_start = next_window_start(
                self._state.window_start, len(self._store), self.live_window_size
            )
            self.ticks += 1
        finally:
            self._in_tick = False
        if self._on_tick is not None:
            self._on_tick()
        return True

    def _schedule(self) -> None:
        self._handle = self._timer.call_later(self.interval, self._fire, self._generation)

    def _fire(self, generation: int) -> None:
        if generation != self._generation or not self._running:
            return
        self._handle = None
        try:
            self.tick()
        finally:
            # the tick itself may have stopped us
            if generation == self._generation and self._running:
                self._schedule()
