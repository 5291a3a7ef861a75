"""
Session controller for the Bounce Runner overlay.

Drives the phase cycle MENU -> PLAYING -> GAME_OVER -> PLAYING -> ... and
wires the leaderboard components together:

  - entering PLAYING reseeds the board around the starting score, resets
    the live window and starts the live-update scheduler;
  - entering GAME_OVER cancels the scheduler, reseeds around the best
    score, merges the player's row and resolves rank and milestones.

The board is replaced wholesale on every transition; nothing from one
phase's board survives into the next.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from core.run_state import Phase, RunState
from core.timer import Timer
from games.bounce_runner.themes import THEMES, Theme, theme_for_distance
from games.bounce_runner.usernames import get_name_pool
from overlay.config import OverlayConfig
from overlay.leaderboard.data import Entry, Snapshot
from overlay.leaderboard.generator import EntryGenerator
from overlay.leaderboard.milestones import (
    Milestone,
    newly_unlocked,
    next_milestone,
    unlocked_tiers,
)
from overlay.leaderboard.ranking import find_rank, rank_label
from overlay.leaderboard.scheduler import LiveUpdateScheduler
from overlay.leaderboard.store import LeaderboardStore
from overlay.leaderboard.windowing import visible_entries

logger = logging.getLogger(__name__)


class InvalidTransitionError(ValueError):
    """Raised when a phase transition is requested from the wrong phase."""


@dataclass(frozen=True)
class OverlayView:
    """Everything the presentation layer needs for one frame."""

    phase: Phase
    entries: Snapshot
    player_identifier: str
    player_score: float
    high_score: float
    best_score: float
    window_start: int = 0
    total_entries: int = 0
    rank: Optional[int] = None
    rank_label: str = ""
    next_milestone: Optional[Milestone] = None
    milestone_progress: float = 0.0
    newly_unlocked: Optional[Theme] = None
    unlocked_tiers: Tuple[Theme, ...] = ()
    active_tier: Optional[Theme] = None
    is_new_record: bool = False
    coins: int = 0
    max_combo: int = 0

    def to_dict(self) -> Dict[str, Any]:
        milestone = None
        if self.next_milestone is not None:
            milestone = {
                "tier": self.next_milestone.tier.id,
                "unlock_score": self.next_milestone.tier.unlock_score,
                "remaining": self.next_milestone.remaining,
                "progress": round(self.milestone_progress, 1),
            }
        return {
            "phase": self.phase.value,
            "entries": [e.to_dict() for e in self.entries],
            "player_score": self.player_score,
            "high_score": self.high_score,
            "best_score": self.best_score,
            "total_entries": self.total_entries,
            "rank": self.rank,
            "rank_label": self.rank_label,
            "next_milestone": milestone,
            "newly_unlocked": self.newly_unlocked.id if self.newly_unlocked else None,
            "unlocked_tiers": [t.id for t in self.unlocked_tiers],
            "active_tier": self.active_tier.id if self.active_tier else None,
            "is_new_record": self.is_new_record,
            "coins": self.coins,
            "max_combo": self.max_combo,
        }


def _finite(value: Any, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = float("nan")
    if not math.isfinite(number):
        logger.warning("Non-finite %s %r treated as 0", name, value)
        return 0.0
    return number


@dataclass
class _RunSummary:
    rank: Optional[int] = None
    newly_unlocked: Optional[Theme] = None
    is_new_record: bool = False


class OverlaySession:
    """
    Owns the leaderboard for one player session.

    Example:
        timer = ManualTimer()
        with OverlaySession(timer=timer, config=OverlayConfig(seed=7)) as session:
            session.start_run()
            session.update_score(420)
            timer.advance(3.0)
            session.end_run(player_score=800, high_score=500)
            print(session.view().rank)
    """

    def __init__(
        self,
        timer: Timer,
        config: Optional[OverlayConfig] = None,
        rng: Optional[random.Random] = None,
        themes: Optional[Sequence[Theme]] = None,
        names: Optional[Sequence[str]] = None,
    ):
        self.config = config or OverlayConfig()
        self._timer = timer
        self._rng = rng if rng is not None else random.Random(self.config.seed)
        self.themes: List[Theme] = list(themes if themes is not None else THEMES)
        self.names: List[str] = list(names if names is not None else get_name_pool(self.config.name_list))
        if self.config.player_identifier in self.names:
            raise ValueError(
                f"player_identifier {self.config.player_identifier!r} collides with a rival name"
            )

        self.state = RunState()
        self.store = LeaderboardStore(capacity=self.config.live_capacity)
        self.generator = EntryGenerator(
            names=self.names,
            rng=self._rng,
            batch_size=self.config.batch_size,
            live_probability=self.config.live_flag_probability,
            fallback_reference=self.config.fallback_reference_score,
            reference_threshold=self.config.reference_threshold,
            variance_ratio=self.config.variance_ratio,
            variance_skew=self.config.variance_skew,
        )
        self._scheduler: Optional[LiveUpdateScheduler] = None
        self._summary = _RunSummary()
        self._view_listeners: List[Callable[[OverlayView], None]] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def scheduler(self) -> Optional[LiveUpdateScheduler]:
        return self._scheduler

    def __enter__(self) -> "OverlaySession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the live-update timer. Safe to call more than once."""
        self._stop_scheduler()

    def subscribe(self, listener: Callable[[OverlayView], None]) -> Callable[[], None]:
        """
        Register a callable that receives a fresh view after every live tick
        and every phase transition.

        Returns:
            A callable that removes the listener again
        """
        self._view_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._view_listeners:
                self._view_listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Phase transitions
    # ------------------------------------------------------------------

    def start_run(self, player_score: float = 0.0, high_score: Optional[float] = None) -> OverlayView:
        """MENU or GAME_OVER -> PLAYING."""
        if self.state.phase == Phase.PLAYING:
            raise InvalidTransitionError("A run is already in progress")

        self._stop_scheduler()
        self.state.player_score = _finite(player_score, "player_score")
        if high_score is not None:
            self.state.high_score = _finite(high_score, "high_score")
        self.state.window_start = 0
        self.state.coins = 0
        self.state.max_combo = 0
        self._summary = _RunSummary()

        self.store.replace(self.generator.generate(self.state.player_score))
        self.state.phase = Phase.PLAYING

        self._scheduler = LiveUpdateScheduler(
            store=self.store,
            state=self.state,
            names=self.names,
            timer=self._timer,
            rng=self._rng,
            interval=self.config.tick_interval,
            insert_probability=self.config.live_insert_probability,
            live_window_size=self.config.live_window_size,
            on_tick=self._publish,
        )
        self._scheduler.start()
        logger.info("Run started (board of %d, best %.0f)", len(self.store), self.state.high_score)
        return self._publish()

    def update_score(self, player_score: float, coins: Optional[int] = None, combo: Optional[int] = None) -> None:
        """Report the running distance (and optional run stats) during PLAYING."""
        if self.state.phase != Phase.PLAYING:
            raise InvalidTransitionError("Scores can only be updated during a run")
        self.state.player_score = _finite(player_score, "player_score")
        if coins is not None:
            self.state.coins = coins
        if combo is not None:
            self.state.max_combo = max(self.state.max_combo, combo)

    def end_run(self, player_score: float, high_score: float) -> OverlayView:
        """
        PLAYING -> GAME_OVER.

        Args:
            player_score: Final distance of the run
            high_score: Best distance before this run
        """
        if self.state.phase != Phase.PLAYING:
            raise InvalidTransitionError("No run in progress")

        self._stop_scheduler()
        self.state.player_score = _finite(player_score, "player_score")
        self.state.high_score = _finite(high_score, "high_score")
        self.state.phase = Phase.GAME_OVER

        self.store.insert_player(
            Entry(
                identifier=self.config.player_identifier,
                score=self.state.player_score,
                is_live=True,
            ),
            board=self.generator.generate(self.state.best_score),
        )

        self._summary = _RunSummary(
            rank=find_rank(self.store.snapshot, self.config.player_identifier),
            newly_unlocked=newly_unlocked(self.state.high_score, self.state.player_score, self.themes),
            is_new_record=self.state.player_score > self.state.high_score,
        )
        logger.info(
            "Run ended at %.0f (rank %s of %d)",
            self.state.player_score, self._summary.rank, len(self.store),
        )
        return self._publish()

    def return_to_menu(self) -> OverlayView:
        """GAME_OVER -> MENU."""
        if self.state.phase == Phase.PLAYING:
            raise InvalidTransitionError("End the run before returning to the menu")
        self._stop_scheduler()
        self.state.phase = Phase.MENU
        self.state.window_start = 0
        self.store.clear()
        return self._publish()

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def view(self) -> OverlayView:
        """Build the immutable view for the current phase."""
        state = self.state
        snapshot = self.store.snapshot
        best = state.best_score
        milestone = next_milestone(best, self.themes)
        unlocked = tuple(unlocked_tiers(best, self.themes))

        if state.phase == Phase.PLAYING:
            active = theme_for_distance(state.player_score, self.themes) if self.themes else None
        else:
            active = unlocked[-1] if unlocked else (self.themes[0] if self.themes else None)

        rank = self._summary.rank if state.phase == Phase.GAME_OVER else None
        return OverlayView(
            phase=state.phase,
            entries=visible_entries(
                snapshot,
                state.window_start,
                state.phase,
                live_size=self.config.live_window_size,
                summary_size=self.config.summary_window_size,
            ),
            player_identifier=self.config.player_identifier,
            player_score=state.player_score,
            high_score=state.high_score,
            best_score=best,
            window_start=state.window_start,
            total_entries=len(snapshot),
            rank=rank,
            rank_label=rank_label(rank, len(snapshot)),
            next_milestone=milestone,
            milestone_progress=milestone.progress(best) if milestone else 100.0,
            newly_unlocked=self._summary.newly_unlocked if state.phase == Phase.GAME_OVER else None,
            unlocked_tiers=unlocked,
            active_tier=active,
            is_new_record=self._summary.is_new_record if state.phase == Phase.GAME_OVER else False,
            coins=state.coins,
            max_combo=state.max_combo,
        )

    def _stop_scheduler(self) -> None:
        if self._scheduler is not None:
            self._scheduler.stop()
            self._scheduler = None

    def _publish(self) -> OverlayView:
        view = self.view()
        for listener in list(self._view_listeners):
            listener(view)
        return view
