"""
Rich terminal display for the Bounce Runner overlay.

Renders an OverlayView in one of two layouts:
  1. Live scores panel during a run (rotating window, live markers)
  2. Game-over summary: global leaderboard, session summary, powers grid,
     next-power progress and rank
"""

from typing import Optional, Sequence

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from core.run_state import Phase
from games.bounce_runner.themes import THEMES, Theme, theme_for_distance
from overlay.session import OverlayView


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _metres(value: float) -> str:
    return f"{int(value):,}m"


def _score_markup(score: int, themes: Sequence[Theme]) -> str:
    if not themes:
        return f"[bold]{_metres(score)}[/]"
    return f"[bold {theme_for_distance(score, themes).primary}]{_metres(score)}[/]"


def _rank_badge(rank: int, is_player: bool) -> str:
    if is_player:
        return f"[bold yellow]#{rank}[/]"
    if rank == 1:
        return "[bold gold1]#1[/]"
    return f"[dim]#{rank}[/]"


def _live_marker(is_live: bool) -> str:
    return "[green]●[/] " if is_live else ""


# ---------------------------------------------------------------------------
# Live panel
# ---------------------------------------------------------------------------


def render_live_panel(
    view: OverlayView,
    console: Optional[Console] = None,
    themes: Optional[Sequence[Theme]] = None,
) -> None:
    """Render the in-run live scores panel and distance readout."""
    if console is None:
        console = Console()
    themes = themes if themes is not None else THEMES

    board = Table(box=None, show_header=False, pad_edge=False, expand=True)
    board.add_column("Name", ratio=3, no_wrap=True)
    board.add_column("Score", ratio=2, justify="right")
    for entry in view.entries:
        style = "on dark_green" if entry.is_live else ""
        board.add_row(
            f"{_live_marker(entry.is_live)}{entry.identifier}",
            _score_markup(entry.score, themes),
            style=style,
        )

    active = view.active_tier
    stats = Text.assemble(
        ("Distance ", "dim"),
        (_metres(view.player_score), f"bold {active.primary}" if active else "bold"),
        ("   Best ", "dim"),
        (_metres(view.high_score), "bold magenta"),
        ("   Coins ", "dim"),
        (str(view.coins), "bold yellow"),
    )
    if active is not None:
        stats.append("   Power ", style="dim")
        stats.append(active.name, style=active.primary)

    parts = [board, Text(""), stats]
    if view.next_milestone is not None:
        tier = view.next_milestone.tier
        parts.append(Text.assemble(
            ("Next: ", "dim"), (tier.name, tier.primary),
            (f"  {_metres(tier.unlock_score)}", "dim"),
        ))
        parts.append(ProgressBar(total=100, completed=view.milestone_progress, complete_style=tier.primary))

    console.print(Panel(
        Group(*parts),
        title="[red]●[/] [dim]LIVE SCORES[/]",
        border_style="grey37",
        expand=False,
        width=48,
    ))


# ---------------------------------------------------------------------------
# Game-over summary
# ---------------------------------------------------------------------------


def render_summary(
    view: OverlayView,
    console: Optional[Console] = None,
    themes: Optional[Sequence[Theme]] = None,
) -> None:
    """Render the complete game-over screen to the terminal."""
    if console is None:
        console = Console()
    themes = themes if themes is not None else THEMES

    # === Header ============================================================
    console.print()
    console.print(Text("CONNECTION LOST", style="bold red"), justify="center")
    console.print(Text("TERMINATED", style="bold bright_white"), justify="center")
    if view.newly_unlocked is not None:
        tier = view.newly_unlocked
        console.print(
            Text(f" NEW POWER UNLOCKED: {tier.name.upper()} ", style=f"bold black on {tier.primary}"),
            justify="center",
        )
    console.print()

    # === Global leaderboard ================================================
    board = Table(
        box=box.ROUNDED,
        show_header=True,
        header_style="bold dim",
        title="[bold]Global Leaderboard[/]",
    )
    board.add_column("#", width=4, justify="right")
    board.add_column("Player", width=18)
    board.add_column("Distance", width=10, justify="right")

    for idx, entry in enumerate(view.entries):
        is_player = entry.identifier == view.player_identifier
        name = (
            f"[bold yellow]{entry.identifier}[/]"
            if is_player
            else f"{_live_marker(entry.is_live)}{entry.identifier}"
        )
        board.add_row(
            _rank_badge(idx + 1, is_player),
            name,
            _score_markup(entry.score, themes),
            style="on grey23" if is_player else "",
        )

    # === Session summary ===================================================
    summary = Table(box=box.ROUNDED, show_header=False, title="[bold]Session Summary[/]")
    summary.add_column("Stat", style="dim")
    summary.add_column("Value", justify="right", no_wrap=True)
    distance = f"[bold]{_metres(view.player_score)}[/]"
    if view.is_new_record:
        distance += " [yellow]NEW RECORD![/]"
    summary.add_row("Distance Traveled", distance)
    summary.add_row("All-Time Best", _metres(view.best_score))
    summary.add_row("Powerups Collected", f"[yellow]{view.coins} coins[/]")
    if view.max_combo > 1:
        summary.add_row("Max Combo", f"[cyan]{view.max_combo}x[/]")
    if view.active_tier is not None:
        summary.add_row("Power Level", f"[{view.active_tier.primary}]{view.active_tier.name}[/]")

    console.print(board)
    console.print()
    console.print(summary)
    console.print()

    # === Powers grid =======================================================
    unlocked_ids = {t.id for t in view.unlocked_tiers}
    powers = Table(box=box.SIMPLE, show_header=False, title="[bold]Your Powers[/]")
    for _ in range(3):
        powers.add_column(width=18, justify="center")
    cells = []
    for theme in themes:
        if theme.id in unlocked_ids:
            marker = " ★" if view.active_tier is not None and theme.id == view.active_tier.id else ""
            cells.append(f"[{theme.primary}]■ {theme.name}{marker}[/]")
        else:
            cells.append(f"[dim]□ {theme.name} ({_metres(theme.unlock_score)})[/]")
    for i in range(0, len(cells), 3):
        row = cells[i:i + 3]
        powers.add_row(*(row + [""] * (3 - len(row))))
    console.print(powers)

    # === Next power and rank ==============================================
    if view.next_milestone is not None:
        tier = view.next_milestone.tier
        console.print(Text.assemble(
            ("Next Power: ", "dim"), (tier.name, tier.primary),
            (f"  {_metres(tier.unlock_score)}", "dim"),
        ))
        console.print(ProgressBar(
            total=100, completed=view.milestone_progress, width=48, complete_style=tier.primary,
        ))
        console.print(f"[dim]{_metres(view.next_milestone.remaining)} remaining[/]")
        console.print()

    if view.rank is not None:
        label = "CHAMPION!" if view.rank == 1 else view.rank_label
        console.print(Panel(
            Text.assemble(
                ("Your Rank  ", "dim"),
                (f"#{view.rank}", "bold yellow"),
                "\n",
                (label, "dim"),
            ),
            border_style="magenta",
            expand=False,
        ))
    console.print()


def render_view(
    view: OverlayView,
    console: Optional[Console] = None,
    themes: Optional[Sequence[Theme]] = None,
) -> None:
    """Render whichever layout fits the view's phase."""
    if view.phase == Phase.PLAYING:
        render_live_panel(view, console, themes=themes)
    elif view.phase == Phase.GAME_OVER:
        render_summary(view, console, themes=themes)
