#!/usr/bin/env python3
"""
Command-line interface for the Bounce Runner overlay.

Usage:
    bounce-overlay simulate --final-score 1800 --high-score 900 --seed 7
    bounce-overlay simulate --ticks 5 --json
    bounce-overlay themes
"""

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from core.timer import ManualTimer
from games.bounce_runner.themes import THEMES
from overlay.config import OverlayConfig, config_summary, load_config
from overlay.display import render_live_panel, render_summary
from overlay.session import OverlaySession


def cmd_simulate(args):
    """Play a scripted run and render the overlay at every tick."""
    if args.config:
        config = load_config(args.config)
        if args.seed is not None:
            config = config.model_copy(update={"seed": args.seed})
    else:
        config = OverlayConfig(seed=args.seed)

    if config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    console = Console()
    timer = ManualTimer()
    show = not (args.json or args.quiet)

    with OverlaySession(timer=timer, config=config) as session:
        session.start_run(player_score=0, high_score=args.high_score)

        for i in range(1, args.ticks + 1):
            distance = args.final_score * i / (args.ticks + 1)
            session.update_score(distance, coins=i // 2, combo=i % 5 + 1)
            timer.advance(config.tick_interval)
            if show:
                console.rule(f"[dim]t = {timer.now:.0f}s[/]")
                render_live_panel(session.view(), console)

        view = session.end_run(player_score=args.final_score, high_score=args.high_score)

    if args.json:
        print(json.dumps({"config": config_summary(config), "view": view.to_dict()}, indent=2))
    else:
        render_summary(view, console, themes=session.themes)


def cmd_themes(args):
    """List the unlock tier table."""
    table = Table(title="Powers")
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Unlock", justify="right")
    for theme in THEMES:
        table.add_row(theme.id, f"[{theme.primary}]{theme.name}[/]", f"{theme.unlock_score:,}m")
    Console().print(table)


def main():
    parser = argparse.ArgumentParser(
        description="Bounce Runner overlay: simulated live leaderboard"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Simulate command
    sim_parser = subparsers.add_parser("simulate", help="Run a scripted session")
    sim_parser.add_argument("--config", "-c", help="Config file (YAML or JSON)")
    sim_parser.add_argument("--seed", type=int, help="Random seed")
    sim_parser.add_argument("--final-score", type=float, default=1200.0, help="Distance reached")
    sim_parser.add_argument("--high-score", type=float, default=800.0, help="Best distance before this run")
    sim_parser.add_argument("--ticks", type=int, default=6, help="Live updates before the run ends")
    sim_parser.add_argument("--quiet", "-q", action="store_true", help="Only show the summary")
    sim_parser.add_argument("--json", action="store_true", help="Output the final view as JSON")

    # Themes command
    subparsers.add_parser("themes", help="List unlockable powers")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "themes":
        cmd_themes(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
