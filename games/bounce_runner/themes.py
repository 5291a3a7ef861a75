"""
Theme table for Bounce Runner.

Each theme is a cosmetic "power" unlocked once the player's best distance
reaches its unlock score. The table is ordered ascending by unlock score;
the first theme is always available.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Theme:
    """A cosmetic unlock tier."""

    id: str
    name: str
    primary: str  # hex color
    accent: str  # hex color
    unlock_score: int  # metres


THEMES: List[Theme] = [
    Theme("violet", "Violet Pulse", "#733DF2", "#00F0FF", 0),
    Theme("cyan", "Cyan Surge", "#00F0FF", "#7CFFCB", 500),
    Theme("lime", "Lime Volt", "#A3FF12", "#F5FF6B", 1000),
    Theme("amber", "Amber Flare", "#FFB020", "#FF6B35", 2000),
    Theme("crimson", "Crimson Nova", "#FF3355", "#FF9AA2", 3500),
    Theme("gold", "Solar Gold", "#FFD700", "#FFF4B0", 5000),
]


def get_theme(theme_id: str) -> Optional[Theme]:
    """Look up a theme by id."""
    for theme in THEMES:
        if theme.id == theme_id:
            return theme
    return None


def theme_for_distance(distance: float, themes: Optional[List[Theme]] = None) -> Theme:
    """Return the highest theme whose unlock score the distance has reached."""
    themes = themes if themes is not None else THEMES
    current = themes[0]
    for theme in themes:
        if distance >= theme.unlock_score:
            current = theme
    return current
