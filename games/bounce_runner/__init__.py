"""
Bounce Runner static game data.

Provides the collaborators the overlay reads but never mutates:
- usernames.py: fictional rival handle pools
- themes.py: the cosmetic unlock tier table
"""

from games.bounce_runner.themes import THEMES, Theme, get_theme, theme_for_distance
from games.bounce_runner.usernames import NAME_LISTS, get_name_pool

__all__ = [
    "THEMES",
    "Theme",
    "get_theme",
    "theme_for_distance",
    "NAME_LISTS",
    "get_name_pool",
]
