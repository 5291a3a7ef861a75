"""
Game data consumed by the overlay.

Each game is a self-contained submodule under games/<game_name>/ providing
the static tables the overlay reads but never mutates:
- usernames.py: pools of rival handles
- themes.py: the cosmetic unlock tier table
"""
