"""Input adapters that normalize FanDuel player exports."""

from .fanduel import COLUMN_ALIASES, load_players_csv, parse_players_csv

__all__ = [
    "COLUMN_ALIASES",
    "load_players_csv",
    "parse_players_csv",
]
