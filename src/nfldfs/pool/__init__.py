"""Lineup pool utilities (usage, export)."""

from .export import ContestExportError, export_lineups_to_csv
from .usage import PlayerUsage, calculate_exposures

__all__ = [
    "ContestExportError",
    "PlayerUsage",
    "calculate_exposures",
    "export_lineups_to_csv",
]
