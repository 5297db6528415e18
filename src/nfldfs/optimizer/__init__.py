"""Heuristic lineup construction engine."""

from .builder import (
    Lineup,
    PartialLineup,
    build_lineup,
    eligible_players,
    exposure_cap,
    exposure_caps,
)
from .scoring import score
from .service import BuildOutput, apply_overrides, build_lineups, check_pool, generate_lineups

__all__ = [
    "BuildOutput",
    "Lineup",
    "PartialLineup",
    "apply_overrides",
    "build_lineup",
    "build_lineups",
    "check_pool",
    "eligible_players",
    "exposure_cap",
    "exposure_caps",
    "generate_lineups",
    "score",
]
