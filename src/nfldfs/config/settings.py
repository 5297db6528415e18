"""Caller-supplied settings for a lineup generation run."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .roster import MIN_SALARY_DEFAULT, SALARY_CAP


NewsMode = Literal["auto", "suggested", "off"]

# Bound on build attempts per requested lineup.
ATTEMPTS_PER_LINEUP = 50


class OptimizationSettings(BaseModel):
    """Immutable knobs for one batch run.

    ``max_player_exposure`` is the global exposure percentage; a player's own
    ``exposure_limit`` overrides it. ``min_salary_used`` is a target only and
    never rejects a lineup. ``allow_qb_with_opp_def`` is carried for callers
    but not consulted by the builder.
    """

    number_of_lineups: int = Field(default=20, ge=1, le=150)
    max_player_exposure: float = Field(default=100.0, ge=0.0, le=100.0)
    min_salary_used: int = Field(default=MIN_SALARY_DEFAULT, ge=0, le=SALARY_CAP)
    randomness: float = Field(default=5.0, ge=0.0, le=20.0)
    min_unique_players: int = Field(default=3, ge=0, le=9)
    allow_qb_with_opp_def: bool = False
    news_mode: NewsMode = "auto"

    model_config = ConfigDict(frozen=True)

    @property
    def max_attempts(self) -> int:
        return self.number_of_lineups * ATTEMPTS_PER_LINEUP
