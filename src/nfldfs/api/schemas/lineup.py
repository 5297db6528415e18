from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from nfldfs.config import OptimizationSettings
from nfldfs.models import Player


class LineupPlayerResponse(BaseModel):
    slot: str
    player_id: str
    name: str
    team: str
    position: str
    salary: int
    projection: float


class LineupResponse(BaseModel):
    lineup_id: str
    salary: int
    projection: float
    players: List[LineupPlayerResponse]


class LineupRequest(BaseModel):
    players: List[Player] = Field(..., min_length=1)
    settings: OptimizationSettings = Field(default_factory=OptimizationSettings)
    lock_player_ids: list[str] | None = None
    exclude_player_ids: list[str] | None = None
    exposure_limits: Dict[str, float] | None = None
    seed: int | None = None


class PlayerUsageResponse(BaseModel):
    player_id: str
    name: str
    team: str
    position: str
    count: int
    exposure: float
