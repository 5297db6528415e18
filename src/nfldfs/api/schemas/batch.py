from __future__ import annotations

from pydantic import BaseModel, Field

from .lineup import LineupResponse, PlayerUsageResponse


class LineupBatchResponse(BaseModel):
    run_id: str
    requested: int
    attempts: int
    lineups: list[LineupResponse]
    player_usage: list[PlayerUsageResponse]
    warnings: list[str] = Field(default_factory=list)
    message: str | None = None
