"""Pydantic models for API I/O."""

from .lineup import (
    LineupPlayerResponse,
    LineupRequest,
    LineupResponse,
    PlayerUsageResponse,
)
from .batch import LineupBatchResponse
from .players import NewsRequest, PlayersResponse

__all__ = [
    "LineupBatchResponse",
    "LineupPlayerResponse",
    "LineupRequest",
    "LineupResponse",
    "NewsRequest",
    "PlayerUsageResponse",
    "PlayersResponse",
]
