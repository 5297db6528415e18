from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from nfldfs.config import NewsMode
from nfldfs.models import Player


class PlayersResponse(BaseModel):
    count: int
    players: List[Player]


class NewsRequest(BaseModel):
    players: List[Player] = Field(..., min_length=1)
    mode: NewsMode = "auto"
    seed: int | None = None
