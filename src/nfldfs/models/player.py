"""Canonical player models shared across ingestion, news and optimizer layers."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


Position = Literal["QB", "RB", "WR", "TE", "DEF"]
NewsIndicator = Literal["smash", "upgrade", "monitor", "downgrade", "weather_risk"]
Sentiment = Literal["positive", "negative", "neutral"]

POSITIONS: tuple[str, ...] = ("QB", "RB", "WR", "TE", "DEF")


class NewsItem(BaseModel):
    """Single piece of rationale attached to a player by the news analyzer."""

    item_id: str
    player_id: str
    text: str
    source: str
    timestamp: datetime
    sentiment: Sentiment
    impact: float

    model_config = ConfigDict(frozen=True)


class Player(BaseModel):
    """Normalized FanDuel NFL player with the editable optimizer fields."""

    player_id: str = Field(..., min_length=1)
    position: Position
    first_name: str = ""
    last_name: str = ""
    fppg: float = Field(default=0.0, ge=0.0)
    played: int = Field(default=0, ge=0)
    salary: int = Field(..., ge=0)
    game: str = ""
    team: str = ""
    opponent: str = ""
    injury_indicator: str = ""
    injury_details: str = ""
    roster_position: str = ""

    projection: float = 0.0
    projection_adjustment: float = 0.0
    is_locked: bool = False
    is_excluded: bool = False
    exposure_limit: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    news_indicator: Optional[NewsIndicator] = None
    news_items: List[NewsItem] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _default_projection(cls, data: Any) -> Any:
        # The editable projection starts out as the site baseline.
        if isinstance(data, dict) and data.get("projection") is None:
            data = dict(data)
            data["projection"] = data.get("fppg", 0.0) or 0.0
        return data

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def effective_projection(self) -> float:
        return self.projection + self.projection_adjustment

    @property
    def is_out(self) -> bool:
        return self.injury_indicator.strip().upper() == "O"
