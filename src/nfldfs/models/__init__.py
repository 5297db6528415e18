"""Data models shared across the package."""

from .player import (
    POSITIONS,
    NewsIndicator,
    NewsItem,
    Player,
    Position,
    Sentiment,
)

__all__ = [
    "POSITIONS",
    "NewsIndicator",
    "NewsItem",
    "Player",
    "Position",
    "Sentiment",
]
