"""Simulated news enrichment for player projections."""

from .analyzer import (
    NewsAnalysis,
    analyze_player,
    analyze_player_news,
    indicator_emoji,
    indicator_label,
)

__all__ = [
    "NewsAnalysis",
    "analyze_player",
    "analyze_player_news",
    "indicator_emoji",
    "indicator_label",
]
