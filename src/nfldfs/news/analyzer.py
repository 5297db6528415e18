"""Simulated news signals that nudge player projections.

Stands in for a real news/injury/weather feed: each player gets zero or more
``NewsItem`` entries, an optional indicator and a projection adjustment drawn
from matchup, weather and role heuristics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
import random
from typing import List, Mapping, Optional, Sequence

from nfldfs.config import NewsMode
from nfldfs.models import NewsIndicator, NewsItem, Player


logger = logging.getLogger(__name__)

OUTDOOR_TEAMS = frozenset({
    "BUF", "GB", "CHI", "NE", "CLE", "PIT", "DEN", "KC", "TEN", "JAX", "CAR",
    "WAS", "PHI", "NYG", "NYJ", "MIA", "BAL", "CIN", "SF", "SEA", "TB",
})

# Rank of each defense against a position; high numbers are soft matchups.
DEFENSE_RANKINGS: Mapping[str, Mapping[str, int]] = {
    "QB": {"CAR": 30, "DEN": 28, "NE": 25, "LV": 24, "NYG": 22, "BUF": 5, "SF": 3, "DAL": 4},
    "RB": {"LAC": 29, "DET": 27, "MIA": 26, "HOU": 24, "TB": 22, "NO": 3, "BAL": 4, "SF": 5},
    "WR": {"CAR": 32, "NYG": 30, "DEN": 28, "CIN": 26, "TEN": 25, "BUF": 4, "SF": 2, "NE": 6},
    "TE": {"MIN": 30, "KC": 28, "SEA": 27, "DET": 25, "CLE": 23, "PHI": 3, "SF": 4, "CHI": 5},
}

GOOD_MATCHUP_RANK = 24
BAD_MATCHUP_RANK = 6

INDICATOR_LABELS: Mapping[str, str] = {
    "smash": "Smash Spot",
    "upgrade": "Upgrade",
    "monitor": "Monitor",
    "downgrade": "Downgrade",
    "weather_risk": "Weather Risk",
}

INDICATOR_EMOJI: Mapping[str, str] = {
    "smash": "\U0001F525",
    "upgrade": "\U0001F4C8",
    "monitor": "\u26a0\ufe0f",
    "downgrade": "\U0001F4C9",
    "weather_risk": "\u2744\ufe0f",
}


@dataclass
class NewsAnalysis:
    indicator: Optional[NewsIndicator] = None
    adjustment: float = 0.0
    items: List[NewsItem] = field(default_factory=list)


def indicator_label(indicator: Optional[str]) -> str:
    return INDICATOR_LABELS.get(indicator or "", "")


def indicator_emoji(indicator: Optional[str]) -> str:
    return INDICATOR_EMOJI.get(indicator or "", "")


def analyze_player(
    player: Player,
    rng: random.Random,
    *,
    now: Optional[datetime] = None,
) -> NewsAnalysis:
    """Draw the simulated news for a single player."""

    timestamp = now or datetime.now(timezone.utc)
    items: List[NewsItem] = []
    adjustment = 0.0
    indicator: Optional[NewsIndicator] = None

    def add(suffix: str, text: str, source: str, sentiment: str, impact: float) -> None:
        items.append(
            NewsItem(
                item_id=f"news-{player.player_id}-{suffix}",
                player_id=player.player_id,
                text=text,
                source=source,
                timestamp=timestamp,
                sentiment=sentiment,
                impact=impact,
            )
        )

    weather_risk = player.team in OUTDOOR_TEAMS and rng.random() > 0.7

    rank = DEFENSE_RANKINGS.get(player.position, {}).get(player.opponent)
    good_matchup = rank is not None and rank >= GOOD_MATCHUP_RANK
    bad_matchup = rank is not None and rank <= BAD_MATCHUP_RANK

    if good_matchup and not weather_risk and rng.random() > 0.4:
        indicator = "smash" if rng.random() > 0.5 else "upgrade"
        if indicator == "smash":
            adjustment = 3.0 + rng.random() * 2
        else:
            adjustment = 1.5 + rng.random() * 2
        allowed = 20 + rng.random() * 15
        add(
            "matchup",
            f"Facing {player.opponent} defense allowing most {player.position} points ({allowed:.1f} PPG)",
            "Matchup Analysis",
            "positive",
            adjustment * 0.5,
        )
    elif bad_matchup and rng.random() > 0.5:
        indicator = "downgrade"
        adjustment = -1.0 - rng.random() * 2
        add(
            "matchup",
            f"Tough matchup against {player.opponent} - top 5 defense vs {player.position}s",
            "Matchup Analysis",
            "negative",
            adjustment,
        )

    if weather_risk and player.position in {"QB", "WR", "TE"}:
        if indicator is None or indicator == "upgrade":
            indicator = "weather_risk"
        weather_adjust = -1.0 - rng.random() * 1.5
        adjustment += weather_adjust
        wind = int(12 + rng.random() * 10)
        add("weather", f"Outdoor game with {wind}mph wind expected", "Weather Report", "negative", weather_adjust)

    if rng.random() > 0.85:
        if rng.random() > 0.4:
            if rng.random() > 0.5:
                indicator = indicator or "upgrade"
                role_adjust = 1.5 + rng.random() * 2
                adjustment += role_adjust
                add(
                    "role",
                    "Teammate ruled OUT - increased target share expected",
                    "Injury Report",
                    "positive",
                    role_adjust,
                )
        else:
            indicator = "monitor"
            add("injury", "Questionable designation - monitor practice reports", "Injury Report", "neutral", 0.0)

    if player.position == "DEF" and rng.random() > 0.7 and rng.random() > 0.5:
        indicator = "upgrade"
        # Opponent news replaces any earlier adjustment for defenses.
        adjustment = 1.5 + rng.random() * 1.5
        add(
            "opp",
            f"Facing {player.opponent} - high turnover rate offense",
            "Opponent Analysis",
            "positive",
            adjustment,
        )

    return NewsAnalysis(
        indicator=indicator if items else None,
        adjustment=round(adjustment, 1),
        items=items,
    )


def analyze_player_news(
    players: Sequence[Player],
    *,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    mode: NewsMode = "auto",
    now: Optional[datetime] = None,
) -> List[Player]:
    """Return enriched copies of ``players``.

    ``auto`` applies each adjustment to ``projection_adjustment``;
    ``suggested`` only attaches indicator and items; ``off`` is a no-op.
    """

    if mode == "off":
        return list(players)

    rng = rng or random.Random(seed)
    enriched: List[Player] = []
    flagged = 0
    for player in players:
        analysis = analyze_player(player, rng, now=now)
        update = {"news_indicator": analysis.indicator, "news_items": analysis.items}
        if mode == "auto":
            update["projection_adjustment"] = analysis.adjustment
        if analysis.items:
            flagged += 1
        enriched.append(player.model_copy(update=update))

    logger.info("News analysis (%s) flagged %s of %s players", mode, flagged, len(enriched))
    return enriched
