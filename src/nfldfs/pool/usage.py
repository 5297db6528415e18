"""Per-player usage across a generated batch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from nfldfs.models import Player
from nfldfs.optimizer import Lineup


@dataclass(frozen=True)
class PlayerUsage:
    player_id: str
    name: str
    team: str
    position: str
    count: int
    percentage: float


def calculate_exposures(lineups: Sequence[Lineup]) -> List[PlayerUsage]:
    """Count how many lineups each player appears in, most used first."""

    total = len(lineups)
    if total == 0:
        return []

    counts: Dict[str, int] = {}
    players: Dict[str, Player] = {}
    for lineup in lineups:
        for player in lineup.players:
            counts[player.player_id] = counts.get(player.player_id, 0) + 1
            players.setdefault(player.player_id, player)

    ordered = sorted(counts.items(), key=lambda item: (-item[1], players[item[0]].name))
    return [
        PlayerUsage(
            player_id=player_id,
            name=players[player_id].name,
            team=players[player_id].team,
            position=players[player_id].position,
            count=count,
            percentage=count / total * 100.0,
        )
        for player_id, count in ordered
    ]


__all__ = ["PlayerUsage", "calculate_exposures"]
