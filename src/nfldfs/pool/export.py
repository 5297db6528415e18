"""FanDuel upload CSV export for generated lineups."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from nfldfs.config import FD_NFL, RosterRules
from nfldfs.optimizer import Lineup


class ContestExportError(RuntimeError):
    """Raised when a lineup cannot be exported for the contest template."""


def _slot_row(lineup: Lineup, rules: RosterRules) -> list[str]:
    row: list[str] = []
    seen: set[str] = set()
    for slot, player in lineup.slots(rules).items():
        if player.position not in rules.allowed_positions(slot):
            raise ContestExportError(
                f"Lineup {lineup.lineup_id} has {player.position} {player.player_id} in slot {slot}"
            )
        if player.player_id in seen:
            raise ContestExportError(
                f"Lineup {lineup.lineup_id} lists player {player.player_id} twice"
            )
        seen.add(player.player_id)
        row.append(player.player_id)
    return row


def export_lineups_to_csv(
    lineups: Sequence[Lineup],
    *,
    rules: RosterRules = FD_NFL,
) -> str:
    """Render lineups as FanDuel upload rows (QB,RB,RB,WR,WR,WR,TE,FLEX,DEF)."""

    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([rules.slot_labels[slot] for slot in rules.roster_order])
    for lineup in lineups:
        writer.writerow(_slot_row(lineup, rules))
    return buffer.getvalue()


__all__ = [
    "ContestExportError",
    "export_lineups_to_csv",
]
