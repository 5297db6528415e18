"""Load FanDuel NFL player lists into canonical ``Player`` records.

Two layouts are accepted. The lineup upload template places the player block
to the right of the lineup columns with its header a few rows down; a plain
export has the header on the first row.
"""

from __future__ import annotations

import csv
import logging
import re
from io import StringIO
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from nfldfs.models import POSITIONS, Player


logger = logging.getLogger(__name__)

_HEADER_SCAN_ROWS = 15
_HEADER_MARKERS = {"Player ID + Player Name", "Id", "Position"}
_HEADER_HINTS = {"Position", "Salary", "FPPG"}

COLUMN_ALIASES: Mapping[str, tuple[str, ...]] = {
    "player_id": ("Id", "PlayerID"),
    "position": ("Position", "Pos"),
    "first_name": ("First Name", "FirstName"),
    "last_name": ("Last Name", "LastName"),
    "fppg": ("FPPG", "FantasyPointsPerGame"),
    "played": ("Played", "Games"),
    "salary": ("Salary", "Cost"),
    "game": ("Game", "Matchup"),
    "team": ("Team",),
    "opponent": ("Opponent", "Opp"),
    "injury_indicator": ("Injury Indicator", "InjuryIndicator", "Injury"),
    "injury_details": ("Injury Details", "InjuryDetails"),
    "roster_position": ("Roster Position", "RosterPosition"),
    "projection": ("Projection",),
}


def _header_key(value: str) -> str:
    return re.sub(r"\s+", "", value).lower()


def _parse_salary(raw_salary: str) -> int:
    digits = re.sub(r"[,$\s]", "", raw_salary or "")
    try:
        return int(float(digits)) if digits else 0
    except ValueError:
        return 0


def _parse_float(raw: Optional[str]) -> float:
    text = (raw or "").strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def _parse_int(raw: Optional[str]) -> int:
    try:
        return max(0, int(float((raw or "").strip() or 0)))
    except ValueError:
        return 0


def _normalize_position(raw: str) -> str:
    position = raw.strip().upper()
    if position in {"D", "DST", "D/ST"}:
        return "DEF"
    return position


def _resolve_columns(headers: Sequence[str]) -> Dict[str, int]:
    index = {}
    for idx, header in enumerate(headers):
        index.setdefault(_header_key(header), idx)
    columns: Dict[str, int] = {}
    for field, aliases in COLUMN_ALIASES.items():
        for alias in aliases:
            key = _header_key(alias)
            if key in index:
                columns[field] = index[key]
                break
    return columns


def _find_header(rows: Sequence[Sequence[str]]) -> Optional[tuple[int, int]]:
    for i, row in enumerate(rows[:_HEADER_SCAN_ROWS]):
        cells = [cell.strip() for cell in row]
        for j, cell in enumerate(cells):
            if cell in _HEADER_MARKERS and _HEADER_HINTS.intersection(cells[j:j + 5]):
                return i, j
    return None


def _row_to_player(row: Sequence[str], columns: Mapping[str, int]) -> Optional[Player]:
    def cell(field: str) -> str:
        idx = columns.get(field)
        if idx is None or idx >= len(row):
            return ""
        return row[idx].strip()

    player_id = cell("player_id")
    position = _normalize_position(cell("position"))
    salary = _parse_salary(cell("salary"))
    if not player_id or not position or salary <= 0:
        return None
    if position not in POSITIONS:
        return None

    fppg = max(0.0, _parse_float(cell("fppg")))
    raw_projection = cell("projection")
    projection = _parse_float(raw_projection) if raw_projection else fppg

    return Player(
        player_id=player_id,
        position=position,
        first_name=cell("first_name"),
        last_name=cell("last_name"),
        fppg=fppg,
        played=_parse_int(cell("played")),
        salary=salary,
        game=cell("game"),
        team=cell("team"),
        opponent=cell("opponent"),
        injury_indicator=cell("injury_indicator"),
        injury_details=cell("injury_details"),
        roster_position=cell("roster_position") or position,
        projection=projection,
    )


def parse_players_csv(text: str) -> List[Player]:
    """Parse FanDuel CSV text into players, skipping unusable rows."""

    rows = [row for row in csv.reader(StringIO(text)) if any(cell.strip() for cell in row)]
    if not rows:
        raise ValueError("players CSV is empty")

    located = _find_header(rows)
    if located is None:
        header_row, column_start = 0, 0
    else:
        header_row, column_start = located

    columns = _resolve_columns(rows[header_row][column_start:])
    missing = [field for field in ("player_id", "position", "salary") if field not in columns]
    if missing:
        raise ValueError(f"players CSV is missing required columns: {', '.join(missing)}")

    players: List[Player] = []
    skipped = 0
    for row in rows[header_row + 1:]:
        block = row[column_start:]
        # Template rows shorter than the player block are lineup-only rows.
        if column_start and len(block) < 5:
            continue
        player = _row_to_player(block, columns)
        if player is None:
            skipped += 1
            continue
        players.append(player)

    logger.info("Parsed %s players (%s rows skipped)", len(players), skipped)
    return players


def load_players_csv(path: Path) -> List[Player]:
    # utf-8-sig strips the BOM FanDuel exports sometimes carry.
    return parse_players_csv(path.read_text(encoding="utf-8-sig"))
