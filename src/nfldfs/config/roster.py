"""Roster configuration for the FanDuel NFL classic contest."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple


SALARY_CAP = 60_000
MIN_SALARY_DEFAULT = 59_000


@dataclass(frozen=True)
class RosterRules:
    site: str
    sport: str
    salary_cap: int
    # Contest slot order, used for display and export.
    roster_order: Tuple[str, ...]
    # Order in which the builder fills open slots.
    fill_order: Tuple[str, ...]
    slot_positions: Mapping[str, frozenset[str]]
    # Slots a locked player may occupy, in priority order.
    lock_chains: Mapping[str, Tuple[str, ...]]
    slot_labels: Mapping[str, str]

    @property
    def roster_size(self) -> int:
        return len(self.roster_order)

    def allowed_positions(self, slot: str) -> frozenset[str]:
        return self.slot_positions[slot]


FD_NFL = RosterRules(
    site="FD",
    sport="NFL",
    salary_cap=SALARY_CAP,
    roster_order=("qb", "rb1", "rb2", "wr1", "wr2", "wr3", "te", "flex", "def"),
    fill_order=("qb", "rb1", "rb2", "wr1", "wr2", "wr3", "te", "def", "flex"),
    slot_positions={
        "qb": frozenset({"QB"}),
        "rb1": frozenset({"RB"}),
        "rb2": frozenset({"RB"}),
        "wr1": frozenset({"WR"}),
        "wr2": frozenset({"WR"}),
        "wr3": frozenset({"WR"}),
        "te": frozenset({"TE"}),
        "flex": frozenset({"RB", "WR", "TE"}),
        "def": frozenset({"DEF"}),
    },
    lock_chains={
        "QB": ("qb",),
        "RB": ("rb1", "rb2", "flex"),
        "WR": ("wr1", "wr2", "wr3", "flex"),
        "TE": ("te", "flex"),
        "DEF": ("def",),
    },
    slot_labels={
        "qb": "QB",
        "rb1": "RB",
        "rb2": "RB",
        "wr1": "WR",
        "wr2": "WR",
        "wr3": "WR",
        "te": "TE",
        "flex": "FLEX",
        "def": "DEF",
    },
)


def get_rules(site: str = "FD", sport: str = "NFL") -> RosterRules:
    """Return the FanDuel NFL rules; any other site/sport raises KeyError."""

    if (site.upper(), sport.upper()) != (FD_NFL.site, FD_NFL.sport):
        raise KeyError(f"No roster rules configured for site={site!r}, sport={sport!r}")
    return FD_NFL

