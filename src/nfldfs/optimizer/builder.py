"""Greedy slot-by-slot construction of a single FanDuel NFL lineup."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import random
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from nfldfs.config import FD_NFL, OptimizationSettings, RosterRules
from nfldfs.models import Player

from .scoring import score


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Lineup:
    lineup_id: str
    qb: Player
    rb1: Player
    rb2: Player
    wr1: Player
    wr2: Player
    wr3: Player
    te: Player
    flex: Player
    def_: Player
    total_salary: int
    total_projection: float

    @property
    def players(self) -> Tuple[Player, ...]:
        """Players in contest slot order (QB, RB, RB, WR, WR, WR, TE, FLEX, DEF)."""
        return (
            self.qb,
            self.rb1,
            self.rb2,
            self.wr1,
            self.wr2,
            self.wr3,
            self.te,
            self.flex,
            self.def_,
        )

    @property
    def player_ids(self) -> frozenset[str]:
        return frozenset(player.player_id for player in self.players)

    def slots(self, rules: RosterRules = FD_NFL) -> Dict[str, Player]:
        return dict(zip(rules.roster_order, self.players))


class PartialLineup:
    """Slot assignments for a lineup that is still being filled."""

    def __init__(self, rules: RosterRules = FD_NFL):
        self.rules = rules
        self._slots: Dict[str, Optional[Player]] = {slot: None for slot in rules.roster_order}
        self.salary = 0

    def __contains__(self, player_id: str) -> bool:
        return any(p is not None and p.player_id == player_id for p in self._slots.values())

    def get(self, slot: str) -> Optional[Player]:
        return self._slots[slot]

    def is_open(self, slot: str) -> bool:
        return self._slots[slot] is None

    def open_slots(self) -> List[str]:
        return [slot for slot in self.rules.fill_order if self._slots[slot] is None]

    def is_complete(self) -> bool:
        return all(player is not None for player in self._slots.values())

    def assign(self, slot: str, player: Player) -> None:
        if self._slots[slot] is not None:
            raise ValueError(f"Slot {slot!r} is already filled")
        if player.position not in self.rules.allowed_positions(slot):
            raise ValueError(f"{player.position} player {player.player_id} cannot fill slot {slot!r}")
        self._slots[slot] = player
        self.salary += player.salary

    def freeze(self, lineup_id: str) -> Lineup:
        if not self.is_complete():
            missing = ", ".join(self.open_slots())
            raise ValueError(f"Lineup {lineup_id} is incomplete (open slots: {missing})")
        players = [self._slots[slot] for slot in self.rules.roster_order]
        return Lineup(
            lineup_id,
            *players,
            total_salary=sum(p.salary for p in players),
            total_projection=float(sum(p.effective_projection for p in players)),
        )


def eligible_players(pool: Iterable[Player]) -> List[Player]:
    """Drop excluded, ruled-out and zero-salary players, preserving order."""

    return [p for p in pool if not p.is_excluded and not p.is_out and p.salary > 0]


def exposure_limit(player: Player, settings: OptimizationSettings) -> float:
    if player.exposure_limit is not None:
        return player.exposure_limit
    return settings.max_player_exposure


def exposure_cap(player: Player, settings: OptimizationSettings) -> int:
    """Maximum number of lineups in the batch that may contain ``player``."""

    # Multiply before dividing so whole-number percentages stay exact.
    return math.ceil(exposure_limit(player, settings) * settings.number_of_lineups / 100)


def exposure_caps(players: Iterable[Player], settings: OptimizationSettings) -> Dict[str, int]:
    """Cap per player id; the caps are fixed for a whole batch."""

    return {player.player_id: exposure_cap(player, settings) for player in players}


def under_exposure_cap(
    player: Player,
    caps: Mapping[str, int],
    exposures: Mapping[str, int],
) -> bool:
    return exposures.get(player.player_id, 0) < caps[player.player_id]


def shared_players(lineup: Lineup, player_ids: Iterable[str]) -> int:
    return len(lineup.player_ids.intersection(player_ids))


def place_locked(
    partial: PartialLineup,
    locked: Sequence[Player],
    rules: RosterRules,
) -> List[Player]:
    """Put each locked player in the first open slot of its chain.

    Returns the locked players that found no open slot.
    """

    skipped: List[Player] = []
    for player in locked:
        chain = rules.lock_chains.get(player.position, ())
        slot = next((s for s in chain if partial.is_open(s)), None)
        if slot is None:
            skipped.append(player)
            continue
        partial.assign(slot, player)
    return skipped


def _select_best(
    candidates: Sequence[Player],
    remaining_salary: int,
    partial: PartialLineup,
    settings: OptimizationSettings,
    rng: Optional[random.Random],
) -> Optional[Player]:
    best: Optional[Player] = None
    best_score = 0.0
    for player in candidates:
        if player.salary > remaining_salary or player.player_id in partial:
            continue
        value = score(player, settings.randomness, rng)
        # Strict comparison keeps the earliest player on ties.
        if best is None or value > best_score:
            best = player
            best_score = value
    return best


def build_lineup(
    pool: Sequence[Player],
    settings: OptimizationSettings,
    accepted: Sequence[Lineup],
    exposures: Mapping[str, int],
    *,
    rng: Optional[random.Random] = None,
    rules: RosterRules = FD_NFL,
    caps: Optional[Mapping[str, int]] = None,
) -> Optional[Lineup]:
    """Build one lineup or return None when this attempt is infeasible.

    ``exposures`` maps player id to the number of accepted lineups containing
    that player; it is read, never written. ``caps`` is the batch's
    ``exposure_caps`` table and is computed here when omitted.
    """

    eligible = eligible_players(pool)
    if caps is None:
        caps = exposure_caps(eligible, settings)
    partial = PartialLineup(rules)

    locked = [p for p in eligible if p.is_locked]
    skipped = place_locked(partial, locked, rules)
    if skipped:
        logger.debug(
            "No open slot for locked players: %s",
            ", ".join(p.player_id for p in skipped),
        )
    skipped_ids = {p.player_id for p in skipped}
    for player in locked:
        if player.player_id in skipped_ids:
            continue
        # A lock never pushes a player past its exposure cap; the attempt fails instead.
        if not under_exposure_cap(player, caps, exposures):
            logger.debug("Locked player %s has reached its exposure cap", player.player_id)
            return None

    if partial.salary > rules.salary_cap:
        logger.debug("Locked salary %s exceeds cap %s", partial.salary, rules.salary_cap)
        return None

    # The ledger is fixed for the whole attempt, so one exposure pass serves every slot.
    available = [p for p in eligible if under_exposure_cap(p, caps, exposures)]
    # Candidates per allowed position set, in pool order so ties resolve the same way.
    by_positions: Dict[frozenset[str], List[Player]] = {}
    for slot in partial.open_slots():
        allowed = rules.allowed_positions(slot)
        if allowed not in by_positions:
            by_positions[allowed] = [p for p in available if p.position in allowed]
        player = _select_best(
            by_positions[allowed],
            rules.salary_cap - partial.salary,
            partial,
            settings,
            rng,
        )
        if player is None:
            logger.debug("No candidate for slot %s (remaining salary %s)", slot, rules.salary_cap - partial.salary)
            return None
        partial.assign(slot, player)

    lineup = partial.freeze(f"L{len(accepted) + 1:03}")
    if lineup.total_salary > rules.salary_cap:
        return None

    roster_size = rules.roster_size
    for previous in accepted:
        shared = shared_players(previous, lineup.player_ids)
        if roster_size - shared < settings.min_unique_players:
            logger.debug(
                "Lineup shares %s players with %s (need %s unique)",
                shared,
                previous.lineup_id,
                settings.min_unique_players,
            )
            return None

    return lineup
