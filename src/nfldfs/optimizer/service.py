"""Batch lineup generation: retry loop, exposure ledger and pool checks."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
import logging
import random
import time
from typing import Iterable, List, Mapping, Optional, Sequence

from nfldfs.config import FD_NFL, OptimizationSettings, RosterRules
from nfldfs.models import Player

from .builder import Lineup, PartialLineup, build_lineup, eligible_players, exposure_caps, place_locked


logger = logging.getLogger(__name__)


@dataclass
class BuildOutput:
    lineups: List[Lineup]
    attempts: int = 0
    warnings: List[str] = field(default_factory=list)
    message: str | None = None


def apply_overrides(
    players: Sequence[Player],
    *,
    lock_player_ids: Optional[Iterable[str]] = None,
    exclude_player_ids: Optional[Iterable[str]] = None,
    exposure_limits: Optional[Mapping[str, float]] = None,
) -> list[Player]:
    """Return copies of ``players`` with lock/exclude flags and exposure limits applied by id.

    Excluding wins over locking when an id appears in both sets.
    """

    locked = {pid for pid in (lock_player_ids or []) if pid}
    excluded = {pid for pid in (exclude_player_ids or []) if pid}
    limits = dict(exposure_limits or {})
    if not locked and not excluded and not limits:
        return list(players)

    updated: list[Player] = []
    for player in players:
        update: dict[str, object] = {}
        if player.player_id in excluded:
            update.update(is_excluded=True, is_locked=False)
        elif player.player_id in locked:
            update.update(is_locked=True, is_excluded=False)
        if player.player_id in limits:
            update["exposure_limit"] = max(0.0, min(100.0, float(limits[player.player_id])))
        updated.append(player.model_copy(update=update) if update else player)
    return updated


def check_pool(
    players: Sequence[Player],
    settings: OptimizationSettings,
    rules: RosterRules = FD_NFL,
) -> list[str]:
    """Describe structural problems that will keep the batch from filling.

    The checks never change what the generator does; they only explain it.
    """

    warnings: list[str] = []
    eligible = eligible_players(players)
    by_position: Counter[str] = Counter(p.position for p in eligible)

    for slot in rules.roster_order:
        allowed = rules.allowed_positions(slot)
        if not any(by_position[pos] for pos in allowed):
            label = rules.slot_labels[slot]
            warnings.append(f"No eligible players for slot {label}")

    if len(eligible) < rules.roster_size:
        warnings.append(
            f"Only {len(eligible)} eligible players for a {rules.roster_size}-player roster"
        )

    partial = PartialLineup(rules)
    skipped = place_locked(partial, [p for p in eligible if p.is_locked], rules)
    if skipped:
        ignored = ", ".join(p.player_id for p in skipped)
        warnings.append(f"No open roster slot for locked players {ignored}; they will be ignored")

    if partial.salary > rules.salary_cap:
        warnings.append(f"Locked salary {partial.salary} exceeds the {rules.salary_cap} cap")

    return warnings


def generate_lineups(
    players: Sequence[Player],
    settings: OptimizationSettings,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    rules: RosterRules = FD_NFL,
) -> List[Lineup]:
    """Build up to ``settings.number_of_lineups`` lineups, best projection first."""

    if rng is None:
        rng = random.Random(seed)
    return _run_batch(players, settings, rng=rng, rules=rules)[0]


def _run_batch(
    players: Sequence[Player],
    settings: OptimizationSettings,
    *,
    rng: Optional[random.Random],
    rules: RosterRules,
) -> tuple[List[Lineup], int]:
    pool = list(players)
    eligible = eligible_players(pool)
    caps = exposure_caps(eligible, settings)
    accepted: List[Lineup] = []
    exposures: defaultdict[str, int] = defaultdict(int)
    target = settings.number_of_lineups
    max_attempts = settings.max_attempts

    run_start = time.perf_counter()
    logger.info(
        "Starting lineup generation – target=%s, pool=%s, randomness=%.1f%%, min_unique=%s, max_exposure=%.0f%%",
        target,
        len(pool),
        settings.randomness,
        settings.min_unique_players,
        settings.max_player_exposure,
    )

    attempts = 0
    while len(accepted) < target and attempts < max_attempts:
        attempts += 1
        lineup = build_lineup(eligible, settings, accepted, exposures, rng=rng, rules=rules, caps=caps)
        if lineup is None:
            continue
        accepted.append(lineup)
        for player in lineup.players:
            exposures[player.player_id] += 1

    accepted.sort(key=lambda lineup: lineup.total_projection, reverse=True)

    elapsed = time.perf_counter() - run_start
    logger.info(
        "Completed %s/%s lineups in %s attempts (%.3fs)",
        len(accepted),
        target,
        attempts,
        elapsed,
    )
    below_floor = sum(1 for lineup in accepted if lineup.total_salary < settings.min_salary_used)
    if below_floor:
        logger.info(
            "%s lineups use less than the %s salary target",
            below_floor,
            settings.min_salary_used,
        )
    return accepted, attempts


def build_lineups(
    players: Sequence[Player],
    settings: OptimizationSettings,
    *,
    lock_player_ids: Optional[Iterable[str]] = None,
    exclude_player_ids: Optional[Iterable[str]] = None,
    exposure_limits: Optional[Mapping[str, float]] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    rules: RosterRules = FD_NFL,
) -> BuildOutput:
    """Apply overrides, check the pool and run one batch.

    An under-filled batch is reported through ``BuildOutput.message``; it is
    never raised.
    """

    if rng is None:
        rng = random.Random(seed)

    pool = apply_overrides(
        players,
        lock_player_ids=lock_player_ids,
        exclude_player_ids=exclude_player_ids,
        exposure_limits=exposure_limits,
    )
    warnings = check_pool(pool, settings, rules)
    for warning in warnings:
        logger.warning("Player pool check: %s", warning)

    lineups, attempts = _run_batch(pool, settings, rng=rng, rules=rules)

    message = None
    if len(lineups) < settings.number_of_lineups:
        message = (
            f"Built {len(lineups)} of {settings.number_of_lineups} lineups "
            f"after {attempts} attempts"
        )
        logger.warning("Lineup generation stopped early: %s", message)

    return BuildOutput(lineups=lineups, attempts=attempts, warnings=warnings, message=message)
