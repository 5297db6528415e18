"""Per-attempt candidate scoring with optional bounded noise."""

from __future__ import annotations

import random
from typing import Optional

from nfldfs.models import Player


def score(player: Player, randomness: float, rng: Optional[random.Random] = None) -> float:
    """Return the comparable score used to rank ``player`` for one selection.

    With ``randomness`` at 0 this is ``projection + projection_adjustment``.
    Otherwise a fresh uniform draw in [-1, 1) scaled by ``randomness`` percent
    of the base is added, and the result is floored at 0. Every call draws
    again, so the same player can score differently within one build.
    """

    base = player.projection + player.projection_adjustment
    if randomness == 0:
        return base

    source = rng if rng is not None else random
    variance = (source.random() - 0.5) * 2 * (randomness / 100.0) * base
    return max(0.0, base + variance)
