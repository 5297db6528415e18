import random
from collections import Counter

import pytest

from nfldfs.config import OptimizationSettings
from nfldfs.models import Player
from nfldfs.optimizer import PartialLineup, build_lineup, exposure_cap, exposure_caps, generate_lineups


def _player(pid: str, position: str, salary: int, projection: float, **kwargs) -> Player:
    return Player(
        player_id=pid,
        position=position,
        first_name=pid.upper(),
        last_name=position,
        team="AAA",
        opponent="BBB",
        salary=salary,
        fppg=projection,
        **kwargs,
    )


def _minimal_pool(**overrides) -> list[Player]:
    pool = [
        _player("qb1", "QB", 7000, 20.0),
        _player("rb1", "RB", 6000, 15.0),
        _player("rb2", "RB", 6000, 15.0),
        _player("wr1", "WR", 5500, 14.0),
        _player("wr2", "WR", 5500, 14.0),
        _player("wr3", "WR", 5500, 14.0),
        _player("te1", "TE", 4500, 10.0),
        _player("rb3", "RB", 4000, 8.0),
        _player("def1", "DEF", 3000, 8.0),
    ]
    return [p.model_copy(update=overrides[p.player_id]) if p.player_id in overrides else p for p in pool]


def _settings(**kwargs) -> OptimizationSettings:
    values = {"number_of_lineups": 1, "randomness": 0}
    values.update(kwargs)
    return OptimizationSettings(**values)


def test_builds_complete_lineup_from_minimal_pool():
    lineup = build_lineup(_minimal_pool(), _settings(), [], {})

    assert lineup is not None
    assert lineup.lineup_id == "L001"
    slots = {slot: player.player_id for slot, player in lineup.slots().items()}
    assert slots == {
        "qb": "qb1",
        "rb1": "rb1",
        "rb2": "rb2",
        "wr1": "wr1",
        "wr2": "wr2",
        "wr3": "wr3",
        "te": "te1",
        "flex": "rb3",
        "def": "def1",
    }
    assert lineup.total_salary == 47_000
    assert lineup.total_projection == pytest.approx(118.0)


def test_locked_player_takes_first_open_chain_slot():
    pool = _minimal_pool(rb3={"is_locked": True}) + [_player("rb4", "RB", 5000, 12.0)]
    lineup = build_lineup(pool, _settings(), [], {})

    assert lineup is not None
    assert lineup.rb1.player_id == "rb3"
    assert lineup.rb2.player_id == "rb1"
    assert lineup.flex.player_id == "rb2"


def test_locks_beyond_chain_capacity_are_skipped():
    locked = {"is_locked": True}
    pool = _minimal_pool(rb1=locked, rb2=locked, rb3=locked) + [_player("rb4", "RB", 5000, 12.0, is_locked=True)]
    lineup = build_lineup(pool, _settings(), [], {})

    assert lineup is not None
    assert (lineup.rb1.player_id, lineup.rb2.player_id, lineup.flex.player_id) == ("rb1", "rb2", "rb3")
    assert "rb4" not in lineup.player_ids
    assert lineup.total_salary == sum(p.salary for p in lineup.players)


def test_excluded_out_and_unpriced_players_never_selected():
    pool = _minimal_pool() + [
        _player("qb2", "QB", 8000, 30.0, is_excluded=True),
        _player("qb3", "QB", 7500, 28.0, injury_indicator="O"),
        _player("qb4", "QB", 0, 40.0),
    ]
    lineup = build_lineup(pool, _settings(), [], {})

    assert lineup is not None
    assert lineup.qb.player_id == "qb1"


def test_locked_but_excluded_player_is_ignored():
    pool = _minimal_pool() + [_player("qb2", "QB", 8000, 30.0, is_locked=True, injury_indicator="O")]
    lineup = build_lineup(pool, _settings(), [], {})

    assert lineup is not None
    assert lineup.qb.player_id == "qb1"


def test_unaffordable_players_are_passed_over():
    pool = _minimal_pool() + [_player("wr9", "WR", 50_000, 100.0)]
    lineup = build_lineup(pool, _settings(), [], {})

    assert lineup is not None
    assert "wr9" not in lineup.player_ids
    assert lineup.total_salary <= 60_000


def test_player_at_exposure_cap_is_unavailable():
    settings = _settings()
    assert build_lineup(_minimal_pool(), settings, [], {"qb1": 1}) is None

    pool = _minimal_pool() + [_player("qb2", "QB", 6500, 18.0)]
    lineup = build_lineup(pool, settings, [], {"qb1": 1})
    assert lineup is not None
    assert lineup.qb.player_id == "qb2"


def test_zero_exposure_limit_keeps_player_out():
    pool = _minimal_pool() + [_player("qb2", "QB", 6500, 35.0, exposure_limit=0)]
    assert exposure_cap(pool[-1], _settings(number_of_lineups=20)) == 0

    lineup = build_lineup(pool, _settings(number_of_lineups=20), [], {})
    assert lineup is not None
    assert "qb2" not in lineup.player_ids


def test_locked_player_at_exposure_cap_fails_attempt():
    pool = _minimal_pool(qb1={"is_locked": True, "exposure_limit": 50.0})
    settings = _settings(number_of_lineups=2)
    assert exposure_cap(pool[0], settings) == 1

    assert build_lineup(pool, settings, [], {"qb1": 1}) is None


def test_locked_salary_over_cap_fails_attempt():
    pool = _minimal_pool() + [
        _player("qb9", "QB", 30_000, 5.0, is_locked=True),
        _player("def9", "DEF", 31_000, 5.0, is_locked=True),
    ]
    assert build_lineup(pool, _settings(), [], {}) is None


def test_missing_position_fails_attempt():
    pool = [p for p in _minimal_pool() if p.position != "DEF"]
    assert build_lineup(pool, _settings(), [], {}) is None


def test_ties_keep_earliest_player():
    pool = _minimal_pool() + [_player("qb2", "QB", 6000, 20.0)]
    lineup = build_lineup(pool, _settings(), [], {})
    assert lineup is not None
    assert lineup.qb.player_id == "qb1"

    reordered = [pool[-1]] + pool[:-1]
    lineup = build_lineup(reordered, _settings(), [], {})
    assert lineup is not None
    assert lineup.qb.player_id == "qb2"


def test_duplicate_of_accepted_lineup_rejected():
    pool = _minimal_pool()
    settings = _settings(number_of_lineups=5, min_unique_players=1)
    first = build_lineup(pool, settings, [], {})
    assert first is not None

    assert build_lineup(pool, settings, [first], {}) is None


def test_zero_min_unique_allows_repeat_and_numbers_ids():
    pool = _minimal_pool()
    settings = _settings(number_of_lineups=5, min_unique_players=0)
    first = build_lineup(pool, settings, [], {})
    assert first is not None

    second = build_lineup(pool, settings, [first], {})
    assert second is not None
    assert second.lineup_id == "L002"
    assert second.player_ids == first.player_ids


def test_total_projection_ignores_noise():
    pool = _minimal_pool() + [_player("wr4", "WR", 5000, 13.5), _player("te2", "TE", 4000, 9.5)]
    lineup = build_lineup(pool, _settings(randomness=20), [], {}, rng=random.Random(11))

    assert lineup is not None
    assert lineup.total_projection == pytest.approx(sum(p.effective_projection for p in lineup.players))


def test_partial_lineup_guards():
    partial = PartialLineup()
    qb = _player("qb1", "QB", 7000, 20.0)

    with pytest.raises(ValueError):
        partial.assign("rb1", qb)

    partial.assign("qb", qb)
    assert "qb1" in partial
    assert partial.salary == 7000
    assert partial.open_slots()[0] == "rb1"
    assert partial.open_slots()[-1] == "flex"

    with pytest.raises(ValueError):
        partial.assign("qb", _player("qb2", "QB", 6000, 18.0))

    with pytest.raises(ValueError):
        partial.freeze("L001")


@pytest.mark.parametrize("limit, lineups, expected", [(7, 100, 7), (33, 3, 1), (10, 150, 15), (12.5, 20, 3)])
def test_exposure_cap_is_exact_for_whole_percentages(limit, lineups, expected):
    player = _player("qb9", "QB", 7000, 20.0, exposure_limit=limit)
    assert exposure_cap(player, _settings(number_of_lineups=lineups)) == expected


def test_batch_never_exceeds_percentage_cap():
    pool = _minimal_pool() + [_player("star", "QB", 7000, 40.0, exposure_limit=7)]
    settings = _settings(number_of_lineups=100, min_unique_players=0)
    lineups = generate_lineups(pool, settings)

    assert len(lineups) == 100
    usage = Counter(pid for lineup in lineups for pid in lineup.player_ids)
    assert usage["star"] == 7
    assert usage["qb1"] == 93


def test_supplied_caps_are_used():
    pool = _minimal_pool() + [_player("qb2", "QB", 6500, 18.0)]
    settings = _settings()
    caps = exposure_caps(pool, settings)
    assert caps["qb1"] == 1

    caps["qb1"] = 0
    lineup = build_lineup(pool, settings, [], {}, caps=caps)
    assert lineup is not None
    assert lineup.qb.player_id == "qb2"


def test_flex_ties_follow_pool_order_across_positions():
    pool = [_player("wr9", "WR", 4000, 8.0)] + _minimal_pool()
    lineup = build_lineup(pool, _settings(), [], {})
    assert lineup is not None
    assert lineup.flex.player_id == "wr9"

    pool = _minimal_pool() + [_player("wr9", "WR", 4000, 8.0)]
    lineup = build_lineup(pool, _settings(), [], {})
    assert lineup is not None
    assert lineup.flex.player_id == "rb3"
