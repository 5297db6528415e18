import csv
from pathlib import Path

import pytest

from nfldfs.cli import main
from nfldfs.config import OptimizationSettings
from nfldfs.config_loader import SettingsProfile


PLAYERS_CSV = """Id,Position,First Name,Last Name,FPPG,Salary,Team,Opponent,Injury Indicator
1,QB,Joe,Burrow,21.0,8000,CIN,BAL,
2,QB,Lamar,Jackson,23.0,8800,BAL,CIN,
3,RB,Derrick,Henry,16.0,7500,BAL,CIN,
4,RB,Chase,Brown,12.0,6200,CIN,BAL,
5,RB,Justice,Hill,8.0,5000,BAL,CIN,
6,RB,Zack,Moss,7.5,4800,CIN,BAL,O
7,WR,Ja'Marr,Chase,17.0,8500,CIN,BAL,
8,WR,Tee,Higgins,13.0,6800,CIN,BAL,
9,WR,Zay,Flowers,12.0,6500,BAL,CIN,
10,WR,Rashod,Bateman,8.0,5200,BAL,CIN,
11,WR,Andrei,Iosivas,6.5,4800,CIN,BAL,
12,TE,Mark,Andrews,10.0,6000,BAL,CIN,
13,TE,Mike,Gesicki,6.0,4700,CIN,BAL,
14,D,Baltimore,Ravens,8.0,4200,BAL,CIN,
15,D,Cincinnati,Bengals,6.0,3500,CIN,BAL,
"""


@pytest.fixture()
def players_file(tmp_path: Path) -> Path:
    path = tmp_path / "players.csv"
    path.write_text(PLAYERS_CSV, encoding="utf-8")
    return path


def _read_rows(path: Path) -> list[list[str]]:
    with path.open(newline="", encoding="utf-8") as fh:
        return list(csv.reader(fh))


def test_cli_writes_upload_csv_and_report(tmp_path: Path, players_file: Path, capsys):
    output = tmp_path / "lineups.csv"
    report = tmp_path / "exposure.csv"

    main([
        str(players_file),
        "--output", str(output),
        "--lineups", "3",
        "--min-unique", "2",
        "--news-mode", "off",
        "--seed", "4",
        "--exclude", "2",
        "--report", str(report),
    ])

    rows = _read_rows(output)
    assert rows[0] == ["QB", "RB", "RB", "WR", "WR", "WR", "TE", "FLEX", "DEF"]
    assert 2 <= len(rows) <= 4
    for row in rows[1:]:
        assert row[0] == "1"
        assert "6" not in row
        assert len(set(row)) == 9

    usage = _read_rows(report)
    assert usage[0] == ["player_id", "name", "team", "position", "count", "exposure"]
    by_id = {row[0]: row for row in usage[1:]}
    assert by_id["1"][4] == str(len(rows) - 1)
    assert by_id["1"][5] == "100.0"

    out = capsys.readouterr().out
    assert "Loaded 15 players" in out
    assert f"Wrote {len(rows) - 1} lineups" in out


def test_cli_lock_forces_player(tmp_path: Path, players_file: Path):
    output = tmp_path / "lineups.csv"
    main([str(players_file), "--output", str(output), "--lineups", "2", "--news-mode", "off", "--lock", "13"])

    rows = _read_rows(output)[1:]
    assert rows
    assert all("13" in row for row in rows)


def test_cli_rejects_out_of_range_settings(tmp_path: Path, players_file: Path):
    with pytest.raises(SystemExit, match="Invalid settings"):
        main([str(players_file), "--output", str(tmp_path / "x.csv"), "--randomness", "40"])


def test_cli_missing_players_file(tmp_path: Path):
    with pytest.raises(SystemExit, match="Unable to read players file"):
        main([str(tmp_path / "missing.csv"), "--output", str(tmp_path / "x.csv")])


def test_profile_round_trip_and_flag_override(tmp_path: Path, players_file: Path):
    profile_path = tmp_path / "profile.json"
    SettingsProfile(
        settings=OptimizationSettings(number_of_lineups=4, randomness=0, news_mode="off"),
        lock_player_ids=["3"],
        exposure_limits={"7": 50.0},
    ).save(profile_path)

    loaded = SettingsProfile.load(profile_path)
    assert loaded.settings.number_of_lineups == 4
    assert loaded.lock_player_ids == ["3"]
    assert loaded.exposure_limits == {"7": 50.0}

    saved_path = tmp_path / "saved.json"
    main([
        str(players_file),
        "--output", str(tmp_path / "lineups.csv"),
        "--load-profile", str(profile_path),
        "--lineups", "2",
        "--save-profile", str(saved_path),
    ])

    saved = SettingsProfile.load(saved_path)
    assert saved.settings.number_of_lineups == 2
    assert saved.settings.randomness == 0
    assert saved.lock_player_ids == ["3"]
    assert saved.exposure_limits == {"7": 50.0}
