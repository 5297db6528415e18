"""Command-line interface for generating lineups from a FanDuel player list."""

from __future__ import annotations

import argparse
import csv
import logging
from pathlib import Path

from pydantic import ValidationError

from nfldfs.config_loader import SettingsProfile
from nfldfs.ingest import load_players_csv
from nfldfs.news import analyze_player_news
from nfldfs.optimizer import build_lineups
from nfldfs.pool import calculate_exposures, export_lineups_to_csv


# Flag name -> OptimizationSettings field; unset flags keep the profile value.
_SETTING_FLAGS = {
    "lineups": "number_of_lineups",
    "max_exposure": "max_player_exposure",
    "min_salary": "min_salary_used",
    "randomness": "randomness",
    "min_unique": "min_unique_players",
    "news_mode": "news_mode",
}


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate FanDuel NFL lineups from a player list")
    parser.add_argument("players", type=Path, help="Path to the FanDuel players CSV")
    parser.add_argument("--output", type=Path, default=Path("lineups.csv"), help="Output CSV path")
    parser.add_argument("--lineups", type=int, default=None, help="Number of lineups to build (1-150)")
    parser.add_argument(
        "--max-exposure",
        type=float,
        default=None,
        help="Maximum percentage of lineups any single player can appear in (0-100)",
    )
    parser.add_argument("--min-salary", type=int, default=None, help="Salary target for reporting")
    parser.add_argument(
        "--randomness",
        type=float,
        default=None,
        help="Projection noise percentage applied per selection (0-20)",
    )
    parser.add_argument(
        "--min-unique",
        type=int,
        default=None,
        help="Minimum players that must differ between any two lineups",
    )
    parser.add_argument(
        "--news-mode",
        choices=["auto", "suggested", "off"],
        default=None,
        help="How simulated news adjusts projections",
    )
    parser.add_argument("--lock", nargs="*", default=None, help="Player IDs to force into every lineup")
    parser.add_argument("--exclude", nargs="*", default=None, help="Player IDs to remove from consideration")
    parser.add_argument(
        "--exposure-limit",
        action="append",
        default=[],
        help="Per-player exposure override (e.g., 12345=40)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    parser.add_argument("--load-profile", type=Path, help="Load settings profile JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save settings profile JSON", default=None)
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional path to write a player exposure CSV",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING)")
    return parser.parse_args(argv)


def _parse_limits(entries: list[str]) -> dict[str, float]:
    limits: dict[str, float] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid exposure entry '{entry}', expected id=percent")
        key, value = entry.split("=", 1)
        limits[key.strip()] = float(value)
    return limits


def _resolve_profile(args: argparse.Namespace) -> SettingsProfile:
    profile = SettingsProfile.load(args.load_profile) if args.load_profile else SettingsProfile()

    overrides = {
        field: getattr(args, flag)
        for flag, field in _SETTING_FLAGS.items()
        if getattr(args, flag) is not None
    }
    settings = profile.settings
    if overrides:
        settings = type(settings).model_validate(settings.model_dump() | overrides)

    return SettingsProfile(
        settings=settings,
        lock_player_ids=args.lock if args.lock is not None else profile.lock_player_ids,
        exclude_player_ids=args.exclude if args.exclude is not None else profile.exclude_player_ids,
        exposure_limits=profile.exposure_limits | _parse_limits(args.exposure_limit),
    )


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        profile = _resolve_profile(args)
    except (ValidationError, ValueError) as exc:
        raise SystemExit(f"Invalid settings: {exc}") from exc

    if args.save_profile:
        profile.save(args.save_profile)
        print(f"Saved settings profile to {args.save_profile}")

    try:
        players = load_players_csv(args.players)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Unable to read players file: {exc}") from exc
    print(f"Loaded {len(players)} players from {args.players}")

    settings = profile.settings
    players = analyze_player_news(players, seed=args.seed, mode=settings.news_mode)

    output = build_lineups(
        players,
        settings,
        lock_player_ids=profile.lock_player_ids,
        exclude_player_ids=profile.exclude_player_ids,
        exposure_limits=profile.exposure_limits,
        seed=args.seed,
    )
    for warning in output.warnings:
        print(f"Warning: {warning}")

    args.output.write_text(export_lineups_to_csv(output.lineups), encoding="utf-8")
    print(f"Wrote {len(output.lineups)} lineups to {args.output}")

    for lineup in output.lineups[:5]:
        print(
            "{} salary={} projection={:.2f}".format(
                lineup.lineup_id,
                lineup.total_salary,
                lineup.total_projection,
            )
        )

    if args.report:
        with args.report.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["player_id", "name", "team", "position", "count", "exposure"])
            for usage in calculate_exposures(output.lineups):
                writer.writerow([
                    usage.player_id,
                    usage.name,
                    usage.team,
                    usage.position,
                    usage.count,
                    f"{usage.percentage:.1f}",
                ])
        print(f"Wrote exposure report to {args.report}")

    if output.message:
        print(f"Lineup generation stopped early: {output.message}")


if __name__ == "__main__":
    main()
