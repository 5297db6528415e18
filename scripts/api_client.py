"""Lightweight REST client for the nfldfs API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the nfldfs REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("players", type=Path, help="FanDuel players CSV")
    parser.add_argument("--lineups", type=int, default=20, help="Number of lineups to request")
    parser.add_argument("--randomness", type=float, default=5.0, help="Projection noise percentage")
    parser.add_argument("--min-unique", type=int, default=3, help="Minimum unique players between lineups")
    parser.add_argument("--news-mode", choices=["auto", "suggested", "off"], default="auto")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    parser.add_argument("--export-path", type=Path, help="Destination path for exported CSV")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url, timeout=60.0) as client:
        with args.players.open("rb") as fh:
            resp = client.post(
                "/players/parse",
                files={"players": (args.players.name, fh, "text/csv")},
            )
        resp.raise_for_status()
        players = resp.json()["players"]
        print(f"Parsed {len(players)} players")

        if args.news_mode != "off":
            resp = client.post(
                "/players/news",
                json={"players": players, "mode": args.news_mode, "seed": args.seed},
            )
            resp.raise_for_status()
            players = resp.json()["players"]

        payload = {
            "players": players,
            "settings": {
                "number_of_lineups": args.lineups,
                "randomness": args.randomness,
                "min_unique_players": args.min_unique,
                "news_mode": args.news_mode,
            },
            "seed": args.seed,
        }
        resp = client.post("/lineups", json=payload)
        resp.raise_for_status()
        batch = resp.json()
        summary = {
            "run_id": batch["run_id"],
            "lineups": len(batch["lineups"]),
            "attempts": batch["attempts"],
            "warnings": batch["warnings"],
            "message": batch["message"],
        }
        print(json.dumps(summary, indent=2))

        if args.export_path:
            resp = client.get(f"/runs/{batch['run_id']}/export.csv")
            resp.raise_for_status()
            args.export_path.write_text(resp.text, encoding="utf-8")
            print(f"Saved lineups CSV to {args.export_path}")


if __name__ == "__main__":
    main()
