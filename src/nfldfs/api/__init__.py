"""REST API for the nfldfs optimizer."""

from __future__ import annotations

from collections import OrderedDict
import logging
from typing import List
from uuid import uuid4

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from nfldfs.api.schemas import (
    LineupBatchResponse,
    LineupPlayerResponse,
    LineupRequest,
    LineupResponse,
    NewsRequest,
    PlayersResponse,
    PlayerUsageResponse,
)
from nfldfs.config import FD_NFL, RosterRules
from nfldfs.ingest import parse_players_csv
from nfldfs.news import analyze_player_news
from nfldfs.optimizer import Lineup, build_lineups
from nfldfs.pool import calculate_exposures, export_lineups_to_csv


logger = logging.getLogger(__name__)

# Generated batches kept in memory for CSV export; oldest are dropped first.
MAX_STORED_RUNS = 50


def _lineup_to_response(lineup: Lineup, rules: RosterRules) -> LineupResponse:
    return LineupResponse(
        lineup_id=lineup.lineup_id,
        salary=lineup.total_salary,
        projection=lineup.total_projection,
        players=[
            LineupPlayerResponse(
                slot=rules.slot_labels[slot],
                player_id=player.player_id,
                name=player.name,
                team=player.team,
                position=player.position,
                salary=player.salary,
                projection=player.effective_projection,
            )
            for slot, player in lineup.slots(rules).items()
        ],
    )


def _usage_to_response(lineups: List[Lineup]) -> List[PlayerUsageResponse]:
    return [
        PlayerUsageResponse(
            player_id=usage.player_id,
            name=usage.name,
            team=usage.team,
            position=usage.position,
            count=usage.count,
            exposure=usage.percentage / 100.0,
        )
        for usage in calculate_exposures(lineups)
    ]


def create_app(rules: RosterRules = FD_NFL) -> FastAPI:
    app = FastAPI(title="nfldfs optimizer")
    runs: "OrderedDict[str, List[Lineup]]" = OrderedDict()
    app.state.runs = runs

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/players/parse", response_model=PlayersResponse)
    async def parse_players(players: UploadFile = File(...)) -> PlayersResponse:
        contents = await players.read()
        if not contents:
            raise HTTPException(status_code=400, detail="players file is empty")
        try:
            parsed = parse_players_csv(contents.decode("utf-8-sig"))
        except UnicodeDecodeError as exc:
            raise HTTPException(status_code=400, detail="players file must be UTF-8 text") from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return PlayersResponse(count=len(parsed), players=parsed)

    @app.post("/players/news", response_model=PlayersResponse)
    async def refresh_news(request: NewsRequest) -> PlayersResponse:
        enriched = analyze_player_news(request.players, seed=request.seed, mode=request.mode)
        return PlayersResponse(count=len(enriched), players=enriched)

    @app.post("/lineups", response_model=LineupBatchResponse)
    async def build(request: LineupRequest) -> LineupBatchResponse:
        # The batch is CPU bound; keep it off the event loop.
        output = await run_in_threadpool(
            build_lineups,
            request.players,
            request.settings,
            lock_player_ids=request.lock_player_ids,
            exclude_player_ids=request.exclude_player_ids,
            exposure_limits=request.exposure_limits,
            seed=request.seed,
            rules=rules,
        )

        run_id = uuid4().hex
        runs[run_id] = output.lineups
        while len(runs) > MAX_STORED_RUNS:
            runs.popitem(last=False)

        logger.info("Run %s produced %s lineups", run_id, len(output.lineups))
        return LineupBatchResponse(
            run_id=run_id,
            requested=request.settings.number_of_lineups,
            attempts=output.attempts,
            lineups=[_lineup_to_response(lineup, rules) for lineup in output.lineups],
            player_usage=_usage_to_response(output.lineups),
            warnings=output.warnings,
            message=output.message,
        )

    @app.get("/runs/{run_id}/export.csv")
    async def export_csv(run_id: str) -> Response:
        lineups = runs.get(run_id)
        if lineups is None:
            raise HTTPException(status_code=404, detail="Run not found")
        return Response(
            content=export_lineups_to_csv(lineups, rules=rules),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename=fanduel-lineups-{run_id}.csv"},
        )

    return app
