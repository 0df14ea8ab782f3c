from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from analytics.stats.leaders import leaderboard_payload
from analytics.stats.metrics import list_metrics
from analytics.stats.types import FilterCriterion, LeaderboardQuery, SortSpec
from app.schemas.leaderboard import LeaderboardQueryRequest, LeaderboardRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_query(req: LeaderboardQueryRequest) -> LeaderboardQuery:
    return LeaderboardQuery(
        mode=req.mode,
        active_filters=tuple(
            FilterCriterion(category=f.category, operator=f.operator, value=f.value)
            for f in req.activeFilters
            if f.type == "stat" and f.category
        ),
        sort=SortSpec(key=req.sortConfig.key, direction=req.sortConfig.direction),
        selected_teams=tuple(req.selectedTeams),
        selected_positions=tuple(req.selectedPositions),
        search_query=req.searchQuery,
    )


@router.post("/api/stats/leaderboard")
async def api_stats_leaderboard(req: LeaderboardRequest):
    """Derived leaderboard rows + heatmap ranges for one teams/schedule snapshot.

    Note:
        - Stateless: the whole snapshot travels with the request and nothing is cached here.
    """
    try:
        return leaderboard_payload(req.teams, req.schedule, _to_query(req.query))
    except ValueError as e:
        logger.warning("leaderboard query rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/api/stats/leaderboard/metrics")
async def api_stats_leaderboard_metrics(view: Optional[str] = None):
    """Column/filter definitions (key, label, category, kind) for the leaderboard UI."""
    if view is not None and view not in ("Players", "Teams"):
        raise HTTPException(status_code=400, detail=f"Unknown view: {view}")
    metrics = list_metrics(views=[view] if view else None)
    return {
        "metrics": [
            {
                "key": m.key,
                "label": m.label,
                "category": m.category,
                "kind": m.kind,
                "views": list(m.views),
                "heatmap": m.heatmap,
                "inverse": m.inverse,
            }
            for m in metrics
        ]
    }
