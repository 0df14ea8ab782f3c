"""Statistical analytics: team/player derived metrics, filters and leaderboards.

This package is designed to be:
- Deterministic (a pure function of the teams/schedule/query snapshot)
- Defensive to missing/partial data (missing -> 0, guarded divisions)
- Free of caching; memoization belongs to the caller

Most callers only need `compute_leaderboard`.
"""

from __future__ import annotations

from .leaders import compute_leaderboard, compute_player_rows, compute_team_rows, leaderboard_payload
from .metrics import build_metric_registry, get_metric, list_metrics
from .ranges import RangeProfiler
from .types import FilterCriterion, LeaderboardQuery, ShotZone, SortSpec

__all__ = [
    "compute_leaderboard",
    "compute_player_rows",
    "compute_team_rows",
    "leaderboard_payload",
    "build_metric_registry",
    "get_metric",
    "list_metrics",
    "RangeProfiler",
    "FilterCriterion",
    "LeaderboardQuery",
    "ShotZone",
    "SortSpec",
]
