from __future__ import annotations

"""Leaderboard generation.

This module turns season totals (rosters + schedule) into leaderboard rows.

Pipeline (every call recomputes from the given snapshot; nothing is cached):
1) roster totals per team                      (totals.py)
2) opponent totals, exact or approximated      (opponents.py)
3) team metrics + team context                 (team_metrics.py)
4) player metrics using the team context       (player_metrics.py)
5) heatmap ranges over the unfiltered view     (ranges.py)
6) filters + sort                              (filters.py)

Inputs are never mutated, so callers may hold the same `teams` / `schedule`
objects across calls and memoize on their side.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from .filters import rank_rows
from .opponents import reconstruct_all
from .player_metrics import build_player_row
from .ranges import profile_player_rows, profile_team_rows
from .team_metrics import build_team_row
from .totals import aggregate_all, games_played
from .types import (
    LeaderboardQuery,
    PlayerRow,
    ScheduledGame,
    StatRange,
    Team,
    TeamContext,
    TeamRow,
    normalize_schedule,
    normalize_teams,
)

logger = logging.getLogger(__name__)

QueryLike = Union[LeaderboardQuery, Mapping[str, Any], None]


def _coerce_query(query: QueryLike) -> LeaderboardQuery:
    if query is None:
        return LeaderboardQuery()
    if isinstance(query, LeaderboardQuery):
        return query
    return LeaderboardQuery.from_mapping(query)


def compute_team_rows(
    teams: List[Team],
    schedule: List[ScheduledGame],
) -> Tuple[List[TeamRow], Dict[str, TeamContext]]:
    """Team rows (in input order) and the per-team context for player metrics."""

    raw_totals = aggregate_all(teams)
    opponents = reconstruct_all(teams, schedule, raw_totals)

    rows: List[TeamRow] = []
    contexts: Dict[str, TeamContext] = {}
    for team in teams:
        gp = games_played(team.team_id, schedule)
        row, ctx = build_team_row(team, schedule, raw_totals[team.team_id], opponents[team.team_id], gp)
        rows.append(row)
        contexts[team.team_id] = ctx
    return rows, contexts


def compute_player_rows(teams: List[Team], contexts: Mapping[str, TeamContext]) -> List[PlayerRow]:
    """Rows for every player who appeared in at least one game."""

    rows: List[PlayerRow] = []
    for team in teams:
        ctx = contexts[team.team_id]
        for player in team.roster:
            if player.stats.g <= 0:
                continue
            rows.append(build_player_row(player, team, ctx))
    return rows


def compute_leaderboard(
    teams: Iterable[Any],
    schedule: Iterable[Any],
    query: QueryLike = None,
) -> Tuple[List[Union[PlayerRow, TeamRow]], Dict[str, StatRange]]:
    """Compute ordered leaderboard rows and heatmap ranges for one query.

    Args:
        teams: `Team` records or the collaborator's team mappings.
        schedule: `ScheduledGame` records or game mappings.
        query: `LeaderboardQuery`, its JSON shape, or None for the default
            Players view sorted by points per game.

    Returns:
        (rows, ranges). Ranges cover the unfiltered view so colors stay
        stable while filters change.

    Raises:
        ValueError: the query mapping names an unknown mode or sort direction.
    """

    q = _coerce_query(query)
    team_list = normalize_teams(teams)
    games = normalize_schedule(schedule)

    team_rows, contexts = compute_team_rows(team_list, games)

    rows: List[Any]
    if q.mode == "Teams":
        rows = team_rows
        ranges = profile_team_rows(team_rows)
    else:
        rows = compute_player_rows(team_list, contexts)
        ranges = profile_player_rows(rows)

    ranked = rank_rows(rows, q)
    logger.debug(
        "LEADERBOARD_BUILT mode=%s teams=%d games=%d rows=%d shown=%d sort=%s:%s",
        q.mode,
        len(team_list),
        len(games),
        len(rows),
        len(ranked),
        q.sort.key,
        q.sort.direction,
    )
    return ranked, ranges.as_dict()


def leaderboard_payload(
    teams: Iterable[Any],
    schedule: Iterable[Any],
    query: QueryLike = None,
) -> Dict[str, Any]:
    """JSON-ready `{"rows": [...], "ranges": {...}}` for the presentation layer."""

    rows, ranges = compute_leaderboard(teams, schedule, query)
    return {"rows": rows, "ranges": ranges}

