from __future__ import annotations

"""Team-level derived metrics.

Inputs are the team's roster `rawTotals` and reconstructed `rawOppTotals`.
Counting stats are reported per game (games played floored at 1); ratios
are reported on 0..1 and guarded against empty denominators.

Also builds the `TeamContext` consumed by player rate stats.
"""

from typing import Dict, Sequence, Tuple

from .config import RATING_SCALE, TEAM_MINUTES_PER_GAME
from .formulas import (
    possessions,
    shooting_splits,
    usage_possessions,
    zone_columns,
    zone_split_pcts,
)
from .opponents import OpponentReconstruction
from .totals import TeamRecord, team_record
from .types import BoxTotals, ScheduledGame, Team, TeamContext, TeamRow, safe_div

_PER_GAME_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("reb", "reb"),
    ("oreb", "off_reb"),
    ("dreb", "def_reb"),
    ("ast", "ast"),
    ("stl", "stl"),
    ("blk", "blk"),
    ("tov", "tov"),
    ("pf", "pf"),
    ("fgm", "fgm"),
    ("fga", "fga"),
    ("p3m", "p3m"),
    ("p3a", "p3a"),
    ("ftm", "ftm"),
    ("fta", "fta"),
)

_OPP_PER_GAME_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("opp_ast", "ast"),
    ("opp_reb", "reb"),
    ("opp_oreb", "off_reb"),
    ("opp_dreb", "def_reb"),
    ("opp_stl", "stl"),
    ("opp_blk", "blk"),
    ("opp_tov", "tov"),
    ("opp_pf", "pf"),
)


def team_minutes(team: Team, games: int) -> float:
    """Summed roster minutes, or regulation minutes when the roster logged none."""
    total = sum(p.stats.mp for p in team.roster)
    if total > 0:
        return total
    return games * TEAM_MINUTES_PER_GAME


def build_team_context(team: Team, games: int, totals: BoxTotals, opp_totals: BoxTotals) -> TeamContext:
    return TeamContext(
        team_id=team.team_id,
        games_played=games,
        totals=totals,
        opp_totals=opp_totals,
        team_minutes=team_minutes(team, games),
        team_poss=possessions(totals),
        opp_poss=possessions(opp_totals),
        team_usage=usage_possessions(totals),
    )


def pace(team_poss: float, opp_poss: float, games: int) -> float:
    """Possessions per game, averaged with the opponent's when opponent data exists."""
    if opp_poss > 0:
        return safe_div(team_poss + opp_poss, 2.0 * games)
    return safe_div(team_poss, games)


def compute_team_stats(record: TeamRecord, ctx: TeamContext) -> Dict[str, float]:
    """Derived per-game / percentage / advanced metrics for one team."""

    gp = ctx.games_played
    t = ctx.totals
    o = ctx.opp_totals

    stats: Dict[str, float] = {
        "g": float(gp),
        "mp": 48.0,
        "pts": safe_div(record.points_for, gp),
        "pa": safe_div(record.points_against, gp),
        "pm": safe_div(record.points_for - record.points_against, gp),
        "winPct": safe_div(record.wins, record.wins + record.losses),
    }
    for key, name in _PER_GAME_FIELDS:
        stats[key] = safe_div(getattr(t, name), gp)

    stats.update(shooting_splits(record.points_for, t))
    stats.update(zone_split_pcts(t))
    stats.update(zone_columns(t.zones, gp))
    stats["rimM"] = safe_div(t.rim_m, gp)
    stats["rimA"] = safe_div(t.rim_a, gp)
    stats["midM"] = safe_div(t.mid_m, gp)
    stats["midA"] = safe_div(t.mid_a, gp)

    ortg = safe_div(RATING_SCALE * record.points_for, ctx.team_poss)
    drtg = safe_div(RATING_SCALE * record.points_against, ctx.opp_poss)
    stats.update(
        {
            "tov%": safe_div(t.tov, ctx.team_poss),
            "orb%": safe_div(t.off_reb, t.off_reb + o.def_reb),
            "drb%": safe_div(t.def_reb, t.def_reb + o.off_reb),
            "trb%": safe_div(t.reb, t.reb + o.reb),
            "ast%": safe_div(t.ast, t.fgm),
            "stl%": safe_div(t.stl, ctx.opp_poss),
            "blk%": safe_div(t.blk, o.fga - o.p3a),
            "poss": safe_div(ctx.team_poss, gp),
            "pace": pace(ctx.team_poss, ctx.opp_poss, gp),
            "ortg": ortg,
            "drtg": drtg,
            "nrtg": ortg - drtg,
        }
    )

    stats["opp_pts"] = stats["pa"]
    stats["opp_fg%"] = safe_div(o.fgm, o.fga)
    stats["opp_3p%"] = safe_div(o.p3m, o.p3a)
    for key, name in _OPP_PER_GAME_FIELDS:
        stats[key] = safe_div(getattr(o, name), gp)

    return stats


def build_team_row(
    team: Team,
    schedule: Sequence[ScheduledGame],
    totals: BoxTotals,
    opp: OpponentReconstruction,
    games: int,
) -> Tuple[TeamRow, TeamContext]:
    record = team_record(team, schedule)
    ctx = build_team_context(team, games, totals, opp.totals)
    row: TeamRow = {
        "id": team.team_id,
        "name": team.name,
        "city": team.city,
        "wins": record.wins,
        "losses": record.losses,
        "stats": compute_team_stats(record, ctx),
        "rawTotals": totals.to_dict(),
        "rawOppTotals": opp.totals.to_dict(),
    }
    return row, ctx

