from __future__ import annotations

"""Player-level derived metrics.

Shooting and zone numbers only need the player's own totals. Rate stats
(usage, assist, rebound, steal, block) need team-wide context, so
`TeamContext` must be built for the player's team first.

All rate stats use the on-court share `teamMinutes / 5`:

    USG% = POSS_p * (TM / 5) / (MP * (FGA_t + 0.44*FTA_t + TOV_t))
    AST% = AST / ((MP / (TM / 5)) * FGM_t - FGM)
    ORB% = OREB * (TM / 5) / (MP * (OREB_t + DREB_opp))
    STL% = STL * (TM / 5) / (MP * POSS_opp)
    BLK% = BLK * (TM / 5) / (MP * (FGA_opp - 3PA_opp))
"""

from typing import Dict

from .config import LINEUP_SIZE
from .formulas import shooting_splits, usage_possessions, zone_columns, zone_split_pcts
from .types import PlayerRow, RosterPlayer, Team, TeamContext, safe_div


def compute_player_stats(player: RosterPlayer, ctx: TeamContext) -> Dict[str, float]:
    """Player totals extended with shooting splits, zone percentages and rate stats."""

    line = player.stats
    box = line.box
    t = ctx.totals
    o = ctx.opp_totals

    stats = line.to_dict()
    stats.update(zone_columns(box.zones))
    stats.update(shooting_splits(line.pts, box))
    stats.update(zone_split_pcts(box))

    floor_minutes = ctx.team_minutes / LINEUP_SIZE
    mp = line.mp
    own_poss = usage_possessions(box)

    stats["tov%"] = safe_div(box.tov, own_poss)
    stats["usg%"] = safe_div(own_poss * floor_minutes, mp * ctx.team_usage)
    stats["ast%"] = safe_div(box.ast, safe_div(mp, floor_minutes) * t.fgm - box.fgm)
    stats["orb%"] = safe_div(box.off_reb * floor_minutes, mp * (t.off_reb + o.def_reb))
    stats["drb%"] = safe_div(box.def_reb * floor_minutes, mp * (t.def_reb + o.off_reb))
    stats["trb%"] = safe_div(box.reb * floor_minutes, mp * (t.reb + o.reb))
    stats["stl%"] = safe_div(box.stl * floor_minutes, mp * ctx.opp_poss)
    stats["blk%"] = safe_div(box.blk * floor_minutes, mp * (o.fga - o.p3a))
    return stats


def build_player_row(player: RosterPlayer, team: Team, ctx: TeamContext) -> PlayerRow:
    return {
        "id": player.player_id,
        "name": player.name,
        "position": player.position,
        "ovr": player.ovr,
        "attributes": dict(player.attributes),
        "teamId": team.team_id,
        "teamName": team.name,
        "teamCity": team.city,
        "stats": compute_player_stats(player, ctx),
    }
