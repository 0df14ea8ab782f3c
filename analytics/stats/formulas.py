from __future__ import annotations

"""Shared box-score formulas.

Every ratio goes through `safe_div`, so a non-positive denominator yields 0.0
rather than NaN/Infinity.
"""

from typing import Dict, Iterable, Mapping

from .config import FTA_POSS_WEIGHT
from .types import MID_ZONES, RIM_ZONES, BoxTotals, ShotZone, ZoneLine, safe_div, sum_zones


def shot_attempts(box: BoxTotals) -> float:
    """True-shooting attempts: FGA + 0.44 * FTA."""
    return box.fga + FTA_POSS_WEIGHT * box.fta


def usage_possessions(box: BoxTotals) -> float:
    """FGA + 0.44 * FTA + TOV (no offensive-rebound credit)."""
    return shot_attempts(box) + box.tov


def possessions(box: BoxTotals) -> float:
    """FGA + 0.44 * FTA + TOV - OREB."""
    return usage_possessions(box) - box.off_reb


def true_shooting(points: float, box: BoxTotals) -> float:
    return safe_div(points, 2.0 * shot_attempts(box))


def effective_fg(box: BoxTotals) -> float:
    return safe_div(box.fgm + 0.5 * box.p3m, box.fga)


def shooting_splits(points: float, box: BoxTotals) -> Dict[str, float]:
    return {
        "fg%": safe_div(box.fgm, box.fga),
        "3p%": safe_div(box.p3m, box.p3a),
        "ft%": safe_div(box.ftm, box.fta),
        "ts%": true_shooting(points, box),
        "efg%": effective_fg(box),
        "3par": safe_div(box.p3a, box.fga),
        "ftr": safe_div(box.fta, box.fga),
    }


def combined_zone_pct(zones: Mapping[ShotZone, ZoneLine], members: Iterable[ShotZone], legacy_m: float, legacy_a: float) -> float:
    """Pooled percentage over `members`; legacy rimM/rimA-style totals when no zone attempts exist."""

    pooled = sum_zones(zones, members)
    if pooled.attempts > 0:
        return pooled.pct()
    return safe_div(legacy_m, legacy_a)


def zone_split_pcts(box: BoxTotals) -> Dict[str, float]:
    return {
        "rim%": combined_zone_pct(box.zones, RIM_ZONES, box.rim_m, box.rim_a),
        "mid%": combined_zone_pct(box.zones, MID_ZONES, box.mid_m, box.mid_a),
    }


def zone_columns(zones: Mapping[ShotZone, ZoneLine], games: float = 1.0) -> Dict[str, float]:
    """`zone_*_m` / `zone_*_a` (divided by `games`) and `zone_*_pct` for all 10 zones."""

    out: Dict[str, float] = {}
    for z in ShotZone:
        line = zones.get(z, ZoneLine())
        out[f"{z.stat_key}_m"] = safe_div(line.made, games)
        out[f"{z.stat_key}_a"] = safe_div(line.attempts, games)
        out[f"{z.stat_key}_pct"] = line.pct()
    return out
