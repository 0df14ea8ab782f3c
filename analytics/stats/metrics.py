from __future__ import annotations

"""Metric registry and value lookup.

This module defines every leaderboard column key and how its value is read
from a derived row, for both view modes.

The goal is to:
- centralize metric definitions (single source of truth)
- keep attribute ratings (`def`, `attr_reb`, `attr_blk`, ...) apart from the
  per-game statistics that share a short name (`reb`, `blk`, ...)
- keep lookups deterministic and safe for missing data (unknown -> 0.0)
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional, Tuple, Union

from .types import ShotZone, coerce_float, safe_div

MetricCategory = Literal["Common", "Traditional", "Shooting", "Advanced", "Opponent", "Attributes"]
# counting: season totals for players (per-game at read time), already per-game for teams
# percent:  stored on 0..1
# rate:     compared as stored (ratings, pace, ovr, ...)
# text:     string columns (sort only)
ValueKind = Literal["counting", "percent", "rate", "text"]
ValueSource = Literal["stats", "attributes", "row"]

PLAYERS: Tuple[str, ...] = ("Players",)
TEAMS: Tuple[str, ...] = ("Teams",)
BOTH: Tuple[str, ...] = ("Players", "Teams")


@dataclass(frozen=True)
class Metric:
    """Definition of a single leaderboard column.

    `player_field` / `team_field` name the key inside the row's `stats`
    (or `attributes` / the row itself, depending on `source`).
    """

    key: str
    label: str
    category: MetricCategory
    kind: ValueKind
    source: ValueSource = "stats"
    player_field: str = ""
    team_field: str = ""
    views: Tuple[str, ...] = BOTH
    heatmap: bool = True
    inverse: bool = False

    def field_for(self, mode: str) -> str:
        f = self.team_field if mode == "Teams" else self.player_field
        return f or self.key


# Attribute column key -> RosterPlayer rating field. Keys that differ from the
# field exist because the field name is also a per-game statistic.
ATTRIBUTE_FIELDS: Dict[str, str] = {
    "ins": "ins", "out": "out", "ath": "ath", "plm": "plm", "def": "def", "attr_reb": "reb",
    "layup": "layup", "dunk": "dunk", "closeShot": "closeShot", "postPlay": "postPlay",
    "hands": "hands", "drawFoul": "drawFoul",
    "midRange": "midRange", "threeTop": "threeTop", "three45": "three45", "threeCorner": "threeCorner",
    "ft": "ft", "shotIq": "shotIq", "offConsist": "offConsist",
    "passAcc": "passAcc", "handling": "handling", "spdBall": "spdBall", "passIq": "passIq",
    "passVision": "passVision",
    "intDef": "intDef", "perDef": "perDef", "steal": "steal", "attr_blk": "blk",
    "helpDefIq": "helpDefIq", "passPerc": "passPerc", "defConsist": "defConsist",
    "offReb": "offReb", "defReb": "defReb",
    "speed": "speed", "agility": "agility", "strength": "strength", "vertical": "vertical",
    "stamina": "stamina", "hustle": "hustle", "durability": "durability",
}

# Alternate spellings accepted for statistic keys.
STAT_KEY_ALIASES: Dict[str, str] = {
    "3pm": "p3m",
    "3pa": "p3a",
    "plusMinus": "pm",
}


def build_metric_registry() -> Dict[str, Metric]:
    """Return the full metric registry.

    Keys are stable identifiers shared with the UI's column/filter definitions.
    """

    metrics: List[Metric] = []

    # Common
    metrics += [
        Metric("name", "Name", "Common", "text", source="row", team_field="city", heatmap=False),
        Metric("position", "POS", "Common", "text", source="row", views=PLAYERS, heatmap=False),
        Metric("ovr", "OVR", "Common", "rate", source="row", views=PLAYERS),
        Metric("wins", "W", "Common", "rate", source="row", views=TEAMS),
        Metric("losses", "L", "Common", "rate", source="row", views=TEAMS, inverse=True),
        Metric("winPct", "WIN%", "Common", "percent", views=TEAMS),
    ]

    # Traditional
    metrics += [
        Metric("g", "G", "Traditional", "rate", heatmap=False),
        Metric("mp", "MIN", "Traditional", "counting", heatmap=False),
        Metric("pts", "PTS", "Traditional", "counting"),
        Metric("pa", "PA", "Traditional", "rate", views=TEAMS, inverse=True),
        Metric("reb", "REB", "Traditional", "counting"),
        Metric("oreb", "OREB", "Traditional", "counting", player_field="offReb"),
        Metric("dreb", "DREB", "Traditional", "counting", player_field="defReb"),
        Metric("ast", "AST", "Traditional", "counting"),
        Metric("stl", "STL", "Traditional", "counting"),
        Metric("blk", "BLK", "Traditional", "counting"),
        Metric("tov", "TOV", "Traditional", "counting", inverse=True),
        Metric("pf", "PF", "Traditional", "counting", inverse=True),
        Metric("fgm", "FGM", "Traditional", "counting"),
        Metric("fga", "FGA", "Traditional", "counting"),
        Metric("fg%", "FG%", "Traditional", "percent"),
        Metric("p3m", "3PM", "Traditional", "counting"),
        Metric("p3a", "3PA", "Traditional", "counting"),
        Metric("3p%", "3P%", "Traditional", "percent"),
        Metric("ftm", "FTM", "Traditional", "counting"),
        Metric("fta", "FTA", "Traditional", "counting"),
        Metric("ft%", "FT%", "Traditional", "percent"),
        Metric("ts%", "TS%", "Traditional", "percent"),
        Metric("pm", "+/-", "Traditional", "counting", player_field="plusMinus"),
    ]

    # Shooting (legacy pooled splits + 10 zones)
    metrics += [
        Metric("rim%", "RIM%", "Shooting", "percent"),
        Metric("mid%", "MID%", "Shooting", "percent"),
    ]
    for z in ShotZone:
        label = z.value.upper().replace("_", "-")
        metrics += [
            Metric(f"{z.stat_key}_m", f"{label} M", "Shooting", "counting"),
            Metric(f"{z.stat_key}_a", f"{label} A", "Shooting", "counting"),
            Metric(f"{z.stat_key}_pct", f"{label} %", "Shooting", "percent"),
        ]

    # Advanced
    metrics += [
        Metric("efg%", "eFG%", "Advanced", "percent"),
        Metric("tov%", "TOV%", "Advanced", "percent", inverse=True),
        Metric("usg%", "USG%", "Advanced", "percent", views=PLAYERS),
        Metric("ast%", "AST%", "Advanced", "percent"),
        Metric("orb%", "ORB%", "Advanced", "percent"),
        Metric("drb%", "DRB%", "Advanced", "percent"),
        Metric("trb%", "TRB%", "Advanced", "percent"),
        Metric("stl%", "STL%", "Advanced", "percent"),
        Metric("blk%", "BLK%", "Advanced", "percent"),
        Metric("3par", "3PAr", "Advanced", "percent"),
        Metric("ftr", "FTr", "Advanced", "percent"),
        Metric("ortg", "ORTG", "Advanced", "rate", views=TEAMS),
        Metric("drtg", "DRTG", "Advanced", "rate", views=TEAMS, inverse=True),
        Metric("nrtg", "NRTG", "Advanced", "rate", views=TEAMS),
        Metric("poss", "POSS", "Advanced", "rate", views=TEAMS),
        Metric("pace", "PACE", "Advanced", "rate", views=TEAMS),
    ]

    # Opponent (teams only, already per game)
    metrics += [
        Metric("opp_pts", "Opp PTS", "Opponent", "rate", views=TEAMS, inverse=True),
        Metric("opp_fg%", "Opp FG%", "Opponent", "percent", views=TEAMS, inverse=True),
        Metric("opp_3p%", "Opp 3P%", "Opponent", "percent", views=TEAMS, inverse=True),
        Metric("opp_ast", "Opp AST", "Opponent", "rate", views=TEAMS, inverse=True),
        Metric("opp_reb", "Opp REB", "Opponent", "rate", views=TEAMS, inverse=True),
        Metric("opp_oreb", "Opp OREB", "Opponent", "rate", views=TEAMS, inverse=True),
        Metric("opp_dreb", "Opp DREB", "Opponent", "rate", views=TEAMS, inverse=True),
        Metric("opp_stl", "Opp STL", "Opponent", "rate", views=TEAMS, inverse=True),
        Metric("opp_blk", "Opp BLK", "Opponent", "rate", views=TEAMS, inverse=True),
        Metric("opp_tov", "Opp TOV", "Opponent", "rate", views=TEAMS),
        Metric("opp_pf", "Opp PF", "Opponent", "rate", views=TEAMS),
    ]

    # Attributes (players only, static ratings)
    for key, rating_field in ATTRIBUTE_FIELDS.items():
        metrics.append(
            Metric(key, key, "Attributes", "rate", source="attributes", player_field=rating_field, views=PLAYERS, heatmap=False)
        )

    return {m.key: m for m in metrics}


_REGISTRY: Dict[str, Metric] = build_metric_registry()


def get_metric(key: str, *, registry: Optional[Mapping[str, Metric]] = None) -> Optional[Metric]:
    """Resolve a column key (or accepted alias) to its Metric, None when unknown."""

    reg = registry if registry is not None else _REGISTRY
    if key in reg:
        return reg[key]
    alias = STAT_KEY_ALIASES.get(key)
    if alias is not None:
        return reg.get(alias)
    return None


def list_metrics(
    *,
    registry: Optional[Mapping[str, Metric]] = None,
    views: Optional[Iterable[str]] = None,
    categories: Optional[Iterable[MetricCategory]] = None,
    keys: Optional[Iterable[str]] = None,
) -> List[Metric]:
    """Filter metrics from the registry (registry order is kept)."""

    reg = dict(registry or _REGISTRY)
    if keys is not None:
        return [reg[k] for k in keys if k in reg]

    view_set = set(views) if views is not None else None
    cat_set = set(categories) if categories is not None else None
    out: List[Metric] = []
    for m in reg.values():
        if view_set is not None and not view_set.intersection(m.views):
            continue
        if cat_set is not None and m.category not in cat_set:
            continue
        out.append(m)
    return out


def metric_value(row: Mapping[str, Any], metric: Metric, mode: str) -> Union[float, str]:
    """Display value of `metric` for a derived row.

    Player counting stats are converted to per game (games floored at 1);
    percentages stay on 0..1. Missing values read as 0.0 ("" for text).
    """

    field = metric.field_for(mode)

    if metric.source == "row":
        v = row.get(field)
        if metric.kind == "text":
            return str(v or "")
        return coerce_float(v)

    if metric.source == "attributes":
        if mode != "Players":
            return 0.0
        attrs = row.get("attributes") or {}
        return coerce_float(attrs.get(field)) if isinstance(attrs, Mapping) else 0.0

    stats = row.get("stats") or {}
    if not isinstance(stats, Mapping):
        return 0.0
    v = coerce_float(stats.get(field))
    if metric.kind == "counting" and mode == "Players":
        games = max(1, int(coerce_float(stats.get("g"))))
        return safe_div(v, games)
    return v
