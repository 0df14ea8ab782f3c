from __future__ import annotations

"""Typed containers used by the leaderboard analytics layer.

The external game/roster collaborator hands us JSON-like mappings using its
own camelCase keys:

    team -> {
        "id": str, "name": str, "city": str | None,
        "wins": int, "losses": int,
        "roster": [ {"id", "name", "position", "ovr", <ratings>..., "stats": {...}} ],
    }

    game -> {
        "id", "homeTeamId", "awayTeamId", "date", "homeScore", "awayScore",
        "played": bool, "homeStats": {...} | None, "awayStats": {...} | None,
    }

This module defines:
- Normalized frozen dataclasses used internally (`StatLine`, `BoxTotals`, ...)
- Query records (`FilterCriterion`, `SortSpec`, `LeaderboardQuery`)
- TypedDicts for the JSON-like output rows (`PlayerRow`, `TeamRow`)

Design goal: keep the boundary between "raw input" and "derived view" explicit.
Nothing here mutates its input.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional, Sequence, Tuple, TypedDict

from .config import DEFAULT_SORT_DIRECTION, DEFAULT_SORT_KEY

logger = logging.getLogger(__name__)


# ----------------------------
# Helpers
# ----------------------------


def coerce_int(value: Any, default: int = 0) -> int:
    try:
        if value is None:
            return default
        return int(value)
    except (TypeError, ValueError):
        return default


def coerce_float(value: Any, default: float = 0.0) -> float:
    try:
        if value is None:
            return default
        return float(value)
    except (TypeError, ValueError):
        return default


def safe_div(n: float, d: float, default: float = 0.0) -> float:
    """Divide, returning `default` for non-positive or non-numeric denominators."""
    try:
        d = float(d)
        if d <= 0.0:
            return default
        return float(n) / d
    except (TypeError, ValueError, ZeroDivisionError):
        return default


def _first(raw: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for k in keys:
        if k in raw and raw[k] is not None:
            return raw[k]
    return None


# ----------------------------
# Shot zones
# ----------------------------


class ShotZone(str, Enum):
    RIM = "rim"
    PAINT = "paint"
    MID_L = "mid_l"
    MID_C = "mid_c"
    MID_R = "mid_r"
    C3_L = "c3_l"
    C3_R = "c3_r"
    ATB3_L = "atb3_l"
    ATB3_C = "atb3_c"
    ATB3_R = "atb3_r"

    @property
    def stat_key(self) -> str:
        """Prefix used for derived zone columns, e.g. `zone_rim` -> `zone_rim_pct`."""
        return f"zone_{self.value}"


# Combined "rim%" and "mid%" groupings.
RIM_ZONES: Tuple[ShotZone, ...] = (ShotZone.RIM, ShotZone.PAINT)
MID_ZONES: Tuple[ShotZone, ...] = (ShotZone.MID_L, ShotZone.MID_C, ShotZone.MID_R)


@dataclass(frozen=True, slots=True)
class ZoneLine:
    made: float = 0.0
    attempts: float = 0.0

    def pct(self) -> float:
        return safe_div(self.made, self.attempts)

    def plus(self, other: "ZoneLine", factor: float = 1.0) -> "ZoneLine":
        return ZoneLine(self.made + other.made * factor, self.attempts + other.attempts * factor)


def empty_zones() -> Dict[ShotZone, ZoneLine]:
    return {z: ZoneLine() for z in ShotZone}


def parse_zones(raw: Mapping[str, Any]) -> Dict[ShotZone, ZoneLine]:
    """Read the 20 `{zone}_m` / `{zone}_a` keys (optionally `zone_`-prefixed)."""

    zones = empty_zones()
    for z in ShotZone:
        made = _first(raw, (f"{z.value}_m", f"{z.stat_key}_m"))
        att = _first(raw, (f"{z.value}_a", f"{z.stat_key}_a"))
        zones[z] = ZoneLine(coerce_float(made), coerce_float(att))
    return zones


def sum_zones(zones: Mapping[ShotZone, ZoneLine], members: Iterable[ShotZone]) -> ZoneLine:
    out = ZoneLine()
    for z in members:
        out = out.plus(zones.get(z, ZoneLine()))
    return out


def zones_to_dict(zones: Mapping[ShotZone, ZoneLine]) -> Dict[str, float]:
    out: Dict[str, float] = {}
    for z in ShotZone:
        line = zones.get(z, ZoneLine())
        out[f"{z.stat_key}_m"] = line.made
        out[f"{z.stat_key}_a"] = line.attempts
    return out


# ----------------------------
# Box totals
# ----------------------------

# field name -> accepted external keys (first is the canonical output key)
_BOX_KEYS: Dict[str, Tuple[str, ...]] = {
    "fgm": ("fgm",),
    "fga": ("fga",),
    "p3m": ("p3m", "3pm"),
    "p3a": ("p3a", "3pa"),
    "ftm": ("ftm",),
    "fta": ("fta",),
    "reb": ("reb",),
    "off_reb": ("offReb", "oreb"),
    "def_reb": ("defReb", "dreb"),
    "ast": ("ast",),
    "stl": ("stl",),
    "blk": ("blk",),
    "tov": ("tov",),
    "pf": ("pf",),
    "rim_m": ("rimM",),
    "rim_a": ("rimA",),
    "mid_m": ("midM",),
    "mid_a": ("midA",),
}

# Fields carried by an embedded opponent box score.
OPPONENT_BOX_FIELDS: Tuple[str, ...] = (
    "fgm", "fga", "p3m", "p3a", "ftm", "fta",
    "reb", "off_reb", "def_reb", "ast", "stl", "blk", "tov", "pf",
)


@dataclass(frozen=True, slots=True)
class BoxTotals:
    """Team-level counting totals (season roster sum, one game, or opponents)."""

    fgm: float = 0.0
    fga: float = 0.0
    p3m: float = 0.0
    p3a: float = 0.0
    ftm: float = 0.0
    fta: float = 0.0
    reb: float = 0.0
    off_reb: float = 0.0
    def_reb: float = 0.0
    ast: float = 0.0
    stl: float = 0.0
    blk: float = 0.0
    tov: float = 0.0
    pf: float = 0.0
    rim_m: float = 0.0
    rim_a: float = 0.0
    mid_m: float = 0.0
    mid_a: float = 0.0
    zones: Mapping[ShotZone, ZoneLine] = field(default_factory=empty_zones)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "BoxTotals":
        values = {name: coerce_float(_first(raw, keys)) for name, keys in _BOX_KEYS.items()}
        return cls(**values, zones=parse_zones(raw))

    def to_dict(self) -> Dict[str, float]:
        """External (camelCase) shape used for `rawTotals` / `rawOppTotals`."""
        out = {keys[0]: getattr(self, name) for name, keys in _BOX_KEYS.items()}
        out.update(zones_to_dict(self.zones))
        return out


def sum_box_totals(parts: Iterable[Tuple[BoxTotals, float]], names: Sequence[str] = tuple(_BOX_KEYS)) -> BoxTotals:
    """Weighted sum of box totals restricted to `names` (zones summed only with the full field set)."""

    acc: Dict[str, float] = {name: 0.0 for name in names}
    zones = empty_zones()
    with_zones = set(names) == set(_BOX_KEYS)
    for box, factor in parts:
        for name in names:
            acc[name] += getattr(box, name) * factor
        if with_zones:
            for z in ShotZone:
                zones[z] = zones[z].plus(box.zones.get(z, ZoneLine()), factor)
    return BoxTotals(**acc, zones=zones)


# ----------------------------
# Player season line
# ----------------------------

_STAT_KEYS: Dict[str, Tuple[str, ...]] = {
    "g": ("g",),
    "gs": ("gs",),
    "mp": ("mp",),
    "pts": ("pts",),
    "plus_minus": ("plusMinus", "pm"),
}


@dataclass(frozen=True, slots=True)
class StatLine:
    """Season cumulative totals for one player.

    Notes:
        - All values are totals; per-game conversion happens at read time.
        - Missing keys default to 0.0.
    """

    g: int = 0
    gs: int = 0
    mp: float = 0.0
    pts: float = 0.0
    plus_minus: float = 0.0
    box: BoxTotals = field(default_factory=BoxTotals)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "StatLine":
        if not isinstance(raw, Mapping):
            return cls()
        return cls(
            g=coerce_int(_first(raw, _STAT_KEYS["g"])),
            gs=coerce_int(_first(raw, _STAT_KEYS["gs"])),
            mp=coerce_float(_first(raw, _STAT_KEYS["mp"])),
            pts=coerce_float(_first(raw, _STAT_KEYS["pts"])),
            plus_minus=coerce_float(_first(raw, _STAT_KEYS["plus_minus"])),
            box=BoxTotals.from_mapping(raw),
        )

    def to_dict(self) -> Dict[str, float]:
        out: Dict[str, float] = {
            "g": float(self.g),
            "gs": float(self.gs),
            "mp": self.mp,
            "pts": self.pts,
            "plusMinus": self.plus_minus,
        }
        out.update(self.box.to_dict())
        return out


# ----------------------------
# League inputs
# ----------------------------


@dataclass(frozen=True, slots=True)
class RosterPlayer:
    player_id: str
    name: str
    position: str
    ovr: float = 0.0
    attributes: Mapping[str, float] = field(default_factory=dict)
    stats: StatLine = field(default_factory=StatLine)


@dataclass(frozen=True, slots=True)
class Team:
    team_id: str
    name: str
    city: str = ""
    wins: int = 0
    losses: int = 0
    roster: Tuple[RosterPlayer, ...] = ()


@dataclass(frozen=True, slots=True)
class ScheduledGame:
    game_id: str
    home_team_id: str
    away_team_id: str
    date: str = ""
    home_score: float = 0.0
    away_score: float = 0.0
    played: bool = False
    home_stats: Optional[BoxTotals] = None
    away_stats: Optional[BoxTotals] = None

    def involves(self, team_id: str) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)

    def side(self, team_id: str) -> Tuple[float, float, str, Optional[BoxTotals]]:
        """(own score, opponent score, opponent id, opponent box) from `team_id`'s side."""
        if team_id == self.home_team_id:
            return self.home_score, self.away_score, self.away_team_id, self.away_stats
        return self.away_score, self.home_score, self.home_team_id, self.home_stats


@dataclass(frozen=True, slots=True)
class TeamContext:
    """Team-wide context needed by player rate stats."""

    team_id: str
    games_played: int
    totals: BoxTotals
    opp_totals: BoxTotals
    team_minutes: float
    team_poss: float
    opp_poss: float
    team_usage: float


# ----------------------------
# Query
# ----------------------------

ViewMode = Literal["Players", "Teams"]
Operator = Literal[">", "<", ">=", "<=", "="]
SortDirection = Literal["asc", "desc"]

VIEW_MODES: Tuple[str, ...] = ("Players", "Teams")
OPERATORS: Tuple[str, ...] = (">", "<", ">=", "<=", "=")
SORT_DIRECTIONS: Tuple[str, ...] = ("asc", "desc")


@dataclass(frozen=True, slots=True)
class FilterCriterion:
    category: str
    operator: str
    value: float


@dataclass(frozen=True, slots=True)
class SortSpec:
    key: str = DEFAULT_SORT_KEY
    direction: str = DEFAULT_SORT_DIRECTION


@dataclass(frozen=True, slots=True)
class LeaderboardQuery:
    mode: str = "Players"
    active_filters: Tuple[FilterCriterion, ...] = ()
    sort: SortSpec = field(default_factory=SortSpec)
    selected_teams: Tuple[str, ...] = ()
    selected_positions: Tuple[str, ...] = ()
    search_query: str = ""

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "LeaderboardQuery":
        """Build a query from the UI's JSON shape.

        Raises:
            ValueError: unknown mode or sort direction.
        """

        mode = str(raw.get("mode") or "Players")
        if mode not in VIEW_MODES:
            raise ValueError(f"Unknown leaderboard mode: {mode!r}")

        sort_any = raw.get("sortConfig") or raw.get("sort") or {}
        key = str(sort_any.get("key") or DEFAULT_SORT_KEY) if isinstance(sort_any, Mapping) else DEFAULT_SORT_KEY
        direction = str(sort_any.get("direction") or DEFAULT_SORT_DIRECTION) if isinstance(sort_any, Mapping) else DEFAULT_SORT_DIRECTION
        if direction not in SORT_DIRECTIONS:
            raise ValueError(f"Unknown sort direction: {direction!r}")

        filters: List[FilterCriterion] = []
        for f in raw.get("activeFilters") or raw.get("active_filters") or []:
            if not isinstance(f, Mapping):
                continue
            # Date filters and other non-stat entries are handled by the caller.
            if f.get("type", "stat") != "stat" or not f.get("category"):
                continue
            filters.append(
                FilterCriterion(
                    category=str(f.get("category")),
                    operator=str(f.get("operator") or ""),
                    value=coerce_float(f.get("value")),
                )
            )

        return cls(
            mode=mode,
            active_filters=tuple(filters),
            sort=SortSpec(key=key, direction=direction),
            selected_teams=tuple(str(t) for t in (raw.get("selectedTeams") or ())),
            selected_positions=tuple(str(p) for p in (raw.get("selectedPositions") or ())),
            search_query=str(raw.get("searchQuery") or ""),
        )


# ----------------------------
# Outputs
# ----------------------------


class StatRange(TypedDict):
    min: float
    max: float


class PlayerRow(TypedDict, total=False):
    id: str
    name: str
    position: str
    ovr: float
    attributes: Dict[str, float]
    teamId: str
    teamName: str
    teamCity: str
    stats: Dict[str, float]


class TeamRow(TypedDict, total=False):
    id: str
    name: str
    city: str
    wins: int
    losses: int
    stats: Dict[str, float]
    rawTotals: Dict[str, float]
    rawOppTotals: Dict[str, float]


# ----------------------------
# Normalization
# ----------------------------

_PLAYER_IDENTITY_KEYS = frozenset({"id", "name", "position", "ovr", "stats", "playoffStats", "tendencies", "attributes"})


def _normalize_player(entry: Mapping[str, Any]) -> RosterPlayer:
    attrs: Dict[str, float] = {}
    nested = entry.get("attributes")
    if isinstance(nested, Mapping):
        for k, v in nested.items():
            attrs[str(k)] = coerce_float(v)
    for k, v in entry.items():
        if k in _PLAYER_IDENTITY_KEYS or isinstance(v, bool):
            continue
        if isinstance(v, (int, float)):
            attrs.setdefault(str(k), float(v))
    return RosterPlayer(
        player_id=str(entry.get("id") or ""),
        name=str(entry.get("name") or ""),
        position=str(entry.get("position") or ""),
        ovr=coerce_float(entry.get("ovr")),
        attributes=attrs,
        stats=StatLine.from_mapping(entry.get("stats") or {}),
    )


def normalize_teams(teams: Iterable[Any]) -> List[Team]:
    """Normalize the collaborator's team list into `Team` records.

    `Team` instances pass through untouched; non-mapping entries are skipped.
    """

    out: List[Team] = []
    for entry in teams or ():
        if isinstance(entry, Team):
            out.append(entry)
            continue
        if not isinstance(entry, Mapping):
            logger.warning("normalize_teams: entry is not a mapping; skipping")
            continue
        roster: List[RosterPlayer] = []
        for p in entry.get("roster") or ():
            if isinstance(p, RosterPlayer):
                roster.append(p)
            elif isinstance(p, Mapping):
                roster.append(_normalize_player(p))
            else:
                logger.warning("normalize_teams: roster entry is not a mapping team=%s; skipping", entry.get("id"))
        out.append(
            Team(
                team_id=str(entry.get("id") or ""),
                name=str(entry.get("name") or ""),
                city=str(entry.get("city") or ""),
                wins=coerce_int(entry.get("wins")),
                losses=coerce_int(entry.get("losses")),
                roster=tuple(roster),
            )
        )
    return out


def normalize_schedule(schedule: Iterable[Any]) -> List[ScheduledGame]:
    """Normalize the collaborator's schedule into `ScheduledGame` records."""

    out: List[ScheduledGame] = []
    for entry in schedule or ():
        if isinstance(entry, ScheduledGame):
            out.append(entry)
            continue
        if not isinstance(entry, Mapping):
            logger.warning("normalize_schedule: entry is not a mapping; skipping")
            continue
        home_stats = entry.get("homeStats")
        away_stats = entry.get("awayStats")
        out.append(
            ScheduledGame(
                game_id=str(entry.get("id") or ""),
                home_team_id=str(entry.get("homeTeamId") or ""),
                away_team_id=str(entry.get("awayTeamId") or ""),
                date=str(entry.get("date") or ""),
                home_score=coerce_float(entry.get("homeScore")),
                away_score=coerce_float(entry.get("awayScore")),
                played=bool(entry.get("played")),
                home_stats=BoxTotals.from_mapping(home_stats) if isinstance(home_stats, Mapping) else None,
                away_stats=BoxTotals.from_mapping(away_stats) if isinstance(away_stats, Mapping) else None,
            )
        )
    return out
