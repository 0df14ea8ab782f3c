from __future__ import annotations

"""Row filtering and ordering.

Filtering is a logical AND of:
- team membership (`selected_teams`)
- position membership (`selected_positions`, Players view only)
- case-insensitive name search
- every stat `FilterCriterion`

Stat criteria compare the user's number against the column's display value:
percentages are scaled to 0..100 first, player counting stats are per game,
ratings and advanced rates are compared as stored. An unknown category reads
as 0.0 and an unknown operator lets the row through.

Sorting uses a single (key, direction). Text keys compare accent- and
case-insensitively (Teams sort `name` by city), numeric keys compare
directly, missing values read as 0.0. Equal values keep
their input order (roster order, then team order) because `sorted` is
stable, but callers must not rely on that order.
"""

import logging
import unicodedata
from typing import Any, Callable, Dict, List, Mapping, Sequence, TypeVar

from .config import EQUALITY_TOLERANCE, PERCENT_FILTER_SCALE
from .metrics import get_metric, metric_value
from .types import FilterCriterion, LeaderboardQuery, SortSpec, coerce_float

logger = logging.getLogger(__name__)

Row = TypeVar("Row", bound=Mapping[str, Any])

_OPERATORS: Dict[str, Callable[[float, float], bool]] = {
    ">": lambda a, b: a > b,
    "<": lambda a, b: a < b,
    ">=": lambda a, b: a >= b,
    "<=": lambda a, b: a <= b,
    "=": lambda a, b: abs(a - b) < EQUALITY_TOLERANCE,
}


def filter_value(row: Mapping[str, Any], category: str, mode: str) -> float:
    """Value compared against a criterion for `category` (0.0 when unknown)."""

    metric = get_metric(category)
    if metric is None or metric.kind == "text":
        return 0.0
    value = coerce_float(metric_value(row, metric, mode))
    if metric.kind == "percent":
        return value * PERCENT_FILTER_SCALE
    return value


def criterion_matches(value: float, criterion: FilterCriterion) -> bool:
    op = _OPERATORS.get(criterion.operator)
    if op is None:
        logger.debug("FILTER_UNKNOWN_OPERATOR op=%r category=%s", criterion.operator, criterion.category)
        return True
    return op(value, float(criterion.value))


def _matches_search(row: Mapping[str, Any], needle: str, mode: str) -> bool:
    name = str(row.get("name") or "")
    haystacks = [name]
    if mode == "Teams":
        haystacks.append(f"{row.get('city') or ''} {name}")
    return any(needle in h.casefold() for h in haystacks)


def row_matches(row: Mapping[str, Any], query: LeaderboardQuery) -> bool:
    mode = query.mode

    if query.selected_teams:
        team_id = row.get("teamId") if mode == "Players" else row.get("id")
        if str(team_id or "") not in query.selected_teams:
            return False

    if mode == "Players" and query.selected_positions:
        if str(row.get("position") or "") not in query.selected_positions:
            return False

    needle = query.search_query.strip().casefold()
    if needle and not _matches_search(row, needle, mode):
        return False

    return all(criterion_matches(filter_value(row, c.category, mode), c) for c in query.active_filters)


def apply_filters(rows: Sequence[Row], query: LeaderboardQuery) -> List[Row]:
    return [r for r in rows if row_matches(r, query)]


def collation_key(text: str) -> str:
    """Accent- and case-insensitive sort key (accented letters sort with their base letter)."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def sort_value(row: Mapping[str, Any], key: str, mode: str) -> Any:
    """Sort key for one row: a collation key for text columns, a float otherwise."""

    metric = get_metric(key)
    if metric is None:
        stats = row.get("stats") or {}
        raw = stats.get(key) if isinstance(stats, Mapping) else None
        if raw is None:
            raw = row.get(key)
        return coerce_float(raw)
    value = metric_value(row, metric, mode)
    if metric.kind == "text":
        return collation_key(str(value))
    return coerce_float(value)


def sort_rows(rows: Sequence[Row], sort: SortSpec, mode: str) -> List[Row]:
    return sorted(rows, key=lambda r: sort_value(r, sort.key, mode), reverse=sort.direction == "desc")


def rank_rows(rows: Sequence[Row], query: LeaderboardQuery) -> List[Row]:
    """Filter then order rows for the query."""
    return sort_rows(apply_filters(rows, query), query.sort, query.mode)
