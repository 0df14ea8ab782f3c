from __future__ import annotations

"""Heatmap ranges.

`RangeProfiler` keeps a running {min, max} per metric key. min/max are
commutative and associative, so the result does not depend on feed order
and two profilers can be merged. Ranges only drive display color scaling;
filtering and sorting never read them.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from .config import RANGE_EXCLUDED_KEYS
from .metrics import list_metrics, metric_value
from .types import PlayerRow, StatRange, TeamRow, coerce_float


class RangeProfiler:
    def __init__(self, excluded: Iterable[str] = RANGE_EXCLUDED_KEYS) -> None:
        self._excluded = frozenset(excluded)
        self._ranges: Dict[str, StatRange] = {}

    def update(self, key: str, value: float) -> None:
        if key in self._excluded:
            return
        v = float(value)
        cur = self._ranges.get(key)
        if cur is None:
            self._ranges[key] = {"min": v, "max": v}
            return
        cur["min"] = min(cur["min"], v)
        cur["max"] = max(cur["max"], v)

    def merge(self, other: "RangeProfiler") -> None:
        for key, r in other._ranges.items():
            self.update(key, r["min"])
            self.update(key, r["max"])

    def get(self, key: str) -> Optional[StatRange]:
        r = self._ranges.get(key)
        return dict(r) if r is not None else None  # type: ignore[return-value]

    def as_dict(self) -> Dict[str, StatRange]:
        return {k: {"min": r["min"], "max": r["max"]} for k, r in self._ranges.items()}


def profile_player_rows(rows: Iterable[PlayerRow], profiler: Optional[RangeProfiler] = None) -> RangeProfiler:
    """Ranges over every heatmap metric shown in the Players view (per-game where counting)."""

    profiler = profiler or RangeProfiler()
    metrics = [m for m in list_metrics(views=["Players"]) if m.heatmap and m.kind != "text"]
    for row in rows:
        for m in metrics:
            profiler.update(m.key, float(metric_value(row, m, "Players")))
    return profiler


def profile_team_rows(rows: Iterable[TeamRow], profiler: Optional[RangeProfiler] = None) -> RangeProfiler:
    """Ranges over W/L and every numeric team stat."""

    profiler = profiler or RangeProfiler()
    for row in rows:
        profiler.update("wins", coerce_float(row.get("wins")))
        profiler.update("losses", coerce_float(row.get("losses")))
        stats: Mapping[str, Any] = row.get("stats") or {}
        for key, value in stats.items():
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                profiler.update(key, float(value))
    return profiler
