"""Top-level package for derived basketball analytics.

This package is *read-only* with respect to its inputs: rosters and the
schedule are supplied by the game/roster collaborator and never mutated.

Analytics modules compute *derived views* such as leaderboard rows, advanced
team/player metrics and heatmap ranges suitable for UI tables.
"""

from __future__ import annotations

from . import stats

__all__ = ["stats"]
