from __future__ import annotations

"""Tuning constants for the leaderboard analytics layer.

Possession model
----------------
The possession estimate is the standard box-score approximation:

    POSS = FGA + FTA_POSS_WEIGHT * FTA + TOV - OREB

The usage denominator drops the offensive-rebound term:

    USAGE = FGA + FTA_POSS_WEIGHT * FTA + TOV
"""

from typing import FrozenSet

# ---------------------------------------------------------------------------
# Possession / minutes model
# ---------------------------------------------------------------------------

# Share of free-throw attempts that end a possession.
FTA_POSS_WEIGHT: float = 0.44

# Regulation team minutes per game (5 players x 48 minutes).
TEAM_MINUTES_PER_GAME: float = 240.0

# Players on the floor for one team.
LINEUP_SIZE: int = 5

# Per-100 scale used by offensive/defensive ratings.
RATING_SCALE: float = 100.0

# ---------------------------------------------------------------------------
# Filtering / ranking
# ---------------------------------------------------------------------------

# `=` criteria match when |value - target| < EQUALITY_TOLERANCE.
EQUALITY_TOLERANCE: float = 0.1

# Percentage metrics are stored as 0..1 and compared against user input on 0..100.
PERCENT_FILTER_SCALE: float = 100.0

DEFAULT_SORT_KEY: str = "pts"
DEFAULT_SORT_DIRECTION: str = "desc"

# ---------------------------------------------------------------------------
# Heatmap ranges
# ---------------------------------------------------------------------------

# Games and minutes are shown but never color-scaled.
RANGE_EXCLUDED_KEYS: FrozenSet[str] = frozenset({"g", "mp"})
