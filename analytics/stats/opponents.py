from __future__ import annotations

"""Opponent box-score reconstruction.

Games that carry an embedded opponent box score contribute their numbers
exactly. Games without one are approximated: for every opponent with N such
games, its own season totals are scaled by `N / opponent_games_played` and
added in. This assumes the opponent's unobserved games match its season
average; the error is not bounded when many matchups lack box scores on both
sides.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from .totals import games_played, team_games
from .types import OPPONENT_BOX_FIELDS, BoxTotals, ScheduledGame, Team, sum_box_totals

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OpponentReconstruction:
    totals: BoxTotals
    exact_games: int
    approximated_games: int
    missing_by_opponent: Mapping[str, int]


def reconstruct_opponent_totals(
    team_id: str,
    schedule: Sequence[ScheduledGame],
    raw_totals: Mapping[str, BoxTotals],
    opponent_games: Mapping[str, int],
) -> OpponentReconstruction:
    """Rebuild `rawOppTotals` for one team.

    Args:
        raw_totals: every team's season `rawTotals` (computed once for the league).
        opponent_games: every team's games played (already floored at 1).
    """

    parts: List[Tuple[BoxTotals, float]] = []
    missing: Counter = Counter()
    exact = 0

    for g in team_games(team_id, schedule):
        _, _, opp_id, opp_box = g.side(team_id)
        if opp_box is not None:
            parts.append((opp_box, 1.0))
            exact += 1
        else:
            missing[opp_id] += 1

    for opp_id, n_missing in sorted(missing.items()):
        opp_totals = raw_totals.get(opp_id)
        if opp_totals is None:
            logger.warning("OPPONENT_TOTALS_UNKNOWN team=%s opp=%s games=%d", team_id, opp_id, n_missing)
            continue
        denom = max(1, int(opponent_games.get(opp_id, 1)))
        factor = n_missing / denom
        logger.debug("OPPONENT_APPROX team=%s opp=%s missing=%d factor=%.4f", team_id, opp_id, n_missing, factor)
        parts.append((opp_totals, factor))

    return OpponentReconstruction(
        totals=sum_box_totals(parts, OPPONENT_BOX_FIELDS),
        exact_games=exact,
        approximated_games=sum(missing.values()),
        missing_by_opponent=dict(missing),
    )


def reconstruct_all(
    teams: Iterable[Team],
    schedule: Sequence[ScheduledGame],
    raw_totals: Mapping[str, BoxTotals],
) -> Dict[str, OpponentReconstruction]:
    teams = list(teams)
    gp = {t.team_id: games_played(t.team_id, schedule) for t in teams}
    return {t.team_id: reconstruct_opponent_totals(t.team_id, schedule, raw_totals, gp) for t in teams}
