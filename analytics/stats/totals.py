from __future__ import annotations

"""Season totals aggregation for teams.

Roster counting stats are summed into a single `BoxTotals` (the team's
`rawTotals`); games played, points and the win/loss record come from the
schedule's played games.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from .types import BoxTotals, RosterPlayer, ScheduledGame, Team, sum_box_totals


@dataclass(frozen=True, slots=True)
class TeamRecord:
    games: int
    wins: int
    losses: int
    points_for: float
    points_against: float


def aggregate_roster_totals(roster: Iterable[RosterPlayer]) -> BoxTotals:
    """Sum every player's counting totals (including the 10 shot zones)."""
    return sum_box_totals((p.stats.box, 1.0) for p in roster)


def team_games(team_id: str, schedule: Iterable[ScheduledGame]) -> List[ScheduledGame]:
    return [g for g in schedule if g.played and g.involves(team_id)]


def games_played(team_id: str, schedule: Iterable[ScheduledGame]) -> int:
    """Played games involving `team_id`, floored at 1 for use as a denominator."""
    return max(1, len(team_games(team_id, schedule)))


def team_record(team: Team, schedule: Iterable[ScheduledGame]) -> TeamRecord:
    """Points for/against and W/L from played games.

    Without any played game in the schedule the team's stored record is kept.
    """

    games = team_games(team.team_id, schedule)
    pf = 0.0
    pa = 0.0
    wins = 0
    losses = 0
    for g in games:
        own, opp, _, _ = g.side(team.team_id)
        pf += own
        pa += opp
        if own > opp:
            wins += 1
        else:
            losses += 1

    if not games:
        wins, losses = team.wins, team.losses

    return TeamRecord(games=len(games), wins=wins, losses=losses, points_for=pf, points_against=pa)


def aggregate_all(teams: Sequence[Team]) -> Dict[str, BoxTotals]:
    """`rawTotals` for every team, keyed by team id."""
    return {t.team_id: aggregate_roster_totals(t.roster) for t in teams}
