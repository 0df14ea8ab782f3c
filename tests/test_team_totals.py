"""Unit tests for roster totals aggregation and games played."""

import pytest

from analytics.stats.totals import aggregate_roster_totals, games_played, team_record
from analytics.stats.types import ShotZone, Team, normalize_schedule, normalize_teams


@pytest.fixture
def parsed(league):
    teams, schedule = league
    return {t.team_id: t for t in normalize_teams(teams)}, normalize_schedule(schedule)


def test_roster_totals_sum_counting_stats(parsed):
    teams, _ = parsed
    totals = aggregate_roster_totals(teams['A'].roster)

    assert totals.fgm == 21
    assert totals.fga == 40
    assert totals.p3m == 4
    assert totals.p3a == 11
    assert totals.fta == 8
    assert totals.reb == 17
    assert totals.off_reb == 5
    assert totals.def_reb == 12
    assert totals.ast == 9
    assert totals.tov == 4
    assert totals.pf == 5


def test_roster_totals_sum_zones_from_both_key_styles(parsed):
    teams, _ = parsed
    totals = aggregate_roster_totals(teams['A'].roster)

    # p1 uses `rim_m`, p2 uses `zone_rim_m`
    assert totals.zones[ShotZone.RIM].made == 9
    assert totals.zones[ShotZone.RIM].attempts == 13
    assert totals.zones[ShotZone.PAINT].attempts == 4
    assert totals.zones[ShotZone.ATB3_C].attempts == 0


def test_raw_totals_dict_uses_external_keys(parsed):
    teams, _ = parsed
    raw = aggregate_roster_totals(teams['B'].roster).to_dict()

    assert raw['offReb'] == 8
    assert raw['defReb'] == 20
    assert raw['zone_rim_m'] == 0
    assert all(v >= 0 for v in raw.values())


def test_games_played_counts_only_played_games(parsed):
    _, schedule = parsed
    assert games_played('A', schedule) == 1
    assert games_played('B', schedule) == 2
    assert games_played('C', schedule) == 1


def test_games_played_is_floored_at_one(parsed):
    _, schedule = parsed
    assert games_played('D', schedule) == 1
    assert games_played('A', []) == 1


def test_team_record_from_scores(parsed):
    teams, schedule = parsed
    rec_a = team_record(teams['A'], schedule)
    rec_b = team_record(teams['B'], schedule)

    assert (rec_a.wins, rec_a.losses) == (1, 0)
    assert (rec_b.wins, rec_b.losses) == (1, 1)
    assert rec_b.points_for == 85
    assert rec_b.points_against == 80


def test_team_record_keeps_stored_record_without_games(parsed):
    _, schedule = parsed
    stored = Team(team_id='D', name='Dolphins', wins=3, losses=4)
    rec = team_record(stored, schedule)
    assert (rec.games, rec.wins, rec.losses) == (0, 3, 4)
