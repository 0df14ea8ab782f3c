"""Player-level derived metrics and rate stats."""

import pytest

from analytics.stats.leaders import compute_player_rows, compute_team_rows
from analytics.stats.player_metrics import compute_player_stats
from analytics.stats.types import RosterPlayer, StatLine, normalize_schedule, normalize_teams

TEAM_USAGE_A = 40 + 0.44 * 8 + 4
OPP_POSS_A = 45 + 0.44 * 12 + 8 - 6
FLOOR_A = 60 / 5


@pytest.fixture
def computed(league):
    teams, schedule = league
    team_list = normalize_teams(teams)
    _, contexts = compute_team_rows(team_list, normalize_schedule(schedule))
    rows = compute_player_rows(team_list, contexts)
    return {r['id']: r for r in rows}, contexts


def test_row_identity_fields(computed):
    rows, _ = computed
    p1 = rows['p1']

    assert p1['teamId'] == 'A'
    assert p1['teamName'] == 'Alphas'
    assert p1['teamCity'] == 'Austin'
    assert p1['position'] == 'PG'
    assert p1['attributes']['reb'] == 40
    assert p1['stats']['pts'] == 30


def test_shooting_splits(computed):
    rows, _ = computed
    s = rows['p1']['stats']

    assert s['fg%'] == pytest.approx(0.5)
    assert s['3p%'] == pytest.approx(0.4)
    assert s['ts%'] == pytest.approx(30 / (2 * (24 + 0.44 * 4)))
    assert s['efg%'] == pytest.approx((12 + 2) / 24)
    assert s['rim%'] == pytest.approx(6 / 10)
    assert s['mid%'] == pytest.approx(1 / 3)


def test_usage_rate(computed):
    rows, _ = computed
    own = 24 + 0.44 * 4 + 3
    assert rows['p1']['stats']['usg%'] == pytest.approx(own * FLOOR_A / (30 * TEAM_USAGE_A))


def test_assist_and_steal_rates(computed):
    rows, _ = computed
    s = rows['p1']['stats']

    assert s['ast%'] == pytest.approx(8 / ((30 / FLOOR_A) * 21 - 12))
    assert s['stl%'] == pytest.approx(2 * FLOOR_A / (30 * OPP_POSS_A))
    assert s['tov%'] == pytest.approx(3 / (24 + 0.44 * 4 + 3))


def test_rebound_and_block_rates(computed):
    rows, _ = computed
    s = rows['p2']['stats']

    assert s['orb%'] == pytest.approx(48 / 570)
    assert s['drb%'] == pytest.approx(96 / 540)
    assert s['trb%'] == pytest.approx(12 * FLOOR_A / (30 * (17 + 20)))
    assert s['blk%'] == pytest.approx(0.04)


def test_zero_minutes_gives_zero_rates(computed):
    _, contexts = computed
    idle = RosterPlayer(player_id='x', name='Idle', position='G', stats=StatLine(g=1, mp=0.0))

    s = compute_player_stats(idle, contexts['A'])

    for key in ('usg%', 'ast%', 'orb%', 'drb%', 'trb%', 'stl%', 'blk%', 'ts%', 'fg%'):
        assert s[key] == 0.0


def test_players_without_games_are_excluded(computed):
    rows, _ = computed
    assert 'p3' not in rows
    assert set(rows) == {'p1', 'p2', 'p4', 'p5'}
