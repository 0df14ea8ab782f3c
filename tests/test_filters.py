"""Filtering, searching and sorting of leaderboard rows."""

import pytest

from analytics.stats.leaders import compute_leaderboard


def _stat(category, operator, value):
    return {'type': 'stat', 'category': category, 'operator': operator, 'value': value}


def _ids(league, **query):
    teams, schedule = league
    rows, _ = compute_leaderboard(teams, schedule, query)
    return [r['id'] for r in rows]


def test_contradictory_filters_return_nothing(league):
    assert _ids(league, activeFilters=[_stat('pts', '>', 20), _stat('pts', '<', 10)]) == []


def test_percent_filters_compare_on_hundred_scale(league):
    assert _ids(league, activeFilters=[_stat('fg%', '>', 55)]) == ['p2']


def test_counting_filters_compare_per_game(league):
    # p4 scored 50 over 2 games
    assert _ids(league, activeFilters=[_stat('pts', '>=', 25)]) == ['p1', 'p4']


def test_equality_uses_tolerance(league):
    assert _ids(league, activeFilters=[_stat('pts', '=', 25.05)]) == ['p4']
    assert _ids(league, activeFilters=[_stat('pts', '=', 25.2)]) == []


def test_unknown_category_reads_as_zero(league):
    assert _ids(league, activeFilters=[_stat('not_a_stat', '>', 0)]) == []
    assert len(_ids(league, activeFilters=[_stat('not_a_stat', '<', 1)])) == 4


def test_unknown_operator_lets_rows_through(league):
    assert len(_ids(league, activeFilters=[_stat('pts', '!=', 30)])) == 4


def test_attribute_keys_do_not_collide_with_stats(league):
    by_rating = _ids(league, activeFilters=[_stat('attr_reb', '>=', 40)], sortConfig={'key': 'name', 'direction': 'asc'})
    by_stat = _ids(league, activeFilters=[_stat('reb', '>=', 10)], sortConfig={'key': 'name', 'direction': 'asc'})

    assert by_rating == ['p1', 'p2']
    assert by_stat == ['p2', 'p5']


def test_stat_key_aliases(league):
    assert _ids(league, activeFilters=[_stat('3pm', '>=', 3)]) == ['p1', 'p4']


def test_date_filters_are_ignored(league):
    date_filter = {'type': 'date', 'category': 'date', 'operator': '>', 'value': 0}
    assert len(_ids(league, activeFilters=[date_filter])) == 4


def test_position_and_team_selection(league):
    assert sorted(_ids(league, selectedPositions=['C', 'PF'])) == ['p2', 'p5']
    assert sorted(_ids(league, selectedTeams=['B'])) == ['p4', 'p5']
    assert _ids(league, selectedTeams=['B'], selectedPositions=['C']) == []


def test_search_is_case_insensitive(league):
    assert _ids(league, searchQuery='ALPHA') == ['p1']
    assert _ids(league, searchQuery='  big ') == ['p5']


def test_team_search_matches_city_and_name(league):
    assert _ids(league, mode='Teams', searchQuery='boston bears') == ['B']
    assert _ids(league, mode='Teams', searchQuery='cougars') == ['C']


def test_positions_do_not_apply_to_teams(league):
    assert len(_ids(league, mode='Teams', selectedPositions=['C'])) == 4


@pytest.mark.parametrize('direction,expected', [
    ('desc', ['p1', 'p4', 'p2', 'p5']),
    ('asc', ['p5', 'p2', 'p4', 'p1']),
])
def test_sort_by_points_per_game(league, direction, expected):
    assert _ids(league, sortConfig={'key': 'pts', 'direction': direction}) == expected


def test_sort_by_name(league):
    assert _ids(league, sortConfig={'key': 'name', 'direction': 'asc'}) == ['p1', 'p2', 'p4', 'p5']


def test_sort_by_percentage(league):
    assert _ids(league, sortConfig={'key': 'fg%', 'direction': 'desc'}) == ['p2', 'p5', 'p1', 'p4']


def test_sort_by_name_ignores_accents_and_case(make_player):
    teams = [{'id': 'X', 'name': 'Xers', 'roster': [
        make_player('z', 'Zed Zulu', 'G', g=1),
        make_player('e', 'Élan Martin', 'F', g=1),
        make_player('a', 'aaron Ash', 'C', g=1),
    ]}]
    rows, _ = compute_leaderboard(teams, [], {'sortConfig': {'key': 'name', 'direction': 'asc'}})
    assert [r['id'] for r in rows] == ['a', 'e', 'z']


def test_team_name_sort_uses_city(league):
    teams, schedule = league
    renamed = [dict(t, name=n) for t, n in zip(teams, ['Zephyrs', 'Yaks', 'Xers', 'Wolves'])]
    rows, _ = compute_leaderboard(renamed, schedule, {'mode': 'Teams', 'sortConfig': {'key': 'name', 'direction': 'asc'}})
    # Austin, Boston, Chicago, Dallas
    assert [r['id'] for r in rows] == ['A', 'B', 'C', 'D']
