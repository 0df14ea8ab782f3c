import copy
import os
import sys

import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


def _stats(**kw):
    base = {
        'g': 0, 'gs': 0, 'mp': 0, 'pts': 0, 'reb': 0, 'offReb': 0, 'defReb': 0,
        'ast': 0, 'stl': 0, 'blk': 0, 'tov': 0, 'pf': 0,
        'fgm': 0, 'fga': 0, 'p3m': 0, 'p3a': 0, 'ftm': 0, 'fta': 0,
        'rimM': 0, 'rimA': 0, 'midM': 0, 'midA': 0, 'plusMinus': 0,
    }
    base.update(kw)
    return base


@pytest.fixture
def make_player():
    def _make(pid, name, position, ratings=None, **stats):
        player = {'id': pid, 'name': name, 'position': position, 'ovr': 70, 'stats': _stats(**stats)}
        player.update(ratings or {})
        return player
    return _make


@pytest.fixture
def league(make_player):
    """Four teams, two played games, one unplayed game.

    - g1: A (home) 50 - 45 B, only B's box score embedded.
    - g2: B (home) 40 - 30 C, no box scores.
    - D never plays.
    """
    alpha = make_player(
        'p1', 'Alpha Guard', 'PG', ratings={'reb': 40, 'def': 75, 'blk': 30},
        g=1, gs=1, mp=30, pts=30, fgm=12, fga=24, p3m=4, p3a=10, ftm=2, fta=4,
        reb=5, offReb=1, defReb=4, ast=8, stl=2, blk=0, tov=3, pf=2, plusMinus=5,
        rim_m=4, rim_a=6, paint_m=2, paint_a=4, mid_l_m=1, mid_l_a=3,
    )
    beta = make_player(
        'p2', 'Beta Center', 'C', ratings={'reb': 85, 'def': 60, 'blk': 80},
        g=1, gs=1, mp=30, pts=20, fgm=9, fga=16, p3m=0, p3a=1, ftm=2, fta=4,
        reb=12, offReb=4, defReb=8, ast=1, stl=0, blk=3, tov=1, pf=3, plusMinus=5,
        zone_rim_m=5, zone_rim_a=7,
    )
    gamma = make_player('p3', 'Gamma Bench', 'SF')
    delta = make_player(
        'p4', 'Delta Wing', 'SG',
        g=2, gs=2, mp=70, pts=50, fgm=18, fga=40, p3m=6, p3a=15, ftm=8, fta=10,
        reb=8, offReb=2, defReb=6, ast=6, stl=3, blk=1, tov=4, pf=5, plusMinus=4,
    )
    echo = make_player(
        'p5', 'Echo Big', 'PF',
        g=2, gs=2, mp=60, pts=30, fgm=13, fga=25, p3m=0, p3a=2, ftm=4, fta=6,
        reb=20, offReb=6, defReb=14, ast=2, stl=1, blk=4, tov=2, pf=6, plusMinus=6,
    )

    teams = [
        {'id': 'A', 'name': 'Alphas', 'city': 'Austin', 'wins': 0, 'losses': 0, 'roster': [alpha, beta, gamma]},
        {'id': 'B', 'name': 'Bears', 'city': 'Boston', 'wins': 0, 'losses': 0, 'roster': [delta, echo]},
        {'id': 'C', 'name': 'Cougars', 'city': 'Chicago', 'wins': 0, 'losses': 0, 'roster': []},
        {'id': 'D', 'name': 'Dolphins', 'city': 'Dallas', 'wins': 0, 'losses': 0, 'roster': []},
    ]
    schedule = [
        {
            'id': 'g1', 'homeTeamId': 'A', 'awayTeamId': 'B', 'date': '2025-10-21',
            'homeScore': 50, 'awayScore': 45, 'played': True,
            'awayStats': {
                'fgm': 20, 'fga': 45, 'p3m': 5, 'p3a': 15, 'ftm': 10, 'fta': 12,
                'reb': 20, 'offReb': 6, 'defReb': 14, 'ast': 10, 'stl': 3, 'blk': 2, 'tov': 8, 'pf': 15,
            },
        },
        {
            'id': 'g2', 'homeTeamId': 'B', 'awayTeamId': 'C', 'date': '2025-10-23',
            'homeScore': 40, 'awayScore': 30, 'played': True,
        },
        {
            'id': 'g3', 'homeTeamId': 'C', 'awayTeamId': 'A', 'date': '2025-10-25',
            'homeScore': 0, 'awayScore': 0, 'played': False,
        },
    ]
    return teams, schedule


@pytest.fixture
def league_snapshot(league):
    """Deep copy of the league taken before any computation."""
    return copy.deepcopy(league)
