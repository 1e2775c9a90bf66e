"""Shared fixtures: the league's first four weeks of results."""

import pytest

from bowlstats.models import MatchRecord


def make_match(week, bowler_a, games_a, bowler_b, games_b):
    return MatchRecord(
        week=week, bowler_a=bowler_a, games_a=games_a, bowler_b=bowler_b, games_b=games_b
    )


@pytest.fixture
def weekly_results():
    """Four weeks, two matches a week, no tied games or series."""
    return {
        '1': [
            make_match(1, 'Mike Johnson', (245, 210, 188), 'Sarah Davis', (201, 225, 195)),
            make_match(1, 'Tom Wilson', (234, 189, 203), 'Lisa Brown', (178, 201, 188)),
        ],
        '2': [
            make_match(2, 'Dave Miller', (256, 199, 234), 'Jenny Garcia', (189, 234, 201)),
            make_match(2, 'Chris Taylor', (201, 267, 195), 'Amy Anderson', (212, 189, 251)),
        ],
        '3': [
            make_match(3, 'Mike Johnson', (267, 223, 201), 'Tom Wilson', (290, 201, 187)),
            make_match(3, 'Sarah Davis', (268, 201, 181), 'Dave Miller', (234, 288, 167)),
        ],
        '4': [
            make_match(4, 'Lisa Brown', (245, 189, 178), 'Jenny Garcia', (256, 201, 177)),
            make_match(4, 'Chris Taylor', (234, 201, 228), 'Amy Anderson', (201, 189, 251)),
        ],
    }


@pytest.fixture
def weekly_results_json():
    """The same results in the stored document shape."""
    return {
        '1': [
            {'bowler1': 'Mike Johnson', 'scores1': [245, 210, 188], 'bowler2': 'Sarah Davis', 'scores2': [201, 225, 195]},
            {'bowler1': 'Tom Wilson', 'scores1': [234, 189, 203], 'bowler2': 'Lisa Brown', 'scores2': [178, 201, 188]},
        ],
        '2': [
            {'bowler1': 'Dave Miller', 'scores1': [256, 199, 234], 'bowler2': 'Jenny Garcia', 'scores2': [189, 234, 201]},
            {'bowler1': 'Chris Taylor', 'scores1': [201, 267, 195], 'bowler2': 'Amy Anderson', 'scores2': [212, 189, 251]},
        ],
        '3': [
            {'bowler1': 'Mike Johnson', 'scores1': [267, 223, 201], 'bowler2': 'Tom Wilson', 'scores2': [290, 201, 187]},
            {'bowler1': 'Sarah Davis', 'scores1': [268, 201, 181], 'bowler2': 'Dave Miller', 'scores2': [234, 288, 167]},
        ],
        '4': [
            {'bowler1': 'Lisa Brown', 'scores1': [245, 189, 178], 'bowler2': 'Jenny Garcia', 'scores2': [256, 201, 177]},
            {'bowler1': 'Chris Taylor', 'scores1': [234, 201, 228], 'bowler2': 'Amy Anderson', 'scores2': [201, 189, 251]},
        ],
    }
