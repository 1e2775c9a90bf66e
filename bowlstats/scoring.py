"""Point allocation for head-to-head matches."""

from enum import Enum
from typing import Tuple

from .models import MatchRecord, MatchResult, WeeklyResults


class TiePolicy(str, Enum):
    """How a contested point is handled when both sides are exactly equal."""

    WINNER_TAKE_ALL = 'winner_take_all'
    HALF_POINT = 'half_point'


def score_comparison(value_a: int, value_b: int, tie_policy: TiePolicy) -> Tuple[float, float]:
    """
    Allocate the single point contested by one comparison.

    Scoring:
        - Higher value: 1 point
        - Lower value: 0 points
        - Exact tie: 0/0 (winner-take-all) or 0.5/0.5 (half-point)

    Args:
        value_a: Game score or series total for bowler A
        value_b: Game score or series total for bowler B
        tie_policy: Tie handling strategy

    Returns:
        Tuple of (points_a, points_b)
    """
    if value_a > value_b:
        return 1.0, 0.0
    if value_b > value_a:
        return 0.0, 1.0
    if tie_policy == TiePolicy.HALF_POINT:
        return 0.5, 0.5
    return 0.0, 0.0


def score_match(record: MatchRecord, tie_policy: TiePolicy) -> Tuple[float, float]:
    """
    Score one match: a point per game plus a point for the series.

    Returns:
        Tuple of (points_a, points_b), each between 0 and 4
    """
    points_a = 0.0
    points_b = 0.0

    for game_a, game_b in zip(record.games_a, record.games_b):
        a, b = score_comparison(game_a, game_b, tie_policy)
        points_a += a
        points_b += b

    a, b = score_comparison(record.series_a, record.series_b, tie_policy)
    return points_a + a, points_b + b


def get_week_matches(weekly_results: WeeklyResults, week: int | str) -> list[MatchRecord]:
    """Look up a week's matches whether the mapping is keyed by str or int."""
    matches = weekly_results.get(str(week))
    if matches is None:
        try:
            matches = weekly_results.get(int(week))  # type: ignore[call-overload]
        except (TypeError, ValueError):
            matches = None
    return list(matches or [])


def score_week(
    weekly_results: WeeklyResults,
    week: int | str,
    tie_policy: TiePolicy = TiePolicy.WINNER_TAKE_ALL,
) -> list[MatchResult]:
    """Score every match of one week for the matchup view.

    An unknown week yields an empty list.
    """
    results = []
    for record in get_week_matches(weekly_results, week):
        points_a, points_b = score_match(record, tie_policy)
        results.append(
            MatchResult(
                record=record,
                series_a=record.series_a,
                series_b=record.series_b,
                points_a=points_a,
                points_b=points_b,
            )
        )
    return results
