"""Standings computation: aggregation, ranking and half-season splits.

Every function here is a pure transform of its arguments. Standings are
recomputed from the full match set for whatever week is requested.
"""

import logging
from typing import Iterable, Mapping

from .models import (
    BowlerAccumulator,
    CombinedStandingsRow,
    MatchRecord,
    StandingsRow,
    WeeklyResults,
)
from .scoring import TiePolicy, score_match

logger = logging.getLogger('bowlstats.standings')


def matches_in_window(
    weekly_results: WeeklyResults, first_week: int, last_week: int
) -> list[MatchRecord]:
    """
    Collect all matches bowled in an inclusive range of weeks.

    Args:
        weekly_results: Mapping of week number (str or int) to matches
        first_week: First week of the window
        last_week: Last week of the window

    Returns:
        Flat list of matches, empty when last_week < first_week
    """
    if last_week < first_week:
        return []

    matches = []
    for week_key, week_matches in weekly_results.items():
        week = int(week_key)
        if first_week <= week <= last_week:
            matches.extend(week_matches)
    return matches


def aggregate(
    matches: Iterable[MatchRecord],
    tie_policy: TiePolicy = TiePolicy.HALF_POINT,
) -> dict[str, BowlerAccumulator]:
    """
    Fold matches into per-bowler accumulators.

    Accumulators are created on a bowler's first appearance, so only
    bowlers who actually bowled show up. Match order does not change any
    totals.

    Args:
        matches: Matches to fold
        tie_policy: Tie handling for every game and series comparison

    Returns:
        Dict mapping bowler name to accumulator, in order of first appearance
    """
    accumulators: dict[str, BowlerAccumulator] = {}

    def _get(name: str) -> BowlerAccumulator:
        if name not in accumulators:
            accumulators[name] = BowlerAccumulator(name=name)
        return accumulators[name]

    for match in matches:
        side_a = _get(match.bowler_a)
        side_b = _get(match.bowler_b)

        points_a, points_b = score_match(match, tie_policy)
        side_a.points += points_a
        side_b.points += points_b

        series_a = match.series_a
        series_b = match.series_b
        side_a.games.extend(match.games_a)
        side_b.games.extend(match.games_b)
        side_a.series_totals.append(series_a)
        side_b.series_totals.append(series_b)
        side_a.total_pinfall += series_a
        side_b.total_pinfall += series_b

    return accumulators


def round_half_up(total: int, count: int) -> int:
    """Integer average rounded half-up (total and count non-negative)."""
    return (2 * total + count) // (2 * count)


def derive_row(acc: BowlerAccumulator) -> StandingsRow:
    """Summarize an accumulator; every stat is 0 when nothing was bowled."""
    return StandingsRow(
        name=acc.name,
        points=acc.points,
        average=round_half_up(sum(acc.games), len(acc.games)) if acc.games else 0,
        high_game=max(acc.games) if acc.games else 0,
        high_series=max(acc.series_totals) if acc.series_totals else 0,
        total_pinfall=acc.total_pinfall,
        matches_played=len(acc.series_totals),
    )


def standings_sort_key(points: float, total_pinfall: int, name: str, use_pinfall: bool = True):
    """Points desc, then pinfall desc, then name asc."""
    if use_pinfall:
        return (-points, -total_pinfall, name)
    return (-points, name)


def rank(
    accumulators: Mapping[str, BowlerAccumulator] | Iterable[BowlerAccumulator],
    use_pinfall: bool = True,
) -> list[StandingsRow]:
    """
    Derive standings rows and order them.

    Args:
        accumulators: Output of aggregate(), or any iterable of accumulators
        use_pinfall: Break point ties on total pinfall before falling back to name

    Returns:
        Standings rows, best first
    """
    if isinstance(accumulators, Mapping):
        accumulators = accumulators.values()
    rows = [derive_row(acc) for acc in accumulators]
    rows.sort(
        key=lambda r: standings_sort_key(r.points, r.total_pinfall, r.name, use_pinfall)
    )
    return rows


def season_standings(
    weekly_results: WeeklyResults,
    as_of_week: int,
    tie_policy: TiePolicy = TiePolicy.HALF_POINT,
) -> list[StandingsRow]:
    """Single-window standings for weeks 1 through as_of_week."""
    return rank(aggregate(matches_in_window(weekly_results, 1, as_of_week), tie_policy))


def split_standings(
    weekly_results: WeeklyResults,
    as_of_week: int,
    first_half_end_week: int,
    tie_policy: TiePolicy = TiePolicy.HALF_POINT,
) -> list[CombinedStandingsRow]:
    """
    Standings with first-half and second-half points kept apart.

    Points come from two independent windows split at first_half_end_week.
    Averages, highs and pinfall come from the whole season through
    as_of_week. Only bowlers who bowled by as_of_week appear.

    Args:
        weekly_results: Mapping of week number to matches
        as_of_week: Last week to include
        first_half_end_week: Last week of the first half
        tie_policy: Tie handling strategy

    Returns:
        Combined rows ordered by total points, pinfall, then name
    """
    first_half = _derive_all(
        matches_in_window(weekly_results, 1, min(as_of_week, first_half_end_week)), tie_policy
    )
    second_half = _derive_all(
        matches_in_window(weekly_results, first_half_end_week + 1, as_of_week), tie_policy
    )
    season = _derive_all(matches_in_window(weekly_results, 1, as_of_week), tie_policy)

    combined = []
    for name, season_row in season.items():
        first_points = first_half[name].points if name in first_half else 0.0
        second_points = second_half[name].points if name in second_half else 0.0
        combined.append(
            CombinedStandingsRow(
                name=name,
                first_half_points=first_points,
                second_half_points=second_points,
                total_points=first_points + second_points,
                average=season_row.average,
                high_game=season_row.high_game,
                high_series=season_row.high_series,
                total_pinfall=season_row.total_pinfall,
                matches_played=season_row.matches_played,
            )
        )

    combined.sort(key=lambda r: standings_sort_key(r.total_points, r.total_pinfall, r.name))
    logger.debug(
        f'Split standings through week {as_of_week} (first half ends week '
        f'{first_half_end_week}): {len(combined)} bowlers'
    )
    return combined


def _derive_all(matches: list[MatchRecord], tie_policy: TiePolicy) -> dict[str, StandingsRow]:
    return {name: derive_row(acc) for name, acc in aggregate(matches, tie_policy).items()}
