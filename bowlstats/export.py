"""Standings export for the web front end."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .models import WeeklyResults
from .schedule import Schedule, get_schedule_json
from .schemas import LeagueConfig
from .scoring import TiePolicy, score_week
from .standings import split_standings
from .utils import save_json


def format_points(value: float) -> str:
    """Points without a trailing '.0': 2.0 -> '2', 2.5 -> '2.5'."""
    return str(int(value)) if float(value).is_integer() else f'{value:g}'


def build_weeks_json(
    weekly_results: WeeklyResults, tie_policy: TiePolicy = TiePolicy.WINNER_TAKE_ALL
) -> list[dict]:
    """Weekly matchup view: every week's matches with series and points."""
    weeks = []
    for week_key in sorted(weekly_results, key=int):
        matches = []
        for result in score_week(weekly_results, week_key, tie_policy):
            record = result.record
            matches.append(
                {
                    'bowler1': record.bowler_a,
                    'scores1': list(record.games_a),
                    'series1': result.series_a,
                    'points1': result.points_a,
                    'bowler2': record.bowler_b,
                    'scores2': list(record.games_b),
                    'series2': result.series_b,
                    'points2': result.points_b,
                }
            )
        weeks.append({'week': int(week_key), 'matches': matches})
    return weeks


def build_standings_payload(
    weekly_results: WeeklyResults,
    config: LeagueConfig,
    as_of_week: Optional[int] = None,
    schedule: Optional[Schedule] = None,
    position_weeks: Optional[set[int]] = None,
    tie_policy: Optional[TiePolicy] = None,
) -> dict[str, Any]:
    """
    Build the standings document the front end renders.

    Args:
        weekly_results: Match data snapshot
        config: League configuration
        as_of_week: Week to compute standings through (default: config.current_week)
        schedule: Optional parsed schedule for the pairings view
        position_weeks: Weeks flagged as position rounds in the schedule
        tie_policy: Overrides config.tie_policy for standings points

    Returns:
        JSON-serializable dict
    """
    as_of_week = config.current_week if as_of_week is None else as_of_week
    tie_policy = tie_policy or config.tie_policy

    rows = split_standings(weekly_results, as_of_week, config.first_half_end_week, tie_policy)

    standings = []
    for position, row in enumerate(rows, 1):
        standings.append(
            {
                'rank': position,
                'name': row.name,
                'first_half_points': row.first_half_points,
                'second_half_points': row.second_half_points,
                'total_points': row.total_points,
                'average': row.average,
                'high_game': row.high_game,
                'high_series': row.high_series,
                'total_pinfall': row.total_pinfall,
                'matches_played': row.matches_played,
                'highlight': position <= config.highlight_top,
            }
        )

    payload: dict[str, Any] = {
        'league_name': config.league_name,
        'updated_at': datetime.now(timezone.utc).isoformat(),
        'as_of_week': as_of_week,
        'first_half_end_week': config.first_half_end_week,
        'tie_policy': tie_policy.value,
        'standings': standings,
        'weeks': build_weeks_json(weekly_results, tie_policy),
    }

    if schedule is not None:
        payload['schedule'] = get_schedule_json(schedule, weekly_results, position_weeks)

    return payload


def save_standings_json(path: str | Path, payload: dict[str, Any]) -> None:
    """Write the standings document."""
    save_json(path, payload)
