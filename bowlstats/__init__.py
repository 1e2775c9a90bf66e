from .models import (
    MatchRecord,
    BowlerAccumulator,
    StandingsRow,
    CombinedStandingsRow,
    MatchResult,
)
from .scoring import TiePolicy, score_comparison, score_match, score_week
from .standings import (
    aggregate,
    rank,
    split_standings,
    season_standings,
    matches_in_window,
)
from .loader import (
    load_results,
    load_weekly_results,
    parse_results_csv,
    fetch_published_csv,
)
from .schedule import parse_schedule_file, get_week_pairings
from .export import build_standings_payload, save_standings_json

__all__ = [
    # Models
    'MatchRecord',
    'BowlerAccumulator',
    'StandingsRow',
    'CombinedStandingsRow',
    'MatchResult',
    # Scoring
    'TiePolicy',
    'score_comparison',
    'score_match',
    'score_week',
    # Standings
    'aggregate',
    'rank',
    'split_standings',
    'season_standings',
    'matches_in_window',
    # Data loading
    'load_results',
    'load_weekly_results',
    'parse_results_csv',
    'fetch_published_csv',
    # Schedule
    'parse_schedule_file',
    'get_week_pairings',
    # Export
    'build_standings_payload',
    'save_standings_json',
]
