"""Validation functions for raw match rows and scored matches."""

from typing import Optional

from pydantic import ValidationError

from .models import MatchRecord
from .schemas import MatchRow

MAX_GAME_SCORE = 300


def parse_match_row(row: dict) -> tuple[Optional[MatchRow], list[str]]:
    """
    Validate and coerce a raw match row.

    Args:
        row: Dict with bowler1, scores1, bowler2, scores2

    Returns:
        Tuple of (parsed_row, errors)
        - parsed_row: MatchRow with integer scores, None if invalid
        - errors: Validation error messages (empty if valid)
    """
    if not isinstance(row, dict):
        return None, [f'Match row must be an object, got {type(row).__name__}']

    try:
        return MatchRow.model_validate(row), []
    except ValidationError as e:
        return None, [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        ]


def validate_match_row(row: dict) -> list[str]:
    """
    Validate a raw match row before it reaches the standings engine.

    Checks:
    - Both bowler names present
    - Exactly 3 scores per bowler
    - Scores are whole, non-negative numbers

    Args:
        row: Dict with bowler1, scores1, bowler2, scores2

    Returns:
        List of validation error messages (empty if valid)
    """
    _parsed, errors = parse_match_row(row)
    return errors


def validate_match_scores(record: MatchRecord) -> list[str]:
    """
    Check that a match's scores are possible.

    Sanity checks:
    - No game above 300 (a perfect game)

    Args:
        record: MatchRecord to check

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    for name, games in ((record.bowler_a, record.games_a), (record.bowler_b, record.games_b)):
        for game_num, score in enumerate(games, 1):
            if score > MAX_GAME_SCORE:
                warnings.append(
                    f'Week {record.week}: {name} game {game_num} scored {score} '
                    f'(above a perfect {MAX_GAME_SCORE} - check for entry error)'
                )

    return warnings
