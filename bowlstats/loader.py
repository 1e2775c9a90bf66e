"""Match result loading from the JSON store or a published spreadsheet export.

Rows that don't fit the match shape are logged and dropped here so the
standings engine only ever sees valid MatchRecords.
"""

import io
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

import polars as pl
import requests

from .models import MatchRecord, WeeklyResults
from .schemas import MatchRow
from .utils import load_json
from .validators import parse_match_row, validate_match_scores

logger = logging.getLogger('bowlstats.loader')

# Spreadsheet export columns (after header normalization)
RESULT_COLUMNS = [
    'week',
    'bowler1',
    'b1game1',
    'b1game2',
    'b1game3',
    'bowler2',
    'b2game1',
    'b2game2',
    'b2game3',
]

FETCH_TIMEOUT = 30


def normalize_header(header: str) -> str:
    """'B1 Game 1' / 'b1_game1' -> 'b1game1'."""
    return ''.join(ch for ch in str(header).lower() if ch.isalnum())


def parse_week(value: Any) -> Optional[int]:
    """Parse a week cell/key into a positive int, or None if it isn't one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() and value >= 1 else None
    try:
        week = int(str(value).strip())
    except ValueError:
        return None
    return week if week >= 1 else None


def _clean_cell(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def record_from_row(week: int, row: MatchRow) -> MatchRecord:
    """Build a MatchRecord from a validated match row."""
    return MatchRecord(
        week=week,
        bowler_a=row.bowler1,
        games_a=tuple(row.scores1),
        bowler_b=row.bowler2,
        games_b=tuple(row.scores2),
    )


def rows_to_weekly_results(rows: Iterable[dict]) -> WeeklyResults:
    """
    Convert raw rows (each carrying its own 'week') into WeeklyResults.

    Invalid rows are logged at WARNING and skipped.

    Args:
        rows: Dicts with week, bowler1, scores1, bowler2, scores2

    Returns:
        Dict mapping week number (as str) to MatchRecords, in input order
    """
    weekly_results: WeeklyResults = {}
    dropped = 0

    for index, row in enumerate(rows, 1):
        week = parse_week(row.get('week')) if isinstance(row, dict) else None
        if week is None:
            logger.warning(f'Dropping row {index}: invalid week {row!r}')
            dropped += 1
            continue

        parsed, errors = parse_match_row(row)
        if parsed is None:
            logger.warning(f'Dropping row {index} (week {week}): {"; ".join(errors)}')
            dropped += 1
            continue

        record = record_from_row(week, parsed)
        for warning in validate_match_scores(record):
            logger.warning(warning)

        weekly_results.setdefault(str(week), []).append(record)

    total = sum(len(matches) for matches in weekly_results.values())
    logger.info(f'Loaded {total} matches across {len(weekly_results)} weeks ({dropped} dropped)')
    return weekly_results


def weekly_json_to_results(data: dict[str, list[dict]]) -> WeeklyResults:
    """Convert the {"<week>": [row, ...]} document shape into WeeklyResults."""
    if not isinstance(data, dict):
        raise ValueError(f'Weekly results must be an object keyed by week, got {type(data).__name__}')

    rows = []
    for week_key, week_rows in data.items():
        if not isinstance(week_rows, list):
            logger.warning(f'Dropping week {week_key!r}: expected a list of matches')
            continue
        for row in week_rows:
            rows.append({**row, 'week': week_key} if isinstance(row, dict) else row)
    return rows_to_weekly_results(rows)


def load_weekly_results(path: Path | str) -> WeeklyResults:
    """
    Load weekly results from a JSON file.

    Args:
        path: Path to weekly_results.json

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the document isn't keyed by week
    """
    return weekly_json_to_results(load_json(path))


def table_rows_to_match_rows(records: Iterable[dict]) -> list[dict]:
    """Turn flat spreadsheet rows (one column per game) into match rows."""
    rows = []
    for record in records:
        cells = {normalize_header(k): _clean_cell(v) for k, v in record.items() if k is not None}
        rows.append(
            {
                'week': cells.get('week'),
                'bowler1': cells.get('bowler1'),
                'scores1': [cells.get(f'b1game{i}') for i in range(1, 4)],
                'bowler2': cells.get('bowler2'),
                'scores2': [cells.get(f'b2game{i}') for i in range(1, 4)],
            }
        )
    return rows


def check_columns(headers: Iterable[str], source: str) -> None:
    """Raise ValueError if any results column is missing."""
    present = {normalize_header(h) for h in headers if h is not None}
    missing = [col for col in RESULT_COLUMNS if col not in present]
    if missing:
        raise ValueError(f'{source} is missing columns: {", ".join(missing)}')


def parse_results_csv(text: str) -> WeeklyResults:
    """
    Parse a results CSV export.

    Every column is read as text; scores are validated per row.

    Raises:
        ValueError: If required columns are missing
    """
    if not text.strip():
        logger.warning('Results CSV is empty')
        return {}

    df = pl.read_csv(io.StringIO(text), infer_schema_length=0)
    check_columns(df.columns, 'Results CSV')

    return rows_to_weekly_results(table_rows_to_match_rows(df.iter_rows(named=True)))


def fetch_published_csv(url: str, timeout: int = FETCH_TIMEOUT) -> str:
    """
    Download a published spreadsheet CSV export.

    Raises:
        requests.HTTPError: On a non-2xx response
    """
    logger.info(f'Fetching results from {url}')
    response = requests.get(url, timeout=timeout, allow_redirects=True)
    response.raise_for_status()
    response.encoding = response.encoding or 'utf-8'
    return response.text


def load_results(source: str | Path, sheet_name: Optional[str] = None) -> WeeklyResults:
    """
    Load weekly results from any supported source.

    Args:
        source: http(s) CSV export URL, .csv file, .xlsx workbook, or .json store
        sheet_name: Worksheet to read for .xlsx sources (default: first sheet)
    """
    source_str = str(source)

    if source_str.startswith(('http://', 'https://')):
        return parse_results_csv(fetch_published_csv(source_str))

    path = Path(source)
    suffix = path.suffix.lower()
    if suffix == '.csv':
        if not path.exists():
            raise FileNotFoundError(f'Results file not found: {path}')
        return parse_results_csv(path.read_text(encoding='utf-8'))
    if suffix in ('.xlsx', '.xlsm'):
        from .excel_parser import parse_results_from_excel

        return parse_results_from_excel(path, sheet_name)
    return load_weekly_results(path)
