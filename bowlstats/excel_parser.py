"""Excel match result parsing utilities."""

import logging
from pathlib import Path
from typing import Optional

import openpyxl

from .loader import check_columns, rows_to_weekly_results, table_rows_to_match_rows
from .models import WeeklyResults

logger = logging.getLogger('bowlstats.excel_parser')


def read_sheet_rows(filepath: str | Path, sheet_name: Optional[str] = None) -> list[dict]:
    """
    Read a results worksheet into header-keyed row dicts.

    The first row holds headers; fully blank rows are skipped.

    Args:
        filepath: Path to the Excel file
        sheet_name: Name of the sheet to read (default: active sheet)

    Returns:
        List of dicts mapping header -> cell value
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f'Results workbook not found: {filepath}')

    wb = openpyxl.load_workbook(filepath, read_only=True, data_only=True)
    try:
        ws = wb[sheet_name] if sheet_name else wb.active

        rows = ws.iter_rows(values_only=True)
        headers = next(rows, None)
        if headers is None:
            return []
        check_columns(headers, f'Sheet {ws.title!r}')

        records = []
        for values in rows:
            if all(v is None or (isinstance(v, str) and not v.strip()) for v in values):
                continue
            records.append(dict(zip(headers, values)))
    finally:
        wb.close()

    return records


def parse_results_from_excel(
    filepath: str | Path, sheet_name: Optional[str] = None
) -> WeeklyResults:
    """
    Parse weekly match results from an Excel workbook.

    Expected columns: Week, Bowler1, B1 Game1-3, Bowler2, B2 Game1-3.

    Args:
        filepath: Path to the Excel file
        sheet_name: Name of the sheet to read (default: active sheet)

    Returns:
        WeeklyResults with invalid rows dropped
    """
    records = read_sheet_rows(filepath, sheet_name)
    logger.debug(f'Read {len(records)} rows from {filepath}')
    return rows_to_weekly_results(table_rows_to_match_rows(records))


def write_results_to_excel(
    excel_path: str | Path, weekly_results: WeeklyResults, sheet_name: str = 'Results'
) -> None:
    """
    Write weekly results to a workbook sheet in the same column layout.

    Replaces the sheet if it already exists.
    """
    excel_path = Path(excel_path)
    if excel_path.exists():
        wb = openpyxl.load_workbook(excel_path)
        if sheet_name in wb.sheetnames:
            del wb[sheet_name]
        ws = wb.create_sheet(sheet_name)
    else:
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = sheet_name

    ws.append(
        ['Week', 'Bowler1', 'B1 Game1', 'B1 Game2', 'B1 Game3',
         'Bowler2', 'B2 Game1', 'B2 Game2', 'B2 Game3']
    )
    for week_key in sorted(weekly_results, key=int):
        for match in weekly_results[week_key]:
            ws.append([match.week, match.bowler_a, *match.games_a, match.bowler_b, *match.games_b])

    wb.save(excel_path)
    logger.info(f'Results saved to {excel_path}')
