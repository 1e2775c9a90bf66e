#!/usr/bin/env python3
"""
Bowling League Standings CLI

Computes half-season standings from match results and writes the JSON the
web front end renders.

Usage:
    python league_standings.py
    python league_standings.py --week 12 --first-half-end 9
    python league_standings.py --source https://docs.google.com/.../pub?output=csv
    python league_standings.py --source results.xlsx --sheet "Season 2026"
"""

import argparse
import logging
import sys
from pathlib import Path

from bowlstats import build_standings_payload, load_results, save_standings_json
from bowlstats.config import (
    get_config,
    get_current_week,
    get_first_half_end_week,
    get_tie_policy,
)
from bowlstats.export import format_points
from bowlstats.logging_config import setup_logging
from bowlstats.schedule import detect_position_weeks, parse_schedule_file
from bowlstats.scoring import TiePolicy


def print_standings(payload: dict) -> None:
    """Print the standings table."""
    print("\n" + "=" * 78)
    print(f"{payload['league_name'].upper()} - STANDINGS THROUGH WEEK {payload['as_of_week']}")
    print("=" * 78)

    if not payload['standings']:
        print("  No results available.")
        return

    print(f"  {'#':>3}  {'Bowler':<22}{'1st':>6}{'2nd':>6}{'Total':>7}{'Avg':>6}{'HG':>6}{'HS':>6}{'Pins':>7}")
    for row in payload['standings']:
        marker = "*" if row['highlight'] else " "
        print(
            f"{marker} {row['rank']:>3}  {row['name']:<22}"
            f"{format_points(row['first_half_points']):>6}"
            f"{format_points(row['second_half_points']):>6}"
            f"{format_points(row['total_points']):>7}"
            f"{row['average']:>6}{row['high_game']:>6}{row['high_series']:>6}{row['total_pinfall']:>7}"
        )


def main():
    parser = argparse.ArgumentParser(description="Bowling league standings generator")
    parser.add_argument(
        "--week", "-w",
        type=int,
        default=None,
        help="Compute standings through this week (defaults to current_week in league_config.json)",
    )
    parser.add_argument(
        "--first-half-end",
        type=int,
        default=None,
        help="Last week of the first half (defaults to league_config.json)",
    )
    parser.add_argument(
        "--source", "-s",
        default=None,
        help="Results source: weekly_results.json, a .csv/.xlsx file, or a published CSV URL",
    )
    parser.add_argument(
        "--sheet",
        default=None,
        help="Worksheet name for .xlsx sources",
    )
    parser.add_argument(
        "--tie-policy",
        choices=[policy.value for policy in TiePolicy],
        default=None,
        help="Override the league tie policy",
    )
    parser.add_argument(
        "--schedule",
        default="schedule.txt",
        help="Path to schedule.txt for the pairings view",
    )
    parser.add_argument(
        "--output", "-o",
        default="web/data/standings.json",
        help="Output path for the standings JSON",
    )
    parser.add_argument(
        "--excel-backup",
        default=None,
        help="Also write all results to this workbook",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress detailed output",
    )

    args = parser.parse_args()

    logger = setup_logging(
        level=logging.WARNING if args.quiet else logging.INFO,
        log_to_file=False,
    )

    config = get_config()
    as_of_week = args.week if args.week is not None else get_current_week()
    first_half_end = (
        args.first_half_end if args.first_half_end is not None else get_first_half_end_week()
    )
    if first_half_end != config.first_half_end_week:
        config = config.model_copy(update={"first_half_end_week": first_half_end})
    tie_policy = TiePolicy(args.tie_policy) if args.tie_policy else get_tie_policy()

    source = args.source or config.results_csv_url or "data/weekly_results.json"

    try:
        weekly_results = load_results(source, sheet_name=args.sheet)
    except FileNotFoundError as e:
        print(f"❌ {e}")
        sys.exit(1)

    schedule = None
    position_weeks = None
    schedule_path = Path(args.schedule)
    if schedule_path.exists():
        schedule = parse_schedule_file(schedule_path)
        position_weeks = detect_position_weeks(schedule_path)
    else:
        logger.info(f"No schedule at {schedule_path}; skipping pairings")

    payload = build_standings_payload(
        weekly_results,
        config,
        as_of_week=as_of_week,
        schedule=schedule,
        position_weeks=position_weeks,
        tie_policy=tie_policy,
    )

    if not args.quiet:
        print_standings(payload)

    save_standings_json(args.output, payload)
    print(f"\nStandings saved to {args.output}")

    if args.excel_backup:
        from bowlstats.excel_parser import write_results_to_excel

        write_results_to_excel(args.excel_backup, weekly_results)


if __name__ == "__main__":
    main()
