"""Schedule parsing for weekly bowler pairings.

Schedule file format, one line per week:
    Week 1: Mike Johnson versus Sarah Davis, Tom Wilson vs Lisa Brown
    # comments and blank lines are ignored

Position rounds are written the same way ("Position Week 9: ...") and are
flagged in the exported schedule.
"""

import re
from pathlib import Path

from .models import WeeklyResults
from .scoring import get_week_matches

Schedule = dict[int, list[tuple[str, str]]]

WEEK_LINE = re.compile(r'^(Position\s+)?Week\s+(\d+)\s*:\s*(.*)$', re.IGNORECASE)
PAIRING = re.compile(r'^(.+?)\s+(?:versus|vs\.?)\s+(.+)$', re.IGNORECASE)


def parse_schedule_file(schedule_path: str | Path) -> Schedule:
    """Parse schedule.txt into weekly pairings.

    Args:
        schedule_path: Path to schedule.txt file

    Returns:
        Dict mapping week number to list of (bowler1, bowler2) tuples
    """
    schedule_path = Path(schedule_path)
    if not schedule_path.exists():
        raise FileNotFoundError(f'Schedule file not found: {schedule_path}')

    with open(schedule_path, encoding='utf-8') as f:
        return parse_schedule_text(f.read())


def parse_schedule_text(content: str) -> Schedule:
    """Parse schedule text; see module docstring for the format."""
    schedule: Schedule = {}

    for line in content.split('\n'):
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        week_match = WEEK_LINE.match(line)
        if not week_match:
            continue

        week_num = int(week_match.group(2))
        pairings = []
        for pairing in week_match.group(3).split(','):
            pair_match = PAIRING.match(pairing.strip())
            if pair_match:
                pairings.append((pair_match.group(1).strip(), pair_match.group(2).strip()))

        schedule[week_num] = pairings

    return schedule


def detect_position_weeks(schedule_path: str | Path) -> set[int]:
    """Week numbers written as 'Position Week N:' in the schedule file."""
    schedule_path = Path(schedule_path)
    if not schedule_path.exists():
        return set()

    position_weeks = set()
    with open(schedule_path, encoding='utf-8') as f:
        for line in f:
            match = WEEK_LINE.match(line.strip())
            if match and match.group(1):
                position_weeks.add(int(match.group(2)))
    return position_weeks


def get_week_pairings(schedule: Schedule, weekly_results: WeeklyResults, week: int) -> list[dict]:
    """Pairings for one week, flagged with whether a result has been entered.

    A pairing counts as played if that week has a match between the same two
    bowlers, in either order.
    """
    played = set()
    for match in get_week_matches(weekly_results, week):
        played.add((match.bowler_a, match.bowler_b))
        played.add((match.bowler_b, match.bowler_a))

    return [
        {'bowler1': bowler1, 'bowler2': bowler2, 'played': (bowler1, bowler2) in played}
        for bowler1, bowler2 in schedule.get(week, [])
    ]


def get_schedule_json(
    schedule: Schedule,
    weekly_results: WeeklyResults,
    position_weeks: set[int] | None = None,
) -> list[dict]:
    """Full schedule as week objects for the web export."""
    position_weeks = position_weeks or set()
    return [
        {
            'week': week,
            'is_position_round': week in position_weeks,
            'pairings': get_week_pairings(schedule, weekly_results, week),
        }
        for week in sorted(schedule)
    ]
