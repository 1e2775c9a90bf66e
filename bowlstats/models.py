"""Data models for bowling league standings."""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

GAMES_PER_MATCH = 3


def _check_games(games, side: str) -> Tuple[int, ...]:
    games = tuple(games)
    if len(games) != GAMES_PER_MATCH:
        raise ValueError(f'{side} must have exactly {GAMES_PER_MATCH} games, got {len(games)}')
    for game in games:
        # bool is an int subclass but never a valid pinfall
        if isinstance(game, bool) or not isinstance(game, int):
            raise ValueError(f'{side} has non-integer game score: {game!r}')
        if game < 0:
            raise ValueError(f'{side} has negative game score: {game}')
    return games


@dataclass(frozen=True)
class MatchRecord:
    """One head-to-head result for a given week.

    Bowler names are identity keys and are kept exactly as entered.
    """
    week: int
    bowler_a: str
    games_a: Tuple[int, int, int]
    bowler_b: str
    games_b: Tuple[int, int, int]

    def __post_init__(self):
        if isinstance(self.week, bool) or not isinstance(self.week, int) or self.week < 1:
            raise ValueError(f'Week must be a positive integer, got {self.week!r}')
        if not self.bowler_a or not self.bowler_b:
            raise ValueError('Both bowler names are required')
        object.__setattr__(self, 'games_a', _check_games(self.games_a, self.bowler_a))
        object.__setattr__(self, 'games_b', _check_games(self.games_b, self.bowler_b))

    @property
    def series_a(self) -> int:
        return sum(self.games_a)

    @property
    def series_b(self) -> int:
        return sum(self.games_b)


@dataclass
class BowlerAccumulator:
    """Running totals for one bowler inside a single aggregation pass."""
    name: str
    points: float = 0.0
    games: List[int] = field(default_factory=list)
    series_totals: List[int] = field(default_factory=list)
    total_pinfall: int = 0


@dataclass(frozen=True)
class StandingsRow:
    """Derived standings line for one bowler."""
    name: str
    points: float
    average: int
    high_game: int
    high_series: int
    total_pinfall: int
    matches_played: int = 0


@dataclass(frozen=True)
class CombinedStandingsRow:
    """Standings line combining first-half, second-half and season windows."""
    name: str
    first_half_points: float
    second_half_points: float
    total_points: float
    average: int
    high_game: int
    high_series: int
    total_pinfall: int
    matches_played: int = 0


@dataclass(frozen=True)
class MatchResult:
    """A scored match for the weekly matchup view."""
    record: MatchRecord
    series_a: int
    series_b: int
    points_a: float
    points_b: float


# Week number (as string) -> matches bowled that week
WeeklyResults = Dict[str, List[MatchRecord]]
