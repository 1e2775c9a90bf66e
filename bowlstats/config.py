"""League configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import LeagueConfig
from .scoring import TiePolicy
from .utils import load_json

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'league_config.json'


@lru_cache(maxsize=1)
def get_config() -> LeagueConfig:
    """
    Load league configuration from data/league_config.json.

    Configuration is cached after first load.

    Raises:
        FileNotFoundError: If league_config.json doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from bowlstats.config import get_config
        config = get_config()
        print(f"Standings through week {config.current_week}")
    """
    return load_json(DEFAULT_CONFIG_PATH, schema=LeagueConfig)


def get_current_week() -> int:
    """Get the week standings are currently computed through."""
    return get_config().current_week


def get_first_half_end_week() -> int:
    """Get the last week of the first half."""
    return get_config().first_half_end_week


def get_tie_policy() -> TiePolicy:
    """Get the league's tie policy."""
    return get_config().tie_policy


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime.
    """
    get_config.cache_clear()
