"""Integration tests: stored results through to the exported standings."""

import importlib.util
import json
import logging
import sys
from pathlib import Path

import pytest

from bowlstats.config import (
    clear_config_cache,
    get_config,
    get_current_week,
    get_first_half_end_week,
    get_tie_policy,
)
from bowlstats.export import build_standings_payload, format_points, save_standings_json
from bowlstats.loader import load_weekly_results, weekly_json_to_results
from bowlstats.schedule import parse_schedule_text
from bowlstats.schemas import LeagueConfig
from bowlstats.scoring import TiePolicy
from bowlstats.utils import load_json, save_json


@pytest.fixture
def config():
    return LeagueConfig(
        league_name='Thursday Night Scratch League',
        current_week=4,
        first_half_end_week=2,
        weeks_in_season=30,
        tie_policy='half_point',
        highlight_top=5,
    )


@pytest.fixture
def results_file(tmp_path, weekly_results_json):
    path = tmp_path / 'weekly_results.json'
    path.write_text(json.dumps(weekly_results_json))
    return path


class TestFormatPoints:
    """Tests for points display."""

    @pytest.mark.parametrize('value,expected', [(2.0, '2'), (2.5, '2.5'), (0.0, '0'), (13.5, '13.5')])
    def test_format(self, value, expected):
        assert format_points(value) == expected


class TestStandingsPayload:
    """Tests for the web standings document."""

    def test_full_payload(self, results_file, config):
        """Test standings, weekly matchups and metadata."""
        weekly_results = load_weekly_results(results_file)
        payload = build_standings_payload(weekly_results, config)

        assert payload['league_name'] == 'Thursday Night Scratch League'
        assert payload['as_of_week'] == 4
        assert payload['first_half_end_week'] == 2
        assert payload['tie_policy'] == 'half_point'
        assert 'schedule' not in payload

        standings = payload['standings']
        assert [row['rank'] for row in standings] == list(range(1, 9))
        assert standings[0]['name'] == 'Dave Miller'
        assert standings[0]['total_points'] == 5.0
        assert standings[0]['average'] == 230
        assert standings[0]['high_game'] == 288
        assert [row['highlight'] for row in standings] == [True] * 5 + [False] * 3

        weeks = payload['weeks']
        assert [w['week'] for w in weeks] == [1, 2, 3, 4]
        first = weeks[0]['matches'][0]
        assert first['series1'] == 643
        assert first['series2'] == 621
        assert first['points1'] == 2.0

    def test_as_of_week_override(self, results_file, config):
        """Test standings can be computed for an earlier week."""
        payload = build_standings_payload(load_weekly_results(results_file), config, as_of_week=2)
        assert payload['as_of_week'] == 2
        assert all(row['second_half_points'] == 0 for row in payload['standings'])

    def test_tie_policy_override(self, config):
        """Test winner-take-all standings drop tied points."""
        weekly_results = {
            '1': [
                {'bowler1': 'A', 'scores1': [200, 200, 200], 'bowler2': 'B', 'scores2': [200, 200, 200]}
            ]
        }
        records = weekly_json_to_results(weekly_results)
        half = build_standings_payload(records, config)
        wta = build_standings_payload(records, config, tie_policy=TiePolicy.WINNER_TAKE_ALL)

        assert [r['total_points'] for r in half['standings']] == [2.0, 2.0]
        assert [r['total_points'] for r in wta['standings']] == [0.0, 0.0]
        assert wta['tie_policy'] == 'winner_take_all'
        assert wta['weeks'][0]['matches'][0]['points1'] == 0.0

    def test_no_results(self, config):
        """Test an empty league exports empty standings."""
        payload = build_standings_payload({}, config)
        assert payload['standings'] == []
        assert payload['weeks'] == []

    def test_with_schedule(self, results_file, config):
        """Test the pairings view is included when a schedule is given."""
        schedule = parse_schedule_text(
            'Week 4: Lisa Brown versus Jenny Garcia, Chris Taylor versus Amy Anderson\n'
            'Week 5: Mike Johnson versus Dave Miller'
        )
        payload = build_standings_payload(
            load_weekly_results(results_file), config, schedule=schedule, position_weeks={5}
        )
        assert payload['schedule'][0]['pairings'][0]['played'] is True
        assert payload['schedule'][1]['pairings'][0]['played'] is False
        assert payload['schedule'][1]['is_position_round'] is True

    def test_save(self, tmp_path, results_file, config):
        """Test the payload is written as JSON."""
        payload = build_standings_payload(load_weekly_results(results_file), config)
        out = tmp_path / 'web' / 'data' / 'standings.json'
        save_standings_json(out, payload)

        saved = json.loads(out.read_text())
        assert saved['standings'][0]['name'] == 'Dave Miller'


class TestConfigIntegration:
    """Test the bundled league configuration."""

    def test_config_loads(self):
        clear_config_cache()
        config = get_config()
        assert config.first_half_end_week <= config.weeks_in_season
        assert get_current_week() == config.current_week
        assert get_first_half_end_week() == config.first_half_end_week
        assert get_tie_policy() in TiePolicy

    def test_config_is_cached(self):
        clear_config_cache()
        assert get_config() is get_config()

    def test_bundled_results_load(self):
        """Test the bundled sample results export end to end."""
        from bowlstats.config import DEFAULT_CONFIG_PATH

        results_path = DEFAULT_CONFIG_PATH.parent / 'weekly_results.json'
        payload = build_standings_payload(load_weekly_results(results_path), get_config())
        assert len(payload['standings']) == 8


class TestJsonIO:
    """Tests for JSON file helpers."""

    def test_save_creates_dirs(self, tmp_path):
        out = tmp_path / 'nested' / 'out.json'
        save_json(out, {'name': 'José Ortiz', 'points': 2.5})
        assert load_json(out) == {'name': 'José Ortiz', 'points': 2.5}
        assert 'José' in out.read_text(encoding='utf-8')

    def test_save_rejects_non_serializable(self, tmp_path):
        """Test models must be dumped by the caller first."""
        config = LeagueConfig(
            league_name='League', current_week=1, first_half_end_week=1, weeks_in_season=2
        )
        with pytest.raises(TypeError, match='not JSON-serializable'):
            save_json(tmp_path / 'config.json', config)

    def test_load_with_schema_error(self, tmp_path):
        path = tmp_path / 'league_config.json'
        path.write_text(json.dumps({'league_name': 'League'}))
        with pytest.raises(ValueError, match='Schema validation failed'):
            load_json(path, schema=LeagueConfig)


def load_cli():
    """Import league_standings.py from the repo root."""
    path = Path(__file__).parent.parent / 'league_standings.py'
    spec = importlib.util.spec_from_file_location('league_standings_cli', path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestCli:
    """Tests for the standings CLI."""

    @pytest.fixture
    def cli(self, monkeypatch):
        module = load_cli()
        monkeypatch.setattr(module, 'setup_logging', lambda **kwargs: logging.getLogger('bowlstats'))
        return module

    def run(self, cli, monkeypatch, *args):
        monkeypatch.setattr(sys, 'argv', ['league_standings.py', '--quiet', *args])
        cli.main()

    def test_defaults_come_from_league_config(self, cli, monkeypatch, tmp_path, results_file):
        """Test week, first half and tie policy default to the config accessors."""
        monkeypatch.setattr(cli, 'get_current_week', lambda: 2)
        monkeypatch.setattr(cli, 'get_first_half_end_week', lambda: 1)
        monkeypatch.setattr(cli, 'get_tie_policy', lambda: TiePolicy.WINNER_TAKE_ALL)
        out = tmp_path / 'standings.json'

        self.run(
            cli, monkeypatch,
            '--source', str(results_file),
            '--schedule', str(tmp_path / 'missing.txt'),
            '--output', str(out),
        )

        saved = json.loads(out.read_text())
        assert saved['as_of_week'] == 2
        assert saved['first_half_end_week'] == 1
        assert saved['tie_policy'] == 'winner_take_all'
        assert 'schedule' not in saved

    def test_flags_override_config(self, cli, monkeypatch, tmp_path, results_file):
        out = tmp_path / 'standings.json'

        self.run(
            cli, monkeypatch,
            '--week', '3',
            '--first-half-end', '3',
            '--tie-policy', 'half_point',
            '--source', str(results_file),
            '--schedule', str(tmp_path / 'missing.txt'),
            '--output', str(out),
        )

        saved = json.loads(out.read_text())
        assert saved['as_of_week'] == 3
        assert saved['first_half_end_week'] == 3
        assert saved['tie_policy'] == 'half_point'
        assert all(row['second_half_points'] == 0 for row in saved['standings'])

    def test_missing_source_exits(self, cli, monkeypatch, tmp_path):
        with pytest.raises(SystemExit):
            self.run(cli, monkeypatch, '--source', str(tmp_path / 'nope.json'))
