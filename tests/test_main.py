"""Tests for the command-line entry point and logging setup."""

import logging

import pytest

import main
from dodgeball.config.match_config import MatchMode
from dodgeball.entities.team import Team
from dodgeball.exceptions import ConfigurationError
from dodgeball.logging_config import LOG_LEVEL_ENV_VAR, resolve_level


class TestBuildConfig:
    def test_flags_map_onto_config(self):
        args = main.create_parser().parse_args(
            ["--team-size", "3", "--infinite", "--seed", "5", "--team", "blue", "--nickname", "Ace"]
        )
        config = main.build_config(args)
        assert config.team_size == 3
        assert config.mode is MatchMode.INFINITE
        assert config.seed == 5
        assert config.human_team is Team.BLUE
        assert config.human_nickname == "Ace"

    def test_defaults(self):
        config = main.build_config(main.create_parser().parse_args([]))
        assert config.mode is MatchMode.FIXED_ROUND
        assert config.human_team is None

    def test_invalid_team_size(self):
        args = main.create_parser().parse_args(["--team-size", "12"])
        with pytest.raises(ConfigurationError):
            main.build_config(args)


class TestMain:
    def test_invalid_config_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            main.main(["--headless", "--team-size", "0"])
        assert exc_info.value.code == 1

    def test_headless_run(self, caplog):
        with caplog.at_level(logging.INFO):
            main.main(["--headless", "--team-size", "1", "--max-ticks", "20", "--seed", "1"])
        assert "HEADLESS DODGEBALL MATCH" in caplog.text


class TestLogLevel:
    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "ERROR")
        assert resolve_level("debug") == logging.DEBUG

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "WARNING")
        assert resolve_level() == logging.WARNING

    def test_unknown_name_falls_back_to_info(self, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
        assert resolve_level("chatty") == logging.INFO
        assert resolve_level() == logging.INFO
