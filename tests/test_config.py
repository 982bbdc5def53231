"""Tests for MatchConfig validation and serialisation."""

import dataclasses

import pytest

from dodgeball.config.ai import AIParams
from dodgeball.config.match_config import MatchConfig, MatchMode
from dodgeball.config.physics import PhysicsParams
from dodgeball.entities.team import Team
from dodgeball.exceptions import ConfigurationError, DodgeballError


class TestMatchConfigValidation:
    def test_defaults_are_valid(self):
        config = MatchConfig()
        config.validate()
        assert config.team_size == 5
        assert config.mode is MatchMode.FIXED_ROUND
        assert not config.infinite

    def test_tick_ms_follows_tick_rate(self):
        assert MatchConfig(tick_rate=50).tick_ms == pytest.approx(20.0)

    @pytest.mark.parametrize("team_size", [0, 9, -1])
    def test_team_size_out_of_range(self, team_size):
        with pytest.raises(ConfigurationError):
            MatchConfig(team_size=team_size).validate()

    def test_team_size_must_be_int(self):
        with pytest.raises(ConfigurationError):
            MatchConfig(team_size=True).validate()
        with pytest.raises(ConfigurationError):
            MatchConfig(team_size=2.5).validate()

    def test_mode_must_be_enum(self):
        with pytest.raises(ConfigurationError):
            MatchConfig(mode="infinite").validate()

    def test_multiplier_bounds(self):
        with pytest.raises(ConfigurationError):
            MatchConfig(physics=PhysicsParams(friction=0.0)).validate()
        with pytest.raises(ConfigurationError):
            MatchConfig(physics=PhysicsParams(ball_bounce=1.5)).validate()

    def test_ball_smaller_than_player(self):
        with pytest.raises(ConfigurationError):
            MatchConfig(physics=PhysicsParams(ball_radius=20.0, player_radius=20.0)).validate()

    def test_arena_must_fit_players(self):
        with pytest.raises(ConfigurationError):
            MatchConfig(arena_width=60, arena_height=400).validate()

    def test_throw_delay_range(self):
        with pytest.raises(ConfigurationError):
            MatchConfig(ai=AIParams(throw_delay_min=50, throw_delay_max=10)).validate()

    def test_configuration_error_is_dodgeball_error(self):
        assert issubclass(ConfigurationError, DodgeballError)


class TestMatchConfigSerialization:
    def test_dict_round_trip(self):
        config = MatchConfig(
            team_size=3,
            mode=MatchMode.INFINITE,
            human_team=Team.BLUE,
            human_nickname="Ace",
            seed=11,
        )
        restored = MatchConfig.from_dict(config.to_dict())
        assert restored == config

    def test_from_dict_ignores_unknown_keys(self):
        config = MatchConfig.from_dict({"team_size": 2, "websocket_port": 8000})
        assert config.team_size == 2

    def test_from_dict_rejects_bad_mode(self):
        with pytest.raises(ConfigurationError):
            MatchConfig.from_dict({"mode": "sudden_death"})

    def test_with_overrides_copies(self):
        base = MatchConfig(seed=1)
        infinite = base.with_overrides(mode=MatchMode.INFINITE)
        assert infinite.infinite
        assert base.mode is MatchMode.FIXED_ROUND
        assert infinite.seed == 1

    def test_params_are_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            PhysicsParams().friction = 0.5  # type: ignore[misc]
