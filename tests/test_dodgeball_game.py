"""Tests for the pygame front end's state handling (no window is opened)."""

import pytest

pygame = pytest.importorskip("pygame")

from dodgeball.config.match_config import MatchConfig, MatchMode  # noqa: E402
from dodgeball.entities.team import Team  # noqa: E402
from dodgeball.events import PlayerHitEvent  # noqa: E402
from dodgeball_game import DodgeballGame  # noqa: E402


@pytest.fixture
def game():
    config = MatchConfig(
        team_size=1, human_team=Team.PURPLE, human_nickname="Ace", seed=1, start_delay_ms=0
    )
    return DodgeballGame(config)


def _hit(thrower_id="purple-0", victim_id="blue-0") -> PlayerHitEvent:
    return PlayerHitEvent(
        victim_id=victim_id,
        victim_team=Team.BLUE,
        thrower_id=thrower_id,
        ball_id="ball-purple-0",
        victim_x=900.0,
        victim_y=360.0,
        ball_x=880.0,
        ball_y=360.0,
        respawn_at_ms=None,
        tick=1,
    )


class TestMenuFlow:
    def test_starts_in_menu(self, game):
        assert game.state == "menu"
        assert not game.controller.initialized

    def test_menu_choices_pick_mode(self, game):
        game._choose(1)
        assert game.state == "playing"
        assert game.controller.config.mode is MatchMode.INFINITE

        game.state = "results"
        game._choose(0)  # play again keeps the last mode
        assert game.controller.config.mode is MatchMode.INFINITE
        assert game.state == "playing"

        game.state = "results"
        game._choose(1)
        assert game.state == "menu"

    def test_paused_game_does_not_advance(self, game):
        game.start_match(MatchMode.FIXED_ROUND)
        game.paused = True
        game.update(100.0)
        assert game.controller.tick == 0

    def test_update_advances_and_detects_end(self, game):
        game.start_match(MatchMode.FIXED_ROUND)
        game.update(50.0)
        assert game.controller.tick == 3

        game.controller.get_player("blue-0").is_alive = False
        game.update(20.0)
        assert game.state == "results"


class TestHitFeed:
    def test_hit_uses_nickname_for_human(self, game):
        game.start_match(MatchMode.FIXED_ROUND)
        game.controller.event_bus.emit(_hit())
        assert game.hit_feed[-1]["message"] == "Ace hit blue-0"

    def test_feed_is_bounded(self, game):
        game.start_match(MatchMode.FIXED_ROUND)
        for _ in range(20):
            game.controller.event_bus.emit(_hit())
        assert len(game.hit_feed) == 5

    def test_new_match_clears_feed(self, game):
        game.start_match(MatchMode.FIXED_ROUND)
        game.controller.event_bus.emit(_hit())
        game.start_match(MatchMode.FIXED_ROUND)
        assert game.hit_feed == []

    def test_close_detaches_feed(self, game):
        game.start_match(MatchMode.FIXED_ROUND)
        game.close()
        game.controller.event_bus.emit(_hit())
        assert game.hit_feed == []
