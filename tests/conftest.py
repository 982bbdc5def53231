"""Pytest configuration and fixtures for dodgeball tests."""

import random

import pytest

from dodgeball.config.match_config import MatchConfig
from dodgeball.entities.team import Team
from dodgeball.math_utils import Vector2
from dodgeball.simulation.engine import MatchController


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


def place(controller, player_id, x, y):
    """Move a player (and any ball it holds) to (x, y) at rest."""
    player = controller.get_player(player_id)
    player.position = Vector2(x, y)
    player.velocity = Vector2(0.0, 0.0)
    for ball in controller.balls:
        if ball.owner_id == player_id:
            ball.position = player.position.copy()
    return player


@pytest.fixture
def duel_config():
    """1v1 with the human on purple and no start countdown."""
    return MatchConfig(team_size=1, human_team=Team.PURPLE, seed=42, start_delay_ms=0)


@pytest.fixture
def duel(duel_config):
    """A 1v1 controller with bots frozen and players lined up at mid-height.

    purple-0 (human) stands at (300, 360), blue-0 (bot) at (900, 360).
    """
    controller = MatchController(duel_config)
    controller.reset()
    controller.set_system_enabled("AIDecision", False)
    place(controller, "purple-0", 300.0, 360.0)
    place(controller, "blue-0", 900.0, 360.0)
    return controller


@pytest.fixture
def match_controller():
    """Setup a 3v3 controller with a deterministic seed."""
    controller = MatchController(MatchConfig(team_size=3, seed=7, start_delay_ms=0))
    controller.reset()
    return controller


def step_until(controller, predicate, max_ticks=600):
    """Step until ``predicate()`` holds; return the number of ticks run."""
    for i in range(max_ticks):
        if predicate():
            return i
        controller.step()
    assert predicate(), f"condition not reached within {max_ticks} ticks"
    return max_ticks


@pytest.fixture(name="place")
def place_fixture():
    """Expose ``place`` to tests."""
    return place


@pytest.fixture(name="step_until")
def step_until_fixture():
    """Expose ``step_until`` to tests."""
    return step_until
