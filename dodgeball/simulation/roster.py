"""Deterministic match roster construction.

Given a config and a seeded RNG, ``build_roster`` always produces the same
players and balls: N players per team laid out in a column on their half,
one human in the middle of their team, and one ball per player, held by it.
"""

import logging
import random
from dataclasses import dataclass
from typing import List

from dodgeball.config.match_config import MatchConfig
from dodgeball.entities.arena import Arena
from dodgeball.entities.ball import Ball
from dodgeball.entities.player import Player, make_player_id
from dodgeball.entities.team import Team

logger = logging.getLogger(__name__)

TEAM_ORDER = (Team.PURPLE, Team.BLUE)


@dataclass
class Roster:
    """Players and balls for a fresh match, in roster order."""

    players: List[Player]
    balls: List[Ball]
    human_team: Team


def human_index(team_size: int) -> int:
    """Roster slot of the human player within their team."""
    return team_size // 2


def build_roster(config: MatchConfig, arena: Arena, rng: random.Random) -> Roster:
    """Create every player and ball for a match.

    RNG draws, in order: the human's team (only when not configured), then
    for each team its spawn jitter followed by its bots' initial throw
    delays.
    """
    human_team = config.human_team
    if human_team is None:
        human_team = rng.choice(TEAM_ORDER)

    physics = config.physics
    ai = config.ai
    players: List[Player] = []
    balls: List[Ball] = []

    for team in TEAM_ORDER:
        positions = arena.spawn_positions(team, config.team_size, rng)
        for index, position in enumerate(positions):
            player_id = make_player_id(team, index)
            is_human = team is human_team and index == human_index(config.team_size)

            player = Player(
                player_id=player_id,
                team=team,
                index=index,
                position=position,
                radius=physics.player_radius,
                is_human=is_human,
                has_ball=True,
                nickname=config.human_nickname if is_human else None,
                avatar=config.human_avatar if is_human else None,
                invulnerable_until_ms=config.start_delay_ms,
            )
            if not is_human:
                player.throw_delay = rng.randint(ai.throw_delay_min, ai.throw_delay_max)
            players.append(player)

            balls.append(
                Ball(
                    ball_id=f"ball-{player_id}",
                    position=position.copy(),
                    radius=physics.ball_radius,
                    owner_id=player_id,
                )
            )

    logger.debug(
        "Built roster: %d players, %d balls, human on %s",
        len(players),
        len(balls),
        human_team.value,
    )
    return Roster(players=players, balls=balls, human_team=human_team)
