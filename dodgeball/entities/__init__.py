"""Entity package exposing the simulation's data model."""

from dodgeball.entities.arena import Arena
from dodgeball.entities.ball import Ball, TrailPoint
from dodgeball.entities.particle import Particle, ParticlePool
from dodgeball.entities.player import AIState, Player, Steering, make_player_id
from dodgeball.entities.team import Team

__all__ = [
    "AIState",
    "Arena",
    "Ball",
    "Particle",
    "ParticlePool",
    "Player",
    "Steering",
    "Team",
    "TrailPoint",
    "make_player_id",
]
