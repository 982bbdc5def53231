"""Simulation systems, one per update phase.

Each system extends BaseSystem and declares its phase with
@runs_in_phase. The MatchController owns one instance of each and calls
them in phase order.
"""

from dodgeball.systems.ball_physics import BallPhysicsSystem
from dodgeball.systems.base import BaseSystem, System, SystemResult
from dodgeball.systems.combat import CombatSystem, RespawnSystem, process_respawns
from dodgeball.systems.particles import ParticleSystem
from dodgeball.systems.player_motion import PlayerMotionSystem, find_aura_holder

__all__ = [
    "BallPhysicsSystem",
    "BaseSystem",
    "CombatSystem",
    "ParticleSystem",
    "PlayerMotionSystem",
    "RespawnSystem",
    "System",
    "SystemResult",
    "find_aura_holder",
    "process_respawns",
]
