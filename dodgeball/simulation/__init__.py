"""Match orchestration: roster setup, the tick loop and published snapshots."""

from dodgeball.simulation.engine import MatchController
from dodgeball.simulation.roster import Roster, build_roster
from dodgeball.simulation.snapshot import (
    BallView,
    MatchOutcome,
    MatchSnapshot,
    ParticleView,
    PlayerView,
    ScoreSnapshot,
)
from dodgeball.simulation.system_registry import SystemRegistry

__all__ = [
    "BallView",
    "MatchController",
    "MatchOutcome",
    "MatchSnapshot",
    "ParticleView",
    "PlayerView",
    "Roster",
    "ScoreSnapshot",
    "SystemRegistry",
    "build_roster",
]
