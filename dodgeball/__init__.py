"""Two-team dodgeball simulation engine.

This package contains the pure simulation logic with no UI dependencies.
Key modules include:

- simulation: MatchController, the tick orchestrator (dodgeball.simulation.engine)
- systems: player motion, ball physics, combat and particles
- ai: bot perception and the decision function
- entities: Player, Ball, Particle, Team and Arena
- config: tunable constants and MatchConfig

Design note: this module exposes a small, explicit public API via ``__all__``.
Use direct imports from subpackages for internal helpers.
"""

from dodgeball.config.match_config import MatchConfig, MatchMode
from dodgeball.entities.team import Team
from dodgeball.exceptions import ConfigurationError, DodgeballError, SimulationError
from dodgeball.math_utils import Vector2
from dodgeball.simulation.engine import MatchController
from dodgeball.simulation.snapshot import MatchOutcome, MatchSnapshot

__version__ = "0.1.0"

# Public API of the dodgeball package. Keep this list intentionally small.
__all__ = [
    "ConfigurationError",
    "DodgeballError",
    "MatchConfig",
    "MatchController",
    "MatchMode",
    "MatchOutcome",
    "MatchSnapshot",
    "SimulationError",
    "Team",
    "Vector2",
]
