"""Match configuration.

This module defines everything a match accepts at start: roster size, mode,
the human player's cosmetic identity and the tunable physics/AI parameters.
Configuration is validated before any match state is built, so a bad value
never surfaces mid-simulation.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Optional

from dodgeball.config.ai import AIParams
from dodgeball.config.display import ARENA_HEIGHT, ARENA_WIDTH, TICK_RATE
from dodgeball.config.physics import START_DELAY_MS, PhysicsParams
from dodgeball.entities.team import Team
from dodgeball.exceptions import ConfigurationError

DEFAULT_TEAM_SIZE = 5
MIN_TEAM_SIZE = 1
MAX_TEAM_SIZE = 8


class MatchMode(Enum):
    """How a match ends.

    FIXED_ROUND: ends when a team is wiped out or the human dies.
    INFINITE: eliminated players respawn; ends only when the human dies.
    """

    FIXED_ROUND = "fixed_round"
    INFINITE = "infinite"


@dataclass
class MatchConfig:
    """Configuration accepted by MatchController.reset().

    Attributes:
        team_size: Players per team, human included on one side
        mode: Fixed-round or infinite respawn
        human_nickname: Cosmetic label for the human player
        human_avatar: Opaque avatar reference; never loaded by the engine
        human_team: Side for the human player (None = chosen by the seeded rng)
        seed: RNG seed for the roster layout and bot decisions
        arena_width: Arena width in pixels
        arena_height: Arena height in pixels
        tick_rate: Simulation ticks per second (fixes the logical clock step)
        start_delay_ms: Countdown before throws are allowed
        physics: Physics parameters
        ai: Bot behaviour parameters
    """

    team_size: int = DEFAULT_TEAM_SIZE
    mode: MatchMode = MatchMode.FIXED_ROUND
    human_nickname: str = "Player"
    human_avatar: Optional[str] = None
    human_team: Optional[Team] = None
    seed: Optional[int] = None
    arena_width: float = ARENA_WIDTH
    arena_height: float = ARENA_HEIGHT
    tick_rate: int = TICK_RATE
    start_delay_ms: float = START_DELAY_MS
    physics: PhysicsParams = field(default_factory=PhysicsParams)
    ai: AIParams = field(default_factory=AIParams)

    @property
    def infinite(self) -> bool:
        return self.mode is MatchMode.INFINITE

    @property
    def tick_ms(self) -> float:
        """Logical milliseconds that elapse per simulation tick."""
        return 1000.0 / self.tick_rate

    def with_overrides(self, **overrides: Any) -> "MatchConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a plain dictionary."""
        return {
            "team_size": self.team_size,
            "mode": self.mode.value,
            "human_nickname": self.human_nickname,
            "human_avatar": self.human_avatar,
            "human_team": self.human_team.value if self.human_team else None,
            "seed": self.seed,
            "arena_width": self.arena_width,
            "arena_height": self.arena_height,
            "tick_rate": self.tick_rate,
            "start_delay_ms": self.start_delay_ms,
            "physics": asdict(self.physics),
            "ai": asdict(self.ai),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchConfig":
        """Create config from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}

        try:
            if "mode" in kwargs and not isinstance(kwargs["mode"], MatchMode):
                kwargs["mode"] = MatchMode(kwargs["mode"])
            if kwargs.get("human_team") is not None and not isinstance(
                kwargs["human_team"], Team
            ):
                kwargs["human_team"] = Team(kwargs["human_team"])
            if isinstance(kwargs.get("physics"), dict):
                kwargs["physics"] = PhysicsParams(**kwargs["physics"])
            if isinstance(kwargs.get("ai"), dict):
                kwargs["ai"] = AIParams(**kwargs["ai"])
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid match configuration: {e}") from e

        return cls(**kwargs)

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ConfigurationError: If any parameter is invalid
        """
        if not isinstance(self.team_size, int) or isinstance(self.team_size, bool):
            raise ConfigurationError(f"team_size must be an integer, got {self.team_size!r}")
        if not MIN_TEAM_SIZE <= self.team_size <= MAX_TEAM_SIZE:
            raise ConfigurationError(
                f"team_size must be {MIN_TEAM_SIZE}-{MAX_TEAM_SIZE}, got {self.team_size}"
            )

        if not isinstance(self.mode, MatchMode):
            raise ConfigurationError(f"mode must be a MatchMode, got {self.mode!r}")

        if self.human_team is not None and not isinstance(self.human_team, Team):
            raise ConfigurationError(f"human_team must be a Team, got {self.human_team!r}")

        if self.arena_width <= 0 or self.arena_height <= 0:
            raise ConfigurationError("Arena dimensions must be positive")

        physics = self.physics
        if self.arena_width / 2 <= 2 * physics.player_radius:
            raise ConfigurationError("Arena is too narrow for the player radius")
        if self.arena_height <= 2 * physics.player_radius:
            raise ConfigurationError("Arena is too short for the player radius")

        if self.tick_rate <= 0:
            raise ConfigurationError(f"tick_rate must be positive, got {self.tick_rate}")
        if self.start_delay_ms < 0:
            raise ConfigurationError("start_delay_ms must be non-negative")

        for name in ("friction", "ball_friction", "ball_bounce", "ball_restitution"):
            value = getattr(physics, name)
            if not 0 < value <= 1:
                raise ConfigurationError(f"physics.{name} must be in (0, 1], got {value}")
        if not 0 <= physics.wall_damping <= 1:
            raise ConfigurationError("physics.wall_damping must be in [0, 1]")
        for name in (
            "player_radius",
            "player_max_speed",
            "player_acceleration",
            "ball_radius",
            "throw_force",
        ):
            if getattr(physics, name) <= 0:
                raise ConfigurationError(f"physics.{name} must be positive")
        if physics.ball_radius >= physics.player_radius:
            raise ConfigurationError("physics.ball_radius must be smaller than player_radius")
        if physics.respawn_time_ms < 0 or physics.spawn_invulnerability_ms < 0:
            raise ConfigurationError("Physics timers must be non-negative")

        ai = self.ai
        if ai.reaction_time < 0:
            raise ConfigurationError("ai.reaction_time must be non-negative")
        if ai.throw_delay_min < 0 or ai.throw_delay_max < ai.throw_delay_min:
            raise ConfigurationError("ai.throw_delay_min/max must satisfy 0 <= min <= max")
        if not 0 <= ai.wander_chance <= 1:
            raise ConfigurationError("ai.wander_chance must be in [0, 1]")
