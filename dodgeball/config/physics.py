"""Physics configuration constants.

Distances are in arena pixels and velocities in pixels per tick. Tick-based
values assume the default 60 Hz simulation rate.
"""

from dataclasses import dataclass

# Player movement
PLAYER_RADIUS = 20.0
PLAYER_MAX_SPEED = 5.0
PLAYER_ACCELERATION = 0.25
FRICTION = 0.92  # Player velocity retention per tick
WALL_DAMPING = 0.5  # Fraction of velocity kept (reversed) on boundary contact
STEER_DEAD_ZONE = 5.0  # No acceleration when the steering target is this close

# Aura (speed buff for the current kill-streak leader)
AURA_MIN_KILLS = 2
AURA_SPEED_MULTIPLIER = 1.4

# Ball flight
BALL_RADIUS = 8.0
BALL_FRICTION = 0.985  # Coasts longer than players
BALL_BOUNCE = 0.7  # Perpendicular speed kept after a wall or player bounce
BALL_RESTITUTION = 0.8  # Ball-ball collisions
BALL_STOP_SPEED = 0.5  # Below this the ball is snapped to rest
BALL_IMPACT_PARTICLE_SPEED = 3.0
BALL_PICKUP_RADIUS = 30.0
BALL_TRAIL_LENGTH = 15
BALL_TRAIL_FADE = 0.05
THROW_FORCE = 20.0

# Timers (logical milliseconds)
RESPAWN_TIME_MS = 5000.0
START_DELAY_MS = 2000.0
SPAWN_INVULNERABILITY_MS = 2000.0
HIT_FLASH_MS = 200.0

# Timers (ticks)
THROW_ANIMATION_TICKS = 10
DEATH_ANIMATION_TICKS = 30

# Cosmetics
ROTATION_SPEED_THRESHOLD = 0.5
ROTATION_RATE = 0.05
SCALE_EASE_RATE = 0.02
PLAYER_TRAIL_LENGTH = 8
PLAYER_TRAIL_SPEED_THRESHOLD = 3.0


@dataclass(frozen=True)
class PhysicsParams:
    """Tunable physics parameters for a match.

    Defaults reproduce the feel of the original browser game. All
    multipliers applied per tick must lie in (0, 1].
    """

    player_radius: float = PLAYER_RADIUS
    player_max_speed: float = PLAYER_MAX_SPEED
    player_acceleration: float = PLAYER_ACCELERATION
    friction: float = FRICTION
    wall_damping: float = WALL_DAMPING
    steer_dead_zone: float = STEER_DEAD_ZONE

    aura_min_kills: int = AURA_MIN_KILLS
    aura_speed_multiplier: float = AURA_SPEED_MULTIPLIER

    ball_radius: float = BALL_RADIUS
    ball_friction: float = BALL_FRICTION
    ball_bounce: float = BALL_BOUNCE
    ball_restitution: float = BALL_RESTITUTION
    ball_stop_speed: float = BALL_STOP_SPEED
    ball_impact_particle_speed: float = BALL_IMPACT_PARTICLE_SPEED
    ball_pickup_radius: float = BALL_PICKUP_RADIUS
    throw_force: float = THROW_FORCE

    respawn_time_ms: float = RESPAWN_TIME_MS
    spawn_invulnerability_ms: float = SPAWN_INVULNERABILITY_MS
