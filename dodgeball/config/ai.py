"""Bot decision-making constants.

All timers here are tick counts.
"""

from dataclasses import dataclass

AI_REACTION_TIME = 60  # Ticks between decisions after an evade or a throw
AI_DETECTION_RADIUS = 200.0  # How far away a lethal ball is noticed
AI_EVADE_BOOST = 1.5
AI_DODGE_FACTOR = 0.5  # Weight of the sideways component while evading
AI_CHASE_GAIN = 0.8
AI_WANDER_CHANCE = 0.02
AI_WANDER_GAIN = 0.3
AI_LEAD_DAMPING = 0.5
AI_THROW_DELAY_MIN = 60
AI_THROW_DELAY_MAX = 120
AI_THROW_SCALE = 1.3


@dataclass(frozen=True)
class AIParams:
    """Tunable bot behaviour parameters."""

    reaction_time: int = AI_REACTION_TIME
    detection_radius: float = AI_DETECTION_RADIUS
    evade_boost: float = AI_EVADE_BOOST
    dodge_factor: float = AI_DODGE_FACTOR
    chase_gain: float = AI_CHASE_GAIN
    wander_chance: float = AI_WANDER_CHANCE
    wander_gain: float = AI_WANDER_GAIN
    lead_damping: float = AI_LEAD_DAMPING
    throw_delay_min: int = AI_THROW_DELAY_MIN
    throw_delay_max: int = AI_THROW_DELAY_MAX
