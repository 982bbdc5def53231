"""Bot behaviour: perception, the decision function and its system."""

from dodgeball.ai.decision import decide
from dodgeball.ai.states import Decision, EnemyView, Perception
from dodgeball.ai.system import AIDecisionSystem, build_perception

__all__ = [
    "AIDecisionSystem",
    "Decision",
    "EnemyView",
    "Perception",
    "build_perception",
    "decide",
]
