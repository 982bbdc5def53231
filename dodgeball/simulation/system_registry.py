"""System registration and lookup.

The MatchController registers one system per phase and runs them through
explicit phase methods; the registry gives it name lookup, runtime
enable/disable and aggregated debug info.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional

from dodgeball.exceptions import SimulationError
from dodgeball.update_phases import UpdatePhase, get_system_phase

if TYPE_CHECKING:
    from dodgeball.systems.base import BaseSystem

logger = logging.getLogger(__name__)


class SystemRegistry:
    """Registers simulation systems in execution order.

    Example:
        registry = SystemRegistry()
        registry.register(ball_physics)
        registry.register(combat)

        registry.set_enabled("Combat", False)  # Ghost balls
    """

    def __init__(self) -> None:
        self._systems: List["BaseSystem"] = []

    def register(self, system: "BaseSystem") -> None:
        """Register a system.

        Raises:
            SimulationError: If the system declares no phase or its name is
                already taken
        """
        if get_system_phase(system) is None:
            raise SimulationError(f"System {system.name} does not declare an update phase")
        if self.get(system.name) is not None:
            raise SimulationError(f"System {system.name} is already registered")
        self._systems.append(system)
        logger.debug("Registered system: %s (%s)", system.name, system.phase.name)

    def get(self, name: str) -> Optional["BaseSystem"]:
        for system in self._systems:
            if system.name == name:
                return system
        return None

    def for_phase(self, phase: UpdatePhase) -> List["BaseSystem"]:
        """Systems declared for ``phase``, in registration order."""
        return [s for s in self._systems if get_system_phase(s) is phase]

    def get_all(self) -> List["BaseSystem"]:
        return self._systems.copy()

    def set_enabled(self, name: str, enabled: bool) -> bool:
        """Enable or disable a system by name.

        Returns:
            True if the system was found
        """
        system = self.get(name)
        if system is None:
            return False
        system.enabled = enabled
        logger.debug("System %s enabled=%s", name, enabled)
        return True

    def get_debug_info(self) -> Dict[str, Any]:
        return {system.name: system.get_debug_info() for system in self._systems}

    def __len__(self) -> int:
        return len(self._systems)

    def __iter__(self) -> Iterator["BaseSystem"]:
        return iter(self._systems)

    def __repr__(self) -> str:
        return f"SystemRegistry(systems={[s.name for s in self._systems]})"
