"""Base class and protocol for simulation systems.

This module defines the contract that all simulation systems follow.
Having a consistent interface makes the codebase predictable and easier to extend.

Design Principles:
- Each system has ONE responsibility
- Systems are initialized with the engine that owns the entity collections
- Systems can be enabled/disabled without code changes
- Systems declare the phase they run in for diagnostics
- Systems return results describing what they did (for debugging/metrics)

Systems never keep references to players or balls across ticks; they read
the engine's collections fresh on every update.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol, runtime_checkable

# Explicit public API
__all__ = [
    "SystemResult",
    "System",
    "BaseSystem",
]

if TYPE_CHECKING:
    from dodgeball.simulation.engine import MatchController
    from dodgeball.update_phases import UpdatePhase


@dataclass
class SystemResult:
    """Result of a system update cycle.

    Attributes:
        entities_affected: Number of entities that were modified
        entities_spawned: Number of new entities created (particles)
        entities_removed: Number of entities removed or eliminated
        events_emitted: Number of events emitted to the event bus
        skipped: Whether the update was skipped (system disabled)
        details: System-specific details (e.g., {"hits": 1, "pickups": 2})
    """

    entities_affected: int = 0
    entities_spawned: int = 0
    entities_removed: int = 0
    events_emitted: int = 0
    skipped: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def skipped_result() -> "SystemResult":
        """Create a result for when system update was skipped."""
        return SystemResult(skipped=True)

    @staticmethod
    def empty() -> "SystemResult":
        """Create an empty result (nothing happened)."""
        return SystemResult()

    def __add__(self, other: "SystemResult") -> "SystemResult":
        """Combine two results (useful for aggregating across ticks)."""
        if other.skipped:
            return self
        if self.skipped:
            return other

        combined_details = {**self.details}
        for key, value in other.details.items():
            if key in combined_details and isinstance(value, (int, float)):
                combined_details[key] = combined_details[key] + value
            else:
                combined_details[key] = value

        return SystemResult(
            entities_affected=self.entities_affected + other.entities_affected,
            entities_spawned=self.entities_spawned + other.entities_spawned,
            entities_removed=self.entities_removed + other.entities_removed,
            events_emitted=self.events_emitted + other.events_emitted,
            skipped=False,
            details=combined_details,
        )


@runtime_checkable
class System(Protocol):
    """Protocol defining what all systems must implement."""

    @property
    def name(self) -> str:
        """Human-readable name for debugging and logging."""
        ...

    @property
    def enabled(self) -> bool:
        """Whether this system should run during updates."""
        ...

    def update(self, tick: int) -> SystemResult:
        """Perform the system's per-tick logic."""
        ...


class BaseSystem(ABC):
    """Abstract base class for all simulation systems.

    Provides common functionality and enforces the System protocol.
    Subclasses implement _do_update().
    """

    # Class-level phase declaration (set by @runs_in_phase decorator)
    _phase: Optional["UpdatePhase"] = None

    def __init__(self, engine: "MatchController", name: str) -> None:
        """Initialize the system.

        Args:
            engine: The match controller (owns players, balls, particles)
            name: Human-readable name for this system
        """
        self._engine = engine
        self._name = name
        self._enabled = True
        self._update_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    @property
    def engine(self) -> "MatchController":
        return self._engine

    @property
    def update_count(self) -> int:
        """Number of times update() has run."""
        return self._update_count

    def update(self, tick: int) -> SystemResult:
        """Perform the system's per-tick logic.

        Handles enabled checking and update counting; subclasses implement
        _do_update().

        Args:
            tick: Current simulation tick

        Returns:
            SystemResult describing what the system did
        """
        if not self._enabled:
            return SystemResult.skipped_result()

        result = self._do_update(tick)
        self._update_count += 1

        if result is None:
            return SystemResult.empty()
        return result

    @abstractmethod
    def _do_update(self, tick: int) -> Optional[SystemResult]:
        """Implement system-specific update logic."""

    @property
    def phase(self) -> Optional["UpdatePhase"]:
        """The update phase this system runs in."""
        return self._phase

    def get_debug_info(self) -> Dict[str, Any]:
        """Return debug information about this system's state."""
        return {
            "name": self._name,
            "enabled": self._enabled,
            "update_count": self._update_count,
            "phase": self._phase.name if self._phase else None,
        }

    def __repr__(self) -> str:
        phase_str = f", phase={self._phase.name}" if self._phase else ""
        return f"{self.__class__.__name__}(name={self._name!r}, enabled={self._enabled}{phase_str})"
