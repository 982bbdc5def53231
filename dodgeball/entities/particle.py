"""Cosmetic particles and the pool that stores them.

Particles are the only entities with unbounded create/destroy churn, so the
pool keeps live particles in a flat list with swap-remove deletion and
recycles released objects instead of allocating new ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List


@dataclass
class Particle:
    """A short-lived visual effect. No gameplay code reads particles."""

    x: float
    y: float
    vx: float
    vy: float
    life: int
    max_life: int
    color: str
    size: float

    @property
    def life_fraction(self) -> float:
        if self.max_life <= 0:
            return 0.0
        return self.life / self.max_life


class ParticlePool:
    """Object pool for Particle instances.

    ``remove_at`` is O(1): the last live particle is moved into the freed
    slot, so callers iterating by index must walk backwards.
    """

    def __init__(self, max_free: int = 512) -> None:
        """Initialize the particle pool.

        Args:
            max_free: Upper bound on recycled particles kept for reuse
        """
        self._active: List[Particle] = []
        self._free: List[Particle] = []
        self._max_free = max_free

    def acquire(
        self,
        x: float,
        y: float,
        vx: float,
        vy: float,
        life: int,
        color: str,
        size: float,
    ) -> Particle:
        """Get a particle from the pool or create a new one."""
        if self._free:
            particle = self._free.pop()
            particle.x = x
            particle.y = y
            particle.vx = vx
            particle.vy = vy
            particle.life = life
            particle.max_life = life
            particle.color = color
            particle.size = size
        else:
            particle = Particle(x, y, vx, vy, life, life, color, size)

        self._active.append(particle)
        return particle

    def remove_at(self, index: int) -> None:
        """Remove the live particle at ``index`` in O(1)."""
        particle = self._active[index]
        last = self._active.pop()
        if index < len(self._active):
            self._active[index] = last
        if len(self._free) < self._max_free:
            self._free.append(particle)

    def clear(self) -> None:
        """Drop all live particles."""
        self._active.clear()
        self._free.clear()

    @property
    def active(self) -> List[Particle]:
        return self._active

    def __len__(self) -> int:
        return len(self._active)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._active)

    def get_stats(self) -> dict:
        """Get pool statistics for monitoring."""
        return {
            "active_count": len(self._active),
            "free_count": len(self._free),
        }
