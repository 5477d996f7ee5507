# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Particles and Particle Integration

A particle is a point mass carried by the field. Its lifecycle:

    Active (spawn) --step, still within bound--> Active
    Active --step, |x| or |y| beyond bound--> Inactive (terminal)

Every step appends the new position to the trajectory, including the step
that leaves the bound, so the exit point is recorded. Inactive particles
are never integrated again; the collection sweeps them out of the live set
into ``retired``, where their trajectories stay drawable until cleared.

Particle ids come from a per-collection counter and are never reused, even
after clear().
"""

import itertools
from typing import Iterator, List, Optional, Tuple

import numpy as np

from phaseflow.systems.numerical_integration import IntegratorBase, create_fixed_step_integrator
from phaseflow.systems.planar_system import PlanarSystem
from phaseflow.types.core import Point
from phaseflow.types.results import ParticlePrimitive

DEFAULT_DT = 0.05
DEFAULT_BOUND = 10.0

PARTICLE_COLORS = [
    "#e74c3c",  # Red
    "#3498db",  # Blue
    "#2ecc71",  # Green
    "#f39c12",  # Orange
    "#9b59b6",  # Purple
    "#e67e22",  # Carrot
    "#1abc9c",  # Turquoise
    "#34495e",  # Slate
]


class Particle:
    """
    Point mass with an append-only trajectory.

    Attributes
    ----------
    id : int
        Unique within its collection
    x, y : float
        Current position
    color : str
        Display color
    trajectory : List[Point]
        Past positions, starting with the spawn point
    active : bool
        False once the particle has left the bound
    """

    def __init__(self, id: int, x: float, y: float, color: str = PARTICLE_COLORS[0]):
        self.id = id
        self.x = float(x)
        self.y = float(y)
        self.color = color
        self.trajectory: List[Point] = [(self.x, self.y)]
        self.active = True

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    @property
    def state(self) -> np.ndarray:
        return np.array([self.x, self.y])

    def move_to(self, x: float, y: float) -> None:
        """Record a new position."""
        self.x = float(x)
        self.y = float(y)
        self.trajectory.append((self.x, self.y))

    def reset_trajectory(self) -> None:
        """Forget the path so far, keeping the current position."""
        self.trajectory = [(self.x, self.y)]

    def to_primitive(self) -> ParticlePrimitive:
        return {
            "id": self.id,
            "color": self.color,
            "polyline": list(self.trajectory),
            "head": self.position if self.active else None,
            "active": self.active,
        }

    def __repr__(self) -> str:
        status = "active" if self.active else "inactive"
        return f"Particle(id={self.id}, x={self.x:.4g}, y={self.y:.4g}, {status})"


class ParticleIntegrator:
    """
    Advances particles through a system with a fixed step.

    Parameters
    ----------
    system : PlanarSystem
        Field to follow
    dt : float
        Shared time step
    bound : float
        Deactivation threshold on |x| and |y|
    method : str
        'rk4' (default), 'midpoint' or 'euler'

    Examples
    --------
    >>> integrator = ParticleIntegrator(load_preset("van-der-pol"), dt=0.05)
    >>> particle = Particle(1, 0.5, 0.0)
    >>> integrator.step(particle)
    >>> len(particle.trajectory)
    2
    """

    def __init__(
        self,
        system: PlanarSystem,
        dt: float = DEFAULT_DT,
        bound: float = DEFAULT_BOUND,
        method: str = "rk4",
    ):
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        self.system = system
        self.bound = float(bound)
        self.integrator: IntegratorBase = create_fixed_step_integrator(method, system, dt)

    @property
    def dt(self) -> float:
        return self.integrator.dt

    def out_of_bounds(self, x: float, y: float) -> bool:
        return abs(x) > self.bound or abs(y) > self.bound

    def step(self, particle: Particle) -> None:
        """
        Advance one particle by one step, in place.

        Inactive particles are left untouched.
        """
        if not particle.active:
            return

        x_next = self.integrator.step(particle.state)
        particle.move_to(x_next[0], x_next[1])

        if self.out_of_bounds(particle.x, particle.y):
            particle.active = False

    def step_all(self, particles) -> int:
        """Advance every active particle once; returns how many were stepped."""
        stepped = 0
        for particle in particles:
            if particle.active:
                self.step(particle)
                stepped += 1
        return stepped

    def get_stats(self):
        return self.integrator.get_stats()


class ParticleCollection:
    """
    Owner of all particles in a session.

    Attributes
    ----------
    live : List[Particle]
        Particles not yet swept (active, or deactivated this tick)
    retired : List[Particle]
        Swept inactive particles kept for drawing
    """

    def __init__(self, colors: Optional[List[str]] = None, keep_retired: bool = True):
        self.colors = list(colors or PARTICLE_COLORS)
        self.keep_retired = keep_retired
        self.live: List[Particle] = []
        self.retired: List[Particle] = []
        self._ids = itertools.count(1)
        self._color_index = 0

    def __len__(self) -> int:
        return len(self.live)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.live)

    @property
    def active_count(self) -> int:
        return sum(1 for p in self.live if p.active)

    @property
    def any_active(self) -> bool:
        return any(p.active for p in self.live)

    def next_color(self) -> str:
        color = self.colors[self._color_index % len(self.colors)]
        self._color_index += 1
        return color

    def spawn(self, x: float, y: float, color: Optional[str] = None) -> Particle:
        """Create an active particle at (x, y)."""
        particle = Particle(next(self._ids), x, y, color or self.next_color())
        self.live.append(particle)
        return particle

    def sweep(self) -> List[Particle]:
        """
        Remove inactive particles from the live set.

        Returns
        -------
        List[Particle]
            The particles removed by this sweep
        """
        removed = [p for p in self.live if not p.active]
        if removed:
            self.live = [p for p in self.live if p.active]
            if self.keep_retired:
                self.retired.extend(removed)
        return removed

    def clear(self) -> None:
        """Drop every particle; ids keep counting, colors start over."""
        self.live = []
        self.retired = []
        self._color_index = 0

    def clear_trajectories(self) -> None:
        """Reset live trajectories to their current point and drop retired ones."""
        for particle in self.live:
            particle.reset_trajectory()
        self.retired = []

    def primitives(self) -> List[ParticlePrimitive]:
        """Drawable state: live particles first, then retired ones."""
        return [p.to_primitive() for p in itertools.chain(self.live, self.retired)]

    def positions(self) -> List[Tuple[int, Point]]:
        return [(p.id, p.position) for p in self.live]


__all__ = [
    "DEFAULT_DT",
    "DEFAULT_BOUND",
    "PARTICLE_COLORS",
    "Particle",
    "ParticleIntegrator",
    "ParticleCollection",
]
