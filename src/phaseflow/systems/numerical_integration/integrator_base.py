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
Integrator Base - Abstract Interface for Fixed-Step Integration

Defines the interface shared by the fixed-step schemes used to move
particles through a planar field, along with the IntegrationResult TypedDict
returned by multi-step integration.

All integrators are fixed-step: the step size is the shared simulation
clock dt and is never adapted.
"""

import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple, Union

import numpy as np
from typing_extensions import TypedDict

from phaseflow.types.core import ArrayLike, ScalarLike, StateVector

if TYPE_CHECKING:
    from phaseflow.systems.planar_system import PlanarSystem

VectorField = Callable[[StateVector], StateVector]
"""Anything mapping a state [x, y] to its derivative, e.g. a PlanarSystem."""


class IntegrationResult(TypedDict):
    """
    Result of multi-step integration.

    Attributes
    ----------
    t : np.ndarray
        Time points (T,)
    x : np.ndarray
        State trajectory (T, 2), including the initial state
    success : bool
        Whether all requested steps were taken
    message : str
        Status message
    nfev : int
        Function evaluations during this call
    nsteps : int
        Steps taken
    integration_time : float
        Wall-clock time (seconds)
    solver : str
        Integrator name
    """

    t: np.ndarray
    x: np.ndarray
    success: bool
    message: str
    nfev: int
    nsteps: int
    integration_time: float
    solver: str


class IntegratorBase(ABC):
    """
    Abstract base class for fixed-step integrators.

    Subclasses implement step(); integrate() and statistics are shared.

    Examples
    --------
    >>> integrator = RK4Integrator(system, dt=0.05)
    >>> x_next = integrator.step(np.array([1.0, 0.0]))
    >>> result = integrator.integrate(np.array([1.0, 0.0]), n_steps=100)
    >>> result["x"].shape
    (101, 2)
    """

    def __init__(self, system: Union["PlanarSystem", VectorField], dt: ScalarLike):
        """
        Initialize integrator.

        Parameters
        ----------
        system : PlanarSystem or callable
            Field to integrate, called as system(state) -> derivative
        dt : float
            Fixed time step

        Raises
        ------
        ValueError
            If dt is not a positive finite number
        """
        if dt is None or not np.isfinite(dt) or dt <= 0:
            raise ValueError(f"Time step dt must be a positive finite number, got {dt}")

        self.system = system
        self.dt = float(dt)

        self._stats = {
            "total_steps": 0,
            "total_fev": 0,
            "total_time": 0.0,
        }

    @abstractmethod
    def step(self, x: StateVector, dt: Optional[ScalarLike] = None) -> StateVector:
        """
        Take one integration step: x(t) -> x(t + dt).

        Parameters
        ----------
        x : np.ndarray
            Current state (2,)
        dt : Optional[float]
            Step size (uses self.dt if None)

        Returns
        -------
        np.ndarray
            Next state
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable integrator name."""
        pass

    def integrate(
        self,
        x0: ArrayLike,
        n_steps: Optional[int] = None,
        t_span: Optional[Tuple[float, float]] = None,
        stop: Optional[Callable[[StateVector], bool]] = None,
    ) -> IntegrationResult:
        """
        Take repeated fixed steps from x0.

        Parameters
        ----------
        x0 : array-like
            Initial state (2,)
        n_steps : Optional[int]
            Number of steps to take
        t_span : Optional[Tuple[float, float]]
            Alternative to n_steps: ceil((tf - t0) / dt) steps from t0
        stop : Optional[Callable]
            Predicate on the new state; integration ends after the first
            state for which it returns True (that state is included)

        Returns
        -------
        IntegrationResult
            TypedDict with trajectory and diagnostics

        Raises
        ------
        ValueError
            If neither or both of n_steps and t_span are given
        """
        if (n_steps is None) == (t_span is None):
            raise ValueError("Specify exactly one of n_steps or t_span")

        t0 = 0.0
        if t_span is not None:
            t0, tf = t_span
            if tf < t0:
                raise ValueError(f"t_span must be increasing, got {t_span}")
            n_steps = int(np.ceil((tf - t0) / self.dt))

        start_time = time.time()
        fev_before = self._stats["total_fev"]

        x = np.asarray(x0, dtype=float)
        trajectory = [x]
        stopped = False
        for _ in range(n_steps):
            x = self.step(x)
            trajectory.append(x)
            if stop is not None and stop(x):
                stopped = True
                break

        elapsed = time.time() - start_time
        self._stats["total_time"] += elapsed
        nsteps = len(trajectory) - 1

        result: IntegrationResult = {
            "t": t0 + self.dt * np.arange(nsteps + 1),
            "x": np.stack(trajectory),
            "success": not stopped,
            "message": (
                f"Stopped after {nsteps} of {n_steps} steps"
                if stopped
                else f"{self.name} integration completed"
            ),
            "nfev": self._stats["total_fev"] - fev_before,
            "nsteps": nsteps,
            "integration_time": elapsed,
            "solver": self.name,
        }
        return result

    # ========================================================================
    # Common Utilities
    # ========================================================================

    def _evaluate_dynamics(self, x: StateVector) -> StateVector:
        """Evaluate the field, counting function evaluations."""
        self._stats["total_fev"] += 1
        return np.asarray(self.system(x), dtype=float)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get integration statistics.

        Returns
        -------
        dict
            'total_steps', 'total_fev', 'total_time', 'avg_fev_per_step'
        """
        avg_fev = self._stats["total_fev"] / max(1, self._stats["total_steps"])
        return {
            **self._stats,
            "avg_fev_per_step": avg_fev,
        }

    def reset_stats(self):
        """Reset integration statistics to zero."""
        self._stats["total_steps"] = 0
        self._stats["total_fev"] = 0
        self._stats["total_time"] = 0.0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(dt={self.dt})"


__all__ = ["VectorField", "IntegrationResult", "IntegratorBase"]
