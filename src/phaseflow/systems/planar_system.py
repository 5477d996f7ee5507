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
Planar Autonomous System

A compiled pair of right-hand sides

    dx/dt = f(x, y; params)
    dy/dt = g(x, y; params)

evaluated over the scope {x, y, **params}.

Failure Handling
----------------
PlanarSystem.evaluate is total: if either component raises EvalError at a
point (domain error, division by zero, undefined identifier, non-finite
value) the zero vector is returned for that point. Samplers and integrators
therefore never see an exception, at the cost of malformed equations
silently looking like fixed points where they fail. Failures are not hidden:
they are counted in ``system.diagnostics`` and the first one per system is
reported with a RuntimeWarning.

Immutability
------------
Systems are frozen. Changing equations or parameters means building a new
system (compile_system or PlanarSystem.with_parameters); the diagnostics
counters are the only mutable state and never affect evaluation.
"""

import warnings
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, NamedTuple, Optional

import numpy as np

from phaseflow.exceptions import EvalError
from phaseflow.expressions.compiler import CompiledExpression, compile_expression
from phaseflow.systems.parameters import STATE_VARIABLES, ParameterSpec, parse_parameters
from phaseflow.types.core import StateVector


class Derivative(NamedTuple):
    """Field value (dx/dt, dy/dt) at a point."""

    dx: float
    dy: float


ZERO_DERIVATIVE = Derivative(0.0, 0.0)


@dataclass
class EvaluationDiagnostics:
    """
    Side channel for absorbed evaluation failures.

    Attributes
    ----------
    evaluations : int
        Calls to PlanarSystem.evaluate
    failures : int
        Calls that fell back to the zero vector
    last_error : Optional[EvalError]
        Most recent absorbed error, with its point attached
    """

    evaluations: int = 0
    failures: int = 0
    last_error: Optional[EvalError] = None

    def record_failure(self, error: EvalError) -> None:
        self.failures += 1
        self.last_error = error
        if self.failures == 1:
            warnings.warn(
                f"Evaluation failed at (x, y) = {error.point}: {error}. "
                f"Substituting a zero vector; further failures are counted in "
                f"system.diagnostics without warning.",
                RuntimeWarning,
                stacklevel=3,
            )

    def get_stats(self) -> Dict[str, Any]:
        return {
            "evaluations": self.evaluations,
            "failures": self.failures,
            "failure_rate": self.failures / max(1, self.evaluations),
            "last_error": str(self.last_error) if self.last_error is not None else None,
        }

    def reset(self) -> None:
        self.evaluations = 0
        self.failures = 0
        self.last_error = None


@dataclass(frozen=True)
class PlanarSystem:
    """
    Immutable compiled two-dimensional autonomous system.

    Attributes
    ----------
    dx : CompiledExpression
        Right-hand side of dx/dt
    dy : CompiledExpression
        Right-hand side of dy/dt
    parameters : Mapping[str, float]
        Read-only parameter values
    diagnostics : EvaluationDiagnostics
        Failure counters (excluded from equality)

    Examples
    --------
    >>> system = compile_system("y", "mu * (1 - x^2) * y - x", {"mu": 1.0})
    >>> system.evaluate(1.0, 2.0)
    Derivative(dx=2.0, dy=-1.0)
    >>> system.evaluate(0.0, 0.0)
    Derivative(dx=0.0, dy=0.0)
    """

    dx: CompiledExpression
    dy: CompiledExpression
    parameters: Mapping[str, float]
    diagnostics: EvaluationDiagnostics = field(
        default_factory=EvaluationDiagnostics, compare=False, repr=False
    )

    @property
    def dx_text(self) -> str:
        return self.dx.text

    @property
    def dy_text(self) -> str:
        return self.dy.text

    @property
    def undefined_symbols(self):
        """Identifiers used by the equations but not provided as parameters."""
        known = set(STATE_VARIABLES) | set(self.parameters)
        names = []
        for expr in (self.dx, self.dy):
            for name in expr.free_symbols:
                if name not in known and name not in names:
                    names.append(name)
        return names

    def try_evaluate(self, x: float, y: float) -> Optional[Derivative]:
        """
        Evaluate the field at (x, y), returning None when evaluation fails.

        Failures are still recorded in ``diagnostics``.
        """
        self.diagnostics.evaluations += 1
        scope = dict(self.parameters)
        scope["x"] = x
        scope["y"] = y
        try:
            return Derivative(self.dx.evaluate(scope), self.dy.evaluate(scope))
        except EvalError as e:
            e.point = (x, y)
            self.diagnostics.record_failure(e)
            return None

    def evaluate(self, x: float, y: float) -> Derivative:
        """
        Evaluate the field at (x, y).

        Never raises for numeric input: evaluation failures yield the zero
        vector and are recorded in ``diagnostics``.
        """
        derivative = self.try_evaluate(x, y)
        return ZERO_DERIVATIVE if derivative is None else derivative

    def evaluate_component(self, component: str, x: float, y: float) -> float:
        """Evaluate one component ('dx' or 'dy') with the same fallback."""
        if component == "dx":
            return self.evaluate(x, y).dx
        if component == "dy":
            return self.evaluate(x, y).dy
        raise ValueError(f"Unknown component '{component}'. Choose from: dx, dy")

    def __call__(self, state: StateVector) -> StateVector:
        """
        Vector form used by the integrators: [x, y] -> [dx/dt, dy/dt].
        """
        derivative = self.evaluate(float(state[0]), float(state[1]))
        return np.array([derivative.dx, derivative.dy], dtype=float)

    def with_parameters(self, parameters: ParameterSpec) -> "PlanarSystem":
        """New system with the same equations and different parameters."""
        return PlanarSystem(self.dx, self.dy, parse_parameters(parameters))

    def __repr__(self) -> str:
        return (
            f"PlanarSystem(dx/dt={self.dx.text!r}, dy/dt={self.dy.text!r}, "
            f"parameters={dict(self.parameters)})"
        )


def compile_system(
    dx_text: str,
    dy_text: str,
    parameters: ParameterSpec = None,
) -> PlanarSystem:
    """
    Build a system from equation text and a parameter specification.

    Parameters are validated first, then both equations are compiled.

    Parameters
    ----------
    dx_text : str
        Right-hand side of dx/dt
    dy_text : str
        Right-hand side of dy/dt
    parameters : None, str or Mapping
        Parameter specification (see parse_parameters)

    Returns
    -------
    PlanarSystem
        Compiled system

    Raises
    ------
    ParameterError
        If the parameter specification is malformed
    ParseError
        If either equation fails to compile

    Warns
    -----
    UserWarning
        If an equation references an identifier that is neither a state
        variable nor a parameter (it will fail at every evaluation)
    """
    params = parse_parameters(parameters)
    system = PlanarSystem(compile_expression(dx_text), compile_expression(dy_text), params)

    undefined = system.undefined_symbols
    if undefined:
        warnings.warn(
            f"Undefined symbols {undefined}: every evaluation will fall back to a zero "
            f"vector until they are supplied as parameters",
            UserWarning,
            stacklevel=2,
        )

    return system


__all__ = [
    "Derivative",
    "ZERO_DERIVATIVE",
    "EvaluationDiagnostics",
    "PlanarSystem",
    "compile_system",
]
