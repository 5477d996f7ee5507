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
Exception hierarchy for phaseflow.

Three failure classes reach the caller of the engine:

- ParseError: equation text does not compile
- ParameterError: parameter specification is not a flat name -> number map
- EvalError: evaluation failed at a specific point

ParseError and ParameterError abort an update and leave the previously loaded
system untouched. EvalError is absorbed by PlanarSystem.evaluate, which
substitutes a zero vector and records the failure in its diagnostics.
"""

from typing import Optional, Tuple


class PhaseFlowError(Exception):
    """Base class for all phaseflow errors"""
    pass


class ParseError(PhaseFlowError, ValueError):
    """
    Raised when equation text fails to compile.

    Attributes
    ----------
    text : str
        The offending expression text
    position : Optional[int]
        Character offset where parsing failed (None if unknown)
    """

    def __init__(self, message: str, text: str = "", position: Optional[int] = None):
        self.text = text
        self.position = position
        self.reason = message
        if position is not None:
            message = f"{message} at position {position} in '{text}'"
        elif text:
            message = f"{message} in '{text}'"
        super().__init__(message)


class ParameterError(PhaseFlowError, ValueError):
    """Raised when the parameter specification is malformed"""
    pass


class EvalError(PhaseFlowError, ArithmeticError):
    """
    Raised when an expression cannot be evaluated in a given scope.

    Attributes
    ----------
    point : Optional[Tuple[float, float]]
        (x, y) at which evaluation failed, when known
    """

    def __init__(self, message: str, point: Optional[Tuple[float, float]] = None):
        self.point = point
        super().__init__(message)


class ViewportError(PhaseFlowError, ValueError):
    """Raised when a viewport range or canvas size is degenerate"""
    pass


class SystemNotLoadedError(PhaseFlowError, RuntimeError):
    """Raised when an operation needs a system but none has been loaded"""
    pass


__all__ = [
    "PhaseFlowError",
    "ParseError",
    "ParameterError",
    "EvalError",
    "ViewportError",
    "SystemNotLoadedError",
]
