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
Core Geometric and Numeric Types

Defines the basic aliases shared by the evaluator, samplers, integrators and
the drawing layer.

Coordinate Conventions
----------------------
- World coordinates: the (x, y) plane of the dynamical system, y pointing up
- Canvas coordinates: pixels on a fixed-size surface, origin top-left,
  y pointing down

Usage
-----
>>> from phaseflow.types.core import Point, Segment
>>>
>>> p: Point = (0.5, -1.0)
>>> s: Segment = ((0.0, 0.0), (1.0, 1.0))
"""

from typing import Dict, List, Literal, Mapping, Tuple, Union

import numpy as np

# ============================================================================
# Scalars and Arrays
# ============================================================================

ScalarLike = Union[int, float, np.floating]
"""Real scalar accepted wherever a float is expected."""

ArrayLike = Union[np.ndarray, List[float], Tuple[float, ...]]
"""Array-like numeric data (converted with np.asarray)."""

StateVector = np.ndarray
"""Planar state [x, y], shape (2,)."""

# ============================================================================
# Geometry
# ============================================================================

Point = Tuple[float, float]
"""World or canvas point (x, y)."""

Segment = Tuple[Point, Point]
"""Line segment (start, end)."""

Polyline = List[Point]
"""Ordered sequence of points."""

# ============================================================================
# System Description
# ============================================================================

Scope = Mapping[str, float]
"""Variable scope for expression evaluation: name -> value."""

ParameterDict = Dict[str, float]
"""Named numeric parameters of a system."""

Component = Literal["dx", "dy"]
"""Which component of the vector field: dx/dt or dy/dt."""

COMPONENTS: Tuple[Component, Component] = ("dx", "dy")


__all__ = [
    "ScalarLike",
    "ArrayLike",
    "StateVector",
    "Point",
    "Segment",
    "Polyline",
    "Scope",
    "ParameterDict",
    "Component",
    "COMPONENTS",
]
