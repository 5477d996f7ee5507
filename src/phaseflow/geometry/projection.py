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
Viewport and World/Canvas Projection

World coordinates are the (x, y) plane of the system with y pointing up.
Canvas coordinates are pixels on a fixed-size drawing surface with the
origin at the top-left corner and y pointing down:

    canvas_x = (x - x_min) / (x_max - x_min) * width
    canvas_y = height - (y - y_min) / (y_max - y_min) * height

Projection is a pure function of the Viewport, so it can be recomputed or
shared freely.
"""

import math
from dataclasses import dataclass, replace
from typing import List, Tuple

import numpy as np

from phaseflow.exceptions import ViewportError
from phaseflow.types.core import ArrayLike, Point, Segment
from phaseflow.types.results import GridPrimitive

DEFAULT_RANGE = (-5.0, 5.0)
DEFAULT_CANVAS_SIZE = (800, 600)


@dataclass(frozen=True)
class Viewport:
    """
    Axis-aligned world rectangle plus the pixel size of the drawing surface.

    Attributes
    ----------
    x_min, x_max : float
        Horizontal world range (x_max > x_min)
    y_min, y_max : float
        Vertical world range (y_max > y_min)
    width, height : int
        Canvas size in pixels

    Raises
    ------
    ViewportError
        On a degenerate or non-finite range, or a non-positive canvas size

    Examples
    --------
    >>> view = Viewport(-2, 2, -1, 1)
    >>> view.x_span
    4.0
    >>> Viewport(1, 1, -1, 1)
    Traceback (most recent call last):
    ...
    phaseflow.exceptions.ViewportError: x_max (1.0) must be greater than x_min (1.0)
    """

    x_min: float = DEFAULT_RANGE[0]
    x_max: float = DEFAULT_RANGE[1]
    y_min: float = DEFAULT_RANGE[0]
    y_max: float = DEFAULT_RANGE[1]
    width: int = DEFAULT_CANVAS_SIZE[0]
    height: int = DEFAULT_CANVAS_SIZE[1]

    def __post_init__(self):
        for name in ("x_min", "x_max", "y_min", "y_max"):
            value = getattr(self, name)
            try:
                value = float(value)
            except (TypeError, ValueError):
                raise ViewportError(f"{name} must be a number, got {value!r}") from None
            if not math.isfinite(value):
                raise ViewportError(f"{name} must be finite, got {value}")
            object.__setattr__(self, name, value)

        if self.x_max <= self.x_min:
            raise ViewportError(
                f"x_max ({self.x_max}) must be greater than x_min ({self.x_min})"
            )
        if self.y_max <= self.y_min:
            raise ViewportError(
                f"y_max ({self.y_max}) must be greater than y_min ({self.y_min})"
            )
        if self.width <= 0 or self.height <= 0:
            raise ViewportError(
                f"Canvas size must be positive, got {self.width}x{self.height}"
            )

    @classmethod
    def default(cls, width: int = DEFAULT_CANVAS_SIZE[0], height: int = DEFAULT_CANVAS_SIZE[1]):
        """The [-5, 5] x [-5, 5] view."""
        return cls(width=width, height=height)

    @property
    def x_span(self) -> float:
        return self.x_max - self.x_min

    @property
    def y_span(self) -> float:
        return self.y_max - self.y_min

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return (self.x_min, self.x_max, self.y_min, self.y_max)

    def contains(self, x: float, y: float) -> bool:
        """True if (x, y) lies in the closed rectangle."""
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max

    def with_range(self, x_min: float, x_max: float, y_min: float, y_max: float) -> "Viewport":
        """Same canvas, new world range."""
        return replace(self, x_min=x_min, x_max=x_max, y_min=y_min, y_max=y_max)


class Projection:
    """
    Bidirectional world <-> canvas mapping for one viewport.

    Examples
    --------
    >>> proj = Projection(Viewport(-5, 5, -5, 5, width=800, height=600))
    >>> proj.world_to_canvas(0.0, 0.0)
    (400.0, 300.0)
    >>> proj.canvas_to_world(0.0, 0.0)
    (-5.0, 5.0)
    """

    def __init__(self, viewport: Viewport):
        self.viewport = viewport

    # ========================================================================
    # Scalar mapping
    # ========================================================================

    def world_to_canvas_x(self, x: float) -> float:
        v = self.viewport
        return (x - v.x_min) / v.x_span * v.width

    def world_to_canvas_y(self, y: float) -> float:
        v = self.viewport
        return v.height - (y - v.y_min) / v.y_span * v.height

    def canvas_to_world_x(self, canvas_x: float) -> float:
        v = self.viewport
        return v.x_min + (canvas_x / v.width) * v.x_span

    def canvas_to_world_y(self, canvas_y: float) -> float:
        v = self.viewport
        return v.y_min + ((v.height - canvas_y) / v.height) * v.y_span

    def world_to_canvas(self, x: float, y: float) -> Point:
        return (self.world_to_canvas_x(x), self.world_to_canvas_y(y))

    def canvas_to_world(self, canvas_x: float, canvas_y: float) -> Point:
        return (self.canvas_to_world_x(canvas_x), self.canvas_to_world_y(canvas_y))

    # ========================================================================
    # Vectorised mapping
    # ========================================================================

    def world_to_canvas_array(self, points: ArrayLike) -> np.ndarray:
        """
        Map an (N, 2) array of world points to canvas pixels.
        """
        pts = np.asarray(points, dtype=float).reshape(-1, 2)
        v = self.viewport
        out = np.empty_like(pts)
        out[:, 0] = (pts[:, 0] - v.x_min) / v.x_span * v.width
        out[:, 1] = v.height - (pts[:, 1] - v.y_min) / v.y_span * v.height
        return out

    def canvas_to_world_array(self, points: ArrayLike) -> np.ndarray:
        """
        Map an (N, 2) array of canvas pixels to world points.
        """
        pts = np.asarray(points, dtype=float).reshape(-1, 2)
        v = self.viewport
        out = np.empty_like(pts)
        out[:, 0] = v.x_min + (pts[:, 0] / v.width) * v.x_span
        out[:, 1] = v.y_min + ((v.height - pts[:, 1]) / v.height) * v.y_span
        return out

    def canvas_contains(self, canvas_x: float, canvas_y: float) -> bool:
        v = self.viewport
        return 0 <= canvas_x <= v.width and 0 <= canvas_y <= v.height


def grid_lines(viewport: Viewport, divisions: int = 10) -> GridPrimitive:
    """
    Background grid and axes in world coordinates.

    Parameters
    ----------
    viewport : Viewport
        Visible region
    divisions : int
        Number of grid intervals per axis

    Returns
    -------
    GridPrimitive
        'lines': divisions + 1 vertical and horizontal segments each;
        'axes': the x-axis if y=0 is visible and the y-axis if x=0 is visible
    """
    if divisions < 1:
        raise ValueError(f"divisions must be >= 1, got {divisions}")

    v = viewport
    lines: List[Segment] = []
    for x in np.linspace(v.x_min, v.x_max, divisions + 1):
        lines.append(((float(x), v.y_min), (float(x), v.y_max)))
    for y in np.linspace(v.y_min, v.y_max, divisions + 1):
        lines.append(((v.x_min, float(y)), (v.x_max, float(y))))

    axes: List[Segment] = []
    if v.y_min <= 0 <= v.y_max:
        axes.append(((v.x_min, 0.0), (v.x_max, 0.0)))
    if v.x_min <= 0 <= v.x_max:
        axes.append(((0.0, v.y_min), (0.0, v.y_max)))

    return {"lines": lines, "axes": axes}


__all__ = [
    "DEFAULT_RANGE",
    "DEFAULT_CANVAS_SIZE",
    "Viewport",
    "Projection",
    "grid_lines",
]
