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
Vector Field Sampler

Evaluates a system on a regular grid over the viewport and turns each
sample into a constant-length arrow.

Arrows encode direction only. Every non-zero sample is normalised to unit
length and scaled to ``arrow_scale * base_scale`` pixels, so slow regions
stay as legible as fast ones. Samples with zero magnitude (fixed points, or
points where evaluation fell back to zero) produce no arrow.

Grid
----
``grid_density = N`` splits each axis into N equal intervals, endpoints
included, giving exactly (N + 1)^2 candidate points.
"""

import math
from typing import List, NamedTuple

from phaseflow.geometry.projection import Projection, Viewport
from phaseflow.systems.planar_system import PlanarSystem
from phaseflow.types.core import Point
from phaseflow.types.results import ArrowPrimitive

BASE_SCALE_FACTOR = 20.0
"""Arrow length in pixels at arrow_scale = 1."""

ARROW_HEAD_LENGTH = 8.0
"""Arrowhead barb length in pixels."""

ARROW_HEAD_ANGLE = math.pi / 6


class FieldSample(NamedTuple):
    """
    One grid sample.

    Attributes
    ----------
    x, y : float
        Grid point (world)
    dx, dy : float
        Normalised, scaled displacement in pixels, y pointing up
        (0, 0 when magnitude is zero)
    magnitude : float
        Raw field magnitude at the point
    """

    x: float
    y: float
    dx: float
    dy: float
    magnitude: float

    @property
    def drawable(self) -> bool:
        return self.magnitude > 0


def _check_density(grid_density: int) -> int:
    if isinstance(grid_density, bool) or int(grid_density) != grid_density or grid_density < 1:
        raise ValueError(f"grid_density must be a positive integer, got {grid_density!r}")
    return int(grid_density)


def grid_points(viewport: Viewport, grid_density: int) -> List[Point]:
    """
    All (N + 1)^2 grid points, column by column (x outer, y inner).

    Examples
    --------
    >>> len(grid_points(Viewport(-1, 1, -1, 1), 4))
    25
    """
    n = _check_density(grid_density)
    step_x = viewport.x_span / n
    step_y = viewport.y_span / n
    return [
        (viewport.x_min + i * step_x, viewport.y_min + j * step_y)
        for i in range(n + 1)
        for j in range(n + 1)
    ]


def sample_field(
    system: PlanarSystem,
    viewport: Viewport,
    grid_density: int,
    arrow_scale: float = 0.5,
    base_scale: float = BASE_SCALE_FACTOR,
) -> List[FieldSample]:
    """
    Evaluate the system at every grid point.

    Parameters
    ----------
    system : PlanarSystem
        Field to sample (evaluation never raises)
    viewport : Viewport
        Region to cover
    grid_density : int
        Intervals per axis
    arrow_scale : float
        Arrow length multiplier
    base_scale : float
        Arrow length in pixels at arrow_scale = 1

    Returns
    -------
    List[FieldSample]
        Exactly (grid_density + 1)^2 samples, including zero-magnitude ones

    Examples
    --------
    >>> samples = sample_field(compile_system("x", "y"), Viewport(-1, 1, -1, 1), 2)
    >>> len(samples), sum(s.drawable for s in samples)
    (9, 8)
    """
    length = arrow_scale * base_scale
    samples = []
    for x, y in grid_points(viewport, grid_density):
        dx, dy = system.evaluate(x, y)
        magnitude = math.hypot(dx, dy)
        if magnitude > 0:
            samples.append(
                FieldSample(x, y, dx / magnitude * length, dy / magnitude * length, magnitude)
            )
        else:
            samples.append(FieldSample(x, y, 0.0, 0.0, 0.0))
    return samples


def arrow_from_sample(
    sample: FieldSample,
    projection: Projection,
    head_length: float = ARROW_HEAD_LENGTH,
) -> ArrowPrimitive:
    """
    Build the arrow for one drawable sample.

    The shaft and head are laid out in pixel space, where the arrow has its
    fixed length, and projected back to world coordinates.
    """
    start_x, start_y = projection.world_to_canvas(sample.x, sample.y)
    # Canvas y grows downward
    end_x = start_x + sample.dx
    end_y = start_y - sample.dy

    angle = math.atan2(end_y - start_y, end_x - start_x)
    head = []
    for side in (-1, 1):
        barb_x = end_x - head_length * math.cos(angle + side * ARROW_HEAD_ANGLE)
        barb_y = end_y - head_length * math.sin(angle + side * ARROW_HEAD_ANGLE)
        head.append(
            (projection.canvas_to_world(end_x, end_y), projection.canvas_to_world(barb_x, barb_y))
        )

    return {
        "start": (sample.x, sample.y),
        "end": projection.canvas_to_world(end_x, end_y),
        "head": head,
    }


def field_arrows(
    samples: List[FieldSample],
    projection: Projection,
    head_length: float = ARROW_HEAD_LENGTH,
) -> List[ArrowPrimitive]:
    """Arrows for the drawable samples; zero-magnitude samples are skipped."""
    return [arrow_from_sample(s, projection, head_length) for s in samples if s.drawable]


__all__ = [
    "BASE_SCALE_FACTOR",
    "ARROW_HEAD_LENGTH",
    "FieldSample",
    "grid_points",
    "sample_field",
    "arrow_from_sample",
    "field_arrows",
]
