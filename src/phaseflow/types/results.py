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
Result Types - Drawing Primitives and Frames

All result types are TypedDicts so the drawing layer can consume them without
importing any phaseflow classes. Every coordinate is in world space; mapping
to pixels is done separately by phaseflow.geometry.Projection.

Usage
-----
>>> frame = engine.build_frame()
>>> for arrow in frame["arrows"]:
...     print(arrow["start"], arrow["end"])
>>> for particle in frame["particles"]:
...     print(particle["id"], len(particle["polyline"]))
"""

from typing import TYPE_CHECKING, Dict, List, Optional

from typing_extensions import TypedDict

from .core import Point, Segment

if TYPE_CHECKING:
    from phaseflow.analysis.nullclines import Nullcline


class ArrowPrimitive(TypedDict):
    """
    One direction-field arrow.

    Attributes
    ----------
    start : Point
        Grid point the arrow is anchored at
    end : Point
        Arrow tip
    head : List[Segment]
        The two arrowhead barbs, each from the tip outward
    """

    start: Point
    end: Point
    head: List[Segment]


class ParticlePrimitive(TypedDict):
    """
    Drawable state of one particle.

    Attributes
    ----------
    id : int
        Particle identity
    color : str
        Display color (hex)
    polyline : List[Point]
        Full trajectory, oldest first
    head : Optional[Point]
        Current position marker; None once the particle is inactive
    active : bool
        Whether the particle is still being integrated
    """

    id: int
    color: str
    polyline: List[Point]
    head: Optional[Point]
    active: bool


class GridPrimitive(TypedDict):
    """
    Background grid.

    Attributes
    ----------
    lines : List[Segment]
        Regular grid lines
    axes : List[Segment]
        x and y axes (only those whose zero lies inside the viewport)
    """

    lines: List[Segment]
    axes: List[Segment]


class Frame(TypedDict):
    """
    Everything the drawing layer needs for one redraw.

    Attributes
    ----------
    arrows : List[ArrowPrimitive]
        Direction field (empty if no system)
    nullclines : Dict[str, Nullcline]
        Keyed by component ('dx', 'dy'); empty if nullclines are hidden
    particles : List[ParticlePrimitive]
        Live particles followed by retired ones
    grid : Optional[GridPrimitive]
        Background grid, None if hidden
    message : Optional[str]
        Placeholder text when nothing can be drawn yet
    """

    arrows: List[ArrowPrimitive]
    nullclines: Dict[str, "Nullcline"]
    particles: List[ParticlePrimitive]
    grid: Optional[GridPrimitive]
    message: Optional[str]


__all__ = [
    "ArrowPrimitive",
    "ParticlePrimitive",
    "GridPrimitive",
    "Frame",
]
