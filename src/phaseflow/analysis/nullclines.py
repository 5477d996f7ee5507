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
Nullcline Extractor

Approximates the zero set of one field component,
{(x, y) : f(x, y) = 0} for dx/dt or {(x, y) : g(x, y) = 0} for dy/dt,
by scanning the viewport column by column.

Default behaviour ('scan' method, 'first' policy)
-------------------------------------------------
For each of the ``x_resolution + 1`` evenly spaced columns (endpoints
included), y is scanned upward over ``y_resolution + 1`` samples and the
first y with |component| < epsilon is kept; the rest of the column is
skipped. Columns without a hit leave a gap.

Known limitations of the default: a multi-valued nullcline only keeps its
lowest branch per column, the result depends on epsilon relative to the
local gradient, and steep branches come out broken. The output is
therefore a set of disjoint runs (Nullcline.runs), not a single path.

Alternatives
------------
- policy='all' keeps every threshold hit in a column.
- method='bisection' finds sign changes between successive samples and
  refines each with scipy.optimize.brentq; roots are kept only where
  |component| < epsilon (rejecting poles such as 1/x), and columns with no
  sign change fall back to threshold hits (tangential roots such as x^2).
  Samples where evaluation fails never count as roots here.

Both alternatives return the same Nullcline type.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
from scipy.optimize import brentq

from phaseflow.geometry.projection import Viewport
from phaseflow.systems.planar_system import PlanarSystem
from phaseflow.types.config import NullclineConfig, resolve_nullcline_config
from phaseflow.types.core import COMPONENTS, Component, Point, Polyline


@dataclass
class Nullcline:
    """
    Ordered approximation of one component's zero set.

    Attributes
    ----------
    component : Component
        'dx' or 'dy'
    points : List[Point]
        World points ordered by column, then by y
    columns : List[int]
        Column index of each point
    """

    component: Component
    points: List[Point] = field(default_factory=list)
    columns: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        return not self.points

    def runs(self) -> List[Polyline]:
        """
        Split into polylines that may be stroked as connected paths.

        A new run starts wherever the column index does not advance by
        exactly one: after a skipped column, or at a second hit in the same
        column.
        """
        runs: List[Polyline] = []
        previous = None
        for point, column in zip(self.points, self.columns):
            if previous is None or column != previous + 1:
                runs.append([])
            runs[-1].append(point)
            previous = column
        return runs

    def as_array(self) -> np.ndarray:
        """Points as an (N, 2) array."""
        return np.asarray(self.points, dtype=float).reshape(-1, 2)


def _column_values(system, component, x, ys) -> np.ndarray:
    return np.array([system.evaluate_component(component, x, float(y)) for y in ys])


def _scan_column(values: np.ndarray, ys: np.ndarray, epsilon: float, first_only: bool) -> List[float]:
    hits = []
    for y, value in zip(ys, values):
        if abs(value) < epsilon:
            hits.append(float(y))
            if first_only:
                break
    return hits


def _sample(system, component, x, y) -> float:
    derivative = system.try_evaluate(x, float(y))
    if derivative is None:
        return float("nan")
    return getattr(derivative, component)


def _bisect_column(system, component, x, ys, epsilon):
    """Roots in one column plus the samples used; failed samples are NaN."""

    def f(y):
        return _sample(system, component, x, y)

    values = np.array([f(y) for y in ys])
    roots = []
    for j in range(len(ys)):
        if values[j] == 0.0:
            roots.append(float(ys[j]))
        elif j + 1 < len(ys) and values[j] * values[j + 1] < 0:
            try:
                root = brentq(f, float(ys[j]), float(ys[j + 1]))
            except (ValueError, RuntimeError):
                continue
            if abs(f(root)) < epsilon:
                roots.append(float(root))
    return roots, values


def extract_nullcline(
    system: PlanarSystem,
    viewport: Viewport,
    component: Component,
    x_resolution: Optional[int] = None,
    y_resolution: Optional[int] = None,
    config: Optional[NullclineConfig] = None,
) -> Nullcline:
    """
    Approximate the nullcline of one component over the viewport.

    Parameters
    ----------
    system : PlanarSystem
        System to analyse
    viewport : Viewport
        Region to scan
    component : 'dx' or 'dy'
        Which derivative must vanish
    x_resolution : Optional[int]
        Column intervals (overrides config; default 200)
    y_resolution : Optional[int]
        Scan intervals per column (overrides config; default 100)
    config : Optional[NullclineConfig]
        epsilon, policy and method (defaults: 0.05, 'first', 'scan')

    Returns
    -------
    Nullcline
        Possibly empty

    Raises
    ------
    ValueError
        On an unknown component or invalid configuration

    Examples
    --------
    >>> system = compile_system("x", "y")
    >>> line = extract_nullcline(system, Viewport(-1, 1, -1, 1), "dx", 20, 20)
    >>> {round(x, 6) for x, _ in line.points}
    {0.0}
    """
    if component not in COMPONENTS:
        raise ValueError(f"Unknown component '{component}'. Choose from: dx, dy")

    overrides = dict(config or {})
    if x_resolution is not None:
        overrides["x_resolution"] = x_resolution
    if y_resolution is not None:
        overrides["y_resolution"] = y_resolution
    settings = resolve_nullcline_config(overrides)

    nx = int(settings["x_resolution"])
    ny = int(settings["y_resolution"])
    epsilon = settings["epsilon"]
    first_only = settings["policy"] == "first"

    step_x = viewport.x_span / nx
    step_y = viewport.y_span / ny
    ys = viewport.y_min + step_y * np.arange(ny + 1)

    nullcline = Nullcline(component)
    for i in range(nx + 1):
        x = viewport.x_min + i * step_x
        if settings["method"] == "bisection":
            hits, values = _bisect_column(system, component, x, ys, epsilon)
            if not hits:
                hits = _scan_column(values, ys, epsilon, first_only=False)
            hits = sorted(hits)
            if first_only:
                hits = hits[:1]
        else:
            values = _column_values(system, component, x, ys)
            hits = _scan_column(values, ys, epsilon, first_only)

        for y in hits:
            nullcline.points.append((x, y))
            nullcline.columns.append(i)

    return nullcline


def extract_nullclines(
    system: PlanarSystem,
    viewport: Viewport,
    x_resolution: Optional[int] = None,
    y_resolution: Optional[int] = None,
    config: Optional[NullclineConfig] = None,
) -> Dict[str, Nullcline]:
    """Both nullclines, keyed by component ('dx', 'dy')."""
    return {
        component: extract_nullcline(
            system, viewport, component, x_resolution, y_resolution, config
        )
        for component in COMPONENTS
    }


__all__ = ["Nullcline", "extract_nullcline", "extract_nullclines"]
