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
Unit Tests for Viewport and Projection
"""

import numpy as np
import pytest

from phaseflow.exceptions import ViewportError
from phaseflow.geometry.projection import Projection, Viewport, grid_lines


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def default_view():
    return Viewport.default()


@pytest.fixture
def projection(default_view):
    return Projection(default_view)


# ============================================================================
# Viewport Tests
# ============================================================================


class TestViewport:
    """Test Viewport validation and helpers."""

    def test_defaults(self, default_view):
        assert default_view.bounds == (-5.0, 5.0, -5.0, 5.0)
        assert (default_view.width, default_view.height) == (800, 600)

    def test_spans(self):
        view = Viewport(-2, 2, -1, 1)
        assert view.x_span == 4.0
        assert view.y_span == 2.0

    def test_bounds_converted_to_float(self):
        assert isinstance(Viewport(-2, 2, -1, 1).x_min, float)

    @pytest.mark.parametrize(
        "bounds",
        [
            (1, 1, -1, 1),
            (2, 1, -1, 1),
            (-1, 1, 3, 3),
            (-1, 1, 3, -3),
        ],
    )
    def test_degenerate(self, bounds):
        with pytest.raises(ViewportError, match="must be greater than"):
            Viewport(*bounds)

    def test_non_finite(self):
        with pytest.raises(ViewportError, match="finite"):
            Viewport(-np.inf, 1, -1, 1)

    def test_non_numeric(self):
        with pytest.raises(ViewportError, match="number"):
            Viewport("left", 1, -1, 1)

    def test_bad_canvas(self):
        with pytest.raises(ViewportError, match="Canvas size"):
            Viewport(width=0)

    def test_contains(self, default_view):
        assert default_view.contains(5.0, -5.0)
        assert not default_view.contains(5.1, 0.0)

    def test_with_range_keeps_canvas(self):
        view = Viewport(width=400, height=300).with_range(0, 1, 0, 2)
        assert view.bounds == (0.0, 1.0, 0.0, 2.0)
        assert view.width == 400

    def test_with_range_validates(self, default_view):
        with pytest.raises(ViewportError):
            default_view.with_range(0, 0, 0, 1)

    def test_hashable(self, default_view):
        assert hash(default_view) == hash(Viewport.default())


# ============================================================================
# Projection Tests
# ============================================================================


class TestProjection:
    """Test world/canvas mapping."""

    def test_center(self, projection):
        assert projection.world_to_canvas(0.0, 0.0) == (400.0, 300.0)

    def test_corners(self, projection):
        assert projection.world_to_canvas(-5.0, 5.0) == (0.0, 0.0)
        assert projection.world_to_canvas(5.0, -5.0) == (800.0, 600.0)

    def test_y_flipped(self, projection):
        assert projection.world_to_canvas_y(1.0) < projection.world_to_canvas_y(0.0)

    def test_inverse(self, projection):
        assert projection.canvas_to_world(0.0, 0.0) == (-5.0, 5.0)
        assert projection.canvas_to_world(400.0, 300.0) == (0.0, 0.0)

    @pytest.mark.parametrize("point", [(1.3, -2.7), (-4.9, 4.1), (0.0, 3.3)])
    def test_round_trip(self, point):
        projection = Projection(Viewport(-3, 7, -2, 9, width=640, height=480))
        result = projection.canvas_to_world(*projection.world_to_canvas(*point))
        np.testing.assert_allclose(result, point, atol=1e-12)

    def test_array_matches_scalar(self, projection):
        points = np.array([[1.0, 2.0], [-3.0, 0.5], [4.5, -4.5]])
        canvas = projection.world_to_canvas_array(points)
        expected = [projection.world_to_canvas(*p) for p in points]
        np.testing.assert_allclose(canvas, expected)
        np.testing.assert_allclose(projection.canvas_to_world_array(canvas), points)

    def test_canvas_contains(self, projection):
        assert projection.canvas_contains(0, 600)
        assert not projection.canvas_contains(-1, 10)
        assert not projection.canvas_contains(10, 601)


# ============================================================================
# Grid Tests
# ============================================================================


class TestGridLines:
    """Test grid_lines."""

    def test_line_count(self, default_view):
        grid = grid_lines(default_view)
        assert len(grid["lines"]) == 22

    def test_lines_span_view(self, default_view):
        grid = grid_lines(default_view, divisions=4)
        first_vertical = grid["lines"][0]
        assert first_vertical == ((-5.0, -5.0), (-5.0, 5.0))

    def test_axes_visible(self, default_view):
        assert len(grid_lines(default_view)["axes"]) == 2

    def test_axes_hidden(self):
        grid = grid_lines(Viewport(1, 2, 1, 2))
        assert grid["axes"] == []

    def test_invalid_divisions(self, default_view):
        with pytest.raises(ValueError):
            grid_lines(default_view, divisions=0)
