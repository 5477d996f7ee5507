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
Frame Plotter - Plotly Drawing Layer

Paints the world-coordinate primitives of a Frame onto a Plotly figure:

- background grid and axes
- direction field arrows (shaft plus two head barbs)
- nullclines, one trace per component, broken at every gap
- particle trajectories and current-position markers

Segments of one layer are packed into a single Scatter trace separated by
None, so a frame with hundreds of arrows stays a handful of traces.

Usage
-----
>>> from phaseflow import PhasePortraitEngine
>>> from phaseflow.visualization import FramePlotter
>>>
>>> engine = PhasePortraitEngine()
>>> engine.load_preset("van-der-pol")
>>> engine.add_particle(0.1, 0.0)
>>> engine.run_until_idle(max_ticks=400)
>>>
>>> fig = FramePlotter().plot_engine(engine)
>>> fig.write_html("van_der_pol.html")
"""

from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Union

import plotly.graph_objects as go

from phaseflow.geometry.projection import Viewport
from phaseflow.types.core import Point, Segment
from phaseflow.types.results import Frame
from phaseflow.visualization.themes import PlotThemes, with_alpha

if TYPE_CHECKING:
    from phaseflow.simulation.engine import PhasePortraitEngine

NULLCLINE_NAMES = {
    "dx": "dx/dt = 0",
    "dy": "dy/dt = 0",
}


def _segments_to_xy(segments: Iterable[Segment]):
    xs: List[Optional[float]] = []
    ys: List[Optional[float]] = []
    for (x0, y0), (x1, y1) in segments:
        xs.extend([x0, x1, None])
        ys.extend([y0, y1, None])
    return xs, ys


def _polylines_to_xy(polylines: Iterable[List[Point]]):
    xs: List[Optional[float]] = []
    ys: List[Optional[float]] = []
    for polyline in polylines:
        for x, y in polyline:
            xs.append(x)
            ys.append(y)
        xs.append(None)
        ys.append(None)
    return xs, ys


class FramePlotter:
    """
    Renders frames with Plotly.

    Attributes
    ----------
    theme : dict
        Resolved theme (see PlotThemes)

    Examples
    --------
    >>> plotter = FramePlotter(theme='dark')
    >>> fig = plotter.plot_frame(engine.build_frame(), engine.viewport)
    >>> fig.show()
    """

    def __init__(self, theme: Union[str, Dict] = "default"):
        self.theme = PlotThemes.get_theme(theme)

    # =========================================================================
    # Main Plotting Methods
    # =========================================================================

    def plot_frame(
        self,
        frame: Frame,
        viewport: Viewport,
        title: str = "Phase Portrait",
        arrow_opacity: float = 0.8,
    ) -> go.Figure:
        """
        Draw one frame.

        Parameters
        ----------
        frame : Frame
            Primitives from PhasePortraitEngine.build_frame()
        viewport : Viewport
            Sets axis ranges and figure size
        title : str
            Plot title
        arrow_opacity : float
            Opacity of the direction field

        Returns
        -------
        go.Figure
            Plotly figure
        """
        fig = go.Figure()

        if frame.get("grid"):
            self._add_grid(fig, frame["grid"])

        if frame["arrows"]:
            self._add_arrows(fig, frame["arrows"], arrow_opacity)

        for component, nullcline in frame["nullclines"].items():
            self._add_nullcline(fig, component, nullcline.runs())

        for particle in frame["particles"]:
            self._add_particle(fig, particle)

        if frame.get("message"):
            fig.add_annotation(
                text=frame["message"],
                xref="paper",
                yref="paper",
                x=0.5,
                y=0.5,
                showarrow=False,
                font=dict(size=18, color=self.theme["message_color"]),
            )

        fig.update_layout(
            title=title,
            xaxis_title="x",
            yaxis_title="y",
            width=viewport.width,
            height=viewport.height,
            showlegend=True,
        )
        fig.update_xaxes(range=[viewport.x_min, viewport.x_max], showgrid=False, zeroline=False)
        fig.update_yaxes(range=[viewport.y_min, viewport.y_max], showgrid=False, zeroline=False)

        return PlotThemes.apply_theme(fig, self.theme)

    def plot_engine(self, engine: "PhasePortraitEngine", title: Optional[str] = None) -> go.Figure:
        """Draw the engine's current frame in its viewport."""
        if title is None and engine.system is not None:
            title = f"dx/dt = {engine.system.dx_text},  dy/dt = {engine.system.dy_text}"
        return self.plot_frame(engine.build_frame(), engine.viewport, title=title or "Phase Portrait")

    # =========================================================================
    # Helper Methods (Internal)
    # =========================================================================

    def _add_grid(self, fig: go.Figure, grid) -> None:
        xs, ys = _segments_to_xy(grid["lines"])
        fig.add_trace(
            go.Scatter(
                x=xs,
                y=ys,
                mode="lines",
                line=dict(color=self.theme["grid_color"], width=1),
                hoverinfo="skip",
                showlegend=False,
                name="Grid",
            )
        )
        if grid["axes"]:
            xs, ys = _segments_to_xy(grid["axes"])
            fig.add_trace(
                go.Scatter(
                    x=xs,
                    y=ys,
                    mode="lines",
                    line=dict(color=self.theme["axes_color"], width=2),
                    hoverinfo="skip",
                    showlegend=False,
                    name="Axes",
                )
            )

    def _add_arrows(self, fig: go.Figure, arrows, opacity: float) -> None:
        segments: List[Segment] = []
        for arrow in arrows:
            segments.append((arrow["start"], arrow["end"]))
            segments.extend(arrow["head"])

        xs, ys = _segments_to_xy(segments)
        fig.add_trace(
            go.Scatter(
                x=xs,
                y=ys,
                mode="lines",
                line=dict(color=with_alpha(self.theme["arrow_color"], opacity), width=1.5),
                hoverinfo="skip",
                name="Vector field",
            )
        )

    def _add_nullcline(self, fig: go.Figure, component: str, runs: List[List[Point]]) -> None:
        if not runs:
            return
        xs, ys = _polylines_to_xy(runs)
        fig.add_trace(
            go.Scatter(
                x=xs,
                y=ys,
                mode="lines",
                connectgaps=False,
                line=dict(color=self.theme["nullcline_colors"][component], width=2),
                name=NULLCLINE_NAMES[component],
            )
        )

    def _add_particle(self, fig: go.Figure, particle) -> None:
        polyline = particle["polyline"]
        if len(polyline) >= 2:
            fig.add_trace(
                go.Scatter(
                    x=[p[0] for p in polyline],
                    y=[p[1] for p in polyline],
                    mode="lines",
                    line=dict(color=particle["color"], width=2),
                    name=f"Particle {particle['id']}",
                    legendgroup=f"particle-{particle['id']}",
                )
            )
        if particle["head"] is not None:
            fig.add_trace(
                go.Scatter(
                    x=[particle["head"][0]],
                    y=[particle["head"][1]],
                    mode="markers",
                    marker=dict(color=particle["color"], size=8),
                    legendgroup=f"particle-{particle['id']}",
                    showlegend=False,
                    name=f"Particle {particle['id']}",
                )
            )


__all__ = ["FramePlotter", "NULLCLINE_NAMES"]
