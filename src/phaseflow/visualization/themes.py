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
Colors and Themes for Phase Portraits

Color Roles
-----------
PhasePortraitColors holds the color of each drawing layer. Particles carry
their own colors.

Themes
------
PlotThemes bundles a Plotly template, fonts and layer colors:
'default', 'dark' and 'publication'.

Usage
-----
>>> from phaseflow.visualization.themes import PlotThemes
>>> fig = plotter.plot_frame(frame, viewport)
>>> fig = PlotThemes.apply_theme(fig, theme='dark')
"""

from typing import Dict, Union

import plotly.graph_objects as go


class PhasePortraitColors:
    """
    Layer colors.

    Attributes
    ----------
    ARROW : str
        Direction field arrows
    NULLCLINE : Dict[str, str]
        dx/dt = 0 (red) and dy/dt = 0 (blue)
    GRID : str
        Background grid lines
    AXES : str
        x and y axes
    MESSAGE : str
        Placeholder text shown when no system is loaded
    """

    ARROW = "#3498db"
    NULLCLINE = {
        "dx": "#e74c3c",
        "dy": "#3498db",
    }
    GRID = "#e0e0e0"
    AXES = "#333333"
    MESSAGE = "#666666"


class PlotThemes:
    """
    Complete plotting theme configurations.

    Attributes
    ----------
    DEFAULT : dict
        White background, canvas-like colors
    DARK : dict
        Dark mode
    PUBLICATION : dict
        Simple white template, serif fonts, gray arrows
    """

    DEFAULT = {
        "template": "plotly_white",
        "font_family": "Arial, sans-serif",
        "font_size": 12,
        "arrow_color": PhasePortraitColors.ARROW,
        "grid_color": PhasePortraitColors.GRID,
        "axes_color": PhasePortraitColors.AXES,
        "nullcline_colors": dict(PhasePortraitColors.NULLCLINE),
        "message_color": PhasePortraitColors.MESSAGE,
    }

    DARK = {
        "template": "plotly_dark",
        "font_family": "Arial, sans-serif",
        "font_size": 12,
        "arrow_color": "#5dade2",
        "grid_color": "#3a3a3a",
        "axes_color": "#cccccc",
        "nullcline_colors": {"dx": "#ff6b6b", "dy": "#4fc3f7"},
        "message_color": "#aaaaaa",
    }

    PUBLICATION = {
        "template": "simple_white",
        "font_family": "Times New Roman, serif",
        "font_size": 14,
        "arrow_color": "#7f7f7f",
        "grid_color": "#eeeeee",
        "axes_color": "#000000",
        "nullcline_colors": {"dx": "#b22222", "dy": "#1f4e9c"},
        "message_color": "#444444",
    }

    @staticmethod
    def get_theme(theme: Union[str, Dict] = "default") -> Dict:
        """
        Resolve a theme name or custom dict (missing keys from DEFAULT).

        Raises
        ------
        ValueError
            If the theme name is unknown
        TypeError
            If theme is neither str nor dict
        """
        if isinstance(theme, str):
            themes = {
                "default": PlotThemes.DEFAULT,
                "dark": PlotThemes.DARK,
                "publication": PlotThemes.PUBLICATION,
            }
            theme_lower = theme.lower()
            if theme_lower not in themes:
                raise ValueError(
                    f"Unknown theme '{theme}'. Available: default, dark, publication"
                )
            return dict(themes[theme_lower])
        if isinstance(theme, dict):
            return {**PlotThemes.DEFAULT, **theme}
        raise TypeError("theme must be str or dict")

    @staticmethod
    def apply_theme(fig: go.Figure, theme: Union[str, Dict] = "default") -> go.Figure:
        """Apply template and fonts of a theme to a figure."""
        config = PlotThemes.get_theme(theme)
        fig.update_layout(
            template=config["template"],
            font=dict(family=config["font_family"], size=config["font_size"]),
        )
        return fig


# ============================================================================
# Color Manipulation Utilities
# ============================================================================


def hex_to_rgb(hex_color: str) -> tuple:
    """
    Convert hex color to RGB tuple.

    Examples
    --------
    >>> hex_to_rgb('#FF0000')
    (255, 0, 0)
    """
    hex_color = hex_color.lstrip("#")
    return tuple(int(hex_color[i : i + 2], 16) for i in (0, 2, 4))


def with_alpha(hex_color: str, alpha: float) -> str:
    """
    Plotly rgba() string for a hex color.

    Examples
    --------
    >>> with_alpha('#3498db', 0.5)
    'rgba(52, 152, 219, 0.5)'
    """
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"alpha must be in [0, 1], got {alpha}")
    r, g, b = hex_to_rgb(hex_color)
    return f"rgba({r}, {g}, {b}, {alpha})"


__all__ = [
    "PhasePortraitColors",
    "PlotThemes",
    "hex_to_rgb",
    "with_alpha",
]
