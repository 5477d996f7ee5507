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
Visualization Tools
===================

Plotly drawing layer for phase portrait frames.

>>> from phaseflow.visualization import FramePlotter, PlotThemes
>>>
>>> fig = FramePlotter(theme='publication').plot_engine(engine)
>>> fig.show()
"""

from .frame_plotter import NULLCLINE_NAMES, FramePlotter
from .themes import PhasePortraitColors, PlotThemes, hex_to_rgb, with_alpha

__all__ = [
    "FramePlotter",
    "NULLCLINE_NAMES",
    "PhasePortraitColors",
    "PlotThemes",
    "hex_to_rgb",
    "with_alpha",
]
