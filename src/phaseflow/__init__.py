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
phaseflow
=========

Phase portraits of planar autonomous systems

    dx/dt = f(x, y; params),    dy/dt = g(x, y; params)

from equation text: direction fields, nullclines and RK4 particle
trajectories, emitted as world-coordinate drawing primitives.

Quick Start
-----------
>>> from phaseflow import PhasePortraitEngine
>>>
>>> engine = PhasePortraitEngine()
>>> result = engine.update_system("y", "-sin(x) - gamma * y", {"gamma": 0.1})
>>> result.success
True
>>> engine.add_particle(2.0, 0.0)
>>> engine.run_until_idle(max_ticks=500)
>>> frame = engine.build_frame()
>>> len(frame["arrows"]) > 0
True

Packages
--------
- expressions: parser, AST, closure compiler, SymPy export
- systems: compiled systems, parameters, presets, fixed-step integrators
- analysis: direction field sampling and nullclines
- geometry: viewport and world/canvas projection
- simulation: particles and the engine
- visualization: Plotly drawing layer
"""

__version__ = "0.1.0"

from .analysis import FieldSample, Nullcline, extract_nullcline, extract_nullclines, sample_field
from .exceptions import (
    EvalError,
    ParameterError,
    ParseError,
    PhaseFlowError,
    SystemNotLoadedError,
    ViewportError,
)
from .expressions import CompiledExpression, compile_expression, parse, system_latex
from .geometry import Projection, Viewport
from .simulation import (
    Particle,
    ParticleCollection,
    ParticleIntegrator,
    PhasePortraitEngine,
    UpdateResult,
)
from .systems import PlanarSystem, compile_system, load_preset, parse_parameters

__all__ = [
    "__version__",
    # Errors
    "PhaseFlowError",
    "ParseError",
    "ParameterError",
    "EvalError",
    "ViewportError",
    "SystemNotLoadedError",
    # Expressions
    "parse",
    "compile_expression",
    "CompiledExpression",
    "system_latex",
    # Systems
    "PlanarSystem",
    "compile_system",
    "parse_parameters",
    "load_preset",
    # Geometry
    "Viewport",
    "Projection",
    # Analysis
    "FieldSample",
    "sample_field",
    "Nullcline",
    "extract_nullcline",
    "extract_nullclines",
    # Simulation
    "Particle",
    "ParticleCollection",
    "ParticleIntegrator",
    "PhasePortraitEngine",
    "UpdateResult",
]
