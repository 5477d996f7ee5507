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
Type definitions for phaseflow.

- core: scalar, array and geometric aliases
- results: TypedDict drawing primitives and frames
- config: TypedDict configuration dictionaries and defaults
"""

from .config import (
    ARROW_SCALE_RANGE,
    DEFAULT_ENGINE_CONFIG,
    DEFAULT_NULLCLINE_CONFIG,
    GRID_DENSITY_RANGE,
    EngineConfig,
    FixedStepMethod,
    NullclineConfig,
    NullclineMethod,
    NullclinePolicy,
    resolve_engine_config,
    resolve_nullcline_config,
)
from .core import (
    COMPONENTS,
    ArrayLike,
    Component,
    ParameterDict,
    Point,
    Polyline,
    ScalarLike,
    Scope,
    Segment,
    StateVector,
)
from .results import ArrowPrimitive, Frame, GridPrimitive, ParticlePrimitive

__all__ = [
    # Core
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
    # Results
    "ArrowPrimitive",
    "ParticlePrimitive",
    "GridPrimitive",
    "Frame",
    # Config
    "FixedStepMethod",
    "NullclinePolicy",
    "NullclineMethod",
    "NullclineConfig",
    "EngineConfig",
    "GRID_DENSITY_RANGE",
    "ARROW_SCALE_RANGE",
    "DEFAULT_ENGINE_CONFIG",
    "DEFAULT_NULLCLINE_CONFIG",
    "resolve_engine_config",
    "resolve_nullcline_config",
]
