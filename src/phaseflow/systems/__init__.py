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
Planar systems: parameter handling, compiled systems, presets and
fixed-step integrators.
"""

from .builtin import PRESETS, SystemPreset, get_preset, list_presets, load_preset
from .parameters import RESERVED_NAMES, parse_parameters, validate_parameters
from .planar_system import (
    ZERO_DERIVATIVE,
    Derivative,
    EvaluationDiagnostics,
    PlanarSystem,
    compile_system,
)

__all__ = [
    "PlanarSystem",
    "Derivative",
    "ZERO_DERIVATIVE",
    "EvaluationDiagnostics",
    "compile_system",
    "parse_parameters",
    "validate_parameters",
    "RESERVED_NAMES",
    "SystemPreset",
    "PRESETS",
    "list_presets",
    "get_preset",
    "load_preset",
]
