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

"""Fixed-step numerical integration for planar systems."""

from .fixed_step_integrators import (
    INTEGRATOR_METHODS,
    ExplicitEulerIntegrator,
    MidpointIntegrator,
    RK4Integrator,
    create_fixed_step_integrator,
)
from .integrator_base import IntegrationResult, IntegratorBase, VectorField

__all__ = [
    "IntegratorBase",
    "IntegrationResult",
    "VectorField",
    "ExplicitEulerIntegrator",
    "MidpointIntegrator",
    "RK4Integrator",
    "INTEGRATOR_METHODS",
    "create_fixed_step_integrator",
]
