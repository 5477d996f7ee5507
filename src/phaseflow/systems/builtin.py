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
Built-in planar systems.

Classic two-dimensional examples, each given as equation text plus default
parameters so they go through exactly the same compile path as user input.

Available presets
-----------------
- van-der-pol: relaxation oscillator with a stable limit cycle
    dx/dt = y,  dy/dt = mu (1 - x^2) y - x
- pendulum: damped nonlinear pendulum
    dx/dt = y,  dy/dt = -sin(x) - gamma y
- lotka-volterra: predator-prey cycles around (gamma/delta, alpha/beta)
    dx/dt = alpha x - beta x y,  dy/dt = delta x y - gamma y
- spiral: linear focus, stable for sigma < 0
    dx/dt = sigma x - y,  dy/dt = x + sigma y

Examples
--------
>>> system = load_preset("van-der-pol")
>>> system.parameters["mu"]
1.0
>>> system = load_preset("pendulum", gamma=0.5)
"""

from dataclasses import dataclass, field
from typing import Dict, List

from phaseflow.systems.planar_system import PlanarSystem, compile_system


@dataclass(frozen=True)
class SystemPreset:
    """
    Named equation set with default parameters.

    Attributes
    ----------
    name : str
        Catalogue key
    dxdt : str
        Right-hand side of dx/dt
    dydt : str
        Right-hand side of dy/dt
    parameters : Dict[str, float]
        Default parameter values
    description : str
        One-line description
    """

    name: str
    dxdt: str
    dydt: str
    parameters: Dict[str, float] = field(default_factory=dict)
    description: str = ""

    def compile(self, **overrides: float) -> PlanarSystem:
        """Compile with default parameters, optionally overriding some."""
        unknown = set(overrides) - set(self.parameters)
        if unknown:
            raise ValueError(
                f"Unknown parameter(s) {sorted(unknown)} for preset '{self.name}'. "
                f"Available: {sorted(self.parameters)}"
            )
        return compile_system(self.dxdt, self.dydt, {**self.parameters, **overrides})


PRESETS: Dict[str, SystemPreset] = {
    preset.name: preset
    for preset in (
        SystemPreset(
            name="van-der-pol",
            dxdt="y",
            dydt="mu * (1 - x^2) * y - x",
            parameters={"mu": 1.0},
            description="Van der Pol oscillator (limit cycle)",
        ),
        SystemPreset(
            name="pendulum",
            dxdt="y",
            dydt="-sin(x) - gamma * y",
            parameters={"gamma": 0.1},
            description="Damped pendulum",
        ),
        SystemPreset(
            name="lotka-volterra",
            dxdt="alpha * x - beta * x * y",
            dydt="delta * x * y - gamma * y",
            parameters={"alpha": 1.0, "beta": 1.0, "delta": 1.0, "gamma": 1.0},
            description="Lotka-Volterra predator-prey model",
        ),
        SystemPreset(
            name="spiral",
            dxdt="sigma * x - y",
            dydt="x + sigma * y",
            parameters={"sigma": -0.1},
            description="Linear spiral (focus)",
        ),
    )
}


def list_presets() -> List[str]:
    """Names of all built-in presets."""
    return list(PRESETS)


def get_preset(name: str) -> SystemPreset:
    """
    Look up a preset by name.

    Raises
    ------
    KeyError
        If no preset has that name
    """
    try:
        return PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown preset '{name}'. Available: {list_presets()}") from None


def load_preset(name: str, **overrides: float) -> PlanarSystem:
    """Compile a preset into a PlanarSystem."""
    return get_preset(name).compile(**overrides)


__all__ = [
    "SystemPreset",
    "PRESETS",
    "list_presets",
    "get_preset",
    "load_preset",
]
