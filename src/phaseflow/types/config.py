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
Configuration Types

TypedDict configuration dictionaries for the engine and the nullcline
extractor, plus their defaults.

Usage
-----
>>> from phaseflow.types.config import EngineConfig, resolve_engine_config
>>>
>>> config: EngineConfig = {"dt": 0.02, "grid_density": 30}
>>> full = resolve_engine_config(config)
>>> full["bound"]
10.0
"""

from typing import Literal, Optional

from typing_extensions import TypedDict

# ============================================================================
# Literals
# ============================================================================

FixedStepMethod = Literal["euler", "midpoint", "rk4"]
"""Fixed-step integration scheme used for particles."""

NullclinePolicy = Literal["first", "all"]
"""
How many threshold hits to keep per scanned column.

- 'first': stop at the first y with |f| < epsilon (compatible default)
- 'all': keep every y with |f| < epsilon
"""

NullclineMethod = Literal["scan", "bisection"]
"""
Root location strategy.

- 'scan': absolute threshold test at each sampled y
- 'bisection': refine sign changes between samples with Brent's method
"""

# ============================================================================
# Display limits
# ============================================================================

GRID_DENSITY_RANGE = (10, 50)
ARROW_SCALE_RANGE = (0.1, 2.0)

# ============================================================================
# Configuration Dictionaries
# ============================================================================


class NullclineConfig(TypedDict, total=False):
    """
    Nullcline extraction settings.

    Attributes
    ----------
    epsilon : float
        Absolute threshold for "zero" (default 0.05)
    policy : NullclinePolicy
        'first' or 'all'
    method : NullclineMethod
        'scan' or 'bisection'
    x_resolution : int
        Number of column intervals across the viewport (default 200)
    y_resolution : int
        Number of scan intervals per column (default 100)

    Examples
    --------
    >>> config: NullclineConfig = {"epsilon": 0.01, "method": "bisection"}
    """

    epsilon: float
    policy: NullclinePolicy
    method: NullclineMethod
    x_resolution: int
    y_resolution: int


class EngineConfig(TypedDict, total=False):
    """
    Engine configuration.

    Attributes
    ----------
    dt : float
        Simulation time step shared by all particles
    bound : float
        Particles with |x| > bound or |y| > bound are deactivated
    method : FixedStepMethod
        Particle integration scheme
    grid_density : int
        Direction-field intervals per axis (10..50)
    arrow_scale : float
        Arrow length multiplier (0.1..2.0)
    base_scale : float
        Arrow length in pixels at arrow_scale=1
    head_length : float
        Arrowhead barb length in pixels
    show_grid : bool
        Emit background grid primitives
    show_nullclines : bool
        Emit nullclines
    nullclines : NullclineConfig
        Nullcline extraction settings
    keep_retired : bool
        Keep trajectories of deactivated particles drawable until cleared
    canvas_width : int
        Drawing surface width in pixels
    canvas_height : int
        Drawing surface height in pixels
    """

    dt: float
    bound: float
    method: FixedStepMethod
    grid_density: int
    arrow_scale: float
    base_scale: float
    head_length: float
    show_grid: bool
    show_nullclines: bool
    nullclines: NullclineConfig
    keep_retired: bool
    canvas_width: int
    canvas_height: int


DEFAULT_NULLCLINE_CONFIG: NullclineConfig = {
    "epsilon": 0.05,
    "policy": "first",
    "method": "scan",
    "x_resolution": 200,
    "y_resolution": 100,
}

DEFAULT_ENGINE_CONFIG: EngineConfig = {
    "dt": 0.05,
    "bound": 10.0,
    "method": "rk4",
    "grid_density": 20,
    "arrow_scale": 0.5,
    "base_scale": 20.0,
    "head_length": 8.0,
    "show_grid": True,
    "show_nullclines": False,
    "nullclines": DEFAULT_NULLCLINE_CONFIG,
    "keep_retired": True,
    "canvas_width": 800,
    "canvas_height": 600,
}


# ============================================================================
# Validation
# ============================================================================


def validate_grid_density(grid_density: int) -> int:
    """Check a user-facing grid density against GRID_DENSITY_RANGE."""
    if isinstance(grid_density, bool) or int(grid_density) != grid_density:
        raise ValueError(f"grid_density must be an integer, got {grid_density!r}")
    lo, hi = GRID_DENSITY_RANGE
    if not lo <= grid_density <= hi:
        raise ValueError(f"grid_density must be in [{lo}, {hi}], got {grid_density}")
    return int(grid_density)


def validate_arrow_scale(arrow_scale: float) -> float:
    """Check a user-facing arrow scale against ARROW_SCALE_RANGE."""
    lo, hi = ARROW_SCALE_RANGE
    if not lo <= arrow_scale <= hi:
        raise ValueError(f"arrow_scale must be in [{lo}, {hi}], got {arrow_scale}")
    return float(arrow_scale)


def resolve_nullcline_config(config: Optional[NullclineConfig] = None) -> NullclineConfig:
    """
    Merge user nullcline settings with the defaults and validate them.

    Raises
    ------
    ValueError
        If epsilon is not positive, a resolution is < 1, or policy/method is
        unknown
    """
    resolved: NullclineConfig = {**DEFAULT_NULLCLINE_CONFIG, **(config or {})}

    if resolved["epsilon"] <= 0:
        raise ValueError(f"epsilon must be positive, got {resolved['epsilon']}")
    if resolved["policy"] not in ("first", "all"):
        raise ValueError(f"Unknown nullcline policy '{resolved['policy']}'. Choose from: first, all")
    if resolved["method"] not in ("scan", "bisection"):
        raise ValueError(
            f"Unknown nullcline method '{resolved['method']}'. Choose from: scan, bisection"
        )
    for key in ("x_resolution", "y_resolution"):
        if int(resolved[key]) < 1:
            raise ValueError(f"{key} must be >= 1, got {resolved[key]}")

    return resolved


def resolve_engine_config(config: Optional[EngineConfig] = None) -> EngineConfig:
    """
    Merge user engine settings with DEFAULT_ENGINE_CONFIG and validate them.

    Parameters
    ----------
    config : Optional[EngineConfig]
        Partial configuration; missing keys take their defaults

    Returns
    -------
    EngineConfig
        Complete configuration

    Raises
    ------
    ValueError
        If any value is out of range

    Examples
    --------
    >>> resolve_engine_config({"dt": 0.01})["dt"]
    0.01
    """
    config = dict(config or {})
    nullclines = config.pop("nullclines", None)

    resolved: EngineConfig = {**DEFAULT_ENGINE_CONFIG, **config}
    resolved["nullclines"] = resolve_nullcline_config(nullclines)

    if resolved["dt"] <= 0:
        raise ValueError(f"dt must be positive, got {resolved['dt']}")
    if resolved["bound"] <= 0:
        raise ValueError(f"bound must be positive, got {resolved['bound']}")
    if resolved["method"] not in ("euler", "midpoint", "rk4"):
        raise ValueError(
            f"Unknown method '{resolved['method']}'. Choose from: euler, midpoint, rk4"
        )
    if resolved["base_scale"] <= 0 or resolved["head_length"] < 0:
        raise ValueError("base_scale must be positive and head_length non-negative")
    if resolved["canvas_width"] <= 0 or resolved["canvas_height"] <= 0:
        raise ValueError("canvas size must be positive")

    resolved["grid_density"] = validate_grid_density(resolved["grid_density"])
    resolved["arrow_scale"] = validate_arrow_scale(resolved["arrow_scale"])

    return resolved


__all__ = [
    "FixedStepMethod",
    "NullclinePolicy",
    "NullclineMethod",
    "GRID_DENSITY_RANGE",
    "ARROW_SCALE_RANGE",
    "NullclineConfig",
    "EngineConfig",
    "DEFAULT_NULLCLINE_CONFIG",
    "DEFAULT_ENGINE_CONFIG",
    "validate_grid_density",
    "validate_arrow_scale",
    "resolve_nullcline_config",
    "resolve_engine_config",
]
