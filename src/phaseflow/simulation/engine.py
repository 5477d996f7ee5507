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
Phase Portrait Engine - Scheduler and Session State

Holds the current system, viewport, display settings and particle
collection, and exposes the operations a front end needs:

- update_system / load_preset: compile and swap in a new system
- set_view / reset_view and the display setters
- add_particle / add_particle_at_canvas: spawn particles
- tick: advance the simulation by one step
- build_frame: drawable primitives for the current state

Scheduling
----------
The engine does not own a timer. A front end calls tick() from its
display-refresh callback and schedules the next call only while tick()
returns True. tick() advances every active particle once, sweeps the
inactive ones, hands the new frame to ``on_frame`` and reports whether any
particle is still active, so the loop stops on its own when nothing is in
flight. ``running`` tracks whether a loop is (or should be) scheduled.

Everything runs on the caller's thread; no locking is done.

Invalidation
------------
The static picture (arrows and nullclines) is cached and rebuilt only when
the system, viewport, or a display setting it depends on changes.
Replacing the system also clears every particle, since trajectories
computed under the old field are meaningless under the new one.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from phaseflow.analysis.nullclines import Nullcline, extract_nullclines
from phaseflow.analysis.vector_field import field_arrows, sample_field
from phaseflow.exceptions import ParameterError, ParseError, SystemNotLoadedError
from phaseflow.expressions.symbolic import system_latex
from phaseflow.geometry.projection import DEFAULT_RANGE, Projection, Viewport, grid_lines
from phaseflow.simulation.particles import Particle, ParticleCollection, ParticleIntegrator
from phaseflow.systems.builtin import get_preset
from phaseflow.systems.parameters import ParameterSpec
from phaseflow.systems.planar_system import PlanarSystem, compile_system
from phaseflow.types.config import (
    EngineConfig,
    NullclineConfig,
    resolve_engine_config,
    resolve_nullcline_config,
    validate_arrow_scale,
    validate_grid_density,
)
from phaseflow.types.results import ArrowPrimitive, Frame

NO_SYSTEM_MESSAGE = 'Click "Update System" to visualize flow field'


@dataclass
class UpdateResult:
    """
    Outcome of a system update.

    Attributes
    ----------
    success : bool
        True if the new system was installed
    error : Optional[ParseError or ParameterError]
        Why the update was rejected (None on success)
    system : Optional[PlanarSystem]
        The system in effect after the call (the previous one on failure)
    """

    success: bool
    error: Optional[Exception] = None
    system: Optional[PlanarSystem] = None

    @property
    def error_kind(self) -> Optional[str]:
        """'ParseError', 'ParameterError' or None."""
        return type(self.error).__name__ if self.error is not None else None


class PhasePortraitEngine:
    """
    Session state and simulation scheduler.

    Parameters
    ----------
    config : Optional[EngineConfig]
        Partial configuration merged with DEFAULT_ENGINE_CONFIG
    viewport : Optional[Viewport]
        Initial view (default [-5, 5]^2 on the configured canvas)
    on_frame : Optional[Callable[[Frame], None]]
        Redraw callback invoked by tick()

    Examples
    --------
    >>> engine = PhasePortraitEngine()
    >>> engine.update_system("y", "mu * (1 - x^2) * y - x", '{"mu": 1}').success
    True
    >>> engine.add_particle(0.1, 0.0)
    Particle(id=1, x=0.1, y=0, active)
    >>> while engine.tick():
    ...     if engine.stats["ticks"] >= 100:
    ...         break
    >>> frame = engine.build_frame()
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        viewport: Optional[Viewport] = None,
        on_frame: Optional[Callable[[Frame], None]] = None,
    ):
        self.config: EngineConfig = resolve_engine_config(config)
        self.viewport = viewport or Viewport.default(
            self.config["canvas_width"], self.config["canvas_height"]
        )
        self.on_frame = on_frame

        self.system: Optional[PlanarSystem] = None
        self.particles = ParticleCollection(keep_retired=self.config["keep_retired"])
        self.running = False

        self._integrator: Optional[ParticleIntegrator] = None
        self._system_version = 0
        self._static_key = None
        self._static_cache = None

        self.stats: Dict[str, int] = {
            "ticks": 0,
            "updates": 0,
            "failed_updates": 0,
            "static_rebuilds": 0,
        }

    # ========================================================================
    # System
    # ========================================================================

    def update_system(
        self, dx_text: str, dy_text: str, parameters: ParameterSpec = None
    ) -> UpdateResult:
        """
        Compile and install a new system.

        On ParseError or ParameterError nothing changes: the previous system
        and all particles stay as they were, and the error is returned.
        """
        try:
            system = compile_system(dx_text, dy_text, parameters)
        except (ParseError, ParameterError) as e:
            self.stats["failed_updates"] += 1
            return UpdateResult(success=False, error=e, system=self.system)

        self.set_system(system)
        return UpdateResult(success=True, system=system)

    def load_preset(self, name: str, **overrides: float) -> UpdateResult:
        """
        Install a built-in system, optionally overriding its parameters.

        Invalid override values are reported like update_system errors.

        Raises
        ------
        KeyError
            If the preset does not exist
        ValueError
            If an override names a parameter the preset does not have
        """
        preset = get_preset(name)
        try:
            system = preset.compile(**overrides)
        except (ParseError, ParameterError) as e:
            self.stats["failed_updates"] += 1
            return UpdateResult(success=False, error=e, system=self.system)

        self.set_system(system)
        return UpdateResult(success=True, system=system)

    def set_system(self, system: PlanarSystem) -> None:
        """Install an already compiled system; clears all particles."""
        self.system = system
        self._integrator = ParticleIntegrator(
            system,
            dt=self.config["dt"],
            bound=self.config["bound"],
            method=self.config["method"],
        )
        self._system_version += 1
        self.stats["updates"] += 1
        self.clear_particles()

    def equations_latex(self) -> Optional[Dict[str, str]]:
        """Typeset equations of the current system (None if none loaded)."""
        if self.system is None:
            return None
        return system_latex(self.system)

    # ========================================================================
    # View and display settings
    # ========================================================================

    def set_view(self, x_min: float, x_max: float, y_min: float, y_max: float) -> Viewport:
        """
        Change the visible world range; particles are kept.

        Raises
        ------
        ViewportError
            On a degenerate range (the current view is kept)
        """
        self.viewport = self.viewport.with_range(x_min, x_max, y_min, y_max)
        return self.viewport

    def reset_view(self) -> Viewport:
        """Back to [-5, 5]^2; clears particles."""
        lo, hi = DEFAULT_RANGE
        self.viewport = self.viewport.with_range(lo, hi, lo, hi)
        self.clear_particles()
        return self.viewport

    @property
    def projection(self) -> Projection:
        return Projection(self.viewport)

    def set_grid_density(self, grid_density: int) -> None:
        self.config["grid_density"] = validate_grid_density(grid_density)

    def set_arrow_scale(self, arrow_scale: float) -> None:
        self.config["arrow_scale"] = validate_arrow_scale(arrow_scale)

    def set_show_grid(self, show: bool) -> None:
        self.config["show_grid"] = bool(show)

    def set_show_nullclines(self, show: bool) -> None:
        self.config["show_nullclines"] = bool(show)

    def set_nullcline_config(self, config: NullclineConfig) -> None:
        """Change epsilon/policy/method/resolutions of nullcline extraction."""
        self.config["nullclines"] = resolve_nullcline_config(
            {**self.config["nullclines"], **config}
        )

    # ========================================================================
    # Particles
    # ========================================================================

    def add_particle(self, x: float, y: float, color: Optional[str] = None) -> Particle:
        """
        Spawn a particle at a world point and mark the loop as running.

        Raises
        ------
        SystemNotLoadedError
            If no system has been loaded yet
        """
        if self.system is None:
            raise SystemNotLoadedError('Load a system first with "update_system"')

        particle = self.particles.spawn(x, y, color)
        self.running = True
        return particle

    def add_particle_at_canvas(self, canvas_x: float, canvas_y: float) -> Particle:
        """
        Spawn a particle at a pixel position (e.g. a click).

        Raises
        ------
        ValueError
            If the position is outside the canvas
        SystemNotLoadedError
            If no system has been loaded yet
        """
        projection = self.projection
        if not projection.canvas_contains(canvas_x, canvas_y):
            raise ValueError(
                f"Canvas position ({canvas_x}, {canvas_y}) is outside the "
                f"{self.viewport.width}x{self.viewport.height} drawing surface"
            )
        return self.add_particle(*projection.canvas_to_world(canvas_x, canvas_y))

    def clear_particles(self) -> None:
        self.particles.clear()
        self.running = False

    def clear_trajectories(self) -> None:
        self.particles.clear_trajectories()

    reset_all = clear_particles

    # ========================================================================
    # Scheduling
    # ========================================================================

    def tick(self) -> bool:
        """
        Advance the simulation by one step.

        Returns
        -------
        bool
            True if another tick should be scheduled
        """
        if self._integrator is None or not self.particles.live:
            self.running = False
            return False

        self._integrator.step_all(self.particles.live)
        self.particles.sweep()
        self.stats["ticks"] += 1

        if self.on_frame is not None:
            self.on_frame(self.build_frame())

        self.running = self.particles.any_active
        return self.running

    def run_until_idle(self, max_ticks: Optional[int] = None) -> int:
        """
        Call tick() until it returns False or max_ticks is reached.

        Returns
        -------
        int
            Number of ticks performed
        """
        start = self.stats["ticks"]
        while max_ticks is None or self.stats["ticks"] - start < max_ticks:
            if not self.tick():
                break
        return self.stats["ticks"] - start

    # ========================================================================
    # Frames
    # ========================================================================

    def _static_settings_key(self):
        c = self.config
        return (
            self._system_version,
            self.viewport,
            c["grid_density"],
            c["arrow_scale"],
            c["base_scale"],
            c["head_length"],
            c["show_nullclines"],
            tuple(sorted(c["nullclines"].items())),
        )

    def static_layers(self):
        """
        Arrows and nullclines for the current settings (cached).

        Returns
        -------
        tuple
            (arrows, nullclines); both empty when no system is loaded
        """
        if self.system is None:
            return [], {}

        key = self._static_settings_key()
        if key != self._static_key:
            c = self.config
            samples = sample_field(
                self.system,
                self.viewport,
                c["grid_density"],
                c["arrow_scale"],
                c["base_scale"],
            )
            arrows: List[ArrowPrimitive] = field_arrows(
                samples, self.projection, c["head_length"]
            )
            nullclines: Dict[str, Nullcline] = {}
            if c["show_nullclines"]:
                nullclines = extract_nullclines(
                    self.system, self.viewport, config=c["nullclines"]
                )
            self._static_cache = (arrows, nullclines)
            self._static_key = key
            self.stats["static_rebuilds"] += 1

        return self._static_cache

    def build_frame(self) -> Frame:
        """Drawable primitives for the current state, in world coordinates."""
        arrows, nullclines = self.static_layers()
        return {
            "arrows": arrows,
            "nullclines": nullclines,
            "particles": self.particles.primitives() if self.system is not None else [],
            "grid": grid_lines(self.viewport) if self.config["show_grid"] else None,
            "message": None if self.system is not None else NO_SYSTEM_MESSAGE,
        }

    def get_stats(self) -> Dict[str, Any]:
        """Engine counters plus evaluation and integration statistics."""
        stats: Dict[str, Any] = {
            **self.stats,
            "live_particles": len(self.particles),
            "retired_particles": len(self.particles.retired),
        }
        if self.system is not None:
            stats["evaluation"] = self.system.diagnostics.get_stats()
        if self._integrator is not None:
            stats["integration"] = self._integrator.get_stats()
        return stats


__all__ = ["UpdateResult", "PhasePortraitEngine", "NO_SYSTEM_MESSAGE"]
