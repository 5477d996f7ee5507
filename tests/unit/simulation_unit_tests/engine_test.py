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
Unit Tests for PhasePortraitEngine

Tests cover:
1. System updates, including rejected updates
2. Viewport changes and display settings
3. Particle spawning and the tick scheduler
4. Frame contents and static layer caching
"""

import pytest

from phaseflow.exceptions import (
    ParameterError,
    ParseError,
    SystemNotLoadedError,
    ViewportError,
)
from phaseflow.geometry.projection import Viewport
from phaseflow.simulation.engine import NO_SYSTEM_MESSAGE, PhasePortraitEngine


# ============================================================================
# Fixtures
# ============================================================================


VAN_DER_POL = ("y", "mu * (1 - x^2) * y - x", '{"mu": 1}')


@pytest.fixture
def engine():
    return PhasePortraitEngine()


@pytest.fixture
def loaded(engine):
    result = engine.update_system(*VAN_DER_POL)
    assert result.success
    return engine


# ============================================================================
# System Update Tests
# ============================================================================


class TestUpdateSystem:
    """Test update_system and presets."""

    def test_success(self, engine):
        result = engine.update_system(*VAN_DER_POL)
        assert result.success
        assert result.error is None
        assert engine.system is result.system
        assert engine.system.parameters["mu"] == 1.0

    def test_parse_error_keeps_previous(self, loaded):
        previous = loaded.system
        particle = loaded.add_particle(0.5, 0.0)
        result = loaded.update_system("y +", "x")
        assert not result.success
        assert result.error_kind == "ParseError"
        assert loaded.system is previous
        assert result.system is previous
        assert loaded.particles.live == [particle]

    def test_parameter_error_keeps_previous(self, loaded):
        previous = loaded.system
        result = loaded.update_system("y", "-x", "{mu: 1}")
        assert result.error_kind == "ParameterError"
        assert loaded.system is previous

    def test_failure_with_nothing_loaded(self, engine):
        result = engine.update_system("(", "x")
        assert not result.success
        assert engine.system is None

    def test_success_clears_particles(self, loaded):
        loaded.add_particle(0.5, 0.0)
        loaded.update_system("y", "-x")
        assert len(loaded.particles) == 0
        assert not loaded.running

    def test_update_stats(self, loaded):
        loaded.update_system("(", "x")
        stats = loaded.get_stats()
        assert stats["updates"] == 1
        assert stats["failed_updates"] == 1

    def test_load_preset(self, engine):
        result = engine.load_preset("pendulum", gamma=0.3)
        assert result.success
        assert engine.system.parameters["gamma"] == 0.3

    def test_unknown_preset(self, engine):
        with pytest.raises(KeyError):
            engine.load_preset("lorenz")

    def test_unknown_preset_parameter(self, loaded):
        system = loaded.system
        with pytest.raises(ValueError, match="Unknown parameter"):
            loaded.load_preset("spiral", mu=1.0)
        assert loaded.system is system

    def test_invalid_preset_value(self, loaded):
        system = loaded.system
        result = loaded.load_preset("spiral", sigma=float("nan"))
        assert not result.success
        assert isinstance(result.error, ParameterError)
        assert loaded.system is system
        assert loaded.stats["failed_updates"] == 1

    def test_deeply_nested_update_fails(self, loaded):
        result = loaded.update_system("(" * 300 + "x" + ")" * 300, "y")
        assert not result.success
        assert isinstance(result.error, ParseError)
        assert loaded.system.dx_text == "y"

    def test_equations_latex(self, engine, loaded):
        assert PhasePortraitEngine().equations_latex() is None
        assert r"\frac{dx}{dt}" in loaded.equations_latex()["align"]


# ============================================================================
# View and Settings Tests
# ============================================================================


class TestView:
    """Test viewport and display settings."""

    def test_set_view_keeps_particles(self, loaded):
        loaded.add_particle(0.5, 0.0)
        view = loaded.set_view(-2, 2, -1, 1)
        assert view.bounds == (-2.0, 2.0, -1.0, 1.0)
        assert len(loaded.particles) == 1

    def test_degenerate_view_rejected(self, loaded):
        before = loaded.viewport
        with pytest.raises(ViewportError):
            loaded.set_view(1, 1, -1, 1)
        assert loaded.viewport == before

    def test_reset_view_clears_particles(self, loaded):
        loaded.set_view(-2, 2, -1, 1)
        loaded.add_particle(0.5, 0.0)
        loaded.reset_view()
        assert loaded.viewport.bounds == (-5.0, 5.0, -5.0, 5.0)
        assert len(loaded.particles) == 0

    def test_custom_viewport(self):
        engine = PhasePortraitEngine(viewport=Viewport(0, 1, 0, 1, width=100, height=100))
        assert engine.projection.world_to_canvas(0.5, 0.5) == (50.0, 50.0)

    @pytest.mark.parametrize("density", [9, 51, 20.5])
    def test_grid_density_limits(self, engine, density):
        with pytest.raises(ValueError):
            engine.set_grid_density(density)

    @pytest.mark.parametrize("scale", [0.05, 2.5])
    def test_arrow_scale_limits(self, engine, scale):
        with pytest.raises(ValueError):
            engine.set_arrow_scale(scale)

    def test_config_override(self):
        engine = PhasePortraitEngine({"dt": 0.01, "method": "euler"})
        assert engine.config["dt"] == 0.01
        assert engine.config["bound"] == 10.0

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            PhasePortraitEngine({"dt": -1.0})


# ============================================================================
# Particle and Scheduling Tests
# ============================================================================


class TestScheduling:
    """Test particle spawning and tick()."""

    def test_add_particle_requires_system(self, engine):
        with pytest.raises(SystemNotLoadedError):
            engine.add_particle(0.0, 0.0)

    def test_add_particle_starts_loop(self, loaded):
        particle = loaded.add_particle(0.5, 0.0)
        assert loaded.running
        assert particle.id == 1

    def test_add_particle_at_canvas(self, loaded):
        particle = loaded.add_particle_at_canvas(400, 300)
        assert particle.position == (0.0, 0.0)

    def test_add_particle_off_canvas(self, loaded):
        with pytest.raises(ValueError, match="outside"):
            loaded.add_particle_at_canvas(900, 300)

    def test_tick_without_particles(self, loaded):
        assert loaded.tick() is False
        assert not loaded.running

    def test_tick_advances(self, loaded):
        particle = loaded.add_particle(0.5, 0.0)
        assert loaded.tick() is True
        assert len(particle.trajectory) == 2
        assert loaded.stats["ticks"] == 1

    def test_loop_stops_when_all_leave(self, loaded):
        loaded.add_particle(11.0, 0.0)
        assert loaded.tick() is False
        assert not loaded.running
        assert len(loaded.particles) == 0
        assert len(loaded.particles.retired) == 1

    def test_retired_still_drawn(self, loaded):
        loaded.add_particle(11.0, 0.0)
        loaded.tick()
        particles = loaded.build_frame()["particles"]
        assert len(particles) == 1
        assert not particles[0]["active"]
        assert particles[0]["head"] is None

    def test_on_frame_called(self):
        frames = []
        engine = PhasePortraitEngine(on_frame=frames.append)
        engine.update_system(*VAN_DER_POL)
        engine.add_particle(0.5, 0.0)
        engine.tick()
        engine.tick()
        assert len(frames) == 2
        assert len(frames[-1]["particles"][0]["polyline"]) == 3

    def test_run_until_idle_max_ticks(self, loaded):
        loaded.add_particle(0.5, 0.0)
        assert loaded.run_until_idle(max_ticks=25) == 25
        assert loaded.running

    def test_run_until_idle_stops(self):
        engine = PhasePortraitEngine()
        engine.update_system("x", "0")
        engine.add_particle(1.0, 0.0)
        ticks = engine.run_until_idle(max_ticks=1000)
        assert 0 < ticks < 1000
        assert not engine.running

    def test_clear_particles(self, loaded):
        loaded.add_particle(0.5, 0.0)
        loaded.clear_particles()
        assert len(loaded.particles) == 0
        assert not loaded.running

    def test_clear_trajectories(self, loaded):
        particle = loaded.add_particle(0.5, 0.0)
        loaded.tick()
        loaded.clear_trajectories()
        assert len(particle.trajectory) == 1
        assert loaded.particles.live == [particle]

    def test_reset_all(self, loaded):
        loaded.add_particle(0.5, 0.0)
        loaded.reset_all()
        assert len(loaded.particles) == 0


# ============================================================================
# Frame Tests
# ============================================================================


class TestFrames:
    """Test build_frame and static layer caching."""

    def test_no_system_frame(self, engine):
        frame = engine.build_frame()
        assert frame["message"] == NO_SYSTEM_MESSAGE
        assert frame["arrows"] == []
        assert frame["particles"] == []
        assert frame["nullclines"] == {}

    def test_loaded_frame(self, loaded):
        frame = loaded.build_frame()
        assert frame["message"] is None
        # 21 x 21 grid with a fixed point at the origin
        assert len(frame["arrows"]) == 21 * 21 - 1
        assert frame["grid"] is not None
        assert frame["nullclines"] == {}

    def test_grid_toggle(self, loaded):
        loaded.set_show_grid(False)
        assert loaded.build_frame()["grid"] is None

    def test_nullclines_toggle(self, loaded):
        loaded.set_show_nullclines(True)
        nullclines = loaded.build_frame()["nullclines"]
        assert set(nullclines) == {"dx", "dy"}
        assert not nullclines["dx"].is_empty

    def test_static_layers_cached(self, loaded):
        loaded.build_frame()
        loaded.add_particle(0.5, 0.0)
        loaded.tick()
        loaded.build_frame()
        assert loaded.stats["static_rebuilds"] == 1

    @pytest.mark.parametrize(
        "change",
        [
            lambda e: e.set_grid_density(30),
            lambda e: e.set_arrow_scale(1.0),
            lambda e: e.set_view(-2, 2, -2, 2),
            lambda e: e.update_system("y", "-x"),
            lambda e: e.set_show_nullclines(True),
        ],
    )
    def test_static_layers_invalidated(self, loaded, change):
        loaded.build_frame()
        change(loaded)
        loaded.build_frame()
        assert loaded.stats["static_rebuilds"] == 2

    def test_nullcline_config_invalidates(self, loaded):
        loaded.set_show_nullclines(True)
        loaded.build_frame()
        loaded.set_nullcline_config({"epsilon": 0.01})
        loaded.build_frame()
        assert loaded.stats["static_rebuilds"] == 2
        assert loaded.config["nullclines"]["epsilon"] == 0.01
        assert loaded.config["nullclines"]["policy"] == "first"

    def test_grid_density_changes_arrow_count(self, loaded):
        loaded.set_grid_density(10)
        assert len(loaded.build_frame()["arrows"]) == 11 * 11 - 1

    def test_get_stats(self, loaded):
        loaded.add_particle(0.5, 0.0)
        loaded.tick()
        stats = loaded.get_stats()
        assert stats["live_particles"] == 1
        assert stats["integration"]["total_steps"] == 1
        assert stats["evaluation"]["failures"] == 0
