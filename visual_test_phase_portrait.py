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
Visual Test Suite for Phase Portraits

Generates HTML files for visual inspection of the engine and plotter.
Run this script to create a gallery of plots.

Usage:
    python visual_test_phase_portrait.py

Output:
    Creates HTML files in ./visual_tests/phase_portrait/
"""

from pathlib import Path

from phaseflow import PhasePortraitEngine
from phaseflow.visualization import FramePlotter


def setup_output_directory():
    """Create output directory for visual tests."""
    output_dir = Path("visual_tests/phase_portrait")
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def seed_particles(engine, points, max_ticks=400):
    for x, y in points:
        engine.add_particle(x, y)
    engine.run_until_idle(max_ticks=max_ticks)


def test_presets(output_dir, plotter):
    """One portrait per built-in system, with nullclines."""
    seeds = {
        "van-der-pol": [(0.1, 0.0), (3.0, 3.0), (-4.0, -1.0)],
        "pendulum": [(-3.0, 2.0), (0.0, 2.5), (2.0, -2.0)],
        "lotka-volterra": [(0.5, 0.5), (2.0, 1.0), (1.0, 3.0)],
        "spiral": [(4.0, 0.0), (-2.0, 3.0)],
    }
    for name, points in seeds.items():
        print(f"  {name}")
        engine = PhasePortraitEngine({"show_nullclines": True})
        engine.load_preset(name)
        seed_particles(engine, points)
        fig = plotter.plot_engine(engine, title=name)
        fig.write_html(output_dir / f"preset_{name}.html")


def test_display_settings(output_dir, plotter):
    """Grid density and arrow scale extremes."""
    for density, scale in [(10, 2.0), (50, 0.1), (30, 1.0)]:
        print(f"  density={density} scale={scale}")
        engine = PhasePortraitEngine({"grid_density": density, "arrow_scale": scale})
        engine.update_system("y", "-x - 0.2 * y")
        fig = plotter.plot_engine(engine)
        fig.write_html(output_dir / f"display_{density}_{scale}.html")


def test_nullcline_methods(output_dir, plotter):
    """Default scan versus bisection on a multi-valued nullcline."""
    for method, policy in [("scan", "first"), ("scan", "all"), ("bisection", "all")]:
        print(f"  {method}/{policy}")
        engine = PhasePortraitEngine({"show_nullclines": True})
        engine.update_system("x^2 + y^2 - 4", "y - sin(x)")
        engine.set_nullcline_config({"method": method, "policy": policy})
        fig = plotter.plot_engine(engine, title=f"Nullclines ({method}, {policy})")
        fig.write_html(output_dir / f"nullclines_{method}_{policy}.html")


def test_escaping_particles(output_dir, plotter):
    """Saddle: particles leave the bound and are retired."""
    engine = PhasePortraitEngine()
    engine.update_system("x", "-y")
    seed_particles(engine, [(0.01, 4.0), (-0.01, -4.0), (0.5, 0.5)], max_ticks=1000)
    fig = plotter.plot_engine(engine, title="Saddle (retired trajectories)")
    fig.write_html(output_dir / "saddle_escape.html")


def test_placeholder(output_dir, plotter):
    """Frame with no system loaded."""
    engine = PhasePortraitEngine()
    fig = plotter.plot_engine(engine)
    fig.write_html(output_dir / "no_system.html")


def test_themes(output_dir):
    for theme in ["default", "dark", "publication"]:
        print(f"  {theme}")
        engine = PhasePortraitEngine()
        engine.load_preset("van-der-pol")
        seed_particles(engine, [(0.1, 0.0)])
        fig = FramePlotter(theme=theme).plot_engine(engine)
        fig.write_html(output_dir / f"theme_{theme}.html")


def main():
    output_dir = setup_output_directory()
    plotter = FramePlotter()

    print("Generating phase portrait gallery...")
    test_presets(output_dir, plotter)
    test_display_settings(output_dir, plotter)
    test_nullcline_methods(output_dir, plotter)
    test_escaping_particles(output_dir, plotter)
    test_placeholder(output_dir, plotter)
    test_themes(output_dir)
    print(f"Done. Open the HTML files in {output_dir}/")


if __name__ == "__main__":
    main()
