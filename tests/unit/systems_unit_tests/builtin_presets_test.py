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
Unit Tests for Built-in Presets
"""

import pytest

from phaseflow.systems.builtin import PRESETS, get_preset, list_presets, load_preset
from phaseflow.systems.planar_system import PlanarSystem


class TestPresets:
    """Test the preset catalogue."""

    def test_catalogue(self):
        assert list_presets() == ["van-der-pol", "pendulum", "lotka-volterra", "spiral"]

    @pytest.mark.parametrize("name", list(PRESETS))
    def test_presets_compile_cleanly(self, name):
        system = load_preset(name)
        assert isinstance(system, PlanarSystem)
        assert system.undefined_symbols == []

    def test_van_der_pol_values(self):
        system = load_preset("van-der-pol")
        assert system.evaluate(1.0, 2.0).dy == pytest.approx(-1.0)

    def test_lotka_volterra_equilibrium(self):
        system = load_preset("lotka-volterra")
        result = system.evaluate(1.0, 1.0)
        assert result.dx == pytest.approx(0.0)
        assert result.dy == pytest.approx(0.0)

    def test_override(self):
        system = load_preset("pendulum", gamma=0.5)
        assert system.parameters["gamma"] == 0.5

    def test_unknown_override(self):
        with pytest.raises(ValueError, match="Unknown parameter"):
            load_preset("pendulum", mu=1.0)

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="Unknown preset"):
            get_preset("lorenz")
