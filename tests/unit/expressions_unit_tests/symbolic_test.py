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
Unit Tests for SymPy Export

Tests conversion of expression trees to SymPy and LaTeX.
"""

import pytest
import sympy as sp

from phaseflow.expressions.parser import parse
from phaseflow.expressions.symbolic import system_latex, to_latex, to_sympy
from phaseflow.systems.planar_system import compile_system


class TestToSympy:
    """Test to_sympy conversion."""

    @pytest.mark.parametrize(
        "text",
        [
            "mu * (1 - x^2) * y - x",
            "-sin(x) - gamma * y",
            "x / (1 + y^2)",
            "exp(-x) + sqrt(y) * log(y)",
            "2 ^ 3 ^ 2",
        ],
    )
    def test_numerically_equivalent(self, text):
        x, y, mu, gamma = sp.symbols("x y mu gamma", real=True)
        expr = to_sympy(parse(text))
        values = {x: 0.3, y: 1.7, mu: 1.2, gamma: 0.1}
        expected = sp.sympify(text.replace("^", "**"), locals={"gamma": gamma, "mu": mu, "x": x, "y": y})
        assert float(expr.subs(values).evalf()) == pytest.approx(float(expected.subs(values).evalf()))

    def test_symbols_are_real(self):
        expr = to_sympy(parse("theta"))
        assert expr == sp.Symbol("theta", real=True)

    def test_constants(self):
        assert to_sympy(parse("pi")) == sp.pi
        assert to_sympy(parse("e")) == sp.E

    def test_integer_literal(self):
        assert to_sympy(parse("3")) == sp.Integer(3)


class TestLatex:
    """Test LaTeX output."""

    def test_power(self):
        assert "x^{2}" in to_latex(parse("x^2"))

    def test_greek_parameter(self):
        assert r"\mu" in to_latex(parse("mu * y"))

    def test_function(self):
        assert r"\sin" in to_latex(parse("sin(x)"))

    def test_system_latex(self):
        result = system_latex(compile_system("y", "-x"))
        assert set(result) == {"dx", "dy", "align"}
        assert result["dx"] == "y"
        assert r"\frac{dx}{dt} &= y" in result["align"]
        assert r"\frac{dy}{dt}" in result["align"]
        assert result["align"].startswith(r"\begin{align}")
        assert result["align"].endswith(r"\end{align}")
