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
Unit Tests for the Exception Hierarchy
"""

import pytest

from phaseflow.exceptions import (
    EvalError,
    ParameterError,
    ParseError,
    PhaseFlowError,
    SystemNotLoadedError,
    ViewportError,
)


class TestHierarchy:
    """Every error is a PhaseFlowError and a matching builtin."""

    @pytest.mark.parametrize(
        "cls,builtin",
        [
            (ParseError, ValueError),
            (ParameterError, ValueError),
            (EvalError, ArithmeticError),
            (ViewportError, ValueError),
            (SystemNotLoadedError, RuntimeError),
        ],
    )
    def test_bases(self, cls, builtin):
        assert issubclass(cls, PhaseFlowError)
        assert issubclass(cls, builtin)


class TestParseError:
    """Test ParseError message formatting."""

    def test_with_position(self):
        error = ParseError("Unexpected token", "x y", 2)
        assert str(error) == "Unexpected token at position 2 in 'x y'"
        assert error.reason == "Unexpected token"

    def test_without_position(self):
        assert str(ParseError("Bad", "x")) == "Bad in 'x'"

    def test_message_only(self):
        assert str(ParseError("Bad")) == "Bad"


class TestEvalError:
    """Test EvalError point."""

    def test_point(self):
        assert EvalError("boom", (1.0, 2.0)).point == (1.0, 2.0)
        assert EvalError("boom").point is None
