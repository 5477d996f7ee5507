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
Unit Tests for the Expression Parser

Tests tokenization, operator precedence and associativity, function calls,
and every ParseError path.
"""

import pytest

from phaseflow.exceptions import ParseError
from phaseflow.expressions.nodes import (
    BinaryOp,
    Call,
    Literal,
    UnaryOp,
    Variable,
    depth,
    free_symbols,
    walk,
)
from phaseflow.expressions.parser import MAX_DEPTH, parse, tokenize


# ============================================================================
# Tokenizer Tests
# ============================================================================


class TestTokenize:
    """Test tokenize function."""

    def test_simple_tokens(self):
        kinds = [t.kind for t in tokenize("x + 2.5")]
        assert kinds == ["name", "op", "number", "end"]

    def test_scientific_notation(self):
        tokens = tokenize("1.5e-3 * x")
        assert tokens[0].text == "1.5e-3"

    def test_leading_dot_number(self):
        assert tokenize(".5")[0].text == ".5"

    def test_positions_recorded(self):
        tokens = tokenize("a  + b")
        assert [t.pos for t in tokens[:3]] == [0, 3, 5]

    def test_bad_character(self):
        with pytest.raises(ParseError) as exc_info:
            tokenize("x $ y")
        assert exc_info.value.position == 2
        assert exc_info.value.text == "x $ y"


# ============================================================================
# Precedence and Associativity
# ============================================================================


class TestPrecedence:
    """Test operator precedence."""

    def test_literal(self):
        assert parse("3") == Literal(3.0)

    def test_variable(self):
        assert parse("mu") == Variable("mu")

    def test_mul_binds_tighter_than_add(self):
        assert parse("1 + 2 * x") == BinaryOp(
            "+", Literal(1.0), BinaryOp("*", Literal(2.0), Variable("x"))
        )

    def test_subtraction_left_associative(self):
        assert parse("a - b - c") == BinaryOp(
            "-", BinaryOp("-", Variable("a"), Variable("b")), Variable("c")
        )

    def test_division_left_associative(self):
        assert parse("a / b / c") == BinaryOp(
            "/", BinaryOp("/", Variable("a"), Variable("b")), Variable("c")
        )

    def test_power_right_associative(self):
        assert parse("2 ^ 3 ^ 2") == BinaryOp(
            "^", Literal(2.0), BinaryOp("^", Literal(3.0), Literal(2.0))
        )

    def test_unary_minus_below_power(self):
        """-x^2 is -(x^2)."""
        assert parse("-x^2") == UnaryOp("-", BinaryOp("^", Variable("x"), Literal(2.0)))

    def test_negative_exponent(self):
        assert parse("2^-1") == BinaryOp("^", Literal(2.0), UnaryOp("-", Literal(1.0)))

    def test_unary_plus(self):
        assert parse("+x") == UnaryOp("+", Variable("x"))

    def test_double_negation(self):
        assert parse("--x") == UnaryOp("-", UnaryOp("-", Variable("x")))

    def test_parentheses(self):
        assert parse("(1 + x) * y") == BinaryOp(
            "*", BinaryOp("+", Literal(1.0), Variable("x")), Variable("y")
        )

    def test_whitespace_ignored(self):
        assert parse("  x*y  ") == parse("x * y")


# ============================================================================
# Function Calls
# ============================================================================


class TestCalls:
    """Test function call parsing."""

    @pytest.mark.parametrize("func", ["sin", "cos", "tan", "exp", "log", "sqrt"])
    def test_supported_functions(self, func):
        assert parse(f"{func}(x)") == Call(func, (Variable("x"),))

    def test_nested_call(self):
        assert parse("sin(cos(x))") == Call("sin", (Call("cos", (Variable("x"),)),))

    def test_call_with_expression(self):
        node = parse("exp(-x^2 / 2)")
        assert isinstance(node, Call)
        assert node.func == "exp"

    def test_constants_are_variables(self):
        assert parse("pi") == Variable("pi")
        assert parse("e") == Variable("e")


# ============================================================================
# Error Tests
# ============================================================================


class TestParseErrors:
    """Test malformed input."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "x +",
            "* x",
            "(x + 1",
            "x + 1)",
            "x y",
            "2x",
            "sin",
            "sin()",
            "sin(x, y)",
            "foo(x)",
            "x ** 2",
            "x,y",
        ],
    )
    def test_malformed(self, text):
        with pytest.raises(ParseError):
            parse(text)

    def test_unknown_function_message(self):
        with pytest.raises(ParseError, match="Unknown function 'foo'"):
            parse("foo(x)")

    def test_error_carries_text(self):
        with pytest.raises(ParseError) as exc_info:
            parse("x + * y")
        assert exc_info.value.text == "x + * y"
        assert exc_info.value.position == 4

    def test_end_of_input_message(self):
        with pytest.raises(ParseError, match="end of input"):
            parse("x +")

    def test_non_string_input(self):
        with pytest.raises(ParseError):
            parse(42)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse("(")


# ============================================================================
# Nesting Limits
# ============================================================================


class TestNestingLimits:
    """Test that pathologically deep input is rejected as a ParseError."""

    def test_deep_parentheses(self):
        with pytest.raises(ParseError, match="nested too deeply"):
            parse("(" * 300 + "x" + ")" * 300)

    def test_long_sum(self):
        with pytest.raises(ParseError, match="nested too deeply") as exc_info:
            parse(" + ".join(["x"] * 1200))
        assert exc_info.value.text.startswith("x + x")

    def test_repeated_negation(self):
        with pytest.raises(ParseError):
            parse("-" * 300 + "x")

    def test_moderate_nesting_accepted(self):
        assert parse("(" * 50 + "x" + ")" * 50) == Variable("x")
        tree = parse(" + ".join(["x"] * 150))
        assert depth(tree) == 150

    def test_limit_is_inclusive(self):
        assert depth(parse(" + ".join(["x"] * MAX_DEPTH))) == MAX_DEPTH
        with pytest.raises(ParseError):
            parse(" + ".join(["x"] * (MAX_DEPTH + 2)))


# ============================================================================
# Free Symbols
# ============================================================================


class TestFreeSymbols:
    """Test free_symbols."""

    def test_order_of_first_appearance(self):
        assert free_symbols(parse("mu * (1 - x^2) * y - x")) == ["mu", "x", "y"]

    def test_constants_excluded(self):
        assert free_symbols(parse("pi * x + e")) == ["x"]

    def test_function_names_excluded(self):
        assert free_symbols(parse("sin(theta)")) == ["theta"]

    def test_no_symbols(self):
        assert free_symbols(parse("1 + 2")) == []


# ============================================================================
# Tree Traversal
# ============================================================================


class TestTraversal:
    """Test walk and depth."""

    def test_walk_order(self):
        tree = parse("x + sin(y)")
        assert [type(node).__name__ for node in walk(tree)] == [
            "BinaryOp",
            "Variable",
            "Call",
            "Variable",
        ]

    def test_depth(self):
        assert depth(Variable("x")) == 1
        assert depth(parse("-(x + 1)")) == 3

    def test_hand_built_deep_tree(self):
        tree = Variable("x")
        for _ in range(5000):
            tree = BinaryOp("+", tree, Literal(1.0))
        assert depth(tree) == 5001
        assert len(list(walk(tree))) == 10001
