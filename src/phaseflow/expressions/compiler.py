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
Expression Compiler

Turns an AST into nested Python closures once, so that evaluation at each
grid point or integration stage is a plain function call over a scope
mapping.

Evaluation is scalar and uses the ``math`` module, so every failure mode
surfaces as an exception instead of a silent NaN:

- missing identifier      -> KeyError
- division by zero        -> ZeroDivisionError
- log(-1), sqrt(-1), (-8)^(1/3) -> ValueError
- exp(1000), 10^400       -> OverflowError

CompiledExpression.evaluate converts all of these, and any non-finite
result, into EvalError.
"""

import math
import operator
from typing import Callable, Dict, List

from phaseflow.exceptions import EvalError
from phaseflow.expressions.nodes import (
    BinaryOp,
    Call,
    Literal,
    Node,
    UnaryOp,
    Variable,
    free_symbols,
)
from phaseflow.expressions.parser import parse
from phaseflow.types.core import Scope

Closure = Callable[[Scope], float]

CONSTANT_VALUES: Dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}

BINARY_FUNCTIONS: Dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "^": math.pow,
}

UNARY_FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "-": operator.neg,
    "+": operator.pos,
}

CALL_FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "exp": math.exp,
    "log": math.log,
    "sqrt": math.sqrt,
}

_EVAL_FAILURES = (KeyError, ZeroDivisionError, ValueError, OverflowError, TypeError, RecursionError)


def compile_node(node: Node) -> Closure:
    """
    Compile an AST node into a closure ``scope -> float``.

    The closure may raise any of the exceptions listed in the module
    docstring; use CompiledExpression for EvalError translation.
    """
    if isinstance(node, Literal):
        value = node.value
        return lambda scope: value

    if isinstance(node, Variable):
        name = node.name
        if name in CONSTANT_VALUES:
            value = CONSTANT_VALUES[name]
            return lambda scope: value
        return lambda scope: scope[name]

    if isinstance(node, UnaryOp):
        fn = UNARY_FUNCTIONS[node.op]
        operand = compile_node(node.operand)
        return lambda scope: fn(operand(scope))

    if isinstance(node, BinaryOp):
        fn = BINARY_FUNCTIONS[node.op]
        left = compile_node(node.left)
        right = compile_node(node.right)
        return lambda scope: fn(left(scope), right(scope))

    if isinstance(node, Call):
        fn = CALL_FUNCTIONS[node.func]
        args = [compile_node(arg) for arg in node.args]
        return lambda scope: fn(*[arg(scope) for arg in args])

    raise TypeError(f"Unknown node type {type(node).__name__}")


class CompiledExpression:
    """
    A parsed and compiled scalar expression.

    Attributes
    ----------
    text : str
        Source text
    tree : Node
        Parsed AST
    free_symbols : List[str]
        Identifiers the scope must provide

    Examples
    --------
    >>> expr = compile_expression("mu * (1 - x^2) * y - x")
    >>> expr.evaluate({"x": 0.5, "y": 1.0, "mu": 1.0})
    0.25
    >>> expr.evaluate({"x": 0.5})
    Traceback (most recent call last):
    ...
    phaseflow.exceptions.EvalError: Undefined symbol 'y' in 'mu * (1 - x^2) * y - x'
    """

    def __init__(self, text: str, tree: Node):
        self.text = text
        self.tree = tree
        self.free_symbols: List[str] = free_symbols(tree)
        self._fn = compile_node(tree)

    def evaluate(self, scope: Scope) -> float:
        """
        Evaluate in the given scope.

        Raises
        ------
        EvalError
            On a missing identifier, arithmetic failure or non-finite result
        """
        try:
            value = self._fn(scope)
        except KeyError as e:
            raise EvalError(f"Undefined symbol {e} in '{self.text}'") from e
        except _EVAL_FAILURES as e:
            raise EvalError(f"Cannot evaluate '{self.text}': {e}") from e

        value = float(value)
        if not math.isfinite(value):
            raise EvalError(f"Non-finite result {value} from '{self.text}'")
        return value

    __call__ = evaluate

    def __repr__(self) -> str:
        return f"CompiledExpression({self.text!r})"


def compile_expression(text: str) -> CompiledExpression:
    """
    Parse and compile expression text.

    Raises
    ------
    ParseError
        If the text is malformed
    """
    return CompiledExpression(text, parse(text))


__all__ = [
    "CONSTANT_VALUES",
    "CALL_FUNCTIONS",
    "compile_node",
    "CompiledExpression",
    "compile_expression",
]
