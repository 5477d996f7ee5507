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
Expression Evaluator
====================

Parses equation text into a tagged AST, compiles it to closures over an
explicit scope, and exports it to SymPy for typesetting.

>>> from phaseflow.expressions import compile_expression
>>> expr = compile_expression("-sin(x) - gamma * y")
>>> expr.free_symbols
['x', 'gamma', 'y']
>>> expr.evaluate({"x": 0.0, "y": 1.0, "gamma": 0.1})
-0.1
"""

from .compiler import CompiledExpression, compile_expression, compile_node
from .nodes import (
    CONSTANTS,
    FUNCTIONS,
    BinaryOp,
    Call,
    Literal,
    Node,
    UnaryOp,
    Variable,
    depth,
    free_symbols,
    walk,
)
from .parser import parse, tokenize
from .symbolic import system_latex, to_latex, to_sympy

__all__ = [
    # AST
    "Node",
    "Literal",
    "Variable",
    "UnaryOp",
    "BinaryOp",
    "Call",
    "CONSTANTS",
    "FUNCTIONS",
    "walk",
    "depth",
    "free_symbols",
    # Parsing and compilation
    "tokenize",
    "parse",
    "compile_node",
    "compile_expression",
    "CompiledExpression",
    # Symbolic export
    "to_sympy",
    "to_latex",
    "system_latex",
]
