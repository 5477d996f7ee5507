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
Expression AST

Tagged node types produced by the parser:

- Literal: numeric constant
- Variable: identifier resolved at evaluation time (or a named constant)
- UnaryOp: sign applied to an operand
- BinaryOp: + - * / ^
- Call: one of the supported functions applied to arguments

Nodes are frozen dataclasses; a tree is never modified after parsing.
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

# Names with a fixed meaning in every expression
CONSTANTS = ("pi", "e")
FUNCTIONS = ("sin", "cos", "tan", "exp", "log", "sqrt")
BINARY_OPERATORS = ("+", "-", "*", "/", "^")
UNARY_OPERATORS = ("-", "+")


@dataclass(frozen=True)
class Literal:
    value: float


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Call:
    func: str
    args: Tuple["Node", ...]


Node = Union[Literal, Variable, UnaryOp, BinaryOp, Call]


def _children(node: Node) -> Tuple[Node, ...]:
    if isinstance(node, UnaryOp):
        return (node.operand,)
    if isinstance(node, BinaryOp):
        return (node.left, node.right)
    if isinstance(node, Call):
        return node.args
    return ()


def walk(node: Node):
    """Yield every node of the tree, parents before children."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(_children(current)))


def depth(node: Node) -> int:
    """
    Number of nodes on the longest root-to-leaf path.

    Examples
    --------
    >>> depth(Variable("x"))
    1
    >>> depth(UnaryOp("-", BinaryOp("+", Variable("x"), Literal(1.0))))
    3
    """
    deepest = 0
    stack = [(node, 1)]
    while stack:
        current, level = stack.pop()
        deepest = max(deepest, level)
        stack.extend((child, level + 1) for child in _children(current))
    return deepest


def free_symbols(node: Node) -> List[str]:
    """
    Identifiers that must be supplied by the evaluation scope.

    Constants (pi, e) are excluded. Names are returned once each, in order of
    first appearance.

    Examples
    --------
    >>> free_symbols(parse("mu * (1 - x^2) * y - x"))
    ['mu', 'x', 'y']
    """
    names: List[str] = []
    for sub in walk(node):
        if isinstance(sub, Variable) and sub.name not in CONSTANTS and sub.name not in names:
            names.append(sub.name)
    return names


__all__ = [
    "CONSTANTS",
    "FUNCTIONS",
    "BINARY_OPERATORS",
    "UNARY_OPERATORS",
    "Literal",
    "Variable",
    "UnaryOp",
    "BinaryOp",
    "Call",
    "Node",
    "walk",
    "depth",
    "free_symbols",
]
