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
SymPy export of expression trees.

Used for typesetting equations. Trees are converted with ``evaluate=False``
throughout, so the printed form follows what the user typed rather than a
simplified equivalent.

Examples
--------
>>> to_latex(parse("mu * (1 - x^2) * y - x"))
'\\mu \\left(1 - x^{2}\\right) y - x'
"""

from typing import TYPE_CHECKING, Dict

import sympy as sp

from phaseflow.expressions.nodes import BinaryOp, Call, Literal, Node, UnaryOp, Variable

if TYPE_CHECKING:
    from phaseflow.systems.planar_system import PlanarSystem

_SYMPY_FUNCTIONS = {
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "exp": sp.exp,
    "log": sp.log,
    "sqrt": sp.sqrt,
}

_SYMPY_CONSTANTS = {
    "pi": sp.pi,
    "e": sp.E,
}


def _literal(value: float) -> sp.Expr:
    if float(value).is_integer():
        return sp.Integer(int(value))
    return sp.Float(value)


def to_sympy(node: Node) -> sp.Expr:
    """
    Convert an AST to an unevaluated SymPy expression.

    Parameters
    ----------
    node : Node
        Root of the expression tree

    Returns
    -------
    sp.Expr
        Equivalent SymPy expression; free identifiers become real Symbols
    """
    if isinstance(node, Literal):
        return _literal(node.value)

    if isinstance(node, Variable):
        if node.name in _SYMPY_CONSTANTS:
            return _SYMPY_CONSTANTS[node.name]
        return sp.Symbol(node.name, real=True)

    if isinstance(node, UnaryOp):
        operand = to_sympy(node.operand)
        if node.op == "-":
            return sp.Mul(sp.Integer(-1), operand, evaluate=False)
        return operand

    if isinstance(node, BinaryOp):
        left = to_sympy(node.left)
        right = to_sympy(node.right)
        if node.op == "+":
            return sp.Add(left, right, evaluate=False)
        if node.op == "-":
            return sp.Add(left, sp.Mul(sp.Integer(-1), right, evaluate=False), evaluate=False)
        if node.op == "*":
            return sp.Mul(left, right, evaluate=False)
        if node.op == "/":
            return sp.Mul(left, sp.Pow(right, sp.Integer(-1), evaluate=False), evaluate=False)
        if node.op == "^":
            return sp.Pow(left, right, evaluate=False)
        raise ValueError(f"Unknown operator '{node.op}'")

    if isinstance(node, Call):
        fn = _SYMPY_FUNCTIONS[node.func]
        return fn(*[to_sympy(arg) for arg in node.args], evaluate=False)

    raise TypeError(f"Unknown node type {type(node).__name__}")


def to_latex(node: Node) -> str:
    """LaTeX string for a single expression tree."""
    return sp.latex(to_sympy(node))


def system_latex(system: "PlanarSystem") -> Dict[str, str]:
    """
    Typeset both equations of a system.

    Returns
    -------
    dict
        'dx' and 'dy' right-hand sides, plus 'align': a complete
        ``\\begin{align} ... \\end{align}`` block

    Examples
    --------
    >>> system = compile_system("y", "-x")
    >>> print(system_latex(system)["align"])
    \\begin{align}
    \\frac{dx}{dt} &= y \\\\
    \\frac{dy}{dt} &= - x
    \\end{align}
    """
    dx = to_latex(system.dx.tree)
    dy = to_latex(system.dy.tree)
    align = "\n".join(
        [
            r"\begin{align}",
            rf"\frac{{dx}}{{dt}} &= {dx} \\",
            rf"\frac{{dy}}{{dt}} &= {dy}",
            r"\end{align}",
        ]
    )
    return {"dx": dx, "dy": dy, "align": align}


__all__ = ["to_sympy", "to_latex", "system_latex"]
