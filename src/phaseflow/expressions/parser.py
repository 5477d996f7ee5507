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
Expression Parser

Recursive-descent parser turning equation text such as
``mu * (1 - x^2) * y - x`` into an AST (see phaseflow.expressions.nodes).

Grammar (lowest to highest precedence)
--------------------------------------
    expression     := additive END
    additive       := multiplicative (("+" | "-") multiplicative)*
    multiplicative := unary (("*" | "/") unary)*
    unary          := ("+" | "-") unary | power
    power          := primary ("^" unary)?
    primary        := NUMBER | NAME "(" arguments ")" | NAME | "(" additive ")"

``^`` is right-associative and binds tighter than a leading sign, so
``-x^2`` is ``-(x^2)`` and ``2^-1`` is ``2^(-1)``.

Identifiers are not checked against any scope here: parameters are only
known at evaluation time. Function names are checked, since the set of
functions is fixed.
"""

import re
from typing import List, NamedTuple, Optional

from phaseflow.exceptions import ParseError
from phaseflow.expressions.nodes import (
    FUNCTIONS,
    BinaryOp,
    Call,
    Literal,
    Node,
    UnaryOp,
    Variable,
    depth,
)

FUNCTION_ARITY = {name: 1 for name in FUNCTIONS}

# Trees deeper than this are rejected so compiling and evaluating them
# stays within the interpreter recursion limit
MAX_DEPTH = 200

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<number>(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?)
  | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<op>[-+*/^(),])
    """,
    re.VERBOSE,
)


class Token(NamedTuple):
    kind: str  # 'number', 'name', 'op' or 'end'
    text: str
    pos: int


def tokenize(text: str) -> List[Token]:
    """
    Split expression text into tokens.

    Raises
    ------
    ParseError
        On any character that cannot start a token
    """
    tokens: List[Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise ParseError(f"Unexpected character '{text[pos]}'", text, pos)
        kind = match.lastgroup
        if kind != "ws":
            tokens.append(Token(kind, match.group(), pos))
        pos = match.end()
    tokens.append(Token("end", "", len(text)))
    return tokens


class Parser:
    """
    Single-use recursive-descent parser.

    Examples
    --------
    >>> Parser("x + 2").parse()
    BinaryOp(op='+', left=Variable(name='x'), right=Literal(value=2.0))
    """

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0

    # ========================================================================
    # Token helpers
    # ========================================================================

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _accept(self, *ops: str) -> Optional[Token]:
        if self.current.kind == "op" and self.current.text in ops:
            return self._advance()
        return None

    def _expect(self, op: str) -> Token:
        token = self._accept(op)
        if token is None:
            self._fail(f"Expected '{op}'")
        return token

    def _fail(self, message: str, token: Optional[Token] = None):
        token = token or self.current
        if token.kind == "end":
            raise ParseError(f"{message} but reached end of input", self.text, token.pos)
        raise ParseError(f"{message}, found '{token.text}'", self.text, token.pos)

    # ========================================================================
    # Grammar
    # ========================================================================

    def parse(self) -> Node:
        if self.current.kind == "end":
            raise ParseError("Empty expression", self.text, 0)
        node = self._additive()
        if self.current.kind != "end":
            self._fail("Unexpected token")
        return node

    def _additive(self) -> Node:
        node = self._multiplicative()
        while True:
            token = self._accept("+", "-")
            if token is None:
                return node
            node = BinaryOp(token.text, node, self._multiplicative())

    def _multiplicative(self) -> Node:
        node = self._unary()
        while True:
            token = self._accept("*", "/")
            if token is None:
                return node
            node = BinaryOp(token.text, node, self._unary())

    def _unary(self) -> Node:
        token = self._accept("-", "+")
        if token is not None:
            return UnaryOp(token.text, self._unary())
        return self._power()

    def _power(self) -> Node:
        base = self._primary()
        if self._accept("^") is not None:
            # Exponent goes through _unary so that 2^-1 and 2^3^2 parse
            return BinaryOp("^", base, self._unary())
        return base

    def _primary(self) -> Node:
        token = self.current

        if token.kind == "number":
            self._advance()
            return Literal(float(token.text))

        if token.kind == "name":
            self._advance()
            if self._accept("(") is not None:
                return self._call(token)
            if token.text in FUNCTIONS:
                raise ParseError(
                    f"Function '{token.text}' must be called with arguments", self.text, token.pos
                )
            return Variable(token.text)

        if self._accept("(") is not None:
            node = self._additive()
            self._expect(")")
            return node

        self._fail("Expected a number, name or '('")

    def _call(self, name: Token) -> Node:
        if name.text not in FUNCTIONS:
            raise ParseError(f"Unknown function '{name.text}'", self.text, name.pos)

        args = []
        if self._accept(")") is None:
            args.append(self._additive())
            while self._accept(",") is not None:
                args.append(self._additive())
            self._expect(")")

        expected = FUNCTION_ARITY[name.text]
        if len(args) != expected:
            raise ParseError(
                f"Function '{name.text}' takes {expected} argument(s), got {len(args)}",
                self.text,
                name.pos,
            )
        return Call(name.text, tuple(args))


def parse(text: str) -> Node:
    """
    Parse expression text into an AST.

    Parameters
    ----------
    text : str
        Expression such as ``"-sin(x) - gamma * y"``

    Returns
    -------
    Node
        Root of the tree

    Raises
    ------
    ParseError
        If the text is not a valid expression or is nested deeper than
        ``MAX_DEPTH``

    Examples
    --------
    >>> parse("-x^2")
    UnaryOp(op='-', operand=BinaryOp(op='^', left=Variable(name='x'), right=Literal(value=2.0)))
    """
    if not isinstance(text, str):
        raise ParseError(f"Expression must be a string, got {type(text).__name__}", str(text))
    try:
        tree = Parser(text).parse()
    except RecursionError:
        raise ParseError("Expression nested too deeply", text) from None
    if depth(tree) > MAX_DEPTH:
        raise ParseError("Expression nested too deeply", text)
    return tree


__all__ = ["Token", "tokenize", "Parser", "parse", "FUNCTION_ARITY", "MAX_DEPTH"]
