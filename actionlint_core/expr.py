"""Parsing and analysis of GitHub Actions expressions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_WHITESPACE = " \t\r\n"
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")
_NUMBER = re.compile(r"-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?")
_KEYWORDS = {"true", "false", "null"}


class ExprSyntaxError(ValueError):
    """Raised when an expression cannot be parsed."""

    def __init__(self, message: str, text: str, position: int) -> None:
        super().__init__(f"{message} at offset {position} in {text!r}")
        self.text = text
        self.position = position


class BinOp(Enum):
    """Binary operators, logical and comparative."""

    AND = "&&"
    OR = "||"
    EQ = "=="
    NEQ = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="


class UnOp(Enum):
    """Unary operators. Negation is the only one."""

    NOT = "!"


class Expr:
    """Base class for all expression nodes."""

    __slots__ = ()

    def contexts(self) -> list[str]:
        """Return every well-known context used in this expression.

        Contexts reached through a function call's result (as in
        ``foo().bar``) are not well known and are left out, though the
        call's arguments are still searched.
        """
        return []


@dataclass(frozen=True)
class Number(Expr):
    """A number literal."""

    value: float


@dataclass(frozen=True)
class String(Expr):
    """A string literal, with quote escapes resolved."""

    value: str


@dataclass(frozen=True)
class Boolean(Expr):
    """A boolean literal."""

    value: bool


@dataclass(frozen=True)
class Null(Expr):
    """The ``null`` literal."""


@dataclass(frozen=True)
class Star(Expr):
    """The ``*`` wildcard within an index or context."""


@dataclass(frozen=True)
class Call(Expr):
    """A function call."""

    func: str
    args: tuple[Expr, ...] = ()

    def contexts(self) -> list[str]:
        return [ctx for arg in self.args for ctx in arg.contexts()]


@dataclass(frozen=True)
class Identifier(Expr):
    """One named component of a context, e.g. ``github`` in ``github.actor``."""

    name: str


@dataclass(frozen=True)
class Index(Expr):
    """One index component of a context, e.g. ``[0]`` in ``foo[0]``."""

    expr: Expr


@dataclass(frozen=True)
class Context(Expr):
    """A full context reference together with its source text."""

    raw: str
    components: tuple[Expr, ...]

    def contexts(self) -> list[str]:
        if self.components and isinstance(self.components[0], Call):
            return self.components[0].contexts()
        return [self.raw]


@dataclass(frozen=True)
class BinaryOp(Expr):
    """A binary operation."""

    lhs: Expr
    op: BinOp
    rhs: Expr

    def contexts(self) -> list[str]:
        return self.lhs.contexts() + self.rhs.contexts()


@dataclass(frozen=True)
class UnaryOp(Expr):
    """A unary operation."""

    op: UnOp
    expr: Expr

    def contexts(self) -> list[str]:
        return self.expr.contexts()


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def error(self, message: str) -> ExprSyntaxError:
        return ExprSyntaxError(message, self.text, self.pos)

    def skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def accept(self, token: str) -> bool:
        self.skip_ws()
        if self.text.startswith(token, self.pos):
            self.pos += len(token)
            return True
        return False

    def expect(self, token: str) -> None:
        if not self.accept(token):
            raise self.error(f"expected {token!r}")

    def accept_any(self, tokens: tuple[str, ...]) -> str | None:
        return next((tok for tok in tokens if self.accept(tok)), None)

    def parse_expression(self) -> Expr:
        expr = self.parse_or()
        self.skip_ws()
        if self.pos != len(self.text):
            raise self.error("unexpected trailing input")
        return expr

    def parse_or(self) -> Expr:
        expr = self.parse_and()
        while self.accept("||"):
            expr = BinaryOp(expr, BinOp.OR, self.parse_and())
        return expr

    def parse_and(self) -> Expr:
        expr = self.parse_eq()
        while self.accept("&&"):
            expr = BinaryOp(expr, BinOp.AND, self.parse_eq())
        return expr

    def parse_eq(self) -> Expr:
        expr = self.parse_comp()
        while (token := self.accept_any(("==", "!="))) is not None:
            expr = BinaryOp(expr, BinOp(token), self.parse_comp())
        return expr

    def parse_comp(self) -> Expr:
        expr = self.parse_unary()
        while (token := self.accept_any((">=", "<=", ">", "<"))) is not None:
            expr = BinaryOp(expr, BinOp(token), self.parse_unary())
        return expr

    def parse_unary(self) -> Expr:
        if self.accept("!"):
            return UnaryOp(UnOp.NOT, self.parse_primary())
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        self.skip_ws()
        ch = self.peek()
        if ch == "(":
            self.pos += 1
            expr = self.parse_or()
            self.expect(")")
            return expr
        if ch == "'":
            return self.parse_string()
        number = _NUMBER.match(self.text, self.pos)
        if number:
            self.pos = number.end()
            return Number(float(number.group()))
        word = _IDENTIFIER.match(self.text, self.pos)
        if word:
            following = self.text[word.end() : word.end() + 1]
            if word.group() in _KEYWORDS and following not in (".", "[", "("):
                self.pos = word.end()
                if word.group() == "null":
                    return Null()
                return Boolean(word.group() == "true")
            return self.parse_context()
        raise self.error("expected an expression")

    def parse_string(self) -> String:
        start = self.pos
        self.pos += 1
        parts: list[str] = []
        while True:
            end = self.text.find("'", self.pos)
            if end == -1:
                self.pos = start
                raise self.error("unterminated string")
            parts.append(self.text[self.pos : end])
            if self.text.startswith("''", end):
                parts.append("'")
                self.pos = end + 2
                continue
            self.pos = end + 1
            return String("".join(parts))

    def parse_identifier(self) -> str:
        match = _IDENTIFIER.match(self.text, self.pos)
        if not match:
            raise self.error("expected an identifier")
        self.pos = match.end()
        return match.group()

    def parse_call_args(self) -> tuple[Expr, ...]:
        # The opening parenthesis has already been consumed.
        if self.accept(")"):
            return ()
        args = [self.parse_or()]
        while self.accept(","):
            args.append(self.parse_or())
        self.expect(")")
        return tuple(args)

    def parse_index(self) -> Index:
        # The opening bracket has already been consumed.
        inner: Expr = Star() if self.accept("*") else self.parse_or()
        self.expect("]")
        return Index(inner)

    def parse_context(self) -> Expr:
        start = self.pos
        name = self.parse_identifier()
        components: list[Expr] = []
        if self.peek() == "(":
            self.pos += 1
            components.append(Call(name, self.parse_call_args()))
        else:
            components.append(Identifier(name))

        while True:
            ch = self.peek()
            if ch == ".":
                self.pos += 1
                if self.peek() == "*":
                    self.pos += 1
                    components.append(Star())
                else:
                    components.append(Identifier(self.parse_identifier()))
            elif ch == "[":
                self.pos += 1
                components.append(self.parse_index())
            else:
                break

        if len(components) == 1 and isinstance(components[0], Call):
            return components[0]
        return Context(self.text[start : self.pos], tuple(components))


def parse(text: str) -> Expr:
    """Parse a bare (un-curlied) expression into its syntax tree.

    Raises ExprSyntaxError if the text is not a valid expression.
    """
    return _Parser(text).parse_expression()