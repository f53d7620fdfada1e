"""Dice-notation grammar.

An expression is one term, optionally paired with a second term::

    expression := term (('+' | '-') term)?
    term       := count? 'd' sides (('+' | '-') digits?)?

An empty count means one die, an explicit ``0`` means no dice, and a modifier
operator with no digits means a modifier of zero. Examples: ``d8-1``,
``3d4+8``, ``2d20+``, ``1d12+3+1d8``, ``0d4+8``.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from dicebag.config import settings
from dicebag.errors import InvalidExpressionError, InvalidOperatorError


def _term(suffix: str = "") -> str:
    return (
        rf"(?P<count{suffix}>[0-9]*)d(?P<sides{suffix}>[0-9]+)"
        rf"(?:(?P<mod_op{suffix}>[+-])(?P<mod_val{suffix}>[0-9]*))?"
    )


_EXPRESSION = rf"{_term()}(?:(?P<pair_op>[+-]){_term('2')})?"

EXPRESSION_RE = re.compile(_EXPRESSION)
CONTAINS_EXPRESSION_RE = re.compile(rf"\s*{_EXPRESSION}\s*")
BRACED_EXPRESSION_RE = re.compile(rf"{{{{\s*{_EXPRESSION}\s*}}}}")


class Operator(str, enum.Enum):
    """Arithmetic operator used by modifiers and by term pairs."""

    add = "+"
    subtract = "-"

    @classmethod
    def parse(cls, symbol: str) -> Operator:
        try:
            return cls(symbol)
        except ValueError:
            raise InvalidOperatorError(f"invalid operator: {symbol!r}") from None

    def apply(self, left: int, right: int) -> int:
        if self is Operator.add:
            return left + right
        return left - right


@dataclass(frozen=True)
class DieSpec:
    count: int
    sides: int


@dataclass(frozen=True)
class Modifier:
    operator: Operator
    value: int


@dataclass(frozen=True)
class Term:
    die: DieSpec
    modifier: Modifier | None = None


@dataclass(frozen=True)
class Expression:
    """A parsed expression: the primary term and an optional paired term."""

    primary: Term
    pair_operator: Operator | None = None
    secondary: Term | None = None

    @property
    def is_pair(self) -> bool:
        return self.secondary is not None


def is_valid(text: str) -> bool:
    """Return True if the whole of ``text`` is a roll expression."""
    return EXPRESSION_RE.fullmatch(text) is not None


def count_occurrences(text: str) -> int:
    """Count non-overlapping roll expressions found anywhere in free text."""
    return sum(1 for _ in CONTAINS_EXPRESSION_RE.finditer(text))


def _literal(digits: str, limit: int | None = None) -> int:
    try:
        value = int(digits)
    except ValueError:
        raise InvalidExpressionError(f"unparseable number: {digits[:20]!r}") from None
    if limit is not None and value > limit:
        raise InvalidExpressionError(f"number too large: {value} (max {limit})")
    return value


def _parse_term(match: re.Match[str], suffix: str = "") -> Term:
    count_token = match.group(f"count{suffix}")
    count = 1 if count_token == "" else _literal(count_token, settings.max_dice)
    sides = _literal(match.group(f"sides{suffix}"), settings.max_sides)

    modifier = None
    mod_op = match.group(f"mod_op{suffix}")
    if mod_op is not None:
        mod_val = match.group(f"mod_val{suffix}")
        modifier = Modifier(Operator.parse(mod_op), _literal(mod_val) if mod_val else 0)

    return Term(DieSpec(count, sides), modifier)


def parse(text: str) -> Expression:
    """Parse a prefix-free roll expression.

    Raises:
        InvalidExpressionError: If ``text`` does not match the grammar or a
            numeric literal is out of range.
    """
    match = EXPRESSION_RE.fullmatch(text)
    if match is None:
        raise InvalidExpressionError(f"not a valid roll expression: {text!r}")

    primary = _parse_term(match)
    pair_op = match.group("pair_op")
    if pair_op is None:
        return Expression(primary)
    return Expression(primary, Operator.parse(pair_op), _parse_term(match, "2"))
