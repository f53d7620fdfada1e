"""Roll-expression evaluation.

Turns a raw expression such as ``dropL:4d6+2`` into individual die results
and a total. An expression may start with one mode prefix:

- ``max:`` / ``min:`` keep only the highest / lowest die (single term only)
- ``half:`` / ``dub:`` halve (truncating toward zero) / double the final total
- ``dropL:`` / ``dropH:`` subtract the lowest / highest die of the first term

Failures are returned as values: :func:`evaluate` never raises a
:class:`~dicebag.errors.DiceError`, it reports one in ``RollResult.error``.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from dicebag.errors import DiceError, ErrorKind, InvalidExpressionError, error_for
from dicebag.expressions import Modifier, Term, parse
from dicebag.rolls import roll, roll_and_modify, roll_max, roll_min
from dicebag.sampler import Sampler

logger = logging.getLogger(__name__)


class Prefix(str, enum.Enum):
    """Mode token at the start of an expression."""

    none = ""
    max = "max:"
    min = "min:"
    half = "half:"
    double = "dub:"
    drop_lowest = "dropL:"
    drop_highest = "dropH:"


# Checked in this order; the first literal found wins.
_PREFIX_ORDER = (
    Prefix.max,
    Prefix.min,
    Prefix.half,
    Prefix.double,
    Prefix.drop_lowest,
    Prefix.drop_highest,
)

_SINGLE_TERM_PREFIXES = (Prefix.max, Prefix.min)


@dataclass
class RollResult:
    """Outcome of one evaluation.

    ``rolls`` holds the primary term's dice followed by the paired term's dice.
    On failure ``rolls`` is empty, ``total`` is 0 and ``error`` names the kind.
    """

    rolls: list[int] = field(default_factory=list)
    total: int = 0
    error: ErrorKind | None = None
    message: str | None = None

    @classmethod
    def failure(cls, exc: DiceError) -> RollResult:
        return cls(error=exc.kind, message=str(exc))

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> RollResult:
        """Return self, or raise the DiceError matching ``error``."""
        if self.error is not None:
            raise error_for(self.error, self.message)
        return self


def split_prefix(text: str) -> tuple[Prefix, str]:
    """Return the recognised prefix (if any) and the rest of the text."""
    for prefix in _PREFIX_ORDER:
        if text.startswith(prefix.value):
            return prefix, text[len(prefix.value) :]
    return Prefix.none, text


def validate(text: str) -> bool:
    """Return True if ``text`` (prefix included) is an evaluable expression."""
    prefix, remainder = split_prefix(text)
    try:
        expression = parse(remainder)
    except DiceError:
        return False
    return not (expression.is_pair and prefix in _SINGLE_TERM_PREFIXES)


def _apply_modifier(total: int, modifier: Modifier | None) -> int:
    if modifier is None:
        return total
    return modifier.operator.apply(total, modifier.value)


def _roll_term(term: Term, sampler: Sampler) -> tuple[list[int], int]:
    if term.modifier is None:
        return roll(term.die.count, term.die.sides, sampler)
    rolls, _, modified = roll_and_modify(
        term.die.count, term.die.sides, term.modifier.operator, term.modifier.value, sampler
    )
    return rolls, modified


def _halve(total: int) -> int:
    return -(-total // 2) if total < 0 else total // 2


def _evaluate(text: str, sampler: Sampler) -> RollResult:
    prefix, remainder = split_prefix(text)
    expression = parse(remainder)

    if expression.is_pair and prefix in _SINGLE_TERM_PREFIXES:
        raise InvalidExpressionError(f"{prefix.value} cannot be used with a paired expression")

    primary = expression.primary
    if prefix in _SINGLE_TERM_PREFIXES:
        pick = roll_max if prefix is Prefix.max else roll_min
        rolls, extreme = pick(primary.die.count, primary.die.sides, sampler)
        return RollResult(rolls, _apply_modifier(extreme, primary.modifier))

    rolls, total = _roll_term(primary, sampler)

    # Drop rules only look at the primary term's dice.
    if prefix is Prefix.drop_lowest:
        total -= min(rolls, default=0)
    elif prefix is Prefix.drop_highest:
        total -= max(rolls, default=0)

    if expression.secondary is not None and expression.pair_operator is not None:
        second_rolls, second_total = _roll_term(expression.secondary, sampler)
        total = expression.pair_operator.apply(total, second_total)
        rolls = rolls + second_rolls

    if prefix is Prefix.half:
        total = _halve(total)
    elif prefix is Prefix.double:
        total *= 2

    return RollResult(rolls, total)


def evaluate(text: str, sampler: Sampler | None = None) -> RollResult:
    """Evaluate a roll expression.

    Args:
        text: Expression such as ``"2d6+3"``, ``"max:2d20"`` or ``"d12+3-d8"``.
        sampler: Random source to roll with. A fresh wall-clock-seeded Sampler
            is created when omitted.

    Returns:
        RollResult with the rolls and total, or with ``error`` set.
    """
    if sampler is None:
        sampler = Sampler()
    try:
        result = _evaluate(text, sampler)
    except DiceError as exc:
        logger.debug("Rejected roll expression %r: %s", text, exc)
        return RollResult.failure(exc)
    logger.debug("Rolled %r: %s = %d", text, result.rolls, result.total)
    return result
