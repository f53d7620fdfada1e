"""Lower-level dice primitives.

Each function rolls ``count`` dice with ``sides`` sides through an explicit
:class:`~dicebag.sampler.Sampler`. These are callable on their own, so they
check their arguments even though a parsed expression can never carry a
negative count or side total.
"""

from __future__ import annotations

from dicebag.errors import InvalidDieCountError, InvalidDieSidesError
from dicebag.expressions import Operator
from dicebag.sampler import Sampler


def _check(count: int, sides: int) -> None:
    if count < 0:
        raise InvalidDieCountError(f"invalid number of dice: {count}")
    if sides < 0:
        raise InvalidDieSidesError(f"invalid number of sides: {sides}")


def roll(count: int, sides: int, sampler: Sampler) -> tuple[list[int], int]:
    """Roll the dice and return (individual rolls, sum).

    Raises:
        InvalidDieCountError: If ``count`` is negative.
        InvalidDieSidesError: If ``sides`` is negative.
    """
    _check(count, sides)
    rolls = sampler.n_range(count, 1, sides, unique=False)
    return rolls, sum(rolls)


def modify(value: int, operator: str | Operator, amount: int) -> int:
    """Apply ``operator amount`` to ``value``.

    Raises:
        InvalidOperatorError: If ``operator`` is not ``+`` or ``-``.
    """
    return Operator.parse(operator).apply(value, amount)


def roll_and_modify(
    count: int, sides: int, operator: str | Operator, amount: int, sampler: Sampler
) -> tuple[list[int], int, int]:
    """Roll the dice, then apply a modifier.

    Returns:
        Tuple of (individual rolls, unmodified sum, modified sum).

    Raises:
        InvalidDieCountError: If ``count`` is negative.
        InvalidDieSidesError: If ``sides`` is negative.
        InvalidOperatorError: If ``operator`` is not ``+`` or ``-``.
    """
    _check(count, sides)
    op = Operator.parse(operator)
    rolls, total = roll(count, sides, sampler)
    return rolls, total, op.apply(total, amount)


def roll_max(count: int, sides: int, sampler: Sampler) -> tuple[list[int], int]:
    """Roll the dice and return (individual rolls, highest roll); 0 for no dice."""
    rolls, _ = roll(count, sides, sampler)
    return rolls, max(rolls, default=0)


def roll_min(count: int, sides: int, sampler: Sampler) -> tuple[list[int], int]:
    """Roll the dice and return (individual rolls, lowest roll); 0 for no dice."""
    rolls, _ = roll(count, sides, sampler)
    return rolls, min(rolls, default=0)
