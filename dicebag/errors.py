"""Error kinds surfaced by the dice engine and its collaborators."""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    """Tag identifying why an evaluation or set operation failed."""

    invalid_expression = "invalid_expression"
    invalid_operator = "invalid_operator"
    invalid_die_count = "invalid_die_count"
    invalid_die_sides = "invalid_die_sides"
    empty_dice_set = "empty_dice_set"
    dice_not_found = "dice_not_found"


class DiceError(ValueError):
    """Base class for every dice failure. ``kind`` names the failure."""

    kind: ErrorKind
    default_message = "dice error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidExpressionError(DiceError):
    kind = ErrorKind.invalid_expression
    default_message = "not a valid roll expression"


class InvalidOperatorError(DiceError):
    kind = ErrorKind.invalid_operator
    default_message = "invalid operator"


class InvalidDieCountError(DiceError):
    kind = ErrorKind.invalid_die_count
    default_message = "invalid number of dice"


class InvalidDieSidesError(DiceError):
    kind = ErrorKind.invalid_die_sides
    default_message = "invalid number of sides"


class EmptyDiceSetError(DiceError):
    kind = ErrorKind.empty_dice_set
    default_message = "you do not have any dice in your set"


class DiceNotFoundError(DiceError):
    kind = ErrorKind.dice_not_found
    default_message = "dice not found"


_BY_KIND: dict[ErrorKind, type[DiceError]] = {
    cls.kind: cls
    for cls in (
        InvalidExpressionError,
        InvalidOperatorError,
        InvalidDieCountError,
        InvalidDieSidesError,
        EmptyDiceSetError,
        DiceNotFoundError,
    )
}


def error_for(kind: ErrorKind, message: str | None = None) -> DiceError:
    """Build the exception instance matching an error kind."""
    return _BY_KIND[kind](message)
