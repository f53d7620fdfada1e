"""Pass/fail checks of a rolled total against a target number."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from dicebag.errors import ErrorKind
from dicebag.evaluator import evaluate
from dicebag.sampler import Sampler


@dataclass
class ChallengeResult:
    succeeded: bool
    total: int = 0
    found: list[int] = field(default_factory=list)
    error: ErrorKind | None = None
    message: str | None = None


def roll_challenge(
    expression: str,
    against: int,
    equal_succeeds: bool = False,
    alert_on: Iterable[int] = (),
    sampler: Sampler | None = None,
) -> ChallengeResult:
    """Roll ``expression`` and compare its total with ``against``.

    The roll succeeds when the total is greater than ``against``, or equal to
    it when ``equal_succeeds`` is set. ``found`` lists every rolled die whose
    value appears in ``alert_on``, in roll order.

    Args:
        expression: Roll expression, e.g. ``"1d20+5"``.
        against: Target number to beat.
        equal_succeeds: Whether matching the target counts as success.
        alert_on: Die values of interest (e.g. natural 1s and 20s).
        sampler: Random source; a wall-clock-seeded one when omitted.
    """
    result = evaluate(expression, sampler)
    if not result.ok:
        return ChallengeResult(succeeded=False, error=result.error, message=result.message)

    succeeded = result.total > against or (equal_succeeds and result.total == against)
    watched = set(alert_on)
    found = [value for value in result.rolls if value in watched]
    return ChallengeResult(succeeded=succeeded, total=result.total, found=found)
