"""Named dice: a bag of saved roll expressions that can be rolled by name.

A DiceSet may be shared between threads. Rolling and listing take a shared
lock so they can run together; adding and removing take it exclusively.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from dicebag.errors import DiceNotFoundError, EmptyDiceSetError, InvalidExpressionError
from dicebag.evaluator import RollResult, evaluate, validate
from dicebag.sampler import Sampler

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Many concurrent readers or one writer.

    Waiting writers block new readers so a steady stream of rolls cannot
    starve an add or remove.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class DiceSet:
    """Custom dice backed by roll expressions, keyed by name."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._dice: dict[str, str] = {}
        self._lock = ReadWriteLock()

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._dice)

    def __contains__(self, name: object) -> bool:
        with self._lock.read():
            return name in self._dice

    def add(self, name: str, expression: str) -> None:
        """Store ``expression`` under ``name``, replacing any existing entry.

        Raises:
            InvalidExpressionError: If ``expression`` cannot be evaluated. The
                set is left unchanged.
        """
        if not validate(expression):
            raise InvalidExpressionError(f"{expression!r} is not a valid roll expression")
        with self._lock.write():
            self._dice[name] = expression
        logger.info("Added dice %r = %r to set %r", name, expression, self.name)

    def remove(self, name: str) -> None:
        """Remove the dice called ``name``.

        Raises:
            DiceNotFoundError: If there is no such dice.
        """
        with self._lock.write():
            if name not in self._dice:
                raise DiceNotFoundError(f"you do not have any dice named [{name}] in your set")
            del self._dice[name]
        logger.info("Removed dice %r from set %r", name, self.name)

    def get(self, name: str) -> str | None:
        """Return the expression saved as ``name``, or None."""
        with self._lock.read():
            return self._dice.get(name)

    def roll_entry(
        self, name: str, sampler: Sampler | None = None
    ) -> tuple[str | None, RollResult]:
        """Evaluate the expression saved as ``name`` and return it with the result.

        The lookup and the roll happen under one read lock, so the expression
        returned is the one that was rolled. Returns a failed RollResult with
        ``empty_dice_set`` when the set has no dice and ``dice_not_found`` when
        ``name`` is unknown.
        """
        with self._lock.read():
            if not self._dice:
                return None, RollResult.failure(EmptyDiceSetError())
            expression = self._dice.get(name)
            if expression is None:
                return None, RollResult.failure(
                    DiceNotFoundError(f"you do not have any dice named [{name}] in your set")
                )
            return expression, evaluate(expression, sampler)

    def roll(self, name: str, sampler: Sampler | None = None) -> RollResult:
        """Evaluate the expression saved as ``name``; see :meth:`roll_entry`."""
        return self.roll_entry(name, sampler)[1]

    def list(self) -> list[tuple[str, str]]:
        """Return (name, expression) pairs sorted by name."""
        with self._lock.read():
            return sorted(self._dice.items())

    def describe(self) -> str:
        """Return one ``name expression`` line per dice, or ``"no dice"``."""
        entries = self.list()
        if not entries:
            return "no dice"
        return "".join(f"{name} {expression}\n" for name, expression in entries)


class SetRegistry:
    """Dice sets keyed by set name.

    Only :meth:`get` creates sets; :meth:`find` never does.
    """

    def __init__(self) -> None:
        self._sets: dict[str, DiceSet] = {}
        self._lock = threading.Lock()

    def find(self, name: str) -> DiceSet | None:
        with self._lock:
            return self._sets.get(name)

    def get(self, name: str) -> DiceSet:
        with self._lock:
            dice_set = self._sets.get(name)
            if dice_set is None:
                dice_set = self._sets[name] = DiceSet(name)
            return dice_set

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._sets)
