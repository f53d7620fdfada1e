"""FastAPI dependencies for dicebag."""

from __future__ import annotations

from fastapi import HTTPException

from dicebag.config import settings
from dicebag.dice_set import SetRegistry
from dicebag.errors import DiceError, ErrorKind
from dicebag.sampler import Sampler

registry = SetRegistry()

_NOT_FOUND_KINDS = (ErrorKind.empty_dice_set, ErrorKind.dice_not_found)


def get_sampler() -> Sampler:
    """Return a fresh Sampler for this request.

    Seeded from ``settings.sampler_seed`` when configured, else the wall clock.
    """
    return Sampler(settings.sampler_seed)


def get_registry() -> SetRegistry:
    return registry


def http_error(kind: ErrorKind, message: str | None) -> HTTPException:
    """Map a dice failure to the HTTP error the routers raise."""
    status_code = 404 if kind in _NOT_FOUND_KINDS else 422
    return HTTPException(
        status_code=status_code,
        detail={"kind": kind.value, "message": message or kind.value},
    )


def http_error_from(exc: DiceError) -> HTTPException:
    return http_error(exc.kind, str(exc))
