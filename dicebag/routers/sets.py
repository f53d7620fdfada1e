"""Named dice set routes.

These handlers are sync so FastAPI runs them in its threadpool; the sets
guard themselves with a reader-writer lock. Only saving dice creates a set;
the other routes treat an unknown set as an empty one.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from dicebag.dependencies import get_registry, get_sampler, http_error, http_error_from
from dicebag.dice_set import DiceSet, SetRegistry
from dicebag.errors import DiceError
from dicebag.sampler import Sampler
from dicebag.schemas import DiceEntry, DiceListResponse, RollResponse, SaveDiceRequest

router = APIRouter(prefix="/sets")


@router.get("/{set_name}/dice")
def list_dice(set_name: str, registry: SetRegistry = Depends(get_registry)) -> DiceListResponse:
    dice_set = registry.find(set_name)
    entries = dice_set.list() if dice_set is not None else []
    return DiceListResponse(
        set_name=set_name,
        dice=[DiceEntry(name=n, expression=e) for n, e in entries],
    )


@router.put("/{set_name}/dice/{name}")
def save_dice(
    set_name: str,
    name: str,
    body: SaveDiceRequest,
    registry: SetRegistry = Depends(get_registry),
) -> DiceEntry:
    expression = body.expression.strip()
    try:
        registry.get(set_name).add(name, expression)
    except DiceError as exc:
        raise http_error_from(exc) from exc
    return DiceEntry(name=name, expression=expression)


@router.delete("/{set_name}/dice/{name}", status_code=204)
def delete_dice(
    set_name: str, name: str, registry: SetRegistry = Depends(get_registry)
) -> Response:
    dice_set = registry.find(set_name)
    if dice_set is None:
        dice_set = DiceSet(set_name)
    try:
        dice_set.remove(name)
    except DiceError as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=204)


@router.post("/{set_name}/dice/{name}/roll")
def roll_dice(
    set_name: str,
    name: str,
    registry: SetRegistry = Depends(get_registry),
    sampler: Sampler = Depends(get_sampler),
) -> RollResponse:
    dice_set = registry.find(set_name)
    if dice_set is None:
        dice_set = DiceSet(set_name)
    expression, result = dice_set.roll_entry(name, sampler)
    if result.error is not None:
        raise http_error(result.error, result.message)
    return RollResponse(expression=expression or "", rolls=result.rolls, total=result.total)
