"""Roll, validate, challenge and render routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dicebag.challenge import roll_challenge
from dicebag.dependencies import get_sampler, http_error
from dicebag.evaluator import evaluate, validate
from dicebag.sampler import Sampler
from dicebag.schemas import (
    ChallengeRequest,
    ChallengeResponse,
    RenderRequest,
    RenderResponse,
    RollRequest,
    RollResponse,
    ValidationResponse,
)
from dicebag.substitution import roll_string

router = APIRouter()


@router.get("/validate")
async def validate_expression(expression: str) -> ValidationResponse:
    return ValidationResponse(expression=expression, valid=validate(expression))


@router.post("/roll")
async def roll(body: RollRequest, sampler: Sampler = Depends(get_sampler)) -> RollResponse:
    """Evaluate an expression. Returns 422 with the error kind when it is invalid."""
    result = evaluate(body.expression.strip(), sampler)
    if result.error is not None:
        raise http_error(result.error, result.message)
    return RollResponse(expression=body.expression, rolls=result.rolls, total=result.total)


@router.post("/challenge")
async def challenge(
    body: ChallengeRequest, sampler: Sampler = Depends(get_sampler)
) -> ChallengeResponse:
    result = roll_challenge(
        body.expression.strip(),
        body.against,
        equal_succeeds=body.equal_succeeds,
        alert_on=body.alert_on,
        sampler=sampler,
    )
    if result.error is not None:
        raise http_error(result.error, result.message)
    return ChallengeResponse(
        expression=body.expression,
        succeeded=result.succeeded,
        total=result.total,
        found=result.found,
    )


@router.post("/render")
async def render(body: RenderRequest, sampler: Sampler = Depends(get_sampler)) -> RenderResponse:
    return RenderResponse(text=roll_string(body.text, sampler))
