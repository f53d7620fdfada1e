"""Pydantic request and response models for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RollRequest(BaseModel):
    expression: str = Field(
        min_length=1,
        description="Roll expression, optionally prefixed (e.g. '2d6+3', 'dropL:4d6').",
    )


class RollResponse(BaseModel):
    expression: str
    rolls: list[int] = Field(description="Primary term dice followed by paired term dice.")
    total: int


class ValidationResponse(BaseModel):
    expression: str
    valid: bool


class ChallengeRequest(BaseModel):
    expression: str = Field(min_length=1)
    against: int = Field(description="Target number the total must beat.")
    equal_succeeds: bool = Field(default=False, description="Whether a tie succeeds.")
    alert_on: list[int] = Field(
        default_factory=list, description="Die values to report when rolled."
    )


class ChallengeResponse(BaseModel):
    expression: str
    succeeded: bool
    total: int
    found: list[int]


class RenderRequest(BaseModel):
    text: str = Field(description="Free text with {{expr}} placeholders.")


class RenderResponse(BaseModel):
    text: str


class SaveDiceRequest(BaseModel):
    expression: str = Field(min_length=1)


class DiceEntry(BaseModel):
    name: str
    expression: str


class DiceListResponse(BaseModel):
    set_name: str
    dice: list[DiceEntry]
