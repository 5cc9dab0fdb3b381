"""
Habit registry schemas.

POST  /habits                         → HabitCreateRequest → HabitResponse
PATCH /habits/{id}/name               → RenameRequest
PATCH /habits/{id}/weekly-target      → WeeklyTargetRequest
PATCH /habits/{id}/unit               → UnitRequest
PATCH /habits/{id}/default-amount     → DefaultAmountRequest
GET   /habits/{id}/lifetime-total     → LifetimeTotalResponse
"""
from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, Field, field_validator

from habitlog.schemas.common import AmountIn, HabitUnitIn, HabitUnitOut


def _strip_name(v):
    stripped = v.strip() if isinstance(v, str) else v
    if not stripped:
        raise ValueError("name must not be empty after stripping whitespace")
    return stripped


class HabitCreateRequest(BaseModel):
    name: Annotated[str, Field(min_length=1, max_length=256, examples=["Push-ups"])]
    weekly_target: int = Field(ge=1, le=7, description="Times per week.", examples=[5])
    unit: HabitUnitIn = Field(default_factory=lambda: HabitUnitIn(kind="reps"))
    default_amount: AmountIn = Field(
        default=None,
        description="Pre-filled amount when a day is completed without one.",
        examples=[20, "1:30"],
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v):
        return _strip_name(v)


class RenameRequest(BaseModel):
    name: Annotated[str, Field(min_length=1, max_length=256)]

    @field_validator("name", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v):
        return _strip_name(v)


class WeeklyTargetRequest(BaseModel):
    weekly_target: int = Field(ge=1, le=7)


class UnitRequest(BaseModel):
    unit: HabitUnitIn


class DefaultAmountRequest(BaseModel):
    default_amount: AmountIn = None


class HabitResponse(BaseModel):
    id: str
    name: str
    weekly_target: int
    unit: HabitUnitOut
    default_amount: Optional[int] = None
    created_at: str


class LifetimeTotalResponse(BaseModel):
    habit_id: str
    total: int = Field(description="Sum of every recorded amount for the habit.")
