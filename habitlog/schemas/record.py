"""
Completion ledger schemas.

PUT /records/{habit_id}/{year}/{month}/{day}  → ToggleRequest → ToggleResponse
GET /records?month=&year=                     → RecordListResponse
"""
from typing import Optional

from pydantic import BaseModel, Field

from habitlog.schemas.common import AmountIn, HabitUnitOut


class ToggleRequest(BaseModel):
    completed: bool = Field(
        default=True,
        description="Intended state. false removes the day's record.",
    )
    amount: AmountIn = Field(
        default=None,
        description=(
            "Amount for the day. Time habits accept seconds or text such as "
            '"1:15" or "2 min 30 sec". Omit to use the habit default.'
        ),
        examples=[35, "1 min 15 sec"],
    )


class RecordResponse(BaseModel):
    habit_id: str
    habit_name: str = Field(description="Habit name when the record was written.")
    day: int
    month: int
    year: int
    completed_at: Optional[str] = None
    amount: Optional[int] = None
    unit: HabitUnitOut


class ToggleResponse(BaseModel):
    completed: bool
    record: Optional[RecordResponse] = None


class RecordListResponse(BaseModel):
    month: int
    year: int
    total: int
    items: list[RecordResponse]
