"""
Monthly target schemas.

GET /targets/{habit_id}/{year}/{month}  → MonthlyTargetResponse
PUT /targets/{habit_id}/{year}/{month}  → MonthlyTargetRequest → MonthlyTargetResponse
GET /targets?month=&year=               → TargetOverviewResponse
"""
from typing import Optional

from pydantic import BaseModel, Field

from habitlog.schemas.common import AmountIn


class MonthlyTargetRequest(BaseModel):
    amount: AmountIn = Field(
        description="Target volume. Time habits accept seconds or duration text.",
        examples=[500, "30 min"],
    )


class MonthlyTargetResponse(BaseModel):
    habit_id: str
    month: int
    year: int
    amount: Optional[int] = Field(default=None, description="Resolved target; null when none applies.")
    override: Optional[int] = Field(default=None, description="Manually set value, if any.")
    source: Optional[str] = Field(default=None, description='"manual" | "plan" | null')
    display: str


class TargetOverviewItem(BaseModel):
    habit_id: str
    habit_name: str
    unit: str
    target: Optional[int] = None
    source: Optional[str] = None
    monthly_total: int
    target_display: str
    total_display: str


class TargetOverviewResponse(BaseModel):
    month: int
    year: int
    items: list[TargetOverviewItem]
