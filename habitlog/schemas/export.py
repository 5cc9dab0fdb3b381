"""
Export schema.

GET /export?start=&end=[&habit_id=...]  → ExportResponse
"""
from typing import Optional

from pydantic import BaseModel, Field

from habitlog.schemas.diary import DiaryEntryResponse
from habitlog.schemas.habit import HabitResponse
from habitlog.schemas.investment import GoalResponse, InvestmentEntryResponse
from habitlog.schemas.profile import ProfileResponse
from habitlog.schemas.record import RecordResponse


class ExportRecordResponse(RecordResponse):
    current_habit_name: Optional[str] = Field(
        default=None, description="The habit's name today; may differ after a rename."
    )


class ExportTargetResponse(BaseModel):
    habit_id: str
    month: int
    year: int
    amount: int


class ExportResponse(BaseModel):
    start: str
    end: str
    profile: Optional[ProfileResponse] = None
    habits: list[HabitResponse]
    records: list[ExportRecordResponse]
    monthly_targets: list[ExportTargetResponse]
    diary_entries: list[DiaryEntryResponse]
    investment_goals: list[GoalResponse]
    investment_entries: list[InvestmentEntryResponse]
