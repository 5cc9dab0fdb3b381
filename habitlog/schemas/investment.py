"""
Investment schemas.

POST   /investments/goals                 → GoalCreateRequest → GoalResponse
PATCH  /investments/goals/{id}            → GoalUpdateRequest → GoalResponse
GET    /investments/goals/{id}/progress   → GoalProgressResponse
GET    /investments/progress              → TotalProgressResponse
POST   /investments/entries               → InvestmentEntryRequest → InvestmentEntryResponse
"""
from typing import Optional

from pydantic import BaseModel, Field

from habitlog.services.units import MAX_AMOUNT


class GoalCreateRequest(BaseModel):
    asset: str = Field(min_length=1, max_length=128, examples=["VWRL"])
    currently_held: int = Field(ge=0, le=MAX_AMOUNT)
    target: int = Field(ge=0, le=MAX_AMOUNT)


class GoalUpdateRequest(BaseModel):
    currently_held: int = Field(ge=0, le=MAX_AMOUNT)
    target: int = Field(ge=0, le=MAX_AMOUNT)


class GoalResponse(BaseModel):
    id: int
    asset: str
    currently_held: int
    target: int
    progress: int = Field(description="min(100, held / target * 100); 0 when target is 0.")


class GoalListResponse(BaseModel):
    total: int
    items: list[GoalResponse]


class GoalProgressResponse(BaseModel):
    goal_id: int
    progress: Optional[int] = None


class TotalProgressResponse(BaseModel):
    goals: int
    progress: int = Field(description="Mean progress across goals.")


class InvestmentEntryRequest(BaseModel):
    date: int = Field(ge=0, le=MAX_AMOUNT, description="Nanoseconds since the Unix epoch.")
    asset: str = Field(min_length=1, max_length=128)
    amount: int = Field(ge=0, le=MAX_AMOUNT)
    notes: str = Field(default="", max_length=5_000)


class InvestmentEntryResponse(BaseModel):
    id: int
    date: int
    asset: str
    amount: int
    notes: str


class InvestmentEntryListResponse(BaseModel):
    total: int
    items: list[InvestmentEntryResponse]
