"""
Diary schemas.

GET /diary                           → DiaryListResponse
GET /diary/{date_key}                → DiaryEntryResponse | null
PUT /diary/{date_key}                → DiaryEntryRequest      → DiaryEntryResponse
PUT /diary/{date_key}/reflection     → ReflectionRequest      → DiaryEntryResponse
"""
from typing import Optional

from pydantic import BaseModel, Field


class DiaryEntryRequest(BaseModel):
    title: str = Field(default="", max_length=256, examples=["Energy: 4"])
    content: str = Field(default="", max_length=20_000)


class ReflectionRequest(BaseModel):
    energy: int = Field(ge=1, le=5, examples=[3])
    win: str = Field(default="", max_length=5_000)
    friction: str = Field(default="", max_length=5_000)
    investment_mindset: str = Field(default="", max_length=5_000)


class ReflectionOut(BaseModel):
    energy: Optional[int] = None
    win: str
    friction: str
    investment_mindset: str


class DiaryEntryResponse(BaseModel):
    date: str
    title: str
    content: str
    reflection: ReflectionOut


class DiaryListResponse(BaseModel):
    total: int
    items: list[DiaryEntryResponse]
