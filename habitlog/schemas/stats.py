"""
Statistics schemas.

GET /stats/report?start=&end=        → ReportResponse
GET /stats/volume?month=&year=       → VolumeResponse
GET /stats/consistency?month=&year=  → ConsistencyResponse
"""
from pydantic import BaseModel, Field


class HabitStatsResponse(BaseModel):
    habit_id: str
    name: str
    percentage: int = Field(description="0–100, clamped.")
    completed: int
    expected: int
    weekly_target: int


class DailyStatsResponse(BaseModel):
    index: int = Field(description="1-based position of the day inside the range.")
    date: str
    percentage: int
    completed: int


class VolumeStatsResponse(BaseModel):
    habit_id: str
    habit_name: str
    unit: str
    daily_volumes: list[int] = Field(description="31 slots, index 0 = day 1 of the month.")
    total_volume: int


class ReportResponse(BaseModel):
    start: str
    end: str
    overall_percentage: int
    total_completed: int
    total_expected: int
    habit_stats: list[HabitStatsResponse]
    daily_stats: list[DailyStatsResponse]
    volume_stats: list[VolumeStatsResponse]


class VolumeResponse(BaseModel):
    month: int
    year: int
    items: list[VolumeStatsResponse]


class EnergyPointResponse(BaseModel):
    date: str
    energy: int
    consistency: int


class ConsistencyResponse(BaseModel):
    month: int
    year: int
    consistency: dict[str, int] = Field(
        description="YYYY-MM-DD → % of expected completions, for days with any completion."
    )
    energy_vs_consistency: list[EnergyPointResponse]
