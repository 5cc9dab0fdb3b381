"""
Statistics router. Everything is recomputed from the ledger on each call.

GET /stats/report?start=&end=
GET /stats/volume?month=&year=
GET /stats/consistency?month=&year=
"""
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from habitlog.core.principal import get_principal
from habitlog.db.base import get_db
from habitlog.routers.serializers import volume_to_response
from habitlog.schemas.stats import (
    ConsistencyResponse,
    DailyStatsResponse,
    EnergyPointResponse,
    HabitStatsResponse,
    ReportResponse,
    VolumeResponse,
)
from habitlog.services.diary import list_diary_entries
from habitlog.services.habits import list_habits
from habitlog.services.ledger import list_for_month, list_for_range
from habitlog.services.stats import (
    daily_consistency,
    energy_vs_consistency,
    check_range_length,
    normalize_range,
    report_stats,
    volume_stats,
)

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/report", response_model=ReportResponse, summary="Completion report for a date range")
def report(
    start: date = Query(description="First day (inclusive).", examples=["2024-06-01"]),
    end: date = Query(description="Last day (inclusive).", examples=["2024-06-30"]),
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    """
    Frequency and volume statistics over [start, end].

    Reversed bounds are swapped. Per habit, `expected = ceil(weekly_target *
    days / 7)`; every percentage is clamped to 0–100. Ranges longer than
    3660 days are rejected with 422.
    """
    start, end = normalize_range(start, end)
    check_range_length(start, end)
    habits = list_habits(db, owner)
    records = list_for_range(db, owner, start, end)
    result = report_stats(habits, records, start, end)
    return ReportResponse(
        start=str(result.start),
        end=str(result.end),
        overall_percentage=result.overall_percentage,
        total_completed=result.total_completed,
        total_expected=result.total_expected,
        habit_stats=[
            HabitStatsResponse(
                habit_id=s.habit_id,
                name=s.name,
                percentage=s.percentage,
                completed=s.completed,
                expected=s.expected,
                weekly_target=s.weekly_target,
            )
            for s in result.habit_stats
        ],
        daily_stats=[
            DailyStatsResponse(
                index=d.index, date=str(d.day), percentage=d.percentage, completed=d.completed
            )
            for d in result.daily_stats
        ],
        volume_stats=[volume_to_response(v) for v in result.volume_stats],
    )


@router.get("/volume", response_model=VolumeResponse, summary="Daily volume per habit for a month")
def volume(
    month: int = Query(ge=1, le=12),
    year: int = Query(ge=1),
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    habits = list_habits(db, owner)
    records = list_for_month(db, owner, month, year)
    return VolumeResponse(
        month=month,
        year=year,
        items=[volume_to_response(v) for v in volume_stats(habits, records)],
    )


@router.get(
    "/consistency",
    response_model=ConsistencyResponse,
    summary="Daily consistency and its correlation with diary energy",
)
def consistency(
    month: int = Query(ge=1, le=12),
    year: int = Query(ge=1),
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    habits = list_habits(db, owner)
    records = list_for_month(db, owner, month, year)
    diary = [(e.date_key, e.title) for e in list_diary_entries(db, owner)]
    return ConsistencyResponse(
        month=month,
        year=year,
        consistency=daily_consistency(habits, records),
        energy_vs_consistency=[
            EnergyPointResponse(date=p.date, energy=p.energy, consistency=p.consistency)
            for p in energy_vs_consistency(diary, habits, records)
        ],
    )
