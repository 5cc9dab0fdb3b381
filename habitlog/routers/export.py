"""
Export router.

GET /export?start=&end=[&habit_id=...]
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from habitlog.core.principal import get_principal
from habitlog.db.base import get_db
from habitlog.routers.serializers import (
    diary_to_response,
    goal_to_response,
    habit_to_response,
    investment_entry_to_response,
    record_fields,
)
from habitlog.schemas.export import ExportRecordResponse, ExportResponse, ExportTargetResponse
from habitlog.schemas.profile import ProfileResponse
from habitlog.services.export import export_range

router = APIRouter(prefix="/export", tags=["export"])


@router.get("", response_model=ExportResponse, summary="Snapshot of the caller's data for a report")
def export(
    start: date = Query(examples=["2024-06-01"]),
    end: date = Query(examples=["2024-06-30"]),
    habit_id: Optional[list[str]] = Query(
        default=None,
        description="Restrict to these habits (repeatable). Omit for all habits.",
    ),
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    """
    Read-only snapshot: profile, habits, records in [start, end], monthly
    overrides for the months the range touches, diary entries in range and
    all investment data.

    Bounds are used as given; a reversed range yields no dated rows.
    """
    snap = export_range(db, owner, start, end, habit_ids=habit_id)
    return ExportResponse(
        start=str(snap.start),
        end=str(snap.end),
        profile=ProfileResponse(name=snap.profile.name) if snap.profile else None,
        habits=[habit_to_response(h) for h in snap.habits],
        records=[
            ExportRecordResponse(**record_fields(r.record), current_habit_name=r.current_habit_name)
            for r in snap.records
        ],
        monthly_targets=[
            ExportTargetResponse(habit_id=t.habit_id, month=t.month, year=t.year, amount=t.amount)
            for t in snap.monthly_targets
        ],
        diary_entries=[diary_to_response(e) for e in snap.diary_entries],
        investment_goals=[goal_to_response(g) for g in snap.investment_goals],
        investment_entries=[investment_entry_to_response(e) for e in snap.investment_entries],
    )
