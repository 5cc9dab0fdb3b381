"""
Monthly targets router.

GET /targets?month=&year=                  : every habit with target + logged volume
GET /targets/{habit_id}/{year}/{month}     : resolved target (override, else plan)
PUT /targets/{habit_id}/{year}/{month}     : set the manual override
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from habitlog.core.principal import get_principal
from habitlog.db.base import get_db
from habitlog.schemas.common import ErrorResponse
from habitlog.schemas.target import (
    MonthlyTargetRequest,
    MonthlyTargetResponse,
    TargetOverviewItem,
    TargetOverviewResponse,
)
from habitlog.services.habits import get_habit
from habitlog.services.targets import (
    display_amount,
    get_monthly_target,
    monthly_target_overview,
    resolve_monthly_target,
    set_monthly_target,
)

router = APIRouter(prefix="/targets", tags=["targets"])


def _target_response(db: Session, owner: str, habit_id: str, month: int, year: int) -> MonthlyTargetResponse:
    habit = get_habit(db, owner, habit_id)
    resolved = resolve_monthly_target(db, owner, habit_id, month, year)
    display = display_amount(habit, resolved.amount)
    return MonthlyTargetResponse(
        habit_id=habit_id,
        month=month,
        year=year,
        amount=resolved.amount,
        override=get_monthly_target(db, owner, habit_id, month, year),
        source=resolved.source,
        display=display,
    )


@router.get("", response_model=TargetOverviewResponse, summary="Targets and volume for a month")
def targets_overview(
    month: int = Query(ge=1, le=12),
    year: int = Query(ge=1),
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    items = [
        TargetOverviewItem(
            habit_id=o.habit_id,
            habit_name=o.habit_name,
            unit=o.unit,
            target=o.target.amount,
            source=o.target.source,
            monthly_total=o.monthly_total,
            target_display=o.target_display,
            total_display=o.total_display,
        )
        for o in monthly_target_overview(db, owner, month, year)
    ]
    return TargetOverviewResponse(month=month, year=year, items=items)


@router.get(
    "/{habit_id}/{year}/{month}",
    response_model=MonthlyTargetResponse,
    responses={404: {"model": ErrorResponse, "description": "Unknown habit."}},
)
def get_target(
    habit_id: str,
    year: int = Path(ge=1),
    month: int = Path(ge=1, le=12),
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    """
    Resolve a habit's target for a month.

    A manual override wins. Otherwise the built-in Steady Climb plan applies to
    push-ups / press-ups, squats and plank; every other habit has no target
    (`amount: null`, displayed as "—").
    """
    return _target_response(db, owner, habit_id, month, year)


@router.put(
    "/{habit_id}/{year}/{month}",
    response_model=MonthlyTargetResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Unknown habit."},
        422: {"description": "Bad amount."},
    },
)
def put_target(
    payload: MonthlyTargetRequest,
    habit_id: str,
    year: int = Path(ge=1),
    month: int = Path(ge=1, le=12),
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    set_monthly_target(db, owner, habit_id, payload.amount, month, year)
    return _target_response(db, owner, habit_id, month, year)
