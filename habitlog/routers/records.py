"""
Completion ledger router.

PUT /records/{habit_id}/{year}/{month}/{day}
GET /records?month=&year=
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from habitlog.core.principal import get_principal
from habitlog.db.base import get_db
from habitlog.schemas.common import ErrorResponse
from habitlog.routers.serializers import record_to_response
from habitlog.schemas.record import RecordListResponse, ToggleRequest, ToggleResponse
from habitlog.services.ledger import list_for_month, toggle_completion

router = APIRouter(prefix="/records", tags=["records"])


@router.put(
    "/{habit_id}/{year}/{month}/{day}",
    response_model=ToggleResponse,
    summary="Set a day's completion state",
    responses={
        200: {"description": "Record written, or removed when completed=false."},
        404: {"model": ErrorResponse, "description": "Unknown habit."},
        422: {"description": "Negative or unparseable amount."},
    },
)
def put_record(
    payload: ToggleRequest,
    habit_id: str,
    year: int = Path(ge=1),
    month: int = Path(ge=1, le=12),
    day: int = Path(ge=1, le=31),
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    """
    Idempotent upsert/delete of one (habit, day) record.

    - `completed=true` stores the given amount, or the habit's default amount
      when omitted. A second write overwrites the first; amounts never add up.
    - `completed=false` removes the record. Repeating it is harmless.

    The record copies the habit's current name and unit.
    """
    record = toggle_completion(
        db, owner, habit_id, day, month, year,
        completed=payload.completed,
        amount=payload.amount,
    )
    if record is None:
        return ToggleResponse(completed=False, record=None)
    return ToggleResponse(completed=True, record=record_to_response(record))


@router.get("", response_model=RecordListResponse, summary="All records for a month")
def get_monthly_records(
    month: int = Query(ge=1, le=12, examples=[6]),
    year: int = Query(ge=1, examples=[2024]),
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    items = [record_to_response(r) for r in list_for_month(db, owner, month, year)]
    return RecordListResponse(month=month, year=year, total=len(items), items=items)
