"""
Habits router.

POST   /habits
GET    /habits
GET    /habits/{habit_id}
PATCH  /habits/{habit_id}/name
PATCH  /habits/{habit_id}/weekly-target
PATCH  /habits/{habit_id}/unit
PATCH  /habits/{habit_id}/default-amount
DELETE /habits/{habit_id}
GET    /habits/{habit_id}/lifetime-total
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from habitlog.core.principal import get_principal
from habitlog.db.base import get_db
from habitlog.routers.serializers import habit_to_response
from habitlog.schemas.common import ErrorResponse
from habitlog.schemas.habit import (
    DefaultAmountRequest,
    HabitCreateRequest,
    HabitResponse,
    LifetimeTotalResponse,
    RenameRequest,
    UnitRequest,
    WeeklyTargetRequest,
)
from habitlog.services import habits as registry
from habitlog.services.ledger import lifetime_total
from habitlog.services.units import unit_from_selection

router = APIRouter(prefix="/habits", tags=["habits"])


@router.post(
    "",
    response_model=HabitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a habit",
    responses={422: {"description": "Empty name or weekly_target outside 1–7."}},
)
def create_habit(
    payload: HabitCreateRequest,
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    habit = registry.create_habit(
        db,
        owner,
        name=payload.name,
        weekly_target=payload.weekly_target,
        unit=unit_from_selection(payload.unit.kind, payload.unit.label),
        default_amount=payload.default_amount,
    )
    return habit_to_response(habit)


@router.get("", response_model=list[HabitResponse], summary="List the caller's habits")
def list_habits(db: Session = Depends(get_db), owner: str = Depends(get_principal)):
    return [habit_to_response(h) for h in registry.list_habits(db, owner)]


@router.get(
    "/{habit_id}",
    response_model=HabitResponse,
    responses={404: {"model": ErrorResponse, "description": "Unknown habit."}},
)
def get_habit(habit_id: str, db: Session = Depends(get_db), owner: str = Depends(get_principal)):
    return habit_to_response(registry.get_habit(db, owner, habit_id))


@router.patch("/{habit_id}/name", response_model=HabitResponse)
def rename_habit(
    habit_id: str,
    payload: RenameRequest,
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    """Rename a habit. Existing records keep the name they were written with."""
    return habit_to_response(registry.rename_habit(db, owner, habit_id, payload.name))


@router.patch("/{habit_id}/weekly-target", response_model=HabitResponse)
def set_weekly_target(
    habit_id: str,
    payload: WeeklyTargetRequest,
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    return habit_to_response(
        registry.set_weekly_target(db, owner, habit_id, payload.weekly_target)
    )


@router.patch("/{habit_id}/unit", response_model=HabitResponse)
def set_unit(
    habit_id: str,
    payload: UnitRequest,
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    """
    Change the measurement unit.

    Switching to `none` clears the default amount. Records already written
    keep the unit they were recorded with.
    """
    unit = unit_from_selection(payload.unit.kind, payload.unit.label)
    return habit_to_response(registry.set_unit(db, owner, habit_id, unit))


@router.patch("/{habit_id}/default-amount", response_model=HabitResponse)
def set_default_amount(
    habit_id: str,
    payload: DefaultAmountRequest,
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    return habit_to_response(
        registry.set_default_amount(db, owner, habit_id, payload.default_amount)
    )


@router.delete(
    "/{habit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a habit and its records",
    responses={204: {"description": "Deleted, or already absent."}},
)
def delete_habit(habit_id: str, db: Session = Depends(get_db), owner: str = Depends(get_principal)):
    registry.delete_habit(db, owner, habit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{habit_id}/lifetime-total",
    response_model=LifetimeTotalResponse,
    responses={404: {"model": ErrorResponse, "description": "Unknown habit."}},
)
def get_lifetime_total(
    habit_id: str, db: Session = Depends(get_db), owner: str = Depends(get_principal)
):
    """Sum of every recorded amount for the habit, across all months and years."""
    return LifetimeTotalResponse(habit_id=habit_id, total=lifetime_total(db, owner, habit_id))
