"""
Habit registry: CRUD over habit definitions, scoped to one principal.

Public API
----------
create_habit(db, owner, name, weekly_target, unit, default_amount)  -> Habit
get_habit(db, owner, habit_id)                                       -> Habit
list_habits(db, owner)                                               -> list[Habit]
rename_habit / set_weekly_target / set_unit / set_default_amount     -> Habit
delete_habit(db, owner, habit_id)                                    -> bool

Every validation runs before the session is touched, so a rejected call
never leaves a partial write behind.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.orm import Session

from habitlog.core.errors import HabitNotFoundError, ValidationFailedError
from habitlog.models.habit import Habit
from habitlog.models.habit_record import HabitRecord
from habitlog.models.monthly_target import MonthlyTarget
from habitlog.services.units import HabitUnit, is_no_unit, parse_amount

logger = logging.getLogger(__name__)

MIN_WEEKLY_TARGET = 1
MAX_WEEKLY_TARGET = 7


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _clean_name(name: Any) -> str:
    cleaned = name.strip() if isinstance(name, str) else ""
    if not cleaned:
        raise ValidationFailedError("Habit name must not be empty.", field="name")
    return cleaned


def _check_weekly_target(weekly_target: Any) -> int:
    if (
        isinstance(weekly_target, bool)
        or not isinstance(weekly_target, int)
        or not MIN_WEEKLY_TARGET <= weekly_target <= MAX_WEEKLY_TARGET
    ):
        raise ValidationFailedError(
            f"weekly_target must be between {MIN_WEEKLY_TARGET} and {MAX_WEEKLY_TARGET}.",
            field="weekly_target",
            value=weekly_target,
        )
    return weekly_target


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def find_habit(db: Session, owner: str, habit_id: str) -> Optional[Habit]:
    return (
        db.query(Habit)
        .filter(Habit.id == habit_id, Habit.owner == owner)
        .first()
    )


def get_habit(db: Session, owner: str, habit_id: str) -> Habit:
    habit = find_habit(db, owner, habit_id)
    if habit is None:
        raise HabitNotFoundError(habit_id)
    return habit


def list_habits(db: Session, owner: str) -> list[Habit]:
    return (
        db.query(Habit)
        .filter(Habit.owner == owner)
        .order_by(Habit.created_at, Habit.id)
        .all()
    )


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

def create_habit(
    db: Session,
    owner: str,
    name: str,
    weekly_target: int,
    unit: HabitUnit,
    default_amount: Any = None,
) -> Habit:
    cleaned = _clean_name(name)
    target = _check_weekly_target(weekly_target)
    amount = parse_amount(unit, default_amount, field="default_amount")

    habit = Habit(
        id=uuid.uuid4().hex,
        owner=owner,
        name=cleaned,
        weekly_target=target,
        default_amount=amount,
        created_at=datetime.now(tz=timezone.utc),
    )
    habit.unit = unit
    db.add(habit)
    db.commit()
    db.refresh(habit)
    logger.info("Created habit %s (%r) for %s", habit.id, habit.name, owner)
    return habit


def rename_habit(db: Session, owner: str, habit_id: str, new_name: str) -> Habit:
    habit = get_habit(db, owner, habit_id)
    habit.name = _clean_name(new_name)
    db.commit()
    db.refresh(habit)
    return habit


def set_weekly_target(db: Session, owner: str, habit_id: str, weekly_target: int) -> Habit:
    habit = get_habit(db, owner, habit_id)
    habit.weekly_target = _check_weekly_target(weekly_target)
    db.commit()
    db.refresh(habit)
    return habit


def set_unit(db: Session, owner: str, habit_id: str, unit: HabitUnit) -> Habit:
    """Change the unit. Switching to `none` clears the default amount."""
    habit = get_habit(db, owner, habit_id)
    habit.unit = unit
    if is_no_unit(unit):
        habit.default_amount = None
    db.commit()
    db.refresh(habit)
    logger.info("Habit %s unit changed to %s", habit_id, unit.kind.value)
    return habit


def set_default_amount(db: Session, owner: str, habit_id: str, amount: Any) -> Habit:
    habit = get_habit(db, owner, habit_id)
    habit.default_amount = parse_amount(habit.unit, amount, field="default_amount")
    db.commit()
    db.refresh(habit)
    return habit


def delete_habit(db: Session, owner: str, habit_id: str) -> bool:
    """
    Remove a habit together with its completion records and target overrides.
    Returns False (and does nothing) when the habit is already gone.
    """
    habit = find_habit(db, owner, habit_id)
    if habit is None:
        logger.debug("delete_habit: %s already absent for %s", habit_id, owner)
        return False

    db.query(HabitRecord).filter(
        HabitRecord.owner == owner, HabitRecord.habit_id == habit_id
    ).delete(synchronize_session=False)
    db.query(MonthlyTarget).filter(
        MonthlyTarget.owner == owner, MonthlyTarget.habit_id == habit_id
    ).delete(synchronize_session=False)
    db.delete(habit)
    db.commit()
    logger.info("Deleted habit %s for %s", habit_id, owner)
    return True
