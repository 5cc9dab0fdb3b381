"""
Completion ledger: one record per (owner, habit, day, month, year).

toggle_completion is an idempotent upsert/delete, not a flip: the caller
states the intended state. Two racing writes to the same key resolve as
last-write-wins through the table's unique constraint.

Day/month/year are not checked against the calendar (day 31 of a 30-day
month is stored as given); only their basic ranges are enforced.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from habitlog.core.errors import ValidationFailedError
from habitlog.models.habit import Habit
from habitlog.models.habit_record import HabitRecord
from habitlog.services.habits import get_habit
from habitlog.services.units import parse_amount

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _check_key(day: int, month: int, year: int) -> None:
    if not 1 <= day <= 31:
        raise ValidationFailedError("day must be between 1 and 31.", field="day", value=day)
    if not 1 <= month <= 12:
        raise ValidationFailedError("month must be between 1 and 12.", field="month", value=month)
    if year < 1:
        raise ValidationFailedError("year must be positive.", field="year", value=year)


def _sort_key_expr():
    return HabitRecord.year * 10000 + HabitRecord.month * 100 + HabitRecord.day


def date_sort_key(d: date) -> int:
    return d.year * 10000 + d.month * 100 + d.day


def _find_record(
    db: Session, owner: str, habit_id: str, day: int, month: int, year: int
) -> Optional[HabitRecord]:
    return (
        db.query(HabitRecord)
        .filter(
            HabitRecord.owner == owner,
            HabitRecord.habit_id == habit_id,
            HabitRecord.day == day,
            HabitRecord.month == month,
            HabitRecord.year == year,
        )
        .first()
    )


def _apply_snapshot(record: HabitRecord, habit: Habit, amount: Optional[int]) -> None:
    unit = habit.unit
    record.completed_at = datetime.now(tz=timezone.utc)
    record.amount = amount
    record.unit_kind = unit.kind
    record.unit_label = unit.label
    record.habit_name = habit.name


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

def toggle_completion(
    db: Session,
    owner: str,
    habit_id: str,
    day: int,
    month: int,
    year: int,
    completed: bool = True,
    amount: Any = None,
) -> Optional[HabitRecord]:
    """
    Mark a day complete (upsert) or not complete (delete).

    completed=True:  amount given   -> stored (duration text allowed for time habits)
                     amount omitted -> habit.default_amount, unless unit is none
    completed=False: record removed; repeating this is a no-op.
    """
    _check_key(day, month, year)
    habit = get_habit(db, owner, habit_id)

    if not completed:
        deleted = (
            db.query(HabitRecord)
            .filter(
                HabitRecord.owner == owner,
                HabitRecord.habit_id == habit_id,
                HabitRecord.day == day,
                HabitRecord.month == month,
                HabitRecord.year == year,
            )
            .delete(synchronize_session=False)
        )
        db.commit()
        logger.debug("Cleared %s %04d-%02d-%02d (%d rows)", habit_id, year, month, day, deleted)
        return None

    if amount is None:
        stored = parse_amount(habit.unit, habit.default_amount, field="default_amount")
    else:
        stored = parse_amount(habit.unit, amount)

    record = _find_record(db, owner, habit_id, day, month, year)
    if record is None:
        record = HabitRecord(owner=owner, habit_id=habit_id, day=day, month=month, year=year)
        _apply_snapshot(record, habit, stored)
        db.add(record)
        try:
            db.commit()
        except IntegrityError:
            # Concurrent insert for the same key won: overwrite it instead.
            db.rollback()
            record = _find_record(db, owner, habit_id, day, month, year)
            if record is None:
                raise
            _apply_snapshot(record, habit, stored)
            db.commit()
    else:
        _apply_snapshot(record, habit, stored)
        db.commit()

    db.refresh(record)
    logger.info(
        "Completed %s %04d-%02d-%02d amount=%s", habit_id, year, month, day, record.amount
    )
    return record


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def list_for_month(db: Session, owner: str, month: int, year: int) -> list[HabitRecord]:
    return (
        db.query(HabitRecord)
        .filter(
            HabitRecord.owner == owner,
            HabitRecord.month == month,
            HabitRecord.year == year,
        )
        .order_by(HabitRecord.day, HabitRecord.habit_id)
        .all()
    )


def list_for_range(
    db: Session,
    owner: str,
    start: date,
    end: date,
    habit_ids: Optional[Iterable[str]] = None,
) -> list[HabitRecord]:
    """Records whose (year, month, day) falls in [start, end], both inclusive."""
    key = _sort_key_expr()
    q = db.query(HabitRecord).filter(
        HabitRecord.owner == owner,
        key >= date_sort_key(start),
        key <= date_sort_key(end),
    )
    if habit_ids is not None:
        q = q.filter(HabitRecord.habit_id.in_(list(habit_ids)))
    return q.order_by(key, HabitRecord.habit_id).all()


def lifetime_total(db: Session, owner: str, habit_id: str) -> int:
    """Sum of amounts over every record of the habit; missing amounts count as 0."""
    get_habit(db, owner, habit_id)
    total = (
        db.query(func.coalesce(func.sum(HabitRecord.amount), 0))
        .filter(HabitRecord.owner == owner, HabitRecord.habit_id == habit_id)
        .scalar()
    )
    return int(total or 0)
