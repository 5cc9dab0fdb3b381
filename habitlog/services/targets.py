"""
Monthly target store.

Manual overrides live in `monthly_targets`. When none exists the Steady
Climb plan (services/climb_plan.py) supplies a computed default, which is
never written back.

Public API
----------
get_monthly_target(db, owner, habit_id, month, year)      -> int | None   (override only)
set_monthly_target(db, owner, habit_id, amount, month, year) -> MonthlyTarget
resolve_monthly_target(db, owner, habit_id, month, year)  -> ResolvedTarget
monthly_target_overview(db, owner, month, year)           -> list[TargetOverview]
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from habitlog.core.errors import ValidationFailedError
from habitlog.models.habit import Habit
from habitlog.models.habit_record import HabitRecord
from habitlog.models.monthly_target import MonthlyTarget
from habitlog.services.climb_plan import plan_target_for_habit
from habitlog.services.duration import format_duration
from habitlog.services.habits import get_habit, list_habits
from habitlog.services.units import (
    HabitUnit, is_no_unit, is_time_unit, parse_amount, unit_label,
)

logger = logging.getLogger(__name__)

NO_TARGET_DISPLAY = "—"


class TargetSource:
    MANUAL = "manual"
    PLAN = "plan"


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class ResolvedTarget:
    habit_id: str
    month: int
    year: int
    amount: Optional[int]
    source: Optional[str]    # "manual" | "plan" | None


@dataclass
class TargetOverview:
    habit_id: str
    habit_name: str
    unit: str
    target: ResolvedTarget
    monthly_total: int
    target_display: str
    total_display: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _check_month(month: int, year: int) -> None:
    if not 1 <= month <= 12:
        raise ValidationFailedError("month must be between 1 and 12.", field="month", value=month)
    if year < 1:
        raise ValidationFailedError("year must be positive.", field="year", value=year)


def _find_override(
    db: Session, owner: str, habit_id: str, month: int, year: int
) -> Optional[MonthlyTarget]:
    return (
        db.query(MonthlyTarget)
        .filter(
            MonthlyTarget.owner == owner,
            MonthlyTarget.habit_id == habit_id,
            MonthlyTarget.month == month,
            MonthlyTarget.year == year,
        )
        .first()
    )


def _resolve(habit: Habit, override: Optional[MonthlyTarget], month: int, year: int) -> ResolvedTarget:
    if override is not None:
        return ResolvedTarget(habit.id, month, year, override.amount, TargetSource.MANUAL)
    planned = plan_target_for_habit(habit.name, month)
    if planned is not None:
        return ResolvedTarget(habit.id, month, year, planned, TargetSource.PLAN)
    return ResolvedTarget(habit.id, month, year, None, None)


def display_amount(habit: Habit, value: Optional[int]) -> str:
    if value is None:
        return NO_TARGET_DISPLAY
    if is_time_unit(habit.unit):
        return format_duration(value)
    return str(value)


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def get_monthly_target(
    db: Session, owner: str, habit_id: str, month: int, year: int
) -> Optional[int]:
    """Persisted override for the month, or None. The plan is not consulted."""
    get_habit(db, owner, habit_id)
    override = _find_override(db, owner, habit_id, month, year)
    return override.amount if override is not None else None


def resolve_monthly_target(
    db: Session, owner: str, habit_id: str, month: int, year: int
) -> ResolvedTarget:
    habit = get_habit(db, owner, habit_id)
    return _resolve(habit, _find_override(db, owner, habit_id, month, year), month, year)


def set_monthly_target(
    db: Session, owner: str, habit_id: str, amount: Any, month: int, year: int
) -> MonthlyTarget:
    _check_month(month, year)
    habit = get_habit(db, owner, habit_id)
    if amount is None:
        raise ValidationFailedError("amount is required.", field="amount")
    # A unitless habit still takes a plain count as its target.
    unit = HabitUnit.reps() if is_no_unit(habit.unit) else habit.unit
    value = parse_amount(unit, amount)

    override = _find_override(db, owner, habit_id, month, year)
    if override is None:
        override = MonthlyTarget(owner=owner, habit_id=habit_id, month=month, year=year, amount=value)
        db.add(override)
    else:
        override.amount = value
    db.commit()
    db.refresh(override)
    logger.info("Monthly target %s %04d-%02d set to %d", habit_id, year, month, value)
    return override


def list_overrides_in_range(
    db: Session,
    owner: str,
    start: date,
    end: date,
    habit_ids: Optional[Iterable[str]] = None,
) -> list[MonthlyTarget]:
    """Overrides whose (year, month) lies between the months of start and end."""
    if end < start:
        return []
    key = MonthlyTarget.year * 100 + MonthlyTarget.month
    q = db.query(MonthlyTarget).filter(
        MonthlyTarget.owner == owner,
        key >= start.year * 100 + start.month,
        key <= end.year * 100 + end.month,
    )
    if habit_ids is not None:
        q = q.filter(MonthlyTarget.habit_id.in_(list(habit_ids)))
    return q.order_by(key, MonthlyTarget.habit_id).all()


def monthly_target_overview(db: Session, owner: str, month: int, year: int) -> list[TargetOverview]:
    """Every habit with its resolved target and the volume logged so far that month."""
    _check_month(month, year)
    habits = list_habits(db, owner)

    totals = dict(
        db.query(HabitRecord.habit_id, func.coalesce(func.sum(HabitRecord.amount), 0))
        .filter(
            HabitRecord.owner == owner,
            HabitRecord.month == month,
            HabitRecord.year == year,
        )
        .group_by(HabitRecord.habit_id)
        .all()
    )
    overrides = {
        o.habit_id: o
        for o in db.query(MonthlyTarget).filter(
            MonthlyTarget.owner == owner,
            MonthlyTarget.month == month,
            MonthlyTarget.year == year,
        )
    }

    result = []
    for habit in habits:
        target = _resolve(habit, overrides.get(habit.id), month, year)
        total = int(totals.get(habit.id, 0) or 0)
        result.append(TargetOverview(
            habit_id=habit.id,
            habit_name=habit.name,
            unit=unit_label(habit.unit),
            target=target,
            monthly_total=total,
            target_display=display_amount(habit, target.amount),
            total_display=display_amount(habit, total),
        ))
    return result
