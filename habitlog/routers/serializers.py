"""
ORM / service result → response model mapping shared by the routers.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from habitlog.models.diary import DiaryEntry
from habitlog.models.habit import Habit
from habitlog.models.habit_record import HabitRecord
from habitlog.models.investment import InvestmentDiaryEntry, InvestmentGoal
from habitlog.schemas.common import HabitUnitOut
from habitlog.schemas.diary import DiaryEntryResponse, ReflectionOut
from habitlog.schemas.habit import HabitResponse
from habitlog.schemas.investment import GoalResponse, InvestmentEntryResponse
from habitlog.schemas.record import RecordResponse
from habitlog.schemas.stats import VolumeStatsResponse
from habitlog.services.investments import goal_progress
from habitlog.services.reflection import parse_reflection
from habitlog.services.stats import VolumeStats, round_percent
from habitlog.services.units import HabitUnit, unit_label, unit_short_label


def _iso(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 with offset. Naive values (SQLite drops the zone) are UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def unit_to_response(unit: HabitUnit) -> HabitUnitOut:
    return HabitUnitOut(
        kind=unit.kind.value,
        label=unit.label,
        display=unit_label(unit),
        short=unit_short_label(unit),
    )


def habit_to_response(h: Habit) -> HabitResponse:
    return HabitResponse(
        id=h.id,
        name=h.name,
        weekly_target=h.weekly_target,
        unit=unit_to_response(h.unit),
        default_amount=h.default_amount,
        created_at=_iso(h.created_at) or "",
    )


def record_fields(r: HabitRecord) -> dict:
    return {
        "habit_id": r.habit_id,
        "habit_name": r.habit_name,
        "day": r.day,
        "month": r.month,
        "year": r.year,
        "completed_at": _iso(r.completed_at),
        "amount": r.amount,
        "unit": unit_to_response(r.unit),
    }


def record_to_response(r: HabitRecord) -> RecordResponse:
    return RecordResponse(**record_fields(r))


def diary_to_response(e: DiaryEntry) -> DiaryEntryResponse:
    reflection = parse_reflection(e.title, e.content)
    return DiaryEntryResponse(
        date=e.date_key,
        title=e.title,
        content=e.content,
        reflection=ReflectionOut(
            energy=reflection.energy,
            win=reflection.win,
            friction=reflection.friction,
            investment_mindset=reflection.investment_mindset,
        ),
    )


def goal_to_response(g: InvestmentGoal) -> GoalResponse:
    return GoalResponse(
        id=g.id,
        asset=g.asset,
        currently_held=g.currently_held,
        target=g.target,
        progress=round_percent(goal_progress(g.currently_held, g.target)),
    )


def investment_entry_to_response(e: InvestmentDiaryEntry) -> InvestmentEntryResponse:
    return InvestmentEntryResponse(
        id=e.id, date=e.date, asset=e.asset, amount=e.amount, notes=e.notes
    )


def volume_to_response(v: VolumeStats) -> VolumeStatsResponse:
    return VolumeStatsResponse(
        habit_id=v.habit_id,
        habit_name=v.habit_name,
        unit=v.unit,
        daily_volumes=v.daily_volumes,
        total_volume=v.total_volume,
    )
