"""
Export projection: a read-only, date-filtered snapshot of everything the
caller owns, used to build reports.

The range is inclusive on both ends and is taken as given: when end < start
the dated sections come back empty (callers normalize the range first).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from habitlog.models.diary import DiaryEntry
from habitlog.models.habit import Habit
from habitlog.models.habit_record import HabitRecord
from habitlog.models.investment import InvestmentDiaryEntry, InvestmentGoal
from habitlog.models.monthly_target import MonthlyTarget
from habitlog.models.profile import UserProfile
from habitlog.services.diary import list_diary_entries, parse_date_key
from habitlog.services.habits import list_habits
from habitlog.services.investments import list_goals, list_investment_entries
from habitlog.services.ledger import list_for_range
from habitlog.services.profile import get_profile
from habitlog.services.targets import list_overrides_in_range


@dataclass
class ExportRecord:
    record: HabitRecord
    current_habit_name: Optional[str]   # live name; record.habit_name is the snapshot


@dataclass
class ExportSnapshot:
    start: date
    end: date
    profile: Optional[UserProfile]
    habits: list[Habit] = field(default_factory=list)
    records: list[ExportRecord] = field(default_factory=list)
    monthly_targets: list[MonthlyTarget] = field(default_factory=list)
    diary_entries: list[DiaryEntry] = field(default_factory=list)
    investment_goals: list[InvestmentGoal] = field(default_factory=list)
    investment_entries: list[InvestmentDiaryEntry] = field(default_factory=list)


def _diary_in_range(entry: DiaryEntry, start: date, end: date) -> bool:
    day = parse_date_key(entry.date_key)
    if day is None:
        return True  # free-form keys cannot be placed on the calendar
    return start <= day <= end


def export_range(
    db: Session,
    owner: str,
    start: date,
    end: date,
    habit_ids: Optional[Iterable[str]] = None,
) -> ExportSnapshot:
    habits = list_habits(db, owner)
    if habit_ids is not None:
        wanted = set(habit_ids)
        habits = [h for h in habits if h.id in wanted]
    selected = [h.id for h in habits]
    names = {h.id: h.name for h in habits}

    records = list_for_range(db, owner, start, end, habit_ids=selected)
    return ExportSnapshot(
        start=start,
        end=end,
        profile=get_profile(db, owner),
        habits=habits,
        records=[ExportRecord(r, names.get(r.habit_id)) for r in records],
        monthly_targets=list_overrides_in_range(db, owner, start, end, habit_ids=selected),
        diary_entries=[
            e for e in list_diary_entries(db, owner) if _diary_in_range(e, start, end)
        ],
        investment_goals=list_goals(db, owner),
        investment_entries=list_investment_entries(db, owner),
    )
