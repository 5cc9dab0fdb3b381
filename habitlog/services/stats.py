"""
Statistics engine.

Pure functions over (habits, records) snapshots. They never touch the DB
and keep no state, so results are recomputed on every request. Callers
fetch the rows (see routers/stats.py) and pass them in.

Formulas
--------
weeks_in_range   = days_in_range / 7               (both endpoints counted)
expected(h)      = ceil(weekly_target(h) * weeks_in_range)
overall %        = Σ completed / Σ expected
expected per day = Σ weekly_target(h) / 7          (fractional, not rounded)

Every percentage is clamped to [0, 100] and rounded half-up to an int.
Over-completion is possible, but reported progress never exceeds 100.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Sequence

from habitlog.core.errors import ValidationFailedError
from habitlog.services.reflection import parse_energy
from habitlog.services.units import unit_label

VOLUME_SLOTS = 31

# Longest range a report covers; each day becomes one DailyStats row.
MAX_RANGE_DAYS = 3660


# ---------------------------------------------------------------------------
# Result types (plain dataclasses: no ORM, no Pydantic)
# ---------------------------------------------------------------------------

@dataclass
class HabitStats:
    habit_id: str
    name: str
    percentage: int
    completed: int
    expected: int
    weekly_target: int


@dataclass
class DailyStats:
    index: int          # 1-based position in the range
    day: date
    percentage: int
    completed: int


@dataclass
class VolumeStats:
    habit_id: str
    habit_name: str
    unit: str
    daily_volumes: list[int]    # slot i holds day-of-month i + 1
    total_volume: int


@dataclass
class EnergyPoint:
    date: str
    energy: int
    consistency: int


@dataclass
class ReportStats:
    start: date
    end: date
    overall_percentage: int
    total_completed: int
    total_expected: int
    habit_stats: list[HabitStats] = field(default_factory=list)
    daily_stats: list[DailyStats] = field(default_factory=list)
    volume_stats: list[VolumeStats] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def round_percent(value: float) -> int:
    """Clamp to [0, 100] and round half-up (2.5 -> 3, not banker's 2)."""
    clamped = max(0.0, min(100.0, value))
    return int(Decimal(repr(clamped)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _ratio_percent(completed: float, expected: float) -> float:
    if expected <= 0:
        return 0.0
    return completed / expected * 100


def _is_completed(record) -> bool:
    return record.completed_at is not None


def _date_key(record) -> str:
    return f"{int(record.year):04d}-{int(record.month):02d}-{int(record.day):02d}"


def normalize_range(start: date, end: date) -> tuple[date, date]:
    """Swap reversed bounds so start <= end."""
    return (start, end) if start <= end else (end, start)


def days_in_range(start: date, end: date) -> int:
    return (end - start).days + 1


def check_range_length(start: date, end: date) -> None:
    days = days_in_range(start, end)
    if days > MAX_RANGE_DAYS:
        raise ValidationFailedError(
            f"Date range spans {days} days; the maximum is {MAX_RANGE_DAYS}.",
            field="end",
            value=str(end),
        )


def weeks_in_range(start: date, end: date) -> float:
    return days_in_range(start, end) / 7


def expected_per_day(habits: Sequence) -> float:
    return sum(h.weekly_target / 7 for h in habits)


def expected_completions(weekly_target: int, weeks: float) -> int:
    return math.ceil(weekly_target * weeks)


# ---------------------------------------------------------------------------
# Frequency
# ---------------------------------------------------------------------------

def habit_stats(habits: Sequence, records: Iterable, start: date, end: date) -> list[HabitStats]:
    weeks = weeks_in_range(start, end)
    completed_by_habit: dict[str, int] = {}
    for r in records:
        if _is_completed(r):
            completed_by_habit[r.habit_id] = completed_by_habit.get(r.habit_id, 0) + 1

    result = []
    for h in habits:
        expected = expected_completions(h.weekly_target, weeks)
        completed = completed_by_habit.get(h.id, 0)
        result.append(HabitStats(
            habit_id=h.id,
            name=h.name,
            percentage=round_percent(_ratio_percent(completed, expected)),
            completed=completed,
            expected=expected,
            weekly_target=h.weekly_target,
        ))
    return result


def overall_percentage(stats: Sequence[HabitStats]) -> int:
    total_completed = sum(s.completed for s in stats)
    total_expected = sum(s.expected for s in stats)
    return round_percent(_ratio_percent(total_completed, total_expected))


def daily_stats(habits: Sequence, records: Iterable, start: date, end: date) -> list[DailyStats]:
    per_day = expected_per_day(habits)
    completed_by_date: dict[str, int] = {}
    for r in records:
        if _is_completed(r):
            key = _date_key(r)
            completed_by_date[key] = completed_by_date.get(key, 0) + 1

    result = []
    current = start
    while current <= end:
        completed = completed_by_date.get(current.isoformat(), 0)
        result.append(DailyStats(
            index=len(result) + 1,
            day=current,
            percentage=round_percent(_ratio_percent(completed, per_day)),
            completed=completed,
        ))
        current += timedelta(days=1)
    return result


# ---------------------------------------------------------------------------
# Volume
# ---------------------------------------------------------------------------

def volume_stats(habits: Sequence, records: Iterable) -> list[VolumeStats]:
    """Per habit, amounts summed into 31 day-of-month slots plus a total."""
    slots: dict[str, list[int]] = {h.id: [0] * VOLUME_SLOTS for h in habits}
    for r in records:
        if not _is_completed(r) or r.habit_id not in slots:
            continue
        if 1 <= r.day <= VOLUME_SLOTS:
            slots[r.habit_id][r.day - 1] += r.amount or 0

    return [
        VolumeStats(
            habit_id=h.id,
            habit_name=h.name,
            unit=unit_label(h.unit),
            daily_volumes=slots[h.id],
            total_volume=sum(slots[h.id]),
        )
        for h in habits
    ]


# ---------------------------------------------------------------------------
# Diary correlation
# ---------------------------------------------------------------------------

def daily_consistency(habits: Sequence, records: Iterable) -> dict[str, int]:
    """YYYY-MM-DD -> consistency %, for dates with at least one completion."""
    if not habits:
        return {}
    per_day = expected_per_day(habits)
    counts: dict[str, int] = {}
    for r in records:
        if _is_completed(r):
            key = _date_key(r)
            counts[key] = counts.get(key, 0) + 1
    return {
        key: round_percent(_ratio_percent(n, per_day))
        for key, n in sorted(counts.items())
    }


def energy_vs_consistency(
    diary_entries: Iterable[tuple[str, str]],
    habits: Sequence,
    records: Iterable,
) -> list[EnergyPoint]:
    """
    Pair diary energy levels with same-day habit consistency.

    diary_entries are (date_key, title) pairs. Only dates that have both an
    energy reading and at least one completion are kept; sorted by date.
    """
    consistency = daily_consistency(habits, records)
    points = []
    for date_key, title in diary_entries:
        energy = parse_energy(title)
        if energy is None or date_key not in consistency:
            continue
        points.append(EnergyPoint(date=date_key, energy=energy, consistency=consistency[date_key]))
    points.sort(key=lambda p: p.date)
    return points


# ---------------------------------------------------------------------------
# Report bundle
# ---------------------------------------------------------------------------

def report_stats(habits: Sequence, records: Sequence, start: date, end: date) -> ReportStats:
    check_range_length(start, end)
    per_habit = habit_stats(habits, records, start, end)
    return ReportStats(
        start=start,
        end=end,
        overall_percentage=overall_percentage(per_habit),
        total_completed=sum(s.completed for s in per_habit),
        total_expected=sum(s.expected for s in per_habit),
        habit_stats=per_habit,
        daily_stats=daily_stats(habits, records, start, end),
        volume_stats=volume_stats(habits, records),
    )
