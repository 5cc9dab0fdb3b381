"""
Steady Climb year plan: built-in progressive monthly targets.

Pure lookup over (normalized habit name, calendar month). The target store
falls back to this when no manual override exists; values computed here are
never persisted.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PlanTargets:
    push_ups: int
    squats: int
    plank_seconds: int


_PLAN: dict[int, PlanTargets] = {
    1: PlanTargets(20, 20, 60),
    2: PlanTargets(25, 25, 75),
    3: PlanTargets(30, 30, 90),
    4: PlanTargets(35, 35, 105),
    5: PlanTargets(40, 40, 120),
    6: PlanTargets(45, 45, 135),
    7: PlanTargets(50, 50, 150),
    8: PlanTargets(55, 55, 165),
    9: PlanTargets(60, 60, 180),
    10: PlanTargets(65, 65, 195),
    11: PlanTargets(70, 70, 210),
    12: PlanTargets(75, 75, 240),
}

NON_APPLICABLE_HABITS = ("16/8 fasting", "run", "squash")

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_habit_name(name: str) -> str:
    return _NON_ALNUM.sub("", name.strip().lower())


_NON_APPLICABLE = frozenset(normalize_habit_name(n) for n in NON_APPLICABLE_HABITS)

_FIELD_BY_NAME = {
    "pushups": "push_ups",
    "pressups": "push_ups",
    "squats": "squats",
    "plank": "plank_seconds",
}


def plan_targets(month: int) -> PlanTargets:
    """Plan row for a calendar month; out-of-range months are clamped to 1..12."""
    return _PLAN[max(1, min(12, month))]


def is_plan_applicable(habit_name: str) -> bool:
    normalized = normalize_habit_name(habit_name)
    if normalized in _NON_APPLICABLE:
        return False
    return normalized in _FIELD_BY_NAME


def plan_target_for_habit(habit_name: str, month: int) -> Optional[int]:
    if not is_plan_applicable(habit_name):
        return None
    field = _FIELD_BY_NAME[normalize_habit_name(habit_name)]
    return getattr(plan_targets(month), field)
