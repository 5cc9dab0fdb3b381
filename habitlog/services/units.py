"""
Habit unit model.

A unit is a closed sum type: none | reps | time | custom(label).
Consumers dispatch through tables keyed by every UnitKind member, so a new
kind without a label fails loudly instead of falling back to "reps".
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from habitlog.core.errors import ValidationFailedError
from habitlog.services.duration import parse_duration

# Largest value a BigInteger column holds.
MAX_AMOUNT = 2**63 - 1


class UnitKind(str, enum.Enum):
    none = "none"
    reps = "reps"
    time = "time"
    custom = "custom"


@dataclass(frozen=True)
class HabitUnit:
    kind: UnitKind
    label: Optional[str] = None  # custom only

    @classmethod
    def none(cls) -> "HabitUnit":
        return cls(UnitKind.none)

    @classmethod
    def reps(cls) -> "HabitUnit":
        return cls(UnitKind.reps)

    @classmethod
    def time(cls) -> "HabitUnit":
        return cls(UnitKind.time)

    @classmethod
    def custom(cls, label: str) -> "HabitUnit":
        return cls(UnitKind.custom, label)


_LONG_LABELS = {
    UnitKind.none: "—",
    UnitKind.reps: "reps",
    UnitKind.time: "minutes",
    UnitKind.custom: None,
}

_SHORT_LABELS = {
    UnitKind.none: "—",
    UnitKind.reps: "reps",
    UnitKind.time: "min",
    UnitKind.custom: None,
}


def is_no_unit(unit: HabitUnit) -> bool:
    return unit.kind == UnitKind.none


def is_time_unit(unit: HabitUnit) -> bool:
    return unit.kind == UnitKind.time


def unit_from_selection(kind: UnitKind | str, label: Optional[str] = None) -> HabitUnit:
    kind = UnitKind(kind)
    if kind == UnitKind.custom:
        return HabitUnit.custom(label or "")
    return HabitUnit(kind)


def _label(table: dict, unit: HabitUnit) -> str:
    if unit.kind == UnitKind.custom:
        return unit.label or ""
    return table[unit.kind]


def unit_label(unit: HabitUnit) -> str:
    return _label(_LONG_LABELS, unit)


def unit_short_label(unit: HabitUnit) -> str:
    return _label(_SHORT_LABELS, unit)


def parse_amount(unit: HabitUnit, raw: Any, field: str = "amount") -> Optional[int]:
    """
    Turn user input into the integer stored for `unit`.

    - none units never store an amount (returns None).
    - time units take seconds as int, or duration text ("1:15", "2 min").
    - other units take a non-negative int or a string of digits.
    """
    if raw is None or is_no_unit(unit):
        return None

    if isinstance(raw, bool):
        raise ValidationFailedError(f"{field} must be a number.", field=field)

    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        text = raw.strip()
        if is_time_unit(unit):
            parsed = parse_duration(text)
        else:
            parsed = int(text) if text.isascii() and text.isdigit() else None
        if parsed is None:
            raise ValidationFailedError(
                f"{field} {raw!r} is not a valid {unit_label(unit)} value.",
                field=field,
                value=raw,
            )
        value = parsed
    else:
        raise ValidationFailedError(f"{field} must be an integer or text.", field=field)

    if value < 0:
        raise ValidationFailedError(f"{field} must not be negative.", field=field, value=value)
    if value > MAX_AMOUNT:
        raise ValidationFailedError(f"{field} is too large.", field=field, value=value)
    return value
