"""
Encoding of the daily reflection inside a diary entry.

The store keeps a plain (title, content) pair; the reflection form packs
its fields into it:

    title   = "Energy: 3"
    content = "Win: ...\nFriction: ...\nInvestment Mindset: ..."

Lines that follow a section header without their own prefix continue that
section.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from habitlog.core.errors import ValidationFailedError

MIN_ENERGY = 1
MAX_ENERGY = 5

_ENERGY_RE = re.compile(r"Energy:\s*(\d+)")

_SECTIONS = (
    ("Win:", "win"),
    ("Friction:", "friction"),
    ("Investment Mindset:", "investment_mindset"),
)


@dataclass
class Reflection:
    energy: Optional[int] = None
    win: str = ""
    friction: str = ""
    investment_mindset: str = ""


def parse_energy(title: str) -> Optional[int]:
    match = _ENERGY_RE.search(title or "")
    return int(match.group(1)) if match else None


def parse_reflection(title: str, content: str) -> Reflection:
    sections = {"win": "", "friction": "", "investment_mindset": ""}
    current: Optional[str] = None

    for line in (content or "").split("\n"):
        for prefix, name in _SECTIONS:
            if line.startswith(prefix):
                current = name
                sections[name] = line[len(prefix):].strip()
                break
        else:
            if line.strip() and current:
                sections[current] += "\n" + line

    return Reflection(energy=parse_energy(title), **sections)


def compose_reflection(
    energy: int, win: str = "", friction: str = "", investment_mindset: str = ""
) -> tuple[str, str]:
    """Return the (title, content) pair to store for a reflection."""
    if isinstance(energy, bool) or not isinstance(energy, int) or not MIN_ENERGY <= energy <= MAX_ENERGY:
        raise ValidationFailedError(
            f"energy must be between {MIN_ENERGY} and {MAX_ENERGY}.",
            field="energy",
            value=energy,
        )
    title = f"Energy: {energy}"
    content = f"Win: {win}\nFriction: {friction}\nInvestment Mindset: {investment_mindset}"
    return title, content
