"""
Duration codec for Time-unit habit amounts.

Amounts for Time habits are stored as whole seconds; users type them as
free text.

Public API
----------
parse_duration(text)             -> int | None
format_duration(seconds)         -> str        ("M:SS" / "H:MM:SS")
format_compact_duration(seconds) -> str        ("45s" / "2m" / "1m 15s")
is_valid_duration(text)          -> bool
"""
from __future__ import annotations

import math
import re
from typing import Any, Optional

_CLOCK_RE = re.compile(r"^(\d+):(\d+)$")
_LONG_CLOCK_RE = re.compile(r"^(\d+):(\d+):(\d+)$")
_MINUTES_RE = re.compile(r"(\d+)\s*(?:minutes|minute|min|m)(?=\s|$)")
_SECONDS_RE = re.compile(r"(\d+)\s*(?:seconds|second|sec|s)(?=\s|$)")
_PLAIN_RE = re.compile(r"^\d+$")


def parse_duration(text: Any) -> Optional[int]:
    """
    Parse free text into whole seconds.

    Accepted forms:
      "1:15"            minutes:seconds (seconds must be < 60)
      "1:01:05"         hours:minutes:seconds
      "1 min 15 sec"    any of min/minute/minutes/m and sec/second/seconds/s
      "75"              bare integer, read as seconds

    Returns None for anything else. Never raises.
    """
    if not isinstance(text, str):
        return None
    cleaned = text.strip().lower()
    if not cleaned:
        return None

    clock = _CLOCK_RE.match(cleaned)
    if clock:
        minutes, seconds = int(clock.group(1)), int(clock.group(2))
        if seconds >= 60:
            return None
        return minutes * 60 + seconds

    long_clock = _LONG_CLOCK_RE.match(cleaned)
    if long_clock:
        hours, minutes, seconds = (int(g) for g in long_clock.groups())
        if minutes >= 60 or seconds >= 60:
            return None
        return hours * 3600 + minutes * 60 + seconds

    minutes_match = _MINUTES_RE.search(cleaned)
    seconds_match = _SECONDS_RE.search(cleaned)
    if minutes_match or seconds_match:
        total = 0
        if minutes_match:
            total += int(minutes_match.group(1)) * 60
        if seconds_match:
            total += int(seconds_match.group(1))
        return total

    if _PLAIN_RE.match(cleaned):
        return int(cleaned)

    return None


def is_valid_duration(text: Any) -> bool:
    return parse_duration(text) is not None


def _whole_seconds(seconds: Any) -> Optional[int]:
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return int(seconds)


def format_duration(seconds: Any) -> str:
    """75 -> "1:15", 45 -> "0:45", 3665 -> "1:01:05". Bad input -> "0:00"."""
    total = _whole_seconds(seconds)
    if total is None:
        return "0:00"

    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_compact_duration(seconds: Any) -> str:
    """Report style: 45 -> "45s", 120 -> "2m", 75 -> "1m 15s"."""
    total = _whole_seconds(seconds) or 0
    if total < 60:
        return f"{total}s"
    minutes, secs = divmod(total, 60)
    if secs == 0:
        return f"{minutes}m"
    return f"{minutes}m {secs}s"
