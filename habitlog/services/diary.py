"""
Daily diary store: one (title, content) entry per date key and principal.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from habitlog.core.errors import ValidationFailedError
from habitlog.models.diary import DiaryEntry

logger = logging.getLogger(__name__)


def _check_date_key(date_key: str) -> str:
    cleaned = (date_key or "").strip()
    if not cleaned:
        raise ValidationFailedError("Diary date must not be empty.", field="date")
    return cleaned


def parse_date_key(date_key: str) -> Optional[date]:
    """YYYY-MM-DD -> date; None when the key is not a date."""
    try:
        return date.fromisoformat(date_key)
    except ValueError:
        return None


def get_diary_entry(db: Session, owner: str, date_key: str) -> Optional[DiaryEntry]:
    return (
        db.query(DiaryEntry)
        .filter(DiaryEntry.owner == owner, DiaryEntry.date_key == date_key)
        .first()
    )


def list_diary_entries(db: Session, owner: str) -> list[DiaryEntry]:
    return (
        db.query(DiaryEntry)
        .filter(DiaryEntry.owner == owner)
        .order_by(DiaryEntry.date_key)
        .all()
    )


def save_diary_entry(
    db: Session, owner: str, date_key: str, title: str, content: str
) -> DiaryEntry:
    key = _check_date_key(date_key)
    entry = get_diary_entry(db, owner, key)
    if entry is None:
        entry = DiaryEntry(owner=owner, date_key=key)
        db.add(entry)
    entry.title = title or ""
    entry.content = content or ""
    db.commit()
    db.refresh(entry)
    logger.info("Saved diary entry %s for %s", key, owner)
    return entry
