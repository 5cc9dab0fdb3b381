"""
Diary router.

GET /diary
GET /diary/{date_key}
PUT /diary/{date_key}
PUT /diary/{date_key}/reflection
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from habitlog.core.principal import get_principal
from habitlog.db.base import get_db
from habitlog.routers.serializers import diary_to_response
from habitlog.schemas.diary import (
    DiaryEntryRequest,
    DiaryEntryResponse,
    DiaryListResponse,
    ReflectionRequest,
)
from habitlog.services.diary import get_diary_entry, list_diary_entries, save_diary_entry
from habitlog.services.reflection import compose_reflection

router = APIRouter(prefix="/diary", tags=["diary"])


@router.get("", response_model=DiaryListResponse, summary="All diary entries, oldest first")
def list_entries(db: Session = Depends(get_db), owner: str = Depends(get_principal)):
    items = [diary_to_response(e) for e in list_diary_entries(db, owner)]
    return DiaryListResponse(total=len(items), items=items)


@router.get(
    "/{date_key}",
    response_model=Optional[DiaryEntryResponse],
    summary="One diary entry (null when none was written)",
)
def get_entry(date_key: str, db: Session = Depends(get_db), owner: str = Depends(get_principal)):
    entry = get_diary_entry(db, owner, date_key)
    return diary_to_response(entry) if entry else None


@router.put("/{date_key}", response_model=DiaryEntryResponse, summary="Write a raw diary entry")
def put_entry(
    date_key: str,
    payload: DiaryEntryRequest,
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    entry = save_diary_entry(db, owner, date_key, payload.title, payload.content)
    return diary_to_response(entry)


@router.put(
    "/{date_key}/reflection",
    response_model=DiaryEntryResponse,
    summary="Write the day's reflection (energy, win, friction, investment mindset)",
)
def put_reflection(
    date_key: str,
    payload: ReflectionRequest,
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    """
    Stored as `title = "Energy: N"` and a content body with `Win:`,
    `Friction:` and `Investment Mindset:` sections.
    """
    title, content = compose_reflection(
        payload.energy, payload.win, payload.friction, payload.investment_mindset
    )
    return diary_to_response(save_diary_entry(db, owner, date_key, title, content))
