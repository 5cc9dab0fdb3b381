"""
Profile router.

GET /profile
PUT /profile
"""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from habitlog.core.principal import get_principal
from habitlog.db.base import get_db
from habitlog.schemas.profile import ProfileRequest, ProfileResponse
from habitlog.services.profile import get_profile, save_profile

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=Optional[ProfileResponse], summary="Caller's profile, or null")
def read_profile(db: Session = Depends(get_db), owner: str = Depends(get_principal)):
    profile = get_profile(db, owner)
    return ProfileResponse(name=profile.name) if profile else None


@router.put("", response_model=ProfileResponse)
def write_profile(
    payload: ProfileRequest,
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    return ProfileResponse(name=save_profile(db, owner, payload.name).name)
