from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from habitlog.core.errors import ValidationFailedError
from habitlog.models.profile import UserProfile


def get_profile(db: Session, owner: str) -> Optional[UserProfile]:
    return db.get(UserProfile, owner)


def save_profile(db: Session, owner: str, name: str) -> UserProfile:
    cleaned = name.strip() if isinstance(name, str) else ""
    if not cleaned:
        raise ValidationFailedError("Profile name must not be empty.", field="name")
    profile = get_profile(db, owner)
    if profile is None:
        profile = UserProfile(owner=owner, name=cleaned)
        db.add(profile)
    else:
        profile.name = cleaned
    db.commit()
    db.refresh(profile)
    return profile
