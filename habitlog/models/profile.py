from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from habitlog.db.base import Base


class UserProfile(Base):
    __tablename__ = "user_profiles"

    owner: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
