from datetime import datetime
from sqlalchemy import Integer, String, Text, DateTime, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from habitlog.db.base import Base


class DiaryEntry(Base):
    """
    Daily journal entry keyed by a date string (normally YYYY-MM-DD).

    title encodes the energy level ("Energy: 3"); content holds the
    Win: / Friction: / Investment Mindset: sections.
    """

    __tablename__ = "diary_entries"
    __table_args__ = (UniqueConstraint("owner", "date_key", name="uq_diary_owner_date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    owner: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    date_key: Mapped[str] = mapped_column(String(32), nullable=False)
    title: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
