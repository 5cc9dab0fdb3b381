from datetime import datetime
from sqlalchemy import BigInteger, Integer, String, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from habitlog.db.base import Base


class InvestmentGoal(Base):
    __tablename__ = "investment_goals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    owner: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    asset: Mapped[str] = mapped_column(String(128), nullable=False)
    currently_held: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    target: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class InvestmentDiaryEntry(Base):
    """A dated contribution note. `date` is a nanosecond epoch timestamp."""

    __tablename__ = "investment_diary_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    owner: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    date: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    asset: Mapped[str] = mapped_column(String(128), nullable=False)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
