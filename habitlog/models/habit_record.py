from datetime import datetime
from sqlalchemy import (
    BigInteger, Integer, String, DateTime, Enum, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from habitlog.db.base import Base
from habitlog.services.units import HabitUnit, UnitKind


class HabitRecord(Base):
    """
    One completion per (owner, habit, day, month, year).

    unit_* and habit_name are copies of the habit at write time; later edits
    to the habit never rewrite them.
    """

    __tablename__ = "habit_records"
    __table_args__ = (
        UniqueConstraint(
            "owner", "habit_id", "year", "month", "day", name="uq_habit_record_key"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    owner: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    habit_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    amount: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    unit_kind: Mapped[str] = mapped_column(
        Enum(UnitKind, name="habit_unit_enum"), nullable=False
    )
    unit_label: Mapped[str | None] = mapped_column(String(64), nullable=True)
    habit_name: Mapped[str] = mapped_column(String(256), nullable=False)

    @property
    def unit(self) -> HabitUnit:
        return HabitUnit(UnitKind(self.unit_kind), self.unit_label)