from datetime import datetime
from sqlalchemy import BigInteger, Integer, String, DateTime, Enum, func
from sqlalchemy.orm import Mapped, mapped_column

from habitlog.db.base import Base
from habitlog.services.units import HabitUnit, UnitKind


class Habit(Base):
    __tablename__ = "habits"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    owner: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    weekly_target: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_kind: Mapped[str] = mapped_column(
        Enum(UnitKind, name="habit_unit_enum"), nullable=False, default=UnitKind.reps
    )
    unit_label: Mapped[str | None] = mapped_column(String(64), nullable=True)
    default_amount: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    @property
    def unit(self) -> HabitUnit:
        return HabitUnit(UnitKind(self.unit_kind), self.unit_label)

    @unit.setter
    def unit(self, value: HabitUnit) -> None:
        self.unit_kind = value.kind
        self.unit_label = value.label if value.kind == UnitKind.custom else None
