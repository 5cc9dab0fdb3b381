from sqlalchemy import BigInteger, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from habitlog.db.base import Base


class MonthlyTarget(Base):
    """Manual monthly target override. Plan defaults are never stored here."""

    __tablename__ = "monthly_targets"
    __table_args__ = (
        UniqueConstraint("owner", "habit_id", "year", "month", name="uq_monthly_target_key"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    owner: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    habit_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True
    )
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
