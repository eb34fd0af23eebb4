from datetime import date, datetime

from sqlalchemy import CheckConstraint, Date, DateTime, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from src.core.database.base import Base


class CorrelativeCounter(Base):
    """Last correlative handed out for a business date. One row per date, never deleted."""

    __tablename__ = "correlative_counters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    business_date: Mapped[date] = mapped_column(Date, nullable=False)
    last_correlative: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("business_date", name="uq_correlative_counter_business_date"),
        CheckConstraint("last_correlative >= 1", name="ck_correlative_counter_positive"),
    )
