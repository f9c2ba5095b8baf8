# backend/slotbook/models/availability.py
"""
Availability models for the booking slot engine.

Classes:
    WeeklySchedule: Recurring open hours for one day of the week
    AvailabilityBlock: Owner-declared full or partial day closure
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class WeeklySchedule(Base):
    """
    Recurring weekly hours for a business.

    day_of_week uses 0 = Sunday through 6 = Saturday. At most one row
    exists per (business, day_of_week).
    """

    __tablename__ = "business_availability_schedules"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    business_id = Column(
        String(26), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False
    )
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    is_available = Column(Boolean, nullable=False, server_default=text("true"), default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    business = relationship("Business", back_populates="weekly_schedules")

    __table_args__ = (
        UniqueConstraint("business_id", "day_of_week", name="uq_schedule_business_day"),
        CheckConstraint("day_of_week >= 0 AND day_of_week <= 6", name="ck_schedule_day_of_week"),
        Index("idx_business_availability_schedules_business_id", "business_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<WeeklySchedule day={self.day_of_week} "
            f"{self.start_time}-{self.end_time} available={self.is_available}>"
        )


class AvailabilityBlock(Base):
    """Ad-hoc closure on a single date, either all day or [start_time, end_time)."""

    __tablename__ = "business_availability_blocks"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    business_id = Column(
        String(26), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False
    )
    block_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    reason = Column(Text, nullable=True)
    is_all_day = Column(Boolean, nullable=False, server_default=text("false"), default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    business = relationship("Business", back_populates="availability_blocks")

    __table_args__ = (
        Index("idx_business_availability_blocks_business_date", "business_id", "block_date"),
    )

    def __repr__(self) -> str:
        span = "all day" if self.is_all_day else f"{self.start_time}-{self.end_time}"
        return f"<AvailabilityBlock {self.block_date} {span}>"
