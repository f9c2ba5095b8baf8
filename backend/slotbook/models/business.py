# backend/slotbook/models/business.py
"""
Business model.

Only the same-day pickup policy columns are consumed by the slot engine; the
rest of the business profile belongs to other subsystems.
"""

from sqlalchemy import Boolean, Column, DateTime, String, Time, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class Business(Base):
    """A seller on the marketplace that offers bookable time slots."""

    __tablename__ = "businesses"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    name = Column(String(255), nullable=False)

    # Same-day pickup policy. NULL is treated as "allowed".
    same_day_pickup_allowed = Column(Boolean, nullable=True, server_default=text("true"), default=True)
    cutoff_time = Column(Time, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    weekly_schedules = relationship(
        "WeeklySchedule",
        back_populates="business",
        cascade="all, delete-orphan",
        order_by="WeeklySchedule.day_of_week",
    )
    availability_blocks = relationship(
        "AvailabilityBlock", back_populates="business", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Business {self.id} {self.name}>"
