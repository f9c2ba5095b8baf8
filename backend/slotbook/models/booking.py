# backend/slotbook/models/booking.py
"""
Booking columns of the order record.

Orders are created by the checkout subsystem. The slot engine only reads the
booking date/time/status columns and treats committed rows as immutable facts.
"""

from enum import Enum

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Index, Integer, String, Time
from sqlalchemy.sql import func
import ulid

from ..database import Base


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Booking(Base):
    """An order that reserves a date/time with a business."""

    __tablename__ = "orders"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    business_id = Column(
        String(26), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False
    )
    booking_date = Column(Date, nullable=True)
    booking_time = Column(Time, nullable=True)
    booking_duration_minutes = Column(Integer, nullable=True)
    booking_status = Column(
        String(20), nullable=False, default=BookingStatus.CONFIRMED.value
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint(
            "booking_status IN ('confirmed', 'cancelled', 'completed')",
            name="ck_orders_booking_status",
        ),
        Index("idx_orders_booking_date_time", "business_id", "booking_date", "booking_time"),
    )

    def __repr__(self) -> str:
        return f"<Booking {self.booking_date} {self.booking_time} {self.booking_status}>"
