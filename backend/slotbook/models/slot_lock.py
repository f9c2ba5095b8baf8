# backend/slotbook/models/slot_lock.py
"""Short-lived checkout holds on a booking slot."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Time, UniqueConstraint
from sqlalchemy.sql import func
import ulid

from ..database import Base


class SlotLock(Base):
    """
    Exclusive hold on (business, date, time) while a shopper checks out.

    The unique key guarantees at most one row per slot; a row may only be
    taken over by a new holder once its expires_at has passed.
    """

    __tablename__ = "booking_locks"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    business_id = Column(
        String(26), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False
    )
    booking_date = Column(Date, nullable=False)
    booking_time = Column(Time, nullable=False)
    locked_by = Column(String(64), nullable=False)
    # Naive local wall-clock time, compared against the engine's clock
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint(
            "business_id", "booking_date", "booking_time", name="uq_booking_locks_slot"
        ),
    )

    def __repr__(self) -> str:
        return f"<SlotLock {self.booking_date} {self.booking_time} by={self.locked_by} until={self.expires_at}>"
