# backend/slotbook/repositories/booking_repository.py
"""
Booking Repository

Read-only view of committed, non-cancelled bookings for availability checks.
"""

from datetime import date
import logging
from typing import List

from sqlalchemy.orm import Session

from ..models.booking import Booking, BookingStatus
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[Booking]):
    def __init__(self, db: Session):
        super().__init__(db, Booking)

    def get_active_bookings_in_range(
        self, business_id: str, start_date: date, end_date: date
    ) -> List[Booking]:
        """
        Bookings that occupy a slot between start_date and end_date inclusive.

        Cancelled bookings and rows without a date or time never occupy a slot.
        """
        query = self._build_query().filter(
            Booking.business_id == business_id,
            Booking.booking_date.isnot(None),
            Booking.booking_time.isnot(None),
            Booking.booking_date >= start_date,
            Booking.booking_date <= end_date,
            Booking.booking_status != BookingStatus.CANCELLED.value,
        )
        return self._execute_query(query)
