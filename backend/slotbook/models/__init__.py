"""
Database models for the booking slot engine.

- Business: seller profile carrying the same-day pickup policy
- WeeklySchedule / AvailabilityBlock: recurring hours and closures
- Booking: booking columns of committed orders
- SlotLock: checkout holds with a TTL
"""

from .availability import AvailabilityBlock, WeeklySchedule
from .booking import Booking, BookingStatus
from .business import Business
from .slot_lock import SlotLock

__all__ = [
    "AvailabilityBlock",
    "Booking",
    "BookingStatus",
    "Business",
    "SlotLock",
    "WeeklySchedule",
]
