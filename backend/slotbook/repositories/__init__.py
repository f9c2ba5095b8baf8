"""
Repository layer for the booking slot engine.

Each repository owns the queries for one table; services compose them.
"""

from .base_repository import BaseRepository
from .block_repository import BlockRepository
from .booking_repository import BookingRepository
from .business_repository import BusinessRepository
from .factory import RepositoryFactory
from .schedule_repository import ScheduleRepository
from .slot_lock_repository import SlotLockRepository

__all__ = [
    "BaseRepository",
    "BlockRepository",
    "BookingRepository",
    "BusinessRepository",
    "RepositoryFactory",
    "ScheduleRepository",
    "SlotLockRepository",
]
