# backend/slotbook/repositories/factory.py
"""
Repository Factory for the booking slot engine.

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from sqlalchemy.orm import Session

from .block_repository import BlockRepository
from .booking_repository import BookingRepository
from .business_repository import BusinessRepository
from .schedule_repository import ScheduleRepository
from .slot_lock_repository import SlotLockRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation so services can swap implementations in tests.
    """

    @staticmethod
    def create_schedule_repository(db: Session) -> ScheduleRepository:
        """Create repository for weekly schedule rows."""
        return ScheduleRepository(db)

    @staticmethod
    def create_block_repository(db: Session) -> BlockRepository:
        """Create repository for availability blocks."""
        return BlockRepository(db)

    @staticmethod
    def create_booking_repository(db: Session) -> BookingRepository:
        """Create repository for booked slots."""
        return BookingRepository(db)

    @staticmethod
    def create_slot_lock_repository(db: Session) -> SlotLockRepository:
        """Create repository for checkout holds."""
        return SlotLockRepository(db)

    @staticmethod
    def create_business_repository(db: Session) -> BusinessRepository:
        """Create repository for business policy lookups."""
        return BusinessRepository(db)
