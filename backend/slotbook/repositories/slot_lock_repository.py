# backend/slotbook/repositories/slot_lock_repository.py
"""
Slot Lock Repository

Read/write access to checkout holds. The acquire path is a single
INSERT ... ON CONFLICT ... DO UPDATE ... WHERE statement so two concurrent
callers for the same (business, date, time) can never both win.

All "now" values are passed in by the caller; nothing here reads the
database clock, so lock expiry follows the engine's Clock.
"""

from datetime import date, datetime, time
import logging
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.slot_lock import SlotLock
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

SLOT_KEY_COLUMNS = ["business_id", "booking_date", "booking_time"]


class SlotLockRepository(BaseRepository[SlotLock]):
    def __init__(self, db: Session):
        super().__init__(db, SlotLock)

    def get_active_locks_in_range(
        self, business_id: str, start_date: date, end_date: date, now: datetime
    ) -> List[SlotLock]:
        """Locks in the date range whose expires_at is strictly after now."""
        query = self._build_query().filter(
            SlotLock.business_id == business_id,
            SlotLock.booking_date >= start_date,
            SlotLock.booking_date <= end_date,
            SlotLock.expires_at > now,
        )
        return self._execute_query(query)

    def get_lock(self, business_id: str, slot_date: date, slot_time: time) -> Optional[SlotLock]:
        return self.find_one_by(
            business_id=business_id, booking_date=slot_date, booking_time=slot_time
        )

    def try_acquire(
        self,
        business_id: str,
        slot_date: date,
        slot_time: time,
        locked_by: str,
        expires_at: datetime,
        now: datetime,
    ) -> bool:
        """
        Take the hold on a slot in one atomic statement.

        Inserts a new row, or overwrites an existing row only when that row has
        already expired (expires_at < now). A live lock held by anyone makes
        the statement a no-op.

        Returns:
            True if this call wrote the row, False if a live lock blocked it

        Raises:
            RepositoryException: If the statement fails
        """
        stmt = self._upsert_statement(
            business_id=business_id,
            booking_date=slot_date,
            booking_time=slot_time,
            locked_by=locked_by,
            expires_at=expires_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=SLOT_KEY_COLUMNS,
            set_={
                "locked_by": stmt.excluded.locked_by,
                "expires_at": stmt.excluded.expires_at,
            },
            where=SlotLock.expires_at < now,
        )

        try:
            if self.dialect_name == "postgresql":
                result = self.db.execute(stmt.returning(SlotLock.id))
                return result.scalar_one_or_none() is not None

            result = self.db.execute(stmt)
            return bool(getattr(result, "rowcount", 0))
        except SQLAlchemyError as e:
            self.logger.error(
                f"Error acquiring lock on {business_id} {slot_date} {slot_time}: {str(e)}"
            )
            raise RepositoryException(f"Failed to acquire slot lock: {str(e)}")

    def release(self, business_id: str, slot_date: date, slot_time: time) -> int:
        """Delete the lock for a slot regardless of holder. Returns rows deleted."""
        stmt = delete(SlotLock).where(
            SlotLock.business_id == business_id,
            SlotLock.booking_date == slot_date,
            SlotLock.booking_time == slot_time,
        )
        try:
            result = self.db.execute(stmt)
            return int(result.rowcount or 0)
        except SQLAlchemyError as e:
            self.logger.error(f"Error releasing lock on {business_id} {slot_date} {slot_time}: {str(e)}")
            raise RepositoryException(f"Failed to release slot lock: {str(e)}")

    def delete_expired(self, now: datetime) -> int:
        """Delete every lock whose expires_at has passed. Returns rows deleted."""
        stmt = delete(SlotLock).where(SlotLock.expires_at < now)
        try:
            result = self.db.execute(stmt)
            return int(result.rowcount or 0)
        except SQLAlchemyError as e:
            self.logger.error(f"Error sweeping expired slot locks: {str(e)}")
            raise RepositoryException(f"Failed to delete expired slot locks: {str(e)}")
