# backend/slotbook/repositories/schedule_repository.py
"""
Schedule Repository

Data access for a business's recurring weekly open hours.
"""

from datetime import time
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from ..core.exceptions import RepositoryException
from ..models.availability import WeeklySchedule
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ScheduleRepository(BaseRepository[WeeklySchedule]):
    """Repository for weekly schedule rows, keyed by (business_id, day_of_week)."""

    def __init__(self, db: Session):
        super().__init__(db, WeeklySchedule)

    def get_weekly_schedule(self, business_id: str) -> List[WeeklySchedule]:
        """All schedule rows for a business ordered by day_of_week."""
        query = (
            self._build_query()
            .filter(WeeklySchedule.business_id == business_id)
            .order_by(WeeklySchedule.day_of_week)
        )
        return self._execute_query(query)

    def delete_for_business(self, business_id: str) -> int:
        """Remove every schedule row for a business. Returns rows deleted."""
        try:
            deleted = (
                self._build_query()
                .filter(WeeklySchedule.business_id == business_id)
                .delete(synchronize_session=False)
            )
            self.db.flush()
            return int(deleted or 0)
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting schedule for {business_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete schedule: {str(e)}")

    def upsert_day(
        self,
        business_id: str,
        day_of_week: int,
        start_time: Optional[time],
        end_time: Optional[time],
        is_available: bool,
    ) -> None:
        """Insert or overwrite the row for one day of the week."""
        stmt = self._upsert_statement(
            business_id=business_id,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            is_available=is_available,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["business_id", "day_of_week"],
            set_={
                "start_time": stmt.excluded.start_time,
                "end_time": stmt.excluded.end_time,
                "is_available": stmt.excluded.is_available,
                "updated_at": func.now(),
            },
        )
        try:
            self.db.execute(stmt)
        except SQLAlchemyError as e:
            self.logger.error(
                f"Error upserting schedule day {day_of_week} for {business_id}: {str(e)}"
            )
            raise RepositoryException(f"Failed to save schedule day: {str(e)}")
