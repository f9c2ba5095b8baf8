# backend/slotbook/services/schedule_service.py
"""
Schedule Service for the booking slot engine.

Owner-facing configuration: the recurring weekly hours of a business and the
ad-hoc closures that override them.
"""

from datetime import date
import logging
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from ..core.constants import ERROR_BLOCK_NOT_FOUND, MAX_DAY_OF_WEEK, MIN_DAY_OF_WEEK
from ..core.exceptions import NotFoundException, RepositoryException, ServiceException, ValidationException
from ..models.availability import AvailabilityBlock
from ..repositories.factory import RepositoryFactory
from ..schemas.availability import AvailabilityBlockCreate, WeeklyScheduleEntry
from .base import BaseService

logger = logging.getLogger(__name__)


class ScheduleService(BaseService):
    """Manages weekly hours and availability blocks for a business."""

    def __init__(self, db: Session, schedule_repository=None, block_repository=None):
        super().__init__(db)
        self.schedule_repository = (
            schedule_repository or RepositoryFactory.create_schedule_repository(db)
        )
        self.block_repository = block_repository or RepositoryFactory.create_block_repository(db)

    @BaseService.measure_operation("replace_weekly_schedule")
    def replace_weekly_schedule(
        self, business_id: str, entries: Sequence[WeeklyScheduleEntry]
    ) -> List[WeeklyScheduleEntry]:
        """
        Replace every weekly schedule row of a business.

        Days not marked available are stored with no times. The delete and the
        per-day upserts happen in one transaction.

        Raises:
            ValidationException: If a day is out of range or an available day
                has missing or inverted times
        """
        for entry in entries:
            self._validate_entry(entry)

        try:
            with self.transaction():
                self.schedule_repository.delete_for_business(business_id)
                for entry in entries:
                    if entry.is_available:
                        self.schedule_repository.upsert_day(
                            business_id,
                            entry.day_of_week,
                            entry.start_time,
                            entry.end_time,
                            True,
                        )
                    else:
                        self.schedule_repository.upsert_day(
                            business_id, entry.day_of_week, None, None, False
                        )
        except RepositoryException as e:
            self.logger.error(f"Failed to save weekly schedule for {business_id}: {str(e)}")
            raise ServiceException(
                "Failed to save weekly schedule", details={"business_id": business_id}
            )

        self.logger.info(
            f"Replaced weekly schedule for business {business_id} with {len(entries)} days"
        )
        rows = self.schedule_repository.get_weekly_schedule(business_id)
        return [WeeklyScheduleEntry.model_validate(row) for row in rows]

    @BaseService.measure_operation("list_blocks")
    def list_blocks(
        self,
        business_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[AvailabilityBlock]:
        try:
            return self.block_repository.list_blocks(business_id, start_date, end_date)
        except RepositoryException as e:
            self.logger.error(f"Failed to list blocks for {business_id}: {str(e)}")
            raise ServiceException("Failed to list availability blocks")

    @BaseService.measure_operation("create_block")
    def create_block(self, business_id: str, data: AvailabilityBlockCreate) -> AvailabilityBlock:
        """Close the business for a whole day or a [start_time, end_time) window."""
        if data.start_time and data.end_time and data.start_time >= data.end_time:
            raise ValidationException(
                "Block end time must be after start time",
                details={
                    "start_time": data.start_time.isoformat(),
                    "end_time": data.end_time.isoformat(),
                },
            )

        try:
            with self.transaction():
                block = self.block_repository.create(
                    business_id=business_id,
                    block_date=data.block_date,
                    start_time=data.start_time,
                    end_time=data.end_time,
                    reason=data.reason,
                    is_all_day=data.is_all_day,
                )
        except RepositoryException as e:
            self.logger.error(f"Failed to create block for {business_id}: {str(e)}")
            raise ServiceException("Failed to create availability block")

        self.logger.info(f"Created availability block {block.id} on {data.block_date}")
        return block

    @BaseService.measure_operation("delete_block")
    def delete_block(self, business_id: str, block_id: str) -> None:
        """
        Remove a block owned by the business.

        Raises:
            NotFoundException: If the block does not exist or belongs to
                another business
        """
        try:
            block = self.block_repository.get_for_business(block_id, business_id)
            if block is None:
                raise NotFoundException(ERROR_BLOCK_NOT_FOUND, details={"block_id": block_id})
            with self.transaction():
                self.block_repository.delete(block_id)
        except RepositoryException as e:
            self.logger.error(f"Failed to delete block {block_id}: {str(e)}")
            raise ServiceException("Failed to delete availability block")

        self.logger.info(f"Deleted availability block {block_id}")

    @staticmethod
    def _validate_entry(entry: WeeklyScheduleEntry) -> None:
        if not MIN_DAY_OF_WEEK <= entry.day_of_week <= MAX_DAY_OF_WEEK:
            raise ValidationException(
                f"day_of_week must be between {MIN_DAY_OF_WEEK} and {MAX_DAY_OF_WEEK}",
                details={"day_of_week": entry.day_of_week},
            )
        if not entry.is_available:
            return
        if entry.start_time is None or entry.end_time is None:
            raise ValidationException(
                f"Day {entry.day_of_week} is marked as available but missing start time or end time",
                details={"day_of_week": entry.day_of_week},
            )
        if entry.start_time >= entry.end_time:
            raise ValidationException(
                f"Day {entry.day_of_week} start time must be before end time",
                details={"day_of_week": entry.day_of_week},
            )
