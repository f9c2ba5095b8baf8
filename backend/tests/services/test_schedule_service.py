# backend/tests/services/test_schedule_service.py
"""Tests for weekly hours and availability block management."""

from datetime import date, time
from unittest.mock import MagicMock

import pytest

from slotbook.core.exceptions import (
    NotFoundException,
    RepositoryException,
    ServiceException,
    ValidationException,
)
from slotbook.models import AvailabilityBlock, WeeklySchedule
from slotbook.schemas.availability import AvailabilityBlockCreate, WeeklyScheduleEntry
from slotbook.services.schedule_service import ScheduleService
from tests.helpers.factories import create_block, create_business, create_schedule_day


@pytest.fixture
def service(db):
    return ScheduleService(db)


class TestReplaceWeeklySchedule:
    def test_replaces_existing_rows(self, service, db, business):
        create_schedule_day(db, business.id, 3, time(8, 0), time(9, 0))

        result = service.replace_weekly_schedule(
            business.id,
            [
                WeeklyScheduleEntry(day_of_week=1, start_time=time(9, 0), end_time=time(17, 0)),
                WeeklyScheduleEntry(day_of_week=2, start_time=time(10, 0), end_time=time(15, 0)),
            ],
        )

        assert [entry.day_of_week for entry in result] == [1, 2]
        assert db.query(WeeklySchedule).filter_by(business_id=business.id).count() == 2

    def test_unavailable_day_stored_without_times(self, service, db, business):
        result = service.replace_weekly_schedule(
            business.id,
            [
                WeeklyScheduleEntry(
                    day_of_week=0, start_time=time(9, 0), end_time=time(12, 0), is_available=False
                )
            ],
        )

        assert len(result) == 1
        assert result[0].is_available is False
        assert result[0].start_time is None
        assert result[0].end_time is None

    def test_duplicate_day_keeps_last_entry(self, service, business):
        result = service.replace_weekly_schedule(
            business.id,
            [
                WeeklyScheduleEntry(day_of_week=4, start_time=time(9, 0), end_time=time(12, 0)),
                WeeklyScheduleEntry(day_of_week=4, start_time=time(13, 0), end_time=time(18, 0)),
            ],
        )

        assert len(result) == 1
        assert result[0].start_time == time(13, 0)

    def test_other_business_untouched(self, service, db, business):
        other = create_business(db, name="Other")
        create_schedule_day(db, other.id, 1)

        service.replace_weekly_schedule(business.id, [])

        assert db.query(WeeklySchedule).filter_by(business_id=other.id).count() == 1

    def test_available_day_missing_time_is_rejected(self, service, db, business):
        create_schedule_day(db, business.id, 3)

        with pytest.raises(ValidationException) as exc_info:
            service.replace_weekly_schedule(
                business.id, [WeeklyScheduleEntry(day_of_week=2, start_time=time(9, 0))]
            )

        assert (
            exc_info.value.message
            == "Day 2 is marked as available but missing start time or end time"
        )
        # Nothing was replaced
        assert db.query(WeeklySchedule).filter_by(business_id=business.id).count() == 1

    def test_inverted_times_rejected(self, service, business):
        with pytest.raises(ValidationException):
            service.replace_weekly_schedule(
                business.id,
                [WeeklyScheduleEntry(day_of_week=1, start_time=time(17, 0), end_time=time(9, 0))],
            )

    @pytest.mark.parametrize("day", [-1, 7])
    def test_day_out_of_range_rejected(self, service, business, day):
        with pytest.raises(ValidationException):
            service.replace_weekly_schedule(
                business.id,
                [WeeklyScheduleEntry(day_of_week=day, start_time=time(9, 0), end_time=time(12, 0))],
            )

    def test_store_failure_raises_service_exception(self, db):
        schedule_repository = MagicMock()
        schedule_repository.delete_for_business.side_effect = RepositoryException("lock timeout")
        service = ScheduleService(db, schedule_repository=schedule_repository)

        with pytest.raises(ServiceException):
            service.replace_weekly_schedule("biz", [])


class TestBlocks:
    def test_create_partial_block(self, service, db, business):
        block = service.create_block(
            business.id,
            AvailabilityBlockCreate(
                block_date=date(2026, 3, 10),
                start_time=time(12, 0),
                end_time=time(13, 0),
                reason="Staff lunch",
            ),
        )

        assert block.id
        stored = db.query(AvailabilityBlock).filter_by(id=block.id).one()
        assert stored.reason == "Staff lunch"
        assert stored.is_all_day is False

    def test_create_all_day_block(self, service, business):
        block = service.create_block(
            business.id, AvailabilityBlockCreate(block_date=date(2026, 12, 25), is_all_day=True)
        )

        assert block.is_all_day is True
        assert block.start_time is None

    def test_create_rejects_inverted_window(self, service, business):
        data = AvailabilityBlockCreate.model_construct(
            block_date=date(2026, 3, 10),
            start_time=time(14, 0),
            end_time=time(13, 0),
            reason=None,
            is_all_day=False,
        )

        with pytest.raises(ValidationException):
            service.create_block(business.id, data)

    def test_list_newest_first(self, service, db, business):
        create_block(db, business.id, date(2026, 3, 10), is_all_day=True)
        create_block(db, business.id, date(2026, 4, 1), is_all_day=True)
        create_block(db, business.id, date(2026, 3, 20), is_all_day=True)

        blocks = service.list_blocks(business.id)

        assert [b.block_date for b in blocks] == [
            date(2026, 4, 1),
            date(2026, 3, 20),
            date(2026, 3, 10),
        ]

    def test_list_within_range(self, service, db, business):
        create_block(db, business.id, date(2026, 3, 10), is_all_day=True)
        create_block(db, business.id, date(2026, 4, 1), is_all_day=True)

        blocks = service.list_blocks(business.id, date(2026, 3, 1), date(2026, 3, 31))

        assert [b.block_date for b in blocks] == [date(2026, 3, 10)]

    def test_delete_block(self, service, db, business):
        block = create_block(db, business.id, date(2026, 3, 10), is_all_day=True)

        service.delete_block(business.id, block.id)

        assert db.query(AvailabilityBlock).count() == 0

    def test_delete_other_business_block_is_not_found(self, service, db, business):
        other = create_business(db, name="Other")
        block = create_block(db, other.id, date(2026, 3, 10), is_all_day=True)

        with pytest.raises(NotFoundException) as exc_info:
            service.delete_block(business.id, block.id)

        assert exc_info.value.message == "Block not found or access denied"
        assert db.query(AvailabilityBlock).count() == 1

    def test_delete_missing_block_is_not_found(self, service, business):
        with pytest.raises(NotFoundException):
            service.delete_block(business.id, "01HZZZZZZZZZZZZZZZZZZZZZZZ")
