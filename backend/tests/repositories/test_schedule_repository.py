# backend/tests/repositories/test_schedule_repository.py
"""Tests for ScheduleRepository and the shared upsert helper."""

from datetime import time
from unittest.mock import MagicMock

import pytest

from slotbook.core.exceptions import RepositoryException
from slotbook.models import WeeklySchedule
from slotbook.repositories.schedule_repository import ScheduleRepository
from tests.helpers.factories import create_schedule_day


@pytest.fixture
def repository(db):
    return ScheduleRepository(db)


class TestScheduleRepository:
    def test_weekly_schedule_is_ordered(self, repository, db, business):
        for day in (6, 2, 0):
            create_schedule_day(db, business.id, day)

        rows = repository.get_weekly_schedule(business.id)

        assert [row.day_of_week for row in rows] == [0, 2, 6]

    def test_upsert_inserts_then_updates(self, repository, db, business):
        repository.upsert_day(business.id, 1, time(9, 0), time(12, 0), True)
        repository.upsert_day(business.id, 1, time(13, 0), time(17, 0), True)
        db.commit()

        rows = repository.get_weekly_schedule(business.id)
        assert len(rows) == 1
        assert (rows[0].start_time, rows[0].end_time) == (time(13, 0), time(17, 0))

    def test_delete_for_business(self, repository, db, business):
        create_schedule_day(db, business.id, 1)
        create_schedule_day(db, business.id, 2)

        assert repository.delete_for_business(business.id) == 2
        assert db.query(WeeklySchedule).count() == 0

    def test_upsert_unsupported_dialect(self):
        db = MagicMock()
        db.get_bind.return_value.dialect.name = "mysql"
        repository = ScheduleRepository(db)

        with pytest.raises(RepositoryException):
            repository.upsert_day("biz", 1, time(9, 0), time(12, 0), True)
