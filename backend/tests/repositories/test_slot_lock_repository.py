# backend/tests/repositories/test_slot_lock_repository.py
"""
Tests for SlotLockRepository.

The conditional upsert runs for real on SQLite; the PostgreSQL statement is
checked by compiling it.
"""

from datetime import date, datetime, time, timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from slotbook.core.exceptions import RepositoryException
from slotbook.models import SlotLock
from slotbook.repositories.slot_lock_repository import SlotLockRepository
from tests.helpers.factories import create_lock

SLOT_DATE = date(2026, 3, 9)
SLOT_TIME = time(10, 0)
NOW = datetime(2026, 3, 2, 10, 0)


@pytest.fixture
def repository(db):
    return SlotLockRepository(db)


class TestTryAcquire:
    def test_first_caller_inserts(self, repository, db, business):
        acquired = repository.try_acquire(
            business.id, SLOT_DATE, SLOT_TIME, "shopper-a", NOW + timedelta(minutes=15), NOW
        )
        db.commit()

        assert acquired is True
        lock = repository.get_lock(business.id, SLOT_DATE, SLOT_TIME)
        assert lock.locked_by == "shopper-a"
        assert len(lock.id) == 26

    def test_live_lock_is_not_overwritten(self, repository, db, business):
        create_lock(db, business.id, SLOT_DATE, SLOT_TIME, "shopper-a", NOW + timedelta(minutes=1))

        acquired = repository.try_acquire(
            business.id, SLOT_DATE, SLOT_TIME, "shopper-b", NOW + timedelta(minutes=15), NOW
        )
        db.commit()
        db.expire_all()

        assert acquired is False
        assert repository.get_lock(business.id, SLOT_DATE, SLOT_TIME).locked_by == "shopper-a"

    def test_live_lock_not_renewed_by_same_holder(self, repository, db, business):
        original_expiry = NOW + timedelta(minutes=1)
        create_lock(db, business.id, SLOT_DATE, SLOT_TIME, "shopper-a", original_expiry)

        acquired = repository.try_acquire(
            business.id, SLOT_DATE, SLOT_TIME, "shopper-a", NOW + timedelta(minutes=15), NOW
        )
        db.expire_all()

        assert acquired is False
        assert repository.get_lock(business.id, SLOT_DATE, SLOT_TIME).expires_at == original_expiry

    def test_expired_lock_is_superseded(self, repository, db, business):
        create_lock(db, business.id, SLOT_DATE, SLOT_TIME, "shopper-a", NOW - timedelta(seconds=1))

        acquired = repository.try_acquire(
            business.id, SLOT_DATE, SLOT_TIME, "shopper-b", NOW + timedelta(minutes=15), NOW
        )
        db.commit()
        db.expire_all()

        assert acquired is True
        lock = repository.get_lock(business.id, SLOT_DATE, SLOT_TIME)
        assert lock.locked_by == "shopper-b"
        assert lock.expires_at == NOW + timedelta(minutes=15)
        assert db.query(SlotLock).count() == 1

    def test_different_slot_does_not_conflict(self, repository, db, business):
        create_lock(db, business.id, SLOT_DATE, SLOT_TIME, "shopper-a", NOW + timedelta(minutes=5))

        acquired = repository.try_acquire(
            business.id, SLOT_DATE, time(10, 30), "shopper-b", NOW + timedelta(minutes=15), NOW
        )

        assert acquired is True

    def test_postgres_statement_is_single_conditional_upsert(self):
        db = MagicMock()
        db.get_bind.return_value.dialect.name = "postgresql"
        db.execute.return_value.scalar_one_or_none.return_value = "01HXLOCKIDXXXXXXXXXXXXXXXX"
        repository = SlotLockRepository(db)

        acquired = repository.try_acquire(
            "biz", SLOT_DATE, SLOT_TIME, "shopper-a", NOW + timedelta(minutes=15), NOW
        )

        assert acquired is True
        assert db.execute.call_count == 1
        statement = db.execute.call_args[0][0]
        sql = str(statement.compile(dialect=postgresql.dialect()))
        assert "ON CONFLICT (business_id, booking_date, booking_time) DO UPDATE" in sql
        assert "SET locked_by = excluded.locked_by, expires_at = excluded.expires_at" in sql
        assert "WHERE booking_locks.expires_at <" in sql
        assert "RETURNING booking_locks.id" in sql

    def test_postgres_no_row_returned_means_lost(self):
        db = MagicMock()
        db.get_bind.return_value.dialect.name = "postgresql"
        db.execute.return_value.scalar_one_or_none.return_value = None
        repository = SlotLockRepository(db)

        assert (
            repository.try_acquire(
                "biz", SLOT_DATE, SLOT_TIME, "shopper-a", NOW + timedelta(minutes=15), NOW
            )
            is False
        )

    def test_database_error_is_wrapped(self):
        db = MagicMock()
        db.get_bind.return_value.dialect.name = "postgresql"
        db.execute.side_effect = OperationalError("INSERT", {}, Exception("server closed"))
        repository = SlotLockRepository(db)

        with pytest.raises(RepositoryException):
            repository.try_acquire(
                "biz", SLOT_DATE, SLOT_TIME, "shopper-a", NOW + timedelta(minutes=15), NOW
            )


class TestReadsAndDeletes:
    def test_active_locks_exclude_expired_and_out_of_range(self, repository, db, business):
        create_lock(db, business.id, SLOT_DATE, time(9, 0), "live", NOW + timedelta(minutes=5))
        create_lock(db, business.id, SLOT_DATE, time(9, 30), "expired", NOW - timedelta(minutes=5))
        create_lock(
            db,
            business.id,
            SLOT_DATE + timedelta(days=7),
            time(9, 0),
            "later",
            NOW + timedelta(minutes=5),
        )

        locks = repository.get_active_locks_in_range(business.id, SLOT_DATE, SLOT_DATE, NOW)

        assert [lock.locked_by for lock in locks] == ["live"]

    def test_release_returns_rows_deleted(self, repository, db, business):
        create_lock(db, business.id, SLOT_DATE, SLOT_TIME, "shopper-a", NOW + timedelta(minutes=5))

        assert repository.release(business.id, SLOT_DATE, SLOT_TIME) == 1
        assert repository.release(business.id, SLOT_DATE, SLOT_TIME) == 0

    def test_delete_expired(self, repository, db, business):
        create_lock(db, business.id, SLOT_DATE, time(9, 0), "a", NOW - timedelta(minutes=1))
        create_lock(db, business.id, SLOT_DATE, time(9, 30), "b", NOW + timedelta(minutes=1))

        assert repository.delete_expired(NOW) == 1
