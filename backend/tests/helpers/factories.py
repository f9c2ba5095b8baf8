# backend/tests/helpers/factories.py
"""
Row builders for tests.

Each helper commits so the rows are visible to services that open their own
transactions on the same session.
"""

from datetime import date, datetime, time
from typing import Optional

from sqlalchemy.orm import Session

from slotbook.models import AvailabilityBlock, Booking, BookingStatus, Business, SlotLock, WeeklySchedule


def create_business(
    db: Session,
    name: str = "Corner Bakery",
    same_day_pickup_allowed: Optional[bool] = True,
    cutoff_time: Optional[time] = None,
) -> Business:
    business = Business(
        name=name, same_day_pickup_allowed=same_day_pickup_allowed, cutoff_time=cutoff_time
    )
    db.add(business)
    db.commit()
    return business


def create_schedule_day(
    db: Session,
    business_id: str,
    day_of_week: int,
    start_time: Optional[time] = time(9, 0),
    end_time: Optional[time] = time(12, 0),
    is_available: bool = True,
) -> WeeklySchedule:
    row = WeeklySchedule(
        business_id=business_id,
        day_of_week=day_of_week,
        start_time=start_time,
        end_time=end_time,
        is_available=is_available,
    )
    db.add(row)
    db.commit()
    return row


def create_block(
    db: Session,
    business_id: str,
    block_date: date,
    start_time: Optional[time] = None,
    end_time: Optional[time] = None,
    is_all_day: bool = False,
    reason: Optional[str] = None,
) -> AvailabilityBlock:
    block = AvailabilityBlock(
        business_id=business_id,
        block_date=block_date,
        start_time=start_time,
        end_time=end_time,
        is_all_day=is_all_day,
        reason=reason,
    )
    db.add(block)
    db.commit()
    return block


def create_booking(
    db: Session,
    business_id: str,
    booking_date: Optional[date],
    booking_time: Optional[time],
    status: BookingStatus = BookingStatus.CONFIRMED,
) -> Booking:
    booking = Booking(
        business_id=business_id,
        booking_date=booking_date,
        booking_time=booking_time,
        booking_duration_minutes=60,
        booking_status=status.value,
    )
    db.add(booking)
    db.commit()
    return booking


def create_lock(
    db: Session,
    business_id: str,
    booking_date: date,
    booking_time: time,
    locked_by: str,
    expires_at: datetime,
) -> SlotLock:
    lock = SlotLock(
        business_id=business_id,
        booking_date=booking_date,
        booking_time=booking_time,
        locked_by=locked_by,
        expires_at=expires_at,
    )
    db.add(lock)
    db.commit()
    return lock
