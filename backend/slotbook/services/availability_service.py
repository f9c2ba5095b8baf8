# backend/slotbook/services/availability_service.py
"""
Availability Service for the booking slot engine.

Combines a business's weekly hours, ad-hoc closures, committed bookings and
live checkout holds into the list of bookable slots, and takes/releases the
short-lived holds that stop two shoppers checking out the same slot.

Reads are advisory: a slot shown as available can still be lost to a
concurrent checkout. The only hard guarantee is the single-statement
conditional upsert in SlotLockRepository.try_acquire.
"""

from collections import defaultdict
from datetime import date, time, timedelta
import logging
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from sqlalchemy.orm import Session

from ..core.clock import Clock
from ..core.config import settings
from ..core.constants import (
    DAY_END,
    DAY_START,
    DEFAULT_SLOT_DURATION_MINUTES,
    DEFAULT_SLOT_GRID_INTERVAL_MINUTES,
    DEFAULT_SLOT_INTERVAL_MINUTES,
)
from ..core.exceptions import DomainException, RepositoryException, ServiceException, ValidationException
from ..models.availability import AvailabilityBlock, WeeklySchedule
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from ..schemas.availability import SlotGridEntry, SlotState, TimeSlot, WeeklyScheduleEntry
from .base import BaseService
from .cutoff_policy import CutoffPolicy, SameDayPickupDecision, SameDayPolicy
from .slot_generator import generate_time_slots

logger = logging.getLogger(__name__)

SlotKey = Tuple[date, time]


def schedule_day_of_week(value: date) -> int:
    """Day index used by weekly schedules: 0 = Sunday ... 6 = Saturday."""
    return (value.weekday() + 1) % 7


def iter_dates(start_date: date, end_date: date) -> Iterable[date]:
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def is_time_blocked(block: AvailabilityBlock, slot_time: time) -> bool:
    """
    Whether a block covers a slot start time.

    All-day blocks cover everything. Partial blocks cover [start, end); a
    missing bound defaults to the start or end of the day.
    """
    if block.is_all_day:
        return True
    block_start = block.start_time or DAY_START
    block_end = block.end_time or DAY_END
    return block_start <= slot_time < block_end


class _RangeSnapshot:
    """Everything needed to judge the slots of a date range, read once."""

    def __init__(
        self,
        schedule_by_day: Dict[int, WeeklySchedule],
        blocks_by_date: Dict[date, List[AvailabilityBlock]],
        booked: Set[SlotKey],
        locked: Set[SlotKey],
        policy: SameDayPolicy,
    ):
        self.schedule_by_day = schedule_by_day
        self.blocks_by_date = blocks_by_date
        self.booked = booked
        self.locked = locked
        self.policy = policy

    def open_hours(self, day: date) -> Optional[Tuple[time, time]]:
        entry = self.schedule_by_day.get(schedule_day_of_week(day))
        if entry is None or not entry.is_available:
            return None
        if entry.start_time is None or entry.end_time is None:
            return None
        return entry.start_time, entry.end_time

    def is_blocked(self, day: date, slot_time: time) -> bool:
        return any(is_time_blocked(block, slot_time) for block in self.blocks_by_date.get(day, []))

    def state(self, day: date, slot_time: time) -> SlotState:
        if self.is_blocked(day, slot_time):
            return SlotState.BLOCKED
        if (day, slot_time) in self.booked:
            return SlotState.BOOKED
        if (day, slot_time) in self.locked:
            return SlotState.LOCKED
        return SlotState.AVAILABLE


class AvailabilityService(BaseService):
    """
    Service layer for slot availability and checkout holds.

    Every "now" comes from the injected clock, so cutoff and lock expiry can be
    pinned in tests.
    """

    def __init__(
        self,
        db: Session,
        clock: Optional[Clock] = None,
        schedule_repository=None,
        block_repository=None,
        booking_repository=None,
        slot_lock_repository=None,
        business_repository=None,
    ):
        super().__init__(db, clock)
        self.schedule_repository = (
            schedule_repository or RepositoryFactory.create_schedule_repository(db)
        )
        self.block_repository = block_repository or RepositoryFactory.create_block_repository(db)
        self.booking_repository = (
            booking_repository or RepositoryFactory.create_booking_repository(db)
        )
        self.slot_lock_repository = (
            slot_lock_repository or RepositoryFactory.create_slot_lock_repository(db)
        )
        self.business_repository = (
            business_repository or RepositoryFactory.create_business_repository(db)
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @BaseService.measure_operation("get_weekly_schedule")
    def get_weekly_schedule(self, business_id: str) -> List[WeeklyScheduleEntry]:
        """Weekly hours for a business ordered by day_of_week."""
        try:
            rows = self.schedule_repository.get_weekly_schedule(business_id)
        except RepositoryException as e:
            self.logger.error(f"Failed to load weekly schedule for {business_id}: {str(e)}")
            raise ServiceException(
                "Failed to load weekly schedule", details={"business_id": business_id}
            )
        return [WeeklyScheduleEntry.model_validate(row) for row in rows]

    @BaseService.measure_operation("get_available_slots")
    def get_available_slots(
        self,
        business_id: str,
        start_date: date,
        end_date: date,
        duration_minutes: int = DEFAULT_SLOT_DURATION_MINUTES,
        interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES,
    ) -> List[TimeSlot]:
        """
        Bookable slots for every date in [start_date, end_date].

        Dates closed by the weekly schedule or refused by the same-day pickup
        policy produce no entries at all. Open dates produce one entry per
        candidate start time, flagged unavailable when a block, booking or
        live hold covers it.

        Raises:
            ValidationException: Non-positive duration/interval or reversed range
            ServiceException: If the store cannot be read
        """
        self._validate_range(start_date, end_date, duration_minutes, interval_minutes)

        snapshot = self._load_snapshot(business_id, start_date, end_date)
        if snapshot is None:
            return []

        now = self.clock.now()
        slots: List[TimeSlot] = []
        for day in iter_dates(start_date, end_date):
            hours = snapshot.open_hours(day)
            if hours is None:
                continue

            decision = CutoffPolicy.evaluate(snapshot.policy, day, now)
            if not decision.eligible:
                self.logger.debug(f"Skipping {day} for {business_id}: {decision.reason}")
                continue

            for slot_time in generate_time_slots(
                hours[0], hours[1], duration_minutes, interval_minutes
            ):
                available = snapshot.state(day, slot_time) == SlotState.AVAILABLE
                slots.append(TimeSlot(date=day, time=slot_time, available=available))

        return slots

    @BaseService.measure_operation("get_slot_grid")
    def get_slot_grid(
        self,
        business_id: str,
        start_date: date,
        end_date: date,
        interval_minutes: int = DEFAULT_SLOT_GRID_INTERVAL_MINUTES,
        duration_minutes: int = DEFAULT_SLOT_DURATION_MINUTES,
    ) -> List[SlotGridEntry]:
        """
        Seller dashboard view: every slot in range with the reason it is taken.

        Precedence is blocked > booked > locked. The same-day pickup policy is
        not applied, so owners always see their whole day.
        """
        self._validate_range(start_date, end_date, duration_minutes, interval_minutes)

        snapshot = self._load_snapshot(business_id, start_date, end_date)
        if snapshot is None:
            return []

        grid: List[SlotGridEntry] = []
        for day in iter_dates(start_date, end_date):
            hours = snapshot.open_hours(day)
            if hours is None:
                continue
            for slot_time in generate_time_slots(
                hours[0], hours[1], duration_minutes, interval_minutes
            ):
                grid.append(
                    SlotGridEntry(date=day, time=slot_time, status=snapshot.state(day, slot_time))
                )
        return grid

    @BaseService.measure_operation("is_same_day_pickup_allowed")
    def is_same_day_pickup_allowed(self, business_id: str) -> SameDayPickupDecision:
        """
        Whether a pickup today can still be offered.

        A business row that cannot be found is treated as allowing same-day
        pickup.
        """
        try:
            business = self.business_repository.get_by_id(business_id)
        except RepositoryException as e:
            self.logger.error(f"Failed to load business {business_id}: {str(e)}")
            raise ServiceException("Failed to load business", details={"business_id": business_id})

        if business is None:
            self.logger.warning(
                f"Business {business_id} not found for same-day check, allowing",
                extra={"business_id": business_id},
            )
            return SameDayPickupDecision(allowed=True)

        now = self.clock.now()
        decision = CutoffPolicy.evaluate(SameDayPolicy.from_business(business), now.date(), now)
        return SameDayPickupDecision(allowed=decision.eligible, reason=decision.reason)

    # ------------------------------------------------------------------
    # Checkout holds
    # ------------------------------------------------------------------

    @BaseService.measure_operation("lock_slot")
    def lock_slot(
        self,
        business_id: str,
        slot_date: date,
        slot_time: time,
        user_id: str,
        *,
        duration_minutes: int = DEFAULT_SLOT_DURATION_MINUTES,
        interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES,
    ) -> bool:
        """
        Take a checkout hold on one slot for settings.slot_lock_ttl_minutes.

        The slot is re-checked against current availability first. The hold is
        then written by one atomic statement that only overwrites an expired
        hold, so concurrent callers can never both succeed.

        Returns:
            True if the hold was taken, False if the slot is unavailable, held
            by someone else, or the store failed
        """
        context = {
            "business_id": business_id,
            "slot_date": slot_date.isoformat(),
            "slot_time": slot_time.strftime("%H:%M"),
            "user_id": user_id,
        }

        try:
            slots = self.get_available_slots(
                business_id, slot_date, slot_date, duration_minutes, interval_minutes
            )
            target = slot_time.replace(second=0, microsecond=0)
            if not any(slot.time == target and slot.available for slot in slots):
                self.logger.info("Slot not available for hold", extra=context)
                prometheus_metrics.record_slot_lock("acquire", "unavailable")
                return False

            now = self.clock.now()
            expires_at = now + timedelta(minutes=settings.slot_lock_ttl_minutes)
            with self.transaction():
                acquired = self.slot_lock_repository.try_acquire(
                    business_id, slot_date, target, user_id, expires_at, now
                )
        except (DomainException, RepositoryException) as e:
            self.logger.error(f"Failed to lock slot: {str(e)}", extra=context)
            prometheus_metrics.record_slot_lock("acquire", "error")
            return False

        if not acquired:
            self.logger.info("Slot already held by another checkout", extra=context)
            prometheus_metrics.record_slot_lock("acquire", "blocked")
            return False

        self.logger.info("Slot hold taken", extra={**context, "expires_at": expires_at.isoformat()})
        prometheus_metrics.record_slot_lock("acquire", "success")
        return True

    @BaseService.measure_operation("release_lock")
    def release_lock(self, business_id: str, slot_date: date, slot_time: time) -> None:
        """Drop the hold on a slot, whoever holds it. Releasing nothing is fine."""
        # Holds are keyed on whole minutes, as written by lock_slot
        target = slot_time.replace(second=0, microsecond=0)
        try:
            with self.transaction():
                deleted = self.slot_lock_repository.release(business_id, slot_date, target)
        except RepositoryException as e:
            self.logger.error(f"Failed to release slot lock: {str(e)}")
            prometheus_metrics.record_slot_lock("release", "error")
            raise ServiceException("Failed to release slot lock")

        prometheus_metrics.record_slot_lock("release", "success" if deleted else "noop")

    @BaseService.measure_operation("cleanup_expired_locks")
    def cleanup_expired_locks(self) -> int:
        """Delete every hold that has expired. Returns the number removed."""
        now = self.clock.now()
        try:
            with self.transaction():
                deleted = self.slot_lock_repository.delete_expired(now)
        except RepositoryException as e:
            self.logger.error(f"Failed to clean up expired slot locks: {str(e)}")
            prometheus_metrics.record_slot_lock("sweep", "error")
            raise ServiceException("Failed to clean up expired slot locks")

        if deleted:
            self.logger.info(f"Removed {deleted} expired slot locks")
        prometheus_metrics.record_slot_lock("sweep", "success", count=deleted)
        return deleted

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_range(
        start_date: date, end_date: date, duration_minutes: int, interval_minutes: int
    ) -> None:
        if duration_minutes <= 0 or interval_minutes <= 0:
            raise ValidationException(
                "duration_minutes and interval_minutes must be positive",
                code="INVALID_PARAMETER",
                details={
                    "duration_minutes": duration_minutes,
                    "interval_minutes": interval_minutes,
                },
            )
        if end_date < start_date:
            raise ValidationException(
                "end_date must not be before start_date",
                code="INVALID_PARAMETER",
                details={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
            )

    def _load_snapshot(
        self, business_id: str, start_date: date, end_date: date
    ) -> Optional[_RangeSnapshot]:
        """Read schedule, policy, blocks, bookings and live holds for a range."""
        try:
            schedule = self.schedule_repository.get_weekly_schedule(business_id)
            if not schedule:
                return None

            business = self.business_repository.get_by_id(business_id)
            blocks = self.block_repository.get_blocks_in_range(business_id, start_date, end_date)
            bookings = self.booking_repository.get_active_bookings_in_range(
                business_id, start_date, end_date
            )
            locks = self.slot_lock_repository.get_active_locks_in_range(
                business_id, start_date, end_date, self.clock.now()
            )
        except RepositoryException as e:
            self.logger.error(f"Failed to load availability for {business_id}: {str(e)}")
            raise ServiceException(
                "Failed to load availability", details={"business_id": business_id}
            )

        blocks_by_date: Dict[date, List[AvailabilityBlock]] = defaultdict(list)
        for block in blocks:
            blocks_by_date[block.block_date].append(block)

        return _RangeSnapshot(
            schedule_by_day={row.day_of_week: row for row in schedule},
            blocks_by_date=blocks_by_date,
            booked=_slot_keys(bookings, lambda b: (b.booking_date, b.booking_time)),
            locked=_slot_keys(locks, lambda lock: (lock.booking_date, lock.booking_time)),
            policy=SameDayPolicy.from_business(business),
        )


def _slot_keys(rows: Iterable, key: Callable[[object], SlotKey]) -> Set[SlotKey]:
    keys: Set[SlotKey] = set()
    for row in rows:
        slot_date, slot_time = key(row)
        keys.add((slot_date, slot_time.replace(second=0, microsecond=0)))
    return keys
