# backend/slotbook/schemas/availability.py
"""
Availability schemas for the booking slot engine.

Slots are derived on every request and never stored; times go over the wire
as "HH:MM" strings.
"""

from datetime import date, time
from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, Field, field_serializer, field_validator

from ..core.constants import DEFAULT_SLOT_DURATION_MINUTES, DEFAULT_SLOT_INTERVAL_MINUTES
from .base import StandardizedModel, StrictRequestModel


def format_hhmm(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M") if value is not None else None


class TimeSlot(StandardizedModel):
    """One candidate start time on one date."""

    date: date
    time: time
    available: bool

    @field_serializer("time")
    def serialize_time(self, value: time) -> str:
        return value.strftime("%H:%M")


class SlotState(str, Enum):
    """Why a slot can or cannot be booked, as shown on the seller dashboard."""

    AVAILABLE = "available"
    BOOKED = "booked"
    BLOCKED = "blocked"
    LOCKED = "locked"


class SlotGridEntry(StandardizedModel):
    date: date
    time: time
    status: SlotState

    @field_serializer("time")
    def serialize_time(self, value: time) -> str:
        return value.strftime("%H:%M")


class WeeklyScheduleEntry(StandardizedModel):
    """Open hours for one day of the week (0 = Sunday ... 6 = Saturday)."""

    day_of_week: int
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    is_available: bool = True

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @field_serializer("start_time", "end_time")
    def serialize_times(self, value: Optional[time]) -> Optional[str]:
        return format_hhmm(value)


class WeeklyScheduleUpdate(StrictRequestModel):
    """Full replacement of a business's weekly hours."""

    schedule: List[WeeklyScheduleEntry]


class AvailabilityBlockCreate(StrictRequestModel):
    """Close a business for a whole day or for [start_time, end_time) on one date."""

    block_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    reason: Optional[str] = Field(default=None, max_length=500)
    is_all_day: bool = False

    @field_validator("end_time")
    @classmethod
    def validate_time_order(cls, v, info):
        """Ensure end time is after start time if both provided."""
        if v and info.data.get("start_time") and v <= info.data["start_time"]:
            raise ValueError("End time must be after start time")
        return v


class AvailabilityBlockResponse(StandardizedModel):
    id: str
    business_id: str
    block_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    reason: Optional[str] = None
    is_all_day: bool

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("start_time", "end_time")
    def serialize_times(self, value: Optional[time]) -> Optional[str]:
        return format_hhmm(value)


class SameDayPickupResponse(StandardizedModel):
    allowed: bool
    reason: Optional[str] = None


class SlotLockRequest(StrictRequestModel):
    """Hold a slot while the shopper completes checkout."""

    business_id: str
    date: date
    time: time
    user_id: str
    duration_minutes: int = DEFAULT_SLOT_DURATION_MINUTES
    interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES


class SlotUnlockRequest(StrictRequestModel):
    business_id: str
    date: date
    time: time


class SlotLockResponse(StandardizedModel):
    success: bool
    message: str
