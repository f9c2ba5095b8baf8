# backend/slotbook/schemas/__init__.py
"""
Pydantic schemas for request/response validation.
"""

from .availability import (
    AvailabilityBlockCreate,
    AvailabilityBlockResponse,
    SameDayPickupResponse,
    SlotGridEntry,
    SlotLockRequest,
    SlotLockResponse,
    SlotState,
    SlotUnlockRequest,
    TimeSlot,
    WeeklyScheduleEntry,
    WeeklyScheduleUpdate,
)

__all__ = [
    "AvailabilityBlockCreate",
    "AvailabilityBlockResponse",
    "SameDayPickupResponse",
    "SlotGridEntry",
    "SlotLockRequest",
    "SlotLockResponse",
    "SlotState",
    "SlotUnlockRequest",
    "TimeSlot",
    "WeeklyScheduleEntry",
    "WeeklyScheduleUpdate",
]
