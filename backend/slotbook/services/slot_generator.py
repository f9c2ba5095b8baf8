# backend/slotbook/services/slot_generator.py
"""
Candidate slot start times for one open-hours window.

Times are handled as minutes since midnight so the walk can never wrap past
end_time into the next day.
"""

from datetime import time
from typing import List

from ..core.exceptions import ValidationException


def time_to_minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def minutes_to_time(minutes: int) -> time:
    return time(minutes // 60, minutes % 60)


def generate_time_slots(
    start_time: time,
    end_time: time,
    duration_minutes: int,
    interval_minutes: int,
) -> List[time]:
    """
    Every start = start_time + k * interval whose slot still ends by end_time.

    Args:
        start_time: Opening time of the window
        end_time: Closing time of the window
        duration_minutes: Length of one booking
        interval_minutes: Step between consecutive starts

    Returns:
        Ascending list of start times; empty when the window is shorter than
        one booking

    Raises:
        ValidationException: If duration or interval is not positive
    """
    if duration_minutes <= 0:
        raise ValidationException(
            "duration_minutes must be positive",
            code="INVALID_PARAMETER",
            details={"duration_minutes": duration_minutes},
        )
    if interval_minutes <= 0:
        raise ValidationException(
            "interval_minutes must be positive",
            code="INVALID_PARAMETER",
            details={"interval_minutes": interval_minutes},
        )

    start = time_to_minutes(start_time)
    end = time_to_minutes(end_time)

    slots: List[time] = []
    current = start
    while current + duration_minutes <= end:
        slots.append(minutes_to_time(current))
        current += interval_minutes
    return slots
