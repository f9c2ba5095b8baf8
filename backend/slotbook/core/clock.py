# backend/slotbook/core/clock.py
"""
Time source for availability decisions.

Every "now" used for cutoff comparison and lock expiry flows through a Clock so
the same-day boundary and TTL expiry can be pinned in tests. Times are the
business's local wall-clock time; no timezone conversion happens here.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime


class Clock(ABC):
    """Interface for anything that can tell the current local time."""

    @abstractmethod
    def now(self) -> datetime:
        """Current naive local time."""

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Naive local wall-clock time from the host."""

    def now(self) -> datetime:
        return datetime.now()


system_clock = SystemClock()
