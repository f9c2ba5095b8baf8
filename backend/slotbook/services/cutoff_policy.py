# backend/slotbook/services/cutoff_policy.py
"""
Same-day pickup rules.

A business can refuse same-day pickups outright, or accept them only until a
daily cutoff time. Dates other than today are never restricted.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Optional

SAME_DAY_DISABLED_REASON = (
    "Same-day pickup is not allowed for this business. Please select tomorrow or later."
)
CUTOFF_PASSED_REASON = (
    "Same-day pickup is not available after {cutoff}. "
    "The earliest available pickup date is tomorrow."
)


@dataclass(frozen=True)
class SameDayPolicy:
    """The pair of policy columns read from the business row."""

    same_day_pickup_allowed: Optional[bool] = True
    cutoff_time: Optional[time] = None

    @property
    def allows_same_day(self) -> bool:
        # NULL in the database means the owner never turned it off
        return self.same_day_pickup_allowed is not False

    @classmethod
    def from_business(cls, business: Any) -> "SameDayPolicy":
        if business is None:
            return cls()
        return cls(
            same_day_pickup_allowed=business.same_day_pickup_allowed,
            cutoff_time=business.cutoff_time,
        )


@dataclass(frozen=True)
class CutoffDecision:
    eligible: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class SameDayPickupDecision:
    """Answer given to checkout when it asks whether pickup today is still possible."""

    allowed: bool
    reason: Optional[str] = None


class CutoffPolicy:
    """Decides whether a pickup date can still be offered at a given moment."""

    @staticmethod
    def evaluate(policy: SameDayPolicy, candidate_date: date, now: datetime) -> CutoffDecision:
        if candidate_date != now.date():
            return CutoffDecision(eligible=True)

        if not policy.allows_same_day:
            return CutoffDecision(eligible=False, reason=SAME_DAY_DISABLED_REASON)

        if policy.cutoff_time is not None:
            cutoff_at = datetime.combine(candidate_date, policy.cutoff_time)
            # Inclusive: exactly at the cutoff is already too late
            if now >= cutoff_at:
                return CutoffDecision(
                    eligible=False,
                    reason=CUTOFF_PASSED_REASON.format(
                        cutoff=policy.cutoff_time.strftime("%H:%M")
                    ),
                )

        return CutoffDecision(eligible=True)
