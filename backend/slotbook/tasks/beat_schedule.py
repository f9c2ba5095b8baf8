# backend/slotbook/tasks/beat_schedule.py
"""
Celery Beat schedule configuration for the booking slot engine.

Expired checkout holds never block a new holder, so the sweep only keeps the
booking_locks table small; its interval is not correctness-critical.
"""

from datetime import timedelta
from typing import Any

from ..core.config import settings

CELERYBEAT_SCHEDULE: dict[str, dict[str, Any]] = {
    "cleanup-expired-slot-locks": {
        "task": "slotbook.tasks.lock_cleanup.cleanup_expired_slot_locks",
        "schedule": timedelta(minutes=settings.lock_cleanup_interval_minutes),
        "options": {
            "queue": "maintenance",
            "priority": 5,
            "expires": settings.lock_cleanup_interval_minutes * 60,
        },
    },
}

# Environment-specific overrides
SCHEDULE_CONFIG: dict[str, dict[str, dict[str, Any]]] = {
    "development": {
        "cleanup-expired-slot-locks": {
            "task": "slotbook.tasks.lock_cleanup.cleanup_expired_slot_locks",
            "schedule": timedelta(minutes=settings.lock_cleanup_interval_minutes),
            "options": {"queue": "celery"},
        },
    },
}


def get_beat_schedule(environment: str = "production") -> dict[str, dict[str, Any]]:
    """
    Get the beat schedule for the specified environment.

    Args:
        environment: The environment name (production, development, testing)

    Returns:
        Mapping of task name to Celery beat configuration dict
    """
    base: dict[str, dict[str, Any]] = dict(CELERYBEAT_SCHEDULE)
    overrides = SCHEDULE_CONFIG.get(environment)
    if overrides:
        base.update(overrides)
    return base
