# backend/slotbook/tasks/__init__.py
"""
Celery tasks package for the booking slot engine.

Currently holds the periodic sweep of expired checkout holds.
"""

from .celery_app import BaseTask, celery_app
from .lock_cleanup import cleanup_expired_slot_locks

__all__ = [
    "BaseTask",
    "celery_app",
    "cleanup_expired_slot_locks",
]
