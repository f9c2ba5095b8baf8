# backend/slotbook/api/dependencies/__init__.py
"""
Centralized dependency injection for the API layer.
"""

from .database import get_db
from .services import get_availability_service, get_clock, get_schedule_service

__all__ = [
    "get_availability_service",
    "get_clock",
    "get_db",
    "get_schedule_service",
]
