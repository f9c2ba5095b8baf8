# backend/slotbook/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected.
"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from ...core.clock import Clock, system_clock
from ...services.availability_service import AvailabilityService
from ...services.schedule_service import ScheduleService
from .database import get_db

logger = logging.getLogger(__name__)


def get_clock() -> Clock:
    """Time source for request handling; overridden in tests to pin "now"."""
    return system_clock


def get_availability_service(
    db: Session = Depends(get_db), clock: Clock = Depends(get_clock)
) -> AvailabilityService:
    """Get AvailabilityService instance with proper dependencies."""
    return AvailabilityService(db, clock=clock)


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    """Get ScheduleService instance with proper dependencies."""
    return ScheduleService(db)
