# backend/slotbook/routes/v1/bookings.py
"""
Booking hold routes - API v1

Mounted under /api/v1/bookings. Used by checkout to hold a slot while the
shopper pays, and to give it back if checkout is abandoned.

Endpoints:
    POST /lock      → Take a checkout hold (409 if unavailable or held)
    POST /unlock    → Release a checkout hold
"""

import asyncio
import logging

from fastapi import APIRouter, Depends

from ...api.dependencies.services import get_availability_service
from ...core.constants import ERROR_SLOT_UNAVAILABLE
from ...core.exceptions import DomainException, SlotUnavailableException
from ...schemas.availability import SlotLockRequest, SlotLockResponse, SlotUnlockRequest
from ...services.availability_service import AvailabilityService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings-v1"])


@router.post("/lock", response_model=SlotLockResponse)
async def lock_slot(
    payload: SlotLockRequest,
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> SlotLockResponse:
    """
    Hold a slot for the configured TTL.

    Raises:
        HTTPException: 409 if the slot is unavailable or already held
    """
    locked = await asyncio.to_thread(
        availability_service.lock_slot,
        payload.business_id,
        payload.date,
        payload.time,
        payload.user_id,
        duration_minutes=payload.duration_minutes,
        interval_minutes=payload.interval_minutes,
    )
    if not locked:
        raise SlotUnavailableException(
            ERROR_SLOT_UNAVAILABLE,
            details={"business_id": payload.business_id, "date": payload.date.isoformat()},
        ).to_http_exception()

    return SlotLockResponse(success=True, message="Slot locked successfully")


@router.post("/unlock", response_model=SlotLockResponse)
async def unlock_slot(
    payload: SlotUnlockRequest,
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> SlotLockResponse:
    try:
        await asyncio.to_thread(
            availability_service.release_lock, payload.business_id, payload.date, payload.time
        )
    except DomainException as exc:
        raise exc.to_http_exception() from exc

    return SlotLockResponse(success=True, message="Slot unlocked successfully")
