# backend/slotbook/routes/v1/availability.py
"""
Availability routes - API v1

Mounted under /api/v1/businesses/{business_id}/availability.
All business logic delegated to AvailabilityService and ScheduleService.

Endpoints:
    GET /                   → Bookable slots for a date range
    GET /schedule           → Weekly hours
    PUT /schedule           → Replace weekly hours
    GET /blocks             → List closures
    POST /blocks            → Create a closure
    DELETE /blocks/{id}     → Delete a closure
    GET /slot-grid          → Seller dashboard grid with slot states
    GET /same-day           → Whether same-day pickup is still possible
"""

import asyncio
from datetime import date
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies.services import get_availability_service, get_schedule_service
from ...core.config import settings
from ...core.constants import DEFAULT_SLOT_DURATION_MINUTES, DEFAULT_SLOT_GRID_INTERVAL_MINUTES
from ...core.exceptions import DomainException
from ...schemas.availability import (
    AvailabilityBlockCreate,
    AvailabilityBlockResponse,
    SameDayPickupResponse,
    SlotGridEntry,
    TimeSlot,
    WeeklyScheduleEntry,
    WeeklyScheduleUpdate,
)
from ...services.availability_service import AvailabilityService
from ...services.schedule_service import ScheduleService

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["availability-v1"])


@router.get("", response_model=List[TimeSlot])
async def get_available_slots(
    business_id: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    duration_minutes: int = Query(settings.default_slot_duration_minutes),
    slot_interval_minutes: int = Query(settings.default_slot_interval_minutes),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> List[TimeSlot]:
    """
    Bookable slots for every date in [start_date, end_date].

    Dates the business is closed, or that the same-day pickup policy
    refuses, are left out of the response.
    """
    try:
        return await asyncio.to_thread(
            availability_service.get_available_slots,
            business_id,
            start_date,
            end_date,
            duration_minutes,
            slot_interval_minutes,
        )
    except DomainException as exc:
        raise exc.to_http_exception() from exc


@router.get("/schedule", response_model=List[WeeklyScheduleEntry])
async def get_weekly_schedule(
    business_id: str,
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> List[WeeklyScheduleEntry]:
    try:
        return await asyncio.to_thread(availability_service.get_weekly_schedule, business_id)
    except DomainException as exc:
        raise exc.to_http_exception() from exc


@router.put("/schedule", response_model=List[WeeklyScheduleEntry])
async def replace_weekly_schedule(
    business_id: str,
    payload: WeeklyScheduleUpdate,
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> List[WeeklyScheduleEntry]:
    """Replace the whole weekly schedule in one transaction."""
    try:
        return await asyncio.to_thread(
            schedule_service.replace_weekly_schedule, business_id, payload.schedule
        )
    except DomainException as exc:
        raise exc.to_http_exception() from exc


@router.get("/blocks", response_model=List[AvailabilityBlockResponse])
async def list_blocks(
    business_id: str,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> List[AvailabilityBlockResponse]:
    try:
        blocks = await asyncio.to_thread(
            schedule_service.list_blocks, business_id, start_date, end_date
        )
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return [AvailabilityBlockResponse.model_validate(block) for block in blocks]


@router.post(
    "/blocks", response_model=AvailabilityBlockResponse, status_code=status.HTTP_201_CREATED
)
async def create_block(
    business_id: str,
    payload: AvailabilityBlockCreate,
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> AvailabilityBlockResponse:
    try:
        block = await asyncio.to_thread(schedule_service.create_block, business_id, payload)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return AvailabilityBlockResponse.model_validate(block)


@router.delete("/blocks/{block_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_block(
    business_id: str,
    block_id: str,
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> Response:
    try:
        await asyncio.to_thread(schedule_service.delete_block, business_id, block_id)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/slot-grid", response_model=List[SlotGridEntry])
async def get_slot_grid(
    business_id: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    interval_minutes: int = Query(DEFAULT_SLOT_GRID_INTERVAL_MINUTES),
    duration_minutes: int = Query(DEFAULT_SLOT_DURATION_MINUTES),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> List[SlotGridEntry]:
    """Every slot in range marked available, booked, blocked or locked."""
    try:
        return await asyncio.to_thread(
            availability_service.get_slot_grid,
            business_id,
            start_date,
            end_date,
            interval_minutes,
            duration_minutes,
        )
    except DomainException as exc:
        raise exc.to_http_exception() from exc


@router.get("/same-day", response_model=SameDayPickupResponse)
async def get_same_day_pickup(
    business_id: str,
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> SameDayPickupResponse:
    try:
        decision = await asyncio.to_thread(
            availability_service.is_same_day_pickup_allowed, business_id
        )
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return SameDayPickupResponse(allowed=decision.allowed, reason=decision.reason)
