"""Time slot endpoints."""

from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.api import deps
from roomescape.models.member import Member
from roomescape.schemas.time_slot import (
    AvailableTimeSlotRead,
    TimeSlotCreate,
    TimeSlotRead,
)
from roomescape.services import time_slot_service

router = APIRouter()


@router.get("", response_model=list[TimeSlotRead], summary="List time slots")
async def list_time_slots(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[TimeSlotRead]:
    slots = await time_slot_service.list_time_slots(session)
    return [TimeSlotRead.model_validate(slot) for slot in slots]


@router.get(
    "/available",
    response_model=list[AvailableTimeSlotRead],
    summary="Time slots with booking state for a date and theme",
)
async def list_available_time_slots(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    reservation_date: date = Query(..., alias="date"),
    theme_id: int = Query(...),
) -> list[AvailableTimeSlotRead]:
    try:
        items = await time_slot_service.list_available_time_slots(
            session, reservation_date=reservation_date, theme_id=theme_id
        )
    except ValueError as exc:
        deps.raise_from_value_error(exc, not_found_status=status.HTTP_404_NOT_FOUND)
    return [AvailableTimeSlotRead.from_available(item) for item in items]


@router.post(
    "",
    response_model=TimeSlotRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create time slot",
)
async def create_time_slot(
    payload: TimeSlotCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Member, Depends(deps.get_current_admin)],
) -> TimeSlotRead:
    try:
        slot = await time_slot_service.create_time_slot(
            session, start_at=payload.start_at
        )
    except ValueError as exc:
        deps.raise_from_value_error(exc)
    return TimeSlotRead.model_validate(slot)


@router.delete(
    "/{time_slot_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete time slot",
)
async def delete_time_slot(
    time_slot_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Member, Depends(deps.get_current_admin)],
) -> Response:
    try:
        await time_slot_service.delete_time_slot(session, time_slot_id=time_slot_id)
    except ValueError as exc:
        deps.raise_from_value_error(exc, not_found_status=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
