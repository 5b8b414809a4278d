"""Time slot management and availability helpers."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, time

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.models.theme import Theme
from roomescape.models.time_slot import TimeSlot
from roomescape.repositories import ReservationRepository
from roomescape.services.exceptions import (
    DuplicateTimeSlotError,
    NotFoundError,
    ResourceInUseError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvailableTimeSlot:
    time_slot: TimeSlot
    already_booked: bool


async def list_time_slots(session: AsyncSession) -> Sequence[TimeSlot]:
    result = await session.execute(select(TimeSlot).order_by(TimeSlot.start_at.asc()))
    return result.scalars().all()


async def create_time_slot(session: AsyncSession, *, start_at: time) -> TimeSlot:
    """Persist a new start time; start times are unique."""
    time_slot = TimeSlot(start_at=start_at.replace(second=0, microsecond=0))
    session.add(time_slot)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise DuplicateTimeSlotError(start_at) from exc
    logger.info("Time slot %s created at %s", time_slot.id, time_slot.start_at)
    return time_slot


async def delete_time_slot(session: AsyncSession, *, time_slot_id: int) -> None:
    """Delete a time slot that no reservation references."""
    time_slot = await session.get(TimeSlot, time_slot_id)
    if time_slot is None:
        raise NotFoundError("time_slot_id", time_slot_id)
    if await ReservationRepository(session).exists_by_time_slot(time_slot_id):
        raise ResourceInUseError("Time slot", time_slot_id)
    await session.delete(time_slot)
    await session.commit()
    logger.info("Time slot %s deleted", time_slot_id)


async def list_available_time_slots(
    session: AsyncSession,
    *,
    reservation_date: date,
    theme_id: int,
) -> list[AvailableTimeSlot]:
    """Return every time slot flagged with whether the theme is booked then."""
    if await session.get(Theme, theme_id) is None:
        raise NotFoundError("theme_id", theme_id)
    booked = await ReservationRepository(session).reserved_time_slot_ids(
        reservation_date, theme_id
    )
    return [
        AvailableTimeSlot(time_slot=slot, already_booked=slot.id in booked)
        for slot in await list_time_slots(session)
    ]
