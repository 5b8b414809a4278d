"""Staff reservation management API."""

from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.api import deps
from roomescape.models.member import Member
from roomescape.schemas.reservation import ReservationCreate, ReservationRead
from roomescape.services import reservation_service

router = APIRouter()


@router.get("", response_model=list[ReservationRead], summary="List reservations")
async def list_reservations(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Member, Depends(deps.get_current_admin)],
    theme_id: int | None = Query(default=None),
    member_id: int | None = Query(default=None),
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
) -> list[ReservationRead]:
    filters = (theme_id, member_id, date_from, date_to)
    try:
        if any(value is not None for value in filters):
            reservations = await reservation_service.find_reservations(
                session,
                theme_id=theme_id,
                member_id=member_id,
                date_from=date_from,
                date_to=date_to,
            )
        else:
            reservations = await reservation_service.list_reservations(session)
    except ValueError as exc:
        deps.raise_from_value_error(exc)
    return [ReservationRead.model_validate(obj) for obj in reservations]


@router.get(
    "/waiting",
    response_model=list[ReservationRead],
    summary="List waiting reservations",
)
async def list_waiting_reservations(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Member, Depends(deps.get_current_admin)],
) -> list[ReservationRead]:
    reservations = await reservation_service.list_waiting_reservations(session)
    return [ReservationRead.model_validate(obj) for obj in reservations]


@router.post(
    "",
    response_model=ReservationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create reservation for a member",
)
async def create_reservation(
    payload: ReservationCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Member, Depends(deps.get_current_admin)],
) -> ReservationRead:
    try:
        reservation = await reservation_service.register_reservation(
            session,
            reservation_date=payload.date,
            time_slot_id=payload.time_slot_id,
            theme_id=payload.theme_id,
            member_id=payload.member_id,
        )
    except ValueError as exc:
        deps.raise_from_value_error(exc)
    return ReservationRead.model_validate(reservation)


@router.delete(
    "/{reservation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Cancel reservation and promote the waitlist",
)
async def cancel_reservation(
    reservation_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Member, Depends(deps.get_current_admin)],
) -> Response:
    await reservation_service.cancel_reservation(session, reservation_id=reservation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
