"""Member self-service reservation endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.api import deps
from roomescape.models.member import Member
from roomescape.schemas.reservation import (
    MyReservationRead,
    PortalReservationCreate,
    ReservationRead,
)
from roomescape.services import reservation_service

router = APIRouter(prefix="/portal", tags=["portal"])


@router.get(
    "/reservations",
    response_model=list[MyReservationRead],
    summary="List my reservations with waiting positions",
)
async def list_my_reservations(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_member: Annotated[Member, Depends(deps.get_current_member)],
) -> list[MyReservationRead]:
    views = await reservation_service.list_member_reservations(
        session, member_id=current_member.id
    )
    return [MyReservationRead.from_view(view) for view in views]


@router.post(
    "/reservations",
    response_model=ReservationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Book a slot or join its waitlist",
)
async def create_my_reservation(
    payload: PortalReservationCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_member: Annotated[Member, Depends(deps.get_current_member)],
) -> ReservationRead:
    try:
        reservation = await reservation_service.register_reservation(
            session,
            reservation_date=payload.date,
            time_slot_id=payload.time_slot_id,
            theme_id=payload.theme_id,
            member_id=current_member.id,
        )
    except ValueError as exc:
        deps.raise_from_value_error(exc)
    return ReservationRead.model_validate(reservation)


@router.delete(
    "/reservations/{reservation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Withdraw one of my waiting reservations",
)
async def delete_my_waiting_reservation(
    reservation_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_member: Annotated[Member, Depends(deps.get_current_member)],
) -> Response:
    await reservation_service.delete_waiting_by_member(
        session, reservation_id=reservation_id, member_id=current_member.id
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
