"""Pydantic schemas for reservations."""
from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict

from roomescape.models.reservation import ReservationStatus
from roomescape.schemas.member import MemberSummary
from roomescape.schemas.theme import ThemeRead
from roomescape.schemas.time_slot import TimeSlotRead
from roomescape.services.reservation_service import MemberReservationView


class PortalReservationCreate(BaseModel):
    """Payload a member sends to book a slot for themselves."""

    date: dt.date
    time_slot_id: int
    theme_id: int


class ReservationCreate(PortalReservationCreate):
    """Payload staff send to book a slot on behalf of a member."""

    member_id: int


class ReservationRead(BaseModel):
    """Serialized reservation representation."""

    id: int
    date: dt.date
    status: ReservationStatus
    member: MemberSummary
    time_slot: TimeSlotRead
    theme: ThemeRead
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class MyReservationRead(BaseModel):
    """A member's own reservation with its waitlist position."""

    id: int
    date: dt.date
    status: ReservationStatus
    waiting_rank: int
    status_label: str
    time_slot: TimeSlotRead
    theme: ThemeRead

    @classmethod
    def from_view(cls, view: MemberReservationView) -> "MyReservationRead":
        reservation = view.reservation
        return cls(
            id=reservation.id,
            date=reservation.date,
            status=reservation.status,
            waiting_rank=view.waiting_rank,
            status_label=view.status_label,
            time_slot=TimeSlotRead.model_validate(reservation.time_slot),
            theme=ThemeRead.model_validate(reservation.theme),
        )
