"""Schema exports."""

from roomescape.schemas.auth import Token
from roomescape.schemas.member import MemberCreate, MemberRead, MemberSummary
from roomescape.schemas.reservation import (
    MyReservationRead,
    PortalReservationCreate,
    ReservationCreate,
    ReservationRead,
)
from roomescape.schemas.theme import ThemeCreate, ThemeRead
from roomescape.schemas.time_slot import (
    AvailableTimeSlotRead,
    TimeSlotCreate,
    TimeSlotRead,
)

__all__ = [
    "AvailableTimeSlotRead",
    "MemberCreate",
    "MemberRead",
    "MemberSummary",
    "MyReservationRead",
    "PortalReservationCreate",
    "ReservationCreate",
    "ReservationRead",
    "ThemeCreate",
    "ThemeRead",
    "TimeSlotCreate",
    "TimeSlotRead",
    "Token",
]
