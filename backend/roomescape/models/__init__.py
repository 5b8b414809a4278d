"""ORM models package export."""

from roomescape.models.member import Member, MemberRole
from roomescape.models.reservation import Reservation, ReservationStatus
from roomescape.models.theme import Theme
from roomescape.models.time_slot import TimeSlot

__all__ = [
    "Member",
    "MemberRole",
    "Reservation",
    "ReservationStatus",
    "Theme",
    "TimeSlot",
]
