"""Service layer exports."""
from roomescape.services import (
    auth_service,
    member_service,
    reservation_service,
    theme_service,
    time_slot_service,
)

__all__ = [
    "auth_service",
    "member_service",
    "reservation_service",
    "theme_service",
    "time_slot_service",
]
