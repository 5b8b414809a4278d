"""Reservation book exceptions.

Every error is a ``ValueError`` so routers can keep translating client input
problems into HTTP 400 responses; ``code`` and ``to_dict()`` give clients a
stable machine-readable shape.
"""

from __future__ import annotations

from typing import Any


class ReservationBookError(ValueError):
    """Base exception for reservation book errors."""

    code = "reservation_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(ReservationBookError):
    """Raised when an id does not resolve to an existing entity."""

    code = "invalid_reference"

    def __init__(self, field: str, value: Any) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"Invalid {field}: {value} does not exist",
            details={"field": field, "value": value},
        )


class DuplicateBookingError(ReservationBookError):
    """Raised when a member already holds the requested slot."""

    code = "duplicate_booking"

    def __init__(self, message: str = "Member already holds a reservation for this slot") -> None:
        super().__init__(message)


class PastDateError(ReservationBookError):
    """Raised when the requested slot does not start in the future."""

    code = "past_date"

    def __init__(self, starts_at: Any) -> None:
        super().__init__(
            f"Reservation must start in the future: {starts_at}",
            details={"starts_at": str(starts_at)},
        )


class InvalidStatusTransitionError(ReservationBookError):
    """Raised on a reservation status change the lifecycle forbids."""

    code = "invalid_status_transition"

    def __init__(self, current: Any, target: Any) -> None:
        super().__init__(
            f"Invalid status transition from {current} to {target}",
            details={"current": str(current), "target": str(target)},
        )


class ResourceInUseError(ReservationBookError):
    """Raised when deleting a theme or time slot that reservations reference."""

    code = "resource_in_use"

    def __init__(self, resource: str, resource_id: int) -> None:
        super().__init__(
            f"{resource} {resource_id} is referenced by reservations",
            details={"resource": resource, "id": resource_id},
        )


class DuplicateMemberError(ReservationBookError):
    code = "duplicate_member"

    def __init__(self, email: str) -> None:
        super().__init__(f"Email already registered: {email}", details={"email": email})


class DuplicateThemeError(ReservationBookError):
    code = "duplicate_theme"

    def __init__(self, name: str) -> None:
        super().__init__(f"Theme already exists: {name}", details={"name": name})


class DuplicateTimeSlotError(ReservationBookError):
    code = "duplicate_time_slot"

    def __init__(self, start_at: Any) -> None:
        super().__init__(
            f"Time slot already exists: {start_at}",
            details={"start_at": str(start_at)},
        )
