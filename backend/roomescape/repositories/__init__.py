"""Persistence interfaces."""

from roomescape.repositories.reservation_repository import ReservationRepository

__all__ = ["ReservationRepository"]
