"""Reservation booking, cancellation and waitlist helpers.

A slot tuple is one ``(date, time slot, theme)`` combination. At most one
reservation per tuple is RESERVED; the rest queue as WAITING in insertion
order. Each public coroutine runs as one transaction on the given session.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.core.config import get_settings
from roomescape.models.member import Member
from roomescape.models.reservation import Reservation, ReservationStatus
from roomescape.models.theme import Theme
from roomescape.models.time_slot import TimeSlot
from roomescape.repositories import ReservationRepository
from roomescape.services.exceptions import (
    DuplicateBookingError,
    InvalidStatusTransitionError,
    NotFoundError,
    PastDateError,
)

logger = logging.getLogger(__name__)

_ALLOWED_STATUS_TRANSITIONS: dict[ReservationStatus, set[ReservationStatus]] = {
    ReservationStatus.WAITING: {ReservationStatus.RESERVED},
    ReservationStatus.RESERVED: set(),
}


@dataclass(frozen=True)
class MemberReservationView:
    """A member's reservation paired with its position in the waitlist."""

    reservation: Reservation
    waiting_rank: int = 0

    @property
    def is_waiting(self) -> bool:
        return self.waiting_rank > 0

    @property
    def status_label(self) -> str:
        if self.is_waiting:
            return f"waiting #{self.waiting_rank}"
        return "reserved"


def _coerce_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _validate_status_transition(
    current: ReservationStatus, target: ReservationStatus
) -> None:
    if target not in _ALLOWED_STATUS_TRANSITIONS.get(current, set()):
        raise InvalidStatusTransitionError(current, target)


def promote(reservation: Reservation) -> Reservation:
    """Move a WAITING reservation to RESERVED in place, keeping its id."""
    _validate_status_transition(reservation.status, ReservationStatus.RESERVED)
    reservation.status = ReservationStatus.RESERVED
    return reservation


def slot_starts_at(reservation_date: date, time_slot: TimeSlot) -> datetime:
    """Return the aware start of a slot in the configured reservation timezone."""
    tz = get_settings().reservation_tz
    return datetime.combine(reservation_date, time_slot.start_at, tzinfo=tz)


def _ensure_future(starts_at: datetime, now: datetime) -> None:
    if starts_at <= now:
        raise PastDateError(starts_at)


async def _resolve_references(
    session: AsyncSession,
    *,
    time_slot_id: int,
    theme_id: int,
    member_id: int,
) -> tuple[TimeSlot, Theme, Member]:
    time_slot = await session.get(TimeSlot, time_slot_id)
    if time_slot is None:
        raise NotFoundError("time_slot_id", time_slot_id)
    theme = await session.get(Theme, theme_id)
    if theme is None:
        raise NotFoundError("theme_id", theme_id)
    member = await session.get(Member, member_id)
    if member is None:
        raise NotFoundError("member_id", member_id)
    return time_slot, theme, member


async def _insert_reservation(
    session: AsyncSession,
    repository: ReservationRepository,
    *,
    reservation_date: date,
    time_slot: TimeSlot,
    theme: Theme,
    member: Member,
    status: ReservationStatus,
) -> Reservation:
    reservation = Reservation(
        member=member,
        date=reservation_date,
        time_slot=time_slot,
        theme=theme,
        status=status,
    )
    await repository.add(reservation)
    await session.commit()
    return reservation


async def _retry_after_conflict(
    session: AsyncSession,
    repository: ReservationRepository,
    *,
    reservation_date: date,
    time_slot_id: int,
    theme_id: int,
    member_id: int,
    attempted_status: ReservationStatus,
    error: IntegrityError,
) -> Reservation:
    """Recover from a uniqueness violation raised by a concurrent booking."""
    if attempted_status == ReservationStatus.WAITING:
        raise DuplicateBookingError() from error

    time_slot, theme, member = await _resolve_references(
        session, time_slot_id=time_slot_id, theme_id=theme_id, member_id=member_id
    )
    if await repository.exists_by_slot_and_member(
        reservation_date, time_slot_id, theme_id, member_id
    ):
        raise DuplicateBookingError() from error

    logger.info(
        "Slot %s/%s/%s was reserved concurrently; queueing member %s as waiting",
        reservation_date,
        time_slot_id,
        theme_id,
        member_id,
    )
    try:
        return await _insert_reservation(
            session,
            repository,
            reservation_date=reservation_date,
            time_slot=time_slot,
            theme=theme,
            member=member,
            status=ReservationStatus.WAITING,
        )
    except IntegrityError as retry_error:
        await session.rollback()
        raise DuplicateBookingError() from retry_error


async def register_reservation(
    session: AsyncSession,
    *,
    reservation_date: date,
    time_slot_id: int,
    theme_id: int,
    member_id: int,
    now: datetime | None = None,
) -> Reservation:
    """Book a slot tuple for a member.

    The reservation is RESERVED when nobody holds the tuple and WAITING
    otherwise. Raises ``NotFoundError`` for unknown ids,
    ``DuplicateBookingError`` when the member already holds the tuple and
    ``PastDateError`` when the slot does not start strictly after ``now``.
    """
    repository = ReservationRepository(session)
    time_slot, theme, member = await _resolve_references(
        session, time_slot_id=time_slot_id, theme_id=theme_id, member_id=member_id
    )
    if await repository.exists_by_slot_and_member(
        reservation_date, time_slot_id, theme_id, member_id
    ):
        raise DuplicateBookingError()

    current = _coerce_utc(now or datetime.now(UTC))
    _ensure_future(slot_starts_at(reservation_date, time_slot), current)

    if await repository.exists_reserved_by_slot(reservation_date, time_slot_id, theme_id):
        status = ReservationStatus.WAITING
    else:
        status = ReservationStatus.RESERVED

    try:
        reservation = await _insert_reservation(
            session,
            repository,
            reservation_date=reservation_date,
            time_slot=time_slot,
            theme=theme,
            member=member,
            status=status,
        )
    except IntegrityError as exc:
        await session.rollback()
        reservation = await _retry_after_conflict(
            session,
            repository,
            reservation_date=reservation_date,
            time_slot_id=time_slot_id,
            theme_id=theme_id,
            member_id=member_id,
            attempted_status=status,
            error=exc,
        )

    logger.info(
        "Reservation %s registered for member %s as %s",
        reservation.id,
        member_id,
        reservation.status.value,
    )
    return reservation


async def cancel_reservation(
    session: AsyncSession,
    *,
    reservation_id: int,
) -> Reservation | None:
    """Cancel a RESERVED reservation and promote the next waiting one.

    Missing and WAITING reservations are left alone, including one removed
    by a concurrent cancel after it was read. Deletion and promotion commit
    together. Returns the promoted reservation, if any.
    """
    repository = ReservationRepository(session)
    reservation = await repository.get(reservation_id)
    if reservation is None:
        logger.debug("Cancel skipped: reservation %s not found", reservation_id)
        return None
    if reservation.is_waiting:
        logger.debug("Cancel skipped: reservation %s is waiting", reservation_id)
        return None

    slot = (reservation.date, reservation.time_slot_id, reservation.theme_id)
    try:
        if not await repository.delete_reserved(reservation_id):
            await session.rollback()
            logger.debug("Cancel skipped: reservation %s already removed", reservation_id)
            return None
        promoted = await repository.first_waiting_by_slot(*slot)
        if promoted is not None:
            promote(promoted)
        await session.commit()
    except IntegrityError:
        # the slot was re-filled by a concurrent cancel's promotion
        await session.rollback()
        logger.warning(
            "Cancel of reservation %s lost a race for its slot; nothing changed",
            reservation_id,
        )
        return None

    if promoted is None:
        logger.info("Reservation %s cancelled; slot is now free", reservation_id)
    else:
        logger.info(
            "Reservation %s cancelled; promoted reservation %s", reservation_id, promoted.id
        )
    return promoted


async def delete_waiting_by_member(
    session: AsyncSession,
    *,
    reservation_id: int,
    member_id: int,
) -> None:
    """Let a member withdraw their own WAITING reservation.

    Unknown ids, other members' reservations and RESERVED entries are
    silently ignored so callers learn nothing about other members.
    """
    repository = ReservationRepository(session)
    reservation = await repository.get(reservation_id)
    if reservation is None or reservation.member_id != member_id:
        logger.debug(
            "Waiting delete skipped: reservation %s not owned by member %s",
            reservation_id,
            member_id,
        )
        return
    if not reservation.is_waiting:
        logger.debug("Waiting delete skipped: reservation %s is reserved", reservation_id)
        return

    await repository.delete(reservation)
    await session.commit()
    logger.info("Member %s withdrew waiting reservation %s", member_id, reservation_id)


async def list_member_reservations(
    session: AsyncSession,
    *,
    member_id: int,
) -> list[MemberReservationView]:
    """Return the member's reservations with 1-based ranks for waiting ones."""
    repository = ReservationRepository(session)
    views: list[MemberReservationView] = []
    for reservation in await repository.list_by_member(member_id):
        rank = 0
        if reservation.is_waiting:
            rank = await repository.count_waiting_before(reservation) + 1
        views.append(MemberReservationView(reservation=reservation, waiting_rank=rank))
    return views


async def list_reservations(session: AsyncSession) -> Sequence[Reservation]:
    return await ReservationRepository(session).list_all()


async def list_waiting_reservations(session: AsyncSession) -> Sequence[Reservation]:
    return await ReservationRepository(session).list_by_status(ReservationStatus.WAITING)


async def get_reservation(
    session: AsyncSession,
    *,
    reservation_id: int,
) -> Reservation | None:
    return await ReservationRepository(session).get(reservation_id)


async def find_reservations(
    session: AsyncSession,
    *,
    theme_id: int | None = None,
    member_id: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> Sequence[Reservation]:
    """Filter reservations by theme, member and an inclusive date range."""
    if date_from is not None and date_to is not None and date_from > date_to:
        raise ValueError("date_from must be on or before date_to")
    return await ReservationRepository(session).list_by_filter(
        theme_id=theme_id,
        member_id=member_id,
        date_from=date_from,
        date_to=date_to,
    )
