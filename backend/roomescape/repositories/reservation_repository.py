"""Named reservation queries over an async session.

Every ordered query sorts by ``Reservation.id``, the insertion sequence,
so "earliest created" and "created before" are well defined even when two
rows share a ``created_at`` timestamp.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy import Select, delete, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from roomescape.models.reservation import Reservation, ReservationStatus


def _base_reservation_query() -> Select[tuple[Reservation]]:
    return (
        select(Reservation)
        .options(
            selectinload(Reservation.member),
            selectinload(Reservation.time_slot),
            selectinload(Reservation.theme),
        )
        .order_by(Reservation.id.asc())
    )


def _slot_clause(reservation_date: date, time_slot_id: int, theme_id: int):
    return (
        Reservation.date == reservation_date,
        Reservation.time_slot_id == time_slot_id,
        Reservation.theme_id == theme_id,
    )


class ReservationRepository:
    """Reservation store bound to the caller's session and transaction."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, reservation: Reservation) -> Reservation:
        """Stage a new reservation and flush it so the id is assigned."""
        self.session.add(reservation)
        await self.session.flush()
        return reservation

    async def delete(self, reservation: Reservation) -> None:
        """Delete a reservation and flush so the slot is released in-transaction."""
        await self.session.delete(reservation)
        await self.session.flush()

    async def delete_reserved(self, reservation_id: int) -> int:
        """Delete the reservation if it is still RESERVED; return rows removed.

        Zero means another transaction already removed it.
        """
        stmt = delete(Reservation).where(
            Reservation.id == reservation_id,
            Reservation.status == ReservationStatus.RESERVED,
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def get(self, reservation_id: int) -> Reservation | None:
        stmt = _base_reservation_query().where(Reservation.id == reservation_id)
        result = await self.session.execute(stmt)
        return result.scalars().unique().one_or_none()

    async def list_all(self) -> Sequence[Reservation]:
        result = await self.session.execute(_base_reservation_query())
        return result.scalars().unique().all()

    async def exists_reserved_by_slot(
        self, reservation_date: date, time_slot_id: int, theme_id: int
    ) -> bool:
        """Return whether the slot tuple is currently held by a RESERVED entry."""
        stmt = select(
            exists().where(
                *_slot_clause(reservation_date, time_slot_id, theme_id),
                Reservation.status == ReservationStatus.RESERVED,
            )
        )
        return bool((await self.session.execute(stmt)).scalar())

    async def exists_by_slot_and_member(
        self,
        reservation_date: date,
        time_slot_id: int,
        theme_id: int,
        member_id: int,
    ) -> bool:
        """Return whether the member holds the slot tuple in any status."""
        stmt = select(
            exists().where(
                *_slot_clause(reservation_date, time_slot_id, theme_id),
                Reservation.member_id == member_id,
            )
        )
        return bool((await self.session.execute(stmt)).scalar())

    async def first_waiting_by_slot(
        self, reservation_date: date, time_slot_id: int, theme_id: int
    ) -> Reservation | None:
        """Return the earliest-created WAITING reservation for the slot tuple."""
        stmt = (
            _base_reservation_query()
            .where(
                *_slot_clause(reservation_date, time_slot_id, theme_id),
                Reservation.status == ReservationStatus.WAITING,
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().unique().first()

    async def count_waiting_before(self, reservation: Reservation) -> int:
        """Count WAITING reservations for the same slot created before this one."""
        stmt = (
            select(func.count())
            .select_from(Reservation)
            .where(
                *_slot_clause(
                    reservation.date, reservation.time_slot_id, reservation.theme_id
                ),
                Reservation.status == ReservationStatus.WAITING,
                Reservation.id < reservation.id,
            )
        )
        return (await self.session.execute(stmt)).scalar_one()

    async def list_by_member(self, member_id: int) -> Sequence[Reservation]:
        stmt = _base_reservation_query().where(Reservation.member_id == member_id)
        result = await self.session.execute(stmt)
        return result.scalars().unique().all()

    async def list_by_status(self, status: ReservationStatus) -> Sequence[Reservation]:
        stmt = _base_reservation_query().where(Reservation.status == status)
        result = await self.session.execute(stmt)
        return result.scalars().unique().all()

    async def list_by_filter(
        self,
        *,
        theme_id: int | None = None,
        member_id: int | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> Sequence[Reservation]:
        """Return reservations matching every supplied filter; dates are inclusive."""
        stmt = _base_reservation_query()
        if theme_id is not None:
            stmt = stmt.where(Reservation.theme_id == theme_id)
        if member_id is not None:
            stmt = stmt.where(Reservation.member_id == member_id)
        if date_from is not None:
            stmt = stmt.where(Reservation.date >= date_from)
        if date_to is not None:
            stmt = stmt.where(Reservation.date <= date_to)
        result = await self.session.execute(stmt)
        return result.scalars().unique().all()

    async def exists_by_theme(self, theme_id: int) -> bool:
        stmt = select(exists().where(Reservation.theme_id == theme_id))
        return bool((await self.session.execute(stmt)).scalar())

    async def exists_by_time_slot(self, time_slot_id: int) -> bool:
        stmt = select(exists().where(Reservation.time_slot_id == time_slot_id))
        return bool((await self.session.execute(stmt)).scalar())

    async def reserved_time_slot_ids(
        self, reservation_date: date, theme_id: int
    ) -> set[int]:
        """Return ids of time slots already RESERVED on the date for the theme."""
        stmt = select(Reservation.time_slot_id).where(
            Reservation.date == reservation_date,
            Reservation.theme_id == theme_id,
            Reservation.status == ReservationStatus.RESERVED,
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def count_by_theme_between(
        self, date_from: date, date_to: date, limit: int
    ) -> list[tuple[int, int]]:
        """Return ``(theme_id, reservation_count)`` pairs, busiest first."""
        count_col = func.count(Reservation.id).label("reservation_count")
        stmt = (
            select(Reservation.theme_id, count_col)
            .where(Reservation.date >= date_from, Reservation.date <= date_to)
            .group_by(Reservation.theme_id)
            .order_by(count_col.desc(), Reservation.theme_id.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(row.theme_id, row.reservation_count) for row in result]
