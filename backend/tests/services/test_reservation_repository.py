"""Store-level checks for reservation queries and constraints."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from roomescape.models import Reservation, ReservationStatus
from roomescape.repositories import ReservationRepository

pytestmark = pytest.mark.asyncio

SLOT_DATE = date(2099, 1, 1)


def _reservation(catalog: dict[str, int], member: str, status: ReservationStatus) -> Reservation:
    return Reservation(
        member_id=catalog[member],
        date=SLOT_DATE,
        time_slot_id=catalog["slot_1"],
        theme_id=catalog["theme_1"],
        status=status,
    )


async def test_second_reserved_row_violates_partial_index(session, catalog) -> None:
    repository = ReservationRepository(session)
    await repository.add(_reservation(catalog, "member_1", ReservationStatus.RESERVED))
    await session.commit()

    with pytest.raises(IntegrityError):
        await repository.add(
            _reservation(catalog, "member_2", ReservationStatus.RESERVED)
        )
    await session.rollback()


async def test_many_waiting_rows_share_a_slot(session, catalog) -> None:
    repository = ReservationRepository(session)
    await repository.add(_reservation(catalog, "member_1", ReservationStatus.RESERVED))
    await repository.add(_reservation(catalog, "member_2", ReservationStatus.WAITING))
    await repository.add(_reservation(catalog, "member_3", ReservationStatus.WAITING))
    await session.commit()

    waiting = await repository.list_by_status(ReservationStatus.WAITING)
    assert len(waiting) == 2


async def test_member_cannot_hold_slot_twice_at_store_level(session, catalog) -> None:
    repository = ReservationRepository(session)
    await repository.add(_reservation(catalog, "member_1", ReservationStatus.RESERVED))
    await session.commit()

    with pytest.raises(IntegrityError):
        await repository.add(
            _reservation(catalog, "member_1", ReservationStatus.WAITING)
        )
    await session.rollback()


async def test_first_waiting_and_rank_follow_insertion_order(session, catalog) -> None:
    repository = ReservationRepository(session)
    await repository.add(_reservation(catalog, "member_1", ReservationStatus.RESERVED))
    earlier = await repository.add(
        _reservation(catalog, "member_2", ReservationStatus.WAITING)
    )
    later = await repository.add(
        _reservation(catalog, "member_3", ReservationStatus.WAITING)
    )
    await session.commit()

    first = await repository.first_waiting_by_slot(
        SLOT_DATE, catalog["slot_1"], catalog["theme_1"]
    )
    assert first is not None
    assert first.id == earlier.id
    assert await repository.count_waiting_before(earlier) == 0
    assert await repository.count_waiting_before(later) == 1


async def test_slot_existence_checks(session, catalog) -> None:
    repository = ReservationRepository(session)
    slot = (SLOT_DATE, catalog["slot_1"], catalog["theme_1"])
    assert not await repository.exists_reserved_by_slot(*slot)

    await repository.add(_reservation(catalog, "member_1", ReservationStatus.WAITING))
    await session.commit()

    assert not await repository.exists_reserved_by_slot(*slot)
    assert await repository.exists_by_slot_and_member(*slot, catalog["member_1"])
    assert not await repository.exists_by_slot_and_member(*slot, catalog["member_2"])
    assert await repository.exists_by_theme(catalog["theme_1"])
    assert not await repository.exists_by_time_slot(catalog["slot_2"])
