"""Reservation models."""
from __future__ import annotations

import datetime as dt
import enum
from typing import TYPE_CHECKING

from sqlalchemy import Date, Enum, ForeignKey, Index, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roomescape.db.base import Base
from roomescape.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover
    from roomescape.models import Member, Theme, TimeSlot


class ReservationStatus(str, enum.Enum):
    """Lifecycle states for reservations."""

    RESERVED = "reserved"
    WAITING = "waiting"


class Reservation(TimestampMixin, Base):
    """A member's claim on one (date, time slot, theme) tuple.

    The integer primary key doubles as the insertion sequence: waitlist
    priority and waiting ranks are ordered by ``id``.
    """

    __tablename__ = "reservations"
    __table_args__ = (
        Index("ix_reservations_slot", "date", "time_slot_id", "theme_id"),
        Index("ix_reservations_member", "member_id"),
        Index(
            "ux_reservations_slot_reserved",
            "date",
            "time_slot_id",
            "theme_id",
            unique=True,
            postgresql_where=text("status = 'RESERVED'"),
            sqlite_where=text("status = 'RESERVED'"),
        ),
        UniqueConstraint(
            "date",
            "time_slot_id",
            "theme_id",
            "member_id",
            name="uq_reservations_slot_member",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(
        ForeignKey("members.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time_slot_id: Mapped[int] = mapped_column(
        ForeignKey("reservation_times.id", ondelete="RESTRICT"), nullable=False
    )
    theme_id: Mapped[int] = mapped_column(
        ForeignKey("themes.id", ondelete="RESTRICT"), nullable=False
    )
    status: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus), default=ReservationStatus.RESERVED, nullable=False
    )

    member: Mapped["Member"] = relationship("Member", back_populates="reservations")
    time_slot: Mapped["TimeSlot"] = relationship(
        "TimeSlot", back_populates="reservations"
    )
    theme: Mapped["Theme"] = relationship("Theme", back_populates="reservations")

    @property
    def is_waiting(self) -> bool:
        return self.status == ReservationStatus.WAITING
