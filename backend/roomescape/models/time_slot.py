"""Daily start times offered for every theme."""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING

from sqlalchemy import Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roomescape.db.base import Base
from roomescape.models.mixins import TimestampMixin


if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from roomescape.models.reservation import Reservation


class TimeSlot(TimestampMixin, Base):
    """A start time that can be booked on any date."""

    __tablename__ = "reservation_times"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    start_at: Mapped[dt.time] = mapped_column(Time, unique=True, nullable=False)

    reservations: Mapped[list["Reservation"]] = relationship(
        "Reservation", back_populates="time_slot"
    )
