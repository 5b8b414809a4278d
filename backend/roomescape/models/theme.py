"""Escape room theme catalogue."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roomescape.db.base import Base
from roomescape.models.mixins import TimestampMixin


if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from roomescape.models.reservation import Reservation


class Theme(TimestampMixin, Base):
    """A bookable escape room theme."""

    __tablename__ = "themes"
    __table_args__ = (
        CheckConstraint("length(trim(name)) > 0", name="ck_themes_name_not_blank"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(String(1024), nullable=False)
    thumbnail: Mapped[str] = mapped_column(String(1024), nullable=False)

    reservations: Mapped[list["Reservation"]] = relationship(
        "Reservation", back_populates="theme"
    )
