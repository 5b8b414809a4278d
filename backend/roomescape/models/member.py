"""Member model for registered players and administrators."""
from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roomescape.db.base import Base
from roomescape.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from roomescape.models.reservation import Reservation


class MemberRole(str, enum.Enum):
    """Role enumeration for platform permissions."""

    ADMIN = "admin"
    USER = "user"


class Member(TimestampMixin, Base):
    """A registered member who can book time slots."""

    __tablename__ = "members"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[MemberRole] = mapped_column(
        Enum(MemberRole), default=MemberRole.USER, nullable=False
    )

    reservations: Mapped[list["Reservation"]] = relationship(
        "Reservation", back_populates="member", passive_deletes=True
    )

    @property
    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN
