"""Member-related schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from roomescape.models.member import MemberRole


class MemberCreate(BaseModel):
    """Self-service sign-up payload."""

    email: EmailStr
    password: str = Field(min_length=8)
    name: str = Field(min_length=1, max_length=120)


class MemberSummary(BaseModel):
    """Member fields safe to show next to a reservation."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class MemberRead(MemberSummary):
    """Serialized member representation."""

    email: EmailStr
    role: MemberRole
    created_at: datetime
