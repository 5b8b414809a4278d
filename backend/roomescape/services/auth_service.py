"""Authentication service helpers."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.core.security import create_access_token, verify_password
from roomescape.models.member import Member
from roomescape.services import member_service


async def authenticate_member(
    session: AsyncSession, email: str, password: str
) -> Member | None:
    """Validate credentials and return a member if correct."""
    member = await member_service.get_member_by_email(session, email=email)
    if member is None:
        return None
    if not verify_password(password, member.hashed_password):
        return None
    return member


def create_access_token_for_member(member: Member) -> str:
    """Generate a JWT for a member."""
    return create_access_token(member.id, member.role.value)
