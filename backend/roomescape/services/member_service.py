"""Member data access helpers."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.core.security import get_password_hash
from roomescape.models.member import Member, MemberRole
from roomescape.services.exceptions import DuplicateMemberError


async def get_member_by_email(session: AsyncSession, email: str) -> Member | None:
    """Return a member by email address."""
    result = await session.execute(select(Member).where(Member.email == email.lower()))
    return result.scalar_one_or_none()


async def get_member(session: AsyncSession, member_id: int) -> Member | None:
    """Return a member by ID."""
    return await session.get(Member, member_id)


async def list_members(
    session: AsyncSession, *, skip: int = 0, limit: int = 50
) -> list[Member]:
    """Return paginated members."""
    result = await session.execute(
        select(Member).order_by(Member.id.asc()).offset(skip).limit(limit)
    )
    return list(result.scalars().all())


async def create_member(
    session: AsyncSession,
    *,
    email: str,
    password: str,
    name: str,
    role: MemberRole = MemberRole.USER,
) -> Member:
    """Persist a new member with hashed password."""
    member = Member(
        email=email.lower(),
        name=name,
        hashed_password=get_password_hash(password),
        role=role,
    )
    session.add(member)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise DuplicateMemberError(email.lower()) from exc
    return member
