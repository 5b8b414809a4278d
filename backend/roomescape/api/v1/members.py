"""Member sign-up and profile endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.api import deps
from roomescape.core.config import get_settings
from roomescape.models.member import Member
from roomescape.schemas.member import MemberCreate, MemberRead
from roomescape.services import member_service
from roomescape.services.exceptions import DuplicateMemberError

router = APIRouter()

_SIGNUP_RATE_DEP = deps.rate_limit(
    get_settings().rate_limit_default, fallback=(100, 60)
)


@router.post(
    "",
    response_model=MemberRead,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up",
    dependencies=[_SIGNUP_RATE_DEP],
)
async def create_member(
    payload: MemberCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> MemberRead:
    try:
        member = await member_service.create_member(
            session,
            email=payload.email,
            password=payload.password,
            name=payload.name,
        )
    except DuplicateMemberError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=exc.to_dict()
        ) from exc
    return MemberRead.model_validate(member)


@router.get("/me", response_model=MemberRead, summary="Current member")
async def read_current_member(
    current_member: Annotated[Member, Depends(deps.get_current_member)],
) -> MemberRead:
    return MemberRead.model_validate(current_member)


@router.get("", response_model=list[MemberRead], summary="List members")
async def list_members(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Member, Depends(deps.get_current_admin)],
    skip: int = 0,
    limit: int = 50,
) -> list[MemberRead]:
    members = await member_service.list_members(
        session, skip=skip, limit=min(limit, 100)
    )
    return [MemberRead.model_validate(member) for member in members]
