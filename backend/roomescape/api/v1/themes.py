"""Theme catalogue endpoints."""

from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.api import deps
from roomescape.models.member import Member
from roomescape.schemas.theme import ThemeCreate, ThemeRead
from roomescape.services import theme_service

router = APIRouter()


@router.get("", response_model=list[ThemeRead], summary="List themes")
async def list_themes(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[ThemeRead]:
    themes = await theme_service.list_themes(session)
    return [ThemeRead.model_validate(theme) for theme in themes]


@router.get(
    "/popular", response_model=list[ThemeRead], summary="Most booked themes"
)
async def list_popular_themes(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    start_date: date = Query(...),
    end_date: date = Query(...),
    size: int = Query(default=10, ge=1, le=100),
) -> list[ThemeRead]:
    try:
        themes = await theme_service.list_popular_themes(
            session, start_date=start_date, end_date=end_date, size=size
        )
    except ValueError as exc:
        deps.raise_from_value_error(exc)
    return [ThemeRead.model_validate(theme) for theme in themes]


@router.post(
    "",
    response_model=ThemeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create theme",
)
async def create_theme(
    payload: ThemeCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Member, Depends(deps.get_current_admin)],
) -> ThemeRead:
    try:
        theme = await theme_service.create_theme(session, **payload.model_dump())
    except ValueError as exc:
        deps.raise_from_value_error(exc)
    return ThemeRead.model_validate(theme)


@router.delete(
    "/{theme_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete theme",
)
async def delete_theme(
    theme_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Member, Depends(deps.get_current_admin)],
) -> Response:
    try:
        await theme_service.delete_theme(session, theme_id=theme_id)
    except ValueError as exc:
        deps.raise_from_value_error(exc, not_found_status=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
