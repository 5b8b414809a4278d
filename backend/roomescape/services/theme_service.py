"""Theme catalogue helpers."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.models.theme import Theme
from roomescape.repositories import ReservationRepository
from roomescape.services.exceptions import (
    DuplicateThemeError,
    NotFoundError,
    ResourceInUseError,
)

logger = logging.getLogger(__name__)


async def list_themes(session: AsyncSession) -> Sequence[Theme]:
    result = await session.execute(select(Theme).order_by(Theme.id.asc()))
    return result.scalars().all()


async def get_theme(session: AsyncSession, *, theme_id: int) -> Theme | None:
    return await session.get(Theme, theme_id)


async def create_theme(
    session: AsyncSession,
    *,
    name: str,
    description: str,
    thumbnail: str,
) -> Theme:
    """Persist a new theme; names are unique."""
    theme = Theme(name=name.strip(), description=description, thumbnail=thumbnail)
    session.add(theme)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise DuplicateThemeError(name) from exc
    logger.info("Theme %s created: %s", theme.id, theme.name)
    return theme


async def delete_theme(session: AsyncSession, *, theme_id: int) -> None:
    """Delete a theme that no reservation references."""
    theme = await session.get(Theme, theme_id)
    if theme is None:
        raise NotFoundError("theme_id", theme_id)
    if await ReservationRepository(session).exists_by_theme(theme_id):
        raise ResourceInUseError("Theme", theme_id)
    await session.delete(theme)
    await session.commit()
    logger.info("Theme %s deleted", theme_id)


async def list_popular_themes(
    session: AsyncSession,
    *,
    start_date: date,
    end_date: date,
    size: int,
) -> list[Theme]:
    """Rank themes by reservation count within an inclusive date range."""
    if start_date > end_date:
        raise ValueError("start_date must be on or before end_date")
    if size < 1:
        raise ValueError("size must be positive")
    ranking = await ReservationRepository(session).count_by_theme_between(
        start_date, end_date, size
    )
    themes: list[Theme] = []
    for theme_id, _count in ranking:
        theme = await session.get(Theme, theme_id)
        if theme is not None:
            themes.append(theme)
    return themes
