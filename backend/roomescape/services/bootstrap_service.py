"""Bootstrap helpers for default data."""

from __future__ import annotations

import logging

from roomescape.core.config import get_settings
from roomescape.db.session import session_scope
from roomescape.models import MemberRole
from roomescape.services import member_service

logger = logging.getLogger(__name__)


async def ensure_default_admin() -> None:
    """Create the configured admin member if one does not yet exist."""

    settings = get_settings()
    if not settings.default_admin_email or not settings.default_admin_password:
        logger.debug("Default admin credentials not configured; skipping bootstrap")
        return

    async with session_scope(settings.database_url) as session:
        existing = await member_service.get_member_by_email(
            session, settings.default_admin_email
        )
        if existing is not None:
            return

        await member_service.create_member(
            session,
            email=settings.default_admin_email,
            password=settings.default_admin_password,
            name=settings.default_admin_name,
            role=MemberRole.ADMIN,
        )
        logger.info("Created default admin %s", settings.default_admin_email)
