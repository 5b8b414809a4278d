"""Authentication endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.api.deps import get_db_session, rate_limit
from roomescape.core.config import get_settings
from roomescape.schemas.auth import Token
from roomescape.services.auth_service import (
    authenticate_member,
    create_access_token_for_member,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_LOGIN_RATE_DEP = rate_limit(get_settings().rate_limit_login, fallback=(10, 60))


@router.post(
    "/token",
    response_model=Token,
    summary="Obtain access token",
    dependencies=[_LOGIN_RATE_DEP],
)
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> Token:
    """Validate credentials and issue a bearer token."""
    member = await authenticate_member(
        session, email=form_data.username, password=form_data.password
    )
    if member is None:
        logger.info("Failed login for %s", form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(access_token=create_access_token_for_member(member))
