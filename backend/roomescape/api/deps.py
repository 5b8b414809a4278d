"""Common API dependencies."""

from __future__ import annotations

from typing import Annotated, Any, NoReturn
from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordBearer
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.core.config import get_settings
from roomescape.core.security import decode_access_token
from roomescape.db.session import get_session
from roomescape.models.member import Member
from roomescape.services import member_service
from roomescape.services.exceptions import NotFoundError, ReservationBookError

settings = get_settings()

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.api_v1_prefix}/auth/token")


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


async def get_current_member(
    token: Annotated[str, Depends(oauth2_scheme)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> Member:
    """Authenticate request via bearer token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        claims = decode_access_token(token)
    except JWTError as exc:
        raise credentials_exception from exc

    member = await member_service.get_member(session, claims.member_id)
    if member is None:
        raise credentials_exception
    return member


async def get_current_admin(
    current_member: Annotated[Member, Depends(get_current_member)],
) -> Member:
    """Ensure the current member is an administrator."""
    if not current_member.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions"
        )
    return current_member


_SECONDS_PER_WINDOW = {
    "second": 1,
    "seconds": 1,
    "minute": 60,
    "minutes": 60,
    "hour": 3600,
    "hours": 3600,
    "day": 86400,
    "days": 86400,
}


def parse_rate(value: str, *, fallback: tuple[int, int]) -> tuple[int, int]:
    """Parse ``"10/minute"`` style limits into ``(times, seconds)``."""
    try:
        count_str, window_str = value.split("/", 1)
        count = int(count_str.strip())
    except ValueError:
        return fallback
    seconds = _SECONDS_PER_WINDOW.get(window_str.strip().lower(), fallback[1])
    return count, seconds


def rate_limit(value: str, *, fallback: tuple[int, int]) -> Any:
    """Build a route dependency enforcing ``value``; inert without Redis."""
    times, seconds = parse_rate(value, fallback=fallback)

    async def _dependency(request: Request, response: Response) -> None:
        if FastAPILimiter.redis is None:
            return None
        limiter = RateLimiter(times=times, seconds=seconds)
        await limiter(request, response)

    return Depends(_dependency)


def raise_from_value_error(
    error: ValueError, *, not_found_status: int = status.HTTP_400_BAD_REQUEST
) -> NoReturn:
    """Translate a service-layer ``ValueError`` into an HTTP error."""
    status_code = status.HTTP_400_BAD_REQUEST
    if isinstance(error, NotFoundError):
        status_code = not_found_status
    detail: Any = str(error)
    if isinstance(error, ReservationBookError):
        detail = error.to_dict()
    raise HTTPException(status_code=status_code, detail=detail) from error
