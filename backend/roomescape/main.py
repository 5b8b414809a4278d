"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from secure import Secure
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi_limiter import FastAPILimiter
import redis.asyncio as redis

from roomescape.api import api_router
from roomescape.core.config import get_settings
from roomescape.security.logging_filters import SensitiveFilter
from roomescape.services.bootstrap_service import ensure_default_admin
from roomescape.services.exceptions import ReservationBookError

logger = logging.getLogger(__name__)

settings = get_settings()


async def _start_rate_limiter() -> redis.Redis | None:
    """Connect the limiter when Redis is configured; routes skip limits otherwise."""
    if not settings.redis_url:
        logger.info("REDIS_URL not set; rate limiting disabled")
        return None
    try:
        pool = redis.from_url(settings.redis_url, encoding="utf-8", decode_responses=True)
        await FastAPILimiter.init(pool)
    except Exception:  # pragma: no cover - limiter startup is best effort
        logger.exception("Failed to initialize rate limiter")
        return None
    return pool


@asynccontextmanager
async def lifespan(_: FastAPI):
    redis_pool = await _start_rate_limiter()
    try:
        await ensure_default_admin()
    except Exception:  # pragma: no cover - best effort bootstrap
        logger.exception("Failed to ensure default admin account")
    try:
        yield
    finally:
        if redis_pool is not None:
            try:
                await FastAPILimiter.close()
                await redis_pool.aclose()
            except Exception:  # pragma: no cover - limiter shutdown
                logger.exception("Failed to close rate limiter")


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")

_secure_headers = Secure()


@app.middleware("http")
async def _apply_security_headers(request, call_next):
    response = await call_next(request)
    _secure_headers.set_headers(response)
    return response


@app.exception_handler(ReservationBookError)
async def _reservation_book_error(_: Request, exc: ReservationBookError) -> JSONResponse:
    # Routers translate expected errors themselves; this catches the rest.
    logger.warning("Unhandled reservation error: %s", exc.message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.to_dict()}
    )


for _logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error", ""):
    _logger = logging.getLogger(_logger_name)
    if not any(isinstance(flt, SensitiveFilter) for flt in _logger.filters):
        _logger.addFilter(SensitiveFilter())

app.include_router(api_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Return a simple welcome message."""
    return {"message": settings.app_name}
