"""Rate limit string parsing."""

import pytest
from fastapi_limiter import FastAPILimiter

from roomescape.api.deps import parse_rate, rate_limit


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("10/minute", (10, 60)),
        ("5 / hours", (5, 3600)),
        ("3/fortnight", (3, 60)),
        ("many/minute", (10, 60)),
        ("", (10, 60)),
    ],
)
def test_parse_rate(value: str, expected: tuple[int, int]) -> None:
    assert parse_rate(value, fallback=(10, 60)) == expected


@pytest.mark.asyncio
async def test_limit_is_inert_until_redis_is_configured() -> None:
    assert FastAPILimiter.redis is None

    dependency = rate_limit("1/minute", fallback=(10, 60)).dependency

    assert await dependency(request=None, response=None) is None
