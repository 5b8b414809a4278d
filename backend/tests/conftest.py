"""Test fixtures for the reservation book backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from datetime import time

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from roomescape.core.config import get_settings
from roomescape.core.security import get_password_hash
from roomescape.db.base import Base
from roomescape.db.session import dispose_engine, get_sessionmaker
from roomescape.main import app
from roomescape.models import Member, MemberRole, Theme, TimeSlot

MEMBER_PASSWORD = "Passw0rd!"
ADMIN_PASSWORD = "Adm1nPass!"


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def session(reset_database: None, db_url: str) -> AsyncIterator[AsyncSession]:
    """Yield a session bound to the freshly created schema."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as db_session:
        yield db_session


@pytest_asyncio.fixture()
async def catalog(session: AsyncSession) -> dict[str, int]:
    """Seed three members, two themes and two time slots; return their ids."""
    members = [
        Member(
            email=f"{name}@example.com",
            name=name.title(),
            hashed_password="x",
            role=MemberRole.USER,
        )
        for name in ("brie", "dana", "ellis")
    ]
    themes = [
        Theme(name="Haunted Manor", description="Escape the manor", thumbnail="manor.png"),
        Theme(name="Space Station", description="Restore power", thumbnail="station.png"),
    ]
    slots = [TimeSlot(start_at=time(10, 0)), TimeSlot(start_at=time(13, 30))]
    session.add_all([*members, *themes, *slots])
    await session.commit()

    return {
        "member_1": members[0].id,
        "member_2": members[1].id,
        "member_3": members[2].id,
        "theme_1": themes[0].id,
        "theme_2": themes[1].id,
        "slot_1": slots[0].id,
        "slot_2": slots[1].id,
    }


@pytest_asyncio.fixture()
async def app_context(
    reset_database: None, db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client and seeded catalogue data."""
    sessionmaker = get_sessionmaker(db_url)

    async with sessionmaker() as db_session:
        admin = Member(
            email="admin@example.com",
            name="Casey Admin",
            hashed_password=get_password_hash(ADMIN_PASSWORD),
            role=MemberRole.ADMIN,
        )
        first = Member(
            email="brie@example.com",
            name="Brie",
            hashed_password=get_password_hash(MEMBER_PASSWORD),
            role=MemberRole.USER,
        )
        second = Member(
            email="dana@example.com",
            name="Dana",
            hashed_password=get_password_hash(MEMBER_PASSWORD),
            role=MemberRole.USER,
        )
        theme = Theme(
            name="Haunted Manor", description="Escape the manor", thumbnail="manor.png"
        )
        morning = TimeSlot(start_at=time(10, 0))
        afternoon = TimeSlot(start_at=time(13, 30))
        db_session.add_all([admin, first, second, theme, morning, afternoon])
        await db_session.commit()

        context: dict[str, object] = {
            "admin_email": admin.email,
            "admin_password": ADMIN_PASSWORD,
            "member_1_id": first.id,
            "member_1_email": first.email,
            "member_2_id": second.id,
            "member_2_email": second.email,
            "member_password": MEMBER_PASSWORD,
            "theme_id": theme.id,
            "slot_1_id": morning.id,
            "slot_2_id": afternoon.id,
        }

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
