from __future__ import annotations

import asyncio
from datetime import time

from roomescape.core.config import get_settings
from roomescape.db.session import session_scope
from roomescape.models import MemberRole
from roomescape.services import member_service, theme_service, time_slot_service
from roomescape.services.exceptions import DuplicateThemeError, DuplicateTimeSlotError

EMAIL = "admin@roomescape.dev"
PASSWORD = "admin12345"

THEMES = [
    ("Haunted Manor", "Escape the manor before midnight", "https://picsum.photos/seed/manor/300"),
    ("Space Station", "Restore power to the failing station", "https://picsum.photos/seed/station/300"),
    ("Pharaoh's Tomb", "Decode the hieroglyphs and get out", "https://picsum.photos/seed/tomb/300"),
]
START_TIMES = [time(10, 0), time(12, 0), time(14, 0), time(16, 0), time(18, 0), time(20, 0)]


async def main() -> None:
    settings = get_settings()
    async with session_scope(settings.database_url) as session:
        if await member_service.get_member_by_email(session, EMAIL) is None:
            await member_service.create_member(
                session,
                email=EMAIL,
                password=PASSWORD,
                name="Dev Admin",
                role=MemberRole.ADMIN,
            )
            print(f"Created admin {EMAIL} / {PASSWORD}")
        else:
            print(f"Member {EMAIL} already exists")

        for name, description, thumbnail in THEMES:
            try:
                await theme_service.create_theme(
                    session, name=name, description=description, thumbnail=thumbnail
                )
            except DuplicateThemeError:
                print(f"Theme {name} already exists")

        for start_at in START_TIMES:
            try:
                await time_slot_service.create_time_slot(session, start_at=start_at)
            except DuplicateTimeSlotError:
                print(f"Time slot {start_at:%H:%M} already exists")

    print("Demo catalogue ready")


if __name__ == "__main__":
    asyncio.run(main())
