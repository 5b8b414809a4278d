"""Versioned API router."""

from fastapi import APIRouter

from . import (
    auth,
    health,
    members,
    portal,
    reservations,
    themes,
    times,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(members.router, prefix="/members", tags=["members"])
router.include_router(themes.router, prefix="/themes", tags=["themes"])
router.include_router(times.router, prefix="/times", tags=["times"])
router.include_router(
    reservations.router, prefix="/reservations", tags=["reservations"]
)
router.include_router(portal.router)
