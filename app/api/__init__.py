"""API routes."""

from fastapi import APIRouter

from app.api import auth, health, objects, stats

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(objects.router, prefix="/objects", tags=["objects"])
router.include_router(stats.router, prefix="/stats", tags=["stats"])
