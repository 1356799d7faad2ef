from __future__ import annotations

from fastapi import APIRouter

from video_gateway.api.auth import router as auth_router
from video_gateway.api.user_movies import router as user_movies_router

router = APIRouter()

router.include_router(auth_router)
router.include_router(user_movies_router)
