from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from video_gateway.auth import Identity
from video_gateway.backend import BackendClient
from video_gateway.deps import get_backend

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user-movies", tags=["user-movies"])


@router.post("")
async def user_movies_add(
    request: Request,
    user_movie: dict[str, Any] = Body(...),  # noqa: B008
    backend: BackendClient = Depends(get_backend),  # noqa: B008
) -> JSONResponse:
    """Add a movie to the caller's list.

    200 when the backend says the movie was already there, 201 when it was added.
    The backend payload is returned unchanged.
    """

    token = Identity.from_cookies(request.cookies).token
    status, payload = await backend.add_user_movie(token, user_movie)

    if status not in (200, 201):
        logger.warning("Unexpected backend status %s adding user movie", status)
        raise HTTPException(status_code=500, detail="Unexpected backend response")

    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        raise HTTPException(status_code=500, detail="Malformed backend response")

    status_code = 200 if data.get("movieExist") else 201
    return JSONResponse(status_code=status_code, content=payload)


@router.delete("/{user_movie_id}")
async def user_movies_remove(
    request: Request,
    user_movie_id: str,
    backend: BackendClient = Depends(get_backend),  # noqa: B008
) -> JSONResponse:
    token = Identity.from_cookies(request.cookies).token
    payload = await backend.remove_user_movie(token, user_movie_id)
    return JSONResponse(status_code=200, content=payload)
