from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Security
from fastapi.responses import JSONResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from pydantic import BaseModel

from video_gateway.auth import TOKEN_COOKIE
from video_gateway.backend import BackendClient
from video_gateway.config import GatewayConfig
from video_gateway.deps import get_backend, get_config
from video_gateway.strategies import BasicStrategy

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

_basic_scheme = HTTPBasic(auto_error=False)


class SignUpRequest(BaseModel):
    email: str
    name: str
    password: str


class SignUpResponse(BaseModel):
    name: str
    email: str
    id: str | None = None


@router.post("/sign-in")
async def sign_in(
    body: Any = Body(None),  # noqa: B008
    basic: HTTPBasicCredentials | None = Security(_basic_scheme),  # noqa: B008
    backend: BackendClient = Depends(get_backend),  # noqa: B008
    config: GatewayConfig = Depends(get_config),  # noqa: B008
) -> JSONResponse:
    """Check credentials with the backend and hand the issued token to the browser.

    Accepts either:
    - Authorization: Basic <email:password>
    - a JSON body {"email": ..., "password": ...}
    """

    # Incomplete credentials are a 401, never a validation error.
    if basic is not None:
        email, password = basic.username, basic.password
    elif isinstance(body, dict):
        email, password = body.get("email"), body.get("password")
    else:
        email = password = None

    if not isinstance(email, str) or not isinstance(password, str):
        raise HTTPException(status_code=401, detail="Missing credentials")

    result = await BasicStrategy(backend).authenticate(email, password)
    if result is None:
        raise HTTPException(status_code=401, detail="Unauthorized")

    strict = not config.is_development

    # Stateless: the cookie is the only session there is.
    resp = JSONResponse(status_code=200, content={**result.user, "token": result.token})
    resp.set_cookie(
        TOKEN_COOKIE,
        result.token,
        httponly=strict,
        secure=strict,
        samesite="lax",
    )
    logger.info("Signed in %s", email)
    return resp


@router.post("/sign-up", status_code=201, response_model=SignUpResponse)
async def sign_up(
    body: SignUpRequest,
    backend: BackendClient = Depends(get_backend),  # noqa: B008
) -> SignUpResponse:
    payload = await backend.sign_up(body.email, body.name, body.password)
    user_id = payload.get("id") if isinstance(payload, dict) else None
    return SignUpResponse(
        name=body.name,
        email=body.email,
        id=str(user_id) if user_id is not None else None,
    )
