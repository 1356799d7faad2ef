"""Credential strategies used by /auth/sign-in."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from video_gateway.backend import BackendClient, BackendError, BackendUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: dict[str, Any]


class BasicStrategy:
    """Email/password checked by the backend, which issues the signed token."""

    name = "basic"

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def authenticate(self, email: str, password: str) -> AuthResult | None:
        if not email or not password:
            return None

        try:
            status, payload = await self.backend.sign_in(email, password)
        except (BackendError, BackendUnavailable) as exc:
            logger.warning("Sign-in rejected for %s: %s", email, exc)
            return None

        if status != 200 or not isinstance(payload, dict):
            return None

        token = payload.get("token")
        user = payload.get("user")
        if not token or not isinstance(user, dict):
            return None

        return AuthResult(token=str(token), user=user)
