"""Client for the backend REST API (users, movies, user-movies)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from video_gateway.config import GatewayConfig

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """The backend answered, but not with something we can use."""

    def __init__(self, status_code: int, payload: Any = None, message: str | None = None):
        self.status_code = status_code
        self.payload = payload
        super().__init__(message or f"Backend responded with status {status_code}")


class BackendUnavailable(Exception):
    """The request never got an answer (connection error, timeout, unsendable request)."""


def build_http_client(
    config: GatewayConfig, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=config.backend.api_url.rstrip("/"),
        timeout=config.backend.timeout_seconds,
        transport=transport,
    )


def bearer(token: str | None) -> dict[str, str]:
    # The backend decides what an empty token means.
    return {"Authorization": f"Bearer {token or ''}"}


class BackendClient:
    def __init__(self, http: httpx.AsyncClient, api_key_token: str | None = None):
        self.http = http
        self.api_key_token = api_key_token

    async def _request(self, method: str, url: str, **kwargs: Any) -> tuple[int, Any]:
        try:
            response = await self.http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise BackendUnavailable(f"{method} {url} failed: {exc}") from exc
        except (httpx.InvalidURL, ValueError) as exc:
            # The request could not be built, e.g. a non-ASCII token in a header.
            raise BackendUnavailable(f"{method} {url} could not be sent: {exc}") from exc

        try:
            payload = response.json() if response.content else None
        except ValueError as exc:
            if response.status_code >= 400:
                raise BackendError(response.status_code) from exc
            raise BackendError(502, message=f"{method} {url} returned a non-JSON body") from exc

        if response.status_code >= 400:
            logger.warning("Backend %s %s - %s", method, url, response.status_code)
            raise BackendError(response.status_code, payload)

        return response.status_code, payload

    async def list_movies(self, token: str | None) -> list[dict[str, Any]]:
        _, payload = await self._request("GET", "/api/movies", headers=bearer(token))
        movies = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(movies, list):
            raise BackendError(502, payload, "Malformed movie list")
        return movies

    async def sign_in(self, email: str, password: str) -> tuple[int, Any]:
        return await self._request(
            "POST",
            "/api/auth/sign-in",
            auth=httpx.BasicAuth(email, password),
            json={"apiKeyToken": self.api_key_token},
        )

    async def sign_up(self, email: str, name: str, password: str) -> Any:
        _, payload = await self._request(
            "POST",
            "/api/auth/sign-up",
            json={"email": email, "name": name, "password": password},
        )
        return payload

    async def add_user_movie(self, token: str | None, user_movie: Any) -> tuple[int, Any]:
        return await self._request(
            "POST", "/api/user-movies", headers=bearer(token), json=user_movie
        )

    async def remove_user_movie(self, token: str | None, user_movie_id: str) -> Any:
        _, payload = await self._request(
            "DELETE", f"/api/user-movies/{user_movie_id}", headers=bearer(token)
        )
        return payload
