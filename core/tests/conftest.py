"""Shared fixtures: a scripted stand-in for the backend REST API."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from video_gateway.config import GatewayConfig

Handler = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    """Routes (method, path) to canned responses and records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def reply(self, method: str, path: str, status_code: int, payload: Any = None) -> None:
        self.on(method, path, lambda request: httpx.Response(status_code, json=payload))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"message": "not found"})
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def last(self, method: str, path: str) -> httpx.Request:
        for request in reversed(self.requests):
            if request.method == method and request.url.path == path:
                return request
        raise AssertionError(f"No {method} {path} request was made")


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., GatewayConfig]:
    def _make(**overrides: Any) -> GatewayConfig:
        raw: dict[str, Any] = {
            "env": "production",
            "backend": {"api_url": "http://backend.test", "api_key_token": "api-key"},
            "assets": {"public_dir": str(tmp_path / "public")},
        }
        raw.update(overrides)
        return GatewayConfig.model_validate(raw)

    return _make
