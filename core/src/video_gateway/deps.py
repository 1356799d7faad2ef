from __future__ import annotations

from fastapi import HTTPException, Request

from video_gateway.backend import BackendClient
from video_gateway.config import GatewayConfig


def get_backend(request: Request) -> BackendClient:
    backend = getattr(request.app.state, "backend", None)
    if backend is None:
        raise HTTPException(status_code=500, detail="Backend client not initialized")
    return backend


def get_config(request: Request) -> GatewayConfig:
    config = getattr(request.app.state, "config", None)
    if config is None:
        raise HTTPException(status_code=500, detail="Config not initialized")
    return config
