"""How bundled assets are resolved and served, chosen once at startup."""

from __future__ import annotations

import logging
from typing import Protocol

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.staticfiles import StaticFiles

from video_gateway.config import GatewayConfig
from video_gateway.manifest import Manifest, load_manifest, read_manifest

logger = logging.getLogger(__name__)

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class AssetStrategy(Protocol):
    def install(self, app: FastAPI) -> None: ...

    def manifest(self) -> Manifest | None: ...


def _mount_public_dir(app: FastAPI, config: GatewayConfig) -> None:
    # public/assets/app.js is served as /assets/app.js
    static_dir = config.assets.static_dir
    if static_dir.is_dir():
        app.mount(
            config.assets.static_prefix,
            StaticFiles(directory=str(static_dir)),
            name="assets",
        )
    else:
        logger.warning(
            "Static directory is missing (%s); %s will not be served",
            static_dir,
            config.assets.static_prefix,
        )


class ProductionAssets:
    """Hashed bundles from the manifest (read once) plus security headers."""

    def __init__(self, config: GatewayConfig):
        self.config = config

    def install(self, app: FastAPI) -> None:
        app.add_middleware(SecurityHeadersMiddleware)
        _mount_public_dir(app, self.config)

    def manifest(self) -> Manifest | None:
        return load_manifest(self.config.assets.manifest_path)


class DevelopmentAssets:
    """Re-reads the manifest on every request so rebuilt bundles show up."""

    def __init__(self, config: GatewayConfig):
        self.config = config

    def install(self, app: FastAPI) -> None:
        _mount_public_dir(app, self.config)

    def manifest(self) -> Manifest | None:
        return read_manifest(self.config.assets.manifest_path)


def select_asset_strategy(config: GatewayConfig) -> AssetStrategy:
    if config.is_development:
        return DevelopmentAssets(config)
    return ProductionAssets(config)
