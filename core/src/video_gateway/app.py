from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from video_gateway import __version__
from video_gateway.api.models import fail, status_to_code
from video_gateway.api.router import router as api_router
from video_gateway.assets import select_asset_strategy
from video_gateway.backend import BackendClient, BackendError, BackendUnavailable, build_http_client
from video_gateway.config import GatewayConfig, load_config
from video_gateway.logs import configure_logging
from video_gateway.ui.router import router as ui_router

logger = logging.getLogger(__name__)


def create_app(
    config: GatewayConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the gateway app.

    `transport` replaces the network transport of the backend HTTP client
    (tests pass an httpx.MockTransport).
    """

    config = config or load_config()
    assets = select_asset_strategy(config)

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        configure_logging(config)
        logger.info("Video gateway starting up (%s)", config.env)
        logger.info(f"Backend API: {config.backend.api_url}")

        http = build_http_client(config, transport=transport)
        app.state.backend = BackendClient(http, api_key_token=config.backend.api_key_token)

        try:
            yield
        finally:
            await http.aclose()

    app = FastAPI(title="Video Gateway", version=__version__, lifespan=_lifespan)
    app.state.config = config
    app.state.assets = assets

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=fail(
                code="validation_error",
                message="Request validation failed",
                details=exc.errors(),
            ).model_dump(mode="json"),
        )

    @app.exception_handler(BackendError)
    async def _backend_error_handler(request: Request, exc: BackendError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(
                code=status_to_code(exc.status_code),
                message=str(exc),
                details=exc.payload,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(BackendUnavailable)
    async def _backend_unavailable_handler(
        request: Request, exc: BackendUnavailable
    ) -> JSONResponse:
        logger.warning("Backend unavailable: %s", exc)
        return JSONResponse(
            status_code=502,
            content=fail(code="bad_gateway", message="Backend unavailable").model_dump(
                mode="json"
            ),
        )

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(
                code=status_to_code(exc.status_code),
                message=str(exc.detail),
            ).model_dump(mode="json"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(
                code=status_to_code(exc.status_code),
                message=exc.detail if isinstance(exc.detail, str) else "HTTP error",
            ).model_dump(mode="json"),
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=fail(code="internal_error", message="Internal server error").model_dump(
                mode="json"
            ),
        )

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    # Static mount before the catch-all render route.
    assets.install(app)
    app.include_router(api_router)
    app.include_router(ui_router)

    return app
