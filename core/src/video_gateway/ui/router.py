from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.responses import Response

from video_gateway.api.models import fail
from video_gateway.auth import Identity
from video_gateway.deps import get_backend
from video_gateway.ui.shell import build_shell
from video_gateway.ui.state import build_initial_state, fetch_catalog
from video_gateway.ui.views import render_view

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ui"])


async def render_app(request: Request) -> Response:
    identity = Identity.from_cookies(request.cookies)

    catalog = await fetch_catalog(get_backend(request), identity.token)
    state = build_initial_state(identity, catalog)
    logger.debug("Rendering %s (logged=%s)", request.url.path, state.logged)

    # A render failure is a 500 answered inside the middleware chain (logging, security headers).
    try:
        markup = render_view(request.url.path, state)
        manifest = request.app.state.assets.manifest()
        html = build_shell(markup, state.to_dict(), manifest)
    except Exception:
        logger.exception("Rendering %s failed", request.url.path)
        return JSONResponse(
            status_code=500,
            content=fail(code="internal_error", message="Internal server error").model_dump(
                mode="json"
            ),
        )

    return HTMLResponse(html, status_code=200)


# Registered last: everything not matched by the API or static mounts renders the app.
router.add_api_route(
    "/{full_path:path}",
    render_app,
    methods=["GET"],
    response_class=HTMLResponse,
    include_in_schema=False,
)
