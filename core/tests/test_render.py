from __future__ import annotations

import json
import logging
import re
from pathlib import Path

import httpx
from fastapi.testclient import TestClient

from video_gateway.app import create_app
from video_gateway.assets import SECURITY_HEADERS
from video_gateway.manifest import load_manifest

CATALOG = [
    {"_id": "1", "title": "Trend", "contentRating": "PG", "cover": "/c1.jpg"},
    {"_id": "2", "title": "Original", "contentRating": "G", "cover": "/c2.jpg"},
    {"title": "No id", "contentRating": "PG"},
]

EMPTY_STATE = {"user": {}, "myList": [], "trends": [], "originals": []}

STATE_SCRIPT = re.compile(r"window\.__PRELOADED_STATE__ = (?P<json>.*?)\s*</script>", re.S)


def _state(html: str) -> dict:
    m = STATE_SCRIPT.search(html)
    assert m is not None
    return json.loads(m.group("json"))


def test_render_with_catalog_and_identity(make_config, backend) -> None:
    backend.reply("GET", "/api/movies", 200, {"data": CATALOG})

    with TestClient(create_app(make_config(), transport=backend.transport)) as client:
        client.cookies.update({"token": "tkn", "id": "u1", "email": "ana@example.test", "name": "Ana"})
        r = client.get("/")

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "server" not in r.headers
    assert "x-powered-by" not in r.headers

    state = _state(r.text)
    assert state["user"] == {"id": "u1", "email": "ana@example.test", "name": "Ana"}
    assert state["myList"] == []
    assert [m["_id"] for m in state["trends"]] == ["1"]
    assert [m["_id"] for m in state["originals"]] == ["2"]

    assert backend.last("GET", "/api/movies").headers["Authorization"] == "Bearer tkn"
    assert "Tendencias" in r.text


def test_render_degrades_to_empty_state_when_backend_fails(make_config, backend) -> None:
    backend.reply("GET", "/api/movies", 503, {"message": "unavailable"})

    with TestClient(create_app(make_config(), transport=backend.transport)) as client:
        client.cookies.update({"token": "tkn", "id": "u1"})
        r = client.get("/")

    assert r.status_code == 200
    assert _state(r.text) == EMPTY_STATE
    # Logged-out page.
    assert "Inicia sesión" in r.text


def test_render_degrades_when_backend_unreachable(make_config, backend) -> None:
    def _down(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    backend.on("GET", "/api/movies", _down)

    with TestClient(create_app(make_config(), transport=backend.transport)) as client:
        r = client.get("/player/1")

    assert r.status_code == 200
    assert _state(r.text) == EMPTY_STATE


def test_unknown_paths_render_not_found_page(make_config, backend) -> None:
    backend.reply("GET", "/api/movies", 200, {"data": CATALOG})

    with TestClient(create_app(make_config(), transport=backend.transport)) as client:
        r = client.get("/does/not/exist")

    assert r.status_code == 200
    assert "404" in r.text


def test_render_uses_manifest_in_production(make_config, backend, tmp_path: Path) -> None:
    public = tmp_path / "public"
    (public / "assets").mkdir(parents=True)
    (public / "manifest.json").write_text(
        json.dumps(
            {
                "main.css": "assets/app-abc.css",
                "main.js": "assets/app-abc.js",
                "vendors.js": "assets/vendor-abc.js",
            }
        ),
        encoding="utf-8",
    )
    backend.reply("GET", "/api/movies", 200, {"data": []})

    load_manifest.cache_clear()
    with TestClient(create_app(make_config(), transport=backend.transport)) as client:
        r = client.get("/login")

    assert r.status_code == 200
    assert 'href="/assets/app-abc.css"' in r.text
    assert 'src="/assets/app-abc.js"' in r.text
    assert 'src="/assets/vendor-abc.js"' in r.text
    for name, value in SECURITY_HEADERS.items():
        assert r.headers[name] == value


def test_development_rereads_manifest_and_skips_security_headers(
    make_config, backend, tmp_path: Path
) -> None:
    public = tmp_path / "public"
    public.mkdir()
    backend.reply("GET", "/api/movies", 200, {"data": []})

    with TestClient(
        create_app(make_config(env="development"), transport=backend.transport)
    ) as client:
        first = client.get("/login")
        (public / "manifest.json").write_text(
            json.dumps({"main.js": "/assets/app-new.js"}), encoding="utf-8"
        )
        second = client.get("/login")

    assert 'src="/assets/app.js"' in first.text
    assert 'src="/assets/app-new.js"' in second.text
    assert "X-Permitted-Cross-Domain-Policies" not in second.headers


def test_static_assets_are_served_and_missing_ones_404(make_config, backend, tmp_path: Path) -> None:
    assets_dir = tmp_path / "public" / "assets"
    assets_dir.mkdir(parents=True)
    (assets_dir / "app.js").write_text("console.log('hi');", encoding="utf-8")

    with TestClient(create_app(make_config(), transport=backend.transport)) as client:
        ok = client.get("/assets/app.js")
        missing = client.get("/assets/missing.js")

    assert ok.status_code == 200
    assert ok.text == "console.log('hi');"
    assert missing.status_code == 404
    # Static short-circuit: the catalog is never fetched for assets.
    assert backend.requests == []


def test_render_failure_becomes_500(make_config, backend, monkeypatch, caplog) -> None:
    backend.reply("GET", "/api/movies", 200, {"data": []})

    def _explode(*args, **kwargs):
        raise RuntimeError("template blew up")

    monkeypatch.setattr("video_gateway.ui.router.render_view", _explode)

    with caplog.at_level(logging.INFO):
        with TestClient(create_app(make_config(), transport=backend.transport)) as client:
            r = client.get("/")

    assert r.status_code == 500
    assert r.json()["error"]["code"] == "internal_error"
    # Still passes through the middleware chain.
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert "GET / - 500" in caplog.text


def test_render_with_non_ascii_token_degrades_to_empty_state(make_config, backend) -> None:
    backend.reply("GET", "/api/movies", 200, {"data": CATALOG})

    with TestClient(create_app(make_config(), transport=backend.transport)) as client:
        r = client.get("/", headers={b"cookie": b"token=caf\xc3\xa9; id=u1"})

    assert r.status_code == 200
    assert _state(r.text) == EMPTY_STATE
    assert backend.requests == []
