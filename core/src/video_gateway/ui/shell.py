"""HTML document wrapped around the server-rendered markup."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from markupsafe import Markup

from video_gateway.manifest import Manifest
from video_gateway.ui.templating import templates

DEFAULT_STYLES = "/assets/app.css"
DEFAULT_MAIN_BUILD = "/assets/app.js"
DEFAULT_VENDOR_BUILD = "/assets/vendor.js"

STATE_GLOBAL = "__PRELOADED_STATE__"


def asset_paths(manifest: Manifest | None) -> dict[str, str]:
    manifest = manifest or {}
    return {
        "styles": manifest.get("main.css", DEFAULT_STYLES),
        "main_build": manifest.get("main.js", DEFAULT_MAIN_BUILD),
        "vendor_build": manifest.get("vendors.js", DEFAULT_VENDOR_BUILD),
    }


def serialize_state(state: Mapping[str, Any]) -> str:
    # "<" would let embedded content close the script tag early.
    return json.dumps(state, ensure_ascii=False).replace("<", "\\u003c")


def build_shell(markup: str, state: Mapping[str, Any], manifest: Manifest | None) -> str:
    return templates.get_template("shell.html").render(
        markup=Markup(markup),
        preloaded_state=Markup(serialize_state(state)),
        state_global=STATE_GLOBAL,
        **asset_paths(manifest),
    )
