from __future__ import annotations

import hashlib
from pathlib import Path

from fastapi.templating import Jinja2Templates

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"

GRAVATAR_URL = "https://gravatar.com/avatar"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def gravatar(email: str | None) -> str:
    digest = hashlib.md5((email or "").strip().lower().encode("utf-8")).hexdigest()
    return f"{GRAVATAR_URL}/{digest}"


templates.env.filters["gravatar"] = gravatar
