"""Build-time asset manifest (logical bundle name -> content-hashed path)."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

logger = logging.getLogger(__name__)

Manifest = Mapping[str, str]


def _served_path(raw: str) -> str:
    return raw if raw.startswith(("/", "http://", "https://")) else "/" + raw


def read_manifest(path: Path) -> Manifest | None:
    """Read manifest.json; returns None when it is missing or unusable."""

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.info("No asset manifest at %s; using default asset paths", path)
        return None
    except (OSError, ValueError) as exc:
        logger.warning("Unreadable asset manifest at %s: %s", path, exc)
        return None

    if not isinstance(data, dict):
        logger.warning("Invalid asset manifest format at %s", path)
        return None

    return MappingProxyType(
        {str(k): _served_path(v) for k, v in data.items() if isinstance(v, str)}
    )


@lru_cache(maxsize=None)
def load_manifest(path: Path) -> Manifest | None:
    """Process-wide manifest: read once per path, then shared read-only."""

    return read_manifest(path)
