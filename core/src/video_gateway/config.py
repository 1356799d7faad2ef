from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

CONFIG_FILE_ENV = "VIDEO_GATEWAY_CONFIG"

DEFAULT_PUBLIC_DIR = Path(__file__).resolve().parent / "public"


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000, ge=1, le=65535)
    server_header: bool = Field(
        default=False,
        description="Whether uvicorn may send its identifying 'server' header.",
    )


class BackendConfig(BaseModel):
    """Where the backend REST API lives and how long we wait for it."""

    api_url: str = Field(default="http://127.0.0.1:3001")
    api_key_token: str | None = Field(
        default=None,
        description="API key sent with sign-in so the backend can scope the issued token.",
    )
    timeout_seconds: float = Field(default=10.0, gt=0)


class AssetsConfig(BaseModel):
    public_dir: str = Field(
        default=str(DEFAULT_PUBLIC_DIR),
        description="Directory holding the bundled assets and manifest.json",
    )
    manifest_name: str = Field(default="manifest.json")
    static_prefix: str = Field(default="/assets")

    @property
    def public_path(self) -> Path:
        return Path(self.public_dir).expanduser()

    @property
    def static_dir(self) -> Path:
        return self.public_path / self.static_prefix.strip("/")

    @property
    def manifest_path(self) -> Path:
        return self.public_path / self.manifest_name


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    file: str | None = Field(
        default=None, description="Optional log file; rolled when it reaches max_size_mb."
    )
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class GatewayConfig(BaseModel):
    env: Literal["development", "production"] = Field(default="production")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    backend: BackendConfig = Field(default_factory=BackendConfig)
    assets: AssetsConfig = Field(default_factory=AssetsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def is_development(self) -> bool:
        return self.env == "development"


# environment variable -> (section, field); section None means top level
_ENV_OVERRIDES: dict[str, tuple[str | None, str]] = {
    "ENV": (None, "env"),
    "HOST": ("network", "bind_host"),
    "PORT": ("network", "port"),
    "API_URL": ("backend", "api_url"),
    "API_KEY_TOKEN": ("backend", "api_key_token"),
    "API_TIMEOUT": ("backend", "timeout_seconds"),
    "PUBLIC_DIR": ("assets", "public_dir"),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FILE": ("logging", "file"),
}


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_config(environ: dict[str, str] | None = None) -> GatewayConfig:
    """Build the gateway config.

    - Starts from defaults.
    - Merges ${VIDEO_GATEWAY_CONFIG} (a JSON file) when set.
    - Applies the plain environment variables (ENV, PORT, API_URL, ...) on top.
    - Validation is performed by Pydantic.
    """

    env = os.environ if environ is None else environ

    raw: dict[str, Any] = {}
    config_file = (env.get(CONFIG_FILE_ENV) or "").strip()
    if config_file:
        raw = _read_json(Path(config_file).expanduser())
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid config format at {config_file}")

    for name, (section, field) in _ENV_OVERRIDES.items():
        value = (env.get(name) or "").strip()
        if not value:
            continue
        if section is None:
            raw[field] = value
        else:
            raw.setdefault(section, {})[field] = value

    return GatewayConfig.model_validate(raw)
