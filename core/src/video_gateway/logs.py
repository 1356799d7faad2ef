from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from video_gateway.config import GatewayConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: GatewayConfig) -> None:
    """Configure the root logger so every module logger is captured.

    Safe to call more than once (e.g. on reload): handlers are only added once.
    """

    formatter = logging.Formatter(LOG_FORMAT)

    root = logging.getLogger()
    root.setLevel(config.logging.level.upper())

    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    if config.logging.file and not any(
        isinstance(h, RotatingFileHandler) for h in root.handlers
    ):
        log_path = Path(config.logging.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=config.logging.max_size_mb * 1024 * 1024,
            backupCount=config.logging.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
