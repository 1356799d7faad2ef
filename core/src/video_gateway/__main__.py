from __future__ import annotations

import logging

import uvicorn

from video_gateway.app import create_app
from video_gateway.config import load_config
from video_gateway.logs import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    config = load_config()
    configure_logging(config)

    logger.info(f"{config.env} server running on port {config.network.port}")
    uvicorn.run(
        create_app(config),
        host=config.network.bind_host,
        port=config.network.port,
        server_header=config.network.server_header,
        log_config=None,
    )


if __name__ == "__main__":
    main()
