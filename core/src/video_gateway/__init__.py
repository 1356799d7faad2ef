from video_gateway.config import GatewayConfig, load_config

__version__ = "0.1.0"

__all__ = [
    "GatewayConfig",
    "__version__",
    "load_config",
]
