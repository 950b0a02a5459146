"""Config module exports."""

from wicketry.config.loader import WicketrySettings, load_config
from wicketry.config.models import (
    FilterConfig,
    LoggingConfig,
    LogOutputConfig,
    ResourcesConfig,
    ServerConfig,
    WicketryConfig,
)

__all__ = [
    "load_config",
    "WicketryConfig",
    "WicketrySettings",
    "FilterConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ResourcesConfig",
    "ServerConfig",
]
