"""Core module exports."""

from wicketry.core.errors import (
    ConfigError,
    ErrorCode,
    FilterPathError,
    ResourceStateError,
    ResourceStreamError,
    ResponseCommittedError,
    WicketryError,
)
from wicketry.core.lazy import OnceCell
from wicketry.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "FilterPathError",
    "ResourceStateError",
    "ResourceStreamError",
    "ResponseCommittedError",
    "WicketryError",
    # Lazy state
    "OnceCell",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
