"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (WICKETRY__SECTION__KEY)
3. Project YAML (wicketry.yaml)
4. Global YAML (~/.config/wicketry/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    WICKETRY__<SECTION>__<KEY>=<VALUE>

Examples:
    WICKETRY__LOGGING__LEVEL=DEBUG
    WICKETRY__SERVER__PORT=8080
    WICKETRY__RESOURCES__DEFAULT_CACHE_DURATION_SEC=600
    WICKETRY__FILTER__FILTER_MAPPING=/app/*
"""

from datetime import timedelta
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from wicketry.config.constants import (
    DEFAULT_CACHE_DURATION,
    MAX_CACHE_DURATION,
    PORT_MAX,
    PORT_MIN,
    STREAM_BUFFER_MIN,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        WICKETRY__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs one event per resource response.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ServerConfig(BaseModel):
    """Server configuration.

    Env vars:
        WICKETRY__SERVER__HOST: Bind address (default: 127.0.0.1)
        WICKETRY__SERVER__PORT: Port number (default: 8080)
    """

    host: str = Field(
        default="127.0.0.1",
        description="Bind address. Use 0.0.0.0 for network access.",
    )
    port: int = Field(default=8080, description="Server port.")

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not (PORT_MIN <= v <= PORT_MAX):
            raise ValueError(f"Port must be {PORT_MIN}-{PORT_MAX}, got {v}")
        return v


class ResourcesConfig(BaseModel):
    """Resource response configuration.

    Env vars:
        WICKETRY__RESOURCES__DEFAULT_CACHE_DURATION_SEC: Default client cache lifetime
        WICKETRY__RESOURCES__STREAM_BUFFER_SIZE: Copy buffer for streamed bodies
    """

    default_cache_duration_sec: int = Field(
        default=int(DEFAULT_CACHE_DURATION.total_seconds()),
        description="Cache lifetime for resources that do not set one. 0 disables caching. "
        "Capped at one year.",
    )
    stream_buffer_size: int = Field(
        default=4096,
        description="Bytes read per copy step when streaming a resource body.",
    )
    mime_types: dict[str, str] = Field(
        default_factory=dict,
        description="Extension to content type overrides, e.g. {'webp': 'image/webp'}.",
    )

    @field_validator("default_cache_duration_sec")
    @classmethod
    def validate_cache_duration(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Cache duration must not be negative, got {v}")
        return min(v, int(MAX_CACHE_DURATION.total_seconds()))

    @field_validator("stream_buffer_size")
    @classmethod
    def validate_buffer_size(cls, v: int) -> int:
        if v < STREAM_BUFFER_MIN:
            raise ValueError(f"Stream buffer must be at least {STREAM_BUFFER_MIN}, got {v}")
        return v

    @property
    def default_cache_duration(self) -> timedelta:
        return timedelta(seconds=self.default_cache_duration_sec)


class FilterConfig(BaseModel):
    """Mount path resolution for the request filter.

    Env vars:
        WICKETRY__FILTER__FILTER_MAPPING: Explicit url-pattern (e.g. /app/*)
        WICKETRY__FILTER__FILTER_NAME: Name to look up in the deployment descriptor
        WICKETRY__FILTER__WEB_XML: Path to the deployment descriptor
        WICKETRY__FILTER__IS_SERVLET: Look up servlet-mapping instead of filter-mapping
    """

    filter_mapping: str | None = Field(
        default=None,
        description="Explicit url-pattern. Wins over web_xml when both are set.",
    )
    filter_name: str | None = Field(
        default=None,
        description="filter-name (or servlet-name) whose mapping defines the mount.",
    )
    web_xml: str | None = Field(
        default=None,
        description="Deployment descriptor declaring the filter mapping.",
    )
    is_servlet: bool = Field(
        default=False,
        description="Read <servlet-mapping> entries instead of <filter-mapping>.",
    )


class WicketryConfig(BaseModel):
    """Root configuration for Wicketry.

    All settings can be configured via:
    1. Environment variables: WICKETRY__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    resources: ResourcesConfig = Field(default_factory=ResourcesConfig)
    filter: FilterConfig = Field(default_factory=FilterConfig)
