"""Resource response descriptor and body write callbacks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import IO

from wicketry.config.constants import (
    DEFAULT_CACHE_DURATION,
    MAX_CACHE_DURATION,
    NO_CACHE,
    UNKNOWN_CONTENT_LENGTH,
)
from wicketry.config.models import ResourcesConfig
from wicketry.http.mime import MimeTypes
from wicketry.http.request import WebRequest
from wicketry.http.response import WebResponse
from wicketry.resource.caching import CacheScope
from wicketry.resource.streams import ResponseOutputStream, copy_stream


class ContentDisposition(Enum):
    """Whether the client should display the resource or save it."""

    INLINE = "inline"
    ATTACHMENT = "attachment"


@dataclass
class ResourceAttributes:
    """Everything a resource needs to answer one request."""

    request: WebRequest
    response: WebResponse
    mime_types: MimeTypes = field(default_factory=MimeTypes)
    settings: ResourcesConfig = field(default_factory=ResourcesConfig)


class WriteCallback(ABC):
    """Produces the response body once headers are committed."""

    @abstractmethod
    def write_data(self, attributes: ResourceAttributes) -> None:
        """Write the resource data to ``attributes.response``."""

    def write_stream(self, attributes: ResourceAttributes, stream: IO[bytes]) -> int:
        """Copy a binary stream to the response. Returns the byte count."""
        out = ResponseOutputStream(attributes.response)
        return copy_stream(stream, out, attributes.settings.stream_buffer_size)


class _FunctionWriteCallback(WriteCallback):
    def __init__(self, func: Callable[[ResourceAttributes], None]) -> None:
        self._func = func

    def write_data(self, attributes: ResourceAttributes) -> None:
        self._func(attributes)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class ResourceResponse:
    """Describes how one resource request should be answered.

    Created by a resource for a single request, configured, then handed to
    ``AbstractResource.respond`` which consumes it exactly once.
    """

    def __init__(self, cache_duration: timedelta = DEFAULT_CACHE_DURATION) -> None:
        self.error_code: int | None = None
        self.error_message: str | None = None
        self.file_name: str | None = None
        self.content_type: str | None = None
        self.text_encoding: str | None = None
        self.content_length: int = UNKNOWN_CONTENT_LENGTH
        self._last_modified: datetime | None = None
        self._content_disposition = ContentDisposition.INLINE
        self._cache_duration = cache_duration
        # Shared caches are opt-in.
        self._cache_scope = CacheScope.PRIVATE
        self._write_callback: WriteCallback | None = None

    @classmethod
    def from_attributes(cls, attributes: ResourceAttributes) -> ResourceResponse:
        """New descriptor seeded with the configured default cache duration."""
        return cls(cache_duration=attributes.settings.default_cache_duration)

    def set_error(self, error_code: int, error_message: str | None = None) -> None:
        """Answer with ``error_code`` instead of writing data."""
        self.error_code = error_code
        self.error_message = error_message

    @property
    def content_disposition(self) -> ContentDisposition:
        return self._content_disposition

    @content_disposition.setter
    def content_disposition(self, value: ContentDisposition) -> None:
        if value is None:
            raise ValueError("content_disposition must not be None")
        self._content_disposition = value

    @property
    def last_modified(self) -> datetime | None:
        return self._last_modified

    @last_modified.setter
    def last_modified(self, value: datetime | None) -> None:
        self._last_modified = None if value is None else _as_utc(value)

    @property
    def cache_duration(self) -> timedelta:
        """How long clients may cache the response. ``NO_CACHE`` disables caching."""
        return self._cache_duration

    @cache_duration.setter
    def cache_duration(self, value: timedelta) -> None:
        if value is None:
            raise ValueError("cache_duration must not be None")
        self._cache_duration = value

    def disable_caching(self) -> None:
        self.cache_duration = NO_CACHE

    def set_cache_duration_to_maximum(self) -> None:
        self.cache_duration = MAX_CACHE_DURATION

    @property
    def cache_scope(self) -> CacheScope:
        """Which caches may store the response; only relevant when caching is on."""
        return self._cache_scope

    @cache_scope.setter
    def cache_scope(self, value: CacheScope) -> None:
        if value is None:
            raise ValueError("cache_scope must not be None")
        self._cache_scope = value

    @property
    def write_callback(self) -> WriteCallback | None:
        return self._write_callback

    @write_callback.setter
    def write_callback(
        self, value: WriteCallback | Callable[[ResourceAttributes], None]
    ) -> None:
        if value is None:
            raise ValueError("write_callback must not be None")
        if not isinstance(value, WriteCallback):
            value = _FunctionWriteCallback(value)
        self._write_callback = value

    def data_needs_to_be_written(self, attributes: ResourceAttributes) -> bool:
        """Check ``If-Modified-Since`` against ``last_modified``.

        HTTP dates carry whole seconds only, so ``last_modified`` is truncated
        (never rounded) before comparing.
        """
        if_modified_since = attributes.request.if_modified_since
        if if_modified_since is None or self._last_modified is None:
            return True
        truncated = self._last_modified.replace(microsecond=0)
        return if_modified_since < truncated
