"""Buffered outbound response used by resources and behaviors.

A ``WebResponse`` is owned by exactly one request thread. Headers may be
changed until the response is committed by ``flush()``, ``send_error()`` or
the first body write; after that only body bytes can be added.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from starlette.responses import Response

from wicketry.config.constants import EXPIRED_DATE_HEADER
from wicketry.core.errors import ResponseCommittedError
from wicketry.http.headers import (
    CACHE_CONTROL,
    CONTENT_DISPOSITION,
    CONTENT_LENGTH,
    CONTENT_TYPE,
    DATE,
    EXPIRES,
    LAST_MODIFIED,
    PRAGMA,
    content_disposition,
    format_http_date,
)

if TYPE_CHECKING:
    from wicketry.resource.caching import CacheScope

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class WebResponse:
    """Collects status, headers and body for one request."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self.status_code = 200
        self.error_message: str | None = None
        self._headers: dict[str, str] = {}
        self._body: list[bytes | bytearray | memoryview] = []
        self._committed = False

    @property
    def is_committed(self) -> bool:
        return self._committed

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    @property
    def body(self) -> bytes:
        return b"".join(self._body)

    @property
    def chunks(self) -> list[bytes | bytearray | memoryview]:
        """Body chunks exactly as they were written."""
        return list(self._body)

    def get_header(self, name: str) -> str | None:
        key = self._find(name)
        return None if key is None else self._headers[key]

    def _find(self, name: str) -> str | None:
        lowered = name.lower()
        for key in self._headers:
            if key.lower() == lowered:
                return key
        return None

    def _check_not_committed(self, name: str) -> None:
        if self._committed:
            raise ResponseCommittedError.header_after_commit(name)

    def set_header(self, name: str, value: str) -> None:
        self._check_not_committed(name)
        existing = self._find(name)
        if existing is not None:
            del self._headers[existing]
        self._headers[name] = value

    def remove_header(self, name: str) -> None:
        self._check_not_committed(name)
        existing = self._find(name)
        if existing is not None:
            del self._headers[existing]

    def set_date_header(self, name: str, value: datetime) -> None:
        self.set_header(name, format_http_date(value))

    def set_status(self, status_code: int) -> None:
        self._check_not_committed(":status")
        self.status_code = status_code

    def send_error(self, status_code: int, message: str | None = None) -> None:
        self.set_status(status_code)
        self.error_message = message
        if message:
            self.set_header(CONTENT_TYPE, "text/plain; charset=utf-8")
            self._body.append(message.encode("utf-8"))
        self._committed = True

    def set_last_modified_time(self, value: datetime) -> None:
        self.set_date_header(LAST_MODIFIED, value)

    def enable_caching(self, duration: timedelta, scope: CacheScope) -> None:
        """Allow caching for ``duration`` by the caches ``scope`` admits."""
        now = self._clock()
        self.set_date_header(DATE, now)
        self.set_date_header(EXPIRES, now + duration)
        self.set_header(
            CACHE_CONTROL,
            f"{scope.cache_control}, max-age={int(duration.total_seconds())}",
        )
        self.remove_header(PRAGMA)

    def disable_caching(self) -> None:
        self.set_date_header(DATE, self._clock())
        self.set_header(EXPIRES, EXPIRED_DATE_HEADER)
        self.set_header(PRAGMA, "no-cache")
        self.set_header(CACHE_CONTROL, "no-cache, no-store")

    def set_content_type(self, content_type: str) -> None:
        self.set_header(CONTENT_TYPE, content_type)

    def set_content_length(self, length: int) -> None:
        self.set_header(CONTENT_LENGTH, str(length))

    def set_attachment_header(self, filename: str | None) -> None:
        self.set_header(CONTENT_DISPOSITION, content_disposition("attachment", filename))

    def set_inline_header(self, filename: str | None) -> None:
        self.set_header(CONTENT_DISPOSITION, content_disposition("inline", filename))

    def write(self, data: bytes | bytearray | memoryview | str) -> None:
        """Append a body chunk. Binary buffers are kept without copying."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._committed = True
        self._body.append(data)

    def flush(self) -> None:
        """Commit headers. Nothing is sent until ``to_starlette``."""
        self._committed = True

    def to_starlette(self) -> Response:
        return Response(
            content=self.body,
            status_code=self.status_code,
            headers=dict(self._headers),
        )
