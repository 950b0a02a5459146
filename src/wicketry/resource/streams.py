"""Copying readable byte streams into a response body."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import structlog

from wicketry.core.errors import ResourceStreamError

if TYPE_CHECKING:
    from wicketry.http.response import WebResponse

logger = structlog.get_logger()

DEFAULT_BUFFER_SIZE = 4096


class ResponseOutputStream:
    """File-like writer that forwards bytes to a ``WebResponse``."""

    def __init__(self, response: WebResponse) -> None:
        self._response = response
        self.bytes_written = 0

    def write(
        self,
        data: bytes | bytearray | memoryview,
        offset: int = 0,
        length: int | None = None,
    ) -> int:
        """Write ``data[offset:offset + length]``.

        A range covering the whole buffer is handed to the response as is;
        a partial range is copied into a new ``bytes`` first.
        """
        size = len(data)
        if length is None:
            length = size - offset
        if offset < 0 or length < 0 or offset + length > size:
            raise ValueError(f"Invalid range offset={offset} length={length} for {size} bytes")

        if offset == 0 and length == size:
            self._response.write(data)
        else:
            self._response.write(bytes(memoryview(data)[offset : offset + length]))
        self.bytes_written += length
        return length

    def flush(self) -> None:
        self._response.flush()


def copy_stream(
    source: IO[bytes],
    sink: ResponseOutputStream,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> int:
    """Copy ``source`` to ``sink`` until EOF and return the byte count.

    Raises:
        ResourceStreamError: Reading or writing failed. The response may
            already hold part of the body.
    """
    total = 0
    try:
        while True:
            chunk = source.read(buffer_size)
            if not chunk:
                break
            total += sink.write(chunk, 0, len(chunk))
    except OSError as e:
        logger.warning("resource_stream_failed", error=str(e), bytes_written=total)
        raise ResourceStreamError.copy_failed(str(e), total) from e
    return total
