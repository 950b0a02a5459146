"""Concrete resource kinds."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable
from datetime import UTC, datetime
from importlib import resources as importlib_resources
from pathlib import Path

import structlog

from wicketry.core.errors import ResourceStreamError
from wicketry.core.lazy import OnceCell
from wicketry.resource.base import AbstractResource
from wicketry.resource.response import (
    ContentDisposition,
    ResourceAttributes,
    ResourceResponse,
    WriteCallback,
)

logger = structlog.get_logger()

NOT_FOUND = 404


def _now() -> datetime:
    return datetime.now(UTC)


def _write_bytes(payload: bytes) -> Callable[[ResourceAttributes], None]:
    def write(attributes: ResourceAttributes) -> None:
        attributes.response.write(payload)

    return write


class ByteArrayResource(AbstractResource):
    """Serves a fixed byte string."""

    def __init__(
        self,
        data: bytes,
        content_type: str | None = None,
        *,
        file_name: str | None = None,
        last_modified: datetime | None = None,
        disposition: ContentDisposition = ContentDisposition.INLINE,
    ) -> None:
        self.data = data
        self.content_type = content_type
        self.file_name = file_name
        self.last_modified = last_modified or _now()
        self.disposition = disposition

    def new_resource_response(self, attributes: ResourceAttributes) -> ResourceResponse:
        data = ResourceResponse.from_attributes(attributes)
        data.last_modified = self.last_modified
        if data.data_needs_to_be_written(attributes):
            data.content_type = self.content_type
            data.file_name = self.file_name
            data.content_disposition = self.disposition
            data.content_length = len(self.data)
            data.write_callback = _write_bytes(self.data)
        return data


class _FileWriteCallback(WriteCallback):
    def __init__(self, path: Path) -> None:
        self.path = path

    def write_data(self, attributes: ResourceAttributes) -> None:
        try:
            f = self.path.open("rb")
        except OSError as e:
            logger.warning("resource_open_failed", path=str(self.path), error=str(e))
            raise ResourceStreamError.copy_failed(str(e), 0) from e
        with f:
            self.write_stream(attributes, f)


class FileResource(AbstractResource):
    """Serves a file from disk, streaming it in buffer-sized chunks."""

    def __init__(
        self,
        path: Path | str,
        content_type: str | None = None,
        *,
        disposition: ContentDisposition = ContentDisposition.INLINE,
        text_encoding: str | None = None,
    ) -> None:
        self.path = Path(path)
        self.content_type = content_type
        self.disposition = disposition
        self.text_encoding = text_encoding

    def new_resource_response(self, attributes: ResourceAttributes) -> ResourceResponse:
        data = ResourceResponse.from_attributes(attributes)
        try:
            stat = self.path.stat()
        except FileNotFoundError:
            logger.debug("file_resource_missing", path=str(self.path))
            data.set_error(NOT_FOUND, f"Resource not found: {self.path.name}")
            return data

        data.last_modified = datetime.fromtimestamp(stat.st_mtime, UTC)
        if data.data_needs_to_be_written(attributes):
            data.file_name = self.path.name
            data.content_type = self.content_type
            data.text_encoding = self.text_encoding
            data.content_disposition = self.disposition
            data.content_length = stat.st_size
            data.write_callback = _FileWriteCallback(self.path)
        return data


class PackageResource(AbstractResource):
    """Serves a data file shipped inside a Python package.

    The file is read on first use and kept in memory afterwards.
    """

    def __init__(
        self,
        package: str,
        name: str,
        content_type: str | None = None,
        *,
        text_encoding: str | None = "utf-8",
    ) -> None:
        self.package = package
        self.name = name
        self.content_type = content_type
        self.text_encoding = text_encoding
        self.last_modified = _now()
        self._data: OnceCell[bytes] = OnceCell()

    def _load(self) -> bytes:
        return importlib_resources.files(self.package).joinpath(self.name).read_bytes()

    def new_resource_response(self, attributes: ResourceAttributes) -> ResourceResponse:
        data = ResourceResponse.from_attributes(attributes)
        data.last_modified = self.last_modified
        if not data.data_needs_to_be_written(attributes):
            return data

        try:
            payload = self._data.get_or_init(self._load)
        except FileNotFoundError:
            logger.warning("package_resource_missing", package=self.package, name=self.name)
            data.set_error(NOT_FOUND, f"Resource not found: {self.name}")
            return data

        data.file_name = self.name
        data.content_type = self.content_type
        data.text_encoding = self.text_encoding
        data.content_length = len(payload)
        data.write_callback = _write_bytes(payload)
        return data


class DynamicImageResource(AbstractResource):
    """Image generated per request by ``get_image_data``.

    The image is only produced when the client's copy is stale.
    """

    def __init__(self, format: str = "png", last_modified: datetime | None = None) -> None:
        self.format = format
        self.last_modified_time = last_modified or _now()

    @abstractmethod
    def get_image_data(self, attributes: ResourceAttributes) -> bytes | None:
        """Return encoded image bytes, or None if there is no image."""

    def new_resource_response(self, attributes: ResourceAttributes) -> ResourceResponse:
        data = ResourceResponse.from_attributes(attributes)
        data.last_modified = self.last_modified_time
        if data.data_needs_to_be_written(attributes):
            data.content_type = f"image/{self.format}"
            data.content_disposition = ContentDisposition.INLINE
            image = self.get_image_data(attributes)
            if image is None:
                data.set_error(NOT_FOUND)
            else:
                data.content_length = len(image)
                data.write_callback = _write_bytes(image)
        return data
