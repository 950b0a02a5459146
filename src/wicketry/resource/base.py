"""Base class for resources answered through a ``ResourceResponse``."""

from __future__ import annotations

from abc import ABC, abstractmethod

import structlog

from wicketry.config.constants import NO_CACHE, UNKNOWN_CONTENT_LENGTH
from wicketry.core.errors import ResourceStateError
from wicketry.resource.response import ContentDisposition, ResourceAttributes, ResourceResponse

logger = structlog.get_logger()

NOT_MODIFIED = 304


class AbstractResource(ABC):
    """A resource that describes its answer and lets ``respond`` apply it.

    Subclasses implement ``new_resource_response``; ``respond`` takes care of
    conditional requests, caching headers, error codes and body streaming.
    """

    @abstractmethod
    def new_resource_response(self, attributes: ResourceAttributes) -> ResourceResponse:
        """Return a fresh descriptor for this request."""

    def configure_cache(self, data: ResourceResponse, attributes: ResourceAttributes) -> None:
        """Set client cache headers from the descriptor's duration and scope."""
        duration = data.cache_duration
        if duration > NO_CACHE:
            attributes.response.enable_caching(duration, data.cache_scope)
        else:
            attributes.response.disable_caching()

    def respond(self, attributes: ResourceAttributes) -> None:
        data = self.new_resource_response(attributes)
        response = attributes.response

        # Last-Modified goes out on 304s too; it is the client's validator.
        if data.last_modified is not None:
            response.set_last_modified_time(data.last_modified)

        self.configure_cache(data, attributes)

        if not data.data_needs_to_be_written(attributes):
            response.set_status(NOT_MODIFIED)
            logger.debug("resource_not_modified", path=attributes.request.path)
            return

        if data.error_code is not None:
            response.send_error(data.error_code, data.error_message)
            logger.debug(
                "resource_error",
                path=attributes.request.path,
                status=data.error_code,
            )
            return

        if data.write_callback is None:
            raise ResourceStateError.write_callback_missing(type(self).__name__)

        mime_type = data.content_type or attributes.mime_types.get(data.file_name)
        encoding = None
        if mime_type is not None and "text" in mime_type:
            encoding = data.text_encoding

        if data.content_disposition is ContentDisposition.ATTACHMENT:
            response.set_attachment_header(data.file_name)
        else:
            response.set_inline_header(data.file_name)

        if mime_type is not None:
            if encoding is None:
                response.set_content_type(mime_type)
            else:
                response.set_content_type(f"{mime_type}; charset={encoding}")

        if data.content_length != UNKNOWN_CONTENT_LENGTH:
            response.set_content_length(data.content_length)

        # Headers are final from here on.
        response.flush()

        data.write_callback.write_data(attributes)
        logger.debug(
            "resource_written",
            path=attributes.request.path,
            content_type=mime_type,
            content_length=data.content_length,
        )
