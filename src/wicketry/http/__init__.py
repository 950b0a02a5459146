"""HTTP request/response abstraction over Starlette."""

from wicketry.http.mime import MimeTypes
from wicketry.http.request import WebRequest
from wicketry.http.response import WebResponse

__all__ = [
    "MimeTypes",
    "WebRequest",
    "WebResponse",
]
