"""Content type lookup by filename extension."""

from __future__ import annotations

import mimetypes
from collections.abc import Mapping


class MimeTypes:
    """Maps filenames to content types.

    Configured overrides take precedence over the platform database.
    """

    def __init__(self, overrides: Mapping[str, str] | None = None) -> None:
        self._db = mimetypes.MimeTypes()
        self._overrides = {
            ext.lower().lstrip("."): content_type for ext, content_type in (overrides or {}).items()
        }

    def register(self, extension: str, content_type: str) -> None:
        self._overrides[extension.lower().lstrip(".")] = content_type

    def get(self, filename: str | None) -> str | None:
        if not filename:
            return None
        _, dot, extension = filename.rpartition(".")
        if dot and extension.lower() in self._overrides:
            return self._overrides[extension.lower()]
        content_type, _ = self._db.guess_type(filename, strict=False)
        return content_type
