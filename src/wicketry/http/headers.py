"""HTTP header value helpers: dates and content disposition."""

from __future__ import annotations

from datetime import UTC, datetime
from email.utils import format_datetime, parsedate_to_datetime
from urllib.parse import quote

import structlog

logger = structlog.get_logger()

CACHE_CONTROL = "Cache-Control"
CONTENT_DISPOSITION = "Content-Disposition"
CONTENT_LENGTH = "Content-Length"
CONTENT_TYPE = "Content-Type"
DATE = "Date"
EXPIRES = "Expires"
IF_MODIFIED_SINCE = "If-Modified-Since"
LAST_MODIFIED = "Last-Modified"
PRAGMA = "Pragma"


def format_http_date(value: datetime) -> str:
    """Format as IMF-fixdate, e.g. ``Sun, 06 Nov 1994 08:49:37 GMT``.

    Naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return format_datetime(value.astimezone(UTC).replace(microsecond=0), usegmt=True)


def parse_http_date(value: str | None) -> datetime | None:
    """Parse an HTTP date header. Malformed or out-of-range values yield None."""
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed.astimezone(UTC)
    except (TypeError, ValueError, OverflowError):
        logger.debug("http_date_malformed", value=value)
        return None


def content_disposition(kind: str, filename: str | None) -> str:
    """Build a Content-Disposition value (RFC 6266).

    Filenames that survive percent-encoding unchanged are sent quoted.
    Anything else gets an ASCII ``filename`` fallback followed by an
    RFC 5987 ``filename*`` parameter carrying the real name.
    """
    if not filename:
        return kind
    quoted = quote(filename)
    if quoted == filename:
        return f'{kind}; filename="{filename}"'
    fallback = "".join(c if " " <= c < "\x7f" and c not in '"\\' else "_" for c in filename)
    return f"{kind}; filename=\"{fallback}\"; filename*=utf-8''{quoted}"
