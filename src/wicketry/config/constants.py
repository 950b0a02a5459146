"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are protocol constraints and implementation details.

For configurable values, see models.py (ResourcesConfig, FilterConfig, etc.).
"""

from datetime import timedelta

# =============================================================================
# HTTP Caching
# =============================================================================

NO_CACHE = timedelta(0)
"""Cache duration meaning "do not cache at all"."""

MAX_CACHE_DURATION = timedelta(days=365)
"""Longest cache lifetime ever advertised (RFC 2616 recommends at most one year)."""

DEFAULT_CACHE_DURATION = timedelta(hours=1)
"""Cache lifetime used when neither the resource nor the config sets one."""

EXPIRED_DATE_HEADER = "Thu, 01 Jan 1970 00:00:00 GMT"
"""Expires value sent when caching is disabled."""

UNKNOWN_CONTENT_LENGTH = -1
"""Content length sentinel: do not send a Content-Length header."""

# =============================================================================
# URL Layout
# =============================================================================

SHARED_RESOURCE_PREFIX = "/wicket/resource"
"""Path prefix under which shared resources are mounted."""

AUTOCOMPLETE_QUERY_PARAM = "q"
"""Query parameter carrying the text typed so far."""

# =============================================================================
# Protocol/Validation Constants
# =============================================================================

PORT_MIN = 0
PORT_MAX = 65535
"""Valid port range."""

STREAM_BUFFER_MIN = 512
"""Smallest accepted stream copy buffer."""
