"""Resource response pipeline: caching, conditional requests, streaming."""

from wicketry.resource.base import AbstractResource
from wicketry.resource.caching import MAX_CACHE_DURATION, NO_CACHE, CacheScope
from wicketry.resource.registry import ResourceReference, SharedResources
from wicketry.resource.resources import (
    ByteArrayResource,
    DynamicImageResource,
    FileResource,
    PackageResource,
)
from wicketry.resource.response import (
    ContentDisposition,
    ResourceAttributes,
    ResourceResponse,
    WriteCallback,
)
from wicketry.resource.streams import ResponseOutputStream, copy_stream

__all__ = [
    "AbstractResource",
    "ByteArrayResource",
    "CacheScope",
    "ContentDisposition",
    "DynamicImageResource",
    "FileResource",
    "MAX_CACHE_DURATION",
    "NO_CACHE",
    "PackageResource",
    "ResourceAttributes",
    "ResourceReference",
    "ResourceResponse",
    "ResponseOutputStream",
    "SharedResources",
    "WriteCallback",
    "copy_stream",
]
