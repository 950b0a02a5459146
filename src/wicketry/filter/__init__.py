"""Request filter and deployment descriptor support."""

from wicketry.filter.webxml import WebXmlFile, filter_path_from_pattern
from wicketry.filter.wicket_filter import WicketFilter, resolve_filter_path

__all__ = [
    "WebXmlFile",
    "WicketFilter",
    "filter_path_from_pattern",
    "resolve_filter_path",
]
