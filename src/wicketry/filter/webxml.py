"""Deployment descriptor (web.xml) reader.

Finds the url-pattern mapped to a filter or servlet name and turns it into
the mount path used by ``WicketFilter``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import IO

import structlog

from wicketry.core.errors import FilterPathError

logger = structlog.get_logger()


def _local(tag: str) -> str:
    """Tag name without its ``{namespace}`` prefix."""
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _text(element: ET.Element) -> str:
    return (element.text or "").strip()


def filter_path_from_pattern(url_pattern: str) -> str:
    """``/app/*`` -> ``app/``; ``/*`` -> ``""``.

    Raises:
        FilterPathError: The pattern is not of the form ``/<path>*``.
    """
    pattern = url_pattern.strip()
    if not pattern.startswith("/") or not pattern.endswith("*"):
        raise FilterPathError.invalid_mapping(url_pattern)
    return pattern[1:-1]


class WebXmlFile:
    """Reads filter and servlet mappings from a deployment descriptor."""

    def get_url_patterns(
        self, is_servlet: bool, filter_name: str, stream: IO[bytes] | IO[str]
    ) -> list[str]:
        """All distinct url-patterns mapped to ``filter_name``, in document order."""
        prefix = "servlet" if is_servlet else "filter"
        try:
            root = ET.parse(stream).getroot()
        except ET.ParseError as e:
            raise FilterPathError.malformed(str(e)) from e

        patterns: list[str] = []
        for mapping in root.iter():
            if _local(mapping.tag) != f"{prefix}-mapping":
                continue
            names = [_text(n) for n in _children(mapping, f"{prefix}-name")]
            if filter_name not in names:
                continue
            for url_pattern in _children(mapping, "url-pattern"):
                value = _text(url_pattern)
                if value and value not in patterns:
                    patterns.append(value)
        return patterns

    def get_unique_filter_path(
        self, is_servlet: bool, filter_name: str, stream: IO[bytes] | IO[str]
    ) -> str:
        """Mount path for ``filter_name``.

        Raises:
            FilterPathError: No mapping, more than one url-pattern, unparsable
                XML, or a pattern that cannot be a mount.
        """
        tag = "servlet-mapping" if is_servlet else "filter-mapping"
        patterns = self.get_url_patterns(is_servlet, filter_name, stream)
        if not patterns:
            raise FilterPathError.not_found(filter_name, tag)
        if len(patterns) > 1:
            raise FilterPathError.ambiguous(filter_name, patterns)

        filter_path = filter_path_from_pattern(patterns[0])
        logger.debug("filter_path_resolved", name=filter_name, filter_path=filter_path)
        return filter_path
