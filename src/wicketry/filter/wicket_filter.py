"""Request filter: mount path resolution and trailing-slash redirects.

The mount path (filter path) is resolved lazily on first use and then shared
by every request the filter instance serves. Many request threads may race
to trigger that first resolution; ``OnceCell`` guarantees they all observe
the same, fully computed value.
"""

from __future__ import annotations

from pathlib import Path

import structlog
from starlette.responses import PlainTextResponse, RedirectResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from wicketry.config.models import FilterConfig
from wicketry.core.errors import ConfigError
from wicketry.core.lazy import OnceCell
from wicketry.core.logging import clear_request_id, set_request_id
from wicketry.filter.webxml import WebXmlFile, filter_path_from_pattern

logger = structlog.get_logger()


def resolve_filter_path(config: FilterConfig) -> str:
    """Mount path from config: explicit mapping, else web.xml, else root.

    Raises:
        ConfigError: web.xml is configured but missing, or has no filter name.
        FilterPathError: The descriptor does not yield exactly one mount.
    """
    if config.filter_mapping:
        return filter_path_from_pattern(config.filter_mapping)

    if config.web_xml:
        if not config.filter_name:
            raise ConfigError.invalid_value(
                "filter.filter_name", None, "required when filter.web_xml is set"
            )
        path = Path(config.web_xml)
        if not path.exists():
            raise ConfigError.file_not_found(str(path))
        with path.open("rb") as f:
            return WebXmlFile().get_unique_filter_path(config.is_servlet, config.filter_name, f)

    logger.info("filter_path_default", filter_path="")
    return ""


class WicketFilter:
    """ASGI middleware guarding the application mount.

    - ``/app`` is redirected to ``/app/`` (query string kept)
    - paths outside the mount go to ``fallback`` (404 by default)
    - everything else reaches the wrapped app
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        filter_path: str | None = None,
        config: FilterConfig | None = None,
        fallback: ASGIApp | None = None,
    ) -> None:
        self.app = app
        self.config = config or FilterConfig()
        self.fallback = fallback
        self._filter_path: OnceCell[str] = OnceCell()
        self._filter_path_length: OnceCell[int] = OnceCell()
        if filter_path is not None:
            self.set_filter_path(filter_path)

    def set_filter_path(self, filter_path: str) -> None:
        """Set the mount path. Only the first assignment takes effect."""
        if not self._filter_path.set_if_absent(filter_path.lstrip("/")):
            logger.debug("filter_path_already_set", ignored=filter_path)

    @property
    def filter_path(self) -> str:
        return self._filter_path.get_or_init(lambda: resolve_filter_path(self.config))

    def _compute_filter_path_length(self) -> int:
        filter_path = self.filter_path
        if filter_path.endswith("/"):
            return len(filter_path) - 1
        return len(filter_path)

    @property
    def filter_path_length(self) -> int:
        """Length of the mount path without its trailing slash."""
        return self._filter_path_length.get_or_init(self._compute_filter_path_length)

    def check_if_redirect_required(
        self, request_path: str, query_string: str = "", context_path: str = ""
    ) -> str | None:
        """Return the slash-terminated home URL when ``request_path`` lacks it.

        ``/app`` under mount ``app/`` becomes ``/app/``; a ``;jsessionid=``
        path parameter is moved behind the slash. Returns None when no
        redirect is needed.
        """
        path, separator, path_params = request_path.partition(";")

        filter_path_length = self.filter_path_length
        home_length = len(context_path) + (1 + filter_path_length if filter_path_length > 0 else 0)
        if len(path) != home_length:
            return None

        home = context_path
        if filter_path_length > 0:
            home += "/" + self.filter_path[:filter_path_length]
        if path != home:
            return None

        target = f"{path}/{separator}{path_params}"
        if query_string:
            target = f"{target}?{query_string}"
        return target

    def get_relative_path(self, request_path: str, context_path: str = "") -> str | None:
        """Path below the mount, or None when the request is outside it."""
        path = request_path.partition(";")[0]
        if context_path:
            if not path.startswith(context_path):
                return None
            path = path[len(context_path) :]
        path = path[1:] if path.startswith("/") else path

        filter_path = self.filter_path
        if not filter_path or path.startswith(filter_path):
            return path[len(filter_path) :]
        if path == filter_path[: self.filter_path_length]:
            return ""
        return None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        set_request_id()
        try:
            path: str = scope["path"]
            query_string = scope.get("query_string", b"").decode("latin-1")
            context_path: str = scope.get("root_path", "")

            target = self.check_if_redirect_required(path, query_string, context_path)
            if target is not None:
                logger.debug("filter_redirect", path=path, location=target)
                await RedirectResponse(target, status_code=302)(scope, receive, send)
                return

            if self.get_relative_path(path, context_path) is None:
                logger.debug("filter_outside_mount", path=path, filter_path=self.filter_path)
                fallback = self.fallback or PlainTextResponse("Not Found", status_code=404)
                await fallback(scope, receive, send)
                return

            await self.app(scope, receive, send)
        finally:
            clear_request_id()
