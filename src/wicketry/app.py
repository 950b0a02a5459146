"""Starlette application factory."""

from __future__ import annotations

from collections.abc import Iterable

import structlog
from starlette.applications import Starlette
from starlette.routing import BaseRoute, Mount

from wicketry.ajax.autocomplete import AbstractAutoCompleteBehavior, register_autocomplete_resources
from wicketry.config.models import WicketryConfig
from wicketry.filter.wicket_filter import WicketFilter, resolve_filter_path
from wicketry.resource.registry import SharedResources

logger = structlog.get_logger()


def create_app(
    config: WicketryConfig | None = None,
    shared: SharedResources | None = None,
    *,
    behaviors: Iterable[AbstractAutoCompleteBehavior] = (),
    routes: Iterable[BaseRoute] = (),
) -> Starlette:
    """Create the application, mounted under the configured filter path."""
    config = config or WicketryConfig()
    shared = shared or SharedResources(settings=config.resources)

    behaviors = list(behaviors)
    if behaviors:
        register_autocomplete_resources(shared)

    app_routes: list[BaseRoute] = [
        *shared.routes(),
        *(behavior.route() for behavior in behaviors),
        *routes,
    ]

    filter_path = resolve_filter_path(config.filter)
    mount = filter_path.rstrip("/")
    if mount:
        app_routes = [Mount(f"/{mount}", routes=app_routes)]

    app = Starlette(routes=app_routes)
    app.state.shared_resources = shared
    app.add_middleware(WicketFilter, filter_path=filter_path, config=config.filter)

    logger.info(
        "app_created",
        filter_path=filter_path,
        shared_resources=len(shared),
        behaviors=len(behaviors),
    )
    return app
