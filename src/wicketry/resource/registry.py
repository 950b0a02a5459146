"""Shared resources mounted under ``/wicket/resource/{scope}/{name}``."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

import structlog
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Route

from wicketry.config.constants import SHARED_RESOURCE_PREFIX
from wicketry.config.models import ResourcesConfig
from wicketry.http.mime import MimeTypes
from wicketry.http.request import WebRequest
from wicketry.http.response import Clock, WebResponse, utc_now
from wicketry.resource.base import AbstractResource
from wicketry.resource.response import ResourceAttributes

logger = structlog.get_logger()

GLOBAL_SCOPE = "global"


@dataclass(frozen=True)
class ResourceReference:
    """Names a shared resource."""

    name: str
    scope: str = GLOBAL_SCOPE

    @property
    def url(self) -> str:
        """Path of the resource relative to the application mount."""
        return f"{SHARED_RESOURCE_PREFIX}/{self.scope}/{self.name}"


@dataclass
class SharedResources:
    """Registry of resources reachable by URL, shared by all requests."""

    settings: ResourcesConfig = field(default_factory=ResourcesConfig)
    clock: Clock = utc_now
    mime_types: MimeTypes = field(init=False)
    _resources: dict[ResourceReference, AbstractResource] = field(
        default_factory=dict, init=False
    )
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def __post_init__(self) -> None:
        self.mime_types = MimeTypes(self.settings.mime_types)

    def add(
        self, name: str, resource: AbstractResource, scope: str = GLOBAL_SCOPE
    ) -> ResourceReference:
        reference = ResourceReference(name=name.lstrip("/"), scope=scope)
        with self._lock:
            self._resources[reference] = resource
        logger.debug("shared_resource_added", url=reference.url)
        return reference

    def get(self, reference: ResourceReference) -> AbstractResource | None:
        return self._resources.get(reference)

    def __contains__(self, reference: object) -> bool:
        return reference in self._resources

    def __len__(self) -> int:
        return len(self._resources)

    def respond(self, resource: AbstractResource, request: WebRequest) -> WebResponse:
        """Answer ``request`` with ``resource`` on the calling thread."""
        response = WebResponse(clock=self.clock)
        attributes = ResourceAttributes(
            request=request,
            response=response,
            mime_types=self.mime_types,
            settings=self.settings,
        )
        resource.respond(attributes)
        return response

    async def endpoint(self, request: Request) -> Response:
        reference = ResourceReference(
            name=request.path_params["name"],
            scope=request.path_params["scope"],
        )
        resource = self.get(reference)
        if resource is None:
            logger.debug("shared_resource_not_found", url=reference.url)
            return PlainTextResponse("Not Found", status_code=404)

        web_request = WebRequest.from_starlette(request)
        # Resources do blocking I/O; keep them off the event loop.
        response = await run_in_threadpool(self.respond, resource, web_request)
        return response.to_starlette()

    def routes(self) -> list[Route]:
        return [
            Route(
                SHARED_RESOURCE_PREFIX + "/{scope}/{name:path}",
                self.endpoint,
                methods=["GET", "HEAD"],
            ),
        ]
