"""Inbound request abstraction."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from starlette.datastructures import Headers, QueryParams

from wicketry.http.headers import IF_MODIFIED_SINCE, parse_http_date

if TYPE_CHECKING:
    from starlette.requests import Request


@dataclass(frozen=True)
class WebRequest:
    """The parts of an HTTP request the resource pipeline and filter read."""

    method: str = "GET"
    path: str = "/"
    query_string: str = ""
    headers: Headers = field(default_factory=Headers)
    context_path: str = ""

    @classmethod
    def create(
        cls,
        path: str = "/",
        *,
        method: str = "GET",
        query_string: str = "",
        headers: Mapping[str, str] | None = None,
        context_path: str = "",
    ) -> WebRequest:
        return cls(
            method=method,
            path=path,
            query_string=query_string,
            headers=Headers(headers=dict(headers or {})),
            context_path=context_path,
        )

    @classmethod
    def from_starlette(cls, request: Request) -> WebRequest:
        return cls(
            method=request.method,
            path=request.url.path,
            query_string=request.url.query,
            headers=request.headers,
            context_path=request.scope.get("root_path", ""),
        )

    @property
    def query_params(self) -> QueryParams:
        return QueryParams(self.query_string)

    def get_parameter(self, name: str) -> str | None:
        return self.query_params.get(name)

    @property
    def if_modified_since(self) -> datetime | None:
        return parse_http_date(self.headers.get(IF_MODIFIED_SINCE))
