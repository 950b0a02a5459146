"""Autocomplete behavior for text inputs.

The behavior contributes ``wicket-autocomplete.js`` to the page head, binds
the script to one input, and answers the script's callback requests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from html import escape

import structlog
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from wicketry.config.constants import AUTOCOMPLETE_QUERY_PARAM
from wicketry.http.request import WebRequest
from wicketry.http.response import WebResponse
from wicketry.resource.registry import ResourceReference, SharedResources
from wicketry.resource.resources import PackageResource

logger = structlog.get_logger()

AUTOCOMPLETE_JS = ResourceReference(name="wicket-autocomplete.js", scope="wicketry.ajax")

SCRIPT_OPEN_TAG = '<script type="text/javascript"><!--/*--><![CDATA[/*><!--*/\n'
SCRIPT_CLOSE_TAG = "\n/*-->]]>*/</script>\n"


def escape_js_string(value: str) -> str:
    """Escape for a single-quoted JavaScript string literal inside HTML."""
    return (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("</", "<\\/")
    )


def register_autocomplete_resources(shared: SharedResources) -> ResourceReference:
    """Mount the autocomplete script as a shared resource."""
    return shared.add(
        AUTOCOMPLETE_JS.name,
        PackageResource("wicketry.ajax", AUTOCOMPLETE_JS.name, "text/javascript"),
        scope=AUTOCOMPLETE_JS.scope,
    )


class AbstractAutoCompleteBehavior(ABC):
    """Binds autocomplete to the input ``markup_id``.

    Subclasses answer callbacks in ``on_request``.
    """

    def __init__(self, markup_id: str, callback_url: str, *, base_url: str = "") -> None:
        self.markup_id = markup_id
        self.callback_url = callback_url
        self.base_url = base_url.rstrip("/")

    def render_head(self) -> str:
        """Script reference for the page head."""
        src = escape(self.base_url + AUTOCOMPLETE_JS.url, quote=True)
        return f'<script type="text/javascript" src="{src}"></script>\n'

    def on_component_rendered(self) -> str:
        """Inline script that wires the input to the callback URL."""
        return (
            SCRIPT_OPEN_TAG
            + f"new WicketAutoComplete('{escape_js_string(self.markup_id)}',"
            + f"'{escape_js_string(self.base_url + self.callback_url)}');"
            + SCRIPT_CLOSE_TAG
        )

    def respond(self, request: WebRequest, response: WebResponse) -> None:
        value = request.get_parameter(AUTOCOMPLETE_QUERY_PARAM)
        self.on_request(value, response)

    @abstractmethod
    def on_request(self, input: str | None, response: WebResponse) -> None:
        """Write the answer for the text typed so far."""

    async def endpoint(self, request: Request) -> Response:
        response = WebResponse()
        await run_in_threadpool(self.respond, WebRequest.from_starlette(request), response)
        return response.to_starlette()

    def route(self) -> Route:
        return Route(self.callback_url, self.endpoint, methods=["GET"])


class AutoCompleteBehavior(AbstractAutoCompleteBehavior):
    """Renders ``get_choices`` as an HTML list the script can display."""

    @abstractmethod
    def get_choices(self, input: str) -> Iterable[str]:
        """Choices matching ``input``."""

    def render_choice(self, choice: str) -> str:
        text = escape(choice, quote=True)
        return f'<li textvalue="{text}">{text}</li>'

    def on_request(self, input: str | None, response: WebResponse) -> None:
        response.disable_caching()
        response.set_content_type("text/html; charset=utf-8")
        choices = list(self.get_choices(input or ""))
        logger.debug("autocomplete_choices", markup_id=self.markup_id, count=len(choices))
        response.write("<ul>" + "".join(self.render_choice(c) for c in choices) + "</ul>")
