"""AJAX behaviors."""

from wicketry.ajax.autocomplete import (
    AUTOCOMPLETE_JS,
    AbstractAutoCompleteBehavior,
    AutoCompleteBehavior,
    register_autocomplete_resources,
)

__all__ = [
    "AUTOCOMPLETE_JS",
    "AbstractAutoCompleteBehavior",
    "AutoCompleteBehavior",
    "register_autocomplete_resources",
]
