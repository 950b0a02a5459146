"""Tests for the resource response descriptor."""

from datetime import UTC, datetime, timedelta

import pytest

from wicketry.config.models import ResourcesConfig
from wicketry.http.request import WebRequest
from wicketry.http.response import WebResponse
from wicketry.resource.caching import MAX_CACHE_DURATION, NO_CACHE, CacheScope
from wicketry.resource.response import (
    ContentDisposition,
    ResourceAttributes,
    ResourceResponse,
    WriteCallback,
)


def _attributes(if_modified_since: str | None = None) -> ResourceAttributes:
    headers = {"If-Modified-Since": if_modified_since} if if_modified_since else {}
    return ResourceAttributes(request=WebRequest.create(headers=headers), response=WebResponse())


class TestDefaults:
    """Freshly created descriptor state."""

    def test_defaults(self) -> None:
        data = ResourceResponse()

        assert data.error_code is None
        assert data.content_length == -1
        assert data.content_disposition is ContentDisposition.INLINE
        assert data.cache_duration == timedelta(hours=1)
        assert data.cache_scope is CacheScope.PRIVATE
        assert data.write_callback is None
        assert data.last_modified is None

    def test_from_attributes_uses_configured_duration(self) -> None:
        attributes = ResourceAttributes(
            request=WebRequest.create(),
            response=WebResponse(),
            settings=ResourcesConfig(default_cache_duration_sec=60),
        )

        data = ResourceResponse.from_attributes(attributes)

        assert data.cache_duration == timedelta(seconds=60)


class TestSetters:
    """Validated properties."""

    @pytest.mark.parametrize(
        "attribute", ["cache_duration", "cache_scope", "content_disposition", "write_callback"]
    )
    def test_none_rejected(self, attribute: str) -> None:
        data = ResourceResponse()

        with pytest.raises(ValueError, match=attribute):
            setattr(data, attribute, None)

    def test_disable_caching_sets_no_cache(self) -> None:
        data = ResourceResponse()
        data.disable_caching()

        assert data.cache_duration == NO_CACHE

    def test_maximum_cache_duration_is_one_year(self) -> None:
        data = ResourceResponse()
        data.set_cache_duration_to_maximum()

        assert data.cache_duration == MAX_CACHE_DURATION == timedelta(days=365)

    def test_set_error(self) -> None:
        data = ResourceResponse()
        data.set_error(403, "Forbidden")

        assert (data.error_code, data.error_message) == (403, "Forbidden")

    def test_plain_callable_wrapped_as_write_callback(self) -> None:
        data = ResourceResponse()
        written: list[ResourceAttributes] = []

        data.write_callback = written.append
        attributes = _attributes()
        assert isinstance(data.write_callback, WriteCallback)
        data.write_callback.write_data(attributes)

        assert written == [attributes]

    def test_naive_last_modified_is_utc(self) -> None:
        data = ResourceResponse()
        data.last_modified = datetime(2024, 1, 1, 12, 0)

        assert data.last_modified == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


class TestDataNeedsToBeWritten:
    """If-Modified-Since comparison."""

    def test_no_header_means_write(self) -> None:
        data = ResourceResponse()
        data.last_modified = datetime(2024, 1, 1, tzinfo=UTC)

        assert data.data_needs_to_be_written(_attributes()) is True

    def test_no_last_modified_means_write(self) -> None:
        data = ResourceResponse()

        assert data.data_needs_to_be_written(_attributes("Mon, 01 Jan 2024 00:00:00 GMT")) is True

    def test_sub_second_modification_is_not_modified(self) -> None:
        # Given - modified 500ms after the second the client saw
        data = ResourceResponse()
        data.last_modified = datetime(2024, 1, 1, 0, 0, 0, 500_000, tzinfo=UTC)

        # When
        result = data.data_needs_to_be_written(_attributes("Mon, 01 Jan 2024 00:00:00 GMT"))

        # Then
        assert result is False

    def test_newer_resource_must_be_written(self) -> None:
        data = ResourceResponse()
        data.last_modified = datetime(2024, 1, 1, 0, 0, 1, tzinfo=UTC)

        assert data.data_needs_to_be_written(_attributes("Mon, 01 Jan 2024 00:00:00 GMT")) is True

    def test_client_copy_newer_than_resource(self) -> None:
        data = ResourceResponse()
        data.last_modified = datetime(2024, 1, 1, tzinfo=UTC)
        next_week = (datetime(2024, 1, 1, tzinfo=UTC) + timedelta(days=7)).strftime(
            "%a, %d %b %Y %H:%M:%S GMT"
        )

        assert data.data_needs_to_be_written(_attributes(next_week)) is False

    @pytest.mark.parametrize("header", ["not a date", "Fri, 31 Dec 9999 23:59:59 -0100"])
    def test_malformed_header_means_write(self, header: str) -> None:
        data = ResourceResponse()
        data.last_modified = datetime(2024, 1, 1, tzinfo=UTC)

        assert data.data_needs_to_be_written(_attributes(header)) is True
