"""Tests for the TagHandler."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from admiral_cli.core import Response
from admiral_cli.engine.errors import DecodeError, MalformedTagError, TransportError
from admiral_cli.handlers.tags import NO_TAGS, TagHandler
from admiral_cli.resources.tag import Tag

if TYPE_CHECKING:
    from tests.unit.conftest import FakeControlPlane


@pytest.fixture
def handler(server: FakeControlPlane) -> TagHandler:
    return TagHandler(server)


class TestFindOrCreate:
    def test_returns_existing_id(self, handler: TagHandler, server: FakeControlPlane) -> None:
        link = server.add_tag("env", "prod")
        server.add_tag("env", "dev")

        assert handler.find_or_create("env:prod", create_if_missing=True) == link.rsplit("/")[-1]
        assert server.calls("POST") == []

    def test_matches_exact_pair(self, handler: TagHandler, server: FakeControlPlane) -> None:
        server.add_tag("env", "prod")

        assert handler.find_or_create("env", create_if_missing=False) == ""

    def test_creates_when_missing(self, handler: TagHandler, server: FakeControlPlane) -> None:
        tag_id = handler.find_or_create("team:infra", create_if_missing=True)

        assert tag_id
        stored = server.tags[f"/resources/tags/{tag_id}"]
        assert (stored["key"], stored["value"]) == ("team", "infra")
        [(_, path, body)] = server.calls("POST")
        assert path == "/resources/tags/"
        assert body == {"key": "team", "value": "infra"}

    def test_missing_without_create_returns_empty(
        self, handler: TagHandler, server: FakeControlPlane
    ) -> None:
        assert handler.find_or_create("team:infra", create_if_missing=False) == ""
        assert server.tags == {}

    def test_filter_query_carries_key_and_value(
        self, handler: TagHandler, server: FakeControlPlane
    ) -> None:
        handler.find_or_create("env:prod", create_if_missing=False)

        [(_, path, _)] = server.calls("GET")
        assert path.startswith("/resources/tags?documentType=true&expand=true&$filter=")
        assert "env" in path
        assert "prod" in path

    def test_quote_in_value_is_escaped(
        self, handler: TagHandler, server: FakeControlPlane
    ) -> None:
        link = server.add_tag("owner", "o'neil")

        tag_id = link.rsplit("/")[-1]
        assert handler.find_or_create("owner:o'neil", create_if_missing=False) == tag_id

    def test_first_match_wins(self) -> None:
        transport = MagicMock()
        transport.send.return_value = Response(
            200,
            b'{"documentLinks": ["/resources/tags/t2", "/resources/tags/t1"],'
            b' "documents": {"/resources/tags/t1": {"key": "a", "value": "",'
            b' "documentSelfLink": "/resources/tags/t1"},'
            b' "/resources/tags/t2": {"key": "a", "value": "",'
            b' "documentSelfLink": "/resources/tags/t2"}}}',
        )

        assert TagHandler(transport).find_or_create("a", create_if_missing=True) == "t2"

    def test_malformed_input_makes_no_request(
        self, handler: TagHandler, server: FakeControlPlane
    ) -> None:
        with pytest.raises(MalformedTagError):
            handler.find_or_create("a:b:c", create_if_missing=True)
        assert server.requests == []

    def test_transport_error_propagates(self) -> None:
        transport = MagicMock()
        transport.send.side_effect = TransportError("GET", "/resources/tags", "boom")

        with pytest.raises(TransportError, match="boom"):
            TagHandler(transport).find_or_create("env:prod", create_if_missing=True)

    def test_invalid_json_is_decode_error(self) -> None:
        transport = MagicMock()
        transport.send.return_value = Response(200, b"<html>")

        with pytest.raises(DecodeError):
            TagHandler(transport).find_or_create("env:prod", create_if_missing=True)


class TestRender:
    def test_empty_is_sentinel(self, handler: TagHandler, server: FakeControlPlane) -> None:
        assert handler.render([]) == NO_TAGS == "n/a"
        assert server.requests == []

    def test_concatenates_in_order(self, handler: TagHandler, server: FakeControlPlane) -> None:
        prod = server.add_tag("env", "prod")
        infra = server.add_tag("team", "infra")

        assert handler.render([infra, prod]) == "[team:infra][env:prod]"

    def test_key_only_tag(self, handler: TagHandler, server: FakeControlPlane) -> None:
        link = server.add_tag("gpu")

        assert handler.render([link]) == "[gpu:]"

    def test_fetch_failure_renders_zero_tag(
        self, handler: TagHandler, server: FakeControlPlane
    ) -> None:
        link = server.add_tag("env", "prod")

        assert handler.render(["/resources/tags/gone", link]) == "[:][env:prod]"

    def test_decode_failure_renders_zero_tag(self) -> None:
        transport = MagicMock()
        transport.send.return_value = Response(200, b"not json")

        assert TagHandler(transport).render(["/resources/tags/x"]) == "[:]"


class TestCreate:
    def test_returns_new_id(self, handler: TagHandler, server: FakeControlPlane) -> None:
        tag_id = handler.create(Tag(key="k", value="v"))

        assert f"/resources/tags/{tag_id}" in server.tags
