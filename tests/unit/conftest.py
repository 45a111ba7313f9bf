"""Shared fixtures for unit tests."""

from __future__ import annotations

import itertools
import json
import re
from typing import Any
from urllib.parse import parse_qs, urlsplit

import pytest

from admiral_cli.core import AdmiralProvider, Response
from admiral_cli.core.links import EPZ_CONFIG_PATH, TAGS_PATH
from admiral_cli.engine.errors import TransportError
from admiral_cli.resources.placement_zone import POOLS_PREFIX

_ADMIRAL_ENV_VARS = (
    "ADMIRAL_URL",
    "ADMIRAL_TOKEN",
    "ADMIRAL_VERIFY_SSL",
    "ADMIRAL_TIMEOUT",
    "ADMIRAL_LOG",
)

_TAG_FILTER = re.compile(r"key eq '(.*)' and value eq '(.*)'")
_LINK_FILTER = re.compile(r"documentSelfLink eq '(.*)'")


def _unquote_literal(value: str) -> str:
    return value.replace("''", "'")


class FakeControlPlane:
    """In-memory control plane implementing the ``Transport`` protocol.

    Stores tags and placement zones as raw JSON documents and records every
    request as ``(method, path, decoded body)``.
    """

    def __init__(self) -> None:
        self.tags: dict[str, dict[str, Any]] = {}
        self.zones: dict[str, dict[str, Any]] = {}
        self.requests: list[tuple[str, str, Any]] = []
        self._ids = itertools.count(1)

    # -- seeding -------------------------------------------------------

    def add_tag(self, key: str, value: str = "") -> str:
        link = f"{TAGS_PATH}/tag-{next(self._ids)}"
        self.tags[link] = {"key": key, "value": value, "documentSelfLink": link}
        return link

    def add_zone(
        self,
        name: str,
        *,
        tag_links: list[str] | None = None,
        max_memory_bytes: int = 0,
        custom_properties: dict[str, str | None] | None = None,
        zone_id: str | None = None,
    ) -> str:
        link = POOLS_PREFIX + (zone_id or f"zone-{next(self._ids)}")
        epz = {"tagLinksToMatch": list(tag_links)} if tag_links else None
        self.zones[link] = {
            "resourcePoolState": {
                "name": name,
                "maxMemoryBytes": max_memory_bytes,
                "customProperties": custom_properties,
                "documentSelfLink": link,
            },
            "epzState": epz,
            "documentSelfLink": link,
        }
        return link

    def tag_links_of(self, link: str) -> list[str]:
        epz = self.zones[link]["epzState"]
        return list(epz["tagLinksToMatch"]) if epz else []

    def calls(self, method: str) -> list[tuple[str, str, Any]]:
        return [r for r in self.requests if r[0] == method]

    # -- Transport -----------------------------------------------------

    def send(self, method: str, path: str, body: bytes | None = None) -> Response:
        payload = json.loads(body) if body else None
        self.requests.append((method, path, payload))

        split = urlsplit(path)
        route = split.path
        flt = parse_qs(split.query).get("$filter", [""])[0]

        if method == "GET" and route == TAGS_PATH:
            return self._ok(self._listing(self.tags, self._match_tags(flt)))
        if method == "POST" and route == f"{TAGS_PATH}/":
            link = self.add_tag(payload["key"], payload["value"])
            return self._ok(self.tags[link])
        if method == "GET" and route in self.tags:
            return self._ok(self.tags[route])
        if method == "GET" and route == EPZ_CONFIG_PATH:
            m = _LINK_FILTER.fullmatch(flt)
            links = [_unquote_literal(m.group(1))] if m else list(self.zones)
            return self._ok(self._listing(self.zones, [lnk for lnk in links if lnk in self.zones]))
        if method == "POST" and route == EPZ_CONFIG_PATH:
            return self._ok(self._create_zone(payload))
        if method == "PATCH" and route.startswith(EPZ_CONFIG_PATH + POOLS_PREFIX):
            link = route[len(EPZ_CONFIG_PATH) :]
            if link in self.zones:
                stored = self.zones[link]
                stored["resourcePoolState"].update(payload["resourcePoolState"])
                stored["epzState"] = payload["epzState"]
                return self._ok(stored)
        if method == "DELETE" and route in self.zones:
            del self.zones[route]
            return Response(status_code=200, body=b"")
        if method == "GET" and route in self.zones:
            return self._ok(self.zones[route]["resourcePoolState"])
        raise TransportError(method, path, "Service not found", status_code=404)

    def _match_tags(self, flt: str) -> list[str]:
        m = _TAG_FILTER.fullmatch(flt)
        if not m:
            return list(self.tags)
        key, value = _unquote_literal(m.group(1)), _unquote_literal(m.group(2))
        return [
            link
            for link, tag in self.tags.items()
            if tag["key"] == key and tag["value"] == value
        ]

    def _create_zone(self, payload: dict[str, Any]) -> dict[str, Any]:
        pool = payload["resourcePoolState"]
        link = self.add_zone(
            pool.get("name", ""),
            custom_properties=pool.get("customProperties"),
        )
        self.zones[link]["epzState"] = payload["epzState"]
        return self.zones[link]

    @staticmethod
    def _listing(docs: dict[str, dict[str, Any]], links: list[str]) -> dict[str, Any]:
        return {
            "totalCount": len(links),
            "documentLinks": links,
            "documents": {link: docs[link] for link in links},
        }

    @staticmethod
    def _ok(doc: dict[str, Any]) -> Response:
        return Response(status_code=200, body=json.dumps(doc).encode("utf-8"))


@pytest.fixture(autouse=True)
def _clean_admiral_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove ADMIRAL_* env vars so unit tests don't leak host config."""
    for var in _ADMIRAL_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def server() -> FakeControlPlane:
    return FakeControlPlane()


@pytest.fixture
def provider(server: FakeControlPlane) -> AdmiralProvider:
    return AdmiralProvider.from_transport(server)
