"""Self-link construction and short-ID resolution."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from admiral_cli.engine.errors import AmbiguousError, NotFoundError
from admiral_cli.resources.base import resource_id
from admiral_cli.resources.placement_zone import POOLS_PREFIX

PLACEMENT_ZONE = "placement zone"

TAGS_PATH = "/resources/tags"
EPZ_CONFIG_PATH = "/resources/elastic-placement-zones-config"
EXPAND_QUERY = "documentType=true&expand=true"


class Listing(Protocol):
    """Anything that exposes self-links in server order."""

    def links(self) -> list[str]: ...


IdResolver = Callable[[str, Listing, str], str]


def pool_link(zone_id: str) -> str:
    return POOLS_PREFIX + zone_id


def tag_link(tag_id: str) -> str:
    return f"{TAGS_PATH}/{tag_id}"


def placement_zone_link(link: str) -> str:
    """Path of the elastic placement zone configuration for a pool link."""
    return EPZ_CONFIG_PATH + link


def odata_quote(value: str) -> str:
    """Escape a literal for a ``$filter`` expression (``'`` -> ``''``)."""
    return value.replace("'", "''")


def resolve_full_id(short_id: str, listing: Listing, kind: str) -> str:
    """Map a (possibly shortened) ID to the full ID of one listed document.

    An exact ID match wins; otherwise *short_id* must be the prefix of
    exactly one ID in *listing*.

    Raises:
        NotFoundError: No listed ID starts with *short_id*.
        AmbiguousError: Several listed IDs start with *short_id*.
    """
    ids = [resource_id(link) for link in listing.links()]
    if short_id in ids:
        return short_id
    matches = [i for i in ids if short_id and i.startswith(short_id)]
    if not matches:
        raise NotFoundError(kind, short_id)
    if len(matches) > 1:
        raise AmbiguousError(kind, short_id, matches)
    return matches[0]
