"""Handler for elastic placement zones."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote

from admiral_cli.core.links import (
    EPZ_CONFIG_PATH,
    EXPAND_QUERY,
    PLACEMENT_ZONE,
    IdResolver,
    odata_quote,
    placement_zone_link,
    pool_link,
    resolve_full_id,
)
from admiral_cli.engine.errors import AmbiguousError, NotFoundError
from admiral_cli.engine.policy import add_tag_links, remove_tag_links
from admiral_cli.engine.wire import serialize_zone
from admiral_cli.handlers.base import ApiHandler
from admiral_cli.resources.attributes import used_cpu_percentage, used_memory_percentage
from admiral_cli.resources.base import resource_id
from admiral_cli.resources.placement_zone import (
    EpzState,
    PlacementZone,
    PlacementZoneList,
    ResourcePoolState,
)
from admiral_cli.resources.properties import parse_custom_properties

if TYPE_CHECKING:
    from collections.abc import Iterable

    from admiral_cli.core.transport import Transport
    from admiral_cli.handlers.tags import TagHandler

logger = logging.getLogger(__name__)

NO_ELEMENTS = "No elements found."
TABLE_HEADER = ("ID", "NAME", "MEMORY", "CPU", "TAGS")

_LIST_PATH = f"{EPZ_CONFIG_PATH}?{EXPAND_QUERY}"


class PlacementZoneHandler(ApiHandler):
    """Placement zone directory: listing, name resolution and CRUD.

    Nothing is cached between calls; every operation starts from a fresh
    listing so the server stays the only source of truth.
    """

    def __init__(
        self,
        transport: Transport,
        tags: TagHandler,
        *,
        resolver: IdResolver = resolve_full_id,
    ) -> None:
        super().__init__(transport)
        self.tags = tags
        self.resolver = resolver

    # ------------------------------------------------------------------
    # Listing and lookup
    # ------------------------------------------------------------------

    def list_zones(self) -> PlacementZoneList:
        """Fetch the full expanded listing."""
        return self._get(_LIST_PATH, PlacementZoneList)

    def count(self) -> int:
        return len(self.list_zones().documents)

    def render(self, listing: PlacementZoneList) -> str:
        """Tab-separated table of *listing* in server order."""
        if listing.count() < 1:
            return NO_ELEMENTS
        rows = ["\t".join(TABLE_HEADER)]
        for zone in listing.zones():
            pool = zone.resource_pool_state
            rows.append(
                "\t".join(
                    (
                        pool.id,
                        pool.name,
                        used_memory_percentage(pool),
                        used_cpu_percentage(pool),
                        self.tags.render(zone.epz_state.tag_links_to_match),
                    )
                )
            )
        return "\n".join(rows).strip()

    def find_links_by_name(
        self, name: str, listing: PlacementZoneList | None = None
    ) -> list[str]:
        """Self-links of all zones named exactly *name*, in server order."""
        if listing is None:
            listing = self.list_zones()
        return [
            link
            for link in listing.links()
            if link in listing.documents and listing.documents[link].name == name
        ]

    def resolve_unique(self, name: str, listing: PlacementZoneList | None = None) -> str:
        """Self-link of the single zone named *name*.

        Raises:
            NotFoundError: No zone has this name.
            AmbiguousError: Several zones share this name; use the ID instead.
        """
        links = self.find_links_by_name(name, listing)
        if not links:
            raise NotFoundError(PLACEMENT_ZONE, name)
        if len(links) > 1:
            raise AmbiguousError(PLACEMENT_ZONE, name, links)
        return links[0]

    def resolve_id(self, name: str) -> str:
        """Short ID of the single zone named *name*."""
        return resource_id(self.resolve_unique(name))

    def resolve_full_id(self, zone_id: str) -> str:
        """Expand a (possibly shortened) zone ID using the current listing."""
        return self.resolver(zone_id, self.list_zones(), PLACEMENT_ZONE)

    def get(self, zone_id: str) -> PlacementZone:
        """Fetch the current state of one zone by ID.

        Raises:
            NotFoundError: The server returned no document for this ID.
        """
        return self._fetch(self.resolve_full_id(zone_id))

    def _fetch(self, full_id: str) -> PlacementZone:
        link = pool_link(full_id)
        expr = f"documentSelfLink eq '{odata_quote(link)}'"
        listing = self._get(f"{_LIST_PATH}&$filter={quote(expr, safe='')}", PlacementZoneList)
        zones = listing.zones()
        if not zones:
            raise NotFoundError(PLACEMENT_ZONE, full_id)
        return zones[0]

    def get_by_name(self, name: str) -> PlacementZone:
        return self.get(self.resolve_id(name))

    def get_name(self, link: str) -> str:
        """Name of the pool at *link*."""
        return self._get(link, ResourcePoolState).name

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def remove_by_id(self, zone_id: str) -> str:
        """Delete a zone by ID; returns the ID as given."""
        full_id = self.resolve_full_id(zone_id)
        self._delete(pool_link(full_id))
        logger.info("Removed placement zone %s", full_id)
        return zone_id

    def remove_by_name(self, name: str) -> str:
        return self.remove_by_id(self.resolve_id(name))

    def remove(self, identifier: str, *, by_name: bool = False) -> str:
        if by_name:
            return self.remove_by_name(identifier)
        return self.remove_by_id(identifier)

    def add(
        self,
        name: str,
        custom_properties: Iterable[str] = (),
        tag_inputs: Iterable[str] = (),
    ) -> str:
        """Create a zone and return the ID the server assigned to its pool.

        Args:
            name: Name of the new resource pool.
            custom_properties: ``key=value`` inputs (bare ``key`` clears).
            tag_inputs: ``key:value`` tags the zone policy must match;
                missing tags are created.
        """
        props = parse_custom_properties(custom_properties)
        policy = EpzState()
        add_tag_links(policy, tag_inputs, self.tags)
        zone = PlacementZone(
            resource_pool_state=ResourcePoolState(name=name, custom_properties=props),
            epz_state=policy,
        )
        created = self._post(EPZ_CONFIG_PATH, serialize_zone(zone), PlacementZone)
        logger.info("Created placement zone %s (%s)", name, created.resource_pool_state.id)
        return created.resource_pool_state.id

    def edit_by_id(
        self,
        zone_id: str,
        new_name: str = "",
        tags_to_add: Iterable[str] = (),
        tags_to_remove: Iterable[str] = (),
    ) -> str:
        """Merge local edits into the zone's current state and submit them.

        Tags are removed before they are added, so a tag listed in both ends
        up present. A tag error aborts before anything is sent. There is no
        version check: a concurrent edit between fetch and submit is
        overwritten.
        """
        full_id = self.resolve_full_id(zone_id)
        zone = self._fetch(full_id)

        if new_name:
            zone.resource_pool_state.name = new_name
        remove_tag_links(zone.epz_state, tags_to_remove, self.tags)
        add_tag_links(zone.epz_state, tags_to_add, self.tags)

        self._patch(placement_zone_link(pool_link(full_id)), serialize_zone(zone))
        logger.info("Updated placement zone %s", full_id)
        return zone_id

    def edit_by_name(
        self,
        name: str,
        new_name: str = "",
        tags_to_add: Iterable[str] = (),
        tags_to_remove: Iterable[str] = (),
    ) -> str:
        return self.edit_by_id(self.resolve_id(name), new_name, tags_to_add, tags_to_remove)

    def edit(
        self,
        identifier: str,
        new_name: str = "",
        tags_to_add: Iterable[str] = (),
        tags_to_remove: Iterable[str] = (),
        *,
        by_name: bool = False,
    ) -> str:
        if by_name:
            return self.edit_by_name(identifier, new_name, tags_to_add, tags_to_remove)
        return self.edit_by_id(identifier, new_name, tags_to_add, tags_to_remove)
