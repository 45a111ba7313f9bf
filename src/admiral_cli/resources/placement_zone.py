"""Placement zone resource models."""

from __future__ import annotations

from typing import Annotated

from pydantic import BeforeValidator, Field

from admiral_cli.resources.base import Document, none_to_dict, none_to_list

POOLS_PREFIX = "/resources/pools/"


class ResourcePoolState(Document):
    """The elastic resource pool backing a placement zone.

    ``custom_properties`` maps a key to ``None`` to clear it on the server;
    a key that is absent is left unchanged.
    """

    name: str = ""
    max_cpu_count: int = 0
    max_memory_bytes: int = 0
    custom_properties: Annotated[dict[str, str | None], BeforeValidator(none_to_dict)] = Field(
        default_factory=dict
    )

    @property
    def id(self) -> str:
        return self.document_self_link.replace(POOLS_PREFIX, "")


class EpzState(Document):
    """Tag-matching policy of an elastic placement zone."""

    resource_pool_link: str = ""
    tag_links_to_match: Annotated[list[str], BeforeValidator(none_to_list)] = Field(
        default_factory=list
    )

    def is_empty(self) -> bool:
        """True when the policy carries no tags and no links.

        An empty policy means "no policy" and goes on the wire as ``null``.
        """
        return (
            not self.tag_links_to_match
            and not self.document_self_link
            and not self.resource_pool_link
        )


class PlacementZone(Document):
    """A resource pool together with its (optional) tag policy."""

    resource_pool_state: ResourcePoolState = Field(default_factory=ResourcePoolState)
    epz_state: Annotated[EpzState, BeforeValidator(none_to_dict)] = Field(
        default_factory=EpzState
    )

    @property
    def id(self) -> str:
        return self.resource_pool_state.id or self.document_self_link.replace(POOLS_PREFIX, "")

    @property
    def name(self) -> str:
        return self.resource_pool_state.name


class PlacementZoneList(Document):
    """Expanded placement zone listing, indexed by self-link."""

    total_count: int = 0
    documents: Annotated[dict[str, PlacementZone], BeforeValidator(none_to_dict)] = Field(
        default_factory=dict
    )
    document_links: Annotated[list[str], BeforeValidator(none_to_list)] = Field(
        default_factory=list
    )

    def count(self) -> int:
        return len(self.document_links)

    def links(self) -> list[str]:
        """Self-links in server order, falling back to index order."""
        return self.document_links or list(self.documents)

    def zones(self) -> list[PlacementZone]:
        """Zones in server order."""
        return [self.documents[link] for link in self.links() if link in self.documents]
