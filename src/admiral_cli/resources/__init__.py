"""Control-plane document models."""

from admiral_cli.resources.placement_zone import (
    EpzState,
    PlacementZone,
    PlacementZoneList,
    ResourcePoolState,
)
from admiral_cli.resources.tag import Tag, TagList

__all__ = [
    "EpzState",
    "PlacementZone",
    "PlacementZoneList",
    "ResourcePoolState",
    "Tag",
    "TagList",
]
