"""Handlers translating CLI operations into control-plane requests."""

from admiral_cli.handlers.placement_zones import PlacementZoneHandler
from admiral_cli.handlers.tags import TagHandler

__all__ = ["PlacementZoneHandler", "TagHandler"]
