"""Output rendering for placement zone commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from admiral_cli.resources.attributes import (
    public_custom_properties,
    used_cpu_percentage,
    used_memory_percentage,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from admiral_cli.resources.placement_zone import PlacementZone


def styler(color: bool) -> Callable[..., str]:
    """Return ``typer.style`` when *color* is True, otherwise a passthrough."""
    if color:
        return typer.style
    return lambda text, **_kw: text


def _align_values(items: dict[str, str]) -> list[tuple[str, str]]:
    """Right-pad keys so values line up."""
    if not items:
        return []
    max_key = max(len(k) for k in items)
    return [(k.ljust(max_key), v) for k, v in items.items()]


def format_zone(zone: PlacementZone, tags: str, *, color: bool = True) -> str:
    """Render one zone as an aligned ``key: value`` block.

    *tags* is the already-rendered tag string of the zone's policy.
    """
    style = styler(color)
    pool = zone.resource_pool_state
    fields = {
        "ID:": pool.id,
        "Name:": pool.name,
        "Max CPU count:": str(pool.max_cpu_count),
        "Max memory (bytes):": str(pool.max_memory_bytes),
        "Memory used:": used_memory_percentage(pool),
        "CPU used:": used_cpu_percentage(pool),
        "Tags:": tags,
    }
    lines = [f"{style(k, bold=True)} {v}" for k, v in _align_values(fields)]

    props = public_custom_properties(pool)
    if props:
        lines.append(style("Custom properties:", bold=True))
        lines.extend(f"  {k} = {v}" for k, v in _align_values(props))
    return "\n".join(lines)
