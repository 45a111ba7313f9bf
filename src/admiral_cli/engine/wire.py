"""Wire encoding of placement zones and tags.

Serialization is explicit rather than hooked into the models: the decision
whether a policy is empty lives in ``EpzState.is_empty`` and the effect on
the payload (``null`` instead of an object) lives here.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from admiral_cli.engine.errors import DecodeError

if TYPE_CHECKING:
    from admiral_cli.core.transport import Response
    from admiral_cli.resources.placement_zone import (
        EpzState,
        PlacementZone,
        ResourcePoolState,
    )
    from admiral_cli.resources.tag import Tag

M = TypeVar("M", bound=BaseModel)


def serialize_policy(policy: EpzState) -> dict[str, Any] | None:
    """Payload for a tag policy; ``None`` (JSON null) when the policy is empty."""
    if policy.is_empty():
        return None
    payload: dict[str, Any] = {}
    if policy.resource_pool_link:
        payload["resourcePoolLink"] = policy.resource_pool_link
    if policy.tag_links_to_match:
        payload["tagLinksToMatch"] = list(policy.tag_links_to_match)
    if policy.document_self_link:
        payload["documentSelfLink"] = policy.document_self_link
    return payload


def serialize_pool(pool: ResourcePoolState) -> dict[str, Any]:
    """Payload for a resource pool, omitting unset fields.

    ``None`` values inside ``customProperties`` are kept: they tell the
    server to clear that property.
    """
    payload: dict[str, Any] = {}
    if pool.name:
        payload["name"] = pool.name
    if pool.max_cpu_count:
        payload["maxCpuCount"] = pool.max_cpu_count
    if pool.max_memory_bytes:
        payload["maxMemoryBytes"] = pool.max_memory_bytes
    if pool.custom_properties:
        payload["customProperties"] = dict(pool.custom_properties)
    if pool.document_self_link:
        payload["documentSelfLink"] = pool.document_self_link
    return payload


def serialize_zone(zone: PlacementZone) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "resourcePoolState": serialize_pool(zone.resource_pool_state),
        "epzState": serialize_policy(zone.epz_state),
    }
    if zone.document_self_link:
        payload["documentSelfLink"] = zone.document_self_link
    return payload


def serialize_tag(tag: Tag) -> dict[str, Any]:
    payload: dict[str, Any] = {"key": tag.key, "value": tag.value}
    if tag.document_self_link:
        payload["documentSelfLink"] = tag.document_self_link
    return payload


def encode(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload).encode("utf-8")


def decode(model: type[M], response: Response, *, source: str) -> M:
    """Decode a response body into *model*.

    Raises:
        DecodeError: The body is not JSON or does not match *model*.
    """
    try:
        return model.model_validate_json(response.body)
    except ValidationError as exc:
        raise DecodeError(source, str(exc)) from exc
