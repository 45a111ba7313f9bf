"""Parsing of ``key=value`` custom property inputs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from admiral_cli.engine.errors import MalformedPropertyError

if TYPE_CHECKING:
    from collections.abc import Iterable


def parse_custom_properties(inputs: Iterable[str]) -> dict[str, str | None]:
    """Parse CLI property inputs into a pool's custom property mapping.

    ``key=value`` sets a property (the value is kept verbatim and may itself
    contain ``=``); a bare ``key`` maps to ``None``, which clears the
    property on the server. Later inputs override earlier ones.

    Raises:
        MalformedPropertyError: An input has an empty key.
    """
    props: dict[str, str | None] = {}
    for text in inputs:
        key, sep, value = text.partition("=")
        key = key.strip()
        if not key:
            raise MalformedPropertyError(text)
        props[key] = value if sep else None
    return props
