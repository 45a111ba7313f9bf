"""Policy mutation, wire encoding and error types."""

from admiral_cli.engine.errors import (
    AdmiralError,
    AmbiguousError,
    DecodeError,
    MalformedPropertyError,
    MalformedTagError,
    NotFoundError,
    TransportError,
)

__all__ = [
    "AdmiralError",
    "AmbiguousError",
    "DecodeError",
    "MalformedPropertyError",
    "MalformedTagError",
    "NotFoundError",
    "TransportError",
]
