"""Shared plumbing for control-plane handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel

from admiral_cli.engine.wire import decode, encode

if TYPE_CHECKING:
    from admiral_cli.core.transport import Transport

M = TypeVar("M", bound=BaseModel)


class ApiHandler:
    """Base class for handlers.

    Handlers translate operations on one resource kind into transport calls.
    Every request either returns a decoded document or raises.
    """

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def _get(self, path: str, model: type[M]) -> M:
        return decode(model, self.transport.send("GET", path), source=f"GET {path}")

    def _post(self, path: str, payload: dict[str, Any], model: type[M]) -> M:
        resp = self.transport.send("POST", path, encode(payload))
        return decode(model, resp, source=f"POST {path}")

    def _patch(self, path: str, payload: dict[str, Any]) -> None:
        self.transport.send("PATCH", path, encode(payload))

    def _delete(self, path: str) -> None:
        self.transport.send("DELETE", path)
