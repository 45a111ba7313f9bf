"""HTTP transport to the control plane."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import requests

from admiral_cli.engine.errors import TransportError

logger = logging.getLogger(__name__)

AUTH_HEADER = "x-xenon-auth-token"


@dataclass(frozen=True)
class Response:
    """Raw answer to a successful request."""

    status_code: int
    body: bytes


class Transport(Protocol):
    """Sends one request and returns the raw response.

    Implementations raise ``TransportError`` for network failures and
    error statuses; callers never inspect ``status_code`` themselves.
    """

    def send(self, method: str, path: str, body: bytes | None = None) -> Response: ...


class HttpTransport:
    """``Transport`` backed by a ``requests.Session``.

    Args:
        url: Base URL of the control plane, without trailing slash.
        token: Session token sent in the ``x-xenon-auth-token`` header.
        verify_ssl: Verify TLS certificates.
        timeout: Per-request timeout in seconds (None waits forever).
        session: Session to use instead of a fresh one (for testing).
    """

    def __init__(
        self,
        url: str,
        token: str | None = None,
        *,
        verify_ssl: bool = True,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.verify_ssl = verify_ssl
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {"Content-Type": "application/json", "Accept": "application/json"}
        )
        if token:
            self.session.headers[AUTH_HEADER] = token

    def send(self, method: str, path: str, body: bytes | None = None) -> Response:
        logger.debug("%s %s", method, path)
        try:
            resp = self.session.request(
                method,
                self.url + path,
                data=body,
                verify=self.verify_ssl,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(method, path, str(exc)) from exc

        logger.debug("%s %s -> %d (%d bytes)", method, path, resp.status_code, len(resp.content))
        if resp.status_code >= 400:
            raise TransportError(
                method, path, _error_message(resp), status_code=resp.status_code
            )
        return Response(status_code=resp.status_code, body=resp.content)


def _error_message(resp: requests.Response) -> str:
    """Best human-readable message from an error response."""
    try:
        payload = resp.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return resp.reason or f"HTTP {resp.status_code}"
