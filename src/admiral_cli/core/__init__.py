"""Core infrastructure components for admiral-cli."""

from admiral_cli.core.provider import AdmiralProvider, TokenAuth
from admiral_cli.core.transport import HttpTransport, Response, Transport

__all__ = ["AdmiralProvider", "HttpTransport", "Response", "TokenAuth", "Transport"]
