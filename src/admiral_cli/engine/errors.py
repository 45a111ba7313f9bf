"""Error types raised by the placement zone and tag layer."""

from __future__ import annotations


class AdmiralError(Exception):
    """Base exception for admiral-cli errors."""


class MalformedTagError(AdmiralError):
    """Raised when a tag input is neither ``key`` nor ``key:value``."""

    def __init__(self, text: str) -> None:
        super().__init__(f'Invalid tag format for input: {text}. Use "key:value" format.')
        self.text = text


class MalformedPropertyError(AdmiralError):
    """Raised when a custom property input has no key."""

    def __init__(self, text: str) -> None:
        super().__init__(f'Invalid custom property for input: {text}. Use "key=value" format.')
        self.text = text


class NotFoundError(AdmiralError):
    """Raised when a name or ID matches no server resource."""

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class AmbiguousError(AdmiralError):
    """Raised when a name or short ID matches more than one server resource."""

    def __init__(self, kind: str, identifier: str, matches: list[str]) -> None:
        super().__init__(f"{kind} '{identifier}' is ambiguous: {len(matches)} matches found")
        self.kind = kind
        self.identifier = identifier
        self.matches = matches


class TransportError(AdmiralError):
    """Raised when a request to the control plane fails.

    Carries the HTTP status when the server answered; ``status_code`` is
    ``None`` for connection-level failures.
    """

    def __init__(
        self, method: str, path: str, message: str, *, status_code: int | None = None
    ) -> None:
        prefix = f"{method} {path}"
        if status_code is not None:
            prefix += f" ({status_code})"
        super().__init__(f"{prefix}: {message}")
        self.method = method
        self.path = path
        self.message = message
        self.status_code = status_code


class DecodeError(AdmiralError):
    """Raised when server data breaks the expected contract.

    Never recovered from inside the core: a response that cannot be decoded,
    or a reserved counter that is not a number, aborts the running command.
    """

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(f"Failed to decode {source}: {detail}")
        self.source = source
        self.detail = detail
