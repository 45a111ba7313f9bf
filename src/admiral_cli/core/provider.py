"""Admiral Provider - Connection configuration for a control plane instance."""

from functools import cached_property
from typing import TYPE_CHECKING, Any, Self

from pydantic import BaseModel, ConfigDict, SecretStr

from admiral_cli.core.links import IdResolver, resolve_full_id
from admiral_cli.core.transport import HttpTransport

if TYPE_CHECKING:
    from admiral_cli.core.transport import Transport
    from admiral_cli.handlers.placement_zones import PlacementZoneHandler
    from admiral_cli.handlers.tags import TagHandler


class TokenAuth(BaseModel):
    """Session token authentication."""

    token: SecretStr


class AdmiralProvider(BaseModel):
    """Connection configuration for a control plane instance.

    Every handler receives its transport from here; there is no module-level
    connection state.

    Examples:
        # Against a running instance
        provider = AdmiralProvider(
            url="https://admiral.company.com:8282",
            auth=TokenAuth(token="session-token"),
        )
        provider.placement_zones.list_zones()

        # With a fake transport (tests)
        provider = AdmiralProvider.from_transport(fake)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    url: str | None = None
    auth: TokenAuth | None = None
    verify_ssl: bool = True
    timeout: float | None = None

    # Injected transport (for testing)
    _injected_transport: Any = None
    _resolver: Any = None

    @classmethod
    def from_transport(cls, transport: "Transport", *, resolver: IdResolver | None = None) -> Self:
        """Create a provider around an existing transport.

        Args:
            transport: Anything implementing ``Transport.send``
            resolver: Short-ID resolver to use instead of the default prefix match
        """
        provider = cls.model_construct()
        provider._injected_transport = transport
        provider._resolver = resolver
        return provider

    @cached_property
    def transport(self) -> "Transport":
        """Get the transport."""
        if self._injected_transport is not None:
            return self._injected_transport

        if self.url is None:
            raise ValueError(
                "Either provide url, or use AdmiralProvider.from_transport() "
                "to inject a transport"
            )

        return HttpTransport(
            self.url,
            self.auth.token.get_secret_value() if self.auth is not None else None,
            verify_ssl=self.verify_ssl,
            timeout=self.timeout,
        )

    # Handlers for each resource kind
    @cached_property
    def tags(self) -> "TagHandler":
        from admiral_cli.handlers.tags import TagHandler

        return TagHandler(self.transport)

    @cached_property
    def placement_zones(self) -> "PlacementZoneHandler":
        from admiral_cli.handlers.placement_zones import PlacementZoneHandler

        return PlacementZoneHandler(
            self.transport, self.tags, resolver=self._resolver or resolve_full_id
        )
