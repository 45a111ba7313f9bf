"""Map exceptions to clean stderr messages and exit codes."""

from __future__ import annotations

import typer


def _err(msg: str, *, fg: str | None) -> None:
    """Print a styled message to stderr."""
    typer.echo(typer.style(msg, fg=fg), err=True)


def handle_error(exc: Exception, *, color: bool = True) -> int:
    """Print a clean error message to stderr and return an exit code.

    All errors map to exit code 1.  No tracebacks are printed.
    """
    from admiral_cli.config.loader import ConfigError
    from admiral_cli.engine.errors import (
        AmbiguousError,
        DecodeError,
        MalformedPropertyError,
        MalformedTagError,
        NotFoundError,
        TransportError,
    )

    fg = typer.colors.RED if color else None

    if isinstance(exc, ConfigError):
        _err(f"Configuration error: {exc}", fg=fg)
    elif isinstance(exc, (MalformedTagError, MalformedPropertyError)):
        _err(str(exc), fg=fg)
    elif isinstance(exc, NotFoundError):
        _err(f"{exc.kind.capitalize()} not found: {exc.identifier}", fg=fg)
        _err("  Check the name, or provide the ID instead.", fg=fg)
    elif isinstance(exc, AmbiguousError):
        _err(
            f"Ambiguous {exc.kind}: '{exc.identifier}' matches {len(exc.matches)} resources",
            fg=fg,
        )
        _err(f"  Provide the unique ID of a specific {exc.kind} instead.", fg=fg)
    elif isinstance(exc, TransportError):
        _err(f"Request failed: {exc}", fg=fg)
    elif isinstance(exc, DecodeError):
        _err(f"Internal error: {exc}", fg=fg)
    else:
        _err(f"Error: {exc}", fg=fg)

    return 1
