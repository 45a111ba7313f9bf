"""CLI application for admiral-cli.

Global options live on the root callback and reach every command through
``ctx.obj`` as a ``CliState``; the provider is only built once a command
asks for it, so ``--version`` and ``--help`` never read the configuration.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from admiral_cli import __version__
from admiral_cli.cli.commands import placement_zone_app

if TYPE_CHECKING:
    from admiral_cli.core.provider import AdmiralProvider
    from admiral_cli.handlers.placement_zones import PlacementZoneHandler

app = typer.Typer(
    name="admiral",
    no_args_is_help=True,
    add_completion=False,
)

LOG_ENV_VAR = "ADMIRAL_LOG"
_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class CliState:
    """Options shared by all commands of one invocation."""

    config_path: Path | None = None
    color: bool = True
    _provider: AdmiralProvider | None = field(default=None, repr=False)

    @property
    def provider(self) -> AdmiralProvider:
        """Provider built from the configuration file, loaded on first use."""
        if self._provider is None:
            from admiral_cli.config import load, provider_from_config

            self._provider = provider_from_config(load(self.config_path))
        return self._provider

    @property
    def placement_zones(self) -> PlacementZoneHandler:
        return self.provider.placement_zones


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"admiral-cli {__version__}")
        raise typer.Exit


def _use_color(no_color: bool) -> bool:
    return not (no_color or os.environ.get("NO_COLOR"))


def _configure_logging(verbose: int) -> None:
    """Route ``admiral_cli`` logs to stderr at the level from ``-v`` or ``ADMIRAL_LOG``."""
    env_level = os.environ.get(LOG_ENV_VAR, "").upper()
    if env_level:
        if env_level not in _VALID_LEVELS:
            print(
                f"WARNING: invalid {LOG_ENV_VAR} level '{env_level}', "
                f"expected one of {', '.join(sorted(_VALID_LEVELS))}; defaulting to INFO",
                file=sys.stderr,
            )
        level = getattr(logging, env_level, logging.INFO)
    elif verbose:
        level = logging.DEBUG if verbose >= 2 else logging.INFO
    else:
        return
    logging.basicConfig(
        level=logging.WARNING,
        format=_LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger("admiral_cli").setLevel(level)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Log requests (-v info, -vv debug)."),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file (default: ~/.admiral-cli/admiral-cli.yaml).",
        ),
    ] = None,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="Disable colored output."),
    ] = False,
) -> None:
    """Manage placement zones and tags on an Admiral control plane."""
    _ = version
    _configure_logging(verbose)
    ctx.obj = CliState(config_path=config, color=_use_color(no_color))


app.add_typer(placement_zone_app, name="placement-zone")
