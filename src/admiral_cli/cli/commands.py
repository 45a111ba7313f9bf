"""``placement-zone`` commands."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Annotated

import typer

from admiral_cli.cli.errors import handle_error

if TYPE_CHECKING:
    from collections.abc import Iterator

    from admiral_cli.cli import CliState

placement_zone_app = typer.Typer(
    name="placement-zone",
    help="Manage placement zones.",
    no_args_is_help=True,
)

ByName = Annotated[
    bool,
    typer.Option("--name", "-n", help="Treat IDENTIFIER as a placement zone name."),
]

Identifier = Annotated[
    str,
    typer.Argument(help="Placement zone ID (or name with --name)."),
]

TagInputs = Annotated[
    list[str] | None,
    typer.Option("--tag", help="Tag to match as key:value (repeatable)."),
]


@contextmanager
def _reported(state: CliState) -> Iterator[None]:
    """Turn any failure into a one-line error and exit code."""
    try:
        yield
    except typer.Exit:
        raise
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=state.color)) from exc


@contextmanager
def _status(message: str, state: CliState) -> Iterator[None]:
    """Show a Rich spinner on stderr while requests are in flight."""
    from rich.console import Console

    console = Console(stderr=True, no_color=not state.color)
    with console.status(message):
        yield


@placement_zone_app.command(name="ls")
def list_cmd(ctx: typer.Context) -> None:
    """List placement zones."""
    state: CliState = ctx.obj
    with _reported(state):
        zones = state.placement_zones
        with _status("Fetching placement zones...", state):
            output = zones.render(zones.list_zones())
    typer.echo(output)


@placement_zone_app.command(name="add")
def add_cmd(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Name of the new placement zone.")],
    custom_properties: Annotated[
        list[str] | None,
        typer.Option("--cp", help="Custom property as key=value, bare key clears (repeatable)."),
    ] = None,
    tags: TagInputs = None,
) -> None:
    """Add a placement zone."""
    state: CliState = ctx.obj
    with _reported(state):
        zone_id = state.placement_zones.add(name, custom_properties or [], tags or [])
    typer.echo(f"Placement zone added: {zone_id}")


@placement_zone_app.command(name="edit")
def edit_cmd(
    ctx: typer.Context,
    identifier: Identifier,
    by_name: ByName = False,
    new_name: Annotated[
        str,
        typer.Option("--new-name", help="New name for the placement zone."),
    ] = "",
    tags_to_add: Annotated[
        list[str] | None,
        typer.Option("--tag-add", help="Tag to add as key:value (repeatable)."),
    ] = None,
    tags_to_remove: Annotated[
        list[str] | None,
        typer.Option("--tag-rm", help="Tag to remove as key:value (repeatable)."),
    ] = None,
) -> None:
    """Rename a placement zone or change the tags it matches."""
    state: CliState = ctx.obj
    with _reported(state):
        zone_id = state.placement_zones.edit(
            identifier,
            new_name,
            tags_to_add or [],
            tags_to_remove or [],
            by_name=by_name,
        )
    typer.echo(f"Placement zone updated: {zone_id}")


@placement_zone_app.command(name="rm")
def remove_cmd(ctx: typer.Context, identifier: Identifier, by_name: ByName = False) -> None:
    """Remove a placement zone."""
    state: CliState = ctx.obj
    with _reported(state):
        zone_id = state.placement_zones.remove(identifier, by_name=by_name)
    typer.echo(f"Placement zone removed: {zone_id}")


@placement_zone_app.command(name="inspect")
def inspect_cmd(ctx: typer.Context, identifier: Identifier, by_name: ByName = False) -> None:
    """Show details of a placement zone."""
    from admiral_cli.cli.formatting import format_zone

    state: CliState = ctx.obj
    with _reported(state):
        zones = state.placement_zones
        zone = zones.get_by_name(identifier) if by_name else zones.get(identifier)
        tags = zones.tags.render(zone.epz_state.tag_links_to_match)
        output = format_zone(zone, tags, color=state.color)
    typer.echo(output)
