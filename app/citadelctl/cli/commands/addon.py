"""Addon lifecycle commands.

Provides commands to install addons into the library, mount and unmount
them in the game, and remove them from the library again.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from citadelctl.addons.models import Addon
from citadelctl.cli.types import get_manager, report_errors
from citadelctl.utils.formatting import (
    console,
    create_addon_table,
    format_addon_row,
    print_info,
    print_success,
)

app = typer.Typer(
    help="Install, mount and remove addons.",
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    """Output format options for addon list."""

    TABLE = "table"
    JSON = "json"


@app.command("list")
def list_addons(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List addons in the library and the game."""
    with report_errors():
        manager = get_manager(ctx)
        addons = manager.list_addons()

    if output_format == OutputFormat.JSON:
        _print_json(addons)
        return

    if not addons:
        print_info("No addons installed.")
        return

    table = create_addon_table()
    for addon in addons:
        table.add_row(*format_addon_row(addon))
    console.print(table)

    mounted_count = sum(1 for a in addons if a.mounted)
    console.print(f"\n[dim]{len(addons)} addon(s), {mounted_count} mounted[/dim]")


@app.command()
def install(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Addon package (.vpk) to install.")],
    name: Annotated[
        str | None,
        typer.Option("--name", "-n", help="File name to store the addon under."),
    ] = None,
    display_name: Annotated[
        str | None,
        typer.Option("--display-name", "-d", help="Name to show for the addon."),
    ] = None,
    mount_after: Annotated[
        bool,
        typer.Option("--mount", "-m", help="Mount the addon after installing."),
    ] = False,
) -> None:
    """Copy an addon package into the library."""
    with report_errors():
        manager = get_manager(ctx)
        stored = manager.install(file, file_name=name, display_name=display_name)
        print_success(f"Installed {stored}")

        if mount_after:
            method = manager.mount(stored)
            print_success(f"Mounted {stored} ({method.value})")


@app.command()
def uninstall(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Addon file name.")],
) -> None:
    """Delete an addon from the library."""
    with report_errors():
        get_manager(ctx).uninstall(name)

    print_success(f"Uninstalled {name}")


@app.command()
def mount(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Addon file name.")],
) -> None:
    """Make a library addon active in the game."""
    with report_errors():
        method = get_manager(ctx).mount(name)

    print_success(f"Mounted {name} ({method.value})")


@app.command()
def unmount(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Addon file name.")],
) -> None:
    """Deactivate a mounted addon."""
    with report_errors():
        get_manager(ctx).unmount(name)

    print_success(f"Unmounted {name}")


@app.command()
def rename(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Addon file name.")],
    display_name: Annotated[str, typer.Argument(help="New display name.")],
) -> None:
    """Set the name shown for an addon."""
    with report_errors():
        get_manager(ctx).set_display_name(name, display_name)

    print_success(f"{name} is now shown as '{display_name}'")


# === Private helper functions ===


def _print_json(addons: list[Addon]) -> None:
    """Display addons as JSON."""
    data = [
        {
            "name": a.name,
            "display_name": a.display_name,
            "in_library": a.in_library,
            "mounted": a.mounted,
            "state": a.state.value,
        }
        for a in addons
    ]
    console.print_json(json.dumps(data))
