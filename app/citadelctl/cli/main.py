"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from citadelctl import __version__
from citadelctl.cli.commands import addon, config, gameinfo, status
from citadelctl.utils.formatting import setup_logging

# Create main Typer app
app = typer.Typer(
    name="citadelctl",
    help="Addon manager for the citadel game client.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"citadelctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    game_path: Annotated[
        Path | None,
        typer.Option(
            "--game-path",
            "-g",
            help="Game install directory (skips Steam discovery).",
        ),
    ] = None,
) -> None:
    """citadelctl - manage addons for the citadel game client.

    Keep addons in a library of your choice, mount the ones you want
    in-game, and patch gameinfo.gi so the game loads them.
    """
    setup_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["game_path"] = game_path


# Register commands
app.add_typer(status.app, name="status")
app.add_typer(gameinfo.app, name="gameinfo")
app.add_typer(addon.app, name="addon")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
