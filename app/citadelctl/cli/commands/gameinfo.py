"""gameinfo.gi commands.

Shows whether the game's search paths load addons, and switches them
between the vanilla and modded layouts.
"""

from typing import Annotated

import typer

from citadelctl.cli.types import get_patcher, report_errors
from citadelctl.gameinfo.models import SearchPathsState
from citadelctl.utils.formatting import console, print_info, print_success, print_warning

app = typer.Typer(
    help="Inspect and patch the game's search paths.",
    no_args_is_help=True,
)

_STATE_STYLES = {
    SearchPathsState.VANILLA: "info",
    SearchPathsState.MODDED: "success",
    SearchPathsState.CUSTOM: "warning",
}


@app.command()
def state(ctx: typer.Context) -> None:
    """Show the current search paths classification."""
    with report_errors():
        patcher = get_patcher(ctx)
        current = patcher.get_state()

    style = _STATE_STYLES[current]
    console.print(f"Search paths: [{style}]{current.value}[/]")
    if current == SearchPathsState.VANILLA:
        print_info("Run 'citadelctl gameinfo mod' to enable addon loading.")
    elif current == SearchPathsState.CUSTOM:
        print_warning("Search paths were changed outside citadelctl; they will not be modified.")


@app.command()
def mod(ctx: typer.Context) -> None:
    """Enable addon loading in gameinfo.gi."""
    with report_errors():
        patcher = get_patcher(ctx)
        result = patcher.mod()

    if result == SearchPathsState.MODDED:
        print_success("Search paths are modded. Mounted addons will be loaded.")
    else:
        print_warning("Search paths are customized; left unchanged.")


@app.command()
def reset(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Restore the vanilla search paths."""
    if not yes:
        confirmed = typer.confirm("Restore vanilla search paths?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    with report_errors():
        patcher = get_patcher(ctx)
        patcher.reset()

    print_success("Search paths restored to vanilla.")
