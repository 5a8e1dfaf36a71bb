"""Status command implementation.

Summarizes the game location, library, deploy method and search paths.
"""

import typer
from rich.table import Table

from citadelctl.addons.manager import AddonManager
from citadelctl.cli.types import get_game_path, get_settings, report_errors
from citadelctl.core.errors import CitadelctlError
from citadelctl.gameinfo.patcher import SearchPathsPatcher
from citadelctl.utils.formatting import console

app = typer.Typer(
    help="Show game, library and search path status.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def status(ctx: typer.Context) -> None:
    """Show game, library and search path status."""
    with report_errors():
        game_path = get_game_path(ctx)
        manager = AddonManager(game_path, get_settings(ctx))

    table = Table(show_header=False, border_style="border")
    table.add_column("Key", style="bold_header")
    table.add_column("Value")

    install_path = manager.get_install_path()
    table.add_row("Game", str(game_path) if game_path else "[error]not found[/]")
    table.add_row("Library", str(install_path) if install_path else "[muted]not set[/]")
    table.add_row("Deploy method", manager.get_deploy_method().value)
    table.add_row("Links available", "yes" if manager.is_link_available() else "no")

    if game_path is not None:
        try:
            search_paths = SearchPathsPatcher(game_path).get_state().value
        except CitadelctlError as e:
            search_paths = f"[error]{e}[/]"
        table.add_row("Search paths", search_paths)

    console.print(table)
