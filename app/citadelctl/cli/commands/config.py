"""Settings commands.

Shows the stored settings and changes the addon library location and
the deploy method.
"""

from pathlib import Path
from typing import Annotated

import typer

from citadelctl.addons.models import DeployMethod
from citadelctl.cli.types import get_manager, get_settings, report_errors
from citadelctl.utils.formatting import console, print_info, print_success, print_warning

app = typer.Typer(
    help="Show and change citadelctl settings.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the current settings."""
    with report_errors():
        store = get_settings(ctx)

    settings = store.settings
    console.print(f"[bold_header]Settings file:[/] {store.path}")
    console.print(f"[bold_header]Library:[/] {settings.install_path or '[muted]not set[/]'}")
    console.print(f"[bold_header]Deploy method:[/] {settings.deploy_method.value}")
    console.print(f"[bold_header]Named addons:[/] {len(settings.addons)}")


@app.command()
def library(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Existing directory outside the game.")],
) -> None:
    """Set the addon library directory.

    Addons from the previous library are copied over.
    """
    with report_errors():
        manager = get_manager(ctx)
        manager.set_install_path(path)
        install_path = manager.get_install_path()

    print_success(f"Addon library set to {install_path}")


@app.command()
def deploy(
    ctx: typer.Context,
    method: Annotated[
        DeployMethod,
        typer.Argument(help="Deploy method: copy or link.", case_sensitive=False),
    ],
) -> None:
    """Set the deploy method and redeploy mounted addons."""
    with report_errors():
        manager = get_manager(ctx)
        if method == DeployMethod.LINK and not manager.is_link_available():
            print_warning("Links are unavailable for this library; addons will be copied.")
        redeployed = manager.set_deploy_method(method)

    print_success(f"Deploy method set to {method.value}")
    if redeployed:
        print_info(f"Redeployed {len(redeployed)} mounted addon(s).")
