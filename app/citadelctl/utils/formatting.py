"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.theme import Theme

from citadelctl.addons.models import Addon

THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "header": "#69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
        "bold_header": "bold #69B9A1",
        "addon.mounted": "bold #c1ff62",
        "addon.stored": "#69B9A1",
        "addon.orphan": "#f5b332",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def setup_logging(verbose: bool = False) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG level instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def create_addon_table(title: str = "Addons") -> Table:
    """Create a pre-configured table for displaying addons.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for addon display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("", width=2, justify="center")
    table.add_column("File", no_wrap=True)
    table.add_column("Name", style="text")
    table.add_column("Library", justify="center")
    table.add_column("Mounted", justify="center")
    return table


def format_addon_row(addon: Addon) -> tuple[str, str, str, str, str]:
    """Format an addon as a table row with styling.

    Mounted addons get a filled circle, library-only addons an empty one,
    and mounts without a library copy a warning marker.

    Args:
        addon: The addon to format.

    Returns:
        Tuple of (icon, file, name, library, mounted) with Rich markup.
    """
    if addon.mounted and addon.in_library:
        icon = "[addon.mounted]●[/]"
        file_name = f"[addon.mounted]{addon.name}[/]"
    elif addon.mounted:
        icon = "[addon.orphan]![/]"
        file_name = f"[addon.orphan]{addon.name}[/]"
    else:
        icon = "[addon.stored]○[/]"
        file_name = f"[addon.stored]{addon.name}[/]"

    name = f"[text]{addon.display_name or '-'}[/]"
    library = "[success]yes[/]" if addon.in_library else "[muted]no[/]"
    mounted = "[success]yes[/]" if addon.mounted else "[muted]no[/]"

    return (icon, file_name, name, library, mounted)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
