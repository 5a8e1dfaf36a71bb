"""Shared helpers for CLI commands.

This module builds the core components from the CLI context and turns
citadelctl errors into user-facing messages and exit codes.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer

from citadelctl.addons.manager import AddonManager
from citadelctl.core.errors import CitadelctlError, GamePathNotFoundError
from citadelctl.core.game import GAME_PATH_ENV, find_game_path
from citadelctl.core.settings import SettingsStore
from citadelctl.gameinfo.patcher import SearchPathsPatcher
from citadelctl.utils.formatting import print_error, print_info


def get_game_path(ctx: typer.Context) -> Path | None:
    """Resolve the game path from the --game-path option or discovery."""
    obj = ctx.obj or {}
    return find_game_path(obj.get("game_path"))


def get_settings(ctx: typer.Context) -> SettingsStore:
    """Load the settings store, once per invocation."""
    obj = ctx.ensure_object(dict)
    if "settings" not in obj:
        obj["settings"] = SettingsStore()
    return obj["settings"]


def get_patcher(ctx: typer.Context) -> SearchPathsPatcher:
    """Create the gameinfo.gi patcher for the located game."""
    return SearchPathsPatcher(get_game_path(ctx))


def get_manager(ctx: typer.Context) -> AddonManager:
    """Create the addon manager for the located game."""
    return AddonManager(get_game_path(ctx), get_settings(ctx))


@contextmanager
def report_errors() -> Iterator[None]:
    """Print citadelctl errors and exit with code 1.

    Raises:
        typer.Exit: If a CitadelctlError escapes the block.
    """
    try:
        yield
    except GamePathNotFoundError as e:
        print_error(str(e))
        print_info(f"Pass --game-path or set {GAME_PATH_ENV} to the game's install directory.")
        raise typer.Exit(code=1) from e
    except CitadelctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
