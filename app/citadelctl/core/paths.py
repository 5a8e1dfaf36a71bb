"""XDG-compliant path management for citadelctl.

This module provides standardized application paths following the XDG
Base Directory Specification, plus the fixed locations citadelctl touches
inside a game installation.

XDG defaults:
- Config: ~/.config/citadelctl/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "citadelctl"

# Game-relative locations (relative to the Steam install directory)
GAMEINFO_RELATIVE_PATH = Path("game") / "citadel" / "gameinfo.gi"
MOUNT_DIR_RELATIVE_PATH = Path("game") / "citadel" / "addons"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/citadelctl/ (or XDG_CONFIG_HOME/citadelctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the settings store file path.

    Returns:
        Path to ~/.config/citadelctl/settings.toml.
    """
    return get_config_dir() / "settings.toml"


def get_gameinfo_path(game_path: Path) -> Path:
    """Get the gameinfo.gi path for a game installation."""
    return game_path / GAMEINFO_RELATIVE_PATH


def get_mount_dir(game_path: Path) -> Path:
    """Get the addon mount directory for a game installation.

    This is the directory the game's content loader reads when the
    search paths have been modded.
    """
    return game_path / MOUNT_DIR_RELATIVE_PATH


def ensure_mount_dir(game_path: Path) -> Path:
    """Create the addon mount directory if it doesn't exist.

    Args:
        game_path: Root of the game installation.

    Returns:
        Path to the mount directory.

    Raises:
        OSError: If the directory cannot be created.
    """
    mount_dir = get_mount_dir(game_path)
    mount_dir.mkdir(parents=True, exist_ok=True)
    return mount_dir
