"""Game installation discovery.

Locates the game's install directory. An explicit path (CLI option or the
CITADELCTL_GAME_PATH environment variable) wins; otherwise every Steam
library listed in libraryfolders.vdf is searched for the game's app
manifest.
"""

import logging
import os
from pathlib import Path

import vdf

logger = logging.getLogger(__name__)

GAME_APP_ID = "1422450"
GAME_PATH_ENV = "CITADELCTL_GAME_PATH"


def get_steam_roots() -> list[Path]:
    """Get candidate Steam installation roots for this platform.

    Returns:
        Existing Steam root directories, in search order.
    """
    home = Path.home()
    candidates = [
        home / ".steam" / "steam",
        home / ".local" / "share" / "Steam",
        home / ".var" / "app" / "com.valvesoftware.Steam" / "data" / "Steam",
    ]

    program_files = os.environ.get("PROGRAMFILES(X86)")
    if program_files:
        candidates.append(Path(program_files) / "Steam")

    return [root for root in candidates if root.is_dir()]


def get_library_folders(steam_root: Path) -> list[Path]:
    """Read the library folders registered with a Steam installation.

    The Steam root itself is always included, even when
    libraryfolders.vdf is missing or unreadable.

    Args:
        steam_root: Steam installation root.

    Returns:
        Library root directories (each containing a steamapps/ folder).
    """
    libraries = [steam_root]
    libraryfolders_path = steam_root / "steamapps" / "libraryfolders.vdf"

    if not libraryfolders_path.exists():
        return libraries

    try:
        with open(libraryfolders_path, encoding="utf-8", errors="ignore") as f:
            data = vdf.load(f)
    except (OSError, SyntaxError) as e:
        logger.warning("Failed to parse %s: %s", libraryfolders_path, e)
        return libraries

    folders = data.get("libraryfolders", {})
    for value in folders.values():
        if isinstance(value, dict) and value.get("path"):
            library = Path(value["path"])
            if library not in libraries:
                libraries.append(library)

    return libraries


def find_app_install_dir(library: Path, app_id: str = GAME_APP_ID) -> Path | None:
    """Resolve an app's install directory inside one Steam library.

    Args:
        library: Steam library root.
        app_id: Steam application ID.

    Returns:
        Install directory if the app manifest exists and names one, None otherwise.
    """
    manifest_path = library / "steamapps" / f"appmanifest_{app_id}.acf"
    if not manifest_path.exists():
        return None

    try:
        with open(manifest_path, encoding="utf-8", errors="ignore") as f:
            manifest = vdf.load(f)
    except (OSError, SyntaxError) as e:
        logger.warning("Failed to parse %s: %s", manifest_path, e)
        return None

    install_dir = manifest.get("AppState", {}).get("installdir")
    if not install_dir:
        return None

    return library / "steamapps" / "common" / install_dir


def find_game_path(explicit: Path | None = None) -> Path | None:
    """Locate the game installation directory.

    Priority:
    1. Explicit path argument
    2. CITADELCTL_GAME_PATH environment variable
    3. Steam libraries

    Args:
        explicit: Path supplied by the caller, used as-is when given.

    Returns:
        Absolute game directory, or None if the game could not be located.
    """
    if explicit is not None:
        return explicit.expanduser().resolve()

    env_path = os.environ.get(GAME_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser().resolve()

    for steam_root in get_steam_roots():
        for library in get_library_folders(steam_root):
            game_path = find_app_install_dir(library)
            if game_path is not None and game_path.is_dir():
                logger.debug("Found game in Steam library %s", library)
                return game_path

    logger.debug("Game app %s not found in any Steam library", GAME_APP_ID)
    return None
