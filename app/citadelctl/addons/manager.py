"""Addon library and mount directory management.

The AddonManager moves addon packages between two directories:

- the library: a user-chosen directory holding every installed addon;
- the mount directory: game/citadel/addons inside the game installation,
  whose contents the game actually loads.

An addon may only be mounted from the library, may not be mounted twice,
and may not be deleted from the library while it is mounted. Every
public method holds the manager's lock for its whole duration, so each
existence check and the filesystem change that depends on it happen
under one hold.
"""

from __future__ import annotations

import logging
import os
import shutil
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from citadelctl.addons.deploy import deploy_addon, link_deployment_available
from citadelctl.addons.errors import (
    AddonAlreadyMountedError,
    AddonNotInstalledError,
    AddonNotMountedError,
    CannotDeleteMountedAddonError,
    InvalidAddonFileError,
    InvalidLibraryPathError,
    LibraryReadError,
    LibraryWriteError,
    MountFolderCreateError,
    MountFolderReadError,
    MountFolderWriteError,
)
from citadelctl.addons.models import ADDON_EXTENSION, Addon, DeployMethod
from citadelctl.core.errors import GamePathNotFoundError, LibraryPathNotSetError
from citadelctl.core.paths import ensure_mount_dir, get_mount_dir

if TYPE_CHECKING:
    from citadelctl.core.settings import SettingsStore

logger = logging.getLogger(__name__)


def _path_present(path: Path) -> bool:
    """Check for a file or link at path; a dangling link still counts."""
    return path.exists() or path.is_symlink()


def _is_addon_entry(entry: os.DirEntry[str], *, allow_links: bool) -> bool:
    """Check whether a directory entry is an addon package."""
    if Path(entry.name).suffix != ADDON_EXTENSION:
        return False
    if entry.is_file(follow_symlinks=False):
        return True
    return allow_links and entry.is_symlink()


def _validate_name(name: str) -> None:
    """Reject addon names that are not plain file names."""
    if not name or name in (".", "..") or Path(name).name != name:
        raise InvalidAddonFileError(f"Invalid addon file name: {name!r}")


class AddonManager:
    """Installs, mounts and unmounts addons for one game installation.

    The library path is owned by the manager: it is loaded from the
    settings store once, changed only through set_install_path(), and
    read under the lock.

    Attributes:
        game_path: Game installation directory, None if not located.
    """

    def __init__(self, game_path: Path | None, settings: SettingsStore) -> None:
        """Initialize the manager.

        Args:
            game_path: Game installation directory, None if not located.
            settings: Settings store holding library path, deploy method
                and display names.
        """
        self.game_path = game_path
        self._settings = settings
        self._install_path = settings.get_install_path()
        self._lock = threading.Lock()

    # === PRECONDITIONS ===

    def _require_install_path(self) -> Path:
        if self._install_path is None:
            raise LibraryPathNotSetError()
        return self._install_path

    def _require_game_path(self) -> Path:
        if self.game_path is None:
            raise GamePathNotFoundError()
        return self.game_path

    def _ensure_mount_dir(self) -> Path:
        game_path = self._require_game_path()
        try:
            return ensure_mount_dir(game_path)
        except OSError as e:
            raise MountFolderCreateError(f"Could not create addons folder: {e}") from e

    # === QUERIES ===

    def get_install_path(self) -> Path | None:
        """Get the current addon library path."""
        with self._lock:
            return self._install_path

    def get_deploy_method(self) -> DeployMethod:
        """Get the deploy method used for new mounts."""
        with self._lock:
            return self._settings.get_deploy_method()

    def is_link_available(self) -> bool:
        """Check whether mounting would currently link instead of copy."""
        with self._lock:
            return link_deployment_available(self._install_path, self.game_path)

    def get_display_name(self, name: str) -> str:
        """Get an addon's display name, defaulting to its file name."""
        with self._lock:
            return self._settings.get_display_name(name) or name

    def set_display_name(self, name: str, display_name: str) -> None:
        """Store a display name for an addon.

        Raises:
            InvalidAddonFileError: If name is not a plain file name.
        """
        _validate_name(name)
        with self._lock:
            self._settings.set_display_name(name, display_name)

    def _list_library(self) -> list[str]:
        install_path = self._require_install_path()
        try:
            with os.scandir(install_path) as entries:
                names = [e.name for e in entries if _is_addon_entry(e, allow_links=False)]
        except OSError as e:
            raise LibraryReadError(f"Could not read addon library: {e}") from e
        return sorted(names)

    def _list_mounted(self) -> list[str]:
        mount_dir = self._ensure_mount_dir()
        try:
            with os.scandir(mount_dir) as entries:
                names = [e.name for e in entries if _is_addon_entry(e, allow_links=True)]
        except OSError as e:
            raise MountFolderReadError(f"Could not read addons folder: {e}") from e
        return sorted(names)

    def list_library(self) -> list[str]:
        """List addon file names stored in the library.

        Returns:
            Sorted file names.

        Raises:
            LibraryPathNotSetError: If no library path is configured.
            LibraryReadError: If the library cannot be listed.
        """
        with self._lock:
            return self._list_library()

    def list_mounted(self) -> list[str]:
        """List addon file names in the mount directory.

        Creates the mount directory if it doesn't exist. Both copies and
        links count as mounted.

        Returns:
            Sorted file names.

        Raises:
            GamePathNotFoundError: If the game path is unknown.
            MountFolderCreateError: If the mount directory cannot be created.
            MountFolderReadError: If the mount directory cannot be listed.
        """
        with self._lock:
            return self._list_mounted()

    def list_addons(self) -> list[Addon]:
        """List every addon found in the library or the mount directory.

        Returns:
            Addon records sorted by file name.
        """
        with self._lock:
            library = set(self._list_library())
            mounted = set(self._list_mounted())
            return [
                Addon(
                    name=name,
                    in_library=name in library,
                    mounted=name in mounted,
                    display_name=self._settings.get_display_name(name),
                )
                for name in sorted(library | mounted)
            ]

    # === LIFECYCLE ===

    def install(
        self,
        source: Path,
        file_name: str | None = None,
        display_name: str | None = None,
    ) -> str:
        """Copy an addon package into the library.

        An existing library file with the same name is overwritten.

        Args:
            source: Addon package to install.
            file_name: Name to store it under, defaults to the source name.
            display_name: Optional user-facing name to remember.

        Returns:
            File name the addon was stored under.

        Raises:
            LibraryPathNotSetError: If no library path is configured.
            InvalidAddonFileError: If source or file_name is not an addon package.
            LibraryWriteError: If the copy fails.
        """
        with self._lock:
            install_path = self._require_install_path()

            if not source.is_file() or source.suffix != ADDON_EXTENSION:
                raise InvalidAddonFileError(f"Invalid addon file: {source}")

            name = file_name or source.name
            _validate_name(name)
            if Path(name).suffix != ADDON_EXTENSION:
                raise InvalidAddonFileError(f"Addon file name must end with {ADDON_EXTENSION}: {name}")

            try:
                shutil.copy2(source, install_path / name)
            except OSError as e:
                raise LibraryWriteError(f"Could not write to addon library: {e}") from e

            if display_name:
                self._settings.set_display_name(name, display_name)

            logger.info("Installed %s into %s", name, install_path)
            return name

    def uninstall(self, name: str) -> None:
        """Delete an addon from the library.

        Raises:
            AddonNotInstalledError: If the addon is not in the library.
            CannotDeleteMountedAddonError: If the addon is still mounted.
            LibraryWriteError: If the file cannot be deleted.
        """
        _validate_name(name)
        with self._lock:
            library_file = self._require_install_path() / name
            mounted_file = get_mount_dir(self._require_game_path()) / name

            if not library_file.exists():
                raise AddonNotInstalledError(name)
            if _path_present(mounted_file):
                raise CannotDeleteMountedAddonError(name)

            try:
                library_file.unlink()
            except OSError as e:
                raise LibraryWriteError(f"Could not delete {name} from addon library: {e}") from e

            logger.info("Uninstalled %s", name)

    def _mount(self, name: str) -> DeployMethod:
        mount_dir = self._ensure_mount_dir()
        install_path = self._require_install_path()
        source = install_path / name
        target = mount_dir / name

        if not source.exists():
            raise AddonNotInstalledError(name)
        if _path_present(target):
            raise AddonAlreadyMountedError(name)

        method = self._settings.get_deploy_method()
        link_available = link_deployment_available(install_path, self.game_path)

        try:
            used = deploy_addon(source, target, method, link_available=link_available)
        except OSError as e:
            raise MountFolderWriteError(f"Could not write {name} to addons folder: {e}") from e

        logger.info("Mounted %s (%s)", name, used.value)
        return used

    def _unmount(self, name: str) -> None:
        mount_dir = self._ensure_mount_dir()
        install_path = self._require_install_path()
        target = mount_dir / name
        library_file = install_path / name

        if not _path_present(target):
            raise AddonNotMountedError(name)

        if not library_file.exists():
            try:
                shutil.copy2(target, library_file)
                logger.info("Backed up %s to the library before unmounting", name)
            except OSError as e:
                logger.warning("Could not back up %s to the library: %s", name, e)

        try:
            target.unlink()
        except OSError as e:
            raise MountFolderWriteError(f"Could not remove {name} from addons folder: {e}") from e

        logger.info("Unmounted %s", name)

    def mount(self, name: str) -> DeployMethod:
        """Make a library addon active in-game.

        Uses the current deploy method; link deployment falls back to a
        copy when links are not available.

        Returns:
            The deploy method actually used.

        Raises:
            AddonNotInstalledError: If the addon is not in the library.
            AddonAlreadyMountedError: If the addon is already mounted.
            MountFolderWriteError: If the copy or link cannot be created.
        """
        _validate_name(name)
        with self._lock:
            return self._mount(name)

    def unmount(self, name: str) -> None:
        """Deactivate a mounted addon.

        If the library no longer holds a copy, the mounted bytes are
        copied back first. That backup is best-effort.

        Raises:
            AddonNotMountedError: If the addon is not mounted.
            MountFolderWriteError: If the mounted entry cannot be removed.
        """
        _validate_name(name)
        with self._lock:
            self._unmount(name)

    # === CONFIGURATION ===

    def set_deploy_method(self, method: DeployMethod) -> list[str]:
        """Switch deploy method and redeploy every mounted addon.

        All mounted addons are unmounted, the new method is persisted, and
        the same addons are mounted again in name order. A remount failure
        is raised as-is: addons after it stay unmounted.

        Args:
            method: New deploy method.

        Returns:
            Names of the addons that were redeployed.
        """
        with self._lock:
            mounted = self._list_mounted()

            for name in mounted:
                self._unmount(name)

            self._settings.set_deploy_method(method)

            for name in mounted:
                self._mount(name)

            logger.info("Deploy method set to %s, redeployed %d addon(s)", method.value, len(mounted))
            return mounted

    def _migrate_library(self, old_path: Path, new_path: Path) -> None:
        try:
            with os.scandir(old_path) as it:
                entries = [e for e in it if _is_addon_entry(e, allow_links=False)]
        except OSError as e:
            logger.warning("Could not read previous addon library %s: %s", old_path, e)
            return

        for entry in entries:
            try:
                shutil.copy2(entry.path, new_path / entry.name)
            except OSError as e:
                logger.warning("Skipping %s during library migration: %s", entry.name, e)

    def set_install_path(self, install_path: Path) -> None:
        """Move the addon library to a new directory.

        Addons in the previous library are copied over on a best-effort
        basis; the previous directory is left untouched.

        Args:
            install_path: Existing directory outside the game installation.

        Raises:
            GamePathNotFoundError: If the game path is unknown.
            InvalidLibraryPathError: If the path is inside the game
                installation or is not an existing directory.
        """
        new_path = install_path.expanduser().resolve()

        with self._lock:
            old_path = self._install_path
            if old_path is not None and old_path == new_path:
                return

            game_path = self._require_game_path().resolve()
            if new_path.is_relative_to(game_path):
                raise InvalidLibraryPathError("Addon library cannot be inside the game path")
            if not new_path.is_dir():
                raise InvalidLibraryPathError(f"Addon library path does not exist: {new_path}")

            self._settings.set_install_path(new_path)
            self._install_path = new_path
            logger.info("Addon library set to %s", new_path)

            if old_path is not None:
                self._migrate_library(old_path, new_path)
