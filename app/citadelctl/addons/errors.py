"""Addon operation errors.

I/O errors wrap the underlying OSError as ``__cause__``; invariant errors
name the addon so the caller can say exactly what went wrong.
"""

from citadelctl.core.errors import CitadelctlError


class AddonError(CitadelctlError):
    """Base exception for addon operations."""


# =============================================================================
# I/O errors
# =============================================================================


class MountFolderCreateError(AddonError):
    """Raised when the game's addon folder cannot be created."""


class MountFolderReadError(AddonError):
    """Raised when the game's addon folder cannot be listed."""


class MountFolderWriteError(AddonError):
    """Raised when an addon cannot be placed in or removed from the game's addon folder."""


class LibraryReadError(AddonError):
    """Raised when the addon library cannot be listed."""


class LibraryWriteError(AddonError):
    """Raised when an addon cannot be written to or removed from the library."""


# =============================================================================
# Invariant violations
# =============================================================================


class InvalidAddonFileError(AddonError):
    """Raised when a file is missing or is not an addon package."""


class InvalidLibraryPathError(AddonError):
    """Raised when a library location is rejected."""


class AddonNotInstalledError(AddonError):
    """Raised when an addon is not in the library."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Addon is not installed in the library: {name}")
        self.name = name


class AddonAlreadyMountedError(AddonError):
    """Raised when mounting an addon that is already mounted."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Addon is already mounted: {name}")
        self.name = name


class AddonNotMountedError(AddonError):
    """Raised when unmounting an addon that is not mounted."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Addon is not mounted: {name}")
        self.name = name


class CannotDeleteMountedAddonError(AddonError):
    """Raised when uninstalling an addon that is still mounted."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Cannot delete a mounted addon, unmount it first: {name}")
        self.name = name
