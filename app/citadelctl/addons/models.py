"""Addon domain models.

This module defines the data structures describing addons found in the
library and mount directories, and the deployment methods used to
materialize a library addon into the mount directory.
"""

from dataclasses import dataclass
from enum import Enum

# Only files with this suffix are treated as addon packages.
ADDON_EXTENSION = ".vpk"


class DeployMethod(str, Enum):
    """Mechanism used to place a library addon into the mount directory.

    Attributes:
        COPY: Duplicate the addon bytes into the mount directory.
        LINK: Create a symbolic link pointing at the library copy.
    """

    COPY = "copy"
    LINK = "link"


class AddonState(str, Enum):
    """Lifecycle state of an addon, derived from its presence flags.

    Attributes:
        UNKNOWN: Neither in the library nor mounted.
        IN_LIBRARY: Stored in the library only.
        LIBRARY_AND_MOUNTED: Stored in the library and active in-game.
        MOUNTED_ONLY: Active in-game but its library copy is gone.
    """

    UNKNOWN = "unknown"
    IN_LIBRARY = "in_library"
    LIBRARY_AND_MOUNTED = "library_and_mounted"
    MOUNTED_ONLY = "mounted_only"


@dataclass(frozen=True, slots=True)
class Addon:
    """An addon known to citadelctl, keyed by its file name.

    The two presence flags are independent: a copy-deployed addon has
    bytes in both directories, and a link-deployed addon's mounted entry
    is a link that still counts as present.

    Attributes:
        name: File name, unique within the library and the mount directory.
        in_library: Whether the library holds a copy.
        mounted: Whether the mount directory holds a file or link.
        display_name: User-facing name from the settings store, if any.
    """

    name: str
    in_library: bool
    mounted: bool
    display_name: str | None = None

    def __post_init__(self) -> None:
        """Validate addon data after initialization."""
        if not self.name:
            msg = "Addon name cannot be empty"
            raise ValueError(msg)

    @property
    def state(self) -> AddonState:
        """Lifecycle state derived from the presence flags."""
        if self.in_library and self.mounted:
            return AddonState.LIBRARY_AND_MOUNTED
        if self.in_library:
            return AddonState.IN_LIBRARY
        if self.mounted:
            return AddonState.MOUNTED_ONLY
        return AddonState.UNKNOWN

    @property
    def label(self) -> str:
        """Display name, falling back to the file name."""
        return self.display_name or self.name
