"""Shared exception base and precondition errors.

Every error raised by citadelctl derives from CitadelctlError so the CLI
can report it at the command boundary. Lower-level causes (usually
OSError) are chained with ``raise ... from`` rather than stringified.
"""


class CitadelctlError(Exception):
    """Base exception for all citadelctl errors."""


class PreconditionError(CitadelctlError):
    """Raised when an operation cannot start because required state is missing."""


class GamePathNotFoundError(PreconditionError):
    """Raised when the game installation could not be located."""

    def __init__(self) -> None:
        super().__init__("Game path not found")


class LibraryPathNotSetError(PreconditionError):
    """Raised when no addon library path has been configured."""

    def __init__(self) -> None:
        super().__init__("Addon library path is not set")
