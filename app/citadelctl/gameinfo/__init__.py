"""gameinfo.gi search path handling.

This module provides classification of the SearchPaths block and the
patcher that switches it between the vanilla and modded layouts.
"""

from citadelctl.gameinfo.models import (
    MODDED_SEARCH_PATHS,
    VANILLA_SEARCH_PATHS,
    SearchPaths,
    SearchPathsState,
    classify_search_paths,
)
from citadelctl.gameinfo.patcher import (
    GameInfoReadError,
    GameInfoWriteError,
    SearchPathsError,
    SearchPathsParseError,
    SearchPathsPatcher,
)

__all__ = [
    "MODDED_SEARCH_PATHS",
    "VANILLA_SEARCH_PATHS",
    "GameInfoReadError",
    "GameInfoWriteError",
    "SearchPaths",
    "SearchPathsError",
    "SearchPathsParseError",
    "SearchPathsPatcher",
    "SearchPathsState",
    "classify_search_paths",
]
