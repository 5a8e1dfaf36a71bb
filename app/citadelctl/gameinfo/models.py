"""Search path block models and classification.

The game's gameinfo.gi contains a ``SearchPaths`` block listing the
directories the content loader searches, in load order. Modding the game
means prepending the addon mount directory and pointing the ``Mod`` and
``Write`` keys at the game's content root.
"""

from dataclasses import dataclass
from enum import Enum


class SearchPathsState(str, Enum):
    """Classification of the current SearchPaths block.

    Attributes:
        VANILLA: Shipped configuration, addons are not loaded.
        MODDED: Configuration written by citadelctl, addons are loaded.
        CUSTOM: Anything else, e.g. edited by hand or by another tool.
    """

    VANILLA = "vanilla"
    MODDED = "modded"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class SearchPaths:
    """Contents of the SearchPaths block.

    Attributes:
        entries: ``Game`` values in load order (duplicates preserved).
        mod_key: ``Mod`` value, present only on blocks adapted for addons.
        write_key: ``Write`` value, present only alongside ``mod_key``.
    """

    entries: tuple[str, ...]
    mod_key: str | None = None
    write_key: str | None = None


VANILLA_SEARCH_PATHS = SearchPaths(entries=("citadel", "core"))

MODDED_SEARCH_PATHS = SearchPaths(
    entries=("citadel/addons", "citadel", "core"),
    mod_key="citadel",
    write_key="citadel",
)


def classify_search_paths(search_paths: SearchPaths) -> SearchPathsState:
    """Classify a SearchPaths block by exact structural match.

    Only the two canonical shapes are recognized; a block with the right
    number of entries but different values is CUSTOM.

    Args:
        search_paths: Parsed block contents.

    Returns:
        The block's classification.
    """
    if search_paths == VANILLA_SEARCH_PATHS:
        return SearchPathsState.VANILLA
    if search_paths == MODDED_SEARCH_PATHS:
        return SearchPathsState.MODDED
    return SearchPathsState.CUSTOM
