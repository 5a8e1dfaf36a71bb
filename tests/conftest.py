"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from citadelctl.core.paths import GAMEINFO_RELATIVE_PATH
from citadelctl.core.settings import SettingsStore

VANILLA_GAMEINFO = """\
"GameInfo"
{
\tgame\t\t"Citadel"
\ttitle\t\t"Citadel"
\tFileSystem
\t{
\t\t//
\t\t// The code that loads this file automatically does a few things here:
\t\t//
\t\tSearchPaths
\t\t{
\t\t\tGame\t\t\t\tcitadel
\t\t\tGame\t\t\t\tcore
\t\t}
\t}
\tConVars
\t{
\t\t"rate"\t"786432"
\t}
}
"""

MODDED_GAMEINFO = """\
"GameInfo"
{
\tgame\t\t"Citadel"
\ttitle\t\t"Citadel"
\tFileSystem
\t{
\t\t//
\t\t// The code that loads this file automatically does a few things here:
\t\t//
\t\tSearchPaths
\t\t{
\t\t\tGame\t\t\t\tcitadel/addons
\t\t\tGame\t\t\t\tcitadel
\t\t\tGame\t\t\t\tcore
\t\t\tMod\t\t\t\tcitadel
\t\t\tWrite\t\t\t\tcitadel
\t\t}
\t}
\tConVars
\t{
\t\t"rate"\t"786432"
\t}
}
"""


@pytest.fixture
def vanilla_gameinfo() -> str:
    """gameinfo.gi content as shipped with the game."""
    return VANILLA_GAMEINFO


@pytest.fixture
def modded_gameinfo() -> str:
    """gameinfo.gi content after the search paths were modded."""
    return MODDED_GAMEINFO


@pytest.fixture
def game_dir(tmp_path: Path) -> Path:
    """Fake game installation with a vanilla gameinfo.gi."""
    game = tmp_path / "Deadlock"
    gameinfo = game / GAMEINFO_RELATIVE_PATH
    gameinfo.parent.mkdir(parents=True)
    gameinfo.write_text(VANILLA_GAMEINFO, encoding="utf-8")
    return game


@pytest.fixture
def library_dir(tmp_path: Path) -> Path:
    """Empty addon library directory outside the game installation."""
    library = tmp_path / "library"
    library.mkdir()
    return library


@pytest.fixture
def config_home(tmp_path: Path) -> Iterator[Path]:
    """Point XDG_CONFIG_HOME at a temporary directory."""
    config = tmp_path / "config"
    with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(config)}):
        yield config


@pytest.fixture
def settings_store(tmp_path: Path) -> SettingsStore:
    """Settings store backed by a temporary file."""
    return SettingsStore(tmp_path / "config" / "settings.toml")


@pytest.fixture
def addon_file(tmp_path: Path) -> Path:
    """Addon package outside the library, ready to be installed."""
    downloads = tmp_path / "downloads"
    downloads.mkdir()
    addon = downloads / "pak01_dir.vpk"
    addon.write_bytes(b"VPK\x00addon-bytes")
    return addon
