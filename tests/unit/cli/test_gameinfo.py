"""Unit tests for gameinfo CLI commands.

Tests for the citadelctl gameinfo state, mod and reset commands.
"""

import os
from pathlib import Path
from unittest.mock import patch

from citadelctl.cli.main import app
from citadelctl.core.game import GAME_PATH_ENV
from citadelctl.core.paths import GAMEINFO_RELATIVE_PATH
from citadelctl.gameinfo.models import SearchPathsState
from citadelctl.gameinfo.patcher import SearchPathsPatcher
from typer.testing import CliRunner

runner = CliRunner()


def _invoke(game_dir: Path, *args: str):
    """Run the CLI against the fake game installation."""
    return runner.invoke(app, ["--game-path", str(game_dir), "gameinfo", *args])


class TestGameinfoState:
    """Tests for citadelctl gameinfo state command."""

    def test_vanilla(self, game_dir: Path, config_home: Path) -> None:
        """A shipped gameinfo.gi is reported as vanilla."""
        result = _invoke(game_dir, "state")

        assert result.exit_code == 0
        assert "Search paths: vanilla" in result.stdout
        assert "gameinfo mod" in result.stdout

    def test_modded(self, game_dir: Path, config_home: Path, modded_gameinfo: str) -> None:
        """A modded gameinfo.gi is reported as modded."""
        (game_dir / GAMEINFO_RELATIVE_PATH).write_text(modded_gameinfo, encoding="utf-8")

        result = _invoke(game_dir, "state")

        assert result.exit_code == 0
        assert "Search paths: modded" in result.stdout

    def test_missing_gameinfo(self, tmp_path: Path, config_home: Path) -> None:
        """A game path without gameinfo.gi fails."""
        result = _invoke(tmp_path / "empty", "state")

        assert result.exit_code == 1
        assert "Could not read gameinfo.gi" in result.stderr

    def test_game_not_found(self, config_home: Path) -> None:
        """Without a game path and no Steam install the command fails."""
        with (
            patch.dict(os.environ),
            patch("citadelctl.core.game.get_steam_roots", return_value=[]),
        ):
            os.environ.pop(GAME_PATH_ENV, None)
            result = runner.invoke(app, ["gameinfo", "state"])

        assert result.exit_code == 1
        assert "Game path not found" in result.stderr

    def test_game_path_from_environment(self, game_dir: Path, config_home: Path) -> None:
        """The game path can come from the environment."""
        with patch.dict(os.environ, {GAME_PATH_ENV: str(game_dir)}):
            result = runner.invoke(app, ["gameinfo", "state"])

        assert result.exit_code == 0
        assert "vanilla" in result.stdout


class TestGameinfoMod:
    """Tests for citadelctl gameinfo mod command."""

    def test_mod_vanilla(self, game_dir: Path, config_home: Path) -> None:
        """Modding a vanilla file enables addon loading."""
        result = _invoke(game_dir, "mod")

        assert result.exit_code == 0
        assert "Search paths are modded" in result.stdout
        assert SearchPathsPatcher(game_dir).get_state() == SearchPathsState.MODDED

    def test_mod_custom(self, game_dir: Path, config_home: Path) -> None:
        """Custom search paths are left alone."""
        path = game_dir / GAMEINFO_RELATIVE_PATH
        path.write_text("SearchPaths\n{\n\tGame citadel\n}\n", encoding="utf-8")
        before = path.read_bytes()

        result = _invoke(game_dir, "mod")

        assert result.exit_code == 0
        assert "customized" in result.stderr
        assert path.read_bytes() == before


class TestGameinfoReset:
    """Tests for citadelctl gameinfo reset command."""

    def test_reset_with_yes(self, game_dir: Path, config_home: Path) -> None:
        """--yes resets without prompting."""
        SearchPathsPatcher(game_dir).mod()

        result = _invoke(game_dir, "reset", "--yes")

        assert result.exit_code == 0
        assert "restored to vanilla" in result.stdout
        assert SearchPathsPatcher(game_dir).get_state() == SearchPathsState.VANILLA

    def test_reset_declined(self, game_dir: Path, config_home: Path) -> None:
        """Declining the prompt leaves the file unchanged."""
        patcher = SearchPathsPatcher(game_dir)
        patcher.mod()

        result = runner.invoke(
            app, ["--game-path", str(game_dir), "gameinfo", "reset"], input="n\n"
        )

        assert result.exit_code == 0
        assert "Aborted" in result.stdout
        assert patcher.get_state() == SearchPathsState.MODDED

    def test_reset_confirmed(self, game_dir: Path, config_home: Path) -> None:
        """Confirming the prompt resets the file."""
        patcher = SearchPathsPatcher(game_dir)
        patcher.mod()

        result = runner.invoke(
            app, ["--game-path", str(game_dir), "gameinfo", "reset"], input="y\n"
        )

        assert result.exit_code == 0
        assert patcher.get_state() == SearchPathsState.VANILLA
