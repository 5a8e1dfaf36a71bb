"""Persistent key/value settings store.

Settings are stored in ~/.config/citadelctl/settings.toml and hold the
user's addon library location, the current deploy method and the
display names given to installed addons:

    install_path = "/mnt/games/addon-library"
    deploy_method = "link"

    [addons."pak01_dir.vpk"]
    displayName = "Better HUD"
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from citadelctl.addons.models import DeployMethod
from citadelctl.core.errors import CitadelctlError
from citadelctl.core.paths import get_settings_path

logger = logging.getLogger(__name__)


class SettingsError(CitadelctlError):
    """Base exception for settings store errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


class AddonConfig(BaseModel):
    """Per-addon metadata kept in the settings store.

    Attributes:
        display_name: User-facing name shown instead of the file name.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    display_name: Annotated[
        str,
        Field(alias="displayName", description="User-facing addon name"),
    ]


class Settings(BaseModel):
    """Settings store contents.

    Attributes:
        install_path: Absolute path of the addon library, None until chosen.
        deploy_method: How addons are materialized in the mount directory.
        addons: Metadata keyed by addon file name.
    """

    model_config = ConfigDict(extra="forbid")

    install_path: Annotated[
        str | None,
        Field(description="Addon library directory"),
    ] = None
    deploy_method: Annotated[
        DeployMethod,
        Field(description="Deploy method used when mounting"),
    ] = DeployMethod.COPY
    addons: Annotated[
        dict[str, AddonConfig],
        Field(default_factory=dict, description="Addon metadata by file name"),
    ]


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    A missing file is not an error: defaults are returned so that a fresh
    installation works without any setup.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or fails validation.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    data = _settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def _settings_to_dict(settings: Settings) -> dict[str, Any]:
    """Convert Settings to a dictionary for TOML serialization.

    TOML has no null, so unset values are left out.
    """
    result: dict[str, Any] = {"deploy_method": settings.deploy_method.value}

    if settings.install_path is not None:
        result["install_path"] = settings.install_path

    if settings.addons:
        result["addons"] = {
            name: config.model_dump(by_alias=True) for name, config in settings.addons.items()
        }

    return result


class SettingsStore:
    """Loaded settings bound to their file, saved after every change.

    Attributes:
        path: Location of the backing settings file.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Load the store.

        Args:
            path: Optional override for the settings file.
                  Default: ~/.config/citadelctl/settings.toml
        """
        self.path = path or get_settings_path()
        self._settings = load_settings(self.path)

    @property
    def settings(self) -> Settings:
        """Current in-memory settings."""
        return self._settings

    def save(self) -> None:
        """Write the current settings to disk."""
        save_settings(self._settings, self.path)

    def get_install_path(self) -> Path | None:
        """Get the configured addon library path."""
        if self._settings.install_path is None:
            return None
        return Path(self._settings.install_path)

    def set_install_path(self, install_path: Path) -> None:
        """Persist a new addon library path."""
        self._settings.install_path = str(install_path)
        self.save()

    def get_deploy_method(self) -> DeployMethod:
        """Get the persisted deploy method."""
        return self._settings.deploy_method

    def set_deploy_method(self, method: DeployMethod) -> None:
        """Persist a new deploy method."""
        self._settings.deploy_method = method
        self.save()

    def get_display_name(self, file_name: str) -> str | None:
        """Get the display name stored for an addon, if any."""
        config = self._settings.addons.get(file_name)
        return config.display_name if config else None

    def set_display_name(self, file_name: str, display_name: str) -> None:
        """Store a display name for an addon, creating its entry if absent."""
        self._settings.addons[file_name] = AddonConfig(display_name=display_name)
        self.save()
