"""Addon library and deployment module.

This module provides the addon models, deployment helpers, error types
and the AddonManager that enforces the install/mount lifecycle.
"""

from citadelctl.addons.deploy import deploy_addon, link_deployment_available
from citadelctl.addons.errors import (
    AddonAlreadyMountedError,
    AddonError,
    AddonNotInstalledError,
    AddonNotMountedError,
    CannotDeleteMountedAddonError,
    InvalidAddonFileError,
    InvalidLibraryPathError,
)
from citadelctl.addons.manager import AddonManager
from citadelctl.addons.models import ADDON_EXTENSION, Addon, AddonState, DeployMethod

__all__ = [
    "ADDON_EXTENSION",
    "Addon",
    "AddonAlreadyMountedError",
    "AddonError",
    "AddonManager",
    "AddonNotInstalledError",
    "AddonNotMountedError",
    "AddonState",
    "CannotDeleteMountedAddonError",
    "DeployMethod",
    "InvalidAddonFileError",
    "InvalidLibraryPathError",
    "deploy_addon",
    "link_deployment_available",
]
