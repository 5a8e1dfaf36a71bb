"""Materializing library addons in the mount directory.

Two mechanisms exist: copying the bytes, or a symbolic link pointing at
the library copy. Link deployment is only legal when the library and the
game installation live on the same volume and the platform can create
symbolic links; otherwise mounting falls back to a copy.
"""

import logging
import os
import shutil
from pathlib import Path

from citadelctl.addons.models import DeployMethod

logger = logging.getLogger(__name__)


def symlinks_supported(directory: Path) -> bool:
    """Check whether symbolic links can be created in a directory.

    Creates and removes a throwaway link. os.symlink exists everywhere but
    may still be refused, e.g. on Windows without the symlink privilege.

    Args:
        directory: Existing directory to try the link in.

    Returns:
        True if a link could be created there.
    """
    check_link = directory / f".citadelctl-link-check-{os.getpid()}"
    try:
        os.symlink(directory, check_link, target_is_directory=True)
    except (OSError, NotImplementedError) as e:
        logger.debug("Symbolic links unavailable in %s: %s", directory, e)
        return False

    try:
        check_link.unlink()
    except OSError as e:
        logger.warning("Could not remove link check %s: %s", check_link, e)
    return True


def same_volume(first: Path, second: Path) -> bool:
    """Check whether two existing paths live on the same filesystem volume.

    Returns:
        True if both paths exist and share a device, False otherwise.
    """
    try:
        return first.stat().st_dev == second.stat().st_dev
    except OSError:
        return False


def link_deployment_available(library_path: Path | None, game_path: Path | None) -> bool:
    """Check whether link deployment can be used right now.

    Evaluated on every mount; the answer is never persisted.

    Args:
        library_path: Addon library directory, None if unset.
        game_path: Game installation directory, None if not located.

    Returns:
        True if mounting may link instead of copying.
    """
    if library_path is None or game_path is None:
        return False
    if not same_volume(library_path, game_path):
        return False
    return symlinks_supported(library_path)


def deploy_addon(
    source: Path,
    target: Path,
    method: DeployMethod,
    *,
    link_available: bool,
) -> DeployMethod:
    """Place a library addon at its mount location.

    Args:
        source: Addon file in the library.
        target: Destination in the mount directory (must not exist).
        method: Requested deploy method.
        link_available: Result of link_deployment_available().

    Returns:
        The method actually used.

    Raises:
        OSError: If the copy or link cannot be created.
    """
    if method == DeployMethod.LINK and link_available:
        target.symlink_to(source.absolute())
        logger.debug("Linked %s -> %s", target, source)
        return DeployMethod.LINK

    if method == DeployMethod.LINK:
        logger.info("Link deployment unavailable, copying %s instead", source.name)

    shutil.copy2(source, target)
    logger.debug("Copied %s -> %s", source, target)
    return DeployMethod.COPY
