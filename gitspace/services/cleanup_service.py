"""
Cleanup of managed resources for gitspace.

Every operation here is destructive. Cleanup must not run while a sync
against the same space is in flight; this is a usage precondition of the
single-operator tool, not something enforced with a lock.
"""

import logging
import shutil
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ..domain.outcome import CleanupResult, CleanupStatus
from ..domain.workspace import WorkspaceConfig
from ..exit_codes import FilesystemError, GitspaceError, PartialRemovalError
from .link_service import SymlinkProjector
from .path_resolver import ManagedPath, PathResolver

logger = logging.getLogger(__name__)


class CleanTarget(Enum):
    """Resources that can be cleaned. The SSH key is deliberately absent."""
    SPACE = "space"
    CONFIG = "config"
    REPOSITORIES = "repositories"
    SYMLINKS = "symlinks"


class CleanupManager:
    """
    Removes one managed resource at a time and reports what happened.

    A resource that does not exist is reported as ABSENT, which counts as
    success. Any OS failure is reported as FAILED with a FilesystemError.

    Example:
        manager = CleanupManager(config, symlink_dir=Path.cwd())
        result = manager.clean(CleanTarget.REPOSITORIES)
        if not result.success:
            print(result.error)
    """

    def __init__(
        self,
        config: WorkspaceConfig,
        symlink_dir: Optional[Union[str, Path]] = None,
    ):
        """
        Args:
            config: Configuration naming the space and the projects
            symlink_dir: Directory holding projected symlinks (default: cwd)
        """
        self.config = config
        self.paths = PathResolver(config)
        self.symlink_dir = Path(symlink_dir) if symlink_dir is not None else Path.cwd()

    def path_for(self, target: CleanTarget) -> Path:
        if target == CleanTarget.SPACE:
            return self.paths.resolve(ManagedPath.SPACE)
        if target == CleanTarget.CONFIG:
            return self.paths.resolve(ManagedPath.CONFIG)
        if target == CleanTarget.REPOSITORIES:
            return self.paths.resolve(ManagedPath.REPOSITORY_STORE)
        return self.symlink_dir

    def clean(self, target: CleanTarget) -> CleanupResult:
        """Remove the resource named by target."""
        path = self.path_for(target)

        try:
            if target == CleanTarget.SYMLINKS:
                return self._clean_symlinks(path)
            return self._remove_path(target, path)
        except GitspaceError as e:
            logger.error(str(e))
            return CleanupResult(target.value, path, CleanupStatus.FAILED, error=e)

    def _remove_path(self, target: CleanTarget, path: Path) -> CleanupResult:
        if not path.exists() and not path.is_symlink():
            logger.info(f"{path} does not exist, nothing to remove")
            return CleanupResult(target.value, path, CleanupStatus.ABSENT)

        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except FileNotFoundError:
            return CleanupResult(target.value, path, CleanupStatus.ABSENT)
        except OSError as e:
            raise FilesystemError(f"Cannot remove {path}: {e}") from e

        logger.info(f"Removed {target.value} at {path}")
        return CleanupResult(target.value, path, CleanupStatus.REMOVED)

    def _clean_symlinks(self, path: Path) -> CleanupResult:
        if not path.is_dir():
            return CleanupResult(CleanTarget.SYMLINKS.value, path, CleanupStatus.ABSENT)

        try:
            removed = SymlinkProjector(self.config.repositories).remove(path)
        except PartialRemovalError as e:
            logger.error(str(e))
            return CleanupResult(
                CleanTarget.SYMLINKS.value, path, CleanupStatus.FAILED,
                removed_count=e.removed, error=e,
            )
        except OSError as e:
            raise FilesystemError(f"Cannot scan {path}: {e}") from e

        status = CleanupStatus.REMOVED if removed else CleanupStatus.ABSENT
        logger.info(f"Removed {removed} symlink(s) from {path}")
        return CleanupResult(CleanTarget.SYMLINKS.value, path, status, removed_count=removed)
