"""
Symlink projection for gitspace.

Exposes cloned projects in a caller-chosen directory (usually the working
directory) as symlinks into the repository store, without copying data.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Union

from ..domain.outcome import LinkStatus, SymlinkEntry
from ..domain.workspace import RepositorySpec
from ..exit_codes import FilesystemError, PartialRemovalError

logger = logging.getLogger(__name__)


class SymlinkProjector:
    """
    Creates and removes project symlinks in a target directory.

    Only names belonging to the configured projects are ever touched:
    real files are never overwritten and unrelated symlinks are never
    removed.

    Example:
        projector = SymlinkProjector(config.repositories)
        entries = projector.project(store_root, Path.cwd())
        removed = projector.remove(Path.cwd())
    """

    def __init__(self, repositories: Iterable[RepositorySpec]):
        self.repositories = list(repositories)

    @property
    def project_names(self) -> List[str]:
        return [repo.project for repo in self.repositories]

    def project(
        self,
        store_root: Union[str, Path],
        target_dir: Union[str, Path],
    ) -> List[SymlinkEntry]:
        """
        Create {target_dir}/{project} -> {store_root}/{project} for every project.

        Link targets are absolute so the links keep working if the target
        directory is moved.

        Returns:
            One SymlinkEntry per repository, in configuration order
        """
        store_root = Path(store_root).absolute()
        target_dir = Path(target_dir)
        entries = []

        for repo in self.repositories:
            source = store_root / repo.project
            link_path = target_dir / repo.project
            entry = SymlinkEntry(source=source, destination=link_path)

            try:
                if link_path.is_symlink():
                    if Path(os.readlink(link_path)) == source or link_path.resolve() == source.resolve():
                        entry.status = LinkStatus.EXISTING
                    else:
                        entry.status = LinkStatus.FAILED
                        entry.error = FilesystemError(
                            f"{link_path} is a symlink to {os.readlink(link_path)}, not {source}"
                        )
                elif link_path.exists():
                    entry.status = LinkStatus.FAILED
                    entry.error = FilesystemError(
                        f"Path exists and is not a symlink: {link_path}"
                    )
                else:
                    link_path.symlink_to(source, target_is_directory=True)
                    entry.status = LinkStatus.CREATED
                    logger.debug(f"Linked {link_path} -> {source}")
            except OSError as e:
                logger.error(f"Failed to link {repo.project}: {e}")
                entry.status = LinkStatus.FAILED
                entry.error = FilesystemError(f"Cannot create {link_path}: {e}")

            entries.append(entry)

        return entries

    def remove(self, target_dir: Union[str, Path]) -> int:
        """
        Remove symlinks in target_dir named after a configured project.

        Regular files and directories with a project's name, and symlinks
        with any other name, are left alone.

        Returns:
            Number of symlinks removed

        Raises:
            PartialRemovalError: one or more matching symlinks could not be
                removed; every other match was still removed and the
                error carries both counts
        """
        target_dir = Path(target_dir)
        if not target_dir.is_dir():
            return 0

        names = set(self.project_names)
        removed = 0
        errors = []
        for path in sorted(target_dir.iterdir()):
            if path.name not in names or not path.is_symlink():
                continue
            try:
                path.unlink()
            except OSError as e:
                logger.error(f"Cannot remove symlink {path}: {e}")
                errors.append(f"{path}: {e}")
                continue
            logger.debug(f"Removed symlink {path}")
            removed += 1

        if errors:
            raise PartialRemovalError(
                f"Removed {removed} symlink(s), could not remove {len(errors)}: "
                + "; ".join(errors),
                removed=removed,
                failed=len(errors),
            )
        return removed
