"""
Path resolution for gitspace.

Maps the logical roles of a space onto concrete paths. No I/O happens
here; callers check existence themselves.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ..domain.workspace import WorkspaceConfig


class ManagedPath(Enum):
    """Roles a resolved path can play."""
    SPACE = "space"
    CONFIG = "config"
    REPOSITORY_STORE = "repositories"
    CREDENTIAL = "credential"


class PathResolver:
    """
    Resolves ManagedPath roles for one configuration.

    Every role except CREDENTIAL resolves under the space root. The
    credential path is the override when one was given (CLI flag wins over
    config), otherwise the configured identity file, verbatim.

    Example:
        resolver = PathResolver(config)
        store = resolver.resolve(ManagedPath.REPOSITORY_STORE)  # .space/repositories
    """

    def __init__(self, config: WorkspaceConfig,
                 credential_override: Optional[Union[str, Path]] = None):
        self.config = config
        self.credential_override = credential_override

    def resolve(self, role: ManagedPath) -> Path:
        space = Path(self.config.paths.space)
        if role == ManagedPath.SPACE:
            return space
        if role == ManagedPath.CONFIG:
            return space / self.config.paths.config
        if role == ManagedPath.REPOSITORY_STORE:
            return space / self.config.paths.repositories
        if role == ManagedPath.CREDENTIAL:
            return Path(self.credential_override or self.config.ssh.identity_file)
        raise ValueError(f"Unknown path role: {role!r}")

    @property
    def space(self) -> Path:
        return self.resolve(ManagedPath.SPACE)

    @property
    def config_file(self) -> Path:
        return self.resolve(ManagedPath.CONFIG)

    @property
    def repository_store(self) -> Path:
        return self.resolve(ManagedPath.REPOSITORY_STORE)

    @property
    def credential(self) -> Path:
        return self.resolve(ManagedPath.CREDENTIAL)

    def repository_path(self, project: str) -> Path:
        """Destination directory of one project inside the store."""
        return self.repository_store / project
