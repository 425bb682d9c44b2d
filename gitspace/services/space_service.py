"""
Space lifecycle for gitspace: initialization and status.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..config import load_config, save_config
from ..domain.workspace import WorkspaceConfig
from ..exit_codes import FilesystemError
from ..infra.git_client import GitClient
from .path_resolver import PathResolver

logger = logging.getLogger(__name__)


@dataclass
class InitResult:
    """Result of initializing a space."""
    space: Path
    config_path: Path
    repository_store: Path
    config_written: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'space': str(self.space),
            'config': str(self.config_path),
            'repositories': str(self.repository_store),
            'config_written': self.config_written,
        }


@dataclass
class RepositoryState:
    """Local state of one configured repository."""
    namespace: str
    project: str
    path: Path
    state: str  # cloned, present, empty, missing
    linked: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'namespace': self.namespace,
            'project': self.project,
            'path': str(self.path),
            'state': self.state,
            'linked': self.linked,
        }


class SpaceService:
    """
    Creates a space and reports on its contents.

    Example:
        service = SpaceService(config)
        service.init()
        for state in service.status(link_dir=Path.cwd()):
            print(state.project, state.state)
    """

    def __init__(self, config: WorkspaceConfig, git_client: Optional[GitClient] = None):
        self.config = config
        self.paths = PathResolver(config)
        self.git = git_client or GitClient()

    def init(self, force: bool = False) -> InitResult:
        """
        Create the repository store and write the config document.

        An existing config document is left untouched unless force is set,
        so running init twice is a no-op the second time. In that case the
        store named by the existing document is created, not the default one.

        Raises:
            ConfigError: the existing config document cannot be loaded
            FilesystemError: the store or config could not be created
        """
        config_path = self.paths.config_file
        paths = self.paths

        keep_existing = config_path.exists() and not force
        if keep_existing:
            paths = PathResolver(load_config(config_path))
            logger.info(f"Configuration already exists at {config_path}, leaving it unchanged")

        store = paths.repository_store
        try:
            store.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"Cannot create repository store {store}: {e}") from e

        if not keep_existing:
            save_config(self.config, config_path)

        return InitResult(
            space=paths.space,
            config_path=config_path,
            repository_store=store,
            config_written=not keep_existing,
        )

    def status(self, link_dir: Optional[Union[str, Path]] = None) -> List[RepositoryState]:
        """Report the local state of every configured repository."""
        states = []
        for repo in self.config.repositories:
            path = self.paths.repository_path(repo.project)
            if not path.is_dir():
                state = "missing"
            elif self.git.is_git_repo(path):
                state = "cloned"
            elif any(path.iterdir()):
                state = "present"
            else:
                state = "empty"

            linked = False
            if link_dir is not None:
                link_path = Path(link_dir) / repo.project
                linked = link_path.is_symlink() and link_path.resolve() == path.resolve()

            states.append(RepositoryState(repo.namespace, repo.project, path, state, linked))
        return states
