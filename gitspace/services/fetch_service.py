"""
Repository fetching for gitspace.

Clones one configured repository into the repository store, or skips it
when its destination is already populated.

Known limitation: a populated destination is never updated. There is no
fetch or pull of existing clones; remove the directory (or the whole
store) to get a fresh copy.
"""

import logging
import shutil
import threading
from pathlib import Path
from typing import Optional, Union

from ..domain.outcome import CloneOutcome
from ..domain.workspace import RepositorySpec
from ..exit_codes import AuthError, FilesystemError, GitspaceError, NetworkError, PathError
from ..infra.credentials import CredentialProvider
from ..infra.git_client import GitClient, classify_failure

logger = logging.getLogger(__name__)

ALREADY_PRESENT = "already present"


def username_from_uri(uri: str) -> str:
    """
    Extract the login name from an scp-style or ssh:// URI.

    git@github.com:acme/widgets -> git
    """
    location = uri.split("://", 1)[-1]
    host_part = location.split("/", 1)[0].split(":", 1)[0]
    if "@" in host_part:
        return host_part.rsplit("@", 1)[0]
    return "git"


class RepositoryFetcher:
    """
    Idempotent clone-or-skip for a single repository.

    Example:
        fetcher = RepositoryFetcher("github.com", SshKeyProvider("~/.ssh/id_rsa"))
        outcome = fetcher.fetch(RepositorySpec("acme", "widgets"), Path(".space/repositories"))
    """

    def __init__(
        self,
        host_name: str,
        credentials: CredentialProvider,
        git_client: Optional[GitClient] = None,
    ):
        """
        Args:
            host_name: DNS name of the remote (ssh.hostName)
            credentials: Provider consulted with the URI's username
            git_client: GitClient instance (creates new if None)
        """
        self.host_name = host_name
        self.credentials = credentials
        self.git = git_client or GitClient()

    def fetch(
        self,
        repo: RepositorySpec,
        store_root: Union[str, Path],
        cancel_event: Optional[threading.Event] = None,
    ) -> CloneOutcome:
        """
        Clone repo into {store_root}/{project} unless already populated.

        Never raises for per-repository problems: they come back as a
        Failed outcome.
        """
        store_root = Path(store_root)
        destination = store_root / repo.project

        def failed(error: GitspaceError) -> CloneOutcome:
            logger.debug(f"{repo.full_name}: {type(error).__name__}: {error}")
            return CloneOutcome.failed(repo.namespace, repo.project, destination, error)

        if not store_root.is_dir():
            return failed(PathError(
                f"Repository store {store_root} does not exist. Run 'gitspace init' first."
            ))

        try:
            created = not destination.exists()
            if not created:
                if not destination.is_dir():
                    return failed(FilesystemError(
                        f"{destination} exists and is not a directory"
                    ))
                if any(destination.iterdir()):
                    logger.debug(f"{repo.full_name}: {destination} is not empty, skipping")
                    return CloneOutcome.skipped(
                        repo.namespace, repo.project, destination, ALREADY_PRESENT
                    )
        except OSError as e:
            return failed(FilesystemError(f"Cannot inspect {destination}: {e}"))

        if cancel_event is not None and cancel_event.is_set():
            return failed(NetworkError("sync cancelled before clone started"))

        uri = repo.remote_uri(self.host_name)
        try:
            credential = self.credentials.resolve(username_from_uri(uri))
        except AuthError as e:
            return failed(e)

        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return failed(FilesystemError(f"Cannot create {destination}: {e}"))

        logger.info(f"Cloning {uri} into {destination}")
        result = self.git.clone(uri, destination, credential, cancel_event=cancel_event)

        if result.ok:
            return CloneOutcome.cloned(repo.namespace, repo.project, destination)

        self._discard(destination, created)

        message = f"Failed to clone {uri}: {result.output or 'unknown error'}"
        if result.timed_out or result.cancelled:
            return failed(NetworkError(message))
        if classify_failure(result.output) == "auth":
            return failed(AuthError(message))
        return failed(NetworkError(message))

    def _discard(self, destination: Path, created: bool) -> None:
        """
        Undo a failed clone so an empty directory never reads as a success.

        A directory this run created is removed entirely; a pre-existing
        empty one is emptied but kept.
        """
        if not destination.exists():
            return
        try:
            if created:
                shutil.rmtree(destination)
            else:
                for child in destination.iterdir():
                    if child.is_dir() and not child.is_symlink():
                        shutil.rmtree(child)
                    else:
                        child.unlink()
        except OSError as e:
            logger.warning(f"Could not clean up partial clone at {destination}: {e}")
