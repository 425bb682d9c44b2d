"""
Sync orchestration for gitspace.

Clones every configured repository into the repository store, one
outcome per repository. Used by the `gitspace sync` command.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Generator, List, Optional, Union

from ..domain.outcome import CloneOutcome, CloneStatus, SyncSummary
from ..domain.workspace import RepositorySpec, WorkspaceConfig
from ..exit_codes import GitspaceError, PathError
from ..infra.credentials import CredentialProvider, SshKeyProvider
from ..infra.git_client import GitClient
from .fetch_service import RepositoryFetcher
from .path_resolver import PathResolver

logger = logging.getLogger(__name__)


@dataclass
class SyncOptions:
    """Options for a sync run."""
    parallel: int = 1  # Number of concurrent clones (1 = sequential)
    timeout: Optional[float] = None  # Run-level timeout in seconds


class SyncOrchestrator:
    """
    Drives one sync run over the configured repositories.

    Failures are isolated per repository: a repository that cannot be
    cloned is recorded as Failed and the run moves on. Only a missing
    repository store aborts the run, before anything is touched.

    Example:
        orchestrator = SyncOrchestrator(config, credential_override="~/.ssh/deploy")

        for progress in orchestrator.run(SyncOptions(parallel=4)):
            print(progress)  # "Cloning widgets..."

        result = orchestrator.last_result
        print(f"Cloned {result.cloned} repos")
    """

    def __init__(
        self,
        config: WorkspaceConfig,
        credential_override: Optional[Union[str, Path]] = None,
        git_client: Optional[GitClient] = None,
        credentials: Optional[CredentialProvider] = None,
    ):
        """
        Initialize SyncOrchestrator.

        Args:
            config: Workspace configuration (immutable for the run)
            credential_override: SSH key path taking precedence over ssh.identityFile
            git_client: GitClient instance (creates new if None)
            credentials: Credential provider (SSH key provider for the
                effective key path if None)
        """
        self.config = config
        self.paths = PathResolver(config, credential_override)
        self.git = git_client or GitClient()
        self.credentials = credentials or SshKeyProvider(self.paths.credential)
        self.last_result: Optional[SyncSummary] = None

    def sync(self, options: Optional[SyncOptions] = None) -> List[CloneOutcome]:
        """Run to completion and return the outcomes in configuration order."""
        for _ in self.run(options or SyncOptions()):
            pass
        return self.last_result.outcomes

    def run(self, options: SyncOptions) -> Generator[str, None, SyncSummary]:
        """
        Clone all configured repositories.

        Yields progress messages, returns SyncSummary.

        Raises:
            PathError: the repository store does not exist
        """
        result = SyncSummary()
        self.last_result = result

        store_root = self.paths.repository_store
        if not store_root.is_dir():
            raise PathError(
                f"Repository store {store_root} does not exist. Run 'gitspace init' first."
            )

        repos = list(self.config.repositories)
        if not repos:
            yield "No repositories configured"
            return result

        yield f"Using SSH key {self.paths.credential}"

        fetcher = RepositoryFetcher(self.config.ssh.host_name, self.credentials, self.git)
        cancel_event = threading.Event()
        timer = None
        if options.timeout:
            timer = threading.Timer(options.timeout, self._expire, args=(cancel_event, options.timeout))
            timer.daemon = True
            timer.start()

        try:
            workers = min(max(options.parallel, 1), len(repos))
            if workers > 1:
                outcomes = yield from self._sync_parallel(repos, fetcher, store_root, workers, cancel_event)
            else:
                outcomes = yield from self._sync_sequential(repos, fetcher, store_root, cancel_event)
        finally:
            if timer is not None:
                timer.cancel()

        for outcome in outcomes:
            result.add_outcome(outcome)

        return result

    @staticmethod
    def _expire(cancel_event: threading.Event, timeout: float) -> None:
        logger.warning(f"Sync timeout of {timeout:g}s reached, cancelling remaining clones")
        cancel_event.set()

    def _fetch_one(
        self,
        fetcher: RepositoryFetcher,
        repo: RepositorySpec,
        store_root: Path,
        cancel_event: threading.Event,
    ) -> CloneOutcome:
        try:
            return fetcher.fetch(repo, store_root, cancel_event=cancel_event)
        except Exception as e:
            # continue-on-error: an unexpected bug in one clone must not end the run
            logger.exception(f"Unexpected error while syncing {repo.full_name}")
            return CloneOutcome.failed(
                repo.namespace, repo.project, store_root / repo.project,
                GitspaceError(f"Unexpected error: {e}")
            )

    def _sync_sequential(
        self,
        repos: List[RepositorySpec],
        fetcher: RepositoryFetcher,
        store_root: Path,
        cancel_event: threading.Event,
    ) -> Generator[str, None, List[CloneOutcome]]:
        """Fetch repos one after another."""
        outcomes = []
        for repo in repos:
            yield f"Syncing {repo.full_name}..."
            outcome = self._fetch_one(fetcher, repo, store_root, cancel_event)
            outcomes.append(outcome)
            yield self._describe(outcome)
        return outcomes

    def _sync_parallel(
        self,
        repos: List[RepositorySpec],
        fetcher: RepositoryFetcher,
        store_root: Path,
        workers: int,
        cancel_event: threading.Event,
    ) -> Generator[str, None, List[CloneOutcome]]:
        """Fetch repos on a bounded worker pool; outcomes keep input order."""
        yield f"Syncing {len(repos)} repos (parallel={workers})..."

        outcomes: List[Optional[CloneOutcome]] = [None] * len(repos)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(self._fetch_one, fetcher, repo, store_root, cancel_event): index
                for index, repo in enumerate(repos)
            }

            # Results come back through the futures to this thread only
            for future in as_completed(futures):
                outcome = future.result()
                outcomes[futures[future]] = outcome
                yield self._describe(outcome)

        return outcomes

    @staticmethod
    def _describe(outcome: CloneOutcome) -> str:
        name = f"{outcome.namespace}/{outcome.project}"
        if outcome.status == CloneStatus.CLONED:
            return f"  ✓ {name}: cloned into {outcome.destination}"
        if outcome.status == CloneStatus.SKIPPED:
            return f"  - {name}: skipped ({outcome.reason})"
        return f"  ✗ {name}: {outcome.error}"
