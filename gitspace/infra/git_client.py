"""
Git client infrastructure for gitspace.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic
"""

import os
import shlex
import subprocess
import threading
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Union
from pathlib import Path
import logging

from .credentials import SshKeyCredential

logger = logging.getLogger(__name__)

# How often a running command checks for cancellation
POLL_INTERVAL = 0.2

# git/ssh diagnostics that mean the remote refused us rather than being unreachable
AUTH_FAILURE_MARKERS = (
    "permission denied",
    "host key verification failed",
    "authentication failed",
    "could not read from remote repository",
    "load key",
    "invalid format",
    "bad permissions",
)
NETWORK_FAILURE_MARKERS = (
    "could not resolve hostname",
    "connection refused",
    "connection timed out",
    "network is unreachable",
    "no route to host",
    "connection reset",
    "timed out",
    "cancelled",
)


@dataclass
class GitResult:
    """Result of one git invocation."""
    returncode: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out and not self.cancelled

    @property
    def output(self) -> str:
        """Combined diagnostics, most useful part first."""
        if self.timed_out:
            return "git command timed out"
        if self.cancelled:
            return "git command cancelled"
        return (self.stderr or self.stdout).strip()


def classify_failure(output: str) -> str:
    """
    Classify a failed transport as 'auth' or 'network'.

    Network markers are checked first: "Could not read from remote
    repository" is printed after DNS failures too.
    """
    text = output.lower()
    if any(marker in text for marker in NETWORK_FAILURE_MARKERS):
        return "network"
    if any(marker in text for marker in AUTH_FAILURE_MARKERS):
        return "auth"
    return "network"


def build_ssh_command(credential: SshKeyCredential) -> str:
    """Build the GIT_SSH_COMMAND that pins git to one private key."""
    return " ".join([
        "ssh",
        "-i", shlex.quote(str(credential.private_key)),
        "-l", shlex.quote(credential.username),
        "-o", "IdentitiesOnly=yes",
        "-o", "BatchMode=yes",
        "-o", "StrictHostKeyChecking=accept-new",
    ])


class GitClient:
    """
    Abstraction over git commands.

    Example:
        client = GitClient(timeout=600)
        result = client.clone("git@github.com:acme/widgets", Path(".space/repositories/widgets"), credential)
        if not result.ok:
            print(result.output)
    """

    def __init__(self, timeout: Optional[float] = 600, git_executable: str = "git"):
        """
        Initialize GitClient.

        Args:
            timeout: Per-command timeout in seconds (None disables it)
            git_executable: git binary to invoke
        """
        self.timeout = timeout
        self.git_executable = git_executable

    def _run(
        self,
        args: List[str],
        cwd: Optional[Union[str, Path]] = None,
        env: Optional[Dict[str, str]] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> GitResult:
        """
        Run a git command.

        The process is killed if it outlives the timeout or if cancel_event
        is set while it runs.

        Args:
            args: Arguments after the git executable
            cwd: Working directory
            env: Extra environment variables
            cancel_event: Event that aborts the command when set

        Returns:
            GitResult with exit status and captured output
        """
        cmd = [self.git_executable] + args
        run_env = os.environ.copy()
        run_env["GIT_TERMINAL_PROMPT"] = "0"
        if env:
            run_env.update(env)

        logger.debug(f"Running: {' '.join(shlex.quote(a) for a in cmd)}")

        try:
            proc = subprocess.Popen(
                cmd,
                cwd=cwd,
                env=run_env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            logger.error(f"Could not start git: {e}")
            return GitResult(returncode=-1, stderr=str(e))

        deadline = time.monotonic() + self.timeout if self.timeout else None
        while True:
            try:
                stdout, stderr = proc.communicate(timeout=POLL_INTERVAL)
                return GitResult(returncode=proc.returncode, stdout=stdout, stderr=stderr)
            except subprocess.TimeoutExpired:
                timed_out = deadline is not None and time.monotonic() >= deadline
                cancelled = cancel_event is not None and cancel_event.is_set()
                if timed_out or cancelled:
                    proc.kill()
                    stdout, stderr = proc.communicate()
                    if timed_out:
                        logger.warning(f"Git command timed out: {' '.join(cmd)}")
                    return GitResult(
                        returncode=-1,
                        stdout=stdout,
                        stderr=stderr,
                        timed_out=timed_out,
                        cancelled=cancelled and not timed_out,
                    )

    def is_git_repo(self, path: Union[str, Path]) -> bool:
        """Check if path is a git repository."""
        git_dir = Path(path) / ".git"
        return git_dir.exists()

    def clone(
        self,
        url: str,
        destination: Union[str, Path],
        credential: Optional[SshKeyCredential] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> GitResult:
        """
        Clone url into destination.

        destination may already exist as long as it is empty.

        Args:
            url: Remote URI (git@host:namespace/project or any git URL)
            destination: Target working-tree directory
            credential: SSH key to authenticate with; None uses ssh defaults
            cancel_event: Event that aborts the clone when set

        Returns:
            GitResult
        """
        env = {}
        if credential is not None:
            env["GIT_SSH_COMMAND"] = build_ssh_command(credential)
        return self._run(
            ["clone", "--quiet", url, str(destination)],
            env=env,
            cancel_event=cancel_event,
        )
