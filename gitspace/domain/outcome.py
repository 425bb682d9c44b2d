"""
Result domain objects for gitspace.

Provides standardized result types for the operations that touch the
filesystem or the network: cloning, symlink projection and cleanup.
They are produced fresh on every run and never persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Any, List, Optional

from ..exit_codes import GitspaceError


class CloneStatus(Enum):
    """Status of one repository after a sync."""
    CLONED = "cloned"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class CloneOutcome:
    """
    What happened to one repository during a sync.

    Exactly one of the constructors below should be used:
    ``CloneOutcome.cloned``, ``CloneOutcome.skipped`` or ``CloneOutcome.failed``.
    """
    namespace: str
    project: str
    status: CloneStatus
    destination: Path
    reason: Optional[str] = None
    error: Optional[GitspaceError] = None

    @classmethod
    def cloned(cls, namespace: str, project: str, destination: Path) -> 'CloneOutcome':
        return cls(namespace, project, CloneStatus.CLONED, destination)

    @classmethod
    def skipped(cls, namespace: str, project: str, destination: Path,
                reason: str) -> 'CloneOutcome':
        return cls(namespace, project, CloneStatus.SKIPPED, destination, reason=reason)

    @classmethod
    def failed(cls, namespace: str, project: str, destination: Path,
               error: GitspaceError) -> 'CloneOutcome':
        return cls(namespace, project, CloneStatus.FAILED, destination, error=error)

    @property
    def error_type(self) -> Optional[str]:
        return type(self.error).__name__ if self.error else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'namespace': self.namespace,
            'project': self.project,
            'status': self.status.value,
            'destination': str(self.destination),
        }
        if self.reason:
            result['reason'] = self.reason
        if self.error:
            result['error'] = str(self.error)
            result['error_type'] = self.error_type
        return result


@dataclass
class SyncSummary:
    """
    Summary of one sync run across all configured repositories.

    ``outcomes`` is kept in configuration order regardless of the order in
    which clones finished.
    """
    total: int = 0
    cloned: int = 0
    skipped: int = 0
    failed: int = 0
    outcomes: List[CloneOutcome] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if no repository failed."""
        return self.failed == 0

    def add_outcome(self, outcome: CloneOutcome) -> None:
        """Add an outcome and update counts."""
        self.outcomes.append(outcome)
        self.total += 1

        if outcome.status == CloneStatus.CLONED:
            self.cloned += 1
        elif outcome.status == CloneStatus.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1
            self.errors.append(f"{outcome.namespace}/{outcome.project}: {outcome.error}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'summary',
            'total': self.total,
            'cloned': self.cloned,
            'skipped': self.skipped,
            'failed': self.failed,
            'errors': self.errors,
        }


class LinkStatus(Enum):
    CREATED = "created"
    EXISTING = "existing"
    FAILED = "failed"


@dataclass
class SymlinkEntry:
    """A symlink in the projection target pointing into the repository store."""
    source: Path
    destination: Path
    status: LinkStatus = LinkStatus.CREATED
    error: Optional[GitspaceError] = None

    @property
    def project(self) -> str:
        return self.destination.name

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'project': self.project,
            'source': str(self.source),
            'link': str(self.destination),
            'status': self.status.value,
        }
        if self.error:
            result['error'] = str(self.error)
        return result


class CleanupStatus(Enum):
    REMOVED = "removed"
    ABSENT = "absent"
    FAILED = "failed"


@dataclass
class CleanupResult:
    """Result of cleaning one managed resource."""
    resource: str
    path: Path
    status: CleanupStatus
    removed_count: int = 0
    error: Optional[GitspaceError] = None

    @property
    def success(self) -> bool:
        """A missing resource counts as success: cleanup is idempotent."""
        return self.status != CleanupStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'resource': self.resource,
            'path': str(self.path),
            'status': self.status.value,
        }
        if self.removed_count:
            result['removed'] = self.removed_count
        if self.error:
            result['error'] = str(self.error)
        return result
