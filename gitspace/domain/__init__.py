"""
Domain layer for gitspace.

Contains pure domain objects with no I/O or side effects:
- WorkspaceConfig: The validated configuration document
- RepositorySpec: One remote repository (namespace + project)
- CloneOutcome / SyncSummary: Per-repository and per-run sync results
- SymlinkEntry: One projected symlink
- CleanupResult: Outcome of removing a managed resource

These objects provide serialization methods for JSONL output.
"""

from .workspace import WorkspaceConfig, Paths, Ssh, RepositorySpec, SyncSettings
from .outcome import (
    CloneStatus,
    CloneOutcome,
    SyncSummary,
    LinkStatus,
    SymlinkEntry,
    CleanupStatus,
    CleanupResult,
)

__all__ = [
    'WorkspaceConfig',
    'Paths',
    'Ssh',
    'RepositorySpec',
    'SyncSettings',
    'CloneStatus',
    'CloneOutcome',
    'SyncSummary',
    'LinkStatus',
    'SymlinkEntry',
    'CleanupStatus',
    'CleanupResult',
]
