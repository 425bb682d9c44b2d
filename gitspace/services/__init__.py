"""
Service layer for gitspace.

Contains the synchronization engine, composed from small capabilities:
- PathResolver: Logical path roles to concrete paths
- RepositoryFetcher: Idempotent clone-or-skip of one repository
- SymlinkProjector: Project symlinks into a working directory
- CleanupManager: Destructive removal of managed resources
- SyncOrchestrator: Sync every configured repository
- SpaceService: Initialize a space, report its status

Services are the primary API for commands to use.
"""

from .path_resolver import ManagedPath, PathResolver
from .fetch_service import RepositoryFetcher
from .link_service import SymlinkProjector
from .cleanup_service import CleanTarget, CleanupManager
from .sync_service import SyncOptions, SyncOrchestrator
from .space_service import SpaceService

__all__ = [
    'ManagedPath',
    'PathResolver',
    'RepositoryFetcher',
    'SymlinkProjector',
    'CleanTarget',
    'CleanupManager',
    'SyncOptions',
    'SyncOrchestrator',
    'SpaceService',
]
