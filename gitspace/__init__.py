"""
gitspace - Materialize a declared set of git repositories in a local space.

Given a list of remote repositories, gitspace creates a "space" directory
holding a config.json and one clone per repository, can symlink the clones
into your working directory, and can clean up any of it again.

Quick Start:
    from gitspace import load_config, SyncOrchestrator

    config = load_config(".space/config.json")
    for outcome in SyncOrchestrator(config).sync():
        print(outcome.project, outcome.status.value)

Domain Objects:
    WorkspaceConfig - The validated configuration document
    RepositorySpec - One remote repository (namespace + project)
    CloneOutcome - Cloned, Skipped or Failed, per repository

Services:
    SyncOrchestrator - Clone every configured repository
    SymlinkProjector - Project symlinks into a directory
    CleanupManager - Remove the space, config, store or symlinks
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    WorkspaceConfig,
    RepositorySpec,
    CloneOutcome,
    CloneStatus,
    SymlinkEntry,
    CleanupResult,
)

# Services
from .services import (
    ManagedPath,
    PathResolver,
    RepositoryFetcher,
    SymlinkProjector,
    CleanTarget,
    CleanupManager,
    SyncOptions,
    SyncOrchestrator,
    SpaceService,
)

# Errors
from .exit_codes import (
    GitspaceError,
    ConfigError,
    PathError,
    AuthError,
    NetworkError,
    FilesystemError,
)

# Configuration
from .config import load_config, save_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "WorkspaceConfig",
    "RepositorySpec",
    "CloneOutcome",
    "CloneStatus",
    "SymlinkEntry",
    "CleanupResult",
    # Services
    "ManagedPath",
    "PathResolver",
    "RepositoryFetcher",
    "SymlinkProjector",
    "CleanTarget",
    "CleanupManager",
    "SyncOptions",
    "SyncOrchestrator",
    "SpaceService",
    # Errors
    "GitspaceError",
    "ConfigError",
    "PathError",
    "AuthError",
    "NetworkError",
    "FilesystemError",
    # Configuration
    "load_config",
    "save_config",
]
