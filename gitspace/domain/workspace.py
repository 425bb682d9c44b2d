"""
Workspace configuration domain objects for gitspace.

A WorkspaceConfig is the typed form of the JSON configuration document:

    {
      "paths":        {"space": ..., "config": ..., "repositories": ...},
      "ssh":          {"host": ..., "hostName": ..., "user": ..., "identityFile": ...},
      "repositories": [{"namespace": ..., "project": ...}, ...],
      "sync":         {"enabled": ..., "cron": ...}
    }

These objects are immutable and perform no I/O. Construction from a
document validates the invariants and raises ConfigError on violation.
"""

from dataclasses import dataclass, field
from pathlib import PurePosixPath, PureWindowsPath
from typing import Any, Dict, List, Tuple

from ..exit_codes import ConfigError


def _require_str(section: Dict[str, Any], key: str, where: str) -> str:
    value = section.get(key)
    if not isinstance(value, str):
        raise ConfigError(f"'{where}.{key}' must be a string")
    return value


def _name_parts(name: str) -> Tuple[str, ...]:
    """Path components of name with empty and '.' segments dropped."""
    return tuple(p for p in name.replace('\\', '/').split('/') if p not in ('', '.'))


def _is_nested_name(name: str) -> bool:
    """True if name is a relative path naming something strictly inside its parent."""
    if not name or PurePosixPath(name).is_absolute() or PureWindowsPath(name).is_absolute():
        return False
    parts = _name_parts(name)
    return bool(parts) and '..' not in parts


@dataclass(frozen=True)
class Paths:
    """Space root plus the config filename and store dirname nested under it."""
    space: str = ".space"
    config: str = "config.json"
    repositories: str = "repositories"

    def __post_init__(self):
        if not self.space:
            raise ConfigError("'paths.space' must not be empty")
        for key in ('config', 'repositories'):
            if not _is_nested_name(getattr(self, key)):
                raise ConfigError(
                    f"'paths.{key}' must be a relative path inside the space, "
                    f"got {getattr(self, key)!r}"
                )
        # The config file and the store must not overlap: neither may be,
        # or contain, the other.
        config_parts = _name_parts(self.config)
        store_parts = _name_parts(self.repositories)
        shared = min(len(config_parts), len(store_parts))
        if config_parts[:shared] == store_parts[:shared]:
            raise ConfigError(
                f"'paths.config' ({self.config!r}) and 'paths.repositories' "
                f"({self.repositories!r}) must name separate locations"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Paths':
        return cls(
            space=_require_str(data, 'space', 'paths'),
            config=_require_str(data, 'config', 'paths'),
            repositories=_require_str(data, 'repositories', 'paths'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'space': self.space,
            'config': self.config,
            'repositories': self.repositories,
        }


@dataclass(frozen=True)
class Ssh:
    """
    Remote host settings, mirroring an ~/.ssh/config entry:

        Host github
            HostName github.com
            User git
            IdentityFile ~/.ssh/id_rsa
    """
    host: str
    host_name: str
    user: str
    identity_file: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Ssh':
        host_name = _require_str(data, 'hostName', 'ssh')
        if not host_name:
            raise ConfigError("'ssh.hostName' must not be empty")
        return cls(
            host=_require_str(data, 'host', 'ssh'),
            host_name=host_name,
            user=_require_str(data, 'user', 'ssh'),
            identity_file=_require_str(data, 'identityFile', 'ssh'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'host': self.host,
            'hostName': self.host_name,
            'user': self.user,
            'identityFile': self.identity_file,
        }


@dataclass(frozen=True)
class RepositorySpec:
    """One remote repository: an account/organization and a project name."""
    namespace: str
    project: str

    def __post_init__(self):
        if not _is_nested_name(self.namespace):
            raise ConfigError(f"Invalid repository namespace: {self.namespace!r}")
        # project names a directory in the store, so it must be one component
        if not _is_nested_name(self.project) or '/' in self.project or '\\' in self.project:
            raise ConfigError(f"Invalid repository project: {self.project!r}")
        if self.project in ('.', '..'):
            raise ConfigError(f"Invalid repository project: {self.project!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RepositorySpec':
        if not isinstance(data, dict):
            raise ConfigError("Each repository must be an object with 'namespace' and 'project'")
        return cls(
            namespace=_require_str(data, 'namespace', 'repositories[]'),
            project=_require_str(data, 'project', 'repositories[]'),
        )

    def remote_uri(self, host_name: str) -> str:
        """SSH remote URI, e.g. git@github.com:acme/widgets."""
        return f"git@{host_name}:{self.namespace}/{self.project}"

    @property
    def full_name(self) -> str:
        return f"{self.namespace}/{self.project}"

    def to_dict(self) -> Dict[str, Any]:
        return {'namespace': self.namespace, 'project': self.project}


@dataclass(frozen=True)
class SyncSettings:
    """Schedule for an external scheduler; the engine itself never reads it."""
    enabled: bool = True
    cron: str = "30 0 * * *"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SyncSettings':
        enabled = data.get('enabled', True)
        if not isinstance(enabled, bool):
            raise ConfigError("'sync.enabled' must be true or false")
        return cls(enabled=enabled, cron=_require_str(data, 'cron', 'sync'))

    def to_dict(self) -> Dict[str, Any]:
        return {'enabled': self.enabled, 'cron': self.cron}


@dataclass(frozen=True)
class WorkspaceConfig:
    """The complete, validated configuration for one space."""
    paths: Paths
    ssh: Ssh
    repositories: Tuple[RepositorySpec, ...] = field(default_factory=tuple)
    sync: SyncSettings = field(default_factory=SyncSettings)

    def __post_init__(self):
        seen = set()
        for repo in self.repositories:
            if repo.project in seen:
                raise ConfigError(
                    f"Duplicate project name {repo.project!r}: "
                    "each project maps to one directory in the store"
                )
            seen.add(repo.project)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WorkspaceConfig':
        """Build a config from a (migrated) document dict."""
        if not isinstance(data, dict):
            raise ConfigError("Configuration document must be a JSON object")

        sections = {}
        for key in ('paths', 'ssh', 'sync'):
            section = data.get(key)
            if not isinstance(section, dict):
                raise ConfigError(f"Missing or invalid '{key}' section")
            sections[key] = section

        repositories = data.get('repositories', [])
        if not isinstance(repositories, list):
            raise ConfigError("'repositories' must be a list")

        return cls(
            paths=Paths.from_dict(sections['paths']),
            ssh=Ssh.from_dict(sections['ssh']),
            repositories=tuple(RepositorySpec.from_dict(r) for r in repositories),
            sync=SyncSettings.from_dict(sections['sync']),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'paths': self.paths.to_dict(),
            'ssh': self.ssh.to_dict(),
            'repositories': [r.to_dict() for r in self.repositories],
            'sync': self.sync.to_dict(),
        }

    @property
    def project_names(self) -> List[str]:
        return [r.project for r in self.repositories]
