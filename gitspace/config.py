#!/usr/bin/env python3

import os
import json
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

import logging
import sys

from .domain.workspace import WorkspaceConfig
from .exit_codes import ConfigError, FilesystemError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("gitspace")

DEFAULT_SPACE = ".space"
DEFAULT_CONFIG = "config.json"
DEFAULT_REPOSITORIES = "repositories"

CONFIG_FILE_ENV = "GITSPACE_CONFIG_FILE"
SSH_KEY_ENV = "GITSPACE_SSH_KEY"
ENV_PREFIX = "GITSPACE_"


def default_identity_file() -> str:
    """The user's standard SSH private key location."""
    return str(Path.home() / '.ssh' / 'id_rsa')


def get_default_config() -> Dict[str, Any]:
    """Get default configuration document.

    A fresh dict is built on every call; callers may mutate it freely.
    """
    return {
        "paths": {
            "space": DEFAULT_SPACE,
            "config": DEFAULT_CONFIG,
            "repositories": DEFAULT_REPOSITORIES,
        },
        "ssh": {
            "host": "github",
            "hostName": "github.com",
            "user": "git",
            "identityFile": default_identity_file(),
        },
        "repositories": [],
        "sync": {
            "enabled": True,
            "cron": "30 0 * * *",
        },
    }


def get_config_path(explicit: Optional[Union[str, Path]] = None) -> Path:
    """Get the path to the configuration file.

    Checks in order:
    1. An explicit path (the --config-file flag)
    2. GITSPACE_CONFIG_FILE environment variable
    3. .space/config.json relative to the working directory
    """
    if explicit:
        return Path(explicit).expanduser()

    if os.environ.get(CONFIG_FILE_ENV):
        return Path(os.environ[CONFIG_FILE_ENV]).expanduser()

    return Path(DEFAULT_SPACE) / DEFAULT_CONFIG


def migrate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Migrate older document layouts to the current schema.

    Old layouts:
        {"path": ".gitspace", ...}                  -> {"paths": {"space": ".gitspace", ...}}
        {"ssh": {"host_name": ..., "identity_file": ...}}
                                                    -> {"ssh": {"hostName": ..., "identityFile": ...}}
        {"repositories": [{"project": "x.git"}]}    -> {"repositories": [{"project": "x"}]}

    A missing "sync" section is filled in by the defaults merge.
    """
    if "path" in config and "paths" not in config:
        legacy_space = config.pop("path")
        config["paths"] = {
            "space": legacy_space,
            "config": DEFAULT_CONFIG,
            "repositories": DEFAULT_REPOSITORIES,
        }
        logger.debug(f"Migrated legacy 'path' field to paths.space={legacy_space!r}")

    ssh = config.get("ssh")
    if isinstance(ssh, dict):
        for old_key, new_key in (("host_name", "hostName"), ("identity_file", "identityFile")):
            if old_key in ssh and new_key not in ssh:
                ssh[new_key] = ssh.pop(old_key)
                logger.debug(f"Migrated ssh.{old_key} to ssh.{new_key}")

    repositories = config.get("repositories")
    if isinstance(repositories, list):
        for repo in repositories:
            if isinstance(repo, dict) and isinstance(repo.get("project"), str):
                if repo["project"].endswith(".git"):
                    repo["project"] = repo["project"][:-len(".git")]

    return config


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            merged[key] = merge_configs(merged[key], value)
        else:
            # Override or add new key
            merged[key] = value

    return merged


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Environment variables follow the pattern GITSPACE_SECTION_KEY, matched
    case-insensitively. For example:
        GITSPACE_SSH_HOSTNAME=gitlab.com
        GITSPACE_SYNC_ENABLED=false
    Overrides live in memory only; they are never written back.
    """
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX) or env_key in (CONFIG_FILE_ENV, SSH_KEY_ENV):
            continue

        key_parts = env_key[len(ENV_PREFIX):].lower().split('_', 1)
        if len(key_parts) != 2:
            continue
        section_name, key_name = key_parts

        section = next(
            (v for k, v in config.items() if k.lower() == section_name and isinstance(v, dict)),
            None
        )
        if section is None:
            continue

        matched_key = next((k for k in section if k.lower() == key_name), None)
        if matched_key is None:
            continue

        # Convert value to the type already present
        if isinstance(section[matched_key], bool):
            if value.lower() in ('true', '1', 'yes', 'on'):
                typed_value = True
            elif value.lower() in ('false', '0', 'no', 'off'):
                typed_value = False
            else:
                logger.warning(f"Ignoring {env_key}={value!r}: expected a boolean")
                continue
        else:
            typed_value = value

        logger.debug(f"Applying environment override {env_key}")
        section[matched_key] = typed_value

    return config


def read_config_document(config_path: Path) -> Dict[str, Any]:
    """Read the raw JSON document, raising ConfigError on any failure."""
    try:
        with open(config_path, 'r') as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed configuration at {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read configuration at {config_path}: {e}") from e

    if not isinstance(document, dict):
        raise ConfigError(f"Configuration at {config_path} must be a JSON object")
    return document


def load_config(path: Optional[Union[str, Path]] = None, required: bool = True) -> WorkspaceConfig:
    """Load configuration from file.

    Args:
        path: Explicit config file path (see get_config_path for fallbacks)
        required: If False, a missing file yields the default configuration

    Raises:
        ConfigError: file missing (when required), unreadable, malformed or invalid
    """
    config_path = get_config_path(path)

    # Start with default config
    config = get_default_config()

    if config_path.exists():
        file_config = migrate_config(read_config_document(config_path))
        config = merge_configs(config, file_config)
        logger.debug(f"Loaded configuration from {config_path}")
    elif required:
        raise ConfigError(
            f"Configuration not found at {config_path}. Run 'gitspace init' first."
        )
    else:
        logger.debug(f"No configuration at {config_path}, using defaults")

    config = apply_env_overrides(config)

    return WorkspaceConfig.from_dict(config)


def save_config(config: WorkspaceConfig, path: Union[str, Path]) -> Path:
    """Save configuration to file.

    Writes atomically (temp file in the same directory, then rename) and
    creates the parent directory if needed.

    Raises:
        FilesystemError: the file could not be written
    """
    config_path = Path(path)

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(
            dir=config_path.parent,
            prefix=f".{config_path.name}.",
            suffix=".tmp"
        )
        try:
            with os.fdopen(fd, 'w') as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
                f.write('\n')
            os.replace(temp_path, config_path)
        except Exception:
            # Clean up temp file on error
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise
    except OSError as e:
        raise FilesystemError(f"Cannot write configuration to {config_path}: {e}") from e

    logger.info(f"Configuration saved to {config_path}")
    return config_path
