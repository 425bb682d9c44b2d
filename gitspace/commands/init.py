"""
Handles the 'init' command: create a space with a default configuration.
"""

import click
import sys
from typing import Optional

from ..cli_utils import emit_json, handle_errors, setup_logging
from ..config import get_default_config
from ..domain.workspace import RepositorySpec, WorkspaceConfig
from ..exit_codes import ConfigError
from ..services.space_service import SpaceService


def build_initial_config(space: Optional[str], repos: tuple) -> WorkspaceConfig:
    """Default document, optionally with another space root and seed repositories."""
    document = get_default_config()
    if space:
        document['paths']['space'] = space
    for repo in repos:
        namespace, sep, project = repo.partition('/')
        if not sep:
            raise ConfigError(f"Repository must be given as NAMESPACE/PROJECT, got {repo!r}")
        document['repositories'].append(RepositorySpec(namespace, project).to_dict())
    return WorkspaceConfig.from_dict(document)


@click.command('init')
@click.option('--space', '-s', help='Space directory to create (default: .space)')
@click.option('--repo', '-r', 'repos', multiple=True, metavar='NAMESPACE/PROJECT',
              help='Repository to add to the new config (repeatable)')
@click.option('--force', is_flag=True, help='Overwrite an existing config.json')
@click.option('--json', 'output_json', is_flag=True, help='Output as JSON')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@handle_errors
def init_handler(space: Optional[str], repos: tuple, force: bool, output_json: bool, debug: bool):
    """
    Generate a space directory with a default config.json.

    Creates {space}/repositories and writes {space}/config.json. Running it
    again leaves an existing config.json untouched unless --force is given.

    \b
    Examples:
        gitspace init
        gitspace init --space ~/work/.space --repo acme/widgets --repo acme/gadgets
    """
    setup_logging(debug)

    config = build_initial_config(space, repos)
    result = SpaceService(config).init(force=force)

    if output_json:
        emit_json(result.to_dict())
        return

    if result.config_written:
        print(f"🧱 Initialized space at {result.space}", file=sys.stderr)
        print(f"   config:       {result.config_path}", file=sys.stderr)
    else:
        print(f"🧱 Space already initialized, kept {result.config_path}", file=sys.stderr)
    print(f"   repositories: {result.repository_store}", file=sys.stderr)
