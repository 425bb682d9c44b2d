"""
Handles the 'status' command: show which configured repositories are present.
"""

import click
from pathlib import Path
from typing import Optional

from ..cli_utils import config_file_option, emit_json, handle_errors, output_options, setup_logging
from ..config import load_config
from ..render import render_status_table
from ..services.space_service import SpaceService


@click.command('status')
@config_file_option
@output_options
@handle_errors
def status_handler(config_file: Optional[str], output_json: bool, pretty: bool, debug: bool):
    """
    Show the local state of each configured repository.

    States: cloned (a git working tree), present (has content but no .git),
    empty, missing. 'Linked' means the current directory holds a project
    symlink pointing at it.
    """
    setup_logging(debug)

    config = load_config(config_file)
    states = SpaceService(config).status(link_dir=Path.cwd())

    if pretty:
        render_status_table(states)
        return

    # JSONL both by default and with --json
    for state in states:
        emit_json(state.to_dict())
