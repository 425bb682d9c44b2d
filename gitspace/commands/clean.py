"""
Handles the 'clean' command: remove one managed resource.
"""

import click
import os
import sys
from pathlib import Path
from typing import Optional

from ..cli_utils import config_file_option, emit_json, handle_errors, output_options, setup_logging
from ..config import CONFIG_FILE_ENV, load_config
from ..render import render_cleanup
from ..services.cleanup_service import CleanTarget, CleanupManager


@click.command('clean')
@click.option('--target', '-t', type=click.Choice([t.value for t in CleanTarget]),
              default=CleanTarget.SPACE.value, show_default=True,
              help='Resource to remove')
@config_file_option
@click.option('--yes', '-y', is_flag=True, help='Skip confirmation prompt')
@output_options
@handle_errors
def clean_handler(
    target: str,
    config_file: Optional[str],
    yes: bool,
    output_json: bool,
    pretty: bool,
    debug: bool,
):
    """
    Remove the space, its config, its repository store, or projected symlinks.

    'symlinks' removes only symlinks in the current directory that are named
    after a configured project. Your SSH key is never a cleanup target.

    Do not run clean while a sync is in progress against the same space.

    \b
    Examples:
        gitspace clean --target repositories --yes
        gitspace clean -t symlinks
    """
    setup_logging(debug)

    # Without an explicit file (flag or GITSPACE_CONFIG_FILE) a missing config
    # falls back to the defaults, so the default space can still be cleaned
    # after its config is gone
    explicit = config_file or os.environ.get(CONFIG_FILE_ENV)
    config = load_config(config_file, required=bool(explicit))
    clean_target = CleanTarget(target)
    manager = CleanupManager(config, symlink_dir=Path.cwd())

    if not yes:
        path = manager.path_for(clean_target)
        if not click.confirm(f"Remove {clean_target.value} at {path}?"):
            print("Aborted.", file=sys.stderr)
            return

    result = manager.clean(clean_target)

    if output_json:
        emit_json(result.to_dict())
    elif pretty:
        render_cleanup(result)
    elif result.success:
        print(f"🧱 {result.resource}: {result.status.value} ({result.path})", file=sys.stderr)

    if not result.success:
        raise result.error
