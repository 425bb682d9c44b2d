"""
Handles the 'symlink' command: expose cloned projects in a directory.
"""

import click
import sys
from pathlib import Path
from typing import Optional

from ..cli_utils import config_file_option, emit_json, handle_errors, output_options, setup_logging
from ..config import load_config
from ..exit_codes import FilesystemError
from ..render import render_links_table
from ..services.link_service import SymlinkProjector
from ..services.path_resolver import PathResolver


@click.command('symlink')
@config_file_option
@click.option('--target-dir', '-d', type=click.Path(file_okay=False),
              help='Directory to create the links in (default: current directory)')
@click.option('--remove', is_flag=True, help='Remove project symlinks instead of creating them')
@output_options
@handle_errors
def symlink_handler(
    config_file: Optional[str],
    target_dir: Optional[str],
    remove: bool,
    output_json: bool,
    pretty: bool,
    debug: bool,
):
    """
    Symlink every configured project from the repository store.

    Creates {dir}/{project} -> {space}/repositories/{project}. Existing
    files are never overwritten; such entries are reported as failures.

    \b
    Examples:
        gitspace symlink
        gitspace symlink --target-dir ~/code
        gitspace symlink --remove
    """
    setup_logging(debug)

    config = load_config(config_file)
    projector = SymlinkProjector(config.repositories)
    directory = Path(target_dir) if target_dir else Path.cwd()

    if remove:
        removed = projector.remove(directory)
        if output_json:
            emit_json({'removed': removed, 'directory': str(directory)})
        else:
            print(f"🧱 Removed {removed} symlink(s) from {directory}", file=sys.stderr)
        return

    directory.mkdir(parents=True, exist_ok=True)
    store = PathResolver(config).repository_store
    entries = projector.project(store, directory)

    if output_json:
        for entry in entries:
            emit_json(entry.to_dict())
    elif pretty:
        render_links_table(entries)
    else:
        for entry in entries:
            if entry.error:
                print(f"  ✗ {entry.project}: {entry.error}", file=sys.stderr)
            else:
                print(f"  ✓ {entry.destination} -> {entry.source}", file=sys.stderr)

    failed = [e for e in entries if e.error]
    if failed:
        raise FilesystemError(f"{len(failed)} of {len(entries)} symlinks could not be created")
