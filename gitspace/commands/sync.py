"""
Handles the 'sync' command: clone every configured repository.

Per-repository failures are reported but do not change the exit status
unless --strict is given, in which case any failure exits with
PARTIAL_SUCCESS (71). With --link, a project that could not be linked
(something else already has its name) exits with FilesystemError (67),
as the symlink command does.
"""

import click
import os
import sys
from pathlib import Path
from typing import Optional

from ..cli_utils import (
    config_file_option, emit_json, handle_errors, output_options, setup_logging
)
from ..config import SSH_KEY_ENV, load_config
from ..exit_codes import FilesystemError, PartialSuccessError
from ..infra.git_client import GitClient
from ..render import render_links_table, render_sync_table
from ..services.link_service import SymlinkProjector
from ..services.sync_service import SyncOptions, SyncOrchestrator


@click.command('sync')
@config_file_option
@click.option('--ssh-key', '-k', type=click.Path(dir_okay=False),
              help='Private key to authenticate with (overrides ssh.identityFile)')
@click.option('--parallel', '-j', type=click.IntRange(min=1), default=1,
              help='Number of concurrent clones (default: 1)')
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True),
              help='Abort clones still running after this many seconds')
@click.option('--clone-timeout', type=click.FloatRange(min=0, min_open=True), default=600,
              help='Timeout for a single clone in seconds (default: 600)')
@click.option('--link', is_flag=True, help='Project symlinks into the current directory afterwards')
@click.option('--strict', is_flag=True, help='Exit non-zero if any repository failed')
@output_options
@handle_errors
def sync_handler(
    config_file: Optional[str],
    ssh_key: Optional[str],
    parallel: int,
    timeout: Optional[float],
    clone_timeout: float,
    link: bool,
    strict: bool,
    output_json: bool,
    pretty: bool,
    debug: bool,
):
    """
    Clone repositories specified in config.json.

    Repositories whose directory already has content are skipped; existing
    clones are never updated.

    --strict exits 71 if any clone failed; --link exits 67 if any project
    could not be linked.

    \b
    Examples:
        gitspace sync
        gitspace sync --ssh-key ~/.ssh/deploy_key --parallel 4
        gitspace sync --config-file team.json --json
    """
    setup_logging(debug)

    config = load_config(config_file)
    ssh_key = ssh_key or os.environ.get(SSH_KEY_ENV)
    orchestrator = SyncOrchestrator(
        config,
        credential_override=ssh_key,
        git_client=GitClient(timeout=clone_timeout),
    )
    options = SyncOptions(parallel=parallel, timeout=timeout)

    progress_iter = orchestrator.run(options)
    if pretty:
        from rich.console import Console
        from rich.progress import Progress, SpinnerColumn, TextColumn

        console = Console(stderr=True)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Syncing...", total=None)
            for message in progress_iter:
                progress.update(task, description=message)
    else:
        for message in progress_iter:
            if not output_json:
                print(message, file=sys.stderr)

    result = orchestrator.last_result

    if output_json:
        for outcome in result.outcomes:
            emit_json(outcome.to_dict())
        emit_json(result.to_dict())
    elif pretty:
        render_sync_table(result)
    else:
        print(
            f"\nSync complete: {result.cloned} cloned, {result.skipped} skipped, "
            f"{result.failed} failed",
            file=sys.stderr
        )
        for error in result.errors:
            print(f"    - {error}", file=sys.stderr)

    if link:
        entries = SymlinkProjector(config.repositories).project(
            orchestrator.paths.repository_store, Path.cwd()
        )
        if output_json:
            for entry in entries:
                emit_json(entry.to_dict())
        elif pretty:
            render_links_table(entries)
        else:
            for entry in entries:
                if entry.error:
                    print(f"  ✗ {entry.project}: {entry.error}", file=sys.stderr)

    if strict and result.failed:
        raise PartialSuccessError(
            f"{result.failed} of {result.total} repositories failed",
            succeeded=result.cloned + result.skipped,
            failed=result.failed,
        )

    if link:
        failed_links = [e for e in entries if e.error]
        if failed_links:
            raise FilesystemError(
                f"{len(failed_links)} of {len(entries)} symlinks could not be created"
            )
