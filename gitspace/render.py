"""
Rendering functions for gitspace output.

This module handles all pretty-printing and table formatting.
Core functions return data, this module makes it human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from typing import List

from .domain.outcome import (
    CleanupResult, CleanupStatus, CloneStatus, LinkStatus, SymlinkEntry, SyncSummary
)

console = Console()


def _table(title: str) -> Table:
    return Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )


def render_sync_table(summary: SyncSummary) -> None:
    """
    Render sync outcomes as a pretty table.

    Args:
        summary: Summary of the sync run
    """
    if not summary.outcomes:
        console.print("[yellow]No repositories configured.[/yellow]")
        return

    table = _table("Sync Results")
    table.add_column("Repository", style="cyan")
    table.add_column("Status")
    table.add_column("Details", style="dim")

    for outcome in summary.outcomes:
        if outcome.status == CloneStatus.CLONED:
            status = "[green]✓ Cloned[/green]"
            details = str(outcome.destination)
        elif outcome.status == CloneStatus.SKIPPED:
            status = "[yellow]⏭ Skipped[/yellow]"
            details = outcome.reason or ""
        else:
            status = f"[red]✗ {outcome.error_type}[/red]"
            details = str(outcome.error)
        table.add_row(f"{outcome.namespace}/{outcome.project}", status, details)

    console.print(table)
    console.print(
        f"[bold]Total:[/bold] {summary.total}  "
        f"[green]Cloned:[/green] {summary.cloned}  "
        f"[yellow]Skipped:[/yellow] {summary.skipped}  "
        f"[red]Failed:[/red] {summary.failed}"
    )


def render_links_table(entries: List[SymlinkEntry]) -> None:
    """Render projected symlinks as a pretty table."""
    if not entries:
        console.print("[yellow]No repositories configured.[/yellow]")
        return

    table = _table("Symlinks")
    table.add_column("Link", style="cyan")
    table.add_column("Target", style="dim")
    table.add_column("Status")

    for entry in entries:
        if entry.status == LinkStatus.CREATED:
            status = "[green]Created[/green]"
        elif entry.status == LinkStatus.EXISTING:
            status = "[dim]Exists[/dim]"
        else:
            status = f"[red]{entry.error}[/red]"
        table.add_row(str(entry.destination), str(entry.source), status)

    console.print(table)


def render_cleanup(result: CleanupResult) -> None:
    """Render the outcome of a cleanup."""
    if result.status == CleanupStatus.REMOVED:
        detail = f" ({result.removed_count} symlinks)" if result.removed_count else ""
        console.print(f"[green]🧱 Removed {result.resource}{detail}:[/green] {result.path}")
    elif result.status == CleanupStatus.ABSENT:
        console.print(f"[yellow]Nothing to remove for {result.resource}:[/yellow] {result.path}")
    else:
        console.print(f"[red]Failed to remove {result.resource}:[/red] {result.error}")


def render_status_table(states) -> None:
    """Render the local state of configured repositories."""
    if not states:
        console.print("[yellow]No repositories configured.[/yellow]")
        return

    styles = {
        'cloned': 'green',
        'present': 'yellow',
        'empty': 'red',
        'missing': 'dim',
    }

    table = _table("Space Status")
    table.add_column("Repository", style="cyan")
    table.add_column("State")
    table.add_column("Linked")
    table.add_column("Path", style="dim")

    for state in states:
        style = styles.get(state.state, 'white')
        table.add_row(
            f"{state.namespace}/{state.project}",
            f"[{style}]{state.state}[/{style}]",
            "🔗" if state.linked else "",
            str(state.path),
        )

    console.print(table)
