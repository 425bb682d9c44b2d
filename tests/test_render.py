"""
Tests for gitspace/render.py rendering functions.

Render functions only print; these tests check they handle empty data
and that the important fields reach the output.
"""
from io import StringIO
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from gitspace import render
from gitspace.domain.outcome import (
    CleanupResult, CleanupStatus, CloneOutcome, LinkStatus, SymlinkEntry, SyncSummary,
)
from gitspace.exit_codes import AuthError, FilesystemError
from gitspace.services.space_service import RepositoryState


@pytest.fixture
def output():
    """Swap the module console for a wide one writing into a buffer."""
    buffer = StringIO()
    with patch.object(render, 'console', Console(file=buffer, width=200, color_system=None)):
        yield buffer


class TestRenderSyncTable:

    def test_empty(self, output):
        render.render_sync_table(SyncSummary())
        assert "No repositories configured" in output.getvalue()

    def test_outcomes_and_totals(self, output):
        summary = SyncSummary()
        summary.add_outcome(CloneOutcome.cloned("acme", "widgets", Path("store/widgets")))
        summary.add_outcome(CloneOutcome.skipped("acme", "gadgets", Path("store/gadgets"), "already present"))
        summary.add_outcome(CloneOutcome.failed("acme", "secret", Path("store/secret"),
                                                AuthError("Permission denied")))

        render.render_sync_table(summary)

        text = output.getvalue()
        assert "acme/widgets" in text
        assert "already present" in text
        assert "AuthError" in text
        assert "Failed: 1" in text


class TestRenderLinks:

    def test_empty(self, output):
        render.render_links_table([])
        assert "No repositories configured" in output.getvalue()

    def test_statuses(self, output):
        entries = [
            SymlinkEntry(Path("/s/widgets"), Path("/w/widgets"), LinkStatus.CREATED),
            SymlinkEntry(Path("/s/gadgets"), Path("/w/gadgets"), LinkStatus.FAILED,
                         FilesystemError("Path exists and is not a symlink")),
        ]

        render.render_links_table(entries)

        text = output.getvalue()
        assert "Created" in text
        assert "not a symlink" in text


class TestRenderCleanup:

    @pytest.mark.parametrize("status,expected", [
        (CleanupStatus.REMOVED, "Removed space"),
        (CleanupStatus.ABSENT, "Nothing to remove"),
    ])
    def test_status_messages(self, output, status, expected):
        render.render_cleanup(CleanupResult("space", Path(".space"), status))
        assert expected in output.getvalue()

    def test_failure(self, output):
        render.render_cleanup(CleanupResult("space", Path(".space"), CleanupStatus.FAILED,
                                            error=FilesystemError("Permission denied")))
        assert "Permission denied" in output.getvalue()


class TestRenderStatus:

    def test_states(self, output):
        render.render_status_table([
            RepositoryState("acme", "widgets", Path("store/widgets"), "cloned", linked=True),
            RepositoryState("acme", "gadgets", Path("store/gadgets"), "missing"),
        ])

        text = output.getvalue()
        assert "acme/widgets" in text
        assert "missing" in text
