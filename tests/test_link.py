"""Tests for SymlinkProjector."""

import os
from pathlib import Path

import pytest

from gitspace.domain.outcome import LinkStatus
from gitspace.domain.workspace import RepositorySpec
from gitspace.exit_codes import FilesystemError, PartialRemovalError
from gitspace.services.link_service import SymlinkProjector


@pytest.fixture
def repos():
    return [RepositorySpec("acme", "widgets"), RepositorySpec("acme", "gadgets")]


@pytest.fixture
def store(tmp_path, repos):
    store = tmp_path / ".space" / "repositories"
    for repo in repos:
        (store / repo.project).mkdir(parents=True)
        (store / repo.project / "README.md").write_text(repo.project)
    return store


@pytest.fixture
def workdir(tmp_path):
    work = tmp_path / "work"
    work.mkdir()
    return work


class TestProject:

    def test_creates_links(self, repos, store, workdir):
        entries = SymlinkProjector(repos).project(store, workdir)

        assert [e.status for e in entries] == [LinkStatus.CREATED, LinkStatus.CREATED]
        for repo in repos:
            link = workdir / repo.project
            assert link.is_symlink()
            assert Path(os.readlink(link)) == (store / repo.project).absolute()
            assert (link / "README.md").read_text() == repo.project

    def test_relative_store_gives_absolute_links(self, repos, store, workdir, monkeypatch):
        monkeypatch.chdir(store.parent.parent)
        SymlinkProjector(repos).project(Path(".space/repositories"), workdir)

        assert Path(os.readlink(workdir / "widgets")).is_absolute()

    def test_second_run_reports_existing(self, repos, store, workdir):
        projector = SymlinkProjector(repos)
        projector.project(store, workdir)

        entries = projector.project(store, workdir)

        assert [e.status for e in entries] == [LinkStatus.EXISTING, LinkStatus.EXISTING]

    def test_regular_file_is_not_overwritten(self, repos, store, workdir):
        (workdir / "widgets").write_text("mine")

        entries = SymlinkProjector(repos).project(store, workdir)

        widgets, gadgets = entries
        assert widgets.status == LinkStatus.FAILED
        assert isinstance(widgets.error, FilesystemError)
        assert (workdir / "widgets").read_text() == "mine"
        assert gadgets.status == LinkStatus.CREATED

    def test_symlink_elsewhere_is_a_conflict(self, repos, store, workdir, tmp_path):
        other = tmp_path / "other"
        other.mkdir()
        (workdir / "widgets").symlink_to(other)

        widgets, _ = SymlinkProjector(repos).project(store, workdir)

        assert widgets.status == LinkStatus.FAILED
        assert Path(os.readlink(workdir / "widgets")) == other

    def test_links_to_uncloned_projects(self, store, workdir):
        """Links are created even when the project was not cloned yet."""
        entries = SymlinkProjector([RepositorySpec("acme", "later")]).project(store, workdir)

        assert entries[0].status == LinkStatus.CREATED
        assert (workdir / "later").is_symlink()


class TestRemove:

    def test_round_trip_leaves_unrelated_entries(self, repos, store, workdir, tmp_path):
        (workdir / "notes.txt").write_text("hello")
        (workdir / "src").mkdir()
        (workdir / "unrelated-link").symlink_to(tmp_path)
        before = sorted(p.name for p in workdir.iterdir())

        projector = SymlinkProjector(repos)
        projector.project(store, workdir)
        removed = projector.remove(workdir)

        assert removed == 2
        assert sorted(p.name for p in workdir.iterdir()) == before
        assert (workdir / "unrelated-link").is_symlink()

    def test_keeps_real_directory_with_project_name(self, repos, workdir):
        (workdir / "widgets").mkdir()

        assert SymlinkProjector(repos).remove(workdir) == 0
        assert (workdir / "widgets").is_dir()

    def test_store_untouched(self, repos, store, workdir):
        projector = SymlinkProjector(repos)
        projector.project(store, workdir)
        projector.remove(workdir)

        assert (store / "widgets" / "README.md").exists()

    def test_missing_directory(self, repos, tmp_path):
        assert SymlinkProjector(repos).remove(tmp_path / "nope") == 0

    def test_dangling_link_removed(self, repos, workdir, tmp_path):
        (workdir / "gadgets").symlink_to(tmp_path / "gone")

        assert SymlinkProjector(repos).remove(workdir) == 1
        assert not (workdir / "gadgets").is_symlink()

    def test_failure_does_not_stop_remaining_removals(self, repos, store, workdir, monkeypatch):
        projector = SymlinkProjector(repos)
        projector.project(store, workdir)
        original_unlink = Path.unlink

        def unlink(self, *args, **kwargs):
            if self.name == "gadgets":
                raise PermissionError(13, "Permission denied", str(self))
            return original_unlink(self, *args, **kwargs)

        monkeypatch.setattr(Path, "unlink", unlink)

        with pytest.raises(PartialRemovalError) as excinfo:
            projector.remove(workdir)

        assert excinfo.value.removed == 1
        assert excinfo.value.failed == 1
        assert isinstance(excinfo.value, FilesystemError)
        assert not (workdir / "widgets").is_symlink()
        assert (workdir / "gadgets").is_symlink()
