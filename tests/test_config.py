"""
Unit tests for gitspace.config module
"""
import json
import os
from pathlib import Path

import pytest

from gitspace.config import (
    apply_env_overrides,
    get_config_path,
    get_default_config,
    load_config,
    merge_configs,
    migrate_config,
    save_config,
)
from gitspace.exit_codes import ConfigError, FilesystemError

from conftest import make_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's GITSPACE_* variables out of these tests."""
    for key in list(os.environ):
        if key.startswith("GITSPACE_"):
            monkeypatch.delenv(key)


class TestDefaults:

    def test_default_config_structure(self):
        config = get_default_config()
        assert config["paths"] == {
            "space": ".space", "config": "config.json", "repositories": "repositories"
        }
        assert config["ssh"]["hostName"] == "github.com"
        assert config["ssh"]["user"] == "git"
        assert config["ssh"]["identityFile"] == str(Path.home() / ".ssh" / "id_rsa")
        assert config["repositories"] == []
        assert config["sync"] == {"enabled": True, "cron": "30 0 * * *"}

    def test_default_config_is_fresh_each_call(self):
        first = get_default_config()
        first["repositories"].append({"namespace": "a", "project": "b"})
        assert get_default_config()["repositories"] == []


class TestConfigPath:

    def test_explicit_path_wins(self, monkeypatch):
        monkeypatch.setenv("GITSPACE_CONFIG_FILE", "/from/env.json")
        assert get_config_path("custom.json") == Path("custom.json")

    def test_env_path(self, monkeypatch):
        monkeypatch.setenv("GITSPACE_CONFIG_FILE", "/from/env.json")
        assert get_config_path() == Path("/from/env.json")

    def test_default_path(self):
        assert get_config_path() == Path(".space") / "config.json"


class TestLoadConfig:

    def test_missing_required_config(self, tmp_path):
        with pytest.raises(ConfigError, match="gitspace init"):
            load_config(tmp_path / "nope.json")

    def test_missing_optional_config_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "nope.json", required=False)
        assert config.paths.space == ".space"
        assert config.repositories == ()

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Malformed"):
            load_config(path)

    def test_non_object_document(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[]")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_repository_is_fatal(self, tmp_path):
        document = get_default_config()
        document["repositories"] = [{"namespace": "acme", "project": "../escape"}]
        path = tmp_path / "config.json"
        path.write_text(json.dumps(document))
        with pytest.raises(ConfigError):
            load_config(path)

    @pytest.mark.parametrize("paths", [
        {"repositories": "."},
        {"config": "data", "repositories": "data"},
    ])
    def test_store_overlapping_space_or_config_is_fatal(self, tmp_path, paths):
        document = get_default_config()
        document["paths"].update(paths)
        path = tmp_path / "config.json"
        path.write_text(json.dumps(document))
        with pytest.raises(ConfigError):
            load_config(path)

    def test_partial_document_merged_with_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "repositories": [{"namespace": "acme", "project": "widgets"}]
        }))
        config = load_config(path)
        assert config.ssh.host_name == "github.com"
        assert config.project_names == ["widgets"]

    def test_env_override_applied(self, tmp_path, monkeypatch):
        path = save_config(make_config(".space"), tmp_path / "config.json")
        monkeypatch.setenv("GITSPACE_SSH_HOSTNAME", "gitlab.example.com")
        monkeypatch.setenv("GITSPACE_SYNC_ENABLED", "false")

        config = load_config(path)

        assert config.ssh.host_name == "gitlab.example.com"
        assert config.sync.enabled is False
        # never written back
        assert json.loads(path.read_text())["ssh"]["hostName"] == "github.com"


class TestSaveConfig:

    def test_round_trip(self, tmp_path):
        config = make_config(".space", repos=[("acme", "widgets")])
        path = save_config(config, tmp_path / "space" / "config.json")

        assert load_config(path) == config
        assert json.loads(path.read_text()) == config.to_dict()

    def test_pretty_printed(self, tmp_path):
        path = save_config(make_config(".space"), tmp_path / "config.json")
        text = path.read_text()
        assert text.startswith('{\n  "paths"')
        assert text.endswith("\n")

    def test_no_temp_files_left(self, tmp_path):
        save_config(make_config(".space"), tmp_path / "config.json")
        assert [p.name for p in tmp_path.iterdir()] == ["config.json"]

    def test_unwritable_location(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(FilesystemError):
            save_config(make_config(".space"), blocker / "config.json")


class TestMigration:

    def test_legacy_path_field(self):
        migrated = migrate_config({"path": ".gitspace"})
        assert migrated["paths"] == {
            "space": ".gitspace", "config": "config.json", "repositories": "repositories"
        }
        assert "path" not in migrated

    def test_snake_case_ssh_keys(self):
        migrated = migrate_config({"ssh": {
            "host": "github", "host_name": "github.com", "user": "git",
            "identity_file": "~/.ssh/id_rsa",
        }})
        assert migrated["ssh"]["hostName"] == "github.com"
        assert migrated["ssh"]["identityFile"] == "~/.ssh/id_rsa"
        assert "host_name" not in migrated["ssh"]

    def test_git_suffix_stripped(self):
        migrated = migrate_config({"repositories": [{"namespace": "acme", "project": "widgets.git"}]})
        assert migrated["repositories"][0]["project"] == "widgets"

    def test_current_layout_untouched(self):
        document = make_config(".space", repos=[("acme", "widgets")]).to_dict()
        assert migrate_config(json.loads(json.dumps(document))) == document

    def test_legacy_file_loads(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "path": ".gitspace",
            "ssh": {"host": "github", "host_name": "github.com", "user": "git",
                    "identity_file": "/keys/id"},
            "repositories": [{"namespace": "capswan", "project": "cli-gitspace"}],
        }))
        config = load_config(path)
        assert config.paths.space == ".gitspace"
        assert config.ssh.identity_file == "/keys/id"
        assert config.sync.cron == "30 0 * * *"


class TestHelpers:

    def test_merge_configs_nested(self):
        merged = merge_configs({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}})
        assert merged == {"a": {"x": 1, "y": 3}, "b": 1}

    def test_env_override_ignores_unknown_keys(self, monkeypatch):
        monkeypatch.setenv("GITSPACE_NOPE_KEY", "x")
        monkeypatch.setenv("GITSPACE_SSH_NOPE", "x")
        config = get_default_config()
        assert apply_env_overrides(get_default_config()) == config

    def test_env_override_rejects_non_boolean(self, monkeypatch):
        monkeypatch.setenv("GITSPACE_SYNC_ENABLED", "sometimes")
        assert apply_env_overrides(get_default_config())["sync"]["enabled"] is True
