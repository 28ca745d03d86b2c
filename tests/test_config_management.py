"""Test suite for config management functionality.

This test suite validates:
- Preferences module functionality
- Config loader functionality (optional file, validation, dynamic path resolution)
- CLI commands for config management
"""
import json
from argparse import Namespace
from pathlib import Path

import pytest
import yaml

from view_secret.secrets.domains import preferences
from view_secret.secrets.domains import config_loader
from view_secret.secrets.domains.config_loader import ConfigError


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    """Fixture to create a temporary home directory for testing."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setattr(Path, "home", lambda: fake_home)

    fake_config_dir = fake_home / ".config" / "view-secret"
    monkeypatch.setattr(preferences, "PREFERENCES_DIR", fake_config_dir)
    monkeypatch.setattr(preferences, "PREFERENCES_FILE", fake_config_dir / "preferences.json")

    return fake_home


@pytest.fixture
def temp_config_dir(temp_home):
    """Fixture to create temporary config directory."""
    config_dir = temp_home / ".config" / "view-secret"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


@pytest.fixture
def sample_config_content():
    """Sample valid config content."""
    return {
        "source": "gcp",
        "kubernetes": {
            "namespace": "payments",
            "context": "staging",
        },
        "gcp": {
            "project_id": "test-project"
        }
    }


@pytest.fixture
def temp_config_file(temp_config_dir, sample_config_content):
    """Fixture to create a config file at the default location."""
    config_file = temp_config_dir / "config.yml"
    with open(config_file, 'w') as f:
        yaml.dump(sample_config_content, f)
    return config_file


def write_config(path, content):
    with open(path, 'w') as f:
        yaml.dump(content, f)
    return path


class TestPreferencesModule:
    """Test suite for preferences module."""

    def test_get_preference_returns_none_when_not_set(self, temp_home):
        assert preferences.get_preference("config_path") is None

    def test_set_preference_stores_value(self, temp_home):
        preferences.set_preference("config_path", "/path/to/config.yml")
        assert preferences.get_preference("config_path") == "/path/to/config.yml"

    def test_clear_preference_removes_value(self, temp_home):
        preferences.set_preference("config_path", "/path/to/config.yml")

        assert preferences.clear_preference("config_path") is True
        assert preferences.get_preference("config_path") is None

    def test_clear_nonexistent_preference(self, temp_home):
        assert preferences.clear_preference("nonexistent_key") is False

    def test_preferences_persisted_to_json_file(self, temp_home):
        preferences.set_preference("config_path", "/path/to/config.yml")

        with open(preferences.PREFERENCES_FILE, 'r') as f:
            data = json.load(f)

        assert data["config_path"] == "/path/to/config.yml"

    def test_corrupt_preferences_file_is_ignored(self, temp_config_dir):
        (temp_config_dir / "preferences.json").write_text("{not json")

        assert preferences.get_preference("config_path") is None

    def test_non_object_preferences_file_is_ignored(self, temp_config_dir):
        (temp_config_dir / "preferences.json").write_text('["config_path"]')

        assert preferences.get_preference("config_path") is None


class TestConfigLoader:
    """Test suite for config_loader module."""

    def test_defaults_when_no_config_file(self, temp_home):
        config = config_loader.load_config()

        assert config == {"source": "kubectl", "kubernetes": {}, "gcp": {}}

    def test_defaults_are_not_shared_between_calls(self, temp_home):
        first = config_loader.load_config()
        first["kubernetes"]["namespace"] = "mutated"

        assert config_loader.load_config()["kubernetes"] == {}

    def test_resolve_config_path_default_location(self, temp_home, temp_config_file):
        path, source = config_loader.resolve_config_path()

        assert path == temp_config_file
        assert source == "default"

    def test_resolve_config_path_with_preference_set(self, temp_home, tmp_path, sample_config_content):
        custom = write_config(tmp_path / "custom.yml", sample_config_content)
        preferences.set_preference("config_path", str(custom))

        path, source = config_loader.resolve_config_path()

        assert path == custom
        assert source == "preference"

    def test_preference_with_nonexistent_path_falls_back(self, temp_home, temp_config_file, tmp_path):
        preferences.set_preference("config_path", str(tmp_path / "nonexistent.yml"))

        path, source = config_loader.resolve_config_path()

        assert path == temp_config_file
        assert source == "default"

    def test_resolve_config_path_none_when_missing(self, temp_home):
        assert config_loader.resolve_config_path() == (None, "default")

    def test_load_config_success(self, temp_home, temp_config_file):
        config = config_loader.load_config()

        assert config["source"] == "gcp"
        assert config["kubernetes"]["namespace"] == "payments"
        assert config["gcp"]["project_id"] == "test-project"

    def test_missing_sections_get_defaults(self, temp_home, temp_config_dir):
        write_config(temp_config_dir / "config.yml", {"gcp": {"project_id": "p"}})

        config = config_loader.load_config()

        assert config["source"] == "kubectl"
        assert config["kubernetes"] == {}

    def test_config_path_not_cached_at_module_level(self, temp_home, tmp_path):
        """Changing the preference takes effect without restarting Python."""
        config1 = write_config(tmp_path / "config1.yml", {"gcp": {"project_id": "project-one"}})
        config2 = write_config(tmp_path / "config2.yml", {"gcp": {"project_id": "project-two"}})

        preferences.set_preference("config_path", str(config1))
        assert config_loader.load_config()["gcp"]["project_id"] == "project-one"

        preferences.set_preference("config_path", str(config2))
        assert config_loader.load_config()["gcp"]["project_id"] == "project-two"

    def test_unsupported_source(self, temp_home, temp_config_dir):
        write_config(temp_config_dir / "config.yml", {"source": "vault"})

        with pytest.raises(ConfigError) as exc_info:
            config_loader.load_config()

        assert "Unsupported source" in str(exc_info.value)

    def test_section_must_be_mapping(self, temp_home, temp_config_dir):
        write_config(temp_config_dir / "config.yml", {"kubernetes": "payments"})

        with pytest.raises(ConfigError) as exc_info:
            config_loader.load_config()

        assert "kubernetes" in str(exc_info.value)

    def test_top_level_must_be_mapping(self, temp_home, temp_config_dir):
        (temp_config_dir / "config.yml").write_text("- kubectl\n- gcp\n")

        with pytest.raises(ConfigError) as exc_info:
            config_loader.load_config()

        assert "mapping" in str(exc_info.value)


class TestEdgeCases:
    """Test edge cases and error handling."""

    def test_empty_config_file(self, temp_home, temp_config_dir):
        (temp_config_dir / "config.yml").write_text("")

        with pytest.raises(ConfigError) as exc_info:
            config_loader.load_config()

        assert "empty" in str(exc_info.value).lower()

    def test_invalid_yaml_config(self, temp_home, temp_config_dir):
        (temp_config_dir / "config.yml").write_text("invalid: yaml: content: [")

        with pytest.raises(ConfigError) as exc_info:
            config_loader.load_config()

        assert "parse" in str(exc_info.value).lower()


class TestCLICommands:
    """Test suite for config CLI commands."""

    def test_config_set_path_validates_file_exists(self, temp_home, tmp_path):
        from view_secret.cli.main import cmd_config_set_path

        args = Namespace(path=str(tmp_path / "nonexistent.yml"))

        with pytest.raises(SystemExit) as exc_info:
            cmd_config_set_path(args)

        assert exc_info.value.code == 1

    def test_config_set_path_rejects_directory(self, temp_home, tmp_path):
        from view_secret.cli.main import cmd_config_set_path

        with pytest.raises(SystemExit) as exc_info:
            cmd_config_set_path(Namespace(path=str(tmp_path)))

        assert exc_info.value.code == 1

    def test_config_set_path_stores_absolute_path(self, temp_home, temp_config_file):
        from view_secret.cli.main import cmd_config_set_path

        cmd_config_set_path(Namespace(path=str(temp_config_file)))

        assert preferences.get_preference("config_path") == str(temp_config_file.resolve())

    def test_config_show_with_preference(self, temp_home, tmp_path, sample_config_content, capsys):
        from view_secret.cli.main import cmd_config_show

        custom = write_config(tmp_path / "custom.yml", sample_config_content)
        preferences.set_preference("config_path", str(custom))

        cmd_config_show(Namespace())

        captured = capsys.readouterr()
        assert str(custom) in captured.out
        assert "preference" in captured.out.lower()

    def test_config_show_without_config_file(self, temp_home, capsys):
        from view_secret.cli.main import cmd_config_show

        cmd_config_show(Namespace())

        captured = capsys.readouterr()
        assert str(temp_home / ".config" / "view-secret" / "config.yml") in captured.out
        assert "file not found" in captured.out

    def test_config_clear_removes_preference(self, temp_home, temp_config_file, capsys):
        from view_secret.cli.main import cmd_config_clear

        preferences.set_preference("config_path", str(temp_config_file))

        cmd_config_clear(Namespace())

        assert preferences.get_preference("config_path") is None
        assert "cleared" in capsys.readouterr().out.lower()

    def test_config_clear_without_preference(self, temp_home, capsys):
        from view_secret.cli.main import cmd_config_clear

        cmd_config_clear(Namespace())

        assert "no config path preference" in capsys.readouterr().out.lower()
