"""
Tests for the settings loader.
"""

import textwrap
from pathlib import Path

import pytest

from devstrap.core.config.loader import (
    ConfigError,
    Settings,
    find_settings_file,
    load_settings,
)


class TestFindSettingsFile:
    def test_none_when_absent(self, home: Path):
        assert find_settings_file({}, home) is None

    def test_default_location(self, home: Path):
        config = home / ".config" / "devstrap" / "config.yml"
        config.parent.mkdir(parents=True)
        config.write_text("")
        assert find_settings_file({}, home) == config

    def test_env_var_wins_even_if_missing(self, home: Path, tmp_path: Path):
        explicit = tmp_path / "elsewhere.yml"
        assert find_settings_file({"DEVSTRAP_CONFIG": str(explicit)}, home) == explicit


class TestLoadSettings:
    def test_defaults_without_file(self):
        s = load_settings(None)
        assert s == Settings()
        assert s.fetch_strategy == "archive"
        assert s.starship_preset is None

    def test_full_file(self, tmp_path: Path):
        config = tmp_path / "config.yml"
        config.write_text(textwrap.dedent("""\
            fetch_strategy: git
            starship_preset: gruvbox-rainbow
            log_level: INFO
            log_file: /tmp/devstrap.log
        """))
        s = load_settings(config)
        assert s.fetch_strategy == "git"
        assert s.starship_preset == "gruvbox-rainbow"
        assert s.log_level == "INFO"
        assert s.log_file == "/tmp/devstrap.log"

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        config = tmp_path / "config.yml"
        config.write_text("")
        assert load_settings(config) == Settings()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        config = tmp_path / "config.yml"
        config.write_text("fetch_strategy: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(config)

    def test_not_a_mapping(self, tmp_path: Path):
        config = tmp_path / "config.yml"
        config.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(config)

    def test_invalid_value(self, tmp_path: Path):
        config = tmp_path / "config.yml"
        config.write_text("fetch_strategy: rsync\n")
        with pytest.raises(ConfigError, match="Invalid settings"):
            load_settings(config)
