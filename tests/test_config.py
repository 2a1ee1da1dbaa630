"""
Tests for pkgscout.config.loader module.

Tests configuration loading including:
- Built-in defaults
- YAML file discovery and parsing
- Deep merging
- Environment and .env overrides
- Conversion to fetch Options
"""

from __future__ import annotations

from pathlib import Path

import pytest

from pkgscout.config import DEFAULT_CONFIG, load_config, options_from_config
from pkgscout.config.loader import _deep_merge_dicts
from pkgscout.exceptions import ConfigError


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults_without_files(self):
        """Test that defaults are returned when no config exists."""
        config = load_config()

        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_defaults_not_mutated(self):
        config = load_config()
        config["headers"]["X-Test"] = "1"

        assert DEFAULT_CONFIG["headers"] == {}

    def test_explicit_file(self, create_yaml_file):
        path = create_yaml_file(
            "pkgscout.yaml", {"timeout": 5, "headers": {"Accept": "text/html"}}
        )

        config = load_config(path)

        assert config["timeout"] == 5
        assert config["headers"] == {"Accept": "text/html"}
        assert config["prefix"] == "/usr/local"

    def test_explicit_file_missing(self, tmp_test_dir):
        with pytest.raises(ConfigError, match="Config file not found"):
            load_config(tmp_test_dir / "missing.yaml")

    def test_invalid_yaml(self, tmp_test_dir):
        path = tmp_test_dir / "bad.yaml"
        path.write_text("timeout: [unclosed\n")

        with pytest.raises(ConfigError, match="Error parsing YAML"):
            load_config(path)

    def test_non_mapping(self, create_yaml_file):
        path = create_yaml_file("list.yaml", ["a", "b"])

        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config(path)

    def test_empty_file(self, tmp_test_dir):
        path = tmp_test_dir / "empty.yaml"
        path.write_text("")

        assert load_config(path) == DEFAULT_CONFIG

    def test_config_env_var(self, create_yaml_file, monkeypatch):
        path = create_yaml_file("env.yaml", {"prefix": "/opt/homebrew"})
        monkeypatch.setenv("PKGSCOUT_CONFIG", str(path))

        assert load_config()["prefix"] == "/opt/homebrew"

    def test_user_config_file(self):
        """Test that ~/.config/pkgscout/config.yaml is picked up."""
        user_config = Path.home() / ".config" / "pkgscout" / "config.yaml"
        user_config.parent.mkdir(parents=True)
        user_config.write_text("install_command: brew install --cask\n")

        assert load_config()["install_command"] == "brew install --cask"

    def test_environment_overrides_file(self, create_yaml_file, monkeypatch):
        path = create_yaml_file("cfg.yaml", {"timeout": 5, "prefix": "/opt"})
        monkeypatch.setenv("PKGSCOUT_TIMEOUT", "12.5")

        config = load_config(path)

        assert config["timeout"] == 12.5
        assert config["prefix"] == "/opt"

    def test_invalid_environment_timeout(self, monkeypatch):
        monkeypatch.setenv("PKGSCOUT_TIMEOUT", "soon")

        with pytest.raises(ConfigError, match="Invalid value for PKGSCOUT_TIMEOUT"):
            load_config()

    def test_dotenv_file(self, tmp_test_dir, monkeypatch):
        """Test that a .env file in the working directory is loaded."""
        (tmp_test_dir / ".env").write_text("PKGSCOUT_PREFIX=/from/dotenv\n")

        config = load_config()

        assert config["prefix"] == "/from/dotenv"
        monkeypatch.delenv("PKGSCOUT_PREFIX", raising=False)

    def test_dotenv_can_be_disabled(self, tmp_test_dir):
        (tmp_test_dir / ".env").write_text("PKGSCOUT_PREFIX=/from/dotenv\n")

        assert load_config(use_dotenv=False)["prefix"] == "/usr/local"


class TestDeepMerge:
    """Tests for _deep_merge_dicts()."""

    def test_nested_dicts_merged(self):
        base = {"headers": {"A": "1", "B": "1"}, "timeout": 30}
        overlay = {"headers": {"B": "2"}}

        assert _deep_merge_dicts(base, overlay) == {
            "headers": {"A": "1", "B": "2"},
            "timeout": 30,
        }

    def test_lists_replaced(self):
        assert _deep_merge_dicts({"x": [1, 2]}, {"x": [3]}) == {"x": [3]}

    def test_inputs_not_mutated(self):
        base = {"headers": {"A": "1"}}
        _deep_merge_dicts(base, {"headers": {"B": "2"}})

        assert base == {"headers": {"A": "1"}}


class TestOptionsFromConfig:
    """Tests for options_from_config()."""

    def test_defaults(self):
        options = options_from_config(DEFAULT_CONFIG)

        assert options.timeout == 30
        assert options.user_agent == DEFAULT_CONFIG["user_agent"]
        assert options.headers == {}

    def test_headers_stringified(self):
        options = options_from_config({"headers": {"X-Count": 3}})

        assert options.headers == {"X-Count": "3"}

    def test_bad_headers(self):
        with pytest.raises(ConfigError, match="'headers' must be a mapping"):
            options_from_config({"headers": ["Accept"]})

    @pytest.mark.parametrize("timeout", ["30", True, None])
    def test_bad_timeout(self, timeout):
        with pytest.raises(ConfigError, match="'timeout' must be a number"):
            options_from_config({"timeout": timeout})

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigError, match="timeout must be positive"):
            options_from_config({"timeout": -1})
