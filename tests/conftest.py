"""
Pytest configuration and shared fixtures for pkgscout tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from pkgscout.logging import SilentLogger, set_global_logger

CRATE_URL = "https://static.crates.io/crates/foo/foo-1.2.3.crate"
CRATE_API_URL = "https://crates.io/api/v1/crates/foo/versions"


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch, tmp_path: Path):
    """
    Keep tests independent of the developer's environment.

    Clears PKGSCOUT_* variables, points HOME at an empty directory and
    resets the global logger after each test.
    """
    for var in (
        "PKGSCOUT_CONFIG",
        "PKGSCOUT_TIMEOUT",
        "PKGSCOUT_PREFIX",
        "PKGSCOUT_USER_AGENT",
        "PKGSCOUT_INSTALL_COMMAND",
    ):
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def crate_url() -> str:
    """A crate download URL the Crate strategy recognizes."""
    return CRATE_URL


@pytest.fixture
def crate_api_url() -> str:
    """The versions endpoint derived from crate_url."""
    return CRATE_API_URL


@pytest.fixture
def crate_versions_data() -> dict[str, Any]:
    """
    Provide a crates.io versions payload.

    Contains a yanked release, a "v"-prefixed release and a prerelease the
    default regex must reject.
    """
    return {
        "versions": [
            {"num": "1.3.0-beta.1", "yanked": False},
            {"num": "1.2.4", "yanked": True},
            {"num": "1.2.3", "yanked": False},
            {"num": "v1.1.0", "yanked": False},
            {"num": "1.0.0", "yanked": False},
        ],
        "meta": {"total": 5},
    }


@pytest.fixture
def crate_versions_json(crate_versions_data: dict[str, Any]) -> str:
    """crate_versions_data serialized as JSON text."""
    return json.dumps(crate_versions_data)


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("config.yaml", {"key": "value"})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f)
        return path

    return _create
