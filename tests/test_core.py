"""
Tests for pkgscout.core module.

Tests the check_url() orchestration including:
- Automatic strategy selection
- Named strategies and JSONPath handling
- Version sorting and latest selection
- Error cases
"""

from __future__ import annotations

import re

import pytest
import requests_mock

from pkgscout.core import check_url, compile_regex
from pkgscout.exceptions import ConfigError, ContentParseError, NetworkError
from pkgscout.logging import get_logger, set_global_logger


class TestCompileRegex:
    """Tests for compile_regex()."""

    def test_string_compiled(self):
        assert compile_regex(r"(\d+)").pattern == r"(\d+)"

    def test_compiled_passthrough(self):
        pattern = re.compile("x")
        assert compile_regex(pattern) is pattern

    def test_none(self):
        assert compile_regex(None) is None

    def test_invalid(self):
        with pytest.raises(ConfigError, match="Invalid regex"):
            compile_regex("(unclosed")


class TestCheckUrl:
    """Tests for check_url()."""

    def test_crate_url_selects_crate(self, crate_url, crate_versions_json):
        result = check_url(crate_url, provided_content=crate_versions_json)

        assert result.strategy == "crate"
        assert result.versions == ["1.0.0", "1.1.0", "1.2.3"]
        assert result.latest == "1.2.3"
        assert result.match_result.cached is True

    def test_sorting_is_by_version_not_text(self):
        content = "tool-1.9.0.tar.gz tool-1.10.0.tar.gz tool-1.2.0.tar.gz"

        result = check_url(
            "https://example.com/dl/",
            regex=r"tool-([\d.]+)\.tar\.gz",
            provided_content=content,
        )

        assert result.strategy == "page_match"
        assert result.versions == ["1.2.0", "1.9.0", "1.10.0"]
        assert result.latest == "1.10.0"

    def test_path_selects_json(self):
        result = check_url(
            "https://api.example.com/release",
            path="release.version",
            provided_content='{"release": {"version": "2.4.1"}}',
        )

        assert result.strategy == "json"
        assert result.latest == "2.4.1"

    def test_named_strategy(self, crate_url):
        result = check_url(
            crate_url,
            strategy="page_match",
            regex=r"foo-([\d.]+)\.crate",
            provided_content="foo-1.2.3.crate",
        )

        assert result.strategy == "page_match"
        assert result.latest == "1.2.3"

    def test_no_strategy_applies(self):
        with pytest.raises(ConfigError, match="No strategy applies"):
            check_url("https://example.com/downloads/")

    def test_unknown_strategy(self):
        with pytest.raises(ConfigError, match="Unknown strategy"):
            check_url("https://example.com/", strategy="nope")

    def test_path_with_non_json_strategy(self, crate_url):
        with pytest.raises(ConfigError, match="only supported by the json strategy"):
            check_url(crate_url, strategy="crate", path="versions[*].num")

    def test_path_on_crate_url_uses_json(self, crate_url, crate_versions_json):
        """Test that a JSONPath picks the json strategy even for a crate URL."""
        result = check_url(
            crate_url,
            path="versions[*].num",
            regex=r"^v?(\d+(?:\.\d+)+)$",
            provided_content=crate_versions_json,
        )

        assert result.strategy == "json"
        assert result.versions == ["1.0.0", "1.1.0", "1.2.3", "1.2.4"]
        assert result.latest == "1.2.4"

    def test_steps_are_printed(self, crate_url, crate_versions_json, capsys):
        set_global_logger(get_logger())

        check_url(crate_url, provided_content=crate_versions_json)

        out = capsys.readouterr().out
        assert "[1/3] Selecting strategy..." in out
        assert "[2/3] Finding versions..." in out
        assert "[3/3] Sorting versions..." in out

    def test_no_matches(self, crate_url, crate_versions_json):
        result = check_url(
            crate_url, regex=r"^never$", provided_content=crate_versions_json
        )

        assert result.latest is None
        assert result.versions == []
        assert result.match_result.outcome == "no_matches"
        result.raise_for_outcome()

    def test_fetch_failure_raise_for_outcome(self, crate_url, crate_api_url):
        with requests_mock.Mocker() as m:
            m.get(crate_api_url, status_code=503)
            result = check_url(crate_url)

        assert result.latest is None
        with pytest.raises(NetworkError, match="503"):
            result.raise_for_outcome()

    def test_empty_provided_content_is_not_a_fetch_error(self, crate_url, crate_api_url):
        """Test that empty provided content is reported without blaming the network."""
        result = check_url(crate_url, provided_content="")

        assert result.match_result.outcome == "fetch_failed"
        with pytest.raises(ContentParseError, match="Provided content for .* is empty") as exc_info:
            result.raise_for_outcome()
        assert "Could not fetch" not in str(exc_info.value)
        assert crate_api_url in str(exc_info.value)
