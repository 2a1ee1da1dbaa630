"""
JSON API strategy for pkgscout.

This strategy checks any JSON endpoint for versions. It is also the
decode-and-extract helper other strategies build on: the Crate strategy
hands registry responses to ``Json.versions_from_content()``.

Because there is no way to know where versions live in an arbitrary JSON
document, the strategy only applies when the caller says how to extract
them, either with a block (a callable) or with a JSONPath expression.

Extraction:
    Block:
        ``block(data, regex)`` gets the decoded JSON and the regex and
        returns a version string, a list of them, or None.

    JSONPath:
        Every value found by the expression is turned into a string. With a
        regex, values that do not match are dropped and the first capture
        group (or whole match) is kept.

JSONPath Examples:
    - "version" -> {"version": "1.2.3"}
    - "release.version" -> {"release": {"version": "1.2.3"}}
    - "releases[*].tag" -> every tag in a list of releases

Error Handling:
    - ContentParseError: Content is not valid JSON
    - ConfigError: No block or path given, or the JSONPath does not parse
    - Fetch failures are not errors: the result just has no matches

Example:
    From Python:

        import re
        from pkgscout.strategy.json_api import Json

        result = Json.find_versions(
            "https://api.vendor.com/releases",
            regex=re.compile(r"^v?(\\d+(?:\\.\\d+)+)$"),
            path="releases[*].tag",
        )
        print(sorted(result.matches.values()))

Notes:
- JSONPath uses the jsonpath-ng library
- Decoding uses the standard json module
"""

from __future__ import annotations

import json
import re
from typing import Any

from jsonpath_ng import parse as jsonpath_parse

from pkgscout.exceptions import ConfigError, ContentParseError
from pkgscout.io.fetch import Options
from pkgscout.results import MatchResult

from .base import Block, finish, new_match_data, normalize_block_result, resolve_content

_HTTP_URL = re.compile(r"^https?://", re.I)


class Json:
    """Strategy for generic JSON endpoints."""

    NAME = "json"

    @classmethod
    def match(cls, url: str) -> bool:
        return bool(_HTTP_URL.match(url))

    @staticmethod
    def parse_json(content: str) -> Any:
        """Decode JSON content.

        Raises:
            ContentParseError: If the content is not valid JSON.
        """
        try:
            return json.loads(content)
        except json.JSONDecodeError as err:
            raise ContentParseError(
                f"Content could not be parsed as JSON: {err}"
            ) from err

    @classmethod
    def versions_from_content(
        cls,
        content: str,
        regex: re.Pattern[str] | None = None,
        block: Block | None = None,
    ) -> list[str]:
        """Decode ``content`` and let ``block`` pick the versions out of it.

        Args:
            content: Raw JSON text.
            regex: Pattern passed through to the block.
            block: Extraction callback. Without one nothing is extracted.

        Returns:
            Version strings in the order the block produced them.

        Raises:
            ContentParseError: If the content is not valid JSON.
            TypeError: If the block returns something other than a string,
                a list of strings, or None.
        """
        data = cls.parse_json(content)
        if block is None:
            return []
        return normalize_block_result(block(data, regex))

    @staticmethod
    def versions_from_path(
        data: Any,
        path: str,
        regex: re.Pattern[str] | None = None,
    ) -> list[str]:
        """Extract versions from decoded JSON with a JSONPath expression.

        Raises:
            ConfigError: If ``path`` is not a valid JSONPath expression.
        """
        try:
            expr = jsonpath_parse(path)
        except Exception as err:
            raise ConfigError(f"Invalid JSONPath {path!r}: {err}") from err

        versions: list[str] = []
        for found in expr.find(data):
            if found.value is None:
                continue
            text = str(found.value)
            if regex is None:
                versions.append(text)
                continue
            m = regex.search(text)
            if not m:
                continue
            value = m.group(1) if regex.groups else m.group(0)
            if value:
                versions.append(value)
        return versions

    @classmethod
    def find_versions(
        cls,
        url: str,
        regex: re.Pattern[str] | None = None,
        provided_content: str | None = None,
        options: Options | None = None,
        block: Block | None = None,
        path: str | None = None,
    ) -> MatchResult:
        """Fetch JSON from ``url`` (or use provided content) and extract versions.

        Raises:
            ConfigError: If neither ``block`` nor ``path`` is given.
            ContentParseError: If the content is not valid JSON.
        """
        from pkgscout.logging import get_global_logger

        logger = get_global_logger()
        if block is None and not path:
            raise ConfigError("Json strategy requires a block or a JSONPath")

        match_data = new_match_data(url, regex, provided_content)
        if not cls.match(url):
            match_data["applicable"] = False
            return finish(match_data)

        logger.verbose("STRATEGY", f"json: checking {url}")
        content = resolve_content(match_data, provided_content, options)
        if not content:
            logger.verbose("STRATEGY", "json: no content to check")
            return finish(match_data)

        if block is not None:
            strings = cls.versions_from_content(content, regex, block)
        else:
            strings = cls.versions_from_path(cls.parse_json(content), path, regex)

        logger.verbose("STRATEGY", f"json: {len(strings)} version(s) extracted")
        return finish(match_data, strings)
