"""
Page regex strategy for pkgscout.

The generic fallback: fetch a page (HTML, plain text, anything) and scan the
raw text with a regex. Each match contributes its first capture group, or
the whole match when the regex has no groups. Results keep first-seen
order and drop duplicates.

The strategy only applies when a regex is provided, since there is no
sensible default for an arbitrary page.

Example:
    From Python:

        import re
        from pkgscout.strategy.page_match import PageMatch

        result = PageMatch.find_versions(
            "https://www.example.com/downloads/",
            regex=re.compile(r"example-(\\d+(?:\\.\\d+)+)\\.tar\\.gz"),
        )

Notes:
- The regex is applied to the raw response text, not parsed HTML
- A block receives the raw text and the regex instead of decoded JSON
"""

from __future__ import annotations

import re

from pkgscout.exceptions import ConfigError
from pkgscout.io.fetch import Options
from pkgscout.results import MatchResult

from .base import Block, finish, new_match_data, normalize_block_result, resolve_content

_HTTP_URL = re.compile(r"^https?://", re.I)


class PageMatch:
    """Strategy that scans page text with a regex."""

    NAME = "page_match"

    @classmethod
    def match(cls, url: str) -> bool:
        return bool(_HTTP_URL.match(url))

    @staticmethod
    def versions_from_content(
        content: str,
        regex: re.Pattern[str] | None,
        block: Block | None = None,
    ) -> list[str]:
        """Scan ``content`` with ``regex`` (or hand both to ``block``)."""
        if block is not None:
            return normalize_block_result(block(content, regex))
        if regex is None:
            return []

        seen: dict[str, None] = {}
        for m in regex.finditer(content):
            text = m.group(1) if regex.groups else m.group(0)
            if text:
                seen.setdefault(text, None)
        return list(seen)

    @classmethod
    def find_versions(
        cls,
        url: str,
        regex: re.Pattern[str] | None = None,
        provided_content: str | None = None,
        options: Options | None = None,
        block: Block | None = None,
    ) -> MatchResult:
        """Fetch ``url`` (or use provided content) and scan it for versions.

        Raises:
            ConfigError: If neither a regex nor a block is given.
        """
        from pkgscout.logging import get_global_logger

        logger = get_global_logger()
        if regex is None and block is None:
            raise ConfigError("page_match strategy requires a regex or a block")

        match_data = new_match_data(url, regex, provided_content)
        if not cls.match(url):
            match_data["applicable"] = False
            return finish(match_data)

        logger.verbose("STRATEGY", f"page_match: checking {url}")
        content = resolve_content(match_data, provided_content, options)
        if not content:
            logger.verbose("STRATEGY", "page_match: no content to check")
            return finish(match_data)

        strings = cls.versions_from_content(content, regex, block)
        logger.verbose("STRATEGY", f"page_match: {len(strings)} version(s) matched")
        return finish(match_data, strings)
