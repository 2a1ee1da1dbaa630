# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Strategy protocol and shared helpers for pkgscout.

A strategy turns a source URL into a set of available versions. Every
strategy is a class with only class-level state (a default regex, a default
extraction block) and classmethods; nothing is ever instantiated.

- Strategy protocol: what every strategy class exposes
- Block: the extraction callback type
- Helpers used by every strategy to build results the same way

Design Philosophy:
    - Strategies are Protocol classes (structural subtyping, not inheritance)
    - Strategies are stateless; every call is independent
    - Selection is an ordered tuple tried in turn (see pkgscout.strategy)
    - "Not my URL" and "nothing found" are results, not exceptions

Example:
    Implementing a custom strategy:
        ```python
        import re

        from pkgscout.strategy.base import new_match_data, finish
        from pkgscout.results import MatchResult

        class Example:
            NAME = "example"

            @classmethod
            def match(cls, url: str) -> bool:
                return url.startswith("https://example.com/")

            @classmethod
            def find_versions(cls, url, regex=None, provided_content=None,
                              options=None, block=None) -> MatchResult:
                match_data = new_match_data(url, regex, provided_content)
                ...
                return finish(match_data, ["1.0.0"])
        ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
import re
from typing import Any, Protocol, Union

from pkgscout.io.fetch import Options
from pkgscout.results import MatchResult
from pkgscout.versioning import Version

# A block receives decoded content and the active regex and returns one
# version string, a list of them, or None.
BlockResult = Union[str, list, tuple, None]
Block = Callable[[Any, "re.Pattern[str] | None"], BlockResult]


class Strategy(Protocol):
    """Protocol for version lookup strategies."""

    NAME: str

    @classmethod
    def match(cls, url: str) -> bool:
        """Whether the strategy can be applied to ``url``. No side effects."""
        ...

    @classmethod
    def find_versions(
        cls,
        url: str,
        regex: re.Pattern[str] | None = None,
        provided_content: str | None = None,
        options: Options | None = None,
        block: Block | None = None,
    ) -> MatchResult:
        """Find versions for ``url``.

        Args:
            url: Source URL.
            regex: Pattern used to recognize versions. Strategies fall back
                to their own default when None.
            provided_content: Content to check instead of fetching.
            options: Fetch settings forwarded to the fetch layer.
            block: Extraction callback that replaces the default logic.

        Returns:
            The frozen result. Never raises for unrecognized URLs or fetch
                failures.
        """
        ...


def new_match_data(
    url: str,
    regex: re.Pattern[str] | None,
    provided_content: str | None,
) -> dict[str, Any]:
    """Start the working dict every find_versions() fills in."""
    match_data: dict[str, Any] = {"matches": {}, "regex": regex, "url": url}
    if isinstance(provided_content, str):
        match_data["cached"] = True
    return match_data


def normalize_block_result(value: BlockResult) -> list[str]:
    """Turn a block's return value into a list of version strings.

    A single string becomes a one-item list, None becomes an empty list and
    None/empty items inside a list are dropped.

    Raises:
        TypeError: If the block returned something else.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        out: list[str] = []
        for item in value:
            if item is None or item == "":
                continue
            if not isinstance(item, str):
                raise TypeError(
                    f"strategy block returned a non-string item: {item!r}"
                )
            out.append(item)
        return out
    raise TypeError(
        f"strategy block must return a string or a list of strings, "
        f"got {type(value).__name__}"
    )


def matches_from_strings(strings: Iterable[str]) -> dict[str, Version]:
    """Key each version string to its parsed Version (first one wins).

    Blank and whitespace-only strings are skipped.
    """
    matches: dict[str, Version] = {}
    for text in strings:
        if text.strip() and text not in matches:
            matches[text] = Version(text)
    return matches


def finish(match_data: dict[str, Any], strings: Iterable[str] = ()) -> MatchResult:
    """Add matches for ``strings`` and freeze the working dict."""
    match_data["matches"] = {**match_data["matches"], **matches_from_strings(strings)}
    return MatchResult.from_match_data(match_data)


def resolve_content(
    match_data: dict[str, Any],
    provided_content: str | None,
    options: Options | None,
) -> str | None:
    """Use provided content, or fetch ``match_data["url"]`` and merge metadata.

    Returns:
        The content to search, or None/"" when nothing was obtained.
    """
    from pkgscout.io.fetch import page_content

    if provided_content is not None:
        match_data["content"] = provided_content
        return provided_content

    match_data.update(page_content(match_data["url"], options=options))
    return match_data.get("content")
