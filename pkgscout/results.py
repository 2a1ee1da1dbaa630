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

"""Public API return types for pkgscout.

All dataclasses are frozen so results can be shared without anyone
mutating them behind the caller's back.

Example:
    Using result types:
        ```python
        from pkgscout.strategy import Crate

        result = Crate.find_versions(
            "https://static.crates.io/crates/serde/serde-1.0.0.crate"
        )
        print(result.url)      # https://crates.io/api/v1/crates/serde/versions
        print(result.outcome)  # "matched", "no_matches", ...
        ```
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
import re
from types import MappingProxyType
from typing import Any, Literal

from pkgscout.exceptions import ContentParseError, NetworkError
from pkgscout.versioning import Version

Outcome = Literal["not_applicable", "fetch_failed", "no_matches", "matched"]


@dataclass(frozen=True)
class MatchResult:
    """Versions found by a strategy for one URL.

    Attributes:
        matches: Matched version text mapped to its parsed Version
            (read-only).
        regex: The regex passed by the caller (None when the default was used).
        url: The query endpoint actually used, which may differ from the
            input URL.
        cached: True when content was provided instead of fetched.
        content: Raw content that was searched, if any was obtained.
        final_url: URL after redirects, when a fetch happened.
        status_code: HTTP status of the fetch, when one happened.
        messages: Fetch error messages, in order.
        applicable: False when the strategy did not recognize the URL.
    """

    matches: Mapping[str, Version]
    regex: re.Pattern[str] | None
    url: str
    cached: bool = False
    content: str | None = None
    final_url: str | None = None
    status_code: int | None = None
    messages: tuple[str, ...] = ()
    applicable: bool = True

    # compared by value, never hashed
    __hash__ = None  # type: ignore[assignment]

    @property
    def outcome(self) -> Outcome:
        """Why ``matches`` looks the way it does."""
        if not self.applicable:
            return "not_applicable"
        if self.matches:
            return "matched"
        if not self.content:
            return "fetch_failed"
        return "no_matches"

    @classmethod
    def from_match_data(cls, data: dict[str, Any]) -> MatchResult:
        """Freeze the working dict a strategy builds up into a result.

        Keys that are not result fields (extra fetch metadata) are dropped.
        """
        return cls(
            matches=MappingProxyType(dict(data.get("matches", {}))),
            regex=data.get("regex"),
            url=data["url"],
            cached=bool(data.get("cached", False)),
            content=data.get("content"),
            final_url=data.get("final_url"),
            status_code=data.get("status_code"),
            messages=tuple(data.get("messages", ())),
            applicable=bool(data.get("applicable", True)),
        )


@dataclass(frozen=True)
class CheckResult:
    """Result of checking a URL for available versions.

    Attributes:
        url: The URL that was checked.
        strategy: Name of the strategy used (e.g., "crate").
        latest: Newest version text, or None if nothing matched.
        versions: All matched version strings, oldest first.
        match_result: The strategy's full result.
    """

    url: str
    strategy: str
    latest: str | None
    versions: list[str]
    match_result: MatchResult

    def raise_for_outcome(self) -> None:
        """Raise if no content could be obtained.

        Raises:
            ContentParseError: If provided content was empty.
            NetworkError: If the fetch failed.
        """
        result = self.match_result
        if result.outcome != "fetch_failed":
            return
        if result.cached:
            raise ContentParseError(
                f"Provided content for {result.url} is empty; nothing to check"
            )
        detail = "; ".join(result.messages) or "no content returned"
        raise NetworkError(f"Could not fetch {result.url}: {detail}")


@dataclass(frozen=True)
class LinkResult:
    """Result of linking or unlinking a source directory.

    Attributes:
        linked: Symlinks created.
        removed: Symlinks removed (stale links, or everything on unlink).
        conflicts: Existing non-symlink paths that blocked a link.
    """

    linked: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    conflicts: list[Path] = field(default_factory=list)

    def __add__(self, other: LinkResult) -> LinkResult:
        return LinkResult(
            linked=self.linked + other.linked,
            removed=self.removed + other.removed,
            conflicts=self.conflicts + other.conflicts,
        )
