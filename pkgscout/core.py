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

"""Core orchestration for pkgscout.

``check_url()`` is the high-level entry point behind ``pkgscout check``: it
picks (or looks up) a strategy, runs it, sorts what was found and reports
the newest version.

Workflow:

1. Compile the caller's regex (string patterns are accepted)
2. Use the named strategy, or the first one in ``STRATEGIES`` that applies
3. Run ``find_versions()`` with the provided content or a live fetch
4. Sort matches by Version and report the newest

Design Principles:

- Strategies stay stateless; this module only wires inputs to them
- Functions return frozen dataclasses for easy testing
- Error handling uses exceptions; the CLI layer formats them for display

Example:
    Programmatic usage:
        ```python
        from pkgscout.core import check_url

        result = check_url(
            "https://static.crates.io/crates/serde/serde-1.0.0.crate"
        )
        print(f"Strategy: {result.strategy}")
        print(f"Latest: {result.latest}")
        ```
"""

from __future__ import annotations

import re

from pkgscout.exceptions import ConfigError
from pkgscout.io.fetch import Options
from pkgscout.results import CheckResult
from pkgscout.strategy import Json, get_strategy, select_strategy
from pkgscout.strategy.base import Block


def compile_regex(pattern: str | re.Pattern[str] | None) -> re.Pattern[str] | None:
    """Compile a user-supplied regex; compiled patterns pass through.

    Raises:
        ConfigError: If the pattern does not compile.
    """
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as err:
        raise ConfigError(f"Invalid regex {pattern!r}: {err}") from err


def check_url(
    url: str,
    *,
    strategy: str | None = None,
    regex: str | re.Pattern[str] | None = None,
    provided_content: str | None = None,
    options: Options | None = None,
    block: Block | None = None,
    path: str | None = None,
) -> CheckResult:
    """Find the versions available for ``url``.

    Args:
        url: Source URL (e.g. a crate download URL).
        strategy: Strategy name. When None, the json strategy is used if
            ``path`` is given, otherwise the first applicable strategy.
        regex: Version pattern, as a string or compiled pattern.
        provided_content: Content to check instead of fetching.
        options: Fetch settings.
        block: Extraction callback passed to the strategy.
        path: JSONPath expression (json strategy only).

    Returns:
        The newest version, all versions (oldest first) and the raw
            strategy result.

    Raises:
        ConfigError: If no strategy applies, the strategy name is unknown,
            the regex is invalid, or ``path`` is used with a non-JSON
            strategy.
        ContentParseError: If JSON content cannot be decoded.
    """
    from pkgscout.logging import get_global_logger

    logger = get_global_logger()
    compiled = compile_regex(regex)

    logger.step(1, 3, "Selecting strategy...")
    if strategy:
        strategy_cls = get_strategy(strategy)
    elif path:
        strategy_cls = Json
    else:
        strategy_cls = select_strategy(
            url,
            regex_provided=compiled is not None,
            block_provided=block is not None,
        )
        if strategy_cls is None:
            raise ConfigError(f"No strategy applies to URL: {url}")

    logger.verbose("STRATEGY", f"Using strategy: {strategy_cls.NAME}")

    logger.step(2, 3, "Finding versions...")
    if path:
        if strategy_cls is not Json:
            raise ConfigError(
                f"A JSONPath is only supported by the json strategy, not {strategy_cls.NAME!r}"
            )
        match_result = Json.find_versions(
            url,
            regex=compiled,
            provided_content=provided_content,
            options=options,
            block=block,
            path=path,
        )
    else:
        match_result = strategy_cls.find_versions(
            url,
            regex=compiled,
            provided_content=provided_content,
            options=options,
            block=block,
        )

    logger.step(3, 3, "Sorting versions...")
    ordered = sorted(match_result.matches, key=match_result.matches.__getitem__)
    latest = ordered[-1] if ordered else None

    logger.verbose(
        "STRATEGY",
        f"Outcome: {match_result.outcome}, {len(ordered)} version(s), latest: {latest}",
    )

    return CheckResult(
        url=url,
        strategy=strategy_cls.NAME,
        latest=latest,
        versions=ordered,
        match_result=match_result,
    )
