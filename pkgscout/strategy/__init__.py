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

"""Version lookup strategies for pkgscout.

Each strategy recognizes one URL shape and knows how to turn it into a
version list. Strategies are tried in the fixed order of ``STRATEGIES``:
registry-specific ones first, generic ones last.

Available Strategies:
    crate : Crate
        Rust crate download URLs, checked via the crates.io versions API.
    json : Json
        Any JSON endpoint; needs a block or a JSONPath to know where the
        versions are.
    page_match : PageMatch
        Any page; scans the raw text with a regex.

Example:
    Pick a strategy for a URL:

        from pkgscout.strategy import select_strategy

        strategy = select_strategy(
            "https://static.crates.io/crates/serde/serde-1.0.0.crate"
        )
        result = strategy.find_versions(
            "https://static.crates.io/crates/serde/serde-1.0.0.crate"
        )

    Look one up by name:

        from pkgscout.strategy import get_strategy

        strategy = get_strategy("page_match")

"""

from __future__ import annotations

from pkgscout.exceptions import ConfigError

from .base import Block, Strategy
from .crate import Crate
from .json_api import Json
from .page_match import PageMatch

# Tried in order; the first applicable strategy wins.
STRATEGIES: tuple[type[Strategy], ...] = (Crate, Json, PageMatch)


def get_strategy(name: str) -> type[Strategy]:
    """Look up a strategy by name (case-insensitive).

    Raises:
        ConfigError: If no strategy has that name. The message lists the
            available names.
    """
    wanted = name.strip().lower()
    for strategy in STRATEGIES:
        if strategy.NAME == wanted:
            return strategy
    available = ", ".join(s.NAME for s in STRATEGIES)
    raise ConfigError(f"Unknown strategy: {name!r}. Available: {available}")


def strategies_for_url(
    url: str,
    *,
    regex_provided: bool = False,
    block_provided: bool = False,
) -> list[type[Strategy]]:
    """All strategies that apply to ``url``, in priority order.

    Json only applies when a block (or JSONPath) is available and PageMatch
    only when a regex is, because both match any http(s) URL.
    """
    applicable: list[type[Strategy]] = []
    for strategy in STRATEGIES:
        if strategy is Json and not block_provided:
            continue
        if strategy is PageMatch and not regex_provided:
            continue
        if strategy.match(url):
            applicable.append(strategy)
    return applicable


def select_strategy(
    url: str,
    *,
    regex_provided: bool = False,
    block_provided: bool = False,
) -> type[Strategy] | None:
    """The first applicable strategy for ``url``, or None."""
    found = strategies_for_url(
        url, regex_provided=regex_provided, block_provided=block_provided
    )
    return found[0] if found else None


__all__ = [
    "Block",
    "Crate",
    "Json",
    "PageMatch",
    "STRATEGIES",
    "Strategy",
    "get_strategy",
    "select_strategy",
    "strategies_for_url",
]
