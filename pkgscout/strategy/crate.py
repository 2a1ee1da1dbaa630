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

"""Rust crate registry strategy for pkgscout.

Identifies versions of a Rust crate from the registry's ``versions`` API
endpoint instead of the download URL itself.

Crate download URLs have the following format:
    ``https://static.crates.io/crates/example/example-1.2.3.crate``

which maps to the API endpoint:
    ``https://crates.io/api/v1/crates/example/versions``

Registries that mirror the crates.io layout work the same way: the
``static.`` prefix is dropped from the download host to get the API host
(``static.example.io`` -> ``example.io``).

The endpoint returns JSON like:
    ```json
    {"versions": [{"num": "1.2.3", "yanked": false}, ...]}
    ```

The default regex identifies versions like ``1.2.3``/``v1.2.3`` from the
``num`` field, and yanked versions are skipped. Pass a different regex if a
crate uses another format (e.g. ``1.2.3d``, ``1.2.3-4``), or a block to
replace the extraction logic entirely.

Example:
    From Python:
        ```python
        from pkgscout.strategy.crate import Crate

        url = "https://static.crates.io/crates/ripgrep/ripgrep-14.1.0.crate"
        Crate.match(url)                  # True
        Crate.generate_input_values(url)  # {"url": "https://crates.io/api/v1/crates/ripgrep/versions"}

        result = Crate.find_versions(url)
        print(max(result.matches.values()))
        ```

    Checking content fetched earlier (no network call):
        ```python
        result = Crate.find_versions(url, provided_content=cached_json)
        assert result.cached
        ```

Note:
    Unrecognized URLs and failed fetches both return an empty result. Use
    ``MatchResult.outcome`` to tell them apart. Malformed JSON raises
    ContentParseError.
"""

from __future__ import annotations

import re
from typing import Any

from pkgscout.io.fetch import Options
from pkgscout.results import MatchResult

from .base import Block, finish, new_match_data, resolve_content
from .json_api import Json

# Used to identify versions when a regex isn't provided.
DEFAULT_REGEX = re.compile(r"^v?(\d+(?:\.\d+)+)$", re.I)

# Decides whether the strategy applies to a URL.
URL_MATCH_REGEX = re.compile(
    r"""
    ^https?://static\.(?P<host>[^/]+)/crates  # the registry's static content host
    /(?P<package>[^/]+)                       # the name of the package
    /.+\.crate                                # the crate filename
    """,
    re.I | re.X,
)

API_URL_TEMPLATE = "https://{host}/api/v1/crates/{package}/versions"


def default_block(data: Any, regex: re.Pattern[str] | None) -> list[str]:
    """Pick non-yanked version numbers matching ``regex`` from a versions payload."""
    regex = regex or DEFAULT_REGEX
    versions = data.get("versions") if isinstance(data, dict) else None

    found: list[str] = []
    for version in versions or []:
        if not isinstance(version, dict) or version.get("yanked"):
            continue
        num = version.get("num")
        if not isinstance(num, str):
            continue
        m = regex.search(num)
        if m:
            found.append(m.group(1) if regex.groups else m.group(0))
    return found


class Crate:
    """Strategy for crates.io download URLs."""

    NAME = "crate"
    DEFAULT_REGEX = DEFAULT_REGEX
    DEFAULT_BLOCK = staticmethod(default_block)

    @classmethod
    def match(cls, url: str) -> bool:
        """Whether the strategy can be applied to ``url``."""
        return bool(URL_MATCH_REGEX.match(url))

    @classmethod
    def generate_input_values(cls, url: str) -> dict[str, str]:
        """Derive the API query URL from a crate download URL.

        Returns:
            ``{"url": <versions endpoint>}``, or an empty dict when the URL
                is not a crate download URL.
        """
        values: dict[str, str] = {}
        m = URL_MATCH_REGEX.match(url)
        if not m:
            return values

        values["url"] = API_URL_TEMPLATE.format(
            host=m.group("host").lower(), package=m.group("package")
        )
        return values

    @classmethod
    def find_versions(
        cls,
        url: str,
        regex: re.Pattern[str] | None = None,
        provided_content: str | None = None,
        options: Options | None = None,
        block: Block | None = None,
    ) -> MatchResult:
        """Generate the API URL and check its content for versions.

        Args:
            url: Crate download URL.
            regex: Pattern for matching versions; ``DEFAULT_REGEX`` if None.
            provided_content: JSON to check instead of fetching.
            options: Fetch settings (timeout, headers, ...).
            block: Replaces ``default_block``; receives the decoded JSON and
                the regex.

        Returns:
            Result whose ``url`` is the API endpoint when the URL was
                recognized.

        Raises:
            ContentParseError: If the content is not valid JSON.
        """
        from pkgscout.logging import get_global_logger

        logger = get_global_logger()
        match_data = new_match_data(url, regex, provided_content)

        generated = cls.generate_input_values(url)
        if not generated:
            logger.verbose("STRATEGY", f"crate: not a crate URL: {url}")
            match_data["applicable"] = False
            return finish(match_data)

        match_data["url"] = generated["url"]
        logger.verbose("STRATEGY", f"crate: API URL: {match_data['url']}")

        content = resolve_content(match_data, provided_content, options)
        if not content:
            logger.verbose("STRATEGY", "crate: no content to check")
            return finish(match_data)

        strings = Json.versions_from_content(
            content, regex or DEFAULT_REGEX, block or default_block
        )
        logger.verbose("STRATEGY", f"crate: {len(strings)} version(s) matched")
        return finish(match_data, strings)
