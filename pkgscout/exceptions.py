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

"""Exception hierarchy for pkgscout.

Library users can tell the different failure kinds apart:

- ConfigError: Bad strategy names, invalid regexes, malformed config files
- NetworkError: A version check could not obtain any content
- ContentParseError: Fetched or provided content could not be decoded
- LinkError: Filesystem failures while creating or removing symlinks

Everything inherits from PkgScoutError, so a single except clause catches
all of them.

Note:
    Looking up versions for a URL that no strategy recognizes, or a lookup
    that finds nothing, is NOT an error. Those cases come back as an empty
    MatchResult whose ``outcome`` says what happened.

Example:
    Catching specific error types:
        ```python
        from pkgscout.core import check_url
        from pkgscout.exceptions import ConfigError, ContentParseError

        try:
            result = check_url("https://static.crates.io/crates/foo/foo-1.0.0.crate")
        except ConfigError as e:
            print(f"Configuration error: {e}")
        except ContentParseError as e:
            print(f"Registry returned garbage: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "PkgScoutError",
    "ConfigError",
    "NetworkError",
    "ContentParseError",
    "LinkError",
]


class PkgScoutError(Exception):
    """Base exception for all pkgscout errors."""

    pass


class ConfigError(PkgScoutError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - Unknown strategy names
    - Regex patterns that do not compile
    - JSONPath expressions that do not parse
    - Conflicting fetch options (form and JSON POST bodies together)
    - YAML config files that are unreadable or not a mapping
    """

    pass


class NetworkError(PkgScoutError):
    """Raised when a version check could not fetch any content.

    The fetch layer itself never raises for HTTP failures. Callers that
    want a hard failure use ``CheckResult.raise_for_outcome()``, which
    raises this with the collected fetch messages.
    """

    pass


class ContentParseError(PkgScoutError):
    """Raised when content cannot be decoded as structured data.

    Example:
        Catching decode errors:
            ```python
            from pkgscout.strategy import Json
            from pkgscout.exceptions import ContentParseError

            try:
                Json.parse_json("<html>oops</html>")
            except ContentParseError as e:
                print(f"Not JSON: {e}")
            ```
    """

    pass


class LinkError(PkgScoutError):
    """Raised for filesystem failures while linking auxiliary files."""

    pass
