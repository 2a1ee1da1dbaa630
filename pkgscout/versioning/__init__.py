"""
Version parsing and comparison utilities for pkgscout.

Strategies produce plain version strings; this package turns them into
comparable values so callers can sort them and pick the newest one.

Public API
----------
Version : class
    Totally ordered version value (``str()`` gives back the original text).
SourceHint : Literal type
    Parsing mode: "numeric" (digits only) or "string" (semver-like).
compare_any : function
    Compare two version strings, returning -1, 0, or 1.
is_newer_any : function
    Check if a remote version is newer than the current version.
version_key_any : function
    Generate a sortable key for any version string.

Examples
--------
    >>> from pkgscout.versioning import Version, compare_any
    >>> compare_any("1.2.0", "1.1.9")
    1
    >>> max([Version("0.9.1"), Version("0.10.0")])
    Version('0.10.0')

Notes
-----
- A leading "v" is ignored: "v1.2.3" == "1.2.3"
- Releases sort after their prereleases: 1.0.0-rc.1 < 1.0.0
- Strings without a numeric prefix sort as plain text
"""

from .keys import (
    SourceHint,
    Version,
    compare_any,
    is_newer_any,
    version_key_any,
)

__all__ = [
    "SourceHint",
    "Version",
    "compare_any",
    "is_newer_any",
    "version_key_any",
]
