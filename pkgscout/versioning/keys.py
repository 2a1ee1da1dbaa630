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

"""Version parsing and ordering for pkgscout.

This module never touches the network or the filesystem. It turns version
strings found by the strategies into comparable keys, and wraps them in the
``Version`` value type stored in ``MatchResult.matches``.
"""

from __future__ import annotations

import functools
import re
from typing import Literal

SourceHint = Literal["numeric", "string"]

# Known prerelease tag ordering (lower = older)
_PRE_TAG_RANK: dict[str, float] = {
    "dev": 0,
    "d": 0,
    "alpha": 1,
    "a": 1,
    "pre": 1,
    "preview": 1,
    "beta": 2,
    "b": 2,
    "rc": 3,
}
_UNKNOWN_PRE_RANK = 2.5  # unknown tags sort between beta and rc
_FINAL_RANK = 4.0
_POST_TAGS = {"post", "p", "rev", "r", "hotfix", "hf"}

_NUM_SEP = re.compile(r"[._-]")
_PRE_RE = re.compile(r"(?i)\b([A-Za-z]+)[._-]?([0-9A-Za-z.\-]*)")
_POST_RE = re.compile(r"(?i)\b(post|p|rev|r|hotfix|hf)[._-]?(\d+)?\b")


def _numeric_parts(text: str) -> tuple[int, ...]:
    """Parse a purely numeric version ("1.2.3") into a tuple.

    Raises ValueError on any non-numeric component so that "1.2a" is not
    silently read as (1, 2).
    """
    nums: list[int] = []
    for part in _NUM_SEP.split(text.strip()):
        if not part:
            continue
        if not part.isdigit():
            raise ValueError(f"non-numeric version component {part!r} in {text!r}")
        nums.append(int(part))
    return tuple(nums) if nums else (0,)


def _release_prefix(text: str) -> tuple[int, ...]:
    """Leading numeric release tuple of a version-like string.

    A leading "v" is ignored. Numeric tokens are collected until the first
    non-numeric one; a token such as "2rc1" contributes its leading digits
    and ends the scan. Returns (0,) when there are no digits at all.
    """
    s = text.lstrip().lower()
    if s.startswith("v"):
        s = s[1:]

    nums: list[int] = []
    for token in _NUM_SEP.split(s):
        if not token:
            continue
        if token.isdigit():
            nums.append(int(token))
            continue
        m = re.match(r"\d+", token)
        if m:
            nums.append(int(m.group(0)))
        break
    return tuple(nums) if nums else (0,)


def _pre_tokens(rest: str) -> tuple[tuple[int, object], ...]:
    # numeric tokens sort before text tokens
    out: list[tuple[int, object]] = []
    for token in re.split(r"[.\-]", rest):
        if not token:
            continue
        out.append((0, int(token)) if token.isdigit() else (1, token.lower()))
    return tuple(out)


def _suffix_after_release(base: str, release: tuple[int, ...]) -> str:
    if release == (0,):
        return base
    core = r"^\s*v?" + r"\.".join(str(n) for n in release)
    m = re.match(core, base, re.I)
    return base[m.end() :] if m else base


def _semverish_key(
    text: str,
) -> tuple[tuple[int, ...], float, tuple[tuple[int, object], ...], int]:
    """Build (release, pre_rank, pre_tokens, post_number).

    Final releases get pre_rank 4.0 so they sort after any prerelease of
    the same release tuple. Build metadata after "+" is ignored.
    """
    base = text.split("+", 1)[0]
    release = _release_prefix(base)
    suffix = _suffix_after_release(base, release)

    post = 0
    post_match = _POST_RE.search(suffix)
    if post_match:
        post = int(post_match.group(2)) if post_match.group(2) else 1

    pre_match = _PRE_RE.search(suffix)
    if not pre_match or pre_match.group(1).lower() in _POST_TAGS:
        return (release, _FINAL_RANK, (), post)

    tag = pre_match.group(1).lower()
    rank = float(_PRE_TAG_RANK.get(tag, _UNKNOWN_PRE_RANK))
    tokens = ((1, tag),) + _pre_tokens(pre_match.group(2) or "")
    return (release, rank, tokens, post)


def version_key_any(s: str, *, source: SourceHint = "string") -> tuple:
    """Compute a comparable key for any version string.

    - "numeric": strictly numeric release tuple, keyed like a final
      release; falls back to string parsing when the text contains letters.
    - "string": semver-like key; strings with no numeric prefix sort as
      plain text after every version-like string.

    Both hints produce keys in the same ordering, so numeric and fallback
    keys compare by their numbers.
    """
    if source == "numeric":
        try:
            return ("semverish", (_numeric_parts(s), _FINAL_RANK, (), 0))
        except ValueError:
            pass

    key = _semverish_key(s)
    if key[0] != (0,):
        # "v1.2.3" and "1.2.3" produce the same key on purpose
        return ("semverish", key)
    return ("text", s)


def _pad(a: tuple, b: tuple) -> tuple[tuple, tuple]:
    n = max(len(a), len(b))
    return a + (0,) * (n - len(a)), b + (0,) * (n - len(b))


def compare_any(a: str, b: str, *, source: SourceHint = "string") -> int:
    """Compare two versions.

    With ``source="numeric"`` two purely numeric versions are padded with
    zeros first ("1.2" == "1.2.0"). If either side has letters, both sides
    are compared with the semver-like key.

    Returns -1 if a < b, 0 if equal, 1 if a > b.
    """
    if source == "numeric":
        try:
            pa, pb = _pad(_numeric_parts(a), _numeric_parts(b))
        except ValueError:
            pass
        else:
            return (pa > pb) - (pa < pb)

    ka = version_key_any(a, source=source)
    kb = version_key_any(b, source=source)
    return (ka > kb) - (ka < kb)


def is_newer_any(
    remote: str,
    current: str | None,
    *,
    source: SourceHint = "string",
) -> bool:
    """True iff ``remote`` is newer than ``current`` (None counts as older)."""
    if current is None:
        return True
    return compare_any(remote, current, source=source) > 0


@functools.total_ordering
class Version:
    """Comparable version value built from a matched string.

    Equality and ordering use the parsed key, so ``Version("v1.2.3")``
    equals ``Version("1.2.3")``; ``str()`` returns the original text.

    Example:
        >>> Version("1.10.0") > Version("1.9.3")
        True
        >>> str(Version("2.0.0"))
        '2.0.0'
    """

    __slots__ = ("_text", "_key")

    def __init__(self, text: str, *, source: SourceHint = "string") -> None:
        if not isinstance(text, str):
            raise TypeError(f"Version expects a string, got {type(text).__name__}")
        text = text.strip()
        if not text:
            raise ValueError("Version string cannot be empty")
        self._text = text
        self._key = version_key_any(text, source=source)

    @property
    def key(self) -> tuple:
        return self._key

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Version({self._text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key < other._key

    def __hash__(self) -> int:
        return hash(self._key)
