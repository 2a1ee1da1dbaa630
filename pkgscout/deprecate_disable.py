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

"""Deprecation and disablement messages for packages.

Packages come in two kinds, "formula" (built from source) and "cask"
(prebuilt application). Either can be deprecated (still installable, with a
warning) or disabled (no longer installable). The reason is either one of
the preset keys below or free text, which is used verbatim after
"because it".

Example:
    Build a message:
        ```python
        from pkgscout.deprecate_disable import PackageStatus, message

        status = PackageStatus(
            kind="formula",
            deprecated=True,
            deprecation_reason="does_not_build",
            deprecation_replacement="foo",
        )
        print(message(status))
        # deprecated because it does not build!
        # Replacement:
        #   brew install foo
        ```
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Literal

from pkgscout.exceptions import ConfigError

PackageKind = Literal["formula", "cask"]
StatusType = Literal["deprecated", "disabled"]


class Reason(str, Enum):
    """Preset deprecation/disable reason keys."""

    REPO_ARCHIVED = "repo_archived"
    REPO_REMOVED = "repo_removed"
    UNMAINTAINED = "unmaintained"
    UNSUPPORTED = "unsupported"
    DEPRECATED_UPSTREAM = "deprecated_upstream"
    VERSIONED_FORMULA = "versioned_formula"
    CHECKSUM_MISMATCH = "checksum_mismatch"
    DOES_NOT_BUILD = "does_not_build"
    NO_LICENSE = "no_license"
    DISCONTINUED = "discontinued"
    MOVED_TO_MAS = "moved_to_mas"
    NO_LONGER_AVAILABLE = "no_longer_available"
    NO_LONGER_MEETS_CRITERIA = "no_longer_meets_criteria"
    UNSIGNED = "unsigned"
    FAILS_GATEKEEPER_CHECK = "fails_gatekeeper_check"

    def __str__(self) -> str:
        return self.value


SHARED_REASONS: dict[Reason, str] = {
    Reason.REPO_ARCHIVED: "has an archived upstream repository",
    Reason.REPO_REMOVED: "has a removed upstream repository",
    Reason.UNMAINTAINED: "is not maintained upstream",
    Reason.UNSUPPORTED: "is not supported upstream",
    Reason.DEPRECATED_UPSTREAM: "is deprecated upstream",
    Reason.VERSIONED_FORMULA: "is a versioned formula",
    Reason.CHECKSUM_MISMATCH: (
        "was built with an initially released source file that had "
        "a different checksum than the current one. "
        "Upstream's repository might have been compromised. "
        "We can re-package this once upstream has confirmed that they "
        "retagged their release"
    ),
}

FORMULA_REASONS: dict[Reason, str] = {
    **SHARED_REASONS,
    Reason.DOES_NOT_BUILD: "does not build",
    Reason.NO_LICENSE: "has no license",
}

CASK_REASONS: dict[Reason, str] = {
    **SHARED_REASONS,
    Reason.DISCONTINUED: "is discontinued upstream",
    Reason.MOVED_TO_MAS: "is now exclusively distributed on the Mac App Store",
    Reason.NO_LONGER_AVAILABLE: "is no longer available upstream",
    Reason.NO_LONGER_MEETS_CRITERIA: "no longer meets the criteria for acceptable casks",
    Reason.UNSIGNED: "is unsigned or does not meet signature requirements",
    Reason.FAILS_GATEKEEPER_CHECK: "does not pass the macOS Gatekeeper check",
}

_REASONS_BY_KIND: dict[str, dict[Reason, str]] = {
    "formula": FORMULA_REASONS,
    "cask": CASK_REASONS,
}


@dataclass(frozen=True)
class PackageStatus:
    """Deprecation/disable state of one package.

    Attributes:
        kind: "formula" or "cask"; selects which preset reasons apply.
        deprecated: Whether the package is deprecated.
        disabled: Whether the package is disabled.
        deprecation_reason: Preset key or free text.
        disable_reason: Preset key or free text.
        deprecation_replacement: Package to install instead.
        disable_replacement: Package to install instead.
        deprecation_date: When the package was deprecated.
        disable_date: When the package was (or will be) disabled.
    """

    kind: PackageKind
    deprecated: bool = False
    disabled: bool = False
    deprecation_reason: str | Reason | None = None
    disable_reason: str | Reason | None = None
    deprecation_replacement: str | None = None
    disable_replacement: str | None = None
    deprecation_date: date | None = None
    disable_date: date | None = None

    def __post_init__(self) -> None:
        if self.kind not in _REASONS_BY_KIND:
            raise ConfigError(
                f"Unknown package kind: {self.kind!r}. Expected 'formula' or 'cask'"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PackageStatus:
        """Build a status from a mapping (e.g. loaded from YAML).

        Dates may be ``datetime.date`` objects or ISO strings.

        Raises:
            ConfigError: If ``kind`` is missing or a date is malformed.
        """
        if "kind" not in data:
            raise ConfigError("Package status requires 'kind'")

        values = dict(data)
        for key in ("deprecation_date", "disable_date"):
            value = values.get(key)
            if isinstance(value, str):
                try:
                    values[key] = date.fromisoformat(value)
                except ValueError as err:
                    raise ConfigError(f"Invalid {key}: {value!r}") from err

        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigError(f"Unknown package status fields: {', '.join(unknown)}")
        return cls(**values)


def type(status: PackageStatus) -> StatusType | None:  # noqa: A001
    """Return "deprecated", "disabled", or None."""
    if status.deprecated:
        return "deprecated"
    if status.disabled:
        return "disabled"
    return None


def to_reason_string_or_symbol(reason: str, kind: PackageKind) -> str | Reason:
    """Return the preset Reason if ``reason`` names one for ``kind``.

    Otherwise the original string is returned unchanged.
    """
    presets = _REASONS_BY_KIND.get(kind, {})
    for preset in presets:
        if preset.value == reason:
            return preset
    return reason


def _reason_text(reason: str | Reason, kind: PackageKind) -> str:
    resolved = to_reason_string_or_symbol(str(reason), kind)
    if isinstance(resolved, Reason):
        return _REASONS_BY_KIND[kind][resolved]
    return resolved


def message(
    status: PackageStatus,
    install_command: str = "brew install",
    today: date | None = None,
) -> str | None:
    """Build the user-facing deprecation/disable message.

    Args:
        status: The package state.
        install_command: Command shown in front of the replacement name.
        today: Reference date for "was"/"will be" disabled. Defaults to
            today's date.

    Returns:
        The message, or None if the package is neither deprecated nor
            disabled.
    """
    status_type = type(status)
    if status_type is None:
        return None

    if status_type == "deprecated":
        reason = status.deprecation_reason
        replacement = status.deprecation_replacement
    else:
        reason = status.disable_reason
        replacement = status.disable_replacement

    if reason:
        text = f"{status_type} because it {_reason_text(reason, status.kind)}!"
    else:
        text = f"{status_type}!"

    if status.disable_date:
        today = today or date.today()
        if status.disable_date < today:
            text += f" It was disabled on {status.disable_date.isoformat()}."
        else:
            text += f" It will be disabled on {status.disable_date.isoformat()}."

    if replacement:
        text += f"\nReplacement:\n  {install_command} {replacement}\n"

    return text
