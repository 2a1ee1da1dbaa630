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

"""Symlink management for auxiliary package files.

Links man pages, shell completions and docs shipped inside a package
directory into the standard locations under an installation prefix:

    <path>/manpages/*          -> <prefix>/share/man/man1/
    <path>/completions/bash/*  -> <prefix>/etc/bash_completion.d/
    <path>/completions/zsh/*   -> <prefix>/share/zsh/site-functions/
    <path>/completions/fish/*  -> <prefix>/share/fish/vendor_completions.d/
    <path>/docs                -> <prefix>/share/doc/<name>  (whole directory)

Links are relative, so a prefix can be moved as a unit. Existing symlinks
that already point at the source are left alone and stale ones are
replaced. Real files in the way are reported as conflicts and skipped;
the rest of the links are still created.

Example:
    ```python
    from pathlib import Path
    from pkgscout.link import link_completions, unlink_completions

    result = link_completions(Path("/opt/tool"), Path("/usr/local"), "tool setup")
    for conflict in result.conflicts:
        print(f"blocked by {conflict}")

    unlink_completions(Path("/opt/tool"), Path("/usr/local"))
    ```
"""

from __future__ import annotations

import os
from pathlib import Path

from pkgscout.exceptions import LinkError
from pkgscout.results import LinkResult

MANPAGE_DIR = "share/man/man1"
COMPLETION_DIRS: dict[str, str] = {
    "bash": "etc/bash_completion.d",
    "zsh": "share/zsh/site-functions",
    "fish": "share/fish/vendor_completions.d",
}
DOC_DIR = "share/doc"


def _source_paths(src_dir: Path, whole_dir: bool) -> list[Path]:
    if whole_dir:
        return [src_dir]
    return sorted(p for p in src_dir.rglob("*") if not p.is_dir())


def _points_to(link: Path, target: Path) -> bool:
    return link.resolve() == target.resolve()


def _conflict_message(conflicts: list[Path], command: str) -> str:
    paths = "\n".join(str(p) for p in conflicts)
    return (
        f"Could not link:\n{paths}\n\n"
        f"Please delete these paths and run:\n  {command}\n"
    )


def link_src_dst_dirs(
    src_dir: Path,
    dst_dir: Path,
    command: str,
    link_dir: bool = False,
) -> LinkResult:
    """Symlink every file under ``src_dir`` into ``dst_dir``.

    Args:
        src_dir: Directory holding the files to link. Nothing happens if it
            does not exist.
        dst_dir: Directory the links are created in (created if missing).
        command: Command the user should re-run after clearing conflicts.
        link_dir: Link ``src_dir`` itself as ``dst_dir`` instead of its files.

    Returns:
        Links created, stale links replaced and conflicting paths.

    Raises:
        LinkError: If a symlink cannot be created or removed.
    """
    from pkgscout.logging import get_global_logger

    logger = get_global_logger()
    if not src_dir.exists():
        logger.debug("LINK", f"Nothing to link, {src_dir} does not exist")
        return LinkResult()

    linked: list[Path] = []
    removed: list[Path] = []
    conflicts: list[Path] = []

    for src in _source_paths(src_dir, link_dir):
        dst = dst_dir / src.relative_to(src_dir)
        try:
            if dst.is_symlink():
                if _points_to(dst, src):
                    continue
                dst.unlink()
                removed.append(dst)
            if dst.exists():
                conflicts.append(dst)
                continue
            dst.parent.mkdir(parents=True, exist_ok=True)
            dst.symlink_to(os.path.relpath(src, dst.parent))
        except OSError as err:
            raise LinkError(f"Failed to link {dst} -> {src}: {err}") from err

        logger.verbose("LINK", f"{dst} -> {src}")
        linked.append(dst)

    if conflicts:
        logger.error(_conflict_message(conflicts, command))

    return LinkResult(linked=linked, removed=removed, conflicts=conflicts)


def _rmdir_if_empty(directory: Path) -> None:
    if directory.is_dir() and not directory.is_symlink() and not any(directory.iterdir()):
        directory.rmdir()


def unlink_src_dst_dirs(
    src_dir: Path,
    dst_dir: Path,
    unlink_dir: bool = False,
) -> LinkResult:
    """Remove links in ``dst_dir`` that point into ``src_dir``.

    Only symlinks resolving to the matching source file are removed; any
    other file is left untouched. Parent directories left empty are removed.

    Raises:
        LinkError: If a symlink or empty directory cannot be removed.
    """
    from pkgscout.logging import get_global_logger

    logger = get_global_logger()
    if not src_dir.exists():
        return LinkResult()

    removed: list[Path] = []
    for src in _source_paths(src_dir, unlink_dir):
        dst = dst_dir / src.relative_to(src_dir)
        try:
            if dst.is_symlink() and _points_to(dst, src):
                dst.unlink()
                removed.append(dst)
                logger.verbose("LINK", f"Removed {dst}")
            _rmdir_if_empty(dst.parent)
        except OSError as err:
            raise LinkError(f"Failed to unlink {dst}: {err}") from err

    return LinkResult(removed=removed)


def link_manpages(path: Path, prefix: Path, command: str) -> LinkResult:
    return link_src_dst_dirs(path / "manpages", prefix / MANPAGE_DIR, command)


def unlink_manpages(path: Path, prefix: Path) -> LinkResult:
    return unlink_src_dst_dirs(path / "manpages", prefix / MANPAGE_DIR)


def link_completions(path: Path, prefix: Path, command: str) -> LinkResult:
    """Link bash, zsh and fish completions."""
    result = LinkResult()
    for shell, target in COMPLETION_DIRS.items():
        result += link_src_dst_dirs(path / "completions" / shell, prefix / target, command)
    return result


def unlink_completions(path: Path, prefix: Path) -> LinkResult:
    result = LinkResult()
    for shell, target in COMPLETION_DIRS.items():
        result += unlink_src_dst_dirs(path / "completions" / shell, prefix / target)
    return result


def link_docs(path: Path, prefix: Path, command: str, name: str = "pkgscout") -> LinkResult:
    """Link the whole ``docs`` directory as ``<prefix>/share/doc/<name>``."""
    return link_src_dst_dirs(path / "docs", prefix / DOC_DIR / name, command, link_dir=True)


def unlink_docs(path: Path, prefix: Path, name: str = "pkgscout") -> LinkResult:
    return unlink_src_dst_dirs(path / "docs", prefix / DOC_DIR / name, unlink_dir=True)
