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

"""Command-line interface for pkgscout.

Commands:

    check: Find the versions available for a source URL
    link: Symlink man pages, completions or docs into a prefix
    unlink: Remove those symlinks again
    deprecation: Print the deprecation/disable message for a package

Example:
    Check a crate:
        ```bash
        $ pkgscout check https://static.crates.io/crates/serde/serde-1.0.0.crate
        ```

    Check a page with a regex:
        ```bash
        $ pkgscout check https://example.com/downloads/ --regex 'example-([0-9.]+)\\.tar\\.gz'
        ```

    Link shell completions:
        ```bash
        $ pkgscout link completions /opt/tool --prefix /usr/local
        ```

Exit Codes:

- 0: Success
- 1: Error (configuration, fetch failure, no versions found, link conflicts)

Note:
    The CLI uses argparse for command parsing. Each command has its own
    handler function (cmd_<command>). Verbose mode shows full tracebacks on
    errors for debugging.

"""

from __future__ import annotations

import argparse
from dataclasses import replace
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sys
from typing import Any

import yaml

from pkgscout import link as linking
from pkgscout.config import load_config, options_from_config
from pkgscout.core import check_url
from pkgscout.deprecate_disable import PackageStatus, message
from pkgscout.exceptions import ConfigError, PkgScoutError
from pkgscout.logging import get_logger, set_global_logger


def _print_error(err: Exception, args: argparse.Namespace) -> None:
    print(f"Error: {err}")
    if getattr(args, "verbose", False) or getattr(args, "debug", False):
        import traceback

        traceback.print_exc()


def _load_cli_config(args: argparse.Namespace) -> dict[str, Any]:
    config_path = Path(args.config) if getattr(args, "config", None) else None
    return load_config(config_path)


def cmd_check(args: argparse.Namespace) -> int:
    """Handler for 'pkgscout check' command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 if at least one version was found, 1 otherwise).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    try:
        config = _load_cli_config(args)
        options = options_from_config(config)
        if args.timeout is not None:
            options = replace(options, timeout=args.timeout)

        provided_content = None
        if args.content_file:
            content_path = Path(args.content_file)
            if not content_path.exists():
                raise ConfigError(f"Content file not found: {content_path}")
            provided_content = content_path.read_text(encoding="utf-8")

        result = check_url(
            args.url,
            strategy=args.strategy,
            regex=args.regex,
            provided_content=provided_content,
            options=options,
            path=args.path,
        )
        result.raise_for_outcome()
    except PkgScoutError as err:
        _print_error(err, args)
        return 1

    match_result = result.match_result
    print("=" * 70)
    print("CHECK RESULTS")
    print("=" * 70)
    print(f"URL:             {result.url}")
    print(f"Strategy:        {result.strategy}")
    print(f"Query URL:       {match_result.url}")
    print(f"Cached:          {match_result.cached}")
    print(f"Outcome:         {match_result.outcome}")
    print(f"Versions:        {', '.join(result.versions) or '(none)'}")
    print(f"Latest:          {result.latest or '(none)'}")
    print("=" * 70)

    if result.latest is None:
        print()
        print("[FAILED] No versions matched.")
        return 1
    return 0


def cmd_link(args: argparse.Namespace) -> int:
    """Handler for 'pkgscout link' and 'pkgscout unlink'."""
    logger = get_logger(verbose=args.verbose, debug=False)
    set_global_logger(logger)

    try:
        config = _load_cli_config(args)
        prefix = Path(args.prefix or config["prefix"])
        path = Path(args.path).resolve()
        command = f"pkgscout link {args.kind} {path} --prefix {prefix}"

        if args.command == "link":
            if args.kind == "manpages":
                result = linking.link_manpages(path, prefix, command)
            elif args.kind == "completions":
                result = linking.link_completions(path, prefix, command)
            else:
                result = linking.link_docs(path, prefix, command, name=path.name)
        else:
            if args.kind == "manpages":
                result = linking.unlink_manpages(path, prefix)
            elif args.kind == "completions":
                result = linking.unlink_completions(path, prefix)
            else:
                result = linking.unlink_docs(path, prefix, name=path.name)
    except PkgScoutError as err:
        _print_error(err, args)
        return 1

    print(f"Linked:    {len(result.linked)}")
    print(f"Removed:   {len(result.removed)}")
    print(f"Conflicts: {len(result.conflicts)}")
    return 1 if result.conflicts else 0


def cmd_deprecation(args: argparse.Namespace) -> int:
    """Handler for 'pkgscout deprecation' command.

    Reads a YAML file describing a package's deprecation state and prints
    the resulting message.
    """
    set_global_logger(get_logger())

    status_path = Path(args.status_file)
    try:
        if not status_path.exists():
            raise ConfigError(f"Status file not found: {status_path}")
        try:
            data = yaml.safe_load(status_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as err:
            raise ConfigError(f"Error parsing YAML: {status_path}: {err}") from err
        if not isinstance(data, dict):
            raise ConfigError(f"Status file must contain a mapping: {status_path}")

        config = _load_cli_config(args)
        status = PackageStatus.from_dict(data)
        text = message(status, install_command=config["install_command"])
    except PkgScoutError as err:
        _print_error(err, args)
        return 1

    print(text if text is not None else "Package is neither deprecated nor disabled.")
    return 0


def _package_version() -> str:
    try:
        return version("pkgscout")
    except PackageNotFoundError:
        from pkgscout import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pkgscout",
        description="pkgscout - package registry version checks and install helpers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"pkgscout {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'check' command
    parser_check = subparsers.add_parser(
        "check",
        help="Find available versions for a source URL",
        description="Pick a strategy for the URL, query its registry or page, and list matching versions.",
    )
    parser_check.add_argument("url", help="Source URL (e.g. a .crate download URL)")
    parser_check.add_argument(
        "--strategy",
        default=None,
        help="Strategy name (crate, json, page_match); default: first that applies",
    )
    parser_check.add_argument(
        "--regex",
        default=None,
        help="Version regex; the first capture group is the version",
    )
    parser_check.add_argument(
        "--path",
        default=None,
        help="JSONPath to version values (json strategy)",
    )
    parser_check.add_argument(
        "--content-file",
        default=None,
        help="Check this file's content instead of fetching",
    )
    parser_check.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (default: from config, 30)",
    )
    parser_check.add_argument("--config", default=None, help="Path to a YAML config file")
    parser_check.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser_check.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )
    parser_check.set_defaults(func=cmd_check)

    # 'link' and 'unlink' commands
    for name, kinds, help_text in (
        ("link", ("manpages", "completions", "docs"), "Symlink auxiliary files into a prefix"),
        ("unlink", ("manpages", "completions", "docs"), "Remove symlinks created by 'link'"),
    ):
        sub = subparsers.add_parser(name, help=help_text, description=help_text + ".")
        sub.add_argument("kind", choices=kinds, help="What to link")
        sub.add_argument("path", help="Package directory containing manpages/, completions/ or docs/")
        sub.add_argument(
            "--prefix",
            default=None,
            help="Installation prefix (default: from config, /usr/local)",
        )
        sub.add_argument("--config", default=None, help="Path to a YAML config file")
        sub.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Show each link as it is created or removed",
        )
        sub.set_defaults(func=cmd_link)

    # 'deprecation' command
    parser_deprecation = subparsers.add_parser(
        "deprecation",
        help="Print the deprecation/disable message for a package",
        description="Read a YAML package status file and print its deprecation message.",
    )
    parser_deprecation.add_argument("status_file", help="YAML file with the package status")
    parser_deprecation.add_argument("--config", default=None, help="Path to a YAML config file")
    parser_deprecation.set_defaults(func=cmd_deprecation)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the pkgscout CLI.

    Registered as the 'pkgscout' console script in pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
