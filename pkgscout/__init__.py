"""
pkgscout - package registry version checks and install helpers

A small toolkit for package-manager maintenance work.

pkgscout provides:
  - Version lookup strategies that turn a source URL into the list of
    available releases (Rust crates, generic JSON APIs, plain pages)
  - A comparable Version type for sorting what was found
  - Deprecation/disable messages for packages
  - Symlink management for man pages, shell completions and docs

Quick Start
-----------
List the versions of a crate:

    $ pkgscout check https://static.crates.io/crates/serde/serde-1.0.0.crate

Link shell completions shipped with a tool:

    $ pkgscout link completions /opt/tool --prefix /usr/local

For full CLI documentation:

    $ pkgscout --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    High-level orchestration (check_url).
config : package
    YAML/.env/environment configuration loading.
strategy : package
    Version lookup strategies and strategy selection.
versioning : package
    Version parsing and comparison.
io : package
    HTTP content fetching.
deprecate_disable : module
    Deprecation/disable messages.
link : module
    Symlinking auxiliary package files.

Public API
----------
    from pkgscout.core import check_url
    from pkgscout.strategy import Crate, select_strategy
    from pkgscout.versioning import Version, compare_any
    from pkgscout.io import Options, page_content
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Package registry version checks and install helpers"

# Re-export commonly used functions for convenience
from pkgscout.core import check_url
from pkgscout.io import Options, page_content
from pkgscout.results import CheckResult, MatchResult
from pkgscout.strategy import Crate, get_strategy, select_strategy
from pkgscout.versioning import Version, compare_any, is_newer_any

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "check_url",
    "Options",
    "page_content",
    "CheckResult",
    "MatchResult",
    "Crate",
    "get_strategy",
    "select_strategy",
    "Version",
    "compare_any",
    "is_newer_any",
]
