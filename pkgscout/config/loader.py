"""
Configuration loading and merging for pkgscout.

Settings come from three layers, merged with "last wins" semantics:

Configuration Layers
--------------------
1. **Built-in defaults** (``DEFAULT_CONFIG``)
   - Always present

2. **YAML config file**
   - The path passed to ``load_config()``, else ``$PKGSCOUT_CONFIG``,
     else ``~/.config/pkgscout/config.yaml`` if it exists
   - Optional unless a path is passed explicitly

3. **Environment variables**
   - ``PKGSCOUT_TIMEOUT``, ``PKGSCOUT_PREFIX``, ``PKGSCOUT_USER_AGENT``,
     ``PKGSCOUT_INSTALL_COMMAND``
   - A ``.env`` file in the working directory is loaded first (python-dotenv)

Merge Behavior
--------------
  - **Dicts**: Recursively merged (keys from overlay override base)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten

Recognized Keys
---------------
    timeout: 30                  # seconds per request
    user_agent: "pkgscout/0.1"
    headers: {}                  # extra request headers
    prefix: "/usr/local"         # link target root
    install_command: "brew install"

Examples
--------
    >>> from pkgscout.config import load_config, options_from_config
    >>> cfg = load_config()
    >>> options = options_from_config(cfg)
    >>> options.timeout
    30

Error Handling
--------------
- ConfigError: Explicit config file missing, invalid YAML, top level not a
  mapping, or a non-numeric ``PKGSCOUT_TIMEOUT``
"""

from __future__ import annotations

from collections.abc import Mapping
import copy
import os
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
import yaml

from pkgscout.exceptions import ConfigError
from pkgscout.io.fetch import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, Options

DEFAULT_CONFIG: dict[str, Any] = {
    "timeout": DEFAULT_TIMEOUT,
    "user_agent": DEFAULT_USER_AGENT,
    "headers": {},
    "prefix": "/usr/local",
    "install_command": "brew install",
}

USER_CONFIG_PATH = Path("~/.config/pkgscout/config.yaml")

# env var -> (config key, converter)
_ENV_OVERRIDES: dict[str, tuple[str, type]] = {
    "PKGSCOUT_TIMEOUT": ("timeout", float),
    "PKGSCOUT_PREFIX": ("prefix", str),
    "PKGSCOUT_USER_AGENT": ("user_agent", str),
    "PKGSCOUT_INSTALL_COMMAND": ("install_command", str),
}


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> dict[str, Any]:
    """
    Load a YAML config file.

    An empty file counts as an empty mapping.

    Raises:
      ConfigError - file missing, invalid YAML, or top level not a mapping
    """
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins". Inputs are not mutated.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


def _find_config_file(path: Path | None) -> Path | None:
    """
    Pick the config file to read. An explicit path must exist; the implicit
    locations are skipped when absent.
    """
    if path is not None:
        return path
    env_path = os.environ.get("PKGSCOUT_CONFIG")
    if env_path:
        return Path(env_path)
    user_path = USER_CONFIG_PATH.expanduser()
    if user_path.exists():
        return user_path
    return None


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for var, (key, convert) in _ENV_OVERRIDES.items():
        raw = environ.get(var)
        if raw is None or raw == "":
            continue
        try:
            overrides[key] = convert(raw)
        except ValueError as err:
            raise ConfigError(f"Invalid value for {var}: {raw!r}") from err
    return overrides


# -------------------------------
# Public API
# -------------------------------


def load_config(path: Path | None = None, *, use_dotenv: bool = True) -> dict[str, Any]:
    """Load the effective configuration.

    Args:
        path: Explicit YAML config file. When None, ``$PKGSCOUT_CONFIG`` and
            then ``~/.config/pkgscout/config.yaml`` are tried.
        use_dotenv: Load a ``.env`` file into the environment first.

    Returns:
        The merged configuration dict.

    Raises:
        ConfigError: On a missing explicit file, invalid YAML, or invalid
            environment values.
    """
    from pkgscout.logging import get_global_logger

    logger = get_global_logger()
    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    config = copy.deepcopy(DEFAULT_CONFIG)

    config_file = _find_config_file(path)
    if config_file is not None:
        logger.verbose("CONFIG", f"Loading config: {config_file}")
        config = _deep_merge_dicts(config, _load_yaml_file(config_file))

    overrides = _env_overrides(os.environ)
    if overrides:
        logger.verbose("CONFIG", f"Environment overrides: {', '.join(sorted(overrides))}")
        config = _deep_merge_dicts(config, overrides)

    logger.debug("CONFIG", f"Effective config: {config}")
    return config


def options_from_config(config: dict[str, Any]) -> Options:
    """Build fetch Options from a loaded config.

    Raises:
        ConfigError: If ``headers`` is not a mapping or ``timeout`` is not
            a positive number.
    """
    headers = config.get("headers") or {}
    if not isinstance(headers, dict):
        raise ConfigError("Config 'headers' must be a mapping")

    timeout = config.get("timeout", DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ConfigError(f"Config 'timeout' must be a number, got {timeout!r}")

    return Options(
        timeout=timeout,
        headers={str(k): str(v) for k, v in headers.items()},
        user_agent=config.get("user_agent") or None,
    )
