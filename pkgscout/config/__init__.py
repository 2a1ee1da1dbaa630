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

"""Configuration loading for pkgscout.

Settings are layered: built-in defaults, then a YAML config file, then
``PKGSCOUT_*`` environment variables (a ``.env`` file is honoured). Dicts
are merged recursively; lists and scalars are replaced (last wins).

Public API:

- load_config: Load and merge the effective configuration
- options_from_config: Turn a loaded config into fetch Options

Example:
    Basic usage:

        from pkgscout.config import load_config, options_from_config

        config = load_config()
        print(config["prefix"])  # "/usr/local"
        options = options_from_config(config)

"""

from .loader import DEFAULT_CONFIG, load_config, options_from_config

__all__ = ["DEFAULT_CONFIG", "load_config", "options_from_config"]
