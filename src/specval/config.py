"""User configuration for the ``specval`` command.

An optional JSON file supplies defaults the user would otherwise repeat on
every invocation: the validator URL, extra headers (e.g. credentials for a
private validator), and a transport timeout. See
:class:`~specval.models.UserConfig` for the schema.

* **Location** -- XDG Base Directory compliant on Linux/BSD
  (``$XDG_CONFIG_HOME/specval/config.json``, default
  ``~/.config/specval/config.json``), ``~/.specval/config.json`` on macOS and
  Windows. ``specval --config PATH`` reads another file instead.
* **Precedence** -- command-line flags override the file, which overrides
  built-in defaults. Headers merge case-insensitively.

Only the CLI reads this file. The library functions in :mod:`specval.api`
take everything from their arguments.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Optional

from specval.exceptions import ConfigError
from specval.models import UserConfig

_APP_NAME = "specval"
_CONFIG_FILENAME = "config.json"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_config_dir() -> Path:
    """Return the configuration directory. It is not created.

    On Linux/BSD: ``$XDG_CONFIG_HOME/specval/`` (default ``~/.config/specval/``).
    On macOS/Windows: ``~/.specval/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        return base / _APP_NAME
    return Path.home() / f".{_APP_NAME}"


def default_config_path() -> Path:
    """Path of the user configuration file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_user_config(path: Optional[Path] = None) -> UserConfig:
    """Load the user configuration.

    Args:
        path: Explicit config file. When ``None``, the default location is
            used and a missing file yields the defaults.

    Returns:
        The deserialised :class:`~specval.models.UserConfig`.

    Raises:
        ConfigError: If an explicit *path* does not exist, or the file
            cannot be read, is not valid JSON, or fails validation.
    """
    explicit = path is not None
    config_path = path if path is not None else default_config_path()
    if not config_path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}")
        return UserConfig()
    try:
        text = config_path.read_text(encoding="utf-8")
        data = json.loads(text)
        return UserConfig.model_validate(data)
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {config_path}: {exc}") from exc
