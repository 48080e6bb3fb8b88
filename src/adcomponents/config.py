"""Where configuration comes from and where it is stored.

* The user-wide :class:`~adcomponents.models.GlobalConfig` lives in
  ``config.json`` under :func:`get_config_dir` and is written atomically.
* A deployment may drop an ``adcomponents.json`` in its working directory to
  point at its own plugin tree or switch component groups on and off.
* :func:`resolve_config` layers CLI flag, ``ADCOMPONENTS_PLUGINS_ROOT``,
  project file and global file over the defaults.
* :func:`resolve_plugins_root` turns ``plugin_paths.extensions`` into the
  directory the component manager scans.
"""

from __future__ import annotations

import contextlib
import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from adcomponents.exceptions import ConfigError
from adcomponents.models import GlobalConfig

_APP_NAME = "adcomponents"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "adcomponents.json"

PLUGINS_ROOT_ENV = "ADCOMPONENTS_PLUGINS_ROOT"

BUNDLED_PLUGINS_DIR = Path(__file__).resolve().parent / "plugins"
"""Plugins shipped with the package, used when no root is configured."""


# --- Directories ---


def _is_xdg_platform() -> bool:
    """Linux and the BSDs follow the XDG base directory layout."""
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(xdg_var: str, xdg_default: Path, fallback: Path) -> Path:
    """Return (and create) an application directory.

    On XDG platforms this is ``$<xdg_var>/adcomponents``, with *xdg_default*
    standing in for an unset variable. Elsewhere it is *fallback*.
    """
    if _is_xdg_platform():
        path = Path(os.environ.get(xdg_var) or xdg_default) / _APP_NAME
    else:
        path = fallback
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Directory holding ``config.json``.

    ``$XDG_CONFIG_HOME/adcomponents`` (default ``~/.config/adcomponents``),
    or ``~/.adcomponents`` on macOS and Windows.
    """
    home = Path.home()
    return _app_dir("XDG_CONFIG_HOME", home / ".config", home / f".{_APP_NAME}")


def get_data_dir() -> Path:
    """Directory for crash logs.

    ``$XDG_DATA_HOME/adcomponents`` (default ``~/.local/share/adcomponents``),
    or ``~/.adcomponents/logs`` on macOS and Windows.
    """
    home = Path.home()
    return _app_dir(
        "XDG_DATA_HOME", home / ".local" / "share", home / f".{_APP_NAME}" / "logs"
    )


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* so readers never see a partial file.

    The text goes to a temp file next to *path*, is fsynced, then renamed
    over it. The temp file is removed if anything fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = tempfile.NamedTemporaryFile(
        mode="w",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
        encoding="utf-8",
    )
    try:
        with tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp.name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp.name)
        raise


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the XDG config directory.

    Returns:
        The deserialised :class:`~adcomponents.models.GlobalConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./adcomponents.json``.

    A deployment typically uses it to point ``plugin_paths.extensions`` at
    its own plugin tree and to switch component groups on or off.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but does not hold a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(cli_plugins_root: Optional[str] = None) -> GlobalConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flag (``cli_plugins_root``)
        2. Environment variable (``ADCOMPONENTS_PLUGINS_ROOT``)
        3. Project config (``./adcomponents.json``)
        4. User config (``~/.config/adcomponents/config.json``)
        5. Defaults

    Project config values for ``plugin_group_components`` are merged over the
    global map key by key; ``plugin_paths`` and ``output`` replace field by
    field.

    Raises:
        ConfigError: If the merged configuration fails validation.
    """
    # 5 + 4
    global_cfg = load_global_config()
    data = global_cfg.model_dump(mode="json")

    # 3
    project = load_project_config()
    if project is not None:
        for section in ("plugin_paths", "output", "plugin_group_components"):
            value = project.get(section)
            if isinstance(value, dict):
                data[section].update(value)

    # 2
    env_root = os.environ.get(PLUGINS_ROOT_ENV)
    if env_root:
        data["plugin_paths"]["extensions"] = env_root

    # 1
    if cli_plugins_root is not None:
        data["plugin_paths"]["extensions"] = cli_plugins_root

    try:
        return GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def resolve_plugins_root(config: GlobalConfig) -> Path:
    """Return the directory holding ``<extension>/<group>/<component>.py`` files.

    The directory is not checked for existence.
    """
    configured = config.plugin_paths.extensions
    if not configured:
        return BUNDLED_PLUGINS_DIR
    path = Path(configured).expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    return path
