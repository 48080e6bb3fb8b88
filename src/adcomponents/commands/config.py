"""``adcomponents config`` -- inspect and edit the global configuration.

Keys use dot notation over :class:`~adcomponents.models.GlobalConfig`::

    adcomponents config set plugin_paths.extensions /srv/ads/plugins
    adcomponents config set plugin_group_components.Client on

Entries under ``plugin_group_components`` are group switches: any group name
is accepted and the value is stored as a boolean (``"0"``, ``"off"``,
``"no"`` and ``""`` are off).
"""

from __future__ import annotations

from typing import Any

import typer

from adcomponents.exit_codes import EXIT_INVALID_USAGE
from adcomponents.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)

_GROUP_SWITCHES = "plugin_group_components"


def _usage_error(message: str) -> typer.Exit:
    error(message)
    return typer.Exit(code=EXIT_INVALID_USAGE)


def _parent_section(data: dict[str, Any], key: str) -> tuple[dict[str, Any], str]:
    """Return the mapping holding the last segment of *key*, and that segment."""
    *path, leaf = key.split(".")
    section = data
    for segment in path:
        child = section.get(segment)
        if not isinstance(child, dict):
            raise _usage_error(f"Invalid config key: {key}")
        section = child
    is_switch = path == [_GROUP_SWITCHES]
    if leaf not in section and not is_switch:
        raise _usage_error(f"Unknown config key: {key}")
    return section, leaf


@config_app.command("show")
def config_show() -> None:
    """Print the global configuration.

    Project files and environment overrides are not applied here.
    """
    from adcomponents.config import get_config_dir, load_global_config

    info(f"Config directory: {get_config_dir()}")
    format_response(load_global_config())


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Dot-notation key, e.g. 'plugin_group_components.Client'."),
    value: str = typer.Argument(help="New value."),
) -> None:
    """Set one configuration value and save it."""
    from adcomponents.config import load_global_config, save_global_config
    from adcomponents.models import GlobalConfig

    data = load_global_config().model_dump(mode="json")
    section, leaf = _parent_section(data, key)
    # GlobalConfig validation converts the text, e.g. "off" to False for a switch
    section[leaf] = value

    try:
        updated = GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise _usage_error(f"Validation error: {exc}") from None

    save_global_config(updated)
    stored = updated.model_dump(mode="json")
    for segment in key.split("."):
        stored = stored[segment]
    success(f"Set {key} = {stored}")


@config_app.command("reset")
def config_reset(ctx: typer.Context) -> None:
    """Restore the default configuration (asks first unless ``--force``)."""
    from adcomponents.config import save_global_config
    from adcomponents.models import GlobalConfig

    force = bool(ctx.obj and ctx.obj.get("force"))
    if not force and not typer.confirm("Reset all config to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
