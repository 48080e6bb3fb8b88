"""Component commands -- list, inspect, and call plugin components.

These commands are registered directly on the root app:

* ``adcomponents list EXTENSION [GROUP]`` -- discover components.
* ``adcomponents show IDENTIFIER`` -- load one component and describe it.
* ``adcomponents call IDENTIFIER METHOD [ARGS]...`` -- call a method on a
  component class without instantiating it.
* ``adcomponents fallback EXTENSION`` -- describe an extension's fallback
  handler.
"""

from __future__ import annotations

import inspect
import json
from typing import Any, Optional

import typer

from adcomponents.components import FAILED, Component, ComponentManager, ErrorReporter
from adcomponents.exceptions import ComponentError, InvalidIdentifierError
from adcomponents.exit_codes import EXIT_COMPONENT_ERROR, EXIT_COMPONENT_NOT_FOUND
from adcomponents.models import ComponentDescriptor
from adcomponents.output import debug, error, format_response, info, print_table, suggest


class OutputErrorReporter(ErrorReporter):
    """Prints reported component failures as CLI errors."""

    def __init__(self) -> None:
        self.reported = 0

    def report(self, exc: ComponentError) -> None:
        self.reported += 1
        error(str(exc))


def _build_manager(ctx: typer.Context) -> tuple[ComponentManager, OutputErrorReporter]:
    from adcomponents.config import resolve_config

    obj = ctx.obj or {}
    config = resolve_config(cli_plugins_root=obj.get("plugins_root"))
    reporter = OutputErrorReporter()
    manager = ComponentManager(config, reporter=reporter)
    debug(f"Plugins root: {manager.plugins_root}")
    return manager, reporter


def _describe(component: Component) -> dict[str, Any]:
    try:
        source = inspect.getsourcefile(type(component))
    except TypeError:
        source = None
    return {
        "identifier": component.get_component_identifier(),
        "extension": component.extension,
        "group": component.group,
        "component": component.component,
        "enabled": component.enabled,
        "class": type(component).__name__,
        "file": source,
    }


def _parse_arg(value: str) -> Any:  # noqa: ANN401
    """Parse a CLI argument as JSON if possible, returning the raw string otherwise."""
    try:
        return json.loads(value)
    except (json.JSONDecodeError, TypeError):
        return value


def _parse_identifier(identifier: str) -> ComponentDescriptor:
    try:
        return ComponentDescriptor.parse(identifier)
    except InvalidIdentifierError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def list_command(
    ctx: typer.Context,
    extension: str = typer.Argument(help="Plugin extension (e.g. 'deliveryLog')."),
    group: Optional[str] = typer.Argument(None, help="Restrict to one component group."),
    include_disabled: bool = typer.Option(
        False, "--all", "-a", help="Include disabled components."
    ),
    full_keys: bool = typer.Option(
        False, "--full-keys", help="Key results by 'group:component' instead of component name."
    ),
    depth: int = typer.Option(1, "--depth", help="Directory levels to descend."),
    recursive: bool = typer.Option(
        False, "--recursive", "-r", help="Descend without a depth limit."
    ),
) -> None:
    """List the components of an extension.

    Example::

        adcomponents list deliveryLog
        adcomponents list deliveryLimitations Client --all --json
    """
    manager, _ = _build_manager(ctx)
    components = manager.get_components(
        extension,
        group,
        only_component_name_as_index=not full_keys,
        recursive=True if recursive else depth,
        enabled_only=not include_disabled,
    )
    if not components:
        info(f"No components found in '{extension}'" + (f" group '{group}'." if group else "."))
        if not include_disabled:
            suggest("Use --all to include disabled components.")
        return

    rows = [
        [
            key,
            component.get_component_identifier(),
            "yes" if component.enabled else "no",
            type(component).__name__,
        ]
        for key, component in components.items()
    ]
    print_table(["Key", "Identifier", "Enabled", "Class"], rows, title=f"Components: {extension}")


def show_command(
    ctx: typer.Context,
    identifier: str = typer.Argument(help="Component identifier 'extension:group:component'."),
) -> None:
    """Load a component and show its identity and enablement."""
    descriptor = _parse_identifier(identifier)
    manager, reporter = _build_manager(ctx)
    component = manager.factory(descriptor.extension, descriptor.group, descriptor.component)
    if component is None:
        if reporter.reported:
            raise typer.Exit(code=EXIT_COMPONENT_ERROR)
        path = manager.component_path(descriptor.extension, descriptor.group, descriptor.component)
        error(f"Component '{identifier}' not found (expected {path}).")
        raise typer.Exit(code=EXIT_COMPONENT_NOT_FOUND)
    format_response(_describe(component))


def call_command(
    ctx: typer.Context,
    identifier: str = typer.Argument(help="Component identifier 'extension:group:component'."),
    method: str = typer.Argument(help="Method to call on the component class."),
    args: Optional[list[str]] = typer.Argument(
        None, help="Arguments; each is parsed as JSON when possible."
    ),
) -> None:
    """Call a method on a component class without instantiating it.

    Example::

        adcomponents call deliveryDataPrepare:ox_core:ox_core describe
    """
    descriptor = _parse_identifier(identifier)
    manager, reporter = _build_manager(ctx)
    call_args = [_parse_arg(a) for a in args] if args else None
    result = manager.call_static_method(
        descriptor.extension, descriptor.group, descriptor.component, method, call_args
    )
    if result is FAILED:
        if not reporter.reported:
            error(f"Component '{identifier}' is disabled or could not be found.")
            raise typer.Exit(code=EXIT_COMPONENT_NOT_FOUND)
        raise typer.Exit(code=EXIT_COMPONENT_ERROR)
    format_response(result)


def fallback_command(
    ctx: typer.Context,
    extension: str = typer.Argument(help="Plugin extension."),
) -> None:
    """Show the fallback handler of an extension."""
    manager, _ = _build_manager(ctx)
    handler = manager.get_fallback_handler(extension)
    if handler is None:
        raise typer.Exit(code=EXIT_COMPONENT_ERROR)
    format_response(_describe(handler))
