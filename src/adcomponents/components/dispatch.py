"""Batch method dispatch over collections of component instances.

Both helpers are all-or-nothing: the whole batch is validated before any
component is invoked, and a single bad entry fails the batch with no partial
results. Failures are handed to an
:class:`~adcomponents.components.errors.ErrorReporter` rather than raised.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

from adcomponents.components.base import FAILED, Component, Failure, HookType, MaintenanceComponent
from adcomponents.components.errors import ErrorReporter, LoggingErrorReporter
from adcomponents.exceptions import ComponentMethodError, InvalidComponentsError

logger = logging.getLogger(__name__)

_NOT_COMPONENTS = "Bad argument: Not a mapping of components."


def _validate_components(components: Any, reporter: ErrorReporter) -> bool:
    if not isinstance(components, Mapping):
        reporter.report(InvalidComponentsError(_NOT_COMPONENTS))
        return False
    for key, candidate in components.items():
        if not isinstance(candidate, Component):
            reporter.report(
                InvalidComponentsError(
                    f"{_NOT_COMPONENTS} Entry '{key}' is {type(candidate).__name__}."
                )
            )
            return False
    return True


def _missing_method(component: Component, method_name: str, reporter: ErrorReporter) -> bool:
    if callable(getattr(component, method_name, None)):
        return False
    reporter.report(
        ComponentMethodError(
            f"Method '{method_name}()' not defined in class "
            f"'{component.descriptor.class_name}' ({type(component).__name__})."
        )
    )
    return True


def _invoke(component: Component, method_name: str, args: Optional[Sequence[Any]]) -> Any:
    method = getattr(component, method_name)
    if args is None:
        return method()
    return method(*args)


def call_on_components(
    components: Mapping[str, Component],
    method_name: str,
    args: Optional[Sequence[Any]] = None,
    reporter: Optional[ErrorReporter] = None,
) -> Union[dict[str, Any], Failure]:
    """Call *method_name* on every component in *components*.

    Args:
        components: Ordered mapping of key to component instance.
        method_name: Name of the method to call on each component.
        args: Positional arguments passed to every call, or ``None`` for
            no arguments.
        reporter: Where failures are reported. Defaults to logging.

    Returns:
        Mapping of the same keys to each call's result, in input order, or
        :data:`FAILED` if *components* is not a mapping of components or any
        component lacks a callable *method_name*.
    """
    reporter = reporter or LoggingErrorReporter()
    if not _validate_components(components, reporter):
        return FAILED
    for component in components.values():
        if _missing_method(component, method_name, reporter):
            return FAILED

    results: dict[str, Any] = {}
    for key, component in components.items():
        results[key] = _invoke(component, method_name, args)
    return results


def call_on_components_by_hook(
    components: Mapping[str, Component],
    method_name: str,
    hook_type: HookType,
    hook_point: str,
    args: Optional[Sequence[Any]] = None,
    reporter: Optional[ErrorReporter] = None,
) -> bool:
    """Run *method_name* on the maintenance components bound to a hook.

    Only :class:`~adcomponents.components.base.MaintenanceComponent`
    instances are considered, and of those only the ones whose hook type and
    hook point equal *hook_type* and *hook_point* are invoked.

    Returns:
        ``False`` if the batch is invalid, or if any invoked call returned
        exactly ``False`` (a replacement plugin took over the standard
        task). ``True`` otherwise, including for an empty batch.
    """
    reporter = reporter or LoggingErrorReporter()
    if not _validate_components(components, reporter):
        return False

    maintenance = [c for c in components.values() if isinstance(c, MaintenanceComponent)]
    for component in maintenance:
        if _missing_method(component, method_name, reporter):
            return False

    outcome = True
    for component in maintenance:
        if component.get_hook_type() != hook_type or component.get_hook() != hook_point:
            continue
        logger.debug(
            "Running %s.%s() for hook %s/%s",
            component.get_component_identifier(),
            method_name,
            hook_type,
            hook_point,
        )
        if _invoke(component, method_name, args) is False:
            outcome = False
    return outcome
