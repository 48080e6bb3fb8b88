"""Ordering of component batches by declared dependencies.

A component lists the identifiers of components that must run before it in
its ``dependencies`` class attribute::

    class Plugins_DeliveryLog_Ox_click_Ox_click(DeliveryLogComponent):
        dependencies = ("deliveryDataPrepare:ox_core:ox_core",)

:func:`order_by_dependencies` reorders a mapping of instances so every
component follows the dependencies that are present in the same mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional, Union

from adcomponents.components.base import FAILED, Component, Failure
from adcomponents.components.errors import ErrorReporter, LoggingErrorReporter
from adcomponents.exceptions import DependencyCycleError

logger = logging.getLogger(__name__)


def order_by_dependencies(
    components: Mapping[str, Component],
    reporter: Optional[ErrorReporter] = None,
) -> Union[dict[str, Component], Failure]:
    """Return *components* reordered so dependencies come first.

    Dependencies that are not part of *components* are ignored. Components
    with no ordering constraint between them keep their input order.

    Returns:
        A new ordered mapping with the same keys, or :data:`FAILED` if the
        dependencies form a cycle.
    """
    reporter = reporter or LoggingErrorReporter()

    by_identifier: dict[str, str] = {}
    for key, component in components.items():
        by_identifier.setdefault(component.get_component_identifier(), key)

    required: dict[str, list[str]] = {}
    for key, component in components.items():
        keys: list[str] = []
        for dep in component.dependencies:
            dep_key = by_identifier.get(dep)
            if dep_key is None:
                logger.debug(
                    "Dependency '%s' of '%s' is not in the batch, ignoring",
                    dep,
                    component.get_component_identifier(),
                )
            elif dep_key != key and dep_key not in keys:
                keys.append(dep_key)
        required[key] = keys

    ordered: dict[str, Component] = {}
    visiting: list[str] = []

    def visit(key: str) -> bool:
        if key in ordered:
            return True
        if key in visiting:
            cycle = visiting[visiting.index(key):] + [key]
            stuck = " -> ".join(components[k].get_component_identifier() for k in cycle)
            reporter.report(DependencyCycleError(f"Dependency cycle between components: {stuck}"))
            return False
        visiting.append(key)
        for dep_key in required[key]:
            if not visit(dep_key):
                return False
        visiting.pop()
        ordered[key] = components[key]
        return True

    for key in components:
        if not visit(key):
            return FAILED
    return ordered
