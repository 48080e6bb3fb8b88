"""Component system -- discovery, loading, and dispatch of plugin components.

Components are organised on disk as
``<plugins_root>/<extension>/<group>/<component>.py``; each file defines a
class whose name is derived from that triple. The package provides:

* :class:`Component` / :class:`MaintenanceComponent` -- base classes that
  plugin classes extend.
* :class:`ComponentManager` -- factory, discovery and dispatch operations.
* :class:`ComponentRegistry` -- explicitly registered component classes.
* :func:`call_on_components` / :func:`call_on_components_by_hook` --
  all-or-nothing batch dispatch.
* :func:`order_by_dependencies` -- dependency ordering of a batch.
* Error reporters receiving hard failures.

Example::

    from adcomponents.components import ComponentManager
    from adcomponents.models import GlobalConfig

    manager = ComponentManager(GlobalConfig())
    click_logger = manager.factory("deliveryLog", "ox_click")
"""

from adcomponents.components.base import FAILED, Component, Failure, HookType, MaintenanceComponent
from adcomponents.components.dependencies import order_by_dependencies
from adcomponents.components.dispatch import call_on_components, call_on_components_by_hook
from adcomponents.components.errors import (
    CollectingErrorReporter,
    ErrorReporter,
    LoggingErrorReporter,
    RaisingErrorReporter,
)
from adcomponents.components.manager import REFACTORED_EXTENSIONS, ComponentManager
from adcomponents.components.registry import ComponentRegistry

__all__ = [
    "FAILED",
    "Failure",
    "Component",
    "MaintenanceComponent",
    "HookType",
    "ComponentManager",
    "ComponentRegistry",
    "REFACTORED_EXTENSIONS",
    "call_on_components",
    "call_on_components_by_hook",
    "order_by_dependencies",
    "ErrorReporter",
    "LoggingErrorReporter",
    "CollectingErrorReporter",
    "RaisingErrorReporter",
]
