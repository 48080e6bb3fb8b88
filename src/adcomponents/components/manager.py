"""Component manager -- resolve, load, instantiate, and dispatch components.

:class:`ComponentManager` is the entry point of the component system. It
turns an ``(extension, group, component)`` triple into an instance of the
class defined in ``<plugins_root>/<extension>/<group>/<component>.py``,
discovers every component of an extension, and calls methods on component
classes or on batches of instances.

None of the operations raise for a missing or broken component. Soft
failures (no such file, component disabled) simply return ``None`` or
:data:`~adcomponents.components.base.FAILED`. Hard failures (file loaded but
class missing, method missing, invalid batch) are additionally handed to the
manager's :class:`~adcomponents.components.errors.ErrorReporter`.

The configuration is passed in explicitly and read on every call, so the
plugins root and the group enablement map can be changed between calls.

Example::

    from adcomponents.components import ComponentManager
    from adcomponents.config import resolve_config

    manager = ComponentManager(resolve_config())
    loggers = manager.get_components("deliveryLog")
    manager.call_on_components(loggers, "log_click", [data, buckets])
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Optional, Union

from adcomponents.components.base import FAILED, Component, Failure, HookType
from adcomponents.components.dependencies import order_by_dependencies
from adcomponents.components.dispatch import call_on_components, call_on_components_by_hook
from adcomponents.components.errors import ErrorReporter, LoggingErrorReporter
from adcomponents.components.loader import find_class, load_component_module
from adcomponents.components.registry import ComponentRegistry
from adcomponents.components.scanner import COMPONENT_SUFFIX, KEY_SEPARATOR, Depth, scan_component_files
from adcomponents.config import resolve_plugins_root
from adcomponents.exceptions import (
    ComponentClassError,
    ComponentError,
    ComponentMethodError,
    ComponentNotFoundError,
    InvalidIdentifierError,
)
from adcomponents.models import CLASS_PREFIX, ComponentDescriptor, GlobalConfig, is_switched_on

logger = logging.getLogger(__name__)

REFACTORED_EXTENSIONS: tuple[str, ...] = (
    "deliveryLimitations",
    "bannerTypeHtml",
    "bannerTypeText",
)
"""Extensions whose groups must be switched on in ``plugin_group_components``."""


class ComponentManager:
    """Loads components from the plugins root and dispatches calls to them.

    Args:
        config: Configuration providing ``plugin_paths.extensions`` and
            ``plugin_group_components``.
        reporter: Receives hard failures. Defaults to
            :class:`~adcomponents.components.errors.LoggingErrorReporter`.
        registry: Explicitly registered component classes, consulted before
            the filesystem. A fresh empty registry is used if omitted.
    """

    def __init__(
        self,
        config: GlobalConfig,
        reporter: Optional[ErrorReporter] = None,
        registry: Optional[ComponentRegistry] = None,
    ) -> None:
        self.config = config
        self.reporter = reporter or LoggingErrorReporter()
        self.registry = registry if registry is not None else ComponentRegistry()

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @property
    def plugins_root(self) -> Path:
        return resolve_plugins_root(self.config)

    def component_path(self, extension: str, group: str, component: Optional[str] = None) -> Path:
        """Return the file expected to hold a component.

        An empty *group* places the file directly in the extension directory.
        """
        if component is None:
            component = group
        directory = self.plugins_root / extension
        if group:
            directory = directory / group
        return directory / f"{component}{COMPONENT_SUFFIX}"

    # ------------------------------------------------------------------
    # Enablement
    # ------------------------------------------------------------------

    def is_enabled_component(self, extension: str, group: str, component: Optional[str] = None) -> bool:
        """Return whether a component is switched on.

        Components are enabled unless their extension is one of
        :data:`REFACTORED_EXTENSIONS` and ``plugin_group_components`` does not
        switch *group* on (see :func:`~adcomponents.models.is_switched_on`).
        """
        if extension not in REFACTORED_EXTENSIONS:
            return True
        return is_switched_on(self.config.plugin_group_components.get(group))

    # ------------------------------------------------------------------
    # Class resolution
    # ------------------------------------------------------------------

    def _report(self, error: ComponentError) -> None:
        self.reporter.report(error)

    def _load_class(self, path: Path, class_name: str) -> Optional[type]:
        """Load *path* once and return *class_name* from it (reporting failures)."""
        cached = self.registry.get_loaded(path, class_name)
        if cached is not None:
            return cached
        try:
            module = load_component_module(path)
        except ComponentError as exc:
            self._report(exc)
            return None
        cls = find_class(module, class_name)
        if cls is None or not issubclass(cls, Component):
            self._report(
                ComponentClassError(
                    f"Component file {path} included but class '{class_name}' does not exist."
                )
            )
            return None
        self.registry.remember_loaded(path, class_name, cls)
        return cls

    def get_component_class(
        self, extension: str, group: str, component: Optional[str] = None
    ) -> Optional[type[Component]]:
        """Resolve the class implementing a component, loading its file if needed.

        Returns:
            The class, or ``None`` if no file exists (not reported) or the
            file does not define the expected class (reported).
        """
        if component is None:
            component = group
        descriptor = ComponentDescriptor(extension=extension, group=group, component=component)
        registered = self.registry.get(descriptor)
        if registered is not None:
            return registered

        path = self.component_path(extension, group, component)
        if not path.is_file():
            logger.debug("No component file for '%s' at %s", descriptor.identifier, path)
            return None
        return self._load_class(path, descriptor.class_name)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    def factory(self, extension: str, group: str, component: Optional[str] = None) -> Optional[Component]:
        """Load and instantiate a component.

        Args:
            extension: Plugin extension (``<root>/<extension>`` directory).
            group: Component group (``<root>/<extension>/<group>``); may be
                empty.
            component: Component file name without suffix. Defaults to
                *group*.

        Returns:
            The instance with ``extension``, ``group``, ``component`` and
            ``enabled`` set, or ``None`` if the component cannot be loaded.
        """
        if component is None:
            component = group
        cls = self.get_component_class(extension, group, component)
        if cls is None:
            return None

        instance = cls(extension, group, component)
        instance.extension = extension
        instance.group = group
        instance.component = component
        instance.enabled = self.is_enabled_component(extension, group, component)
        return instance

    def factory_by_identifier(self, identifier: str) -> Optional[Component]:
        """Instantiate the component named by an ``extension:group:component`` identifier.

        Malformed identifiers are reported and yield ``None``.
        """
        try:
            descriptor = ComponentDescriptor.parse(identifier)
        except InvalidIdentifierError as exc:
            self._report(exc)
            return None
        return self.factory(descriptor.extension, descriptor.group, descriptor.component)

    def get_fallback_handler(self, extension: str) -> Optional[Component]:
        """Return the extension-wide handler from ``<root>/<extension>/<extension>.py``.

        The class must be named ``Plugins_<extension>`` (extension used
        verbatim). It is instantiated without arguments and always reported
        as disabled.
        """
        path = self.plugins_root / extension / f"{extension}{COMPONENT_SUFFIX}"
        if not path.is_file():
            self._report(ComponentNotFoundError(f"Unable to include the file {path}."))
            return None
        cls = self._load_class(path, f"{CLASS_PREFIX}_{extension}")
        if cls is None:
            return None
        handler = cls()
        handler.extension = extension
        # handlers that skip Component.__init__ still get an identity
        handler.group = getattr(handler, "group", "")
        handler.component = getattr(handler, "component", "")
        handler.enabled = False
        return handler

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def get_component_files(
        self, extension: str, group: Optional[str] = None, recursive: Depth = 1
    ) -> dict[str, Path]:
        """Index component files of an extension, keyed by ``"group:filename"``."""
        return scan_component_files(self.plugins_root / extension, group, recursive)

    def get_components(
        self,
        extension: str,
        group: Optional[str] = None,
        only_component_name_as_index: bool = True,
        recursive: Depth = 1,
        enabled_only: bool = True,
    ) -> dict[str, Component]:
        """Instantiate every component found under an extension or extension/group.

        Files directly in the extension directory have no group and are
        skipped.

        Args:
            extension: Plugin extension name.
            group: Optional group to restrict the scan to.
            only_component_name_as_index: Key results by component name
                (later duplicates overwrite earlier ones) instead of the
                unique ``"group:component"`` key.
            recursive: ``True`` for unlimited depth, or the number of
                directory levels to descend.
            enabled_only: Drop components that are not enabled.

        Returns:
            Ordered mapping of key to component instance.
        """
        components: dict[str, Component] = {}
        for key in self.get_component_files(extension, group, recursive):
            parts = key.split(KEY_SEPARATOR)
            if len(parts) < 2:
                continue
            found_group, name = parts[0], parts[1]
            instance = self.factory(extension, found_group, name)
            if instance is None:
                continue
            if enabled_only and not instance.enabled:
                logger.debug("Skipping disabled component '%s'", instance.get_component_identifier())
                continue
            components[name if only_component_name_as_index else key] = instance
        return components

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def call_static_method(
        self,
        extension: str,
        group: str,
        component: Optional[str],
        method_name: str,
        args: Optional[Sequence[Any]] = None,
    ) -> Union[Any, Failure]:
        """Call a method on a component class without instantiating it.

        Enablement is checked before the file is loaded. The method name is
        matched case-insensitively.

        Returns:
            The method's return value, or :data:`FAILED` if the component is
            disabled, missing, or does not define the method.
        """
        if component is None:
            component = group
        if not self.is_enabled_component(extension, group, component):
            return FAILED
        cls = self.get_component_class(extension, group, component)
        if cls is None:
            return FAILED

        wanted = method_name.lower()
        for attr in dir(cls):
            if attr.lower() == wanted and callable(getattr(cls, attr)):
                method = getattr(cls, attr)
                break
        else:
            self._report(
                ComponentMethodError(f"Method '{method_name}()' not defined in class '{cls.__name__}'.")
            )
            return FAILED

        if args is None:
            return method()
        return method(*args)

    def call_on_components(
        self,
        components: Mapping[str, Component],
        method_name: str,
        args: Optional[Sequence[Any]] = None,
    ) -> Union[dict[str, Any], Failure]:
        """See :func:`~adcomponents.components.dispatch.call_on_components`."""
        return call_on_components(components, method_name, args, reporter=self.reporter)

    def call_on_components_by_hook(
        self,
        components: Mapping[str, Component],
        method_name: str,
        hook_type: HookType,
        hook_point: str,
        args: Optional[Sequence[Any]] = None,
    ) -> bool:
        """See :func:`~adcomponents.components.dispatch.call_on_components_by_hook`."""
        return call_on_components_by_hook(
            components, method_name, hook_type, hook_point, args, reporter=self.reporter
        )

    def order_by_dependencies(
        self, components: Mapping[str, Component]
    ) -> Union[dict[str, Component], Failure]:
        """See :func:`~adcomponents.components.dependencies.order_by_dependencies`."""
        return order_by_dependencies(components, reporter=self.reporter)
