"""Base classes every loadable component derives from.

A component is a class living in
``<plugins_root>/<extension>/<group>/<component>.py`` under the name given by
:attr:`~adcomponents.models.ComponentDescriptor.class_name`, e.g.::

    # plugins/deliveryLog/ox_click/ox_click.py
    class Plugins_DeliveryLog_Ox_click_Ox_click(Component):
        ...

:class:`~adcomponents.components.manager.ComponentManager` instantiates it
with ``(extension, group, component)`` and then stamps the identity and the
``enabled`` flag onto the instance.

:class:`MaintenanceComponent` marks components that take part in maintenance
runs; they are selected by hook type and hook point in
:func:`~adcomponents.components.dispatch.call_on_components_by_hook`.
"""

from __future__ import annotations

import enum
from typing import ClassVar

from adcomponents.models import ComponentDescriptor


class Failure(enum.Enum):
    """Falsy sentinel returned by operations that fail without raising.

    Distinct from ``None`` because component methods may legitimately
    return ``None``. Compare with ``is FAILED``.
    """

    FAILED = "failed"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "FAILED"


FAILED = Failure.FAILED


class HookType(str, enum.Enum):
    """When a maintenance component runs relative to the standard task."""

    PRE = "pre"
    POST = "post"


class Component:
    """A loadable plugin component.

    Subclasses may override ``__init__`` but should accept the identity
    triple; whatever they store is overwritten by the factory.

    Attributes:
        extension: Top-level plugin namespace (directory).
        group: Sub-namespace within the extension.
        component: Leaf name of the component.
        enabled: Whether the component is switched on. Set by the factory.
        dependencies: Identifiers of components that must run before this
            one when a batch is ordered with
            :func:`~adcomponents.components.dependencies.order_by_dependencies`.
    """

    dependencies: ClassVar[tuple[str, ...]] = ()

    def __init__(self, extension: str = "", group: str = "", component: str = "") -> None:
        self.extension = extension
        self.group = group
        self.component = component
        self.enabled = True

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self.get_component_identifier()}"
            f"{'' if self.enabled else ' (disabled)'}>"
        )

    def identity(self) -> tuple[str, str, str]:
        return (self.extension, self.group, self.component)

    @property
    def descriptor(self) -> ComponentDescriptor:
        return ComponentDescriptor(
            extension=self.extension, group=self.group, component=self.component
        )

    def get_component_identifier(self) -> str:
        """Return ``extension:group:component`` for this instance."""
        return self.descriptor.identifier

    @staticmethod
    def parse_component_identifier(identifier: str) -> tuple[str, str, str]:
        """Split an identifier into ``(extension, group, component)``.

        Raises:
            InvalidIdentifierError: If *identifier* is malformed.
        """
        return ComponentDescriptor.parse(identifier).as_tuple()


class MaintenanceComponent(Component):
    """A component that hooks into maintenance runs.

    Subclasses set :attr:`hook_type` and :attr:`hook_point`. A ``run()``
    method returning exactly ``False`` from a ``PRE`` component tells the
    caller that the component replaced the standard task.
    """

    hook_type: ClassVar[HookType] = HookType.PRE
    hook_point: ClassVar[str] = ""

    def get_hook_type(self) -> HookType:
        return self.hook_type

    def get_hook(self) -> str:
        return self.hook_point
