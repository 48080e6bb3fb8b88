"""Explicit registry of component classes.

Maps a :class:`~adcomponents.models.ComponentDescriptor` to the class that
implements it. The manager consults the registry before looking on disk, so
components can be provided from regular packages (or tests) without a file
under the plugins root::

    registry = ComponentRegistry()

    @registry.component("deliveryLog", "ox_click")
    class ClickLogger(Component):
        ...

Classes resolved from files are added as they are loaded, so each file is
only inspected once per registry.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator, Optional, TypeVar

from adcomponents.components.base import Component
from adcomponents.models import ComponentDescriptor

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=type)


class ComponentRegistry:
    """Descriptor to class mapping with explicit registration."""

    def __init__(self) -> None:
        self._classes: dict[ComponentDescriptor, type[Component]] = {}
        self._loaded: dict[tuple[Path, str], type[Component]] = {}

    def __contains__(self, descriptor: object) -> bool:
        return descriptor in self._classes

    def __len__(self) -> int:
        return len(self._classes)

    def __iter__(self) -> Iterator[ComponentDescriptor]:
        return iter(self._classes)

    def register(self, descriptor: ComponentDescriptor, cls: type[Component]) -> None:
        """Register *cls* as the implementation of *descriptor*.

        Raises:
            TypeError: If *cls* is not a :class:`Component` subclass.
        """
        if not (isinstance(cls, type) and issubclass(cls, Component)):
            raise TypeError(f"{cls!r} is not a Component subclass")
        previous = self._classes.get(descriptor)
        if previous is not None and previous is not cls:
            logger.warning(
                "Replacing component class for '%s': %s -> %s",
                descriptor.identifier,
                previous.__name__,
                cls.__name__,
            )
        self._classes[descriptor] = cls

    def component(
        self, extension: str, group: str, component: Optional[str] = None
    ) -> Callable[[C], C]:
        """Class decorator form of :meth:`register`."""
        descriptor = ComponentDescriptor(
            extension=extension,
            group=group,
            component=group if component is None else component,
        )

        def decorator(cls: C) -> C:
            self.register(descriptor, cls)
            return cls

        return decorator

    def unregister(self, descriptor: ComponentDescriptor) -> None:
        self._classes.pop(descriptor, None)

    def get(self, descriptor: ComponentDescriptor) -> Optional[type[Component]]:
        return self._classes.get(descriptor)

    def get_loaded(self, path: Path, class_name: str) -> Optional[type[Component]]:
        """Return a class previously resolved from the file at *path*."""
        return self._loaded.get((path, class_name))

    def remember_loaded(self, path: Path, class_name: str, cls: type[Component]) -> None:
        self._loaded[(path, class_name)] = cls
