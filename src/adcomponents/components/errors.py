"""Error reporters -- where hard component failures are sent.

The component operations never raise for a broken plugin. They build a
:class:`~adcomponents.exceptions.ComponentError`, hand it to the
configured reporter, and return their failure sentinel. Reporting is
fire-and-forget: the caller still has to check the return value.

* :class:`LoggingErrorReporter` -- the default; logs at ERROR level.
* :class:`CollectingErrorReporter` -- keeps errors in a list.
* :class:`RaisingErrorReporter` -- re-raises, for strict callers.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from adcomponents.exceptions import ComponentError

logger = logging.getLogger(__name__)


class ErrorReporter(ABC):
    """Receives human-readable descriptions of hard failures."""

    @abstractmethod
    def report(self, error: ComponentError) -> None:
        """Handle a single failure."""


class LoggingErrorReporter(ErrorReporter):
    """Logs every reported error through :mod:`logging`."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def report(self, error: ComponentError) -> None:
        self._log.error("%s: %s", type(error).__name__, error)


class CollectingErrorReporter(ErrorReporter):
    """Accumulates reported errors in :attr:`errors`.

    Example::

        reporter = CollectingErrorReporter()
        manager = ComponentManager(config, reporter=reporter)
        manager.factory("deliveryLog", "broken")
        for err in reporter.errors:
            print(err)
    """

    def __init__(self) -> None:
        self.errors: list[ComponentError] = []

    def report(self, error: ComponentError) -> None:
        self.errors.append(error)

    @property
    def messages(self) -> list[str]:
        return [str(e) for e in self.errors]

    def clear(self) -> None:
        self.errors.clear()


class RaisingErrorReporter(ErrorReporter):
    """Raises the reported error immediately."""

    def report(self, error: ComponentError) -> None:
        raise error
