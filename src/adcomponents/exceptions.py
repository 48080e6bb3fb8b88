"""Exception hierarchy for adcomponents.

All exceptions inherit from :class:`AdComponentsError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`adcomponents.exit_codes`.

The component manager never raises these out of its public operations.
Instead it builds the exception, hands it to an
:class:`~adcomponents.components.errors.ErrorReporter` and returns a failure
sentinel, so callers branch on return values while the report travels
separately. The CLI entry point catches ``AdComponentsError`` raised by the
configuration layer and exits with the matching code.

Subclass hierarchy::

    AdComponentsError            (exit 1)
    +-- InvalidUsageError        (exit 2)
    +-- ConfigError              (exit 1)
    +-- ComponentError           (exit 10)
        +-- ComponentNotFoundError   (exit 4)
        +-- ComponentLoadError
        +-- ComponentClassError
        +-- ComponentMethodError
        +-- InvalidComponentsError
        +-- InvalidIdentifierError   (exit 2)
        +-- DependencyCycleError
"""

from adcomponents.exit_codes import (
    EXIT_COMPONENT_ERROR,
    EXIT_COMPONENT_NOT_FOUND,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
)


class AdComponentsError(Exception):
    """Base exception for all adcomponents errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(AdComponentsError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(AdComponentsError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE


class ComponentError(AdComponentsError):
    """Base class for failures while resolving, loading, or calling components."""

    exit_code = EXIT_COMPONENT_ERROR


class ComponentNotFoundError(ComponentError):
    """Raised when the file expected to hold a component does not exist."""

    exit_code = EXIT_COMPONENT_NOT_FOUND


class ComponentLoadError(ComponentError):
    """Raised when a component file raises while being imported."""


class ComponentClassError(ComponentError):
    """Raised when a component file loaded but the expected class is missing."""


class ComponentMethodError(ComponentError):
    """Raised when a component class does not define the requested method."""


class InvalidComponentsError(ComponentError):
    """Raised when a batch call receives something that is not a mapping of components."""


class InvalidIdentifierError(ComponentError):
    """Raised when a component identifier is not ``extension:group:component``."""

    exit_code = EXIT_INVALID_USAGE


class DependencyCycleError(ComponentError):
    """Raised when component dependencies form a cycle."""
