"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~adcomponents.exceptions.AdComponentsError` subclass.
Shell wrappers and maintenance scripts can inspect the exit code to tell a
missing component apart from a broken one without parsing stderr.

Example::

    $ adcomponents show deliveryLog:ox_click:missing
    $ echo $?
    4   # EXIT_COMPONENT_NOT_FOUND -- no file for that component
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_COMPONENT_NOT_FOUND = 4
"""No component file exists for the requested extension/group/component."""

EXIT_COMPONENT_ERROR = 10
"""A component file was found but could not be loaded, resolved, or invoked."""
