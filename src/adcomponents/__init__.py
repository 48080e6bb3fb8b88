"""adcomponents -- plugin component loading for an ad server.

Plugins are organised as ``<plugins_root>/<extension>/<group>/<component>.py``.
This package resolves such a triple to the class defined in that file,
instantiates it, discovers every component of an extension, and dispatches
method calls to component classes or batches of instances. It also ships the
delivery-log components that aggregate delivery events into bucket tables.

Modules:
    app: Typer application and CLI entry point.
    components: Component base classes, manager, registry and dispatch.
    delivery: Delivery-log component base and bucket stores.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
