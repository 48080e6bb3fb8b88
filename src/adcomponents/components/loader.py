"""Load-once import of component files.

Component files are plain Python modules outside any package. Each file is
imported under a synthetic module name derived from its absolute path and
kept in :data:`sys.modules`, so a second load of the same path returns the
already-imported module instead of executing it again and redefining its
classes.
"""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Optional

from adcomponents.exceptions import ComponentLoadError

logger = logging.getLogger(__name__)

MODULE_NAMESPACE = "adcomponents_plugins"


def module_name_for(path: Path) -> str:
    """Return the synthetic module name a component file is imported under."""
    resolved = path.resolve()
    digest = hashlib.sha1(str(resolved).encode("utf-8")).hexdigest()[:12]
    safe_stem = "".join(c if c.isalnum() or c == "_" else "_" for c in resolved.stem)
    return f"{MODULE_NAMESPACE}.{safe_stem}_{digest}"


def is_loaded(path: Path) -> bool:
    return module_name_for(path) in sys.modules


def load_component_module(path: Path) -> ModuleType:
    """Import the component file at *path*, at most once per process.

    Args:
        path: The ``.py`` file to load. Must exist.

    Returns:
        The module object.

    Raises:
        ComponentLoadError: If the file cannot be read or raises while it is
            executed. The half-initialised module is not kept.
    """
    name = module_name_for(path)
    cached = sys.modules.get(name)
    if cached is not None:
        return cached

    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ComponentLoadError(f"Unable to create an import spec for {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(name, None)
        raise ComponentLoadError(f"Component file {path} failed to load: {exc}") from exc
    logger.debug("Loaded component file %s as %s", path, name)
    return module


def find_class(module: ModuleType, class_name: str) -> Optional[type]:
    """Return the class *class_name* defined in *module*, or ``None``."""
    candidate = getattr(module, class_name, None)
    return candidate if isinstance(candidate, type) else None
