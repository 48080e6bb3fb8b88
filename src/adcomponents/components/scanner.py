"""Directory scanning for component files.

Builds the file index used by
:meth:`~adcomponents.components.manager.ComponentManager.get_components`:
a mapping from ``"group:filename"`` to the absolute file path, where
``group`` is the directory between the extension directory and the file and
``filename`` is the file name without the ``.py`` suffix.

Only files matching the component file mask are indexed: names made of
``[A-Za-z0-9_-]`` ending in ``.py``, sitting either directly in the
extension directory or one directory below it. Files in the extension root
get a key without a group part (just ``"filename"``); the manager skips
those.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterator, Optional, Union

logger = logging.getLogger(__name__)

COMPONENT_SUFFIX = ".py"
KEY_SEPARATOR = ":"

_FILE_MASK = re.compile(r"^(?!__)([A-Za-z0-9_\-]+)" + re.escape(COMPONENT_SUFFIX) + r"$")

Depth = Union[bool, int]


def _max_depth(recursive: Depth) -> Optional[int]:
    """Translate the ``recursive`` argument into a depth bound (``None`` = unlimited)."""
    if isinstance(recursive, bool):
        return None if recursive else 0
    return max(int(recursive), 0)


def _walk(directory: Path, depth: int, max_depth: Optional[int]) -> Iterator[Path]:
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        logger.warning("Cannot read component directory %s: %s", directory, exc)
        return
    subdirs: list[Path] = []
    for entry in entries:
        if entry.is_dir():
            if not entry.name.startswith((".", "__")):
                subdirs.append(entry)
        elif entry.is_file():
            yield entry
    if max_depth is not None and depth >= max_depth:
        return
    for sub in subdirs:
        yield from _walk(sub, depth + 1, max_depth)


def build_key(extension_dir: Path, path: Path) -> Optional[str]:
    """Return the index key for *path*, or ``None`` if it is not a component file.

    Example::

        >>> build_key(Path("/p/deliveryLog"), Path("/p/deliveryLog/ox_click/ox_click.py"))
        'ox_click:ox_click'
    """
    match = _FILE_MASK.match(path.name)
    if match is None:
        return None
    try:
        relative = path.parent.relative_to(extension_dir)
    except ValueError:
        return None
    if len(relative.parts) > 1:
        return None
    filename = match.group(1)
    if not relative.parts:
        return filename
    return f"{relative.parts[0]}{KEY_SEPARATOR}{filename}"


def scan_component_files(
    extension_dir: Path,
    group: Optional[str] = None,
    recursive: Depth = 1,
) -> dict[str, Path]:
    """Index the component files of an extension (or one of its groups).

    Args:
        extension_dir: ``<plugins_root>/<extension>``.
        group: If given, scanning starts at ``extension_dir / group``.
        recursive: ``True`` to descend without limit, ``False`` or ``0`` to
            read only the starting directory, or an int giving how many
            directory levels to descend.

    Returns:
        Mapping of ``"group:filename"`` (or bare ``"filename"`` for files in
        the extension root) to absolute paths, in sorted path order. An
        unreadable or missing directory yields an empty mapping.
    """
    directory = extension_dir / group if group else extension_dir
    if not directory.is_dir() or not os.access(directory, os.R_OK):
        logger.debug("Component directory %s is not readable, nothing to scan", directory)
        return {}

    index: dict[str, Path] = {}
    for path in _walk(directory, 0, _max_depth(recursive)):
        key = build_key(extension_dir, path)
        if key is not None:
            index[key] = path.resolve()
    logger.debug("Indexed %d component file(s) under %s", len(index), directory)
    return index
