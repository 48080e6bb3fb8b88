"""CLI output: data on stdout, diagnostics on stderr.

Commands never print directly. They call the module-level helpers
(:func:`format_response`, :func:`print_table`, :func:`error`, ...), which
forward to the :class:`OutputManager` installed by the root callback with
:func:`set_output`.

Data written to stdout is rendered as JSON, tab-separated plain text, or Rich
markup depending on the active :class:`OutputFormat`. Diagnostics always go
to stderr, so ``adcomponents --json list deliveryLog | jq`` stays parseable.
Colour is disabled by ``--no-color``, ``NO_COLOR`` or ``TERM=dumb``.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional, Sequence

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """Rendering of stdout data. ``AUTO`` picks ``RICH`` on a colour TTY."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# (plain prefix, rich style) per diagnostic level
_LEVELS: dict[str, tuple[str, str]] = {
    "info": ("", ""),
    "success": ("", "green"),
    "warning": ("Warning: ", "yellow"),
    "error": ("Error: ", "bold red"),
    "suggest": ("→ ", "dim"),
    "debug": ("[debug] ", "dim"),
}

_QUIETABLE = frozenset({"info", "success", "suggest"})


def _jsonable(data: Any) -> Any:  # noqa: ANN401
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, dict):
        return {str(k): _jsonable(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [_jsonable(v) for v in data]
    return data


def _dumps(data: Any) -> str:  # noqa: ANN401
    return json.dumps(_jsonable(data), indent=2, ensure_ascii=False, default=str)


class OutputManager:
    """Holds the output preferences of one CLI invocation.

    Args:
        format: Requested format. ``AUTO`` is resolved once, here.
        no_color: Disable colour and Rich markup.
        quiet: Drop info, success and suggestion messages.
        verbose: Show debug messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        if format == OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format
        self._console = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format == OutputFormat.RICH,
        )
        self._err_console = Console(file=sys.stderr, stderr=True, no_color=self._no_color)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # --- stdout ---

    def print_data(self, text: str) -> None:
        """Write one line of raw text to stdout."""
        print(text, file=sys.stdout, flush=True)

    def format_response(self, data: Any) -> None:
        """Render a command result (mapping, list, model or scalar) to stdout."""
        if self._format == OutputFormat.JSON:
            self.print_data(_dumps(data))
            return
        data = _jsonable(data)
        if self._format == OutputFormat.PLAIN:
            for line in _plain_lines(data):
                self.print_data(line)
        elif isinstance(data, (dict, list)):
            self._console.print(Syntax(_dumps(data), "json", theme="monokai", word_wrap=True))
        else:
            self._console.print(str(data))

    def print_table(
        self,
        headers: list[str],
        rows: Sequence[Sequence[Any]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows under *headers*.

        JSON gives one object per row keyed by header, plain gives a header
        line followed by tab-separated rows.
        """
        cells = [[str(value) for value in row] for row in rows]
        if self._format == OutputFormat.JSON:
            self.print_data(_dumps([dict(zip(headers, row)) for row in cells]))
        elif self._format == OutputFormat.PLAIN:
            for line in [headers, *cells]:
                self.print_data("\t".join(line))
        else:
            table = Table(*headers, title=title, header_style="bold cyan")
            for row in cells:
                table.add_row(*row)
            self._console.print(table)

    # --- stderr ---

    def info(self, message: str) -> None:
        self._diagnostic("info", message)

    def success(self, message: str) -> None:
        self._diagnostic("success", message)

    def warning(self, message: str) -> None:
        self._diagnostic("warning", message)

    def error(self, message: str) -> None:
        """Print an error. Shown even with ``--quiet``."""
        self._diagnostic("error", message)

    def suggest(self, message: str) -> None:
        """Print a hint about what to try next."""
        self._diagnostic("suggest", message)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnostic("debug", message)

    def _diagnostic(self, level: str, message: str) -> None:
        if self._quiet and level in _QUIETABLE:
            return
        prefix, style = _LEVELS[level]
        if self._no_color:
            print(f"{prefix}{message}", file=sys.stderr, flush=True)
            return
        text = escape(f"{prefix}{message}")
        self._err_console.print(f"[{style}]{text}[/{style}]" if style else text)


def _plain_lines(data: Any) -> list[str]:  # noqa: ANN401
    if isinstance(data, dict):
        return [f"{key}\t{value}" for key, value in data.items()]
    if isinstance(data, list):
        return [
            "\t".join(str(v) for v in item.values()) if isinstance(item, dict) else str(item)
            for item in data
        ]
    return [str(data)]


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """``NO_COLOR`` (any value) or ``TERM=dumb`` turn colour off."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# --- process-wide instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests swap stdout between runs)."""
    global _output
    _output = None


def format_response(data: Any) -> None:  # noqa: ANN401
    get_output().format_response(data)


def print_table(
    headers: list[str],
    rows: Sequence[Sequence[Any]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def debug(message: str) -> None:
    get_output().debug(message)
