"""The ``adcomponents`` command line.

Root options are handled by :func:`main_callback`, which installs the output
manager and stashes the plugins-root override in ``ctx.obj`` for the
sub-commands in :mod:`adcomponents.commands`.

:func:`main` is the console-script entry point. Configuration errors exit
with their own code; anything unexpected leaves a traceback in
``<data dir>/logs``.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import typer

from adcomponents import __version__
from adcomponents.commands.components import (
    call_command,
    fallback_command,
    list_command,
    show_command,
)
from adcomponents.commands.config import config_app
from adcomponents.exit_codes import EXIT_GENERIC_FAILURE

_EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="adcomponents",
    help="Discover, load, and call ad-server plugin components.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("list")(list_command)
app.command("show")(show_command)
app.command("call")(call_command)
app.command("fallback")(fallback_command)
app.add_typer(config_app, name="config", help="Show or edit the global configuration.")


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"adcomponents {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Send ``adcomponents`` log records to stderr at DEBUG when verbose."""
    if not verbose:
        return
    package_logger = logging.getLogger("adcomponents")
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Print the adcomponents version.",
    ),
    plugins_root: Optional[str] = typer.Option(
        None, "--plugins-root", help="Directory holding the plugin extensions."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Write results as JSON."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Write results as tab-separated text."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Never use colour."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only print results and errors."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Print debug messages and component logs."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Do not ask for confirmation."
    ),
) -> None:
    """Discover, load, and call ad-server plugin components."""
    from adcomponents.output import OutputFormat, OutputManager, set_output

    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = OutputFormat.AUTO
    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    _configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj.update(plugins_root=plugins_root, force=force, verbose=verbose)


def _interrupted(signum: int, frame: Any) -> None:  # noqa: ANN401
    sys.stderr.write("\nCancelled.\n")
    sys.exit(_EXIT_INTERRUPTED)


def _save_traceback() -> Path:
    """Write the traceback being handled to a timestamped crash log."""
    from adcomponents.config import get_data_dir

    log_dir = get_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    path = log_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    path.write_text(traceback.format_exc(), encoding="utf-8")
    return path


def main() -> None:
    """Console-script entry point."""
    from adcomponents.exceptions import AdComponentsError
    from adcomponents.output import error

    signal.signal(signal.SIGINT, _interrupted)
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        _interrupted(signal.SIGINT, None)
    except AdComponentsError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception:
        error(f"Unexpected error. Traceback saved to {_save_traceback()}")
        sys.exit(EXIT_GENERIC_FAILURE)
