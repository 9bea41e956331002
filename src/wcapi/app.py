"""Typer application factory and CLI entry point for wcapi.

This module wires together the top-level Typer application: the global
flags handled by :func:`main_callback`, the request commands from
:mod:`wcapi.commands.request` and the ``profile`` sub-application.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.  It installs a SIGINT handler and invokes the Typer
app.  Unhandled exceptions are written to a crash log under the data
directory.

See Also:
    :mod:`wcapi.config`: Profile resolution.
    :mod:`wcapi.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from wcapi import __version__
from wcapi.commands.profile import profile_app
from wcapi.commands.request import (
    delete_command,
    get_command,
    options_command,
    post_command,
    put_command,
    sign_command,
)
from wcapi.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="wcapi",
    help="Signed requests against a WooCommerce store REST API.",
    no_args_is_help=True,
    add_completion=True,
    rich_markup_mode="rich",
)

app.command("get")(get_command)
app.command("post")(post_command)
app.command("put")(put_command)
app.command("delete")(delete_command)
app.command("options")(options_command)
app.command("sign")(sign_command)
app.add_typer(profile_app, name="profile", help="Store profile management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"wcapi {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Profile name to use."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write the response body to this file."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~wcapi.output.OutputManager`, routes
    library logging to stderr, and stores the selected profile name in
    ``ctx.obj``.
    """
    from wcapi.output import OutputFormat, OutputManager, configure_logging, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
        output_file=output_file,
    )
    set_output(output)
    configure_logging(output)

    ctx.ensure_object(dict)
    ctx.obj["profile"] = profile
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from wcapi.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``wcapi`` console script.

    :class:`~wcapi.exceptions.WcapiError` instances that escape a command
    cause a clean exit with the error's ``exit_code``.  All other
    exceptions produce a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from wcapi.exceptions import WcapiError
        from wcapi.output import error

        if isinstance(exc, WcapiError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
