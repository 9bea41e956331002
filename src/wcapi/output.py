"""Terminal output for the ``wcapi`` command line.

Response bodies and signed URLs are *data* and go to stdout, so
``wcapi get orders | jq`` works.  Status lines, warnings and errors are
*diagnostics* and go to stderr.

Store responses are JSON objects, JSON arrays, or (for odd endpoints and
proxies) plain text, so there are three renderings:

* ``json`` -- pretty-printed JSON, unicode kept as-is;
* ``plain`` -- ``key<TAB>value`` lines for an object, one line per element
  for an array (object elements become tab-joined values);
* ``rich`` -- syntax-highlighted JSON, chosen automatically on a colour TTY.

``NO_COLOR`` (any value), ``TERM=dumb`` and ``--no-color`` turn colour off.

The CLI installs one :class:`OutputManager` per invocation via
:func:`set_output`; command code calls the module-level helpers.  Library
code never imports this module and logs instead; :func:`configure_logging`
sends those records to the same stderr console.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax


class OutputFormat(str, Enum):
    """How response bodies are rendered; ``AUTO`` picks ``RICH`` or ``PLAIN``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Holds the output preferences of one CLI invocation.

    Args:
        format: Rendering for response bodies.
        no_color: Disable colour and markup.
        quiet: Hide status lines and success messages.  Warnings, errors and
            data are always shown.
        verbose: Lower the ``wcapi`` log level to DEBUG (see
            :func:`configure_logging`).
        output_file: Write response bodies to this path instead of stdout.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._output_file = output_file

        if format != OutputFormat.AUTO:
            self._format = format
        elif _is_tty() and not self._no_color:
            self._format = OutputFormat.RICH
        else:
            self._format = OutputFormat.PLAIN

        rich_stdout = self._format == OutputFormat.RICH
        self._stdout = Console(file=sys.stdout, no_color=self._no_color, force_terminal=rich_stdout)
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    @property
    def stderr_console(self) -> Console:
        return self._stderr

    # --- data (stdout) ---

    def format_response(self, data: Any) -> None:
        """Render a decoded response body (or raw text) to stdout or ``output_file``."""
        if self._output_file:
            text = _as_json(data) if isinstance(data, (dict, list)) else str(data)
            with open(self._output_file, "w", encoding="utf-8") as fh:
                fh.write(text if text.endswith("\n") else text + "\n")
        elif self._format == OutputFormat.RICH and isinstance(data, (dict, list)):
            self._stdout.print(Syntax(_as_json(data), "json", theme="monokai", word_wrap=True))
        elif self._format == OutputFormat.RICH:
            self._stdout.print(str(data), markup=False, highlight=False)
        elif self._format == OutputFormat.JSON:
            self.print_data(_json_text(data))
        else:
            for line in _plain_lines(data):
                self.print_data(line)

    def print_data(self, text: str) -> None:
        """Write *text* to stdout verbatim (no markup, no wrapping)."""
        print(text, file=sys.stdout, flush=True)

    # --- diagnostics (stderr) ---

    def info(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message, message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message, f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        self._diagnostic(f"Warning: {message}", f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        self._diagnostic(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def _diagnostic(self, plain: str, styled: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(styled)


def _as_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _json_text(data: Any) -> str:
    """Pretty JSON for *data*; a string is re-parsed first and left alone if it isn't JSON."""
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except ValueError:
            return data
    return _as_json(data)


def _plain_lines(data: Any) -> list[str]:
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
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


def configure_logging(output: OutputManager) -> None:
    """Send ``wcapi`` log records to *output*'s stderr console.

    DEBUG with ``--verbose``, WARNING otherwise.  Records do not propagate to
    the root logger, so ``httpx`` request lines (which include the signed
    query) stay hidden.
    """
    logger = logging.getLogger("wcapi")
    logger.handlers.clear()
    logger.addHandler(
        RichHandler(console=output.stderr_console, show_time=False, show_path=False, markup=False)
    )
    logger.setLevel(logging.DEBUG if output.is_verbose else logging.WARNING)
    logger.propagate = False


# --- process-wide instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one on first use."""
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


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_data(text: str) -> None:
    get_output().print_data(text)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)
