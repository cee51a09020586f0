"""Terminal output for wise-cli.

Everything a command prints goes through the :class:`OutputManager`
installed by :func:`~wisecli.app.main_callback`:

* **stdout** carries the command's result and nothing else: the profiles,
  recipients and transfers tables, quote and transfer details, or the raw
  ledger record of ``--json lookup-transfer``. Piping a command therefore
  never picks up a status line.
* **stderr** carries the progress lines of ``send-to`` ("Finding
  recipient", "Creating quote"), confirmations such as a saved token, and
  warnings. A cache or ledger write that fails after the API call succeeded
  is reported here as ``Warning: ...`` and the exit code stays 0.
* ``--verbose`` adds ``[debug]`` lines for cache hits, misses and writes;
  ``--quiet`` drops progress and confirmations but keeps warnings and
  errors.

Tables are drawn with Rich on an interactive terminal and printed as
tab-separated text otherwise, so ``wise-cli recipients -p 101 | cut -f2``
works. ``NO_COLOR``, ``TERM=dumb`` and ``--no-color`` all force plain text.

Callers use the module-level functions (:func:`info`, :func:`warning`,
:func:`print_table`, ...) rather than passing the manager around.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table


class OutputFormat(str, Enum):
    """How results are written to stdout.

    ``AUTO`` becomes ``RICH`` on a colour-capable terminal and ``PLAIN``
    everywhere else. ``JSON`` is selected by the global ``--json`` flag.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Writes command results to stdout and diagnostics to stderr.

    Args:
        format: Result format; ``AUTO`` is resolved once, here.
        no_color: The ``--no-color`` flag.
        quiet: The ``--quiet`` flag; hides progress and confirmations.
        verbose: The ``--verbose`` flag; shows cache debug lines.
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
            rich = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(self._format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # ------------------------------------------------------------------ #
    # Results (stdout)
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def print_json(self, data: Any) -> None:
        """Print *data* as indented JSON, e.g. a ledger record in camelCase."""
        self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print a listing such as the recipients of a profile.

        JSON mode prints one object per row keyed by column header; plain
        mode prints a header line then one tab-separated line per row.
        """
        if self._format == OutputFormat.JSON:
            self.print_json([dict(zip(headers, row)) for row in rows])
        elif self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
        else:
            table = Table(title=title, show_header=True, header_style="bold cyan")
            for header in headers:
                table.add_column(header)
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    def print_details(self, fields: list[tuple[str, str]], title: Optional[str] = None) -> None:
        """Print one quote or transfer as ``label<TAB>value`` lines."""
        if self._format == OutputFormat.JSON:
            self.print_json(dict(fields))
        elif self._format == OutputFormat.PLAIN:
            for label, value in fields:
                self.print_data(f"{label}\t{value}")
        else:
            table = Table(title=title, show_header=False, box=None)
            table.add_column(style="bold")
            table.add_column()
            for label, value in fields:
                table.add_row(label, value)
            self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message, style="green")

    def warning(self, message: str) -> None:
        """Report a non-fatal failure; shown even with ``--quiet``."""
        self._diagnostic(message, label="Warning:", style="yellow")

    def error(self, message: str) -> None:
        self._diagnostic(message, label="Error:", style="bold red")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnostic(message, label="[debug]", style="dim")

    def _diagnostic(self, message: str, label: str = "", style: str = "") -> None:
        if self._no_color:
            text = f"{label} {message}" if label else message
            print(text, file=sys.stderr, flush=True)
            return
        if style == "dim":
            self._stderr.print(f"[dim]{escape(label)} {message}[/dim]", highlight=False)
        elif label:
            self._stderr.print(f"[{style}]{label}[/{style}] {message}")
        elif style:
            self._stderr.print(f"[{style}]{message}[/{style}]")
        else:
            self._stderr.print(message)


# ------------------------------------------------------------------ #
# Module-level helpers
# ------------------------------------------------------------------ #


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    return os.environ.get("TERM") == "dumb"


_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager; tests call this between cases."""
    global _output
    _output = None


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_json(data: Any) -> None:
    get_output().print_json(data)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def print_details(fields: list[tuple[str, str]], title: Optional[str] = None) -> None:
    get_output().print_details(fields, title)


def info(message: str) -> None:
    get_output().info(message)


def error(message: str) -> None:
    get_output().error(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def debug(message: str) -> None:
    get_output().debug(message)
