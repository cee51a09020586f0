"""Typer application and CLI entry point for wise-cli.

This module builds the top-level Typer application, stores the global
options in the Typer context for the commands in :mod:`wisecli.commands`,
and registers those commands.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a signal handler, invokes the Typer app and
turns errors into exit codes: a :class:`~wisecli.exceptions.WiseCliError`
prints its message and exits with its ``exit_code``; anything else is
written to a crash log under the data directory.

See Also:
    :mod:`wisecli.commands._context`: How commands read the global options.
    :mod:`wisecli.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from wisecli import __version__
from wisecli.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="wise-cli",
    help="Command-line client for Wise payments, with a local response cache.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"wise-cli {__version__}")
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
    token: Optional[str] = typer.Option(
        None, "--token", help="API token (overrides WISE_API_TOKEN and the saved token)."
    ),
    refresh: bool = typer.Option(
        False, "--refresh", help="Ignore cached responses and fetch fresh data."
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
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~wisecli.output.OutputManager` from CLI
    flags and stores ``token`` and ``refresh`` in ``ctx.obj``. Values already
    present in ``ctx.obj`` (such as a test transport) are kept.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        token: API token override (highest precedence).
        refresh: Bypass the response cache for this run.
        json_output: Force JSON output format.
        plain_output: Force plain-text output format.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output.
    """
    from wisecli.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["token"] = token
    ctx.obj["refresh"] = refresh


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #

from wisecli.commands.auth import login_command, me_command  # noqa: E402
from wisecli.commands.new import new_app  # noqa: E402
from wisecli.commands.profiles import profiles_command, select_profile_command  # noqa: E402
from wisecli.commands.quotes import quote_command  # noqa: E402
from wisecli.commands.recipients import recipients_command  # noqa: E402
from wisecli.commands.transfers import (  # noqa: E402
    lookup_transfer_command,
    send_to_command,
    transfers_command,
)

app.command("login")(login_command)
app.command("me")(me_command)
app.command("profiles")(profiles_command)
app.command("select-profile")(select_profile_command)
app.command("recipients")(recipients_command)
app.command("quote")(quote_command)
app.add_typer(new_app, name="new", help="Create quotes, transfers, and recipients.")
app.command("transfers")(transfers_command)
app.command("send-to")(send_to_command)
app.command("lookup-transfer")(lookup_transfer_command)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from wisecli.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``wise-cli`` console script.

    Unhandled :class:`~wisecli.exceptions.WiseCliError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce a
    crash log and a generic failure exit.

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
        from wisecli.exceptions import WiseCliError
        from wisecli.output import error

        if isinstance(exc, WiseCliError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
