"""The ``wise-cli new`` group -- create quotes, transfers, and recipients."""

from __future__ import annotations

import typer

from wisecli.commands.quotes import new_quote_command
from wisecli.commands.recipients import new_recipient_command
from wisecli.commands.transfers import new_transfer_command

new_app = typer.Typer(no_args_is_help=True)

new_app.command("quote")(new_quote_command)
new_app.command("transfer")(new_transfer_command)
new_app.command("recipient")(new_recipient_command)
