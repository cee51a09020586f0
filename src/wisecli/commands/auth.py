"""Auth commands -- store an API token and show who it belongs to."""

from __future__ import annotations

import typer

from wisecli.output import print_details, success


def login_command(
    ctx: typer.Context,
    token: str = typer.Option(
        ...,
        "--with-token",
        prompt="Enter your Wise API token",
        hide_input=True,
        help="API token to store (prompted for when omitted).",
    ),
) -> None:
    """Save a Wise API token for future runs.

    The token is written to the storage root with owner-only permissions.
    ``--token`` and ``WISE_API_TOKEN`` still take precedence over it.

    Example::

        wise-cli login
        echo "$TOKEN" | wise-cli login
    """
    from wisecli.commands._context import get_state, storage_root
    from wisecli.config import save_token
    from wisecli.exceptions import InvalidUsageError

    token = token.strip()
    if not token:
        raise InvalidUsageError("token cannot be empty")

    root = storage_root(ctx)
    save_token(root, token)
    get_state(ctx)["token"] = token
    success(f"✓ Token saved to {root}")


def me_command(ctx: typer.Context) -> None:
    """Show the user the API token belongs to."""
    from wisecli.api import get_me
    from wisecli.commands._context import open_client, or_na

    with open_client(ctx) as client:
        user = get_me(client)

    print_details(
        [
            ("ID", str(user.id)),
            ("Name", or_na(user.name)),
            ("Email", or_na(user.email)),
            ("Active", str(user.active).lower()),
            ("First Name", or_na(user.details.first_name)),
            ("Last Name", or_na(user.details.last_name)),
            ("Phone", or_na(user.details.phone_number)),
        ],
        title="User",
    )
