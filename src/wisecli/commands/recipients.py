"""Recipient commands -- list recipient accounts and create new ones."""

from __future__ import annotations

from typing import Optional

import typer

from wisecli.output import info, print_details, print_table, success


def recipients_command(
    ctx: typer.Context,
    profile_id: Optional[int] = typer.Option(
        None, "--profile-id", "-p", help="Profile id (defaults to the selected profile)."
    ),
    currency: Optional[str] = typer.Option(None, "--currency", "-c", help="Filter by currency."),
    recipient_type: Optional[str] = typer.Option(
        None, "--type", "-t", help="Filter by account type."
    ),
    size: int = typer.Option(20, "--size", "-s", help="Number of results to return."),
) -> None:
    """List recipient accounts.

    Results are served from the response cache while it is fresh; pass
    ``--refresh`` to fetch them again.

    Example::

        wise-cli recipients --currency GBP
    """
    from wisecli.api import list_recipients
    from wisecli.commands._context import open_client, resolve_profile_id
    from wisecli.models import ListRecipientsRequest

    request = ListRecipientsRequest(
        profile_id=resolve_profile_id(ctx, profile_id, required=False),
        currency=currency,
        type=recipient_type,
        size=size,
    )
    with open_client(ctx) as client:
        recipients = list_recipients(client, request)

    if not recipients:
        info("No recipients found")
        return

    rows = [
        [str(r.id), r.display_name, r.currency, r.type, r.account_number]
        for r in recipients
    ]
    print_table(["ID", "Name", "Currency", "Type", "Account"], rows, title="Recipients")


def new_recipient_command(
    ctx: typer.Context,
    profile_id: Optional[int] = typer.Option(
        None, "--profile-id", "-p", help="Profile id (defaults to the selected profile)."
    ),
    currency: str = typer.Option(..., "--currency", help="Account currency, e.g. GBP."),
    recipient_type: str = typer.Option(
        ..., "--type", help="Account type: sort_code, iban, us, or email."
    ),
    account_holder_name: str = typer.Option(
        ..., "--account-holder-name", help="Name of the account holder."
    ),
    owned_by_customer: Optional[bool] = typer.Option(
        None,
        "--owned-by-customer/--not-owned-by-customer",
        help="Whether the account belongs to you.",
    ),
    legal_type: Optional[str] = typer.Option(
        None, "--legal-type", help="PRIVATE or BUSINESS."
    ),
    sort_code: Optional[str] = typer.Option(None, "--sort-code"),
    account_number: Optional[str] = typer.Option(None, "--account-number"),
    iban: Optional[str] = typer.Option(None, "--iban"),
    routing_number: Optional[str] = typer.Option(None, "--routing-number"),
    account_type: Optional[str] = typer.Option(
        None, "--account-type", help="CHECKING or SAVINGS (us type)."
    ),
    email: Optional[str] = typer.Option(None, "--email"),
) -> None:
    """Create a recipient account.

    The detail options required depend on ``--type``:

    * ``sort_code`` -- ``--sort-code`` and ``--account-number``
    * ``iban`` -- ``--iban``
    * ``us`` -- ``--routing-number``, ``--account-number``, ``--account-type``
    * ``email`` -- ``--email``

    Example::

        wise-cli new recipient --currency GBP --type sort_code \\
            --account-holder-name "Jane Doe" --sort-code 231470 --account-number 28821822
    """
    from wisecli.api import build_recipient_details, create_recipient
    from wisecli.commands._context import open_client, resolve_profile_id
    from wisecli.models import RecipientRequest

    details = build_recipient_details(
        recipient_type,
        {
            "sortCode": sort_code,
            "accountNumber": account_number,
            "iban": iban,
            "routingNumber": routing_number,
            "accountType": account_type,
            "email": email,
        },
        legal_type=legal_type,
    )
    request = RecipientRequest(
        profile_id=resolve_profile_id(ctx, profile_id),
        currency=currency,
        type=recipient_type,
        account_holder_name=account_holder_name,
        owned_by_customer=owned_by_customer,
        details=details,
    )
    with open_client(ctx) as client:
        recipient = create_recipient(client, request)

    success(f"✓ Created recipient {recipient.id}")
    print_details(
        [
            ("ID", str(recipient.id)),
            ("Name", recipient.display_name),
            ("Currency", recipient.currency),
            ("Type", recipient.type),
            ("Account", recipient.account_number),
        ],
        title="Recipient",
    )
