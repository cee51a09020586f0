"""Quote commands -- price a conversion, or create a quote for a transfer."""

from __future__ import annotations

from typing import Optional

import typer

from wisecli.models import Quote
from wisecli.output import print_details, success


def _quote_fields(quote: Quote) -> list[tuple[str, str]]:
    from wisecli.commands._context import money, or_na

    fields = [
        ("ID", or_na(quote.id)),
        ("Source", money(quote.source_amount, quote.source_currency)),
        ("Target", money(quote.target_amount, quote.target_currency)),
        ("Rate", f"{quote.rate:.6f}"),
        ("Rate Type", or_na(quote.rate_type)),
        ("Expires", or_na(quote.expiration_time)),
    ]
    option = next((o for o in quote.payment_options if not o.disabled), None)
    if option is not None:
        fields.append(("Fee", money(option.fee.total, quote.source_currency)))
        fields.append(("Delivery", or_na(option.formatted_estimated_delivery)))
    return fields


def quote_command(
    ctx: typer.Context,
    source_currency: str = typer.Option(..., "--source-currency", "-s", help="Currency to send."),
    target_currency: str = typer.Option(..., "--target-currency", "-t", help="Currency to receive."),
    source_amount: Optional[float] = typer.Option(None, "--source-amount", help="Amount to send."),
    target_amount: Optional[float] = typer.Option(None, "--target-amount", help="Amount to receive."),
    profile_id: Optional[int] = typer.Option(
        None, "--profile-id", "-p", help="Profile id to price for (optional)."
    ),
) -> None:
    """Get an exchange quote.

    Give exactly one of ``--source-amount`` or ``--target-amount``.

    Example::

        wise-cli quote -s GBP -t EUR --source-amount 100
    """
    from wisecli.api import get_quote
    from wisecli.commands._context import open_client
    from wisecli.models import QuoteRequest

    request = QuoteRequest(
        profile_id=profile_id,
        source_currency=source_currency,
        target_currency=target_currency,
        source_amount=source_amount,
        target_amount=target_amount,
    )
    with open_client(ctx) as client:
        quote = get_quote(client, request)

    print_details(_quote_fields(quote), title="Quote")


def new_quote_command(
    ctx: typer.Context,
    source_currency: str = typer.Option(..., "--source-currency", "-s", help="Currency to send."),
    target_currency: str = typer.Option(..., "--target-currency", "-t", help="Currency to receive."),
    source_amount: Optional[float] = typer.Option(None, "--source-amount", help="Amount to send."),
    target_amount: Optional[float] = typer.Option(None, "--target-amount", help="Amount to receive."),
    profile_id: Optional[int] = typer.Option(
        None, "--profile-id", "-p", help="Profile id (defaults to the selected profile)."
    ),
) -> None:
    """Create a quote bound to a profile.

    The printed ID is the quote UUID accepted by ``wise-cli new transfer``.
    """
    from wisecli.api import create_quote
    from wisecli.commands._context import open_client, resolve_profile_id
    from wisecli.models import QuoteRequest

    request = QuoteRequest(
        profile_id=resolve_profile_id(ctx, profile_id),
        source_currency=source_currency,
        target_currency=target_currency,
        source_amount=source_amount,
        target_amount=target_amount,
    )
    with open_client(ctx) as client:
        quote = create_quote(client, request)

    success(f"✓ Created quote {quote.id}")
    print_details(_quote_fields(quote), title="Quote")
