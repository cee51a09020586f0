"""Transfer commands -- list, create, send by recipient name, and look up.

Every transfer created here is recorded in the local ledger under its
customer transaction id, so ``wise-cli lookup-transfer <id>`` can show it
later without calling the API.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

import typer

from wisecli.models import Recipient, Transfer, TransferRecord
from wisecli.output import info, print_details, print_json, print_table, success, warning


def _transfer_fields(transfer: Transfer | TransferRecord) -> list[tuple[str, str]]:
    from wisecli.commands._context import money

    fields = [
        ("Transfer ID", str(transfer.id)),
        ("Status", transfer.status),
        ("Source", money(transfer.source_value, transfer.source_currency)),
        ("Target", money(transfer.target_value, transfer.target_currency)),
        ("Exchange Rate", f"{transfer.rate:.6f}"),
        ("Quote ID", transfer.quote_uuid),
        ("Customer Transaction ID", transfer.customer_transaction_id),
        ("Target Account", str(transfer.target_account)),
        ("Created", transfer.created),
    ]
    if transfer.reference:
        fields.append(("Reference", transfer.reference))
    if transfer.source_account is not None:
        fields.append(("Source Account", str(transfer.source_account)))
    return fields


def _warn_if_recorded(ctx: typer.Context, token: str) -> None:
    from wisecli.commands._context import open_ledger

    if open_ledger(ctx).contains(token):
        warning(
            f"a transfer is already recorded for customer transaction id {token}; "
            "submitting anyway"
        )


def transfers_command(
    ctx: typer.Context,
    profile_id: Optional[int] = typer.Option(
        None, "--profile-id", "-p", help="Profile id to filter by."
    ),
    status: Optional[str] = typer.Option(
        None, "--status", "-s", help="Filter by status (e.g. incoming, outgoing, cancelled)."
    ),
    days: int = typer.Option(30, "--days", "-d", min=1, help="Number of days to look back."),
) -> None:
    """List recent transfers with their recipients' names.

    The time window ends at the current minute, so repeated runs within a
    minute share one cache entry. If recipients cannot be fetched the
    transfers are still listed, without names.

    Example::

        wise-cli transfers --days 7
    """
    from wisecli.api import list_recipients, list_transfers
    from wisecli.cache import utc_now
    from wisecli.commands._context import open_client
    from wisecli.exceptions import WiseCliError
    from wisecli.models import ListRecipientsRequest, ListTransfersRequest

    until = utc_now().replace(second=0, microsecond=0)
    request = ListTransfersRequest(
        profile_id=profile_id,
        status=status,
        since=until - timedelta(days=days),
        until=until,
        limit=100,
    )

    with open_client(ctx) as client:
        transfers = list_transfers(client, request)
        if not transfers:
            info("No transfers found")
            return

        names: dict[int, str] = {}
        try:
            recipients = list_recipients(
                client, ListRecipientsRequest(profile_id=profile_id, size=1000)
            )
        except WiseCliError as exc:
            warning(f"failed to fetch recipients: {exc}")
        else:
            names = {r.id: r.display_name for r in recipients}

    rows = [
        [
            str(t.id),
            t.created[:10],
            f"{t.source_value:.2f} {t.source_currency}",
            names.get(t.target_account) or "-",
            f"{t.target_value:.2f} {t.target_currency}",
            t.reference or "-",
            t.status,
        ]
        for t in transfers
    ]
    print_table(
        ["ID", "Date", "Source", "Recipient", "Target", "Reference", "Status"],
        rows,
        title="Transfers",
    )


def new_transfer_command(
    ctx: typer.Context,
    target_account: int = typer.Option(..., "--target-account", "-a", help="Recipient account id."),
    quote_uuid: str = typer.Option(..., "--quote-uuid", "-q", help="Quote UUID."),
    customer_transaction_id: str = typer.Option(
        ...,
        "--customer-transaction-id",
        "-c",
        help="Idempotency token; the transfer is recorded under it.",
    ),
    reference: Optional[str] = typer.Option(None, "--reference", "-r", help="Payment reference."),
    source_account: Optional[int] = typer.Option(
        None, "--source-account", "-s", help="Source account id."
    ),
) -> None:
    """Create a transfer from an existing quote.

    Example::

        wise-cli new transfer -a 123 -q 0b3c... -c "$(uuidgen)"
    """
    from wisecli.api import create_transfer
    from wisecli.commands._context import open_client, open_ledger
    from wisecli.models import TransferRequest

    request = TransferRequest(
        target_account=target_account,
        quote_uuid=quote_uuid,
        customer_transaction_id=customer_transaction_id,
        reference=reference or None,
        source_account=source_account,
    )
    _warn_if_recorded(ctx, customer_transaction_id)
    with open_client(ctx) as client:
        transfer = create_transfer(client, request, ledger=open_ledger(ctx))

    success("✓ Transfer created")
    print_details(_transfer_fields(transfer), title="Transfer")


def _dry_run_summary(
    recipient: Recipient,
    amount: float,
    currency: str,
    profile_id: int,
    token: str,
    reference: Optional[str],
    source_account: Optional[int],
) -> None:
    fields = [
        ("Recipient", f"{recipient.name.full_name} (ID: {recipient.id})"),
        ("Recipient Currency", recipient.currency),
        ("Target Amount", f"{amount:.2f} {recipient.currency}"),
        ("Profile ID", str(profile_id)),
        ("Customer Transaction ID", token),
    ]
    if reference:
        fields.append(("Reference", reference))
    if source_account is not None:
        fields.append(("Source Account", str(source_account)))

    info("Dry run: no quote or transfer will be created")
    print_details(fields, title="Dry run")
    info(f"Would create a quote for {amount:.2f} {currency} -> {recipient.currency}")
    info("Would create a transfer with the quote")


def send_to_command(
    ctx: typer.Context,
    recipient_name: str = typer.Argument(help="Recipient's full name, matched exactly."),
    amount: float = typer.Argument(help="Amount the recipient should receive."),
    currency: str = typer.Argument(help="Currency to send from."),
    reference_arg: Optional[str] = typer.Argument(
        None, metavar="[REFERENCE]", help="Payment reference."
    ),
    profile_id: Optional[int] = typer.Option(
        None, "--profile-id", "-p", help="Profile id (defaults to the selected profile)."
    ),
    customer_transaction_id: Optional[str] = typer.Option(
        None,
        "--customer-transaction-id",
        "-c",
        help="Idempotency token (generated when omitted).",
    ),
    reference: Optional[str] = typer.Option(
        None, "--reference", "-r", help="Payment reference (overrides the argument)."
    ),
    source_account: Optional[int] = typer.Option(
        None, "--source-account", "-s", help="Source account id."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Find the recipient but create nothing."
    ),
) -> None:
    """Send money to a recipient by name.

    Finds the recipient among the profile's accounts in CURRENCY, creates a
    quote for AMOUNT in the recipient's currency, then creates the transfer
    and records it under the customer transaction id.

    Example::

        wise-cli send-to "Jane Doe" 250 GBP "March rent"
        wise-cli send-to "Jane Doe" 250 GBP --dry-run
    """
    import uuid

    from wisecli.api import create_quote, create_transfer, find_recipient, list_recipients
    from wisecli.commands._context import open_client, open_ledger, resolve_profile_id
    from wisecli.exceptions import InvalidUsageError
    from wisecli.ledger import validate_token
    from wisecli.models import ListRecipientsRequest, QuoteRequest, TransferRequest

    if amount <= 0:
        raise InvalidUsageError("amount is required and must be greater than 0")
    if not currency:
        raise InvalidUsageError("currency is required")

    reference = reference or reference_arg or None
    profile = resolve_profile_id(ctx, profile_id)
    token = customer_transaction_id or str(uuid.uuid4())
    validate_token(token)

    with open_client(ctx) as client:
        info(f"Finding recipient: {recipient_name}")
        recipients = list_recipients(
            client, ListRecipientsRequest(profile_id=profile, currency=currency)
        )
        recipient = find_recipient(recipients, recipient_name)
        info(f"Found recipient: {recipient.name.full_name} (ID: {recipient.id})")

        if dry_run:
            _dry_run_summary(
                recipient, amount, currency, profile, token, reference, source_account
            )
            return

        info(f"Creating quote: {amount:.2f} {currency} -> {recipient.currency}")
        quote = create_quote(
            client,
            QuoteRequest(
                profile_id=profile,
                source_currency=currency,
                target_currency=recipient.currency,
                target_amount=amount,
            ),
        )
        info(f"Quote created: {quote.id}")

        _warn_if_recorded(ctx, token)
        info("Creating transfer...")
        transfer = create_transfer(
            client,
            TransferRequest(
                target_account=recipient.id,
                quote_uuid=quote.id,
                customer_transaction_id=token,
                reference=reference,
                source_account=source_account,
            ),
            ledger=open_ledger(ctx),
        )

    success("✓ Transfer created")
    fields = _transfer_fields(transfer)
    fields.insert(2, ("Recipient", recipient_name))
    print_details(fields, title="Transfer")


def lookup_transfer_command(
    ctx: typer.Context,
    customer_transaction_id: str = typer.Argument(
        help="Customer transaction id the transfer was created with."
    ),
) -> None:
    """Show a transfer recorded by this machine, without calling the API.

    Example::

        wise-cli lookup-transfer 5f0c1e9a-...
        wise-cli --json lookup-transfer 5f0c1e9a-...
    """
    from wisecli.commands._context import open_ledger
    from wisecli.output import OutputFormat, get_output

    record = open_ledger(ctx).lookup(customer_transaction_id)

    if get_output().format == OutputFormat.JSON:
        print_json(record.model_dump(mode="json", by_alias=True, exclude_none=True))
        return
    print_details(_transfer_fields(record), title="Recorded transfer")
