"""Transfers: listing, creation, and recording in the ledger."""

from __future__ import annotations

from typing import Optional

from pydantic import TypeAdapter

from wisecli.client import WiseClient
from wisecli.exceptions import StorageError
from wisecli.ledger import TransferLedger, validate_token
from wisecli.models import ListTransfersRequest, Transfer, TransferRecord, TransferRequest
from wisecli.output import warning

_TRANSFERS = TypeAdapter(list[Transfer])


def list_transfers(
    client: WiseClient,
    request: ListTransfersRequest,
    refresh: Optional[bool] = None,
) -> list[Transfer]:
    """Return the transfers matching *request* (cached per filter set)."""
    return client.cached_fetch(
        "transfers",
        "/v1/transfers",
        params=request.to_params(),
        refresh=refresh,
        decode=_TRANSFERS.validate_json,
    )


def create_transfer(
    client: WiseClient,
    request: TransferRequest,
    ledger: Optional[TransferLedger] = None,
) -> Transfer:
    """Create a transfer and record it under its idempotency token.

    When a ledger is given the token is checked before anything is sent, so
    a token that cannot be recorded never reaches the API. The ledger is
    written only after the API confirms the transfer. If the ledger cannot
    be written the transfer is still returned and a warning is printed.

    Raises:
        InvalidUsageError: If *ledger* is given and the token is not a valid
            ledger key.
    """
    if ledger is not None:
        validate_token(request.customer_transaction_id)

    transfer = client.post_json(
        "/v1/transfers",
        Transfer.model_validate_json,
        json_body=request.to_payload(),
    )
    if ledger is not None:
        record = TransferRecord.from_transfer(transfer)
        try:
            ledger.record(request.customer_transaction_id, record)
        except StorageError as exc:
            warning(f"failed to save transfer to cache: {exc}")
    return transfer
