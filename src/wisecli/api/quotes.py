"""Exchange quotes."""

from __future__ import annotations

from wisecli.client import WiseClient
from wisecli.exceptions import InvalidUsageError
from wisecli.models import Quote, QuoteRequest


def validate_quote_request(request: QuoteRequest) -> None:
    """Check that exactly one of the two amounts is set.

    Raises:
        InvalidUsageError: If neither or both amounts are given.
    """
    has_source = bool(request.source_amount)
    has_target = bool(request.target_amount)
    if not has_source and not has_target:
        raise InvalidUsageError("either source-amount or target-amount is required")
    if has_source and has_target:
        raise InvalidUsageError("only one of source-amount or target-amount can be specified")


def get_quote(client: WiseClient, request: QuoteRequest) -> Quote:
    """Request a quote that is not bound to a profile (``POST /v3/quotes``)."""
    validate_quote_request(request)
    payload = request.to_payload()
    if request.profile_id:
        payload["profile"] = request.profile_id
    return client.post_json("/v3/quotes", Quote.model_validate_json, json_body=payload)


def create_quote(client: WiseClient, request: QuoteRequest) -> Quote:
    """Create an authenticated quote for ``request.profile_id``.

    The returned :attr:`~wisecli.models.Quote.id` can be used to create a
    transfer.
    """
    if not request.profile_id:
        raise InvalidUsageError("profile-id is required")
    validate_quote_request(request)
    return client.post_json(
        f"/v3/profiles/{request.profile_id}/quotes",
        Quote.model_validate_json,
        json_body=request.to_payload(),
    )
