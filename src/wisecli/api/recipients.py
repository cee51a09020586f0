"""Recipient accounts: listing, lookup by name, and creation."""

from __future__ import annotations

from typing import Any, Optional

from wisecli.client import WiseClient
from wisecli.exceptions import InvalidUsageError, NotFoundError
from wisecli.models import ListRecipientsRequest, Recipient, RecipientList, RecipientRequest

# Detail fields required per recipient type; optional ones are added by the caller.
RECIPIENT_TYPE_FIELDS: dict[str, tuple[str, ...]] = {
    "sort_code": ("sortCode", "accountNumber"),
    "iban": ("iban",),
    "us": ("routingNumber", "accountNumber", "accountType"),
    "email": ("email",),
}

_LEGAL_TYPE_TYPES = ("sort_code", "iban", "us")


def list_recipients(
    client: WiseClient,
    request: ListRecipientsRequest,
    refresh: Optional[bool] = None,
) -> list[Recipient]:
    """Return the recipients matching *request* (cached per filter set)."""
    page = client.cached_fetch(
        "recipients",
        "/v2/accounts",
        params=request.to_params(),
        refresh=refresh,
        decode=RecipientList.model_validate_json,
    )
    return page.content


def find_recipient(recipients: list[Recipient], full_name: str) -> Recipient:
    """Return the recipient whose full name is exactly *full_name*.

    Raises:
        NotFoundError: If none matches.
    """
    for recipient in recipients:
        if recipient.name.full_name == full_name:
            return recipient
    raise NotFoundError(f"recipient not found: {full_name}")


def build_recipient_details(
    recipient_type: str,
    fields: dict[str, Optional[str]],
    legal_type: Optional[str] = None,
) -> dict[str, Any]:
    """Assemble the ``details`` object for a new recipient of *recipient_type*.

    Args:
        recipient_type: One of ``sort_code``, ``iban``, ``us``, ``email``.
            Other types get no details.
        fields: Candidate detail values keyed by API field name.
        legal_type: Optional ``PRIVATE`` / ``BUSINESS``, ignored for email.

    Raises:
        InvalidUsageError: If a field required for the type is missing.
    """
    required = RECIPIENT_TYPE_FIELDS.get(recipient_type)
    if required is None:
        return {}
    details: dict[str, Any] = {}
    for name in required:
        value = fields.get(name)
        if not value:
            raise InvalidUsageError(f"{_flag_name(name)} is required for {recipient_type} type")
        details[name] = value
    if legal_type and recipient_type in _LEGAL_TYPE_TYPES:
        details["legalType"] = legal_type
    return details


def create_recipient(client: WiseClient, request: RecipientRequest) -> Recipient:
    """Create a recipient account."""
    return client.post_json(
        "/v1/accounts",
        Recipient.model_validate_json,
        json_body=request.to_payload(),
    )


def _flag_name(field: str) -> str:
    """``accountNumber`` -> ``account-number``."""
    out = []
    for ch in field:
        if ch.isupper():
            out.append("-")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)
