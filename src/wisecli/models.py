"""Canonical Pydantic models shared across all wise-cli modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Storage models** -- serialised as JSON under the storage root:
    :class:`CacheEntry` (one response-cache file) and :class:`TransferRecord`
    (one ledger file).

**API response models** -- decoded from the payments API:
    :class:`User`, :class:`Profile`, :class:`Recipient`,
    :class:`RecipientList`, :class:`Quote`, and :class:`Transfer` together
    with their nested parts.

**Request models** -- built by the CLI layer and turned into query
parameters or JSON payloads:
    :class:`ListRecipientsRequest`, :class:`ListTransfersRequest`,
    :class:`QuoteRequest`, :class:`RecipientRequest`, and
    :class:`TransferRequest`.

The API speaks camelCase; storage and response models accept and emit
camelCase aliases while exposing snake_case attributes. Unknown response
fields are ignored, which is the only "validation" applied to API data
beyond structural decoding.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WiseModel(BaseModel):
    """Base for models that mirror the API's camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Storage models ---


class CacheEntry(WiseModel):
    """A cached response body and the instant after which it is stale.

    Written by :meth:`~wisecli.cache.ResponseCache.write` and stored as
    ``{"data": ..., "expiresAt": ...}``, plus ``"encoding": "base64"`` for a
    body that is not UTF-8 text.
    """

    data: str = Field(description="Verbatim response body")
    expires_at: datetime = Field(description="Absolute expiry instant (UTC)")
    encoding: Optional[str] = Field(
        default=None,
        description="``base64`` when the body was not UTF-8 text; unset otherwise",
    )


class TransferRecord(WiseModel):
    """Durable snapshot of a transfer, keyed by its idempotency token.

    The token is :attr:`customer_transaction_id`. A record is created once,
    right after the transfer-creation call succeeds, and never mutated.
    """

    id: int
    status: str
    source_value: float
    source_currency: str
    target_value: float
    target_currency: str
    rate: float
    created: str
    quote_uuid: str
    customer_transaction_id: str
    target_account: int
    reference: Optional[str] = None
    source_account: Optional[int] = None
    payin_session_id: Optional[str] = None
    has_active_issues: bool = False

    @classmethod
    def from_transfer(cls, transfer: Transfer) -> TransferRecord:
        """Snapshot the fields of a freshly created :class:`Transfer`."""
        return cls(
            id=transfer.id,
            status=transfer.status,
            source_value=transfer.source_value,
            source_currency=transfer.source_currency,
            target_value=transfer.target_value,
            target_currency=transfer.target_currency,
            rate=transfer.rate,
            created=transfer.created,
            quote_uuid=transfer.quote_uuid,
            customer_transaction_id=transfer.customer_transaction_id,
            target_account=transfer.target_account,
            reference=transfer.reference,
            source_account=transfer.source_account,
            payin_session_id=transfer.payin_session_id,
            has_active_issues=transfer.has_active_issues,
        )


# --- Users and profiles ---


class Address(WiseModel):
    id: Optional[int] = None
    address_first_line: str = ""
    city: str = ""
    country_iso2_code: str = ""
    country_iso3_code: str = ""
    post_code: str = ""
    state_code: Optional[str] = None


class ContactDetails(WiseModel):
    email: str = ""
    phone_number: str = ""


class Profile(WiseModel):
    """A personal or business profile belonging to the authenticated user."""

    id: int
    public_id: str = ""
    user_id: Optional[int] = None
    type: str = Field(default="", description="PERSONAL or BUSINESS")
    address: Optional[Address] = None
    email: str = ""
    created_at: str = ""
    updated_at: str = ""
    avatar: Optional[str] = None
    current_state: str = ""
    contact_details: Optional[ContactDetails] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[str] = None
    business_name: Optional[str] = None
    business_logo_url: Optional[str] = None

    @property
    def full_name(self) -> str:
        """Person name for personal profiles, business name otherwise, or ``""``."""
        if self.first_name is not None and self.last_name is not None:
            return f"{self.first_name} {self.last_name}"
        if self.business_name is not None:
            return self.business_name
        return ""


class UserDetails(WiseModel):
    first_name: str = ""
    last_name: str = ""
    phone_number: str = ""
    date_of_birth: Optional[str] = None
    occupation: Optional[str] = None
    avatar: Optional[str] = None
    primary_address: Optional[int] = None
    address: Optional[Address] = None


class User(WiseModel):
    """The authenticated user, as returned by ``/v1/me``."""

    id: int
    name: str = ""
    email: str = ""
    active: bool = False
    details: UserDetails = Field(default_factory=UserDetails)


# --- Recipients ---


_ACCOUNT_NUMBER_FIELDS = ("iban", "accountNumber", "number", "accountId", "id", "bic")


class RecipientName(WiseModel):
    full_name: str = ""
    given_name: str = ""
    family_name: str = ""
    middle_name: str = ""


class Recipient(WiseModel):
    """A recipient account that transfers can be sent to."""

    id: int
    creator_id: Optional[int] = None
    profile_id: Optional[int] = None
    name: RecipientName = Field(default_factory=RecipientName)
    currency: str = ""
    country: str = ""
    type: str = ""
    legal_entity_type: str = ""
    active: bool = False
    details: Optional[dict[str, Any]] = None
    account_summary: str = ""
    hash: str = ""
    is_internal: bool = False
    owned_by_customer: bool = False

    @property
    def account_number(self) -> str:
        """Best-effort account identifier from :attr:`details` (IBAN preferred)."""
        if not isinstance(self.details, dict):
            return ""
        for field in _ACCOUNT_NUMBER_FIELDS:
            value = self.details.get(field)
            if isinstance(value, str) and value:
                return value
        return ""

    @property
    def display_name(self) -> str:
        """Full name, else account summary, else given + family name."""
        if self.name.full_name:
            return self.name.full_name
        if self.account_summary:
            return self.account_summary
        return f"{self.name.given_name} {self.name.family_name}".strip()


class RecipientList(WiseModel):
    """One page of ``/v2/accounts`` results."""

    content: list[Recipient] = Field(default_factory=list)
    size: Optional[int] = None
    seek_position: Optional[int] = None
    seek_position_for_next: Optional[int] = None
    seek_position_for_current: Optional[int] = None


# --- Quotes ---


class Fee(WiseModel):
    transferwise: float = 0.0
    pay_in: float = 0.0
    discount: float = 0.0
    partner: float = 0.0
    total: float = 0.0


class DisabledReason(WiseModel):
    code: str = ""
    message: str = ""


class PaymentOption(WiseModel):
    id: Optional[str] = None
    pay_in: str = ""
    pay_out: str = ""
    source_amount: float = 0.0
    target_amount: float = 0.0
    fee: Fee = Field(default_factory=Fee)
    estimated_delivery: Optional[str] = None
    formatted_estimated_delivery: str = ""
    disabled: bool = False
    disabled_reason: Optional[DisabledReason] = None


class Notice(WiseModel):
    text: str = ""
    link: Optional[str] = None
    type: str = ""


class Quote(WiseModel):
    """An exchange quote; its :attr:`id` is the quote UUID used by transfers."""

    id: str = ""
    source_amount: float = 0.0
    source_currency: str = ""
    target_amount: float = 0.0
    target_currency: str = ""
    rate: float = 0.0
    created_time: str = ""
    rate_expiration_time: str = ""
    rate_type: str = ""
    pay_out: str = ""
    profile: Optional[int] = None
    user: Optional[int] = None
    provided_amount_type: str = ""
    status: str = ""
    expiration_time: str = ""
    payment_options: list[PaymentOption] = Field(default_factory=list)
    notices: list[Notice] = Field(default_factory=list)
    pricing_configuration: Optional[dict[str, Any]] = None


# --- Transfers ---


class TransferDetails(WiseModel):
    reference: Optional[str] = None


class Transfer(WiseModel):
    """A transfer as returned by ``/v1/transfers``."""

    id: int
    user: Optional[int] = None
    target_account: int = 0
    source_account: Optional[int] = None
    quote: Optional[int] = None
    quote_uuid: str = ""
    status: str = ""
    reference: Optional[str] = None
    rate: float = 0.0
    created: str = ""
    business: Optional[int] = None
    details: TransferDetails = Field(default_factory=TransferDetails)
    has_active_issues: bool = False
    source_currency: str = ""
    source_value: float = 0.0
    target_currency: str = ""
    target_value: float = 0.0
    customer_transaction_id: str = ""
    payin_session_id: Optional[str] = None


# --- Request models ---


def _flag(value: bool) -> str:
    return "true" if value else "false"


class ListRecipientsRequest(BaseModel):
    """Filters for listing recipient accounts. Unset filters are omitted."""

    profile_id: Optional[int] = None
    currency: Optional[str] = None
    active: Optional[bool] = None
    type: Optional[str] = None
    size: Optional[int] = None
    seek_position: Optional[int] = None
    sort: Optional[str] = None

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.profile_id:
            params["profileId"] = str(self.profile_id)
        if self.currency:
            params["currency"] = self.currency
        if self.active is not None:
            params["active"] = _flag(self.active)
        if self.type:
            params["type"] = self.type
        if self.size and self.size > 0:
            params["size"] = str(self.size)
        if self.seek_position and self.seek_position > 0:
            params["seekPosition"] = str(self.seek_position)
        if self.sort:
            params["sort"] = self.sort
        return params


_API_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class ListTransfersRequest(BaseModel):
    """Filters for listing transfers. ``limit`` defaults to 100 when unset."""

    profile_id: Optional[int] = None
    status: Optional[str] = None
    since: Optional[datetime] = None
    until: Optional[datetime] = None
    limit: Optional[int] = None
    offset: Optional[int] = None

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.profile_id:
            params["profile"] = str(self.profile_id)
        if self.status:
            params["status"] = self.status
        if self.since is not None:
            params["createdDateStart"] = self.since.strftime(_API_TIMESTAMP_FORMAT)
        if self.until is not None:
            params["createdDateEnd"] = self.until.strftime(_API_TIMESTAMP_FORMAT)
        params["limit"] = str(self.limit) if self.limit and self.limit > 0 else "100"
        if self.offset and self.offset > 0:
            params["offset"] = str(self.offset)
        return params


class QuoteRequest(BaseModel):
    """Parameters for a quote. Exactly one of the two amounts must be set."""

    profile_id: Optional[int] = None
    source_currency: str
    target_currency: str
    source_amount: Optional[float] = None
    target_amount: Optional[float] = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "sourceCurrency": self.source_currency,
            "targetCurrency": self.target_currency,
        }
        if self.source_amount is not None:
            payload["sourceAmount"] = self.source_amount
        if self.target_amount is not None:
            payload["targetAmount"] = self.target_amount
        return payload


class RecipientRequest(BaseModel):
    """Parameters for creating a recipient account."""

    profile_id: int
    currency: str
    type: str
    account_holder_name: str
    owned_by_customer: Optional[bool] = None
    details: dict[str, Any] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "currency": self.currency,
            "type": self.type,
            "profile": self.profile_id,
            "accountHolderName": self.account_holder_name,
        }
        if self.owned_by_customer is not None:
            payload["ownedByCustomer"] = self.owned_by_customer
        if self.details:
            payload["details"] = self.details
        return payload


class TransferRequest(BaseModel):
    """Parameters for creating a transfer from a quote.

    ``customer_transaction_id`` is the idempotency token; the created
    transfer is recorded in the ledger under it.
    """

    target_account: int
    quote_uuid: str
    customer_transaction_id: str
    reference: Optional[str] = None
    source_account: Optional[int] = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "targetAccount": self.target_account,
            "quoteUuid": self.quote_uuid,
            "customerTransactionId": self.customer_transaction_id,
        }
        if self.source_account is not None:
            payload["sourceAccount"] = self.source_account
        if self.reference is not None:
            payload["details"] = {"reference": self.reference}
        return payload
