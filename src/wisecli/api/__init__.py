"""One function per payments API operation.

Read-only listings go through :meth:`~wisecli.client.WiseClient.cached_fetch`
and honour ``--refresh``; creations go straight to the API, and
:func:`create_transfer` records its result in the
:class:`~wisecli.ledger.TransferLedger`.
"""

from wisecli.api.profiles import find_profile, list_profiles
from wisecli.api.quotes import create_quote, get_quote
from wisecli.api.recipients import (
    build_recipient_details,
    create_recipient,
    find_recipient,
    list_recipients,
)
from wisecli.api.transfers import create_transfer, list_transfers
from wisecli.api.user import get_me

__all__ = [
    "build_recipient_details",
    "create_quote",
    "create_recipient",
    "create_transfer",
    "find_profile",
    "find_recipient",
    "get_me",
    "get_quote",
    "list_profiles",
    "list_recipients",
    "list_transfers",
]
