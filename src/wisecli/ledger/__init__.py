"""Idempotent action ledger for wise-cli.

Provides :class:`TransferLedger`, which maps a transfer's idempotency token
(its ``customerTransactionId``) to the :class:`~wisecli.models.TransferRecord`
returned when the transfer was created.
"""

from wisecli.ledger.ledger import TransferLedger, validate_token

__all__ = ["TransferLedger", "validate_token"]
