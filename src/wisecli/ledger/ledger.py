"""Durable record of created transfers, keyed by idempotency token.

Every transfer created through wise-cli carries a caller-chosen
``customerTransactionId``. Right after the API confirms the transfer, its
:class:`~wisecli.models.TransferRecord` is written to
``<root>/transfers/<token>.json`` so that a later run can recover the
outcome from the token alone (``wise-cli lookup-transfer <token>``).

A token is either *unknown* or *recorded*; there is no way back. Recording
the same token twice overwrites the earlier record as a whole.

Note that the ledger is only written after creation. It is not consulted
to block a second submission with the same token; the payments API itself
deduplicates on ``customerTransactionId``.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from wisecli.config import _atomic_write
from wisecli.exceptions import InvalidUsageError, NotFoundError, StorageError
from wisecli.models import TransferRecord
from wisecli.output import debug

_LEDGER_DIRNAME = "transfers"


def validate_token(token: str) -> None:
    """Reject tokens that cannot safely be used as a file name.

    Raises:
        InvalidUsageError: If *token* is empty, starts with a dot, or contains
            a path separator or NUL.
    """
    if not token or token.startswith(".") or "/" in token or "\\" in token or "\x00" in token:
        raise InvalidUsageError(f"invalid transaction token: {token!r}")


class TransferLedger:
    """Token-indexed store of :class:`~wisecli.models.TransferRecord` files.

    Args:
        root: Storage root shared with the response cache. Records live in
            its ``transfers/`` subdirectory, created on first write.
    """

    def __init__(self, root: str | Path) -> None:
        self._dir = Path(root) / _LEDGER_DIRNAME

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, token: str) -> Path:
        validate_token(token)
        return self._dir / f"{token}.json"

    def record(self, token: str, record: TransferRecord) -> Path:
        """Persist *record* under *token*, replacing any earlier record.

        Returns:
            Path of the written record.

        Raises:
            InvalidUsageError: If *token* is not usable as a file name.
            StorageError: If the record cannot be written.
        """
        path = self.path_for(token)
        data = record.model_dump(mode="json", by_alias=True, exclude_none=True)
        try:
            _atomic_write(path, json.dumps(data, indent=2) + "\n")
        except OSError as exc:
            raise StorageError(f"failed to save transfer {token}: {exc}") from exc
        debug(f"Recorded transfer {record.id} under {token}")
        return path

    def lookup(self, token: str) -> TransferRecord:
        """Return the transfer recorded under *token*.

        Raises:
            NotFoundError: If nothing was recorded under *token*, including
                when the storage root does not exist yet.
            StorageError: If the record exists but cannot be read or parsed.
        """
        path = self.path_for(token)
        try:
            raw = path.read_bytes()
        except FileNotFoundError as exc:
            raise NotFoundError(f"transfer not found: {token}") from exc
        except OSError as exc:
            raise StorageError(f"failed to read transfer {token}: {exc}") from exc
        try:
            return TransferRecord.model_validate_json(raw)
        except ValidationError as exc:
            raise StorageError(f"failed to parse transfer {token}: {exc}") from exc

    def contains(self, token: str) -> bool:
        """Return ``True`` if a record exists for *token*."""
        return self.path_for(token).is_file()
