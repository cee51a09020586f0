"""File-based response cache for idempotent API reads.

Each entry is one JSON file, ``<root>/<fingerprint>.json``, holding a
:class:`~wisecli.models.CacheEntry` (the verbatim response body and its
expiry instant). The expiry is derived from the response's ``Cache-Control``
and ``Expires`` headers by :func:`~wisecli.cache.expiration.derive_expiration`.

Reads never fail because of what is on disk: a missing, expired, or corrupt
entry is simply a miss. An expired entry is deleted by the read that finds
it; a failed delete is logged and the read is still a miss. Bodies that are
not UTF-8 text are stored base64-encoded with an ``encoding`` marker.

Writes replace the whole entry atomically and raise
:class:`~wisecli.exceptions.StorageError` on failure, which callers report
as a warning.

The storage root and the clock are injected so tests can use an isolated
directory and simulate the passage of time.
"""

from __future__ import annotations

import base64
import binascii
import enum
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Mapping, Optional

from pydantic import ValidationError

from wisecli.cache.expiration import derive_expiration
from wisecli.config import _atomic_write
from wisecli.exceptions import DecodeError, StorageError
from wisecli.models import CacheEntry
from wisecli.output import debug

Clock = Callable[[], datetime]

_BASE64 = "base64"


def utc_now() -> datetime:
    """Default clock: the current instant in UTC."""
    return datetime.now(timezone.utc)


class LookupStatus(str, enum.Enum):
    """Outcome of a cache read."""

    HIT = "hit"
    MISS = "miss"
    EXPIRED = "expired"
    CORRUPT = "corrupt"
    BYPASSED = "bypassed"


@dataclass(frozen=True)
class CacheLookup:
    """Result of :meth:`ResponseCache.lookup`.

    Only :attr:`LookupStatus.HIT` carries a payload; every other status means
    "absent" to callers but is kept distinct for diagnostics and tests.
    """

    status: LookupStatus
    payload: Optional[bytes] = None

    @property
    def hit(self) -> bool:
        return self.status is LookupStatus.HIT


def decode_entry(raw: bytes) -> CacheEntry:
    """Parse the on-disk form of a cache entry.

    Raises:
        DecodeError: If *raw* is not a valid entry.
    """
    try:
        entry = CacheEntry.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(f"invalid cache entry: {exc}") from exc
    if entry.expires_at.tzinfo is None:
        entry = entry.model_copy(update={"expires_at": entry.expires_at.replace(tzinfo=timezone.utc)})
    return entry


def _stored_form(payload: bytes | str) -> tuple[str, Optional[str]]:
    """Return the text stored for *payload* and its encoding marker.

    UTF-8 bodies are stored as-is; anything else is base64-encoded.
    """
    if isinstance(payload, str):
        return payload, None
    try:
        return payload.decode("utf-8"), None
    except UnicodeDecodeError:
        return base64.b64encode(payload).decode("ascii"), _BASE64


def _entry_payload(entry: CacheEntry) -> bytes:
    """Recover the original body bytes of *entry*.

    Raises:
        DecodeError: If the entry names an unknown encoding or holds bad base64.
    """
    if entry.encoding is None:
        return entry.data.encode("utf-8")
    if entry.encoding != _BASE64:
        raise DecodeError(f"unknown cache entry encoding: {entry.encoding!r}")
    try:
        return base64.b64decode(entry.data, validate=True)
    except binascii.Error as exc:
        raise DecodeError(f"invalid base64 cache entry: {exc}") from exc


class ResponseCache:
    """Disk-backed cache of raw API response bodies.

    Args:
        root: Storage root. Entries are written directly inside it.
        clock: Callable returning the current aware datetime. Defaults to
            :func:`utc_now`.

    Example::

        cache = ResponseCache(get_cache_dir())
        cache.write("profiles-d41d8cd9...", body, response.headers)
        payload = cache.read("profiles-d41d8cd9...")
    """

    def __init__(self, root: str | Path, clock: Optional[Clock] = None) -> None:
        self._root = Path(root)
        self._clock = clock or utc_now

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, fingerprint: str) -> Path:
        """Return the file that holds the entry for *fingerprint*."""
        return self._root / f"{fingerprint}.json"

    def lookup(self, fingerprint: str, bypass: bool = False) -> CacheLookup:
        """Look up *fingerprint*, reporting why a miss happened.

        Args:
            fingerprint: Cache key from :func:`~wisecli.cache.fingerprint.fingerprint`.
            bypass: Force a miss without touching the stored entry.

        Returns:
            A :class:`CacheLookup`; ``payload`` is set only on a hit.
        """
        if bypass:
            return CacheLookup(LookupStatus.BYPASSED)

        path = self.path_for(fingerprint)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return CacheLookup(LookupStatus.MISS)
        except OSError as exc:
            debug(f"Cache read failed for {fingerprint}: {exc}")
            return CacheLookup(LookupStatus.CORRUPT)

        try:
            entry = decode_entry(raw)
        except DecodeError as exc:
            debug(f"Ignoring corrupt cache entry {fingerprint}: {exc}")
            return CacheLookup(LookupStatus.CORRUPT)

        if self._clock() > entry.expires_at:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                debug(f"Could not delete expired cache entry {fingerprint}: {exc}")
            return CacheLookup(LookupStatus.EXPIRED)

        try:
            payload = _entry_payload(entry)
        except DecodeError as exc:
            debug(f"Ignoring corrupt cache entry {fingerprint}: {exc}")
            return CacheLookup(LookupStatus.CORRUPT)
        return CacheLookup(LookupStatus.HIT, payload)

    def read(self, fingerprint: str, bypass: bool = False) -> Optional[bytes]:
        """Return the cached payload for *fingerprint*, or ``None`` if absent."""
        return self.lookup(fingerprint, bypass).payload

    def write(
        self,
        fingerprint: str,
        payload: bytes | str,
        headers: Mapping[str, str],
    ) -> CacheEntry:
        """Store *payload* under *fingerprint*, replacing any previous entry.

        Args:
            fingerprint: Cache key.
            payload: Raw response body.
            headers: Response headers used to derive the expiry.

        Returns:
            The entry that was written.

        Raises:
            StorageError: If the entry cannot be written.
        """
        data, encoding = _stored_form(payload)
        entry = CacheEntry(
            data=data,
            expires_at=derive_expiration(headers, self._clock()),
            encoding=encoding,
        )
        try:
            _atomic_write(
                self.path_for(fingerprint),
                entry.model_dump_json(by_alias=True, exclude_none=True),
            )
        except OSError as exc:
            raise StorageError(f"failed to write cache entry {fingerprint}: {exc}") from exc
        debug(f"Cached {fingerprint} until {entry.expires_at.isoformat()}")
        return entry
