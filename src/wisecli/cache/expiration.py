"""Expiration policy for cached responses, derived from HTTP headers.

:func:`derive_expiration` is a pure function of the response headers and the
current instant. Priority order:

1. ``Cache-Control: max-age=N`` with ``N > 0`` -- expires ``N`` seconds from now,
   or at :data:`FAR_FUTURE` when that is out of range.
2. A valid RFC 1123 ``Expires`` date -- expires at exactly that instant.
3. Neither -- expires :data:`DEFAULT_TTL` from now.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Mapping, Optional

DEFAULT_TTL = timedelta(hours=1)

# Latest representable instant; expiries beyond it are clamped here.
FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)

_MAX_AGE_RE = re.compile(r"max-age=(\d+)")


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup that works for plain dicts and ``httpx.Headers``."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def extract_max_age(cache_control: str) -> int:
    """Return the first ``max-age`` value in a Cache-Control header, or ``0``."""
    match = _MAX_AGE_RE.search(cache_control)
    if match is None:
        return 0
    return int(match.group(1))


def parse_http_date(value: str) -> Optional[datetime]:
    """Parse an RFC 1123 date (``Wed, 21 Oct 2026 07:28:00 GMT``) as an aware UTC datetime.

    Returns ``None`` for anything that does not parse or falls outside the
    range of :class:`~datetime.datetime`.
    """
    try:
        parsed = parsedate_to_datetime(value)
        if parsed is None:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (TypeError, ValueError, IndexError, OverflowError):
        return None


def derive_expiration(headers: Mapping[str, str], now: datetime) -> datetime:
    """Compute when a response received at *now* stops being fresh.

    Args:
        headers: Response headers (any mapping; lookup is case-insensitive).
        now: The current instant, timezone-aware.

    Returns:
        The absolute expiry instant.
    """
    cache_control = _header(headers, "Cache-Control")
    if cache_control:
        max_age = extract_max_age(cache_control)
        if max_age > 0:
            try:
                return now + timedelta(seconds=max_age)
            except OverflowError:
                return FAR_FUTURE

    expires = _header(headers, "Expires")
    if expires:
        parsed = parse_http_date(expires)
        if parsed is not None:
            return parsed

    return now + DEFAULT_TTL
