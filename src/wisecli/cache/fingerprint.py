"""Deterministic cache keys for read-only API resources.

A fingerprint names one cache file. It is derived from the logical resource
name (``"profiles"``, ``"recipients"``, ...) and the canonical query string
sent with the request, so two requests with the same filters always land on
the same entry, in this process or any later one.
"""

from __future__ import annotations

import hashlib
from typing import Any, Mapping, Optional
from urllib.parse import urlencode


def canonical_query(params: Optional[Mapping[str, Any]]) -> str:
    """Serialise *params* as a URL-encoded query string with sorted keys.

    ``None`` values are dropped and booleans are rendered as ``true`` /
    ``false`` so that the result matches what is sent on the wire.
    """
    if not params:
        return ""
    items = []
    for key in sorted(params):
        value = params[key]
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        items.append((key, str(value)))
    return urlencode(items)


def fingerprint(resource_name: str, query_string: str) -> str:
    """Return the cache key for *resource_name* queried with *query_string*.

    The key is ``<resource>-<md5 of query>``, e.g.
    ``recipients-d41d8cd98f00b204e9800998ecf8427e`` for an empty query.
    MD5 is used for distribution, not security.
    """
    digest = hashlib.md5(query_string.encode("utf-8")).hexdigest()
    return f"{resource_name.removesuffix('.json')}-{digest}"
