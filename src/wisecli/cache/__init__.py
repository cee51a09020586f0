"""Local response caching for wise-cli.

This package provides :class:`ResponseCache`, a file-per-entry cache of raw
API response bodies keyed by a :func:`fingerprint` of the resource name and
its query string, with expiry taken from the response's HTTP cache headers
(:func:`derive_expiration`).

The cache is consumed by :meth:`~wisecli.client.WiseClient.cached_fetch` for
the read-only listings (profiles, recipients, transfers). The global
``--refresh`` flag bypasses it.
"""

from wisecli.cache.cache import CacheLookup, LookupStatus, ResponseCache, utc_now
from wisecli.cache.expiration import DEFAULT_TTL, derive_expiration
from wisecli.cache.fingerprint import canonical_query, fingerprint

__all__ = [
    "CacheLookup",
    "DEFAULT_TTL",
    "LookupStatus",
    "ResponseCache",
    "canonical_query",
    "derive_expiration",
    "fingerprint",
    "utc_now",
]
