"""HTTP client module for wise-cli.

Provides :class:`WiseClient`, a blocking client backed by
:class:`httpx.Client` with bearer-token injection, error mapping, and
cache-aware reads via :meth:`WiseClient.cached_fetch`.

Example::

    from wisecli.client import WiseClient

    with WiseClient(token) as client:
        user = client.get("/v1/me").json()
"""

from wisecli.client.client import WiseClient

__all__ = ["WiseClient"]
