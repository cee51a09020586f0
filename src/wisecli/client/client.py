"""Synchronous HTTP client for the payments API, with response caching.

This module provides :class:`WiseClient`, the blocking client used by every
wise-cli command. It wraps :class:`httpx.Client` and layers on:

- **Auth injection** -- the bearer token is sent with every request.
- **Error mapping** -- any non-2xx status becomes an
  :class:`~wisecli.exceptions.UpstreamError` carrying the status and raw
  body; network failures become :class:`~wisecli.exceptions.ConnectionError_`.
- **Response caching** -- :meth:`WiseClient.cached_fetch` consults a
  :class:`~wisecli.cache.ResponseCache` before issuing a GET and stores the
  raw body afterwards. A cache that cannot be written only produces a
  warning.

Requests are not retried; a failed call fails the command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

import httpx

from wisecli import __version__
from wisecli.cache.fingerprint import canonical_query, fingerprint
from wisecli.config import DEFAULT_API_URL
from wisecli.exceptions import (
    ConnectionError_,
    InvalidResponseError,
    StorageError,
    UpstreamError,
)
from wisecli.output import debug, warning

if TYPE_CHECKING:
    from wisecli.cache import ResponseCache

T = TypeVar("T")


class WiseClient:
    """Synchronous client for the payments API.

    Must be used as a context manager so that the underlying transport is
    opened and closed properly.

    Args:
        token: Bearer token sent in the ``Authorization`` header.
        base_url: API root, e.g. ``https://api.wise.com``.
        cache: Optional response cache used by :meth:`cached_fetch`.
        refresh: When ``True``, :meth:`cached_fetch` bypasses cached entries
            (but still stores fresh responses).
        timeout: Request timeout in seconds.
        transport: Optional :class:`httpx.BaseTransport`, mainly for tests.

    Example::

        with WiseClient(token, cache=ResponseCache(root)) as client:
            body = client.cached_fetch("profiles", "/v2/profiles")
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        cache: Optional[ResponseCache] = None,
        refresh: bool = False,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._cache = cache
        self._refresh = refresh
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> WiseClient:
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
            headers={
                "Accept": "application/json",
                "User-Agent": f"wise-cli/{__version__}",
            },
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json_body: Optional[Any] = None,
    ) -> httpx.Response:
        """Send one request and raise on any non-success status.

        Args:
            method: HTTP method.
            path: Path appended to the base URL.
            params: Query parameters.
            json_body: JSON-serialisable request body.

        Returns:
            The successful :class:`httpx.Response`.

        Raises:
            UpstreamError: On any non-2xx status.
            ConnectionError_: On network or timeout errors.
        """
        assert self._client is not None, "Client not initialised -- use as context manager"

        headers = {"Authorization": f"Bearer {self._token}"}
        debug(f"{method.upper()} {path}")
        try:
            response = self._client.request(
                method.upper(),
                path,
                params=params,
                json=json_body,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            raise ConnectionError_(f"{method.upper()} {path} failed: {exc}") from exc

        if not response.is_success:
            raise UpstreamError(response.status_code, response.text)
        return response

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("POST", path, **kwargs)

    def get_json(self, path: str, decode: Callable[[bytes], T], **kwargs: Any) -> T:
        """GET *path* and decode the body, without caching."""
        return _decode(self.get(path, **kwargs).content, decode)

    def post_json(self, path: str, decode: Callable[[bytes], T], **kwargs: Any) -> T:
        """POST to *path* and decode the body."""
        return _decode(self.post(path, **kwargs).content, decode)

    # ------------------------------------------------------------------ #
    # Cached reads
    # ------------------------------------------------------------------ #

    def cached_fetch(
        self,
        resource: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        refresh: Optional[bool] = None,
        decode: Optional[Callable[[bytes], Any]] = None,
    ) -> Any:
        """GET a read-only resource through the response cache.

        The cache key is :func:`~wisecli.cache.fingerprint.fingerprint` of
        *resource* and the canonical query string. On a hit the cached body
        is used; a cached body that *decode* rejects is treated as a miss.
        On a miss the request is sent, the body decoded, and only then
        stored. Failure to store is a warning, not an error.

        Args:
            resource: Logical resource name (``"recipients"``, ...).
            path: Request path.
            params: Query parameters.
            refresh: Bypass cached entries. Defaults to the client's
                ``refresh`` setting.
            decode: Optional decoder applied to the raw body.

        Returns:
            The raw body as ``bytes`` when *decode* is ``None``, otherwise
            whatever *decode* returns.
        """
        bypass = self._refresh if refresh is None else refresh
        query = canonical_query(params)
        key = fingerprint(resource, query)

        if self._cache is not None:
            cached = self._cache.lookup(key, bypass=bypass)
            debug(f"Cache {cached.status.value}: {resource} ({key})")
            if cached.payload is not None:
                if decode is None:
                    return cached.payload
                try:
                    return decode(cached.payload)
                except ValueError as exc:
                    debug(f"Cached {resource} did not decode, refetching: {exc}")

        response = self.get(path, params=params or None)
        body = response.content
        result = body if decode is None else _decode(body, decode)

        if self._cache is not None:
            try:
                self._cache.write(key, body, response.headers)
            except StorageError as exc:
                warning(f"failed to cache {resource}: {exc}")

        return result


def _decode(body: bytes, decode: Callable[[bytes], T]) -> T:
    try:
        return decode(body)
    except ValueError as exc:
        raise InvalidResponseError(f"failed to parse response: {exc}") from exc
