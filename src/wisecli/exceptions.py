"""Exception hierarchy for wise-cli.

All exceptions inherit from :class:`WiseCliError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`wisecli.exit_codes`.
The top-level error handler in :func:`wisecli.app.main` catches
``WiseCliError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    WiseCliError (exit 1)
    +-- InvalidUsageError     (exit 2)
    +-- AuthError             (exit 3)
    +-- NotFoundError         (exit 4)
    +-- UpstreamError         (exit 3 / 4 / 5 depending on status)
    +-- InvalidResponseError  (exit 5)
    +-- ConnectionError_      (exit 6)
    +-- StorageError          (exit 7)
    +-- DecodeError           (exit 1)
    +-- ConfigError           (exit 1)

Not every error reaches the user. The cache downgrades :class:`DecodeError`
to a miss, and :class:`StorageError` raised while writing a cache entry or a
ledger record is reported as a warning only.
"""

from __future__ import annotations

from wisecli.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_STORAGE_ERROR,
    EXIT_UPSTREAM_ERROR,
)


class WiseCliError(Exception):
    """Base exception for all wise-cli errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(WiseCliError):
    """Raised for invalid CLI arguments or missing required options."""

    exit_code = EXIT_INVALID_USAGE


class AuthError(WiseCliError):
    """Raised when no API token is available for an authenticated call."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(WiseCliError):
    """Raised when a lookup (ledger token, profile, recipient) has no match."""

    exit_code = EXIT_NOT_FOUND


class UpstreamError(WiseCliError):
    """Raised when the payments API answers with a non-success status.

    Carries the status code and the raw response body so that callers can
    show exactly what the API said.

    Args:
        status_code: HTTP status returned by the API.
        body: Raw response body text.
    """

    def __init__(self, status_code: int, body: str):
        super().__init__(f"API error (status {status_code}): {body}")
        self.status_code = status_code
        self.body = body
        if status_code in (401, 403):
            self.exit_code = EXIT_AUTH_FAILURE
        elif status_code == 404:
            self.exit_code = EXIT_NOT_FOUND
        else:
            self.exit_code = EXIT_UPSTREAM_ERROR


class InvalidResponseError(WiseCliError):
    """Raised when a successful API response body cannot be decoded."""

    exit_code = EXIT_UPSTREAM_ERROR


class ConnectionError_(WiseCliError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class StorageError(WiseCliError):
    """Raised when the storage root is unreachable or a file cannot be written."""

    exit_code = EXIT_STORAGE_ERROR


class DecodeError(WiseCliError):
    """Raised when a stored cache entry cannot be parsed."""


class ConfigError(WiseCliError):
    """Raised for unreadable or malformed configuration files (token, default profile)."""
