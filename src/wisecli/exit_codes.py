"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~wisecli.exceptions.WiseCliError` subclass.
Shell wrappers can inspect the exit code to determine the failure class
without parsing stderr.

Example::

    $ wise-cli lookup-transfer 2f1c...
    $ echo $?
    4   # EXIT_NOT_FOUND -- no transfer recorded under that token
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required options."""

EXIT_AUTH_FAILURE = 3
"""No API token is configured, or the API rejected it (HTTP 401/403)."""

EXIT_NOT_FOUND = 4
"""The requested resource or ledger record was not found."""

EXIT_UPSTREAM_ERROR = 5
"""The payments API returned a non-success status or an undecodable body."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_STORAGE_ERROR = 7
"""The local storage root could not be read or written."""
