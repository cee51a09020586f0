"""wise-cli -- a command-line client for the Wise payments API.

Lists profiles, recipient accounts, and transfers; creates quotes,
recipients, and transfers; and sends money to a recipient by name in one
step. Read-only listings are cached on disk according to the API's HTTP
cache headers, and every created transfer is recorded locally under its
idempotency token.

Typical workflow::

    wise-cli login                      # store an API token
    wise-cli select-profile "Jane Doe"  # choose a default profile
    wise-cli send-to "John Smith" 25 EUR "rent"

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for API data and local records.
    config: Storage root, token, and default-profile handling.
    cache: Header-driven response cache.
    ledger: Idempotency-token ledger of created transfers.
    client: httpx-based API client.
    api: One function per API operation.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
