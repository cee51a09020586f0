"""Helpers shared by command implementations.

The root callback in :mod:`wisecli.app` stores global options in
``ctx.obj``. These helpers turn that state into the collaborators a command
needs: the storage root (resolved once per run), an authenticated
:class:`~wisecli.client.WiseClient`, and the
:class:`~wisecli.ledger.TransferLedger`.

Tests may place an ``httpx`` transport under ``ctx.obj["transport"]`` to
replace the network.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer

from wisecli.cache import ResponseCache
from wisecli.client import WiseClient
from wisecli.config import get_api_base_url, get_cache_dir, load_default_profile, resolve_token
from wisecli.exceptions import AuthError, InvalidUsageError
from wisecli.ledger import TransferLedger


def get_state(ctx: typer.Context) -> dict[str, Any]:
    ctx.ensure_object(dict)
    return ctx.obj


def storage_root(ctx: typer.Context) -> Path:
    """Return the storage root, resolving and creating it on first use."""
    state = get_state(ctx)
    if state.get("root") is None:
        state["root"] = get_cache_dir()
    return state["root"]


def open_client(ctx: typer.Context) -> WiseClient:
    """Build a :class:`WiseClient` from the global options.

    Raises:
        AuthError: If no API token can be resolved.
    """
    state = get_state(ctx)
    root = storage_root(ctx)
    token = resolve_token(root, state.get("token"))
    if not token:
        raise AuthError(
            "API token required: set --token flag or WISE_API_TOKEN env var, "
            "or run 'wise-cli login'"
        )
    return WiseClient(
        token,
        base_url=get_api_base_url(),
        cache=ResponseCache(root),
        refresh=bool(state.get("refresh", False)),
        transport=state.get("transport"),
    )


def open_ledger(ctx: typer.Context) -> TransferLedger:
    return TransferLedger(storage_root(ctx))


def resolve_profile_id(
    ctx: typer.Context, profile_id: Optional[int], required: bool = True
) -> Optional[int]:
    """Return *profile_id*, or the default profile when it is not given.

    Raises:
        InvalidUsageError: If *required* and neither is available.
    """
    if profile_id:
        return profile_id
    default = load_default_profile(storage_root(ctx))
    if not default and required:
        raise InvalidUsageError(
            "profile-id is required: use --profile-id or run 'wise-cli select-profile <id>'"
        )
    return default


def money(value: float, currency: str) -> str:
    return f"{value:.2f} {currency}"


def or_na(value: Optional[str]) -> str:
    return value if value else "N/A"
