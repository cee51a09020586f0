"""The authenticated user (``/v1/me``)."""

from __future__ import annotations

from wisecli.client import WiseClient
from wisecli.models import User


def get_me(client: WiseClient) -> User:
    """Fetch the user the API token belongs to. Never cached."""
    return client.get_json("/v1/me", User.model_validate_json)
