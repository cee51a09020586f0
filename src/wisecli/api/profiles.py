"""Profile listing and selection."""

from __future__ import annotations

from typing import Optional

from pydantic import TypeAdapter

from wisecli.client import WiseClient
from wisecli.exceptions import NotFoundError
from wisecli.models import Profile

_PROFILES = TypeAdapter(list[Profile])


def list_profiles(client: WiseClient, refresh: Optional[bool] = None) -> list[Profile]:
    """Return every profile of the authenticated user (cached)."""
    return client.cached_fetch(
        "profiles",
        "/v2/profiles",
        refresh=refresh,
        decode=_PROFILES.validate_json,
    )


def find_profile(profiles: list[Profile], id_or_name: str) -> Profile:
    """Pick a profile by numeric id, exact name, or case-insensitive substring.

    The three strategies are tried in that order and the first match wins.

    Raises:
        NotFoundError: If no profile matches.
    """
    try:
        wanted_id = int(id_or_name)
    except ValueError:
        wanted_id = 0
    if wanted_id > 0:
        for profile in profiles:
            if profile.id == wanted_id:
                return profile

    for profile in profiles:
        if profile.full_name == id_or_name:
            return profile

    needle = id_or_name.lower()
    for profile in profiles:
        if needle in profile.full_name.lower():
            return profile

    raise NotFoundError(f"profile not found: {id_or_name}")
