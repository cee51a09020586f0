"""Profile commands -- list profiles and choose the default one."""

from __future__ import annotations

import typer

from wisecli.output import info, print_table, success


def profiles_command(ctx: typer.Context) -> None:
    """List all profiles belonging to your Wise account."""
    from wisecli.api import list_profiles
    from wisecli.commands._context import open_client, or_na

    with open_client(ctx) as client:
        profiles = list_profiles(client)

    if not profiles:
        info("No profiles found")
        return

    rows = [
        [str(p.id), p.type, p.current_state, p.email, or_na(p.full_name)]
        for p in profiles
    ]
    print_table(["ID", "Type", "State", "Email", "Name"], rows, title="Profiles")


def select_profile_command(
    ctx: typer.Context,
    profile: str = typer.Argument(help="Profile id, exact name, or part of the name."),
) -> None:
    """Select the default profile used when --profile-id is omitted.

    Matches by numeric id first, then by exact name, then by
    case-insensitive substring.

    Example::

        wise-cli select-profile 12345
        wise-cli select-profile "acme"
    """
    from wisecli.api import find_profile, list_profiles
    from wisecli.commands._context import open_client, storage_root
    from wisecli.config import save_default_profile

    with open_client(ctx) as client:
        profiles = list_profiles(client)

    selected = find_profile(profiles, profile)
    save_default_profile(storage_root(ctx), selected.id)

    name = selected.full_name or selected.email
    success(f"✓ Selected profile: {name} (ID: {selected.id}, Type: {selected.type})")
