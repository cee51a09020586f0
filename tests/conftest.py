"""Shared test fixtures for wise-cli.

Provides reusable fixtures for isolated storage roots, a controllable clock,
output state management, and running CLI commands. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from wisecli.output import OutputFormat, OutputManager, reset_output, set_output


FIXED_NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Storage and clock fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    """An empty storage root for a cache or ledger."""
    root = tmp_path / "store"
    root.mkdir()
    return root


@pytest.fixture
def clock() -> FakeClock:
    """A clock frozen at :data:`FIXED_NOW`."""
    return FakeClock()


# ---------------------------------------------------------------------------
# Environment isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate all wise-cli state to a temporary directory.

    Forces XDG path resolution, points XDG_CACHE_HOME and XDG_DATA_HOME at
    subdirectories of tmp_path, and clears the WISE_* environment variables
    so that tests never touch a real token or storage root.

    Returns:
        The storage root the CLI will resolve (``<tmp>/cache/wise-cli``).
    """
    monkeypatch.setattr("wisecli.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["WISE_API_TOKEN", "WISE_API_URL", "NO_COLOR"]:
        monkeypatch.delenv(var, raising=False)
    return tmp_path / "cache" / "wise-cli"


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a PLAIN-format, uncoloured OutputManager that keeps warnings visible."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
