"""Storage-root resolution, atomic writes, and the small settings files.

This module handles all persistent local state for wise-cli that is not the
response cache or the transfer ledger themselves:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.wise-cli/`` on macOS and Windows. See :func:`get_cache_dir` (the
  shared storage root) and :func:`get_data_dir` (crash logs).
* **API token** -- a plain file named ``token`` under the storage root,
  written with ``0o600`` permissions. Resolution order is handled by
  :func:`resolve_token`.
* **Default profile** -- a plain file named ``default-profile`` holding the
  numeric id chosen with ``wise-cli select-profile``.

The storage root is resolved once per run by the CLI layer and then passed
explicitly to :class:`~wisecli.cache.ResponseCache`,
:class:`~wisecli.ledger.TransferLedger`, and the helpers below.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) so a concurrent reader never sees a partial file.
"""

from __future__ import annotations

import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from wisecli.exceptions import ConfigError, StorageError

_APP_NAME = "wise-cli"
_TOKEN_FILENAME = "token"
_DEFAULT_PROFILE_FILENAME = "default-profile"

DEFAULT_API_URL = "https://api.wise.com"
TOKEN_ENV_VAR = "WISE_API_TOKEN"
API_URL_ENV_VAR = "WISE_API_URL"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def _ensure_dir(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(f"failed to create directory {path}: {exc}") from exc
    return path


def get_cache_dir() -> Path:
    """Return the storage root shared by the response cache and the ledger.

    On Linux/BSD: ``$XDG_CACHE_HOME/wise-cli/`` (default ``~/.cache/wise-cli/``).
    On macOS/Windows: ``~/.wise-cli/cache/``.

    Returns:
        Absolute path to the storage root (guaranteed to exist).

    Raises:
        StorageError: If the directory cannot be created.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    return _ensure_dir(path)


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/wise-cli/`` (default ``~/.local/share/wise-cli/``).
    On macOS/Windows: ``~/.wise-cli/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    return _ensure_dir(path)


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. When *mode* is given
    the permissions are applied before the rename, so the final file is
    never visible with looser permissions.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- API token ---


def save_token(root: Path, token: str) -> Path:
    """Persist the API token under *root* with owner-only permissions.

    Returns:
        The path of the written token file.

    Raises:
        StorageError: If the file cannot be written.
    """
    path = root / _TOKEN_FILENAME
    try:
        _atomic_write(path, token, mode=0o600)
    except OSError as exc:
        raise StorageError(f"failed to save token: {exc}") from exc
    return path


def load_token(root: Path) -> Optional[str]:
    """Return the stored API token, or ``None`` if none was saved."""
    path = root / _TOKEN_FILENAME
    if not path.is_file():
        return None
    try:
        token = path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ConfigError(f"failed to read token at {path}: {exc}") from exc
    return token or None


def resolve_token(root: Path, cli_token: Optional[str] = None) -> Optional[str]:
    """Resolve the API token with precedence.

    Precedence (high to low):
        1. ``--token`` CLI flag
        2. ``WISE_API_TOKEN`` environment variable
        3. Token file saved by ``wise-cli login``
    """
    if cli_token:
        return cli_token
    env_token = os.environ.get(TOKEN_ENV_VAR)
    if env_token:
        return env_token
    return load_token(root)


def get_api_base_url() -> str:
    """Return the API base URL, honouring the ``WISE_API_URL`` override."""
    return os.environ.get(API_URL_ENV_VAR) or DEFAULT_API_URL


# --- Default profile ---


def save_default_profile(root: Path, profile_id: int) -> None:
    """Persist *profile_id* as the default profile for commands that need one."""
    path = root / _DEFAULT_PROFILE_FILENAME
    try:
        _atomic_write(path, f"{profile_id}\n")
    except OSError as exc:
        raise StorageError(f"failed to save default profile: {exc}") from exc


def load_default_profile(root: Path) -> Optional[int]:
    """Return the default profile id, or ``None`` if none was selected.

    Raises:
        ConfigError: If the file exists but does not hold an integer.
    """
    path = root / _DEFAULT_PROFILE_FILENAME
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ConfigError(f"failed to read default profile at {path}: {exc}") from exc
    try:
        return int(text)
    except ValueError as exc:
        raise ConfigError(f"invalid default profile at {path}: {text!r}") from exc
