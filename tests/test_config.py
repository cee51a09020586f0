"""Tests for wisecli.config -- storage root, atomic writes, token and profile files."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from wisecli.config import (
    DEFAULT_API_URL,
    _atomic_write,
    get_api_base_url,
    get_cache_dir,
    get_data_dir,
    load_default_profile,
    load_token,
    resolve_token,
    save_default_profile,
    save_token,
)
from wisecli.exceptions import ConfigError, StorageError


# ---------------------------------------------------------------------------
# Storage root resolution
# ---------------------------------------------------------------------------


class TestStorageRoot:
    def test_xdg_cache_home_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("wisecli.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))
        root = get_cache_dir()
        assert root == tmp_path / "xdg" / "wise-cli"
        assert root.is_dir()

    def test_xdg_default_under_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("wisecli.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_cache_dir() == tmp_path / ".cache" / "wise-cli"

    def test_non_xdg_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("wisecli.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_cache_dir() == tmp_path / ".wise-cli" / "cache"

    def test_data_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("wisecli.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
        assert get_data_dir() == tmp_path / "data" / "wise-cli"

    def test_unusable_root_raises_storage_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        monkeypatch.setattr("wisecli.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CACHE_HOME", str(blocker))
        with pytest.raises(StorageError):
            get_cache_dir()


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "file.json"
        _atomic_write(target, '{"a": 1}')
        assert target.read_text() == '{"a": 1}'

    def test_replaces_existing(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        target.write_text("old")
        _atomic_write(target, "new")
        assert target.read_text() == "new"

    def test_leaves_no_temp_files(self, tmp_path: Path) -> None:
        _atomic_write(tmp_path / "file.json", "x")
        assert [p.name for p in tmp_path.iterdir()] == ["file.json"]

    def test_applies_mode(self, tmp_path: Path) -> None:
        target = tmp_path / "secret"
        _atomic_write(target, "x", mode=0o600)
        assert stat.S_IMODE(target.stat().st_mode) == 0o600


# ---------------------------------------------------------------------------
# Token
# ---------------------------------------------------------------------------


class TestToken:
    def test_save_and_load(self, storage_root: Path) -> None:
        path = save_token(storage_root, "secret-token")
        assert path == storage_root / "token"
        assert load_token(storage_root) == "secret-token"

    def test_saved_token_is_owner_only(self, storage_root: Path) -> None:
        path = save_token(storage_root, "secret-token")
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_load_missing(self, storage_root: Path) -> None:
        assert load_token(storage_root) is None

    def test_load_blank_is_none(self, storage_root: Path) -> None:
        (storage_root / "token").write_text("  \n")
        assert load_token(storage_root) is None

    def test_flag_beats_env_and_file(
        self, storage_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        save_token(storage_root, "from-file")
        monkeypatch.setenv("WISE_API_TOKEN", "from-env")
        assert resolve_token(storage_root, "from-flag") == "from-flag"

    def test_env_beats_file(self, storage_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        save_token(storage_root, "from-file")
        monkeypatch.setenv("WISE_API_TOKEN", "from-env")
        assert resolve_token(storage_root) == "from-env"

    def test_file_used_last(self, storage_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("WISE_API_TOKEN", raising=False)
        save_token(storage_root, "from-file")
        assert resolve_token(storage_root) == "from-file"

    def test_nothing_configured(self, storage_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("WISE_API_TOKEN", raising=False)
        assert resolve_token(storage_root) is None


# ---------------------------------------------------------------------------
# API URL and default profile
# ---------------------------------------------------------------------------


class TestApiBaseUrl:
    def test_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("WISE_API_URL", raising=False)
        assert get_api_base_url() == DEFAULT_API_URL

    def test_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WISE_API_URL", "https://api.sandbox.transferwise.tech")
        assert get_api_base_url() == "https://api.sandbox.transferwise.tech"


class TestDefaultProfile:
    def test_round_trip(self, storage_root: Path) -> None:
        save_default_profile(storage_root, 12345)
        assert load_default_profile(storage_root) == 12345

    def test_missing(self, storage_root: Path) -> None:
        assert load_default_profile(storage_root) is None

    def test_garbage_raises_config_error(self, storage_root: Path) -> None:
        (storage_root / "default-profile").write_text("personal\n")
        with pytest.raises(ConfigError):
            load_default_profile(storage_root)
