"""Tests for header-derived cache expiry."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from wisecli.cache import DEFAULT_TTL, derive_expiration
from wisecli.cache.expiration import FAR_FUTURE, extract_max_age, parse_http_date

NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
EXPIRES = "Fri, 01 Mar 2024 18:30:00 GMT"
EXPIRES_AT = datetime(2024, 3, 1, 18, 30, 0, tzinfo=timezone.utc)


class TestMaxAge:
    def test_max_age_wins(self) -> None:
        result = derive_expiration({"Cache-Control": "max-age=120"}, NOW)
        assert result == NOW + timedelta(seconds=120)

    def test_max_age_beats_expires(self) -> None:
        headers = {"Cache-Control": "public, max-age=30", "Expires": EXPIRES}
        assert derive_expiration(headers, NOW) == NOW + timedelta(seconds=30)

    def test_header_name_is_case_insensitive(self) -> None:
        result = derive_expiration({"cache-control": "max-age=10"}, NOW)
        assert result == NOW + timedelta(seconds=10)

    def test_httpx_headers(self) -> None:
        headers = httpx.Headers({"Cache-Control": "max-age=45"})
        assert derive_expiration(headers, NOW) == NOW + timedelta(seconds=45)

    def test_zero_max_age_falls_through_to_expires(self) -> None:
        headers = {"Cache-Control": "max-age=0", "Expires": EXPIRES}
        assert derive_expiration(headers, NOW) == EXPIRES_AT

    def test_no_max_age_directive_falls_through(self) -> None:
        headers = {"Cache-Control": "no-cache"}
        assert derive_expiration(headers, NOW) == NOW + DEFAULT_TTL

    @pytest.mark.parametrize(
        "value",
        ["max-age=999999999999", "max-age=" + "9" * 25],
    )
    def test_huge_max_age_is_clamped(self, value: str) -> None:
        assert derive_expiration({"Cache-Control": value}, NOW) == FAR_FUTURE

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("max-age=60", 60),
            ("private, max-age=3600, must-revalidate", 3600),
            ("no-store", 0),
            ("max-age=abc", 0),
            ("", 0),
        ],
    )
    def test_extract_max_age(self, value: str, expected: int) -> None:
        assert extract_max_age(value) == expected


class TestExpires:
    def test_expires_used_exactly(self) -> None:
        assert derive_expiration({"Expires": EXPIRES}, NOW) == EXPIRES_AT

    def test_expires_in_the_past_is_used_as_is(self) -> None:
        past = "Thu, 01 Jan 2015 00:00:00 GMT"
        assert derive_expiration({"Expires": past}, NOW) == datetime(
            2015, 1, 1, tzinfo=timezone.utc
        )

    def test_invalid_expires_falls_back_to_default(self) -> None:
        assert derive_expiration({"Expires": "0"}, NOW) == NOW + DEFAULT_TTL
        assert derive_expiration({"Expires": "soon"}, NOW) == NOW + DEFAULT_TTL

    def test_parse_http_date_is_utc(self) -> None:
        parsed = parse_http_date(EXPIRES)
        assert parsed == EXPIRES_AT
        assert parsed.tzinfo is not None

    def test_parse_http_date_rejects_garbage(self) -> None:
        assert parse_http_date("not a date") is None

    def test_expires_beyond_datetime_range_falls_back_to_default(self) -> None:
        far = "Fri, 31 Dec 9999 23:59:59 -1200"
        assert parse_http_date(far) is None
        assert derive_expiration({"Expires": far}, NOW) == NOW + DEFAULT_TTL


class TestDefault:
    def test_no_headers(self) -> None:
        assert derive_expiration({}, NOW) == NOW + timedelta(hours=1)

    def test_default_with_real_clock(self) -> None:
        now = datetime.now(timezone.utc)
        result = derive_expiration({}, now)
        expected = datetime.now(timezone.utc) + timedelta(hours=1)
        assert abs((result - expected).total_seconds()) <= 1
