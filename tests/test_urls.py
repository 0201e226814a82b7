"""Tests for URL parsing helpers."""

import pytest

from marketguard.urls import is_https, parse_url


class TestParseUrl:
    """Tests for parse_url."""

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param("https://example.com/a.tgz", id="https"),
            pytest.param("http://example.com/a.tgz", id="http"),
            pytest.param("ftp://example.com/a.tgz", id="ftp"),
            pytest.param("mailto:someone@example.com", id="opaque"),
        ],
    )
    def test_parses_absolute_urls(self, value: str) -> None:
        """Verify absolute URLs parse."""
        assert parse_url(value) is not None

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param("not a url", id="no-scheme"),
            pytest.param("/relative/path.tgz", id="relative"),
            pytest.param("https://", id="no-host"),
            pytest.param("https://example.com:99999/a.tgz", id="bad-port"),
            pytest.param("http://[::1/a.tgz", id="bad-ipv6"),
            pytest.param(None, id="null"),
            pytest.param(42, id="number"),
        ],
    )
    def test_rejects_invalid_urls(self, value: object) -> None:
        """Verify values that are not absolute URLs are rejected."""
        assert parse_url(value) is None


class TestIsHttps:
    """Tests for is_https."""

    def test_https_scheme(self) -> None:
        """Verify https is recognised regardless of case."""
        parts = parse_url("HTTPS://example.com/a.tgz")
        assert parts is not None
        assert is_https(parts)

    def test_http_scheme(self) -> None:
        """Verify plain http is not https."""
        parts = parse_url("http://example.com/a.tgz")
        assert parts is not None
        assert not is_https(parts)
