"""Unit tests for the contact-endpoint CORS policy."""

import pytest

from portfolio_api.core.config import DEFAULT_CORS_ALLOWED_ORIGINS
from portfolio_api.core.cors import (
    build_cors_headers,
    is_allowed_origin,
    parse_allowed_origins,
    request_origin,
)

ALLOWED = parse_allowed_origins(DEFAULT_CORS_ALLOWED_ORIGINS)


def test_parse_allowed_origins_trims_and_skips_blanks() -> None:
    assert parse_allowed_origins(" https://a.com ,, http://b.com ") == ("https://a.com", "http://b.com")
    assert parse_allowed_origins("") == ()


def test_default_allow_list_includes_local_development() -> None:
    assert "http://localhost:5000" in ALLOWED


@pytest.mark.parametrize(
    "origin",
    [
        "https://mattheneus.com",
        "https://www.mattheneus.com",
        "https://www.mattheneus.com/contact",
        "http://localhost:5000",
    ],
)
def test_allowed_origins_match_by_prefix(origin: str) -> None:
    assert is_allowed_origin(origin, ALLOWED) is True


@pytest.mark.parametrize("origin", [None, "", "https://evil.example", "http://mattheneus.com"])
def test_other_origins_are_rejected(origin) -> None:
    assert is_allowed_origin(origin, ALLOWED) is False


def test_origin_header_preferred_over_referer() -> None:
    headers = {"origin": "https://mattheneus.com", "referer": "https://other.example/page"}

    assert request_origin(headers) == "https://mattheneus.com"
    assert request_origin({"referer": "https://other.example/page"}) == "https://other.example/page"
    assert request_origin({}) is None


def test_build_headers_echoes_allowed_origin() -> None:
    headers = build_cors_headers("https://mattheneus.com", ALLOWED)

    assert headers == {
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Origin": "https://mattheneus.com",
        "Vary": "Origin",
    }


def test_build_headers_always_advertises_methods() -> None:
    headers = build_cors_headers("https://evil.example", ALLOWED)

    assert "Access-Control-Allow-Origin" not in headers
    assert headers["Access-Control-Allow-Methods"] == "POST, OPTIONS"
    assert headers["Access-Control-Allow-Headers"] == "Content-Type"
