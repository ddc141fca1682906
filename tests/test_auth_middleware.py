from __future__ import annotations

import pytest

from petconnect.auth.middleware import extract_bearer_token, is_public_route


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer   tok ", "tok"),
        ("Basic abc", ""),
        ("Bearer", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_extract_bearer_token(header: str | None, expected: str) -> None:
    assert extract_bearer_token(header) == expected


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("GET", "/api/health"),
        ("GET", "/api/pets"),
        ("GET", "/api/pets/3"),
        ("POST", "/api/auth/register"),
        ("POST", "/api/auth/login"),
        ("POST", "/api/auth/google"),
        ("OPTIONS", "/api/applications"),
        ("GET", "/docs"),
    ],
)
def test_public_routes(method: str, path: str) -> None:
    assert is_public_route(method, path)


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("POST", "/api/pets"),
        ("GET", "/api/auth/me"),
        ("GET", "/api/applications"),
        ("POST", "/api/applications"),
        ("PATCH", "/api/applications/1/status"),
        ("GET", "/api/favorites"),
        ("DELETE", "/api/favorites/1"),
        ("GET", "/api/pets/1/secret"),
    ],
)
def test_protected_routes(method: str, path: str) -> None:
    assert not is_public_route(method, path)
