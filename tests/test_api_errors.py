from __future__ import annotations

from petconnect.api.errors import ApiError, ApiErrorCode, to_error_payload


def test_to_error_payload_preserves_structured_detail() -> None:
    payload = to_error_payload(
        {"error_code": "AUTH_TOKEN_INVALID", "message": "Invalid"},
        403,
    )

    assert payload == {"error_code": "AUTH_TOKEN_INVALID", "message": "Invalid"}


def test_to_error_payload_normalizes_plain_string() -> None:
    payload = to_error_payload("boom", 500)

    assert payload == {"error_code": "HTTP_500", "message": "boom"}


def test_api_error_exposes_code_and_status() -> None:
    error = ApiError(
        status_code=409,
        error_code=ApiErrorCode.AUTH_EMAIL_IN_USE,
        message="Email already in use",
    )

    assert error.status_code == 409
    assert error.error_code == "AUTH_EMAIL_IN_USE"
    assert to_error_payload(error.detail, error.status_code)["message"] == "Email already in use"
