from __future__ import annotations

from fastapi.routing import APIRoute

from web_api import app


def _response_ref(path: str, method: str, status: str) -> str:
    operation = app.openapi()["paths"][path][method]
    return operation["responses"][status]["content"]["application/json"]["schema"]["$ref"]


def test_health_endpoint_contract_function() -> None:
    route = next(
        (
            candidate
            for candidate in app.routes
            if isinstance(candidate, APIRoute) and candidate.path == "/api/health"
        ),
        None,
    )

    assert route is not None
    payload = route.endpoint()
    assert payload.model_dump() == {"status": "ok"}


def test_openapi_contains_auth_contracts() -> None:
    assert _response_ref("/api/auth/register", "post", "201").endswith("AuthSessionResponse")
    assert _response_ref("/api/auth/register", "post", "409").endswith("ApiErrorResponse")
    assert _response_ref("/api/auth/login", "post", "429").endswith("ApiErrorResponse")
    assert _response_ref("/api/auth/google", "post", "502").endswith("ApiErrorResponse")
    assert _response_ref("/api/auth/me", "get", "200").endswith("AuthMeResponse")


def test_openapi_contains_application_contracts() -> None:
    path = "/api/applications/{application_id}/status"

    assert _response_ref(path, "patch", "200").endswith("Application")
    assert _response_ref(path, "patch", "404").endswith("ApiErrorResponse")
    assert _response_ref(path, "patch", "409").endswith("ApiErrorResponse")
    assert _response_ref("/api/applications", "post", "403").endswith("ApiErrorResponse")


def test_openapi_contains_pet_and_favorite_contracts() -> None:
    assert _response_ref("/api/pets/{pet_id}", "get", "404").endswith("ApiErrorResponse")
    assert _response_ref("/api/pets", "post", "403").endswith("ApiErrorResponse")
    assert _response_ref("/api/favorites", "post", "201").endswith("OkResponse")
    assert _response_ref("/api/favorites/{pet_id}", "delete", "200").endswith("OkResponse")


def test_openapi_uses_camel_case_wire_names() -> None:
    schemas = app.openapi()["components"]["schemas"]
    application_fields = set(schemas["Application"]["properties"])

    assert {"petId", "applicantName", "submittedDate", "shelterId"} <= application_fields
    assert "pet_id" not in application_fields
