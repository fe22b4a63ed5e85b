"""Tests for global exception handlers.

Validates that every error type is rendered as a flat JSON body with the
right HTTP status code and no information leakage.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from portfolio_api.core.errors import (
    AppError,
    ConfigurationAppError,
    MailDispatchAppError,
    MissingFieldsAppError,
    RateLimitAppError,
    ValidationAppError,
)
from portfolio_api.core.exception_handlers import general_exception_handler, setup_exception_handlers


@pytest.fixture
def app_with_handlers() -> FastAPI:
    """Create FastAPI app with exception handlers registered."""
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers, raise_server_exceptions=False)


class TestAppErrorHandler:
    """Test handler for AppError and subclasses."""

    def test_validation_error_returns_400(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-validation")
        async def test_endpoint():
            raise ValidationAppError(code="invalid_email", message="Invalid email address")

        response = client.get("/test-validation")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid email address", "code": "invalid_email"}

    def test_missing_fields_error_includes_required(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-missing")
        async def test_endpoint():
            raise MissingFieldsAppError(
                code="missing_fields",
                message="Missing required fields",
                details={"missing": ["email"]},
            )

        response = client.get("/test-missing")

        assert response.status_code == 400
        data = response.json()
        assert data["required"] == ["name", "company", "email", "challenge"]
        assert "missing" not in data

    def test_rate_limit_error_returns_429_with_headers(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-rate")
        async def test_endpoint():
            raise RateLimitAppError(
                code="rate_limited",
                message="Too many requests. Please try again later.",
                headers={"Retry-After": "120"},
            )

        response = client.get("/test-rate")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "120"
        assert response.json()["error"] == "Too many requests. Please try again later."

    def test_configuration_error_returns_500_without_details(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-config")
        async def test_endpoint():
            raise ConfigurationAppError(
                code="mail_not_configured",
                message="Email service not configured",
                details={"hint": "set RESEND_API_KEY"},
            )

        response = client.get("/test-config")

        assert response.status_code == 500
        assert response.json() == {"error": "Email service not configured", "code": "mail_not_configured"}

    def test_dispatch_error_returns_500_with_provider_details(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-dispatch")
        async def test_endpoint():
            raise MailDispatchAppError(
                code="mail_dispatch_failed",
                message="Failed to send email",
                details={"provider_error": "rate limit exceeded at provider"},
            )

        response = client.get("/test-dispatch")

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["details"] == "rate limit exceeded at provider"

    def test_dispatch_error_without_details_uses_placeholder(self):
        exc = MailDispatchAppError(code="mail_dispatch_failed", message="Failed to send email")

        assert exc.to_payload()["details"] == "Unknown error"

    def test_str_of_error_is_message(self):
        assert str(AppError(code="x", message="readable")) == "readable"


class TestHttpExceptionHandler:
    def test_method_not_allowed_is_flat_json(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.post("/only-post")
        async def test_endpoint():
            return {}

        response = client.get("/only-post")

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}

    def test_not_found_is_flat_json(self, client: TestClient):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}


class TestGeneralExceptionHandler:
    """Test fallback handler for unexpected exceptions."""

    def test_unexpected_exception_returns_generic_500(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/boom")
        async def test_endpoint():
            raise RuntimeError("database connection failed")

        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_general_exception_handler_never_leaks_details(self):
        request = AsyncMock()
        request.url.path = "/test"
        request.method = "POST"

        response = asyncio.run(general_exception_handler(request, ValueError("secret detail")))

        body = bytes(response.body).decode()
        assert response.status_code == 500
        assert json.loads(body) == {"error": "Internal server error"}
        assert "secret detail" not in body
        assert "Traceback" not in body
        assert "ValueError" not in body


def test_setup_registers_all_handlers(app_with_handlers: FastAPI):
    from starlette.exceptions import HTTPException as StarletteHTTPException

    assert AppError in app_with_handlers.exception_handlers
    assert StarletteHTTPException in app_with_handlers.exception_handlers
    assert Exception in app_with_handlers.exception_handlers
