"""Tests for application errors and the error envelope."""

from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from app.core.errors import (
    AppError,
    categorize_error,
    error_body,
    not_found_error,
    rate_limit_error,
    register_exception_handlers,
    validation_error,
)


class TestCategorizeError:
    """Tests for keyword-based error categorization."""

    def test_app_error_passes_through(self) -> None:
        """AppErrors are returned unchanged."""
        error = AppError("NOT_FOUND", "Study guide not found", 404)
        assert categorize_error(error) is error

    def test_database_keywords(self) -> None:
        """Database failures map to DATABASE_ERROR 503."""
        error = categorize_error(Exception('relation "study_guides" does not exist'))
        assert error.code == "DATABASE_ERROR"
        assert error.status_code == 503

    def test_llm_keywords(self) -> None:
        """Provider failures map to LLM_SERVICE_ERROR."""
        error = categorize_error(Exception("OpenAI request failed"))
        assert error.code == "LLM_SERVICE_ERROR"
        assert error.status_code == 503

    def test_rate_limit_checked_before_auth(self) -> None:
        """The first matching rule wins."""
        error = categorize_error(Exception("Rate limit hit for token bucket"))
        assert error.code == "RATE_LIMIT_EXCEEDED"
        assert error.status_code == 429

    def test_validation_keeps_message(self) -> None:
        """Validation failures keep the raw message."""
        error = categorize_error(ValueError("invalid study mode"))
        assert error.code == "VALIDATION_ERROR"
        assert error.message == "invalid study mode"

    def test_unknown_is_internal(self) -> None:
        """Anything unrecognised becomes a generic 500."""
        error = categorize_error(RuntimeError("boom"))
        assert error.code == "INTERNAL_SERVER_ERROR"
        assert error.status_code == 500
        assert "boom" not in error.message


class TestErrorFactories:
    """Tests for the error helper functions."""

    def test_rate_limit_error_with_minutes(self) -> None:
        error = rate_limit_error(15)
        assert error.status_code == 429
        assert error.message == "Rate limit exceeded. Try again in 15 minutes."

    def test_not_found_error(self) -> None:
        error = not_found_error("Topic")
        assert (error.code, error.message, error.status_code) == ("NOT_FOUND", "Topic not found", 404)

    def test_validation_error_appends_details(self) -> None:
        error = validation_error("Invalid date", {"date": "nope"})
        assert error.message == 'Invalid date: {"date": "nope"}'

    def test_error_body_shape(self) -> None:
        body = error_body("NOT_FOUND", "missing", request_id="req-1")
        assert body["success"] is False
        assert body["error"]["code"] == "NOT_FOUND"
        assert body["error"]["request_id"] == "req-1"
        assert "timestamp" in body["error"]


class _Payload(BaseModel):
    name: str


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/app-error")
    async def app_error():
        raise AppError("SECURITY_VIOLATION", "Suspicious pattern detected in input", 400)

    @app.get("/crash")
    async def crash():
        raise RuntimeError("database connection lost")

    @app.post("/validate")
    async def validate(payload: _Payload):
        return payload

    return app


class TestExceptionHandlers:
    """Tests for the FastAPI exception handlers."""

    def test_app_error_envelope(self) -> None:
        """AppError renders as the error envelope with its status."""
        client = TestClient(_build_app())
        response = client.get("/app-error", headers={"x-request-id": "abc"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"]["code"] == "SECURITY_VIOLATION"
        assert body["error"]["request_id"] == "abc"

    def test_request_validation_is_400(self) -> None:
        """Body validation errors become VALIDATION_ERROR 400."""
        client = TestClient(_build_app())
        response = client.post("/validate", json={})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_unhandled_exception_is_categorized(self) -> None:
        """Unhandled exceptions go through categorize_error."""
        client = TestClient(_build_app(), raise_server_exceptions=False)
        response = client.get("/crash")
        assert response.status_code == 503
        assert response.json()["error"]["code"] == "DATABASE_ERROR"
