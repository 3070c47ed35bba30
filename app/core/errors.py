"""
Application errors and the JSON error envelope returned by every route
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config.settings import settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Error with an application code and the HTTP status to respond with."""

    def __init__(self, code: str, message: str, status_code: int = 400):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code


# (keywords, code, user-facing message, status); first match wins
_ERROR_PATTERNS = [
    (("rate limit", "too many requests"), "RATE_LIMIT_EXCEEDED",
     "Rate limit exceeded. Please try again later.", 429),
    (("database", "postgres", "constraint", "relation"), "DATABASE_ERROR",
     "Database error occurred. Please try again later.", 503),
    (("openai", "anthropic", "llm"), "LLM_SERVICE_ERROR",
     "AI service temporarily unavailable. Please try again.", 503),
    (("config", "environment", "missing required"), "CONFIGURATION_ERROR",
     "Service configuration error.", 500),
    (("timeout", "network", "connection"), "NETWORK_ERROR",
     "Network error occurred. Please try again.", 503),
    (("auth", "unauthorized", "jwt", "token"), "AUTHENTICATION_ERROR",
     "Authentication required or invalid credentials.", 401),
    (("permission", "forbidden", "access denied"), "PERMISSION_DENIED",
     "Insufficient permissions to perform this action.", 403),
]


def categorize_error(exc: BaseException) -> AppError:
    """Map an unexpected exception onto an AppError using keywords in its message."""
    if isinstance(exc, AppError):
        return exc
    raw_message = str(exc)
    lowered = raw_message.lower()
    for keywords, code, message, status_code in _ERROR_PATTERNS:
        if any(k in lowered for k in keywords):
            return AppError(code, message, status_code)
    if "validation" in lowered or "invalid" in lowered or "required" in lowered:
        return AppError("VALIDATION_ERROR", raw_message or "Invalid input data provided.", 400)
    return AppError(
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred. Please try again later.",
        500,
    )


def error_body(code: str, message: str, request_id: Optional[str] = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {
        "code": code,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if request_id:
        error["request_id"] = request_id
    return {"success": False, "error": error}


def error_response(error: AppError, request_id: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=error_body(error.code, error.message, request_id),
    )


def validation_error(message: str, details: Any = None) -> AppError:
    if details is not None:
        message = f"{message}: {json.dumps(details, default=str)}"
    return AppError("VALIDATION_ERROR", message, 400)


def rate_limit_error(reset_minutes: Optional[int] = None) -> AppError:
    if reset_minutes:
        message = f"Rate limit exceeded. Try again in {reset_minutes} minutes."
    else:
        message = "Rate limit exceeded. Please try again later."
    return AppError("RATE_LIMIT_EXCEEDED", message, 429)


def authentication_error(message: str = "Authentication required") -> AppError:
    return AppError("AUTHENTICATION_ERROR", message, 401)


def configuration_error(message: str) -> AppError:
    return AppError("CONFIGURATION_ERROR", message, 500)


def not_found_error(resource: str) -> AppError:
    return AppError("NOT_FOUND", f"{resource} not found", 404)


def _request_id(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
    return request_id


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that render AppError and friends as the error envelope."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        request_id = _request_id(request)
        logger.warning(
            "AppError %s (%s) on %s %s [%s]: %s",
            exc.code, exc.status_code, request.method, request.url.path, request_id, exc.message[:500],
        )
        return error_response(exc, request_id)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        request_id = _request_id(request)
        details = [
            {"field": ".".join(str(p) for p in err.get("loc", ())[1:]), "message": err.get("msg")}
            for err in exc.errors()
        ]
        return error_response(validation_error("Invalid request data", details), request_id)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        request_id = _request_id(request)
        logger.exception("Unhandled exception [%s]: %s", request_id, exc)
        error = categorize_error(exc)
        if error.status_code >= 500 and not settings.is_production and settings.debug:
            error = AppError(error.code, str(exc), error.status_code)
        return error_response(error, request_id)
