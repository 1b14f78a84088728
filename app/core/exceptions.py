"""Application-level exceptions and FastAPI exception handlers."""


import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

class ValidationError(AppException):
    """Invalid pagination parameters, unknown sort column or missing fields."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")

class QueryBuildError(AppException):
    """Raised when a paginated query cannot be built from its inputs."""

    def __init__(self, message: str):
        super().__init__(message, code="QUERY_BUILD_ERROR")

class StorageError(AppException):
    """Raised when the database rejects a query or a row cannot be read."""

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")

class EncodingError(AppException):
    """Raised when a request body or query string cannot be decoded."""

    def __init__(self, message: str):
        super().__init__(message, code="ENCODING_ERROR")

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

# Every failure is reported as a 500 with the message as plain text.
_ERROR_STATUS = 500

def _error_response(message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=_ERROR_STATUS)

def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "invalid request"

def _is_decode_error(err: dict) -> bool:
    kind = err.get("type", "")
    return kind.startswith("json_") or kind.endswith(("_parsing", "_type"))

def _classify_validation_errors(exc: RequestValidationError) -> AppException:
    """Undecodable input is an EncodingError; well-formed but invalid input is a ValidationError."""
    message = _describe_validation_errors(exc)
    if any(_is_decode_error(err) for err in exc.errors()):
        return EncodingError(message)
    return ValidationError(message)

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> PlainTextResponse:
        logger.warning("%s %s failed [%s]: %s", request.method, request.url.path, exc.code, exc.message)
        return _error_response(exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> PlainTextResponse:
        error = _classify_validation_errors(exc)
        logger.warning("%s %s rejected [%s]: %s", request.method, request.url.path, error.code, error.message)
        return _error_response(error.message)
