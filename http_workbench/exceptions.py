"""
Custom exception classes and error handling for HTTP Workbench.

Every error raised by the dispatcher, the history store or the highlighter
is an APIException and is rendered as ``{"detail": ..., "error_code": ...}``.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from loguru import logger
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""
    detail: str
    error_code: str | None = None


class APIException(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        detail: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str | None = None
    ):
        self.detail = detail
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(detail)


class BadRequestError(APIException):
    """Exception raised for invalid request data."""

    def __init__(self, detail: str):
        super().__init__(
            detail=detail,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="BAD_REQUEST"
        )


class InvalidHeaderError(APIException):
    """Exception raised when a header name or value is malformed. Raised before any network I/O."""

    def __init__(self, detail: str):
        super().__init__(
            detail=detail,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="INVALID_HEADER"
        )


class NetworkError(APIException):
    """Exception raised when a network error occurs during request dispatch."""

    def __init__(self, detail: str):
        super().__init__(
            detail=detail,
            status_code=status.HTTP_502_BAD_GATEWAY,
            error_code="NETWORK_ERROR"
        )


class StoreError(APIException):
    """Exception raised when the history store cannot be opened, created, read or written."""

    def __init__(self, detail: str = "History store error occurred"):
        super().__init__(
            detail=detail,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="STORE_ERROR"
        )


class UnknownLanguageError(APIException):
    """Exception raised when no grammar matches the requested language."""

    def __init__(self, language: str):
        self.language = language
        super().__init__(
            detail=f"No grammar found for language '{language}'",
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="UNKNOWN_LANGUAGE"
        )


class RenderError(APIException):
    """Exception raised when tokenizing a recognised language fails."""

    def __init__(self, detail: str):
        super().__init__(
            detail=detail,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="RENDER_ERROR"
        )


class SerializationError(APIException):
    """Exception raised when an argument bundle or a stored row cannot be decoded."""

    def __init__(self, detail: str):
        super().__init__(
            detail=detail,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            error_code="SERIALIZATION_ERROR"
        )


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """Handler for custom API exceptions."""
    logger.warning("{} {} failed: {} ({})", request.method, request.url.path, exc.detail, exc.error_code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error_code": exc.error_code}
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handler for Pydantic validation errors."""
    errors = exc.errors()
    # Format validation errors into a readable message
    error_messages = []
    for error in errors:
        loc = " -> ".join(str(l) for l in error["loc"])
        msg = error["msg"]
        error_messages.append(f"{loc}: {msg}")

    detail = "; ".join(error_messages) if error_messages else "Validation error"

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": detail, "error_code": "VALIDATION_ERROR"}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
