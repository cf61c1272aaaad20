"""
Custom exception classes and envelope error handling.
"""
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.constants import ErrorMessages
from app.models.api import CatalogResponse


class AppException(Exception):
    """Base application exception."""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(detail)


class BadRequestError(AppException):
    """Bad request exception."""

    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)


class InvalidRequestError(BadRequestError):
    """Unknown collection tag requested."""

    def __init__(self, detail: str = ErrorMessages.INVALID_COLLECTION):
        super().__init__(detail)


class MethodNotAllowedError(AppException):
    """HTTP method not supported by the endpoint."""

    def __init__(self, detail: str = ErrorMessages.METHOD_NOT_ALLOWED):
        super().__init__(status_code=405, detail=detail)


class InternalServerError(AppException):
    """Internal server error exception."""

    def __init__(self, detail: str = ErrorMessages.INTERNAL):
        super().__init__(status_code=500, detail=detail)


class ConfigurationError(InternalServerError):
    """Required server configuration (the upstream API key) is missing."""

    def __init__(self, detail: str = ErrorMessages.CONFIGURATION):
        super().__init__(detail)


class UpstreamError(Exception):
    """Non-success response from the YouTube Data API."""

    def __init__(self, status_code: int, body: str = "", message: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.message = message or f"YouTube API error: {status_code}"
        super().__init__(self.message)


class ChannelNotFoundError(UpstreamError):
    """The channel lookup succeeded but returned no channel."""

    def __init__(self, channel_id: str):
        super().__init__(
            status_code=404,
            body=channel_id,
            message=ErrorMessages.CHANNEL_NOT_FOUND,
        )


class NetworkError(Exception):
    """The client fetch layer could not obtain a successful response from the proxy."""


def create_error_response(status_code: int, detail: str) -> JSONResponse:
    """Create a failure envelope JSON response."""
    envelope = CatalogResponse(success=False, cached=False, error=detail)
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(by_alias=True, exclude_none=True, mode="json"),
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle AppException and return the failure envelope."""
    return create_error_response(status_code=exc.status_code, detail=exc.detail)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors (unknown method or path) as the failure envelope."""
    if exc.status_code == 405:
        detail = ErrorMessages.METHOD_NOT_ALLOWED
    else:
        detail = str(exc.detail)
    response = create_error_response(status_code=exc.status_code, detail=detail)
    if exc.headers:
        response.headers.update(exc.headers)
    return response
