"""
API Error Handling

Standardized error handling for the API.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import ErrorCodes, ReserveException


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class NotFoundError(APIError):
    """Requested record does not exist."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code=ErrorCodes.NOT_FOUND,
            message=message,
            status_code=404,
            details=details,
        )


# Status codes for core exceptions that reach the boundary
_RESERVE_STATUS = {
    ErrorCodes.NOT_FOUND: 404,
    ErrorCodes.INVALID_ENCODING: 400,
    ErrorCodes.CONFIG_ERROR: 500,
}


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def reserve_error_handler(request: Request, exc: ReserveException) -> JSONResponse:
    """Map core exceptions to status codes using their error code."""
    model = exc.to_error_model()
    return JSONResponse(
        status_code=_RESERVE_STATUS.get(exc.code, 500),
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=model.code,
                message=model.message,
                details=model.details,
            ),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=ErrorCodes.INTERNAL_ERROR,
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
