"""
Module 10 - API Error Handling

Standardized error handling for the API. Core AnchorExceptions are mapped
to HTTP statuses by their error code.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import AnchorException, ErrorCodes


# HTTP status per core error code; unknown codes map to 400
STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.INVALID_RANGE: 400,
    ErrorCodes.OUT_OF_RANGE: 400,
    ErrorCodes.NOT_FOUND: 404,
    ErrorCodes.NOTHING_PENDING: 409,
    ErrorCodes.LIMIT_EXCEEDED: 422,
    ErrorCodes.UNAUTHORIZED: 403,
    ErrorCodes.MERKLE_PROOF_INVALID: 400,
    ErrorCodes.CANONICALIZATION_ERROR: 500,
    ErrorCodes.SNAPSHOT_STORE_CORRUPT: 500,
    ErrorCodes.LEDGER_CORRUPT: 500,
}


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


class ServiceUnavailableError(APIError):
    """The anchor service is not configured."""

    def __init__(self, message: str = "Anchor service is not configured"):
        super().__init__(
            code="SERVICE_UNAVAILABLE",
            message=message,
            status_code=503,
        )


def status_for(exc: AnchorException) -> int:
    return STATUS_BY_CODE.get(exc.code, 400)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def anchor_error_handler(request: Request, exc: AnchorException) -> JSONResponse:
    """Handle core AnchorException subclasses."""
    return JSONResponse(
        status_code=status_for(exc),
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(**exc.to_error_model().model_dump()),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
