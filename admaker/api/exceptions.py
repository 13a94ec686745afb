"""
API errors and their JSON rendering.

Every error body has the same shape: ``{"error", "detail", "code",
"status_code"}``. Gateway and studio failures are translated into the
classes below by the routes; anything else falls through to the generic
500 handler.
"""
import logging
from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    code: str
    status_code: int


class APIError(Exception):
    """Error with a fixed HTTP status and machine-readable code."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "API_ERROR"

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error=self.message,
            detail=self.detail,
            code=self.code,
            status_code=self.status_code,
        )


class ValidationError(APIError):
    """Missing or invalid input; nothing was sent to a provider."""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class SessionNotFoundError(APIError):
    """Unknown, discarded or evicted studio session (or one of another kind)."""
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")


class AudioNotFoundError(APIError):
    """The session has no narration under that name yet."""
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, name: str):
        super().__init__(f"No {name} narration for this session")


class ConflictError(APIError):
    """A flow was started while it is still generating."""
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class InternalError(APIError):
    """Provider failure, reported with a fixed message."""
    code = "INTERNAL_ERROR"

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are reported like any other missing input."""
    return await api_error_handler(request, ValidationError("Invalid request body"))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            detail=str(exc) if request.app.debug else None,
            code="INTERNAL_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        ).model_dump(),
    )
