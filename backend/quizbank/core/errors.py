"""Error handling and consistent error response format."""

import logging
import uuid
from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from quizbank.core.app_exceptions import AppError, CriteriaValidationError, SearchFailedError

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Error response envelope: {error_code, message, details, request_id}."""

    error_code: str
    message: str
    details: Any | None = None
    request_id: str | None = None


def get_request_id(request: Request) -> str:
    """Get request ID from header or generate a new one."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id
    return request_id


async def criteria_validation_exception_handler(
    request: Request, exc: CriteriaValidationError
) -> JSONResponse:
    """Handle invalid search parameters (400)."""
    request_id = get_request_id(request)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(
            error_code="VALIDATION_ERROR",
            message="Invalid search parameters",
            details=[{"issue": error} for error in exc.errors],
            request_id=request_id,
        ).model_dump(),
    )


async def search_failed_exception_handler(request: Request, exc: SearchFailedError) -> JSONResponse:
    """Handle searches that could not complete (503)."""
    request_id = get_request_id(request)
    logger.error(
        "Search failed",
        exc_info=exc.__cause__ or exc,
        extra={"request_id": request_id, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=ErrorResponse(
            error_code="SEARCH_FAILED",
            message="Unable to search questions at this time",
            request_id=request_id,
        ).model_dump(),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    request_id = get_request_id(request)

    if isinstance(exc, AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=exc.code,
                message=exc.message,
                details=exc.details,
                request_id=request_id,
            ).model_dump(),
        )

    details = None
    code = "HTTP_ERROR"
    if isinstance(exc.detail, dict):
        if "code" in exc.detail:
            code = exc.detail["code"]
            message = exc.detail.get("message", "An error occurred")
            details = exc.detail.get("details")
        else:
            details = exc.detail.copy()
            message = details.pop("message", "An error occurred")
    elif isinstance(exc.detail, str):
        message = exc.detail
    else:
        message = str(exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error_code=code,
            message=message,
            details=details,
            request_id=request_id,
        ).model_dump(),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions (500)."""
    request_id = get_request_id(request)
    logger.exception("Unhandled error", extra={"request_id": request_id})

    from quizbank.core.config import settings

    if settings.ENV == "prod":
        message = "An internal server error occurred"
        details = None
    else:
        message = str(exc)
        details = {"type": type(exc).__name__}

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error_code="INTERNAL_ERROR",
            message=message,
            details=details,
            request_id=request_id,
        ).model_dump(),
    )
