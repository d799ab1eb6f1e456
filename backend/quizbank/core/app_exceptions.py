"""Application-specific exceptions for consistent error handling."""

from typing import Any

from fastapi import HTTPException


class AppError(HTTPException):
    """Application error with standardized error code."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        """Initialize application error."""
        super().__init__(
            status_code=status_code,
            detail={
                "code": code,
                "message": message,
                "details": details,
            },
        )
        self.code = code
        self.message = message
        self.details = details


class SearchFailedError(Exception):
    """A search could not be completed.

    Raised when counting matches or building the filter fails. The underlying
    cause is chained as ``__cause__``; callers log it and surface a generic
    message.
    """

    def __init__(self, message: str = "Search failed"):
        super().__init__(message)
        self.message = message


class CriteriaValidationError(ValueError):
    """Raw search parameters could not be turned into search criteria."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors
