# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from lib.utils import ApplicationError


class DocsLintException(Exception):
    """
    Base exception for the docs lint API.

    All HTTP-facing exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "DOCSLINT_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class NoDocumentsError(DocsLintException):
    """Raised when a lint request carries no documents."""

    def __init__(self):
        super().__init__(
            message="No documents to lint",
            code="NO_DOCUMENTS",
            status_code=400,
            suggestion="Send at least one {path, content} entry in 'documents'",
        )


class TooManyDocumentsError(DocsLintException):
    """Raised when a lint request exceeds MAX_DOCUMENTS."""

    def __init__(self, count: int, max_count: int):
        super().__init__(
            message=f"Too many documents: {count} (max: {max_count})",
            code="TOO_MANY_DOCUMENTS",
            status_code=413,
            suggestion=f"Split the request into batches of at most {max_count} documents",
            details={"count": count, "max_count": max_count},
        )


class DocumentTooLargeError(DocsLintException):
    """Raised when a single document exceeds MAX_DOCUMENT_SIZE_KB."""

    def __init__(self, path: str, size_kb: float, max_kb: int):
        super().__init__(
            message=f"Document too large: {path} is {size_kb:.1f}KB (max: {max_kb}KB)",
            code="DOCUMENT_TOO_LARGE",
            status_code=413,
            suggestion=f"Split the page or keep it under {max_kb}KB",
            details={"path": path, "size_kb": size_kb, "max_kb": max_kb},
        )


class DirectoryLintDisabledError(DocsLintException):
    """Raised when directory linting is requested but not enabled."""

    def __init__(self):
        super().__init__(
            message="Directory linting is disabled on this server",
            code="DIRECTORY_LINT_DISABLED",
            status_code=403,
            suggestion="Set ALLOW_DIRECTORY_LINT=true or send the documents inline",
        )


# Status codes for library errors surfacing through the API
APPLICATION_ERROR_STATUS = {
    "DOCS_ROOT_NOT_FOUND": 404,
    "DOCUMENT_READ_ERROR": 422,
    "UNKNOWN_CHECK": 400,
}


# =============================================================================
# Exception Handlers
# =============================================================================

async def docslint_exception_handler(
    request: Request,
    exc: DocsLintException
) -> JSONResponse:
    """
    Convert DocsLintException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError
) -> JSONResponse:
    """Convert library errors (lib.utils.ApplicationError) to JSON responses."""
    content = {
        "detail": exc.message,
        "code": exc.code,
    }
    if exc.suggestion:
        content["suggestion"] = exc.suggestion
    if exc.details:
        content["details"] = exc.details

    return JSONResponse(
        status_code=APPLICATION_ERROR_STATUS.get(exc.code, 500),
        content=content
    )
