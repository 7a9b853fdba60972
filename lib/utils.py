# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import posixpath
from pathlib import Path
from typing import Any


# =============================================================================
# Path Utilities
# =============================================================================

def to_posix_relative(file_path: str | Path, root: str | Path) -> str:
    """
    Express a file path relative to a root, with POSIX separators.

    Args:
        file_path: Path under root (absolute or relative to the working directory)
        root: Docs root directory

    Returns:
        Relative path such as "guides/auth.md"

    Example:
        to_posix_relative("/site/docs/guides/auth.md", "/site/docs")  # "guides/auth.md"
    """
    # Symlinks are not followed: a linked page keeps its path inside the root
    return Path(file_path).absolute().relative_to(Path(root).absolute()).as_posix()


def normalize_doc_path(path: str) -> str:
    """
    Normalize a page path supplied by a client.

    Converts backslashes, collapses "." and "..", and strips leading "./"
    and "/". Returns "" for paths that escape the root.
    """
    cleaned = path.replace("\\", "/").strip()
    cleaned = posixpath.normpath(cleaned).lstrip("/")
    if cleaned in ("", ".") or cleaned == ".." or cleaned.startswith("../"):
        return ""
    return cleaned


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }


class DocsRootNotFoundError(ApplicationError):
    """Raised when the docs root does not exist or is not a directory."""

    def __init__(self, docs_root: str | Path):
        super().__init__(
            f"Docs root not found: {docs_root}",
            code="DOCS_ROOT_NOT_FOUND",
            suggestion="Pass the directory that contains the Markdown pages",
            details={"docs_root": str(docs_root)},
        )


class DocumentReadError(ApplicationError):
    """Raised when a page cannot be read or decoded."""

    def __init__(self, path: str | Path, error: str):
        super().__init__(
            f"Failed to read document {path}: {error}",
            code="DOCUMENT_READ_ERROR",
            suggestion="Check that the file exists and is UTF-8 encoded",
            details={"path": str(path), "error": error},
        )
