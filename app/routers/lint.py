# =============================================================================
# app/routers/lint.py - Lint Endpoints
# =============================================================================
# Endpoints for linting documentation pages:
#
#   GET  /checks          - List registered checks
#   POST /lint            - Lint pages sent in the request body
#   POST /lint/directory  - Lint a directory on the server (opt-in)
# =============================================================================

import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.config import settings
from app.dependencies import LinterFactoryDep
from app.exceptions import (
    DirectoryLintDisabledError,
    DocumentTooLargeError,
    NoDocumentsError,
    TooManyDocumentsError,
)
from core.models import LintReport
from linter.checks import list_checks

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Request / Response Models
# =============================================================================

class DocumentSource(BaseModel):
    """A page sent inline for linting."""
    path: str = Field(..., min_length=1, description="Path relative to the docs root, e.g. 'guides/auth.md'")
    content: str = Field(..., description="Full Markdown source including front matter")


class LintOptionsOverride(BaseModel):
    """Per-request overrides on top of the server's configured options."""
    strict: bool | None = None
    allow_untagged_fences: bool | None = None
    disabled_checks: list[str] | None = None
    required_fields: list[str] | None = None
    title_collisions_are_errors: bool | None = None


class LintRequest(BaseModel):
    """Request body for POST /lint."""
    documents: list[DocumentSource] = Field(default_factory=list)
    options: LintOptionsOverride | None = None


class DirectoryLintRequest(BaseModel):
    """Request body for POST /lint/directory."""
    docs_root: str | None = Field(
        default=None,
        description="Directory to lint; defaults to DOCS_ROOT"
    )
    options: LintOptionsOverride | None = None


class CheckInfo(BaseModel):
    name: str
    scope: str
    description: str


class CheckListResponse(BaseModel):
    checks: list[CheckInfo]
    count: int


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/checks", response_model=CheckListResponse)
async def get_checks():
    """
    List all registered checks.

    Use the names with `disabled_checks` to skip individual checks.
    """
    checks = [
        CheckInfo(name=name, scope=info["scope"], description=info["description"])
        for name, info in list_checks().items()
    ]
    return CheckListResponse(checks=checks, count=len(checks))


@router.post("/lint", response_model=LintReport)
async def lint_documents(request: LintRequest, linter_factory: LinterFactoryDep):
    """
    Lint documentation pages sent inline.

    Cross-page checks (links, routes, titles) only see the pages included in
    the request, so send the whole site to get complete results.
    """
    if not request.documents:
        raise NoDocumentsError()

    if len(request.documents) > settings.MAX_DOCUMENTS:
        raise TooManyDocumentsError(len(request.documents), settings.MAX_DOCUMENTS)

    sources: dict[str, str] = {}
    for document in request.documents:
        size = len(document.content.encode("utf-8"))
        if size > settings.max_document_size_bytes:
            raise DocumentTooLargeError(document.path, size / 1024, settings.MAX_DOCUMENT_SIZE_KB)
        sources[document.path] = document.content

    overrides = request.options.model_dump(exclude_none=True) if request.options else {}
    linter = linter_factory(**overrides)

    logger.info(f"Linting {len(sources)} inline documents")
    return linter.lint_sources(sources)


@router.post("/lint/directory", response_model=LintReport)
async def lint_directory(request: DirectoryLintRequest, linter_factory: LinterFactoryDep):
    """
    Lint a documentation directory on the server.

    Disabled unless ALLOW_DIRECTORY_LINT is set.
    """
    if not settings.ALLOW_DIRECTORY_LINT:
        raise DirectoryLintDisabledError()

    overrides = request.options.model_dump(exclude_none=True) if request.options else {}
    linter = linter_factory(**overrides)

    docs_root = request.docs_root or settings.DOCS_ROOT
    logger.info(f"Linting directory {docs_root}")
    return linter.lint_directory(docs_root)
