# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated, Callable

from fastapi import Depends

from app.config import get_settings
from linter.engine import DocsLinter

LinterFactory = Callable[..., DocsLinter]


def get_linter_factory() -> LinterFactory:
    """
    Get a factory that builds a DocsLinter from settings plus overrides.

    A linter is cheap to create, so each request gets its own with the
    request's option overrides applied.
    """
    def factory(**overrides) -> DocsLinter:
        return DocsLinter(get_settings().lint_options(**overrides))

    return factory


# Type alias for dependency injection
LinterFactoryDep = Annotated[LinterFactory, Depends(get_linter_factory)]
