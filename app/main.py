# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the docs lint API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   docsite-lint serve --port 8000
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    DocsLintException,
    application_error_handler,
    docslint_exception_handler,
)
from app.routers import health, lint
from app.routers.health import API_VERSION
from lib.utils import ApplicationError
from linter.checks import list_checks

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the effective configuration on startup so misconfigured
    deployments are easy to spot.
    """
    logger.info(f"Starting docs lint API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Registered checks: {', '.join(list_checks())}")
    if settings.ALLOW_DIRECTORY_LINT:
        logger.info(f"Directory linting enabled (default root: {settings.DOCS_ROOT})")

    yield

    logger.info("Shutting down docs lint API")


# Create FastAPI application
app = FastAPI(
    title="Docs Lint API",
    description="""
## Documentation Integrity Checks

Lints Markdown documentation sites before they are published.

### What Is Checked

| Check | Scope |
|-------|-------|
| **Front matter** | Every page has YAML front matter with a non-empty `title` and `description` |
| **Code blocks** | Every fenced code block has a recognised language tag and is closed |
| **Links** | Internal cross-references resolve to existing pages and headings |
| **Routes** | No two pages claim the same route or title |

### Quick Start

```bash
curl -X POST http://localhost:8000/api/v1/lint \\
  -H "Content-Type: application/json" \\
  -d '{"documents": [{"path": "index.md", "content": "---\\ntitle: Home\\ndescription: Start here\\n---\\n# Home"}]}'
```
""",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Lint",
            "description": "Lint documentation pages and list checks",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(DocsLintException)
async def handle_docslint_exception(request: Request, exc: DocsLintException):
    """Handle API exceptions."""
    return await docslint_exception_handler(request, exc)


@app.exception_handler(ApplicationError)
async def handle_application_error(request: Request, exc: ApplicationError):
    """Handle errors raised by the linter and parser."""
    return await application_error_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Lint endpoints
app.include_router(
    lint.router,
    prefix="/api/v1",
    tags=["Lint"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Docs Lint API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/api/v1/health",
        "lint": "/api/v1/lint",
    }
