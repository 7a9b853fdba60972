# =============================================================================
# core/ - Domain Models Package
# =============================================================================
# This package contains framework-agnostic domain types:
# - models/: Pydantic schemas for parsed pages, lint options and reports
#
# Code in this package should NOT import from FastAPI or the linter.
# This keeps the models reusable from the CLI, the API and tests.
# =============================================================================
