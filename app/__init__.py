# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the lint HTTP service:
# - main.py: App entry point, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - exceptions.py: HTTP error types and handlers
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# linting to the linter/ package.
# =============================================================================
