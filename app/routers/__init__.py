# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - lint.py: Lint endpoints and check listing
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import lint

__all__ = [
    "health",
    "lint",
]
