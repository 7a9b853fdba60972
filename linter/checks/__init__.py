# =============================================================================
# linter/checks/__init__.py - Lint Checks Package
# =============================================================================
# This package contains the documentation integrity checks.
#
# Usage:
#   from linter.checks import get_checks_for_scope
#
#   for name, check_func in get_checks_for_scope("page"):
#       issues = check_func(page, site, options)
# =============================================================================

from linter.checks.registry import (
    register_check,
    get_check,
    get_checks_for_scope,
    get_all_checks,
    list_checks,
    CHECK_REGISTRY,
)

# Import all check modules to trigger registration
from linter.checks import front_matter
from linter.checks import code_blocks
from linter.checks import links
from linter.checks import structure
from linter.checks import routes


__all__ = [
    # Registry functions
    "register_check",
    "get_check",
    "get_checks_for_scope",
    "get_all_checks",
    "list_checks",
    "CHECK_REGISTRY",
]
