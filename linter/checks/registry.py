# =============================================================================
# linter/checks/registry.py - Lint Check Registry
# =============================================================================
# Registry pattern for lint checks.
#
# Usage:
#   from linter.checks.registry import register_check, get_checks_for_scope
#
#   @register_check("front_matter_fields", description="title/description set")
#   def check_front_matter_fields(page, site, options):
#       # Return list of LintIssue
#       return issues
#
#   @register_check("route_collisions", scope=CheckScope.SITE)
#   def check_route_collisions(site, options):
#       return issues
#
#   # Get all page-level checks
#   checks = get_checks_for_scope(CheckScope.PAGE)
# =============================================================================

from __future__ import annotations

from typing import Callable

from core.models import CheckScope, LintIssue

# Page checks take: page, site, options
# Site checks take: site, options
# Both return: list of LintIssue
CheckFunc = Callable[..., list[LintIssue]]

# Registry: check_name -> (func, scope, description)
CHECK_REGISTRY: dict[str, tuple[CheckFunc, CheckScope, str]] = {}


def register_check(
    name: str,
    scope: CheckScope = CheckScope.PAGE,
    description: str = "",
):
    """
    Decorator to register a lint check function.

    Args:
        name: Unique name for this check (used in reports and --disable)
        scope: PAGE checks run once per page, SITE checks once per run
        description: One-line summary shown by `docsite-lint rules`
    """
    def decorator(func: CheckFunc) -> CheckFunc:
        if name in CHECK_REGISTRY:
            raise ValueError(f"Check '{name}' is already registered")
        CHECK_REGISTRY[name] = (func, scope, description or (func.__doc__ or "").strip().split("\n")[0])
        return func
    return decorator


def get_check(name: str) -> CheckFunc | None:
    """Get a specific check function by name."""
    entry = CHECK_REGISTRY.get(name)
    return entry[0] if entry else None


def get_checks_for_scope(scope: CheckScope | str) -> list[tuple[str, CheckFunc]]:
    """
    Get all checks registered for a scope.

    Returns list of (check_name, check_func) tuples in registration order.
    """
    scope = CheckScope(scope)
    return [
        (name, func)
        for name, (func, check_scope, _) in CHECK_REGISTRY.items()
        if check_scope == scope
    ]


def get_all_checks() -> list[tuple[str, CheckFunc]]:
    """Get all registered checks."""
    return [(name, entry[0]) for name, entry in CHECK_REGISTRY.items()]


def list_checks() -> dict[str, dict[str, str]]:
    """List all registered checks with their scope and description."""
    return {
        name: {"scope": scope.value, "description": description}
        for name, (_, scope, description) in CHECK_REGISTRY.items()
    }
