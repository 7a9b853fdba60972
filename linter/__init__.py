# =============================================================================
# linter/ - Documentation Linter
# =============================================================================
# This package runs documentation integrity checks:
# - checks/: Registered checks (front matter, code blocks, links, routes)
# - engine.py: DocsLinter - runs checks and builds a LintReport
# - cli.py: `docsite-lint` command line entry point
# =============================================================================

from linter.engine import DocsLinter, LinterError, lint_directory

__all__ = [
    "DocsLinter",
    "LinterError",
    "lint_directory",
]
