# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas shared by the parser, the linter,
# the CLI and the API:
# - document.py: Parsed page (front matter, headings, code blocks, links)
# - report.py: Lint issues, check results and the overall report
# - options.py: Per-run lint options
#
# These models define the "contract" between the linter and its clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Document Models - What a parsed page looks like
# -----------------------------------------------------------------------------
from .document import (
    Admonition,
    CodeBlock,
    DocumentPage,
    FrontMatter,
    Heading,
    Link,
)

# -----------------------------------------------------------------------------
# Report Models - What a lint run produces
# -----------------------------------------------------------------------------
from .report import (
    CheckResult,
    CheckScope,
    LintIssue,
    LintReport,
    PageResult,
    SEVERITY_RANK,
    Severity,
)

# -----------------------------------------------------------------------------
# Options
# -----------------------------------------------------------------------------
from .options import (
    DEFAULT_ADMONITION_KINDS,
    DEFAULT_LANGUAGES,
    LintOptions,
)

__all__ = [
    # Document
    "Admonition",
    "CodeBlock",
    "DocumentPage",
    "FrontMatter",
    "Heading",
    "Link",
    # Report
    "CheckResult",
    "CheckScope",
    "LintIssue",
    "LintReport",
    "PageResult",
    "SEVERITY_RANK",
    "Severity",
    # Options
    "DEFAULT_ADMONITION_KINDS",
    "DEFAULT_LANGUAGES",
    "LintOptions",
]
