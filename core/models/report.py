# =============================================================================
# core/models/report.py - Lint Result Schemas
# =============================================================================
# This module defines what a lint run produces:
# - LintIssue: a single problem found by a check
# - CheckResult: outcome of one check across the site
# - PageResult: issues grouped per page
# - LintReport: the overall result with summary and timing
#
# Example:
#   report = DocsLinter().lint_directory("docs")
#   if not report.passed:
#       print(report.format_for_display())
# =============================================================================

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Severity level for issues and overall result."""
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class CheckScope(str, Enum):
    """What a check inspects: one page at a time, or the whole site."""
    PAGE = "page"
    SITE = "site"


SEVERITY_RANK = {
    Severity.SUCCESS: 0,
    Severity.INFO: 1,
    Severity.WARNING: 2,
    Severity.ERROR: 3,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LintIssue(BaseModel):
    """
    A specific problem found by a check.

    `path` is None for site-wide issues that are not tied to one page.
    """

    check_name: str = Field(
        ...,
        description="Name of the check that found this issue"
    )

    severity: Severity = Field(
        ...,
        description="How serious is this issue"
    )

    path: str | None = Field(
        default=None,
        description="Page affected, relative to the docs root"
    )

    line: int | None = Field(
        default=None,
        description="1-based line number, if applicable"
    )

    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )

    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional context for debugging"
    )

    suggestion: str | None = Field(
        default=None,
        description="Suggested action to fix this issue"
    )

    @property
    def location(self) -> str:
        if self.path and self.line:
            return f"{self.path}:{self.line}"
        return self.path or "<site>"


class CheckResult(BaseModel):
    """Result from a single check."""

    check_name: str = Field(
        ...,
        description="Name of the check"
    )

    scope: CheckScope = Field(
        default=CheckScope.PAGE,
        description="Whether the check ran per page or once for the site"
    )

    passed: bool = Field(
        ...,
        description="Whether this check passed"
    )

    issues: list[LintIssue] = Field(
        default_factory=list,
        description="Issues found by this check"
    )

    execution_time_ms: float = Field(
        default=0.0,
        description="Time taken to run this check"
    )


class PageResult(BaseModel):
    """Issues grouped for one page."""
    path: str
    route: str = ""
    passed: bool = True
    issues: list[LintIssue] = Field(default_factory=list)


class LintReport(BaseModel):
    """
    Result of linting a documentation site.

    Returned by DocsLinter.lint_site() and serialized as-is by the API and
    the `--format json` CLI output.
    """

    # -------------------------------------------------------------------------
    # Overall Status
    # -------------------------------------------------------------------------

    passed: bool = Field(
        ...,
        description="Whether the site has no blocking issues"
    )

    severity: Severity = Field(
        ...,
        description="Overall severity: success, warning, or error"
    )

    docs_root: str | None = Field(
        default=None,
        description="Directory that was linted (None for in-memory sources)"
    )

    pages_checked: int = Field(
        default=0,
        ge=0,
        description="Number of pages linted"
    )

    # -------------------------------------------------------------------------
    # Check Results
    # -------------------------------------------------------------------------

    checks_run: list[str] = Field(
        default_factory=list,
        description="Names of all checks that were run"
    )

    checks_passed: list[str] = Field(
        default_factory=list,
        description="Names of checks that passed"
    )

    checks_failed: list[str] = Field(
        default_factory=list,
        description="Names of checks that failed"
    )

    check_results: list[CheckResult] = Field(
        default_factory=list,
        description="Detailed results from each check"
    )

    page_results: list[PageResult] = Field(
        default_factory=list,
        description="Issues grouped per page"
    )

    # -------------------------------------------------------------------------
    # Issues
    # -------------------------------------------------------------------------

    issues: list[LintIssue] = Field(
        default_factory=list,
        description="All issues found, ordered by path and line"
    )

    warnings: list[str] = Field(
        default_factory=list,
        description="Warning messages (convenience accessor)"
    )

    errors: list[str] = Field(
        default_factory=list,
        description="Error messages (convenience accessor)"
    )

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    summary: str = Field(
        default="",
        description="Human-readable summary of the lint result"
    )

    suggestion: str | None = Field(
        default=None,
        description="Suggested next action if issues found"
    )

    # -------------------------------------------------------------------------
    # Timing
    # -------------------------------------------------------------------------

    linted_at: datetime = Field(
        default_factory=_utcnow,
        description="When the lint run was performed"
    )

    lint_time_ms: float = Field(
        default=0.0,
        ge=0.0,
        description="Total lint time in milliseconds"
    )

    # -------------------------------------------------------------------------
    # Helper Methods
    # -------------------------------------------------------------------------

    def has_errors(self) -> bool:
        """Check if any error-level issues exist."""
        return any(issue.severity == Severity.ERROR for issue in self.issues)

    def has_warnings(self) -> bool:
        """Check if any warning-level issues exist."""
        return any(issue.severity == Severity.WARNING for issue in self.issues)

    def get_issues_by_severity(self, severity: Severity) -> list[LintIssue]:
        """Get all issues of a specific severity."""
        return [i for i in self.issues if i.severity == severity]

    def get_issues_by_path(self, path: str) -> list[LintIssue]:
        """Get all issues for a specific page."""
        return [i for i in self.issues if i.path == path]

    def get_issues_by_check(self, check_name: str) -> list[LintIssue]:
        return [i for i in self.issues if i.check_name == check_name]

    def format_for_display(self) -> str:
        """Format the report for terminal display."""
        if self.passed and not self.has_warnings():
            icon = "✅"
            status = "Passed"
        elif self.passed:
            icon = "⚠️"
            status = "Passed with warnings"
        else:
            icon = "❌"
            status = "Failed"

        lines = [f"Docs Lint: {icon} {status} ({self.pages_checked} pages)"]

        for issue in self.issues:
            icon = "⚠️" if issue.severity == Severity.WARNING else "❌" if issue.severity == Severity.ERROR else "ℹ️"
            lines.append(f"  - {icon} {issue.location} [{issue.check_name}] {issue.message}")

        if self.summary:
            lines.append(f"  {self.summary}")

        if self.suggestion:
            lines.append(f"  → {self.suggestion}")

        return "\n".join(lines)
