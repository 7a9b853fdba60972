# =============================================================================
# linter/engine.py - Documentation Linter
# =============================================================================
# This module runs the registered checks over a documentation site and
# assembles a LintReport.
#
# The linter's job:
# 1. Run every page check on every page
# 2. Run every site check once (routing table, title index)
# 3. Isolate failures: a crashing check becomes an error issue
# 4. Produce a pass/fail verdict, summary and suggestion
#
# Usage:
#   from linter.engine import DocsLinter
#   linter = DocsLinter()
#   report = linter.lint_directory("docs")
#   if not report.passed:
#       print(report.format_for_display())
# =============================================================================

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

from core.models import (
    CheckResult,
    CheckScope,
    LintIssue,
    LintOptions,
    LintReport,
    PageResult,
    SEVERITY_RANK,
    Severity,
)
from lib.site import DocumentSite
from lib.utils import ApplicationError
from linter.checks import get_all_checks, get_checks_for_scope

# Set up logging
logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================

class LinterError(ApplicationError):
    """Error while setting up a lint run."""

    def __init__(
        self,
        message: str,
        code: str = "LINTER_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


def _issue_sort_key(issue: LintIssue) -> tuple:
    return (
        issue.path is None,
        issue.path or "",
        issue.line or 0,
        issue.check_name,
    )


# =============================================================================
# Docs Linter
# =============================================================================

class DocsLinter:
    """
    Runs documentation integrity checks.

    Example:
        linter = DocsLinter(LintOptions(strict=True))

        report = linter.lint_directory("docs")
        if report.passed:
            print("✅ Docs are clean")
        else:
            print(report.format_for_display())
    """

    def __init__(self, options: LintOptions | None = None):
        """
        Initialize the linter.

        Args:
            options: Lint options; defaults apply when None

        Raises:
            LinterError: If a disabled check name is not registered
        """
        self.options = options or LintOptions()

        known = {name for name, _ in get_all_checks()}
        unknown = sorted(set(self.options.disabled_checks) - known)
        if unknown:
            raise LinterError(
                f"Unknown check(s): {', '.join(unknown)}",
                code="UNKNOWN_CHECK",
                suggestion="Run `docsite-lint rules` to list available checks",
                details={"unknown": unknown, "known": sorted(known)},
            )

        logger.info(f"DocsLinter initialized (strict={self.options.strict})")

    # -------------------------------------------------------------------------
    # Entry Points
    # -------------------------------------------------------------------------

    def lint_directory(self, docs_root: str | Path) -> LintReport:
        """
        Lint every page under a directory.

        Raises:
            DocsRootNotFoundError: If docs_root is not a directory
            DocumentReadError: If a page cannot be decoded
        """
        site = DocumentSite.from_directory(docs_root, self.options)
        return self.lint_site(site)

    def lint_sources(self, sources: dict[str, str]) -> LintReport:
        """Lint in-memory pages keyed by their path relative to the root."""
        site = DocumentSite.from_sources(sources, self.options)
        return self.lint_site(site)

    def quick_lint(self, docs_root: str | Path) -> tuple[bool, str]:
        """
        Lint a directory returning just pass/fail and summary.

        Returns:
            Tuple of (passed, summary_message)
        """
        report = self.lint_directory(docs_root)
        return report.passed, report.summary

    def lint_site(self, site: DocumentSite) -> LintReport:
        """
        Run all enabled checks over a site.

        Returns:
            LintReport with pass/fail status and detailed issues
        """
        start_time = time.time()
        logger.info(f"Linting {len(site)} pages")

        check_results: list[CheckResult] = []

        for check_name, check_func in get_checks_for_scope(CheckScope.PAGE):
            if not self.options.is_enabled(check_name):
                logger.debug(f"Skipping disabled check '{check_name}'")
                continue
            check_results.append(self._run_page_check(check_name, check_func, site))

        for check_name, check_func in get_checks_for_scope(CheckScope.SITE):
            if not self.options.is_enabled(check_name):
                logger.debug(f"Skipping disabled check '{check_name}'")
                continue
            check_results.append(self._run_site_check(check_name, check_func, site))

        all_issues = sorted(
            (issue for result in check_results for issue in result.issues),
            key=_issue_sort_key,
        )

        checks_passed = [r.check_name for r in check_results if r.passed]
        checks_failed = [r.check_name for r in check_results if not r.passed]

        # Determine overall status
        has_errors = any(i.severity == Severity.ERROR for i in all_issues)
        has_warnings = any(i.severity == Severity.WARNING for i in all_issues)

        if has_errors:
            passed = False
            severity = Severity.ERROR
        elif has_warnings:
            passed = not self.options.strict
            severity = Severity.WARNING
        else:
            passed = True
            severity = Severity.SUCCESS

        page_results = self._group_by_page(site, all_issues)

        summary = self._generate_summary(passed, len(site), page_results, all_issues)
        suggestion = self._generate_suggestion(all_issues)

        warnings = [f"{i.location}: {i.message}" for i in all_issues if i.severity == Severity.WARNING]
        errors = [f"{i.location}: {i.message}" for i in all_issues if i.severity == Severity.ERROR]

        lint_time = (time.time() - start_time) * 1000
        logger.info(f"Lint finished in {lint_time:.1f}ms: {summary}")

        return LintReport(
            passed=passed,
            severity=severity,
            docs_root=str(site.docs_root) if site.docs_root is not None else None,
            pages_checked=len(site),
            checks_run=[r.check_name for r in check_results],
            checks_passed=checks_passed,
            checks_failed=checks_failed,
            check_results=check_results,
            page_results=page_results,
            issues=all_issues,
            warnings=warnings,
            errors=errors,
            summary=summary,
            suggestion=suggestion,
            lint_time_ms=lint_time,
        )

    # -------------------------------------------------------------------------
    # Check Execution
    # -------------------------------------------------------------------------

    def _check_passed(self, issues: list[LintIssue]) -> bool:
        has_errors = any(i.severity == Severity.ERROR for i in issues)
        has_warnings = any(i.severity == Severity.WARNING for i in issues)
        if self.options.strict:
            return not has_errors and not has_warnings
        return not has_errors

    def _crash_issue(self, check_name: str, error: Exception, path: str | None = None) -> LintIssue:
        return LintIssue(
            check_name=check_name,
            severity=Severity.ERROR,
            path=path,
            message=f"Check failed with error: {error}",
            details={"error": str(error), "error_type": type(error).__name__},
            suggestion=f"Disable '{check_name}' and report the failure",
        )

    def _run_page_check(self, check_name, check_func, site: DocumentSite) -> CheckResult:
        check_start = time.time()
        issues: list[LintIssue] = []

        for page in site:
            try:
                issues.extend(check_func(page, site, self.options))
            except Exception as e:
                logger.error(f"Check '{check_name}' failed on {page.path}: {e}")
                issues.append(self._crash_issue(check_name, e, page.path))

        return CheckResult(
            check_name=check_name,
            scope=CheckScope.PAGE,
            passed=self._check_passed(issues),
            issues=issues,
            execution_time_ms=(time.time() - check_start) * 1000,
        )

    def _run_site_check(self, check_name, check_func, site: DocumentSite) -> CheckResult:
        check_start = time.time()

        try:
            issues = check_func(site, self.options)
        except Exception as e:
            logger.error(f"Check '{check_name}' failed with error: {e}")
            issues = [self._crash_issue(check_name, e)]

        return CheckResult(
            check_name=check_name,
            scope=CheckScope.SITE,
            passed=self._check_passed(issues),
            issues=issues,
            execution_time_ms=(time.time() - check_start) * 1000,
        )

    # -------------------------------------------------------------------------
    # Report Helpers
    # -------------------------------------------------------------------------

    def _group_by_page(self, site: DocumentSite, issues: list[LintIssue]) -> list[PageResult]:
        grouped: dict[str, list[LintIssue]] = {page.path: [] for page in site}
        for issue in issues:
            if issue.path in grouped:
                grouped[issue.path].append(issue)

        return [
            PageResult(
                path=path,
                route=site.get_page(path).route,
                passed=self._check_passed(page_issues),
                issues=page_issues,
            )
            for path, page_issues in grouped.items()
        ]

    def _generate_summary(
        self,
        passed: bool,
        page_count: int,
        page_results: list[PageResult],
        issues: list[LintIssue],
    ) -> str:
        if page_count == 0:
            return "No documentation pages found"

        errors = sum(1 for i in issues if i.severity == Severity.ERROR)
        warnings = sum(1 for i in issues if i.severity == Severity.WARNING)

        if not errors and not warnings:
            return f"All {page_count} pages passed"

        affected = sum(
            1 for r in page_results
            if any(i.severity in (Severity.ERROR, Severity.WARNING) for i in r.issues)
        )

        parts = []
        if errors:
            parts.append(f"{errors} error{'s' if errors != 1 else ''}")
        if warnings:
            parts.append(f"{warnings} warning{'s' if warnings != 1 else ''}")

        verdict = "Passed" if passed else "Failed"
        return f"{verdict}: {' and '.join(parts)} across {affected} of {page_count} pages"

    def _generate_suggestion(self, issues: list[LintIssue]) -> str | None:
        actionable = [
            i for i in issues
            if i.suggestion and i.severity in (Severity.ERROR, Severity.WARNING)
        ]
        if not actionable:
            return None

        worst = max(actionable, key=lambda i: SEVERITY_RANK[i.severity])
        return f"{worst.location}: {worst.suggestion}"


def lint_directory(docs_root: str | Path, options: LintOptions | None = None) -> LintReport:
    """
    Convenience function to lint a directory without managing a linter.

    Example:
        report = lint_directory("docs")
        print(report.summary)
    """
    return DocsLinter(options).lint_directory(docs_root)
