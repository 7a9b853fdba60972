# =============================================================================
# linter/checks/structure.py - Page Structure Checks
# =============================================================================
# Heading hierarchy and admonition block checks.
# =============================================================================

from core.models import DocumentPage, LintIssue, LintOptions, Severity
from linter.checks.registry import register_check


@register_check(
    "heading_structure",
    description="Heading levels do not skip and there is at most one H1"
)
def check_heading_structure(
    page: DocumentPage,
    site,
    options: LintOptions
) -> list[LintIssue]:
    """
    Warn when a heading jumps more than one level deeper than the previous one.

    The page title comes from front matter, so a body H1 is optional; more
    than one is reported as informational.
    """
    issues = []
    previous_level = None

    for heading in page.headings:
        if previous_level is not None and heading.level > previous_level + 1:
            issues.append(LintIssue(
                check_name="heading_structure",
                severity=Severity.WARNING,
                path=page.path,
                line=heading.line,
                message=(
                    f"Heading '{heading.text}' jumps from H{previous_level} "
                    f"to H{heading.level}"
                ),
                details={"from_level": previous_level, "to_level": heading.level},
                suggestion=f"Use H{previous_level + 1} or restructure the section",
            ))
        previous_level = heading.level

    h1s = [h for h in page.headings if h.level == 1]
    if len(h1s) > 1:
        issues.append(LintIssue(
            check_name="heading_structure",
            severity=Severity.INFO,
            path=page.path,
            line=h1s[1].line,
            message=f"Page has {len(h1s)} H1 headings",
            details={"lines": [h.line for h in h1s]},
        ))

    return issues


@register_check(
    "admonitions",
    description="Admonition blocks are closed and use a known kind"
)
def check_admonitions(
    page: DocumentPage,
    site,
    options: LintOptions
) -> list[LintIssue]:
    """
    Validate :::kind containers and > [!KIND] callouts.
    """
    issues = []

    for admonition in page.admonitions:
        if not admonition.closed:
            issues.append(LintIssue(
                check_name="admonitions",
                severity=Severity.ERROR,
                path=page.path,
                line=admonition.line,
                message=f"Admonition ':::{admonition.kind}' is never closed",
                details={"kind": admonition.kind},
                suggestion="Close the block with a line containing only ':::'",
            ))

        if admonition.kind.lower() not in options.admonition_kinds:
            issues.append(LintIssue(
                check_name="admonitions",
                severity=Severity.WARNING,
                path=page.path,
                line=admonition.line,
                message=f"Unknown admonition kind '{admonition.kind}'",
                details={"kind": admonition.kind, "known": options.admonition_kinds},
                suggestion=f"Use one of: {', '.join(options.admonition_kinds)}",
            ))

    return issues
