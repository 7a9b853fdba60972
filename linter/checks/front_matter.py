# =============================================================================
# linter/checks/front_matter.py - Front Matter Checks
# =============================================================================
# Every page must open with a YAML front matter block whose required fields
# (title and description by default) hold non-empty strings.
# =============================================================================

from core.models import DocumentPage, LintIssue, LintOptions, Severity
from linter.checks.registry import register_check


@register_check(
    "front_matter_present",
    description="Page starts with a valid YAML front matter block"
)
def check_front_matter_present(
    page: DocumentPage,
    site,
    options: LintOptions
) -> list[LintIssue]:
    """
    Verify the page has a front matter block that parses to a mapping.
    """
    front_matter = page.front_matter

    if not front_matter.present:
        return [LintIssue(
            check_name="front_matter_present",
            severity=Severity.ERROR,
            path=page.path,
            line=1,
            message="Page has no front matter block",
            suggestion="Start the file with '---', add title/description, and close with '---'",
        )]

    if front_matter.error:
        return [LintIssue(
            check_name="front_matter_present",
            severity=Severity.ERROR,
            path=page.path,
            line=1,
            message=front_matter.error,
            details={"raw": front_matter.raw[:200]},
            suggestion="Fix the YAML between the '---' delimiters",
        )]

    return []


@register_check(
    "front_matter_fields",
    description="Required front matter fields are non-empty strings"
)
def check_front_matter_fields(
    page: DocumentPage,
    site,
    options: LintOptions
) -> list[LintIssue]:
    """
    Verify each required field is present and holds a non-blank string.

    Pages with a missing or broken block are left to front_matter_present.
    """
    issues = []
    front_matter = page.front_matter

    if not front_matter.present or front_matter.error:
        return issues

    for field in options.required_fields:
        if field not in front_matter.data or front_matter.data[field] is None:
            issues.append(LintIssue(
                check_name="front_matter_fields",
                severity=Severity.ERROR,
                path=page.path,
                line=1,
                message=f"Front matter is missing '{field}'",
                details={"field": field},
                suggestion=f"Add a '{field}:' entry to the front matter",
            ))
            continue

        value = front_matter.data[field]
        if not isinstance(value, str):
            issues.append(LintIssue(
                check_name="front_matter_fields",
                severity=Severity.ERROR,
                path=page.path,
                line=1,
                message=f"Front matter '{field}' must be a string, got {type(value).__name__}",
                details={"field": field, "type": type(value).__name__},
                suggestion=f"Quote the '{field}' value",
            ))
        elif not value.strip():
            issues.append(LintIssue(
                check_name="front_matter_fields",
                severity=Severity.ERROR,
                path=page.path,
                line=1,
                message=f"Front matter '{field}' is empty",
                details={"field": field},
                suggestion=f"Give the page a meaningful {field}",
            ))

    return issues
