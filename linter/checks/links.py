# =============================================================================
# linter/checks/links.py - Cross-Reference Checks
# =============================================================================
# Internal links must resolve to an existing page (or asset), and links with
# a #fragment must point at a heading that exists on the target page.
# External links (http:, mailto:, ...) are not fetched.
# =============================================================================

from core.models import DocumentPage, LintIssue, LintOptions, Severity
from linter.checks.registry import register_check


@register_check(
    "internal_links",
    description="Internal links resolve to existing pages and headings"
)
def check_internal_links(
    page: DocumentPage,
    site,
    options: LintOptions
) -> list[LintIssue]:
    """
    Resolve every internal link on the page against the site.
    """
    issues = []

    for link in page.links:
        if link.is_external or not link.target.strip():
            continue

        resolved = site.resolve_link(page, link)

        if resolved.kind == "missing":
            kind = "Image" if link.is_image else "Link"
            issues.append(LintIssue(
                check_name="internal_links",
                severity=Severity.ERROR,
                path=page.path,
                line=link.line,
                message=f"{kind} target '{link.target}' does not exist",
                details={"target": link.target, "resolved_path": resolved.target_path},
                suggestion="Fix the path or create the missing page",
            ))
            continue

        if resolved.kind == "unverifiable":
            issues.append(LintIssue(
                check_name="internal_links",
                severity=Severity.INFO,
                path=page.path,
                line=link.line,
                message=f"Could not verify asset '{link.target}'",
                details={"target": link.target, "resolved_path": resolved.target_path},
            ))
            continue

        if resolved.kind == "page" and resolved.anchor and resolved.page is not None:
            if resolved.anchor.lower() not in {a.lower() for a in resolved.page.anchors}:
                issues.append(LintIssue(
                    check_name="internal_links",
                    severity=Severity.WARNING,
                    path=page.path,
                    line=link.line,
                    message=f"Anchor '#{resolved.anchor}' not found in {resolved.page.path}",
                    details={
                        "target": link.target,
                        "anchor": resolved.anchor,
                        "target_page": resolved.page.path,
                    },
                    suggestion="Link to an existing heading slug",
                ))

    return issues
