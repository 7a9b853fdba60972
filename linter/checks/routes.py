# =============================================================================
# linter/checks/routes.py - Site Routing Checks
# =============================================================================
# Site-wide checks: no two pages may claim the same route, and page titles
# should be unique so navigation and search results stay unambiguous.
# =============================================================================

from core.models import CheckScope, LintIssue, LintOptions, Severity
from linter.checks.registry import register_check


@register_check(
    "route_collisions",
    scope=CheckScope.SITE,
    description="No two pages map to the same route"
)
def check_route_collisions(site, options: LintOptions) -> list[LintIssue]:
    """
    Report every route claimed by more than one page.

    One issue is raised per colliding page so each file shows up in its own
    report section.
    """
    issues = []

    for route, paths in sorted(site.collisions().items()):
        for path in paths:
            others = [p for p in paths if p != path]
            issues.append(LintIssue(
                check_name="route_collisions",
                severity=Severity.ERROR,
                path=path,
                message=f"Route '{route}' is also claimed by {', '.join(others)}",
                details={"route": route, "pages": paths},
                suggestion="Rename one of the files or set a distinct 'slug' in front matter",
            ))

    return issues


@register_check(
    "title_collisions",
    scope=CheckScope.SITE,
    description="Page titles are unique across the site"
)
def check_title_collisions(site, options: LintOptions) -> list[LintIssue]:
    """
    Report titles (compared case-insensitively) used by more than one page.
    """
    issues = []
    severity = Severity.ERROR if options.title_collisions_are_errors else Severity.WARNING

    for _, paths in sorted(site.title_index().items()):
        if len(paths) < 2:
            continue
        title = site.get_page(paths[0]).title
        for path in paths:
            others = [p for p in paths if p != path]
            issues.append(LintIssue(
                check_name="title_collisions",
                severity=severity,
                path=path,
                line=1,
                message=f"Title '{title}' is also used by {', '.join(others)}",
                details={"title": title, "pages": paths},
                suggestion="Give each page a distinct title",
            ))

    return issues
