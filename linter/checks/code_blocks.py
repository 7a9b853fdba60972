# =============================================================================
# linter/checks/code_blocks.py - Fenced Code Block Checks
# =============================================================================
# Checks for code fence language tags, unterminated fences, and line
# highlight annotations such as ```cs {3-5}
# =============================================================================

from core.models import DocumentPage, LintIssue, LintOptions, Severity
from lib.markdown import parse_highlight
from linter.checks.registry import register_check


@register_check(
    "code_block_language",
    description="Every fenced code block has a recognised language tag"
)
def check_code_block_language(
    page: DocumentPage,
    site,
    options: LintOptions
) -> list[LintIssue]:
    """
    Verify each fence carries a language the site's highlighter knows.
    """
    issues = []

    for block in page.code_blocks:
        if not block.language:
            if options.allow_untagged_fences:
                continue
            issues.append(LintIssue(
                check_name="code_block_language",
                severity=Severity.ERROR,
                path=page.path,
                line=block.start_line,
                message="Code block has no language tag",
                details={"info": block.info},
                suggestion="Add a language after the opening fence, e.g. ```cs or ```text",
            ))
            continue

        if not options.is_language_allowed(block.language):
            issues.append(LintIssue(
                check_name="code_block_language",
                severity=Severity.ERROR,
                path=page.path,
                line=block.start_line,
                message=f"Unrecognised code block language '{block.language}'",
                details={"language": block.language, "info": block.info},
                suggestion="Use a supported language tag or add it to ALLOWED_LANGUAGES",
            ))

    return issues


@register_check(
    "code_block_closed",
    description="Every fenced code block is closed"
)
def check_code_block_closed(
    page: DocumentPage,
    site,
    options: LintOptions
) -> list[LintIssue]:
    """
    An unterminated fence swallows the rest of the page on render.
    """
    issues = []

    for block in page.code_blocks:
        if not block.closed:
            issues.append(LintIssue(
                check_name="code_block_closed",
                severity=Severity.ERROR,
                path=page.path,
                line=block.start_line,
                message=f"Code block opened with {block.fence} is never closed",
                details={"fence": block.fence},
                suggestion=f"Close the block with a line containing only {block.fence}",
            ))

    return issues


@register_check(
    "code_block_highlight",
    description="Line highlight annotations are valid and within the block"
)
def check_code_block_highlight(
    page: DocumentPage,
    site,
    options: LintOptions
) -> list[LintIssue]:
    """
    Validate {1,3-5} style line highlight specs.
    """
    issues = []

    for block in page.code_blocks:
        if block.highlight_spec is None:
            continue

        try:
            highlighted = parse_highlight(block.highlight_spec)
        except ValueError as e:
            issues.append(LintIssue(
                check_name="code_block_highlight",
                severity=Severity.WARNING,
                path=page.path,
                line=block.start_line,
                message=f"Malformed line highlight '{{{block.highlight_spec}}}'",
                details={"spec": block.highlight_spec, "error": str(e)},
                suggestion="Use comma separated lines and ranges, e.g. {1,3-5}",
            ))
            continue

        # Unclosed blocks are reported by code_block_closed
        if not block.closed:
            continue

        out_of_range = [n for n in highlighted if n > block.line_count]
        if out_of_range:
            issues.append(LintIssue(
                check_name="code_block_highlight",
                severity=Severity.WARNING,
                path=page.path,
                line=block.start_line,
                message=(
                    f"Line highlight references line {out_of_range[0]} "
                    f"but the block has {block.line_count} lines"
                ),
                details={
                    "spec": block.highlight_spec,
                    "line_count": block.line_count,
                    "out_of_range": out_of_range,
                },
                suggestion="Update the highlight range after editing the snippet",
            ))

    return issues
