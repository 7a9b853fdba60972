# =============================================================================
# tests/test_checks.py - Tests for Lint Checks
# =============================================================================

import pytest

from core.models import CheckScope, LintOptions, Severity
from lib.site import DocumentSite
from linter.checks import get_all_checks, get_check, get_checks_for_scope, list_checks
from tests.conftest import make_page


# =============================================================================
# Helpers
# =============================================================================

def run_page_check(name: str, sources: dict[str, str], path: str, options: LintOptions | None = None):
    """Build a site from sources and run one page check on one page."""
    options = options or LintOptions()
    site = DocumentSite.from_sources(sources, options)
    return get_check(name)(site.get_page(path), site, options)


def run_site_check(name: str, sources: dict[str, str], options: LintOptions | None = None):
    options = options or LintOptions()
    site = DocumentSite.from_sources(sources, options)
    return get_check(name)(site, options)


# =============================================================================
# Registry Tests
# =============================================================================

class TestRegistry:
    """Tests for the check registry."""

    def test_checks_registered(self):
        checks = list_checks()

        for name in [
            "front_matter_present",
            "front_matter_fields",
            "code_block_language",
            "code_block_closed",
            "code_block_highlight",
            "internal_links",
            "heading_structure",
            "admonitions",
            "route_collisions",
            "title_collisions",
        ]:
            assert name in checks

    def test_scopes(self):
        site_checks = [name for name, _ in get_checks_for_scope(CheckScope.SITE)]
        page_checks = [name for name, _ in get_checks_for_scope("page")]

        assert site_checks == ["route_collisions", "title_collisions"]
        assert "internal_links" in page_checks
        assert "route_collisions" not in page_checks

    def test_descriptions_present(self):
        for info in list_checks().values():
            assert info["description"]

    def test_unknown_check(self):
        assert get_check("no_such_check") is None

    def test_all_checks_cover_both_scopes(self):
        names = [name for name, _ in get_all_checks()]

        assert names == list(list_checks())
        assert len(names) == len(get_checks_for_scope("page")) + len(get_checks_for_scope("site"))


# =============================================================================
# Front Matter Checks
# =============================================================================

class TestFrontMatterChecks:
    """Tests for front_matter_present and front_matter_fields."""

    def test_valid_page_has_no_issues(self):
        sources = {"a.md": make_page("Title", "Description")}

        assert run_page_check("front_matter_present", sources, "a.md") == []
        assert run_page_check("front_matter_fields", sources, "a.md") == []

    def test_missing_block(self):
        issues = run_page_check("front_matter_present", {"a.md": "# No front matter\n"}, "a.md")

        assert len(issues) == 1
        assert issues[0].severity == Severity.ERROR
        assert issues[0].line == 1

    def test_broken_yaml(self):
        issues = run_page_check("front_matter_present", {"a.md": "---\ntitle: [x\n---\n"}, "a.md")
        assert len(issues) == 1
        assert "Invalid YAML" in issues[0].message

    def test_fields_check_skips_broken_block(self):
        assert run_page_check("front_matter_fields", {"a.md": "# none\n"}, "a.md") == []

    def test_missing_description(self):
        issues = run_page_check("front_matter_fields", {"a.md": make_page("Title", None)}, "a.md")

        assert len(issues) == 1
        assert issues[0].details["field"] == "description"
        assert "missing" in issues[0].message

    def test_blank_title(self):
        issues = run_page_check("front_matter_fields", {"a.md": "---\ntitle: '  '\ndescription: d\n---\n"}, "a.md")

        assert len(issues) == 1
        assert "empty" in issues[0].message

    def test_non_string_field(self):
        issues = run_page_check("front_matter_fields", {"a.md": "---\ntitle: [a, b]\ndescription: d\n---\n"}, "a.md")

        assert len(issues) == 1
        assert issues[0].details["type"] == "list"

    def test_null_field_counts_as_missing(self):
        issues = run_page_check("front_matter_fields", {"a.md": "---\ntitle:\ndescription: d\n---\n"}, "a.md")
        assert "missing" in issues[0].message

    def test_custom_required_fields(self):
        options = LintOptions(required_fields=["title", "sidebar_label"])
        issues = run_page_check("front_matter_fields", {"a.md": make_page("T", "D")}, "a.md", options)

        assert [i.details["field"] for i in issues] == ["sidebar_label"]


# =============================================================================
# Code Block Checks
# =============================================================================

class TestCodeBlockChecks:
    """Tests for code block checks."""

    def test_known_language(self):
        sources = {"a.md": make_page(body="```CS\nvar x = 1;\n```\n")}
        assert run_page_check("code_block_language", sources, "a.md") == []

    def test_untagged(self):
        sources = {"a.md": make_page(body="```\nplain\n```\n")}
        issues = run_page_check("code_block_language", sources, "a.md")

        assert len(issues) == 1
        assert "no language" in issues[0].message
        assert issues[0].line == 5

    def test_untagged_allowed(self):
        sources = {"a.md": make_page(body="```\nplain\n```\n")}
        options = LintOptions(allow_untagged_fences=True)
        assert run_page_check("code_block_language", sources, "a.md", options) == []

    def test_unknown_language(self):
        sources = {"a.md": make_page(body="```cobol\nDISPLAY 'HI'.\n```\n")}
        issues = run_page_check("code_block_language", sources, "a.md")

        assert len(issues) == 1
        assert issues[0].details["language"] == "cobol"

    def test_extra_language_allowed(self):
        sources = {"a.md": make_page(body="```cobol\nDISPLAY 'HI'.\n```\n")}
        options = LintOptions(allowed_languages=["COBOL"])
        assert run_page_check("code_block_language", sources, "a.md", options) == []

    def test_unclosed(self):
        sources = {"a.md": make_page(body="```cs\nvar x = 1;\n")}
        issues = run_page_check("code_block_closed", sources, "a.md")

        assert len(issues) == 1
        assert issues[0].severity == Severity.ERROR

    def test_highlight_in_range(self):
        sources = {"a.md": make_page(body="```cs {1-2}\na\nb\n```\n")}
        assert run_page_check("code_block_highlight", sources, "a.md") == []

    def test_highlight_out_of_range(self):
        sources = {"a.md": make_page(body="```cs {2,5}\na\nb\n```\n")}
        issues = run_page_check("code_block_highlight", sources, "a.md")

        assert len(issues) == 1
        assert issues[0].severity == Severity.WARNING
        assert issues[0].details["out_of_range"] == [5]

    def test_highlight_malformed(self):
        sources = {"a.md": make_page(body="```cs {3-1}\na\nb\nc\n```\n")}
        issues = run_page_check("code_block_highlight", sources, "a.md")

        assert len(issues) == 1
        assert "Malformed" in issues[0].message


# =============================================================================
# Link Checks
# =============================================================================

class TestInternalLinks:
    """Tests for internal_links."""

    @pytest.fixture
    def sources(self):
        return {
            "index.md": make_page("Home", body=(
                "# Home\n\n"
                "[ok](guides/auth.md#jwt-tokens) "
                "[bad anchor](guides/auth.md#cookies) "
                "[missing](nope.md) "
                "[external](https://fast-endpoints.com) "
                "[mail](mailto:team@example.com) "
                "![logo](img/logo.png)\n"
            )),
            "guides/auth.md": make_page("Auth", body="# Auth\n\n## JWT Tokens\n\n[back](../index.md)\n"),
        }

    def test_issues(self, sources):
        issues = run_page_check("internal_links", sources, "index.md")
        by_severity = {}
        for issue in issues:
            by_severity.setdefault(issue.severity, []).append(issue)

        assert len(by_severity[Severity.ERROR]) == 1
        assert by_severity[Severity.ERROR][0].details["target"] == "nope.md"

        assert len(by_severity[Severity.WARNING]) == 1
        assert by_severity[Severity.WARNING][0].details["anchor"] == "cookies"

        assert len(by_severity[Severity.INFO]) == 1
        assert by_severity[Severity.INFO][0].details["target"] == "img/logo.png"

    def test_clean_page(self, sources):
        assert run_page_check("internal_links", sources, "guides/auth.md") == []

    def test_anchor_match_is_case_insensitive(self):
        sources = {"a.md": make_page(body="## Setup\n\n[s](#Setup)\n")}
        assert run_page_check("internal_links", sources, "a.md") == []

    def test_missing_image_is_error(self, write_docs):
        root = write_docs({"a.md": make_page(body="![x](missing.png)\n")})
        options = LintOptions()
        site = DocumentSite.from_directory(root, options)

        issues = get_check("internal_links")(site.get_page("a.md"), site, options)

        assert len(issues) == 1
        assert issues[0].message.startswith("Image target")


# =============================================================================
# Structure Checks
# =============================================================================

class TestStructureChecks:
    """Tests for heading_structure and admonitions."""

    def test_skipped_level(self):
        sources = {"a.md": make_page(body="# One\n\n### Three\n\n## Two\n")}
        issues = run_page_check("heading_structure", sources, "a.md")

        assert len(issues) == 1
        assert issues[0].details == {"from_level": 1, "to_level": 3}

    def test_multiple_h1_is_info(self):
        sources = {"a.md": make_page(body="# One\n\n# Another\n")}
        issues = run_page_check("heading_structure", sources, "a.md")

        assert [i.severity for i in issues] == [Severity.INFO]

    def test_page_may_start_below_h1(self):
        sources = {"a.md": make_page(body="## Section\n\n### Sub\n")}
        assert run_page_check("heading_structure", sources, "a.md") == []

    def test_admonitions_ok(self):
        sources = {"a.md": make_page(body=":::tip\nText\n:::\n\n> [!WARNING]\n> Careful\n")}
        assert run_page_check("admonitions", sources, "a.md") == []

    def test_unclosed_admonition(self):
        sources = {"a.md": make_page(body=":::note\nText\n")}
        issues = run_page_check("admonitions", sources, "a.md")

        assert len(issues) == 1
        assert issues[0].severity == Severity.ERROR

    def test_unknown_kind(self):
        sources = {"a.md": make_page(body=":::fancy\nText\n:::\n")}
        issues = run_page_check("admonitions", sources, "a.md")

        assert len(issues) == 1
        assert issues[0].severity == Severity.WARNING


# =============================================================================
# Site Checks
# =============================================================================

class TestSiteChecks:
    """Tests for route_collisions and title_collisions."""

    def test_route_collision(self):
        issues = run_site_check("route_collisions", {
            "security.md": make_page("Security"),
            "security/index.md": make_page("Security Overview"),
        })

        assert [i.path for i in issues] == ["security.md", "security/index.md"]
        assert all(i.details["route"] == "/security" for i in issues)

    def test_slug_collision(self):
        issues = run_site_check("route_collisions", {
            "a.md": "---\ntitle: A\ndescription: a\nslug: /shared\n---\n",
            "shared.md": make_page("Shared"),
        })
        assert len(issues) == 2

    def test_no_collisions(self):
        assert run_site_check("route_collisions", {"a.md": make_page("A"), "b.md": make_page("B")}) == []

    def test_title_collision_warning(self):
        issues = run_site_check("title_collisions", {
            "a.md": make_page("Validation"),
            "b.md": make_page("validation"),
        })

        assert len(issues) == 2
        assert all(i.severity == Severity.WARNING for i in issues)

    def test_title_collision_as_error(self):
        options = LintOptions(title_collisions_are_errors=True)
        issues = run_site_check("title_collisions", {
            "a.md": make_page("Validation"),
            "b.md": make_page("Validation"),
        }, options)

        assert all(i.severity == Severity.ERROR for i in issues)
