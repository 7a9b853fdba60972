# =============================================================================
# tests/test_site.py - Site Model Tests
# =============================================================================
# Tests for routing (lib/routing.py) and the site model (lib/site.py):
# discovery, the routing table, collisions and link resolution.
# =============================================================================

import pytest

from core.models import Link, LintOptions
from lib.markdown import parse_document
from lib.routing import normalize_route, route_for
from lib.site import DocumentSite, discover_documents, is_excluded
from lib.utils import DocsRootNotFoundError, normalize_doc_path
from tests.conftest import make_page


# =============================================================================
# Routing Tests
# =============================================================================

class TestRouteFor:
    """Tests for route_for()."""

    @pytest.mark.parametrize("path,expected", [
        ("getting-started.md", "/getting-started"),
        ("security/jwt.md", "/security/jwt"),
        ("security/index.md", "/security"),
        ("README.md", "/"),
        ("index.md", "/"),
        ("Guides/Model Binding.md", "/guides/model-binding"),
    ])
    def test_path_based_routes(self, path, expected):
        assert route_for(path) == expected

    def test_slug_overrides_path(self):
        assert route_for("misc/tokens.md", {"slug": "security/tokens/"}) == "/security/tokens"

    def test_non_string_slug_ignored(self):
        assert route_for("a.md", {"slug": 5}) == "/a"

    def test_normalize_route(self):
        assert normalize_route("//Docs//Intro/") == "/docs/intro"
        assert normalize_route("") == "/"


class TestNormalizeDocPath:
    """Tests for normalize_doc_path()."""

    def test_strips_leading_slashes_and_dots(self):
        assert normalize_doc_path("./guides/../intro.md") == "intro.md"
        assert normalize_doc_path("/abs/page.md") == "abs/page.md"

    def test_backslashes(self):
        assert normalize_doc_path("guides\\auth.md") == "guides/auth.md"

    def test_escaping_root(self):
        assert normalize_doc_path("../outside.md") == ""
        assert normalize_doc_path(".") == ""


# =============================================================================
# Discovery Tests
# =============================================================================

class TestDiscoverDocuments:
    """Tests for discover_documents()."""

    def test_finds_pages_sorted(self, docs_dir):
        files = discover_documents(docs_dir)
        relative = [f.relative_to(docs_dir).as_posix() for f in files]

        assert relative == [
            "getting-started.md",
            "index.md",
            "security/jwt.md",
            "swagger-support.md",
        ]

    def test_skips_hidden_and_excluded(self, write_docs):
        root = write_docs({
            "a.md": make_page("A"),
            ".vitepress/theme.md": make_page("Theme"),
            "drafts/wip.md": make_page("WIP"),
            "notes.txt": "not a page",
            "b.markdown": make_page("B"),
        })

        files = discover_documents(root, LintOptions(exclude=["drafts"]))
        relative = [f.relative_to(root).as_posix() for f in files]

        assert relative == ["a.md", "b.markdown"]

    def test_missing_root(self, tmp_path):
        with pytest.raises(DocsRootNotFoundError):
            discover_documents(tmp_path / "nope")

    def test_is_excluded_globs(self):
        assert is_excluded("drafts/a.md", ["drafts/*"])
        assert is_excluded("drafts/deep/a.md", ["drafts/"])
        assert is_excluded("changelog.md", ["*.md"])
        assert not is_excluded("guides/a.md", ["drafts"])


# =============================================================================
# Site Tests
# =============================================================================

class TestDocumentSite:
    """Tests for DocumentSite."""

    @pytest.fixture
    def site(self, docs_dir):
        return DocumentSite.from_directory(docs_dir)

    def test_routing_table(self, site):
        assert set(site.routes) == {"/", "/getting-started", "/security/jwt", "/swagger-support"}
        assert site.get_page_by_route("/security/jwt/").path == "security/jwt.md"
        assert len(site) == 4

    def test_no_collisions_in_sample(self, site):
        assert site.collisions() == {}

    def test_collisions(self):
        site = DocumentSite.from_sources({
            "guides.md": make_page("Guides"),
            "guides/index.md": make_page("Guide Index"),
            "other.md": make_page("Other", body=""),
        })

        assert site.collisions() == {"/guides": ["guides.md", "guides/index.md"]}

    def test_title_index_case_insensitive(self):
        site = DocumentSite.from_sources({
            "a.md": make_page("Endpoints"),
            "b.md": make_page("endpoints"),
        })

        assert site.title_index() == {"endpoints": ["a.md", "b.md"]}

    def test_from_sources_skips_bad_paths(self):
        site = DocumentSite.from_sources({
            "../escape.md": make_page("Escape"),
            "image.png": "binary",
            "ok.md": make_page("Ok"),
        })

        assert list(site.pages) == ["ok.md"]

    def test_from_sources_duplicate_paths(self):
        site = DocumentSite.from_sources({
            "a.md": make_page("First"),
            "./a.md": make_page("Second"),
        })

        assert len(site) == 1
        assert site.get_page("a.md").title == "First"
        assert site.routes == {"/a": ["a.md"]}
        assert site.collisions() == {}

    def test_add_page_replaces_route_claim(self):
        site = DocumentSite.from_sources({"a.md": make_page("A")})
        site.add_page(parse_document("---\ntitle: A\nslug: /moved\n---\n", "a.md"))

        assert site.routes == {"/moved": ["a.md"]}


class TestResolveLink:
    """Tests for DocumentSite.resolve_link()."""

    @pytest.fixture
    def site(self, docs_dir):
        return DocumentSite.from_directory(docs_dir)

    def resolve(self, site, source: str, target: str):
        return site.resolve_link(site.get_page(source), Link(target=target, line=1))

    def test_relative_page(self, site):
        resolved = self.resolve(site, "security/jwt.md", "../getting-started.md#install")

        assert resolved.kind == "page"
        assert resolved.page.path == "getting-started.md"
        assert resolved.anchor == "install"

    def test_extensionless_relative(self, site):
        resolved = self.resolve(site, "index.md", "security/jwt")
        assert resolved.kind == "page"
        assert resolved.target_path == "security/jwt.md"

    def test_root_absolute_route(self, site):
        resolved = self.resolve(site, "security/jwt.md", "/swagger-support")
        assert resolved.kind == "page"
        assert resolved.page.path == "swagger-support.md"

    def test_root_link(self, site):
        resolved = self.resolve(site, "security/jwt.md", "/")
        assert resolved.kind == "page"
        assert resolved.page.path == "index.md"

    def test_anchor_only(self, site):
        resolved = self.resolve(site, "index.md", "#features")
        assert resolved.kind == "page"
        assert resolved.page.path == "index.md"
        assert resolved.anchor == "features"

    def test_asset(self, site):
        resolved = self.resolve(site, "security/jwt.md", "../assets/token-flow.svg")
        assert resolved.kind == "asset"

    def test_missing(self, site):
        resolved = self.resolve(site, "index.md", "does-not-exist.md")
        assert resolved.kind == "missing"

    def test_above_root_is_missing(self, site):
        resolved = self.resolve(site, "index.md", "../outside.md")
        assert resolved.kind == "missing"

    def test_url_encoded_target(self, write_docs):
        root = write_docs({
            "index.md": make_page("Home"),
            "model binding.md": make_page("Binding"),
        })
        site = DocumentSite.from_directory(root)

        resolved = self.resolve(site, "index.md", "model%20binding.md")
        assert resolved.kind == "page"

    def test_assets_unverifiable_in_memory(self):
        site = DocumentSite.from_sources({"index.md": make_page("Home")})

        assert self.resolve(site, "index.md", "img/logo.png").kind == "unverifiable"
        assert self.resolve(site, "index.md", "missing-page").kind == "missing"
