# =============================================================================
# lib/site.py - Documentation Site Model
# =============================================================================
# Collects every page under a docs root and builds the site's routing table.
# Checks use it to answer cross-page questions:
#
#   - Does this link point at an existing page (and heading)?
#   - Which routes are claimed by more than one page?
#   - Which titles are used more than once?
#
# Usage:
#   site = DocumentSite.from_directory("docs")
#   site = DocumentSite.from_sources({"index.md": "---\ntitle: Home\n..."})
# =============================================================================

import fnmatch
import logging
import posixpath
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote

from core.models import DocumentPage, Link, LintOptions
from lib.markdown import load_document, parse_document
from lib.routing import normalize_route, route_for
from lib.utils import DocsRootNotFoundError, normalize_doc_path

# Set up logging for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Discovery
# =============================================================================

def is_excluded(relative_path: str, patterns: list[str]) -> bool:
    """Check a POSIX relative path against exclude globs."""
    for pattern in patterns:
        if fnmatch.fnmatch(relative_path, pattern):
            return True
        # "drafts/" or "drafts" excludes everything below that directory
        prefix = pattern.rstrip("/")
        if prefix and "*" not in prefix and relative_path.startswith(prefix + "/"):
            return True
    return False


def discover_documents(docs_root: str | Path, options: LintOptions | None = None) -> list[Path]:
    """
    Find all documentation pages under a root directory.

    Hidden files and directories (".git", ".vitepress", ...) are skipped.

    Raises:
        DocsRootNotFoundError: If docs_root is not a directory

    Returns:
        Sorted list of file paths
    """
    options = options or LintOptions()
    root = Path(docs_root)

    if not root.is_dir():
        raise DocsRootNotFoundError(docs_root)

    found = []
    for file_path in root.rglob("*"):
        if not file_path.is_file():
            continue
        if file_path.suffix.lower() not in options.extensions:
            continue

        relative = file_path.relative_to(root).as_posix()
        if any(part.startswith(".") for part in relative.split("/")):
            continue
        if is_excluded(relative, options.exclude):
            logger.debug(f"Excluded {relative}")
            continue

        found.append(file_path)

    return sorted(found, key=lambda p: p.relative_to(root).as_posix())


# =============================================================================
# Link Resolution
# =============================================================================

@dataclass
class ResolvedLink:
    """
    Outcome of resolving an internal link.

    kind is one of:
        "page"         - target is a known page (page is set)
        "asset"        - target is an existing non-page file
        "unverifiable" - non-page target that cannot be checked (in-memory site)
        "missing"      - nothing exists at the target
    """
    kind: str
    target_path: str | None = None
    page: DocumentPage | None = None
    anchor: str | None = None


# =============================================================================
# Document Site
# =============================================================================

class DocumentSite:
    """
    All pages of a documentation site plus its routing table.

    Pages are keyed by their POSIX path relative to the docs root.
    """

    def __init__(
        self,
        pages: list[DocumentPage],
        docs_root: str | Path | None = None,
        options: LintOptions | None = None,
    ):
        self.options = options or LintOptions()
        self.docs_root = Path(docs_root) if docs_root is not None else None
        self.pages: dict[str, DocumentPage] = {}
        self.routes: dict[str, list[str]] = {}

        for page in pages:
            self.add_page(page)

    # -------------------------------------------------------------------------
    # Builders
    # -------------------------------------------------------------------------

    @classmethod
    def from_directory(cls, docs_root: str | Path, options: LintOptions | None = None) -> "DocumentSite":
        """
        Load and parse every page under docs_root.

        Raises:
            DocsRootNotFoundError: If docs_root is not a directory
            DocumentReadError: If a page cannot be decoded
        """
        options = options or LintOptions()
        files = discover_documents(docs_root, options)
        logger.info(f"Discovered {len(files)} pages under {docs_root}")

        pages = [load_document(file_path, docs_root) for file_path in files]
        return cls(pages, docs_root=docs_root, options=options)

    @classmethod
    def from_sources(cls, sources: dict[str, str], options: LintOptions | None = None) -> "DocumentSite":
        """
        Build a site from in-memory page contents.

        Paths are normalized. Entries that escape the root or lack a page
        extension are skipped with a warning, as are later entries naming the
        same page (e.g. "a.md" and "./a.md").
        """
        options = options or LintOptions()
        pages = []
        seen: dict[str, str] = {}

        for raw_path, text in sources.items():
            path = normalize_doc_path(raw_path)
            if not path:
                logger.warning(f"Skipping document with invalid path: {raw_path!r}")
                continue
            if posixpath.splitext(path)[1].lower() not in options.extensions:
                logger.warning(f"Skipping non-page document: {raw_path!r}")
                continue
            if is_excluded(path, options.exclude):
                continue
            if path in seen:
                logger.warning(f"Skipping duplicate document {raw_path!r} (same page as {seen[path]!r})")
                continue
            seen[path] = raw_path
            pages.append(parse_document(text, path))

        return cls(pages, docs_root=None, options=options)

    def add_page(self, page: DocumentPage) -> None:
        """Register a page and claim its route, replacing any page at the same path."""
        previous = self.pages.get(page.path)
        if previous is not None:
            claims = self.routes.get(previous.route, [])
            claims.remove(page.path)
            if not claims:
                self.routes.pop(previous.route, None)

        self.pages[page.path] = page
        self.routes.setdefault(page.route, []).append(page.path)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self):
        return iter(self.pages[path] for path in sorted(self.pages))

    def get_page(self, path: str) -> DocumentPage | None:
        return self.pages.get(path)

    def get_page_by_route(self, route: str) -> DocumentPage | None:
        paths = self.routes.get(normalize_route(route))
        return self.pages[paths[0]] if paths else None

    def collisions(self) -> dict[str, list[str]]:
        """Routes claimed by more than one page."""
        return {
            route: sorted(paths)
            for route, paths in self.routes.items()
            if len(paths) > 1
        }

    def title_index(self) -> dict[str, list[str]]:
        """Map of lowercased title to the pages using it."""
        index: dict[str, list[str]] = {}
        for page in self:
            title = page.title
            if title:
                index.setdefault(title.lower(), []).append(page.path)
        return index

    # -------------------------------------------------------------------------
    # Link Resolution
    # -------------------------------------------------------------------------

    def _candidates(self, path: str) -> list[str]:
        """Page paths a link target might refer to."""
        if not path:
            return []
        candidates = [path]
        if posixpath.splitext(path)[1].lower() not in self.options.extensions:
            for ext in self.options.extensions:
                candidates.append(path + ext)
                candidates.append(posixpath.join(path, "index" + ext))
        return candidates

    def _asset_exists(self, path: str) -> bool | None:
        """True/False for a directory-backed site, None when unknowable."""
        if self.docs_root is None:
            return None
        return (self.docs_root / path).is_file()

    def resolve_link(self, page: DocumentPage, link: Link) -> ResolvedLink:
        """
        Resolve an internal link found on `page`.

        External and anchor-only links should be filtered by the caller;
        anchor-only links resolve to `page` itself.
        """
        if link.is_anchor_only:
            return ResolvedLink(kind="page", target_path=page.path, page=page, anchor=link.anchor)

        raw = unquote(link.path_part.strip())
        anchor = link.anchor

        if raw.startswith("/"):
            # Root-absolute: try the route table first, then a file path
            routed = self.get_page_by_route(raw)
            if routed is not None:
                return ResolvedLink(kind="page", target_path=routed.path, page=routed, anchor=anchor)
            base = posixpath.normpath(raw.lstrip("/")) if raw.strip("/") else ""
        else:
            base = posixpath.normpath(posixpath.join(posixpath.dirname(page.path), raw))

        if base == ".." or base.startswith("../"):
            return ResolvedLink(kind="missing", target_path=base, anchor=anchor)
        if base == ".":
            base = ""

        for candidate in self._candidates(base):
            found = self.pages.get(candidate)
            if found is not None:
                return ResolvedLink(kind="page", target_path=candidate, page=found, anchor=anchor)

        # A route written relative to the page, e.g. "../security/jwt"
        routed = self.get_page_by_route("/" + base)
        if routed is not None and posixpath.splitext(base)[1].lower() not in self.options.extensions:
            return ResolvedLink(kind="page", target_path=routed.path, page=routed, anchor=anchor)

        extension = posixpath.splitext(base)[1].lower()
        if base and extension not in self.options.extensions:
            exists = self._asset_exists(base)
            if exists:
                return ResolvedLink(kind="asset", target_path=base, anchor=anchor)
            # Extensionless targets are page references; only files are assets
            if exists is None and extension:
                return ResolvedLink(kind="unverifiable", target_path=base, anchor=anchor)

        return ResolvedLink(kind="missing", target_path=base or "/", anchor=anchor)


__all__ = [
    "DocumentSite",
    "ResolvedLink",
    "discover_documents",
    "is_excluded",
    "route_for",
]
