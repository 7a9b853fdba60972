# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable building blocks:
# - markdown.py: Page parser - turns Markdown + front matter into DocumentPage
# - routing.py: Route derivation for pages
# - site.py: Site model - page discovery, routing table, link resolution
# - utils.py: Shared utilities (error handling, path normalization)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.markdown import (
    load_document,
    parse_document,
    parse_highlight,
    parse_info_string,
    slugify,
    split_front_matter,
)
from lib.routing import normalize_route, route_for
from lib.site import DocumentSite, ResolvedLink, discover_documents
from lib.utils import (
    ApplicationError,
    DocsRootNotFoundError,
    DocumentReadError,
    normalize_doc_path,
)

__all__ = [
    # Parsing
    "load_document",
    "parse_document",
    "parse_highlight",
    "parse_info_string",
    "slugify",
    "split_front_matter",
    # Routing
    "normalize_route",
    "route_for",
    # Site
    "DocumentSite",
    "ResolvedLink",
    "discover_documents",
    # Utils
    "ApplicationError",
    "DocsRootNotFoundError",
    "DocumentReadError",
    "normalize_doc_path",
]
