# =============================================================================
# lib/routing.py - Page Route Derivation
# =============================================================================
# Maps a page's path (relative to the docs root) to the URL route the
# documentation site serves it at.
#
#   guides/getting-started.md   -> /guides/getting-started
#   guides/index.md             -> /guides
#   README.md                   -> /
#   slug: "/security/jwt" in front matter wins over the file path
# =============================================================================

import posixpath
import re
from typing import Any

INDEX_STEMS = {"index", "readme", "_index"}
ROUTE_KEYS = ("slug", "route", "permalink")

_WHITESPACE = re.compile(r"\s+")


def normalize_route(route: str) -> str:
    """
    Normalize a route to a leading "/" and no trailing "/".

    Example:
        normalize_route("Guides/Auth/")  # "/guides/auth"
    """
    route = route.strip().replace("\\", "/")
    route = _WHITESPACE.sub("-", route).lower()
    route = posixpath.normpath("/" + route.lstrip("/"))
    # normpath keeps a leading "//" intact
    route = "/" + route.lstrip("/")
    return route


def route_for(relative_path: str, front_matter: dict[str, Any] | None = None) -> str:
    """
    Derive the route for a page.

    Args:
        relative_path: POSIX path relative to the docs root
        front_matter: Parsed front matter; a string `slug`, `route` or
            `permalink` overrides the path-based route

    Returns:
        Route such as "/guides/auth"
    """
    for key in ROUTE_KEYS:
        value = (front_matter or {}).get(key)
        if isinstance(value, str) and value.strip():
            return normalize_route(value)

    directory, filename = posixpath.split(relative_path)
    stem = posixpath.splitext(filename)[0]

    if stem.lower() in INDEX_STEMS:
        return normalize_route(directory)
    return normalize_route(posixpath.join(directory, stem))
