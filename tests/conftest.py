# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides docs trees and page builders for testing
# =============================================================================

import os
from pathlib import Path

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")

import pytest


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# =============================================================================
# Helpers
# =============================================================================

def make_page(title: str | None = "Page", description: str | None = "A page.", body: str = "") -> str:
    """
    Build page source with front matter.

    Pass None for title/description to leave the key out.
    """
    lines = ["---"]
    if title is not None:
        lines.append(f"title: {title}")
    if description is not None:
        lines.append(f"description: {description}")
    lines.append("---")
    lines.append("")
    return "\n".join(lines) + body


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def docs_dir() -> Path:
    """The clean sample documentation site."""
    return FIXTURES_DIR / "docs"


@pytest.fixture
def write_docs(tmp_path):
    """
    Write a docs tree into a temp directory.

    Usage:
        root = write_docs({"index.md": make_page("Home")})
    """
    def _write(files: dict[str, str]) -> Path:
        root = tmp_path / "docs"
        for relative, content in files.items():
            file_path = root / relative
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8")
        root.mkdir(parents=True, exist_ok=True)
        return root

    return _write


@pytest.fixture
def broken_sources() -> dict[str, str]:
    """In-memory site with one problem per check."""
    return {
        "index.md": make_page(
            "Home",
            "Start here.",
            "# Home\n\nSee [missing](missing-page.md) and [jwt](security/jwt.md#nope).\n",
        ),
        "no-front-matter.md": "# Just a heading\n",
        "untagged.md": make_page("Untagged", "Fence without a tag.", "```\ncode\n```\n"),
        "unknown-lang.md": make_page("Unknown", "Odd language.", "```brainfuck\n+++\n```\n"),
        "unclosed.md": make_page("Unclosed", "Never closed.", "```cs\nvar x = 1;\n"),
        "security/jwt.md": make_page("JWT", "Tokens.", "# JWT\n\n### Deep\n"),
        "guides.md": make_page("Guides", "Guide list."),
        "guides/index.md": make_page("Guides", "Also guides."),
    }
