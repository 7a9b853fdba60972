# =============================================================================
# core/models/document.py - Parsed Documentation Page Schemas
# =============================================================================
# These models describe a single Markdown page after parsing. The parser
# (lib/markdown.py) produces them and the checks (linter/checks/) read them.
#
# A page is made of:
# - Front matter (YAML block at the top, must carry title + description)
# - Headings (used as link anchors)
# - Fenced code blocks (language + metadata annotations)
# - Links (cross-references to other pages, assets, anchors)
# - Admonitions (:::tip containers and > [!NOTE] callouts)
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field


# =============================================================================
# Front Matter
# =============================================================================

class FrontMatter(BaseModel):
    """
    The YAML block delimited by `---` lines at the very top of a page.

    `present` is True as soon as the opening delimiter is found, even if the
    block is malformed. In that case `error` explains what went wrong and
    `data` is empty.
    """

    present: bool = Field(
        default=False,
        description="Whether the page starts with a front matter delimiter"
    )

    raw: str = Field(
        default="",
        description="Raw YAML text between the delimiters"
    )

    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Parsed YAML mapping"
    )

    error: str | None = Field(
        default=None,
        description="Parse problem, if the block is not a valid YAML mapping"
    )

    end_line: int = Field(
        default=0,
        ge=0,
        description="1-based line number of the closing delimiter (0 if absent)"
    )

    def get_str(self, key: str) -> str | None:
        """Return a front matter value as a stripped string, or None."""
        value = self.data.get(key)
        if isinstance(value, str):
            return value.strip()
        return None

    @property
    def title(self) -> str | None:
        return self.get_str("title")

    @property
    def description(self) -> str | None:
        return self.get_str("description")


# =============================================================================
# Body Elements
# =============================================================================

class CodeBlock(BaseModel):
    """
    A fenced code block.

    The info string after the fence marker is split into a language and
    metadata annotations, e.g. ```cs title="Program.cs" {3-5}
    """

    language: str | None = Field(
        default=None,
        description="Language tag (first token of the info string)"
    )

    info: str = Field(
        default="",
        description="Full info string as written"
    )

    meta: dict[str, str] = Field(
        default_factory=dict,
        description="Metadata annotations (key=value pairs and bare flags)"
    )

    highlight_spec: str | None = Field(
        default=None,
        description="Raw line highlight spec, e.g. '1,3-5'"
    )

    fence: str = Field(
        default="```",
        description="Opening fence marker"
    )

    start_line: int = Field(
        ...,
        ge=1,
        description="Line of the opening fence"
    )

    end_line: int | None = Field(
        default=None,
        description="Line of the closing fence (None if never closed)"
    )

    content: str = Field(
        default="",
        description="Code between the fences"
    )

    @property
    def closed(self) -> bool:
        return self.end_line is not None

    @property
    def line_count(self) -> int:
        if not self.content:
            return 0
        return len(self.content.split("\n"))


class Heading(BaseModel):
    """An ATX heading and the anchor slug it produces."""
    level: int = Field(..., ge=1, le=6)
    text: str
    slug: str
    line: int = Field(..., ge=1)


class Link(BaseModel):
    """
    A link found in the page body.

    Covers inline Markdown links, images and raw HTML href/src attributes.
    """

    text: str = ""
    target: str
    line: int = Field(..., ge=1)
    is_image: bool = False

    @property
    def is_external(self) -> bool:
        """Links with a scheme (http:, mailto:, ...) or protocol-relative."""
        target = self.target.strip()
        if target.startswith("//"):
            return True
        scheme, sep, _ = target.partition(":")
        return bool(sep) and scheme.isalpha() and "/" not in scheme and len(scheme) > 1

    @property
    def is_anchor_only(self) -> bool:
        return self.target.startswith("#")

    @property
    def path_part(self) -> str:
        """Target without the #anchor and ?query parts."""
        path = self.target.split("#", 1)[0]
        return path.split("?", 1)[0]

    @property
    def anchor(self) -> str | None:
        if "#" not in self.target:
            return None
        anchor = self.target.split("#", 1)[1]
        return anchor or None


class Admonition(BaseModel):
    """A callout block (:::kind ... ::: or > [!KIND])."""
    kind: str
    syntax: str = Field(
        default="container",
        description="'container' for ::: blocks, 'callout' for > [!KIND]"
    )
    title: str | None = None
    line: int = Field(..., ge=1)
    end_line: int | None = None

    @property
    def closed(self) -> bool:
        return self.syntax == "callout" or self.end_line is not None


# =============================================================================
# Document Page
# =============================================================================

class DocumentPage(BaseModel):
    """
    A fully parsed documentation page.

    `path` is always POSIX-style and relative to the docs root, so the same
    page parsed from disk or from an API payload compares equal.
    """

    path: str = Field(
        ...,
        description="Path relative to the docs root (POSIX separators)"
    )

    route: str = Field(
        default="",
        description="URL route the site generator serves this page at"
    )

    front_matter: FrontMatter = Field(default_factory=FrontMatter)

    headings: list[Heading] = Field(default_factory=list)

    code_blocks: list[CodeBlock] = Field(default_factory=list)

    links: list[Link] = Field(default_factory=list)

    admonitions: list[Admonition] = Field(default_factory=list)

    line_count: int = Field(default=0, ge=0)

    @property
    def title(self) -> str | None:
        return self.front_matter.title

    @property
    def anchors(self) -> set[str]:
        """All anchor ids a link into this page may target."""
        return {heading.slug for heading in self.headings}
