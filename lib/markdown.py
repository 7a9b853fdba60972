# =============================================================================
# lib/markdown.py - Documentation Page Parser
# =============================================================================
# Turns the text of a Markdown page into a DocumentPage model:
#
#   - Front matter: YAML block between "---" lines at the top of the file
#   - Fenced code blocks: language tag + metadata annotations
#       ```cs title="Program.cs" {3-5} copy
#   - Headings: ATX (#, ##, ...) and setext, with GitHub-style anchor slugs
#   - Links: inline links, images, reference definitions, HTML href/src
#   - Admonitions: ":::tip Title ... :::" containers and "> [!NOTE]" callouts
#
# The parser is line based and deliberately forgiving: it never raises for
# malformed content. Problems are recorded on the model (e.g. an unclosed
# fence has end_line=None) and reported later by the checks.
# =============================================================================

import logging
import re
import shlex
from pathlib import Path

import yaml

from core.models import (
    Admonition,
    CodeBlock,
    DocumentPage,
    FrontMatter,
    Heading,
    Link,
)
from lib.routing import route_for
from lib.utils import DocumentReadError, to_posix_relative

# Set up logging for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Patterns
# =============================================================================

FRONT_MATTER_OPEN = "---"
FRONT_MATTER_CLOSE = ("---", "...")

FENCE_OPEN = re.compile(r"^(?P<indent>\s*)(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
FENCE_CLOSE = re.compile(r"^\s*(?P<fence>`{3,}|~{3,})\s*$")

ATX_HEADING = re.compile(r"^ {0,3}(?P<hashes>#{1,6})(?:[ \t]+(?P<text>.*?))?[ \t]*$")
SETEXT_UNDERLINE = re.compile(r"^ {0,3}(?P<char>=+|-+)[ \t]*$")
EXPLICIT_ANCHOR = re.compile(r"\s*\{#(?P<id>[\w\-:.]+)\}\s*$")
CLOSING_HASHES = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")

INLINE_CODE = re.compile(r"(`+)(?:(?!\1).)+?\1")
INLINE_LINK = re.compile(
    r"(?P<bang>!?)\[(?P<text>(?:[^\[\]]|\[[^\[\]]*\])*)\]"
    r"\(\s*(?:<(?P<angle>[^>]*)>|(?P<target>[^\s)]+))"
    r"(?:\s+(?:\"[^\"]*\"|'[^']*'|\([^)]*\)))?\s*\)"
)
REFERENCE_DEFINITION = re.compile(
    r"^ {0,3}\[(?P<label>[^\]]+)\]:\s*(?:<(?P<angle>[^>]*)>|(?P<target>\S+))"
)
HTML_ATTRIBUTE = re.compile(r"\b(?P<attr>href|src)\s*=\s*(?:\"(?P<dq>[^\"]*)\"|'(?P<sq>[^']*)')", re.IGNORECASE)

CONTAINER_OPEN = re.compile(r"^\s*:::\s*(?P<kind>[A-Za-z][\w-]*)(?:\s+(?P<title>.*?))?\s*$")
CONTAINER_CLOSE = re.compile(r"^\s*:::\s*$")
CALLOUT = re.compile(r"^\s*>\s*\[!(?P<kind>[A-Za-z][\w-]*)\](?:\s+(?P<title>.*?))?\s*$")

HIGHLIGHT = re.compile(r"\{(?P<spec>[^}]*)\}")
MARKDOWN_LINK_TEXT = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
HTML_TAG = re.compile(r"<[^>]+>")
SLUG_DROP = re.compile(r"[^\w\- ]", re.UNICODE)

# Lines that cannot be the text part of a setext heading
_BLOCK_STARTS = re.compile(r"^\s*(?:[-*+>|]|\d+[.)]|#|:::|```|~~~)")


# =============================================================================
# Front Matter
# =============================================================================

def normalize_newlines(text: str) -> str:
    """Strip a UTF-8 BOM and convert CRLF / CR line endings to LF."""
    if text.startswith("\ufeff"):
        text = text[1:]
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_front_matter(text: str) -> tuple[FrontMatter, int]:
    """
    Extract the front matter block from the top of a page.

    Returns:
        Tuple of (FrontMatter, index of the first body line)

    Example:
        fm, body_start = split_front_matter("---\\ntitle: Hi\\n---\\n# Hi")
        fm.title      # "Hi"
        body_start    # 3
    """
    lines = normalize_newlines(text).split("\n")

    if not lines or lines[0].rstrip() != FRONT_MATTER_OPEN:
        return FrontMatter(present=False), 0

    closing_index = None
    for index in range(1, len(lines)):
        if lines[index].rstrip() in FRONT_MATTER_CLOSE:
            closing_index = index
            break

    if closing_index is None:
        return FrontMatter(
            present=True,
            raw="\n".join(lines[1:]),
            error="Front matter block is not closed with '---'",
        ), 1

    raw = "\n".join(lines[1:closing_index])

    try:
        data = yaml.safe_load(raw) if raw.strip() else {}
    except yaml.YAMLError as e:
        problem = getattr(e, "problem", None) or str(e)
        mark = getattr(e, "problem_mark", None)
        location = f" (line {mark.line + 2})" if mark is not None else ""
        return FrontMatter(
            present=True,
            raw=raw,
            error=f"Invalid YAML{location}: {problem}",
            end_line=closing_index + 1,
        ), closing_index + 1

    if data is None:
        data = {}

    if not isinstance(data, dict):
        return FrontMatter(
            present=True,
            raw=raw,
            error=f"Front matter must be a mapping, got {type(data).__name__}",
            end_line=closing_index + 1,
        ), closing_index + 1

    return FrontMatter(
        present=True,
        raw=raw,
        data={str(key): value for key, value in data.items()},
        end_line=closing_index + 1,
    ), closing_index + 1


# =============================================================================
# Code Fence Info Strings
# =============================================================================

def parse_highlight(spec: str) -> list[int]:
    """
    Expand a line highlight spec into line numbers.

    Raises:
        ValueError: If a range is malformed, reversed or not positive

    Example:
        parse_highlight("1,3-5")  # [1, 3, 4, 5]
    """
    lines: set[int] = set()

    for part in spec.split(","):
        part = part.strip()
        if not part:
            raise ValueError(f"Empty range in highlight spec '{spec}'")

        if "-" in part:
            start_text, end_text = part.split("-", 1)
            start, end = int(start_text), int(end_text)
            if start < 1 or end < start:
                raise ValueError(f"Invalid range '{part}' in highlight spec '{spec}'")
            lines.update(range(start, end + 1))
        else:
            number = int(part)
            if number < 1:
                raise ValueError(f"Line numbers start at 1, got '{part}'")
            lines.add(number)

    return sorted(lines)


def parse_info_string(info: str) -> tuple[str | None, dict[str, str], str | None]:
    """
    Split a fence info string into language, metadata and highlight spec.

    Example:
        parse_info_string('cs title="Program.cs" {3-5} copy')
        # ("cs", {"title": "Program.cs", "copy": "true"}, "3-5")
    """
    info = info.strip()
    if not info:
        return None, {}, None

    highlight_spec = None
    match = HIGHLIGHT.search(info)
    if match:
        highlight_spec = match.group("spec").strip()
        info = (info[:match.start()] + " " + info[match.end():]).strip()

    try:
        tokens = shlex.split(info)
    except ValueError:
        # Unbalanced quotes; fall back to plain whitespace splitting
        tokens = info.split()

    language = None
    meta: dict[str, str] = {}

    for token in tokens:
        if "=" in token:
            key, value = token.split("=", 1)
            meta[key.strip()] = value.strip()
        elif language is None:
            language = token
        else:
            meta[token] = "true"

    return language, meta, highlight_spec


# =============================================================================
# Headings
# =============================================================================

def slugify(text: str) -> str:
    """
    Compute a GitHub-style anchor slug for heading text.

    Example:
        slugify("Request DTO Binding")   # "request-dto-binding"
        slugify("`IPreProcessor<T>`")    # "ipreprocessor"
    """
    text = MARKDOWN_LINK_TEXT.sub(r"\1", text)
    text = HTML_TAG.sub("", text)
    text = text.replace("`", "").strip().lower()
    text = SLUG_DROP.sub("", text)
    return text.replace(" ", "-")


class _SlugCounter:
    """Hands out unique slugs, suffixing repeats with -1, -2, ..."""

    def __init__(self):
        self._seen: dict[str, int] = {}

    def unique(self, slug: str) -> str:
        if slug not in self._seen:
            self._seen[slug] = 0
            return slug

        while True:
            self._seen[slug] += 1
            candidate = f"{slug}-{self._seen[slug]}"
            if candidate not in self._seen:
                self._seen[candidate] = 0
                return candidate

    def reserve(self, slug: str) -> str:
        """Claim an explicit {#id} so later headings cannot reuse it."""
        self._seen.setdefault(slug, 0)
        return slug


def _clean_heading_text(text: str) -> tuple[str, str | None]:
    """Strip closing hashes and an explicit {#id}; return (text, id)."""
    text = CLOSING_HASHES.sub("", text).strip()
    explicit = None
    match = EXPLICIT_ANCHOR.search(text)
    if match:
        explicit = match.group("id")
        text = text[:match.start()].strip()
    return text, explicit


# =============================================================================
# Links
# =============================================================================

def extract_links(line: str, line_number: int) -> list[Link]:
    """Find all links on a single (non-code) line."""
    links: list[Link] = []

    definition = REFERENCE_DEFINITION.match(line)
    if definition:
        target = definition.group("angle") or definition.group("target")
        links.append(Link(text=definition.group("label"), target=target, line=line_number))
        return links

    stripped = INLINE_CODE.sub("", line)

    for match in INLINE_LINK.finditer(stripped):
        target = match.group("angle") or match.group("target") or ""
        if not target:
            continue
        links.append(Link(
            text=match.group("text"),
            target=target,
            line=line_number,
            is_image=bool(match.group("bang")),
        ))

    for match in HTML_ATTRIBUTE.finditer(stripped):
        target = match.group("dq") if match.group("dq") is not None else match.group("sq")
        if not target:
            continue
        links.append(Link(
            text="",
            target=target,
            line=line_number,
            is_image=match.group("attr").lower() == "src",
        ))

    return links


# =============================================================================
# Document Parsing
# =============================================================================

def parse_document(text: str, path: str, route: str | None = None) -> DocumentPage:
    """
    Parse the full text of a page.

    Args:
        text: Page contents
        path: POSIX path relative to the docs root
        route: Route override; derived from path and front matter if None

    Returns:
        DocumentPage with front matter and body elements
    """
    text = normalize_newlines(text)
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines = lines[:-1]

    front_matter, body_start = split_front_matter(text)

    headings: list[Heading] = []
    code_blocks: list[CodeBlock] = []
    links: list[Link] = []
    admonitions: list[Admonition] = []
    open_containers: list[Admonition] = []
    slugs = _SlugCounter()

    open_fence: dict | None = None
    previous_text: str | None = None

    for index in range(body_start, len(lines)):
        line = lines[index]
        line_number = index + 1

        # ---------------------------------------------------------------------
        # Inside a fenced code block: only look for the closing fence
        # ---------------------------------------------------------------------
        if open_fence is not None:
            close = FENCE_CLOSE.match(line)
            if (
                close
                and close.group("fence")[0] == open_fence["fence"][0]
                and len(close.group("fence")) >= len(open_fence["fence"])
            ):
                code_blocks.append(CodeBlock(
                    language=open_fence["language"],
                    info=open_fence["info"],
                    meta=open_fence["meta"],
                    highlight_spec=open_fence["highlight_spec"],
                    fence=open_fence["fence"],
                    start_line=open_fence["start_line"],
                    end_line=line_number,
                    content="\n".join(open_fence["body"]),
                ))
                open_fence = None
            else:
                open_fence["body"].append(line)
            continue

        opening = FENCE_OPEN.match(line)
        if opening and not (opening.group("fence").startswith("`") and "`" in opening.group("info")):
            info = opening.group("info").strip()
            language, meta, highlight_spec = parse_info_string(info)
            open_fence = {
                "fence": opening.group("fence"),
                "info": info,
                "language": language,
                "meta": meta,
                "highlight_spec": highlight_spec,
                "start_line": line_number,
                "body": [],
            }
            previous_text = None
            continue

        # ---------------------------------------------------------------------
        # Admonitions
        # ---------------------------------------------------------------------
        if CONTAINER_CLOSE.match(line):
            if open_containers:
                open_containers.pop().end_line = line_number
            previous_text = None
            continue

        container = CONTAINER_OPEN.match(line)
        if container:
            admonition = Admonition(
                kind=container.group("kind"),
                syntax="container",
                title=container.group("title") or None,
                line=line_number,
            )
            admonitions.append(admonition)
            open_containers.append(admonition)
            previous_text = None
            continue

        callout = CALLOUT.match(line)
        if callout:
            admonitions.append(Admonition(
                kind=callout.group("kind"),
                syntax="callout",
                title=callout.group("title") or None,
                line=line_number,
            ))

        # ---------------------------------------------------------------------
        # Headings
        # ---------------------------------------------------------------------
        atx = ATX_HEADING.match(line)
        if atx:
            heading_text, explicit = _clean_heading_text(atx.group("text") or "")
            slug = slugs.reserve(explicit) if explicit else slugs.unique(slugify(heading_text))
            headings.append(Heading(
                level=len(atx.group("hashes")),
                text=heading_text,
                slug=slug,
                line=line_number,
            ))
            links.extend(extract_links(heading_text, line_number))
            previous_text = None
            continue

        setext = SETEXT_UNDERLINE.match(line)
        if setext and previous_text is not None:
            heading_text, explicit = _clean_heading_text(previous_text)
            slug = slugs.reserve(explicit) if explicit else slugs.unique(slugify(heading_text))
            headings.append(Heading(
                level=1 if setext.group("char").startswith("=") else 2,
                text=heading_text,
                slug=slug,
                line=line_number - 1,
            ))
            previous_text = None
            continue

        links.extend(extract_links(line, line_number))

        if line.strip() and not _BLOCK_STARTS.match(line) and not line.startswith("    "):
            previous_text = line.strip()
        else:
            previous_text = None

    if open_fence is not None:
        code_blocks.append(CodeBlock(
            language=open_fence["language"],
            info=open_fence["info"],
            meta=open_fence["meta"],
            highlight_spec=open_fence["highlight_spec"],
            fence=open_fence["fence"],
            start_line=open_fence["start_line"],
            end_line=None,
            content="\n".join(open_fence["body"]),
        ))

    if route is None:
        route = route_for(path, front_matter.data)

    return DocumentPage(
        path=path,
        route=route,
        front_matter=front_matter,
        headings=headings,
        code_blocks=code_blocks,
        links=links,
        admonitions=admonitions,
        line_count=len(lines),
    )


def load_document(file_path: str | Path, docs_root: str | Path) -> DocumentPage:
    """
    Read and parse a page from disk.

    Raises:
        DocumentReadError: If the file cannot be read or is not valid UTF-8
    """
    file_path = Path(file_path)
    try:
        relative = to_posix_relative(file_path, docs_root)
    except ValueError as e:
        raise DocumentReadError(file_path.as_posix(), "not inside the docs root") from e

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(relative, str(e)) from e

    logger.debug(f"Parsing {relative}")
    return parse_document(text, relative)
