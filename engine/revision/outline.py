"""Heading outline and ordered text extraction for revision prompts."""

import re
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag
from bs4.element import NavigableString, PreformattedString

from engine.document import NON_CONTENT_TAGS, visible_text

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
BLOCK_TAGS = HEADING_TAGS + ("p", "li", "blockquote", "pre", "dt", "dd", "td", "th", "figcaption")
# Elements that only group other blocks; their loose text forms its own block
CONTAINER_TAGS = (
    "html", "body", "main", "div", "section", "article", "header", "footer", "aside", "nav",
    "form", "figure", "ul", "ol", "dl", "table", "thead", "tbody", "tfoot", "tr", "details",
)
STRUCTURAL_TAGS = BLOCK_TAGS + CONTAINER_TAGS
FRAME_MARKER_RX = re.compile(r"<\s*i?frame\b|mainFrame|se-main-container", re.IGNORECASE)

# Anything that still looks like a tag after text extraction
TAG_RX = re.compile(r"</?[a-zA-Z!][^>]*>")
_SPACES = re.compile(r"[ \t\r\f\v]+")
_BLANK_LINES = re.compile(r"\n{3,}")


@dataclass
class Heading:
    level: int
    text: str

    def outline_line(self) -> str:
        return f"H{self.level}: {self.text}"


@dataclass
class ExtractedStructure:
    """Ordered headings and text blocks of a page."""

    headings: list[Heading] = field(default_factory=list)
    blocks: list[str] = field(default_factory=list)
    has_frames: bool = False

    @property
    def outline(self) -> str:
        return "\n".join(heading.outline_line() for heading in self.headings)

    @property
    def text(self) -> str:
        return "\n".join(self.blocks)


def strip_tags(text: str) -> str:
    """Remove residual markup such as decoded &lt;div&gt; entities."""
    return TAG_RX.sub("", text)


def _clean(text: str) -> str:
    return strip_tags(_SPACES.sub(" ", text)).strip()


def has_frame_markers(html: str) -> bool:
    return bool(FRAME_MARKER_RX.search(html or ""))


def _holds_blocks(tag: Tag) -> bool:
    return tag.name in CONTAINER_TAGS or tag.find(STRUCTURAL_TAGS) is not None


def _collect(container: Tag, structure: ExtractedStructure) -> None:
    """Emit leaf blocks and the loose text runs between them, in order."""
    run: list[str] = []

    def flush() -> None:
        text = _clean("".join(run))
        if text:
            structure.blocks.append(text)
        run.clear()

    for child in container.children:
        if isinstance(child, PreformattedString):
            continue
        if isinstance(child, NavigableString):
            run.append(str(child))
        elif child.name in NON_CONTENT_TAGS or child.name == "head":
            continue
        elif child.name in BLOCK_TAGS:
            flush()
            text = _clean(visible_text(child))
            if not text:
                continue
            if child.name in HEADING_TAGS:
                structure.headings.append(Heading(level=int(child.name[1]), text=text))
            structure.blocks.append(text)
        elif _holds_blocks(child):
            flush()
            _collect(child, structure)
        elif child.name == "br":
            flush()
        else:
            run.append(visible_text(child))
    flush()


def extract_structure(html: str) -> ExtractedStructure:
    """Walk the body in document order, collecting headings and text blocks.

    Text sitting directly in containers (div, section, ...) or in inline
    wrappers between blocks becomes its own block.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    root = soup.body or soup
    structure = ExtractedStructure(has_frames=has_frame_markers(html))
    _collect(root, structure)
    return structure


def flatten_html(html: str) -> str:
    """Markup-free text with collapsed whitespace."""
    soup = BeautifulSoup(html or "", "html.parser")
    return _clean(visible_text(soup))


def strip_markup(content: str) -> str:
    """Normalize generated output to plain text.

    Removes HTML tags, Markdown headings, emphasis markers and code fences
    while keeping line structure.
    """
    if "<" in content and TAG_RX.search(content):
        soup = BeautifulSoup(content, "html.parser")
        for tag in soup.find_all(list(NON_CONTENT_TAGS)):
            tag.decompose()
        for tag in soup.find_all(BLOCK_TAGS + ("br", "div", "section", "article")):
            tag.insert_after("\n")
        content = soup.get_text()

    lines = []
    for line in strip_tags(content).splitlines():
        if line.strip().startswith("```"):
            continue
        line = re.sub(r"^\s{0,3}#{1,6}\s+", "", line)
        line = re.sub(r"(\*\*|__)(.+?)\1", r"\2", line)
        line = re.sub(r"`([^`]*)`", r"\1", line)
        lines.append(_SPACES.sub(" ", line).strip())

    return _BLANK_LINES.sub("\n\n", "\n".join(lines)).strip()
