"""Parsed page document shared by every analyzer.

A PageDocument is parsed once per analysis and then only read. The
TextContext (visible body text, whitespace-split words, word count) is
derived at construction so downstream scorers never re-extract it.
"""

import json
import re
from dataclasses import dataclass
from functools import cached_property
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag
from bs4.element import NavigableString, PreformattedString

# Text inside these elements is never visible content
NON_CONTENT_TAGS = frozenset({"script", "style", "noscript", "template"})

# Elements that start a new line of text when rendered
BLOCK_LEVEL_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "body", "br", "caption", "dd",
        "details", "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer",
        "form", "h1", "h2", "h3", "h4", "h5", "h6", "head", "header", "hr", "html",
        "li", "main", "nav", "ol", "p", "pre", "section", "summary", "table", "tbody",
        "td", "tfoot", "th", "thead", "title", "tr", "ul",
    }
)

_BLOCK_BREAK = object()

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class TextContext:
    """Body text and tokenization computed once per document."""

    text: str
    words: tuple[str, ...]
    word_count: int

    @classmethod
    def from_text(cls, text: str) -> "TextContext":
        normalized = _WHITESPACE.sub(" ", text or "").strip()
        words = tuple(normalized.split()) if normalized else ()
        return cls(text=normalized, words=words, word_count=len(words))

    @property
    def lexical_diversity(self) -> float:
        """Unique-word ratio, 0.0 for an empty document."""
        if not self.word_count:
            return 0.0
        return len({w.lower() for w in self.words}) / self.word_count


def visible_text(root: Tag | None) -> str:
    """Visible strings under a node, skipping script-like tags.

    Strings are joined as written; a space is added only at block-level
    element boundaries, so inline markup never splits or pads words.
    """
    if root is None:
        return ""
    parts: list[str] = []
    stack: list = [root]
    while stack:
        node = stack.pop()
        if node is _BLOCK_BREAK:
            parts.append(" ")
        elif isinstance(node, PreformattedString):
            continue
        elif isinstance(node, NavigableString):
            parts.append(str(node))
        elif node.name not in NON_CONTENT_TAGS:
            if node.name in BLOCK_LEVEL_TAGS:
                parts.append(" ")
                stack.append(_BLOCK_BREAK)
            stack.extend(reversed(node.contents))
    return _WHITESPACE.sub(" ", "".join(parts)).strip()


class PageDocument:
    """Immutable view over a parsed HTML page."""

    def __init__(self, html: str, url: str = ""):
        self.html = html or ""
        self.url = url or ""
        self.soup = BeautifulSoup(self.html, "html.parser")

        body = self.soup.body or self.soup
        self.text_context = TextContext.from_text(visible_text(body))

    # Text accessors

    @property
    def text(self) -> str:
        return self.text_context.text

    @property
    def words(self) -> tuple[str, ...]:
        return self.text_context.words

    @property
    def word_count(self) -> int:
        return self.text_context.word_count

    @cached_property
    def full_text(self) -> str:
        """Visible text of the whole document, head included (title etc)."""
        return visible_text(self.soup)

    @cached_property
    def title(self) -> str:
        tag = self.soup.find("title")
        return tag.get_text(strip=True) if tag else ""

    @cached_property
    def scheme(self) -> str:
        return urlparse(self.url).scheme.lower() if self.url else ""

    # Selector helpers

    def select(self, selector: str) -> list[Tag]:
        return self.soup.select(selector)

    def count(self, selector: str) -> int:
        return len(self.soup.select(selector))

    def has(self, selector: str) -> bool:
        return self.soup.select_one(selector) is not None

    def attr(self, selector: str, name: str) -> str:
        """Attribute of the first matching element, or empty string."""
        tag = self.soup.select_one(selector)
        if tag is None:
            return ""
        value = tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return (value or "").strip()

    def meta(self, name: str) -> str:
        """Content of <meta name=...> (case-insensitive name match)."""
        for tag in self.soup.find_all("meta"):
            if (tag.get("name") or "").lower() == name.lower():
                return (tag.get("content") or "").strip()
        return ""

    def meta_property(self, prop: str) -> str:
        """Content of <meta property=...>."""
        tag = self.soup.find("meta", attrs={"property": prop})
        return (tag.get("content") or "").strip() if tag else ""

    def count_meta_prefix(self, prefix: str) -> int:
        """Count meta tags whose property or name starts with prefix."""
        total = 0
        for tag in self.soup.find_all("meta"):
            key = tag.get("property") or tag.get("name") or ""
            if key.startswith(prefix):
                total += 1
        return total

    def has_class_or_id(self, *fragments: str) -> bool:
        """Any element whose class or id contains one of the fragments."""
        return self.count_class_or_id(*fragments) > 0

    def count_class_or_id(self, *fragments: str) -> int:
        selector = ", ".join(
            f'[class*="{fragment}"], [id*="{fragment}"]' for fragment in fragments
        )
        return len(self.soup.select(selector))

    # Structured data

    @cached_property
    def json_ld_blocks(self) -> tuple[str, ...]:
        """Raw text of each application/ld+json script."""
        blocks = []
        for tag in self.soup.find_all("script", attrs={"type": "application/ld+json"}):
            blocks.append(tag.string or tag.get_text() or "")
        return tuple(blocks)

    @property
    def has_json_ld(self) -> bool:
        return bool(self.json_ld_blocks)

    @cached_property
    def json_ld_text(self) -> str:
        return "\n".join(self.json_ld_blocks)

    @cached_property
    def json_ld_types(self) -> frozenset[str]:
        """All @type values found in parseable JSON-LD blocks."""
        types: set[str] = set()
        for block in self.json_ld_blocks:
            try:
                data = json.loads(block)
            except (json.JSONDecodeError, TypeError):
                continue
            _collect_types(data, types)
        return frozenset(types)

    def json_ld_mentions(self, *needles: str) -> bool:
        """Whether any JSON-LD block mentions one of the needles."""
        if not self.json_ld_blocks:
            return False
        if any(needle in self.json_ld_types for needle in needles):
            return True
        return any(needle in self.json_ld_text for needle in needles)

    # Links

    @cached_property
    def links(self) -> tuple[str, ...]:
        return tuple((a.get("href") or "").strip() for a in self.soup.select("a[href]"))

    @cached_property
    def external_links(self) -> tuple[str, ...]:
        return tuple(href for href in self.links if href.startswith(("http://", "https://")))


def _collect_types(node: object, found: set[str]) -> None:
    if isinstance(node, dict):
        value = node.get("@type")
        if isinstance(value, str):
            found.add(value)
        elif isinstance(value, list):
            found.update(v for v in value if isinstance(v, str))
        for child in node.values():
            _collect_types(child, found)
    elif isinstance(node, list):
        for child in node:
            _collect_types(child, found)


def parse_document(html: str, url: str = "") -> PageDocument:
    """Parse HTML into a PageDocument."""
    return PageDocument(html, url)
