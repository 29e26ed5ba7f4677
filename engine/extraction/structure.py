"""Content structure analysis.

Measures heading hierarchy, sectioning and internal link connectivity,
and flags which content types (informational, guide, comparison, news,
FAQ) the page text resembles.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType

import structlog

from engine.document import PageDocument, visible_text

logger = structlog.get_logger(__name__)

SECTION_SELECTOR = 'section, article, [class*="section"], [class*="article"]'

INTERNAL_HREF_PREFIXES = ("/", "./", "#")

# English and Korean keywords per content type
CONTENT_TYPE_PATTERNS: MappingProxyType = MappingProxyType(
    {
        "informational": re.compile(r"정보|information|소개|about|개요|overview", re.IGNORECASE),
        "guide": re.compile(r"가이드|guide|튜토리얼|tutorial|방법|how|절차|process", re.IGNORECASE),
        "comparison": re.compile(
            r"비교|compare|vs|versus|대안|alternative|차이|difference", re.IGNORECASE
        ),
        "news": re.compile(r"뉴스|news|업데이트|update|최신|latest|보도|press", re.IGNORECASE),
        "faq": re.compile(r"FAQ|자주 묻는 질문|질문|question|답변|answer", re.IGNORECASE),
    }
)


@dataclass
class HeadingHierarchy:
    """Heading counts and the hierarchy checklist score."""

    h1: int = 0
    h2: int = 0
    h3: int = 0
    h4: int = 0
    hierarchy_score: int = 0

    def to_dict(self) -> dict:
        return {
            "h1": self.h1,
            "h2": self.h2,
            "h3": self.h3,
            "h4": self.h4,
            "hierarchyScore": self.hierarchy_score,
        }


@dataclass
class SectionAnalysis:
    count: int = 0
    average_length: int = 0
    connectivity: int = 0

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "averageLength": self.average_length,
            "connectivity": self.connectivity,
        }


@dataclass
class ContentTypes:
    informational: bool = False
    guide: bool = False
    comparison: bool = False
    news: bool = False
    faq: bool = False

    def to_dict(self) -> dict:
        return {
            "informational": self.informational,
            "guide": self.guide,
            "comparison": self.comparison,
            "news": self.news,
            "faq": self.faq,
        }


@dataclass
class ContentStructureAnalysis:
    """Complete structure analysis of a page."""

    hierarchy: HeadingHierarchy = field(default_factory=HeadingHierarchy)
    sections: SectionAnalysis = field(default_factory=SectionAnalysis)
    content_types: ContentTypes = field(default_factory=ContentTypes)

    def to_dict(self) -> dict:
        return {
            "hierarchy": self.hierarchy.to_dict(),
            "sections": self.sections.to_dict(),
            "contentTypes": self.content_types.to_dict(),
        }


def hierarchy_score(h1: int, h2: int, h3: int, h4: int) -> int:
    """Heading checklist: single H1, 3+ H2, 5+ H3, any H4."""
    score = 0
    if h1 == 1:
        score += 30
    if h2 >= 3:
        score += 30
    if h3 >= 5:
        score += 20
    if h4 > 0:
        score += 20
    return score


def link_connectivity(hrefs: tuple[str, ...] | list[str]) -> int:
    """Share of in-site links among all links, 0-100."""
    if not hrefs:
        return 0
    internal = sum(1 for href in hrefs if href.startswith(INTERNAL_HREF_PREFIXES))
    return min(100, round(internal / len(hrefs) * 100))


class StructureAnalyzer:
    """Analyzes heading hierarchy, sections and content types."""

    def analyze(self, document: PageDocument) -> ContentStructureAnalysis:
        counts = {level: document.count(level) for level in ("h1", "h2", "h3", "h4")}
        hierarchy = HeadingHierarchy(
            **counts,
            hierarchy_score=hierarchy_score(**counts),
        )

        sections = document.select(SECTION_SELECTOR)
        lengths = [len(visible_text(section)) for section in sections]
        section_analysis = SectionAnalysis(
            count=len(sections),
            average_length=round(sum(lengths) / len(lengths)) if lengths else 0,
            connectivity=link_connectivity(document.links),
        )

        text = document.text
        content_types = ContentTypes(
            **{name: bool(pattern.search(text)) for name, pattern in CONTENT_TYPE_PATTERNS.items()}
        )

        logger.debug(
            "structure_analyzed",
            hierarchy_score=hierarchy.hierarchy_score,
            sections=section_analysis.count,
            connectivity=section_analysis.connectivity,
        )

        return ContentStructureAnalysis(
            hierarchy=hierarchy,
            sections=section_analysis,
            content_types=content_types,
        )


def analyze_content_structure(document: PageDocument) -> ContentStructureAnalysis:
    """Convenience function to analyze content structure."""
    return StructureAnalyzer().analyze(document)
