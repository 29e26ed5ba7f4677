"""Tests for content structure analysis."""

from engine.document import PageDocument
from engine.extraction.structure import (
    analyze_content_structure,
    hierarchy_score,
    link_connectivity,
)
from tests.fixtures import page


class TestHierarchyScore:
    """Tests for the heading checklist."""

    def test_full_marks(self) -> None:
        assert hierarchy_score(h1=1, h2=3, h3=5, h4=1) == 100

    def test_multiple_h1_lose_points(self) -> None:
        assert hierarchy_score(h1=2, h2=3, h3=5, h4=1) == 70

    def test_no_headings(self) -> None:
        assert hierarchy_score(h1=0, h2=0, h3=0, h4=0) == 0


class TestLinkConnectivity:
    """Tests for internal link share."""

    def test_no_links(self) -> None:
        assert link_connectivity(()) == 0

    def test_mixed_links(self) -> None:
        hrefs = ("/a", "./b", "#top", "https://other.com")
        assert link_connectivity(hrefs) == 75

    def test_all_external(self) -> None:
        assert link_connectivity(["https://a.com", "http://b.org"]) == 0


class TestAnalyzeContentStructure:
    """Tests for analyze_content_structure."""

    def test_good_hierarchy(self) -> None:
        """One H1, three H2s and five H3s score at least 80."""
        body = "<h1>Title</h1>" + "<h2>Part</h2>" * 3 + "<h3>Detail</h3>" * 5
        result = analyze_content_structure(PageDocument(page(body)))

        assert result.hierarchy.h1 == 1
        assert result.hierarchy.h2 == 3
        assert result.hierarchy.h3 == 5
        assert result.hierarchy.hierarchy_score >= 80

    def test_sections(self) -> None:
        """Sections are counted with their average text length."""
        body = (
            "<section><p>abcd</p></section>"
            '<div class="article-body"><p>abcdefgh</p></div>'
        )
        result = analyze_content_structure(PageDocument(page(body)))

        assert result.sections.count == 2
        assert result.sections.average_length == 6

    def test_content_types(self) -> None:
        """Content-type flags follow English and Korean keywords."""
        body = "<p>A step-by-step guide comparing React vs Vue.</p><p>자주 묻는 질문</p>"
        types = analyze_content_structure(PageDocument(page(body))).content_types

        assert types.guide is True
        assert types.comparison is True
        assert types.faq is True
        assert types.news is False

    def test_to_dict(self) -> None:
        """camelCase payload."""
        payload = analyze_content_structure(PageDocument(page("<h1>T</h1>"))).to_dict()

        assert payload["hierarchy"]["hierarchyScore"] == 30
        assert payload["sections"]["averageLength"] == 0
        assert set(payload["contentTypes"]) == {"informational", "guide", "comparison", "news", "faq"}
