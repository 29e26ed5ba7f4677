"""Tests for the AI visibility score."""

from engine.citation.visibility import (
    AIVisibilityBreakdown,
    calculate_ai_visibility,
    calculate_ai_visibility_score,
    freshness_score,
    generate_ai_visibility_recommendations,
    structured_data_score,
)
from engine.document import PageDocument
from engine.models import AIOCitationScores
from tests.fixtures import blank_page, geo_rich_page, page


def uniform_scores(value: int) -> AIOCitationScores:
    return AIOCitationScores(chatgpt=value, perplexity=value, grok=value, gemini=value, claude=value)


class TestComponents:
    """Tests for the visibility components."""

    def test_structured_data_score(self) -> None:
        html = page(
            head='<script type="application/ld+json">'
            '{"@type": "FAQPage", "author": {"@type": "Person"}}</script>'
            '<meta property="og:title" content="t">'
        )
        assert structured_data_score(PageDocument(html)) == 65

    def test_structured_data_blank(self) -> None:
        assert structured_data_score(PageDocument(blank_page())) == 0

    def test_freshness_score(self) -> None:
        html = page('<time datetime="2025-01-02">Updated 2025-01-02, latest figures</time>')
        assert freshness_score(PageDocument(html)) == 100

    def test_freshness_blank(self) -> None:
        assert freshness_score(PageDocument(blank_page())) == 0


class TestVisibilityScore:
    """Tests for calculate_ai_visibility_score."""

    def test_blank_page(self) -> None:
        """Only the AIO share and the axis average contribute."""
        breakdown = calculate_ai_visibility(PageDocument(blank_page()), uniform_scores(50), 0, 0, 0)

        assert breakdown.aio_average == 50
        assert breakdown.structured_data == 0
        assert breakdown.quality == 0
        assert breakdown.freshness == 0
        assert breakdown.score == 20

    def test_range(self) -> None:
        score = calculate_ai_visibility_score(PageDocument(geo_rich_page()), uniform_scores(100), 100, 100, 100)
        assert 0 <= score <= 100

    def test_to_dict(self) -> None:
        payload = calculate_ai_visibility(PageDocument(blank_page()), uniform_scores(10), 0, 0, 0).to_dict()
        assert set(payload) == {"score", "aioAverage", "structuredData", "quality", "freshness"}


class TestRecommendations:
    """Tests for generate_ai_visibility_recommendations."""

    def test_strong(self) -> None:
        breakdown = AIVisibilityBreakdown(score=85, aio_average=90, structured_data=90, quality=80, freshness=80)
        recommendations = generate_ai_visibility_recommendations(breakdown)

        assert len(recommendations) == 1
        assert "strong" in recommendations[0]

    def test_weak(self) -> None:
        breakdown = AIVisibilityBreakdown(score=20, aio_average=30, structured_data=0, quality=10, freshness=0)
        assert len(generate_ai_visibility_recommendations(breakdown)) == 4

    def test_middle(self) -> None:
        breakdown = AIVisibilityBreakdown(score=65, aio_average=70, structured_data=80, quality=60, freshness=40)
        recommendations = generate_ai_visibility_recommendations(breakdown)

        assert recommendations == ["Show current dates and update the content on a schedule."]
