"""Tests for revision prompt assembly."""

import re

import pytest

from engine.analyzer import analyze_content
from engine.models import (
    ActionableTip,
    AnalysisResult,
    ImprovementPriority,
    Insight,
    RevisionRequest,
    Severity,
)
from engine.revision import prompt_builder
from engine.revision.prompt_builder import (
    bucket_items,
    build_revision_prompt,
    collect_improvement_items,
    truncate,
)
from tests.fixtures import aeo_rich_page, filler_words

TAG_PATTERN = re.compile(r"</?[a-zA-Z][^>]*>")

ARTICLE_HTML = """
<html><head><title>Brewing guide</title></head>
<body>
    <div class="wrapper">
        <h1>Brewing guide</h1>
        <p>Start with <strong>fresh</strong> beans.</p>
        <h2>Grinding</h2>
        <p>Use a <a href="/grinders">burr grinder</a>.</p>
        <img src="/beans.jpg">
    </div>
</body></html>
"""


def make_result(**overrides) -> AnalysisResult:
    values = {
        "seo_score": 40,
        "aeo_score": 55,
        "geo_score": 65,
        "overall_score": 53,
        "insights": [
            Insight(Severity.HIGH, "SEO", "No H1 heading. Add a single H1."),
            Insight(Severity.LOW, "GEO", "Add images."),
        ],
        "improvement_priorities": [
            ImprovementPriority(
                category="AEO",
                priority=1,
                reason="AEO needs improvement",
                actionable_tips=[ActionableTip(title="Add an FAQ section", steps=["List common questions"])],
            )
        ],
        "content_guidelines": ["[GEO] Include images, video and tables", "Link related content internally"],
    }
    values.update(overrides)
    return AnalysisResult(**values)


def make_request(html: str = ARTICLE_HTML, url: str = "https://example.com/brew", **overrides) -> RevisionRequest:
    return RevisionRequest(original_content=html, analysis_result=make_result(**overrides), url=url)


class TestBuildRevisionPrompt:
    """Tests for build_revision_prompt."""

    def test_directives_present(self) -> None:
        prompt = build_revision_prompt(make_request()).lower()

        assert "plain text only" in prompt
        assert "preserve structure" in prompt

    def test_no_html_tags(self) -> None:
        prompt = build_revision_prompt(make_request())

        assert TAG_PATTERN.search(prompt) is None
        assert "Start with fresh beans." in prompt

    def test_no_html_tags_for_real_analysis(self) -> None:
        html = aeo_rich_page()
        result = analyze_content("https://example.com/coffee", html)
        prompt = build_revision_prompt(RevisionRequest(html, result, "https://example.com/coffee"))

        assert TAG_PATTERN.search(prompt) is None
        assert "[Original outline]" in prompt

    def test_outline_included(self) -> None:
        prompt = build_revision_prompt(make_request())

        assert "H1: Brewing guide\nH2: Grinding" in prompt

    def test_loose_div_text_reaches_prompt(self) -> None:
        html = (
            "<h1>Guide</h1><div class='intro'>Critical intro sentence in a div.</div>"
            "<p>Second paragraph.</p>"
        )
        prompt = build_revision_prompt(make_request(html=html))

        assert "Critical intro sentence in a div.\nSecond paragraph." in prompt

    def test_scores_included(self) -> None:
        prompt = build_revision_prompt(make_request())

        assert "- SEO: 40/100" in prompt
        assert "- Overall: 53/100" in prompt

    def test_truncation_marker(self) -> None:
        html = f"<p>{filler_words(200)}</p>"
        prompt = build_revision_prompt(make_request(html=html), max_content_chars=100)
        content = prompt.split("[Original content]\n", 1)[1].split("\n", 1)[0]

        assert content.endswith("...")
        assert len(content) == 103

    def test_default_limit_from_settings(self, monkeypatch) -> None:
        monkeypatch.setenv("PROMPT_MAX_CONTENT_CHARS", "50")
        prompt = build_revision_prompt(make_request(html=f"<p>{filler_words(100)}</p>"))

        content = prompt.split("[Original content]\n", 1)[1].split("\n", 1)[0]
        assert len(content) == 53

    def test_extraction_failure_falls_back(self, monkeypatch) -> None:
        def broken(html):
            raise RuntimeError("parser exploded")

        monkeypatch.setattr(prompt_builder, "extract_structure", broken)
        prompt = build_revision_prompt(make_request())

        assert "Structure extraction failed" in prompt
        assert "[Original outline]" not in prompt
        assert "Start with fresh beans. Grinding Use a burr grinder." in prompt
        assert TAG_PATTERN.search(prompt) is None

    def test_blog_platform_is_constrained(self) -> None:
        prompt = build_revision_prompt(make_request(url="https://blog.naver.com/user/1"))

        assert "Platform: Naver Blog" in prompt
        assert "editor controls layout" in prompt

    def test_frames_are_constrained(self) -> None:
        html = '<div id="mainFrame"><h1>Post</h1><p>Body</p></div>'
        prompt = build_revision_prompt(make_request(html=html))

        assert "editor controls layout" in prompt

    def test_website_may_add_sections(self) -> None:
        prompt = build_revision_prompt(make_request())

        assert "Platform: Website" in prompt
        assert "append short new sections" in prompt


class TestImprovementItems:
    """Tests for collecting and bucketing improvement items."""

    def test_collect(self) -> None:
        items = collect_improvement_items(make_result())

        assert "[SEO] No H1 heading. Add a single H1." in items
        assert "[AEO] Add an FAQ section: List common questions" in items
        assert "[GEO] Include images, video and tables" in items
        # Low-severity insights are not carried over
        assert all("Add images." not in item for item in items)

    def test_deduplicates_and_strips_tags(self) -> None:
        result = make_result(content_guidelines=["Use <b>bold</b> sparingly", "Use bold sparingly"])
        items = collect_improvement_items(result)

        assert items.count("Use bold sparingly") == 1

    def test_bucket(self) -> None:
        buckets = bucket_items(
            ["[SEO] a", "[AEO] b", "Improve GEO coverage", "[AIO chatgpt] c", "plain"]
        )

        assert buckets["SEO"] == ["[SEO] a"]
        assert buckets["AEO"] == ["[AEO] b"]
        assert buckets["GEO"] == ["Improve GEO coverage"]
        assert buckets["Other"] == ["[AIO chatgpt] c", "plain"]


class TestTruncate:
    """Tests for truncate."""

    @pytest.mark.parametrize("text,limit,expected", [("abc", 5, "abc"), ("abcdef", 3, "abc..."), ("", 3, "")])
    def test_truncate(self, text, limit, expected) -> None:
        assert truncate(text, limit) == expected
