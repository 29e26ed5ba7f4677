"""Tests for revised score estimates."""

from engine.analyzer import analyze_content
from engine.revision.estimator import (
    estimate_revised_scores,
    evaluate_text,
    text_to_document,
)
from engine.scoring.checklist import ScoringOptions

ORIGINAL_HTML = "<html><body><h1>Coffee</h1><p>Coffee is a drink.</p></body></html>"
ORIGINAL_TEXT = "Coffee\nCoffee is a drink."


class TestTextToDocument:
    """Tests for text_to_document."""

    def test_headings_and_lists(self) -> None:
        document = text_to_document(
            "Brewing coffee\nA short introduction to brewing.\n"
            "Equipment\nYou need a few tools.\n- Kettle\n- Grinder\n1. Boil water\n2. Pour"
        )

        assert document.count("h1") == 1
        assert document.count("h2") == 1
        assert document.count("ul li") == 2
        assert document.count("ol li") == 2

    def test_questions_are_not_headings(self) -> None:
        document = text_to_document("Is it good?\nYes, it is very good indeed.")

        assert document.count("h1, h2") == 0

    def test_escapes_text(self) -> None:
        document = text_to_document("Use <b> tags sparingly in copy.")

        assert document.count("b") == 0
        assert "<b>" in document.text

    def test_empty(self) -> None:
        assert text_to_document("").word_count == 0


class TestEstimateRevisedScores:
    """Tests for estimate_revised_scores."""

    def test_unchanged_text_keeps_scores(self) -> None:
        original = analyze_content("https://example.com", ORIGINAL_HTML)
        predicted, improvements = estimate_revised_scores(original, ORIGINAL_TEXT, ORIGINAL_TEXT)

        assert predicted.seo == original.seo_score
        assert predicted.aeo == original.aeo_score
        assert predicted.geo == original.geo_score
        assert improvements == ["Content revised; no additional checklist items newly pass"]

    def test_new_signals_raise_scores(self) -> None:
        original = analyze_content("https://example.com", ORIGINAL_HTML)
        revised = (
            "Coffee\nCoffee is a drink brewed from roasted beans.\n"
            "FAQ\nWhat grind should I use? A medium grind suits most brewers."
        )
        predicted, improvements = estimate_revised_scores(original, ORIGINAL_TEXT, revised)

        assert predicted.aeo > original.aeo_score
        assert predicted.seo > original.seo_score
        assert "[AEO] Question-form content" in improvements
        assert "[SEO] H2 subheadings" in improvements
        assert 0 <= predicted.overall <= 100

    def test_regression_lowers_scores(self) -> None:
        original = analyze_content("https://example.com", ORIGINAL_HTML)
        predicted, _ = estimate_revised_scores(original, ORIGINAL_TEXT, "coffee is a drink.")

        assert predicted.seo < original.seo_score

    def test_scores_clamped(self) -> None:
        original = analyze_content("https://example.com", "")
        predicted, _ = estimate_revised_scores(original, "", "")

        assert predicted.seo >= 0
        assert predicted.overall >= 0


class TestEvaluateText:
    """Tests for evaluate_text."""

    def test_only_text_checks(self) -> None:
        evaluation = evaluate_text("Title\nSome longer body text here.", ScoringOptions())

        assert {r.key for r in evaluation.checklists["seo"].results} == {"single_h1", "h2_present"}
        assert ("seo", "single_h1") in evaluation.passed()
