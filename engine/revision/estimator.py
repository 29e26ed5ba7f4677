"""Score estimates for revised plain-text content.

Revised content has no markup, so both the original and the revised text
are rebuilt into a minimal document with the same heuristics (short
unpunctuated lines become headings, bullet lines become list items) and
scored against the text-meaningful subset of each checklist. The point
difference shifts the original normalized score.
"""

import re
from dataclasses import dataclass
from html import escape

from engine.document import PageDocument
from engine.models import AnalysisResult, PredictedScores
from engine.scoring.aeo import aeo_checks
from engine.scoring.checklist import (
    ChecklistResult,
    ScoringOptions,
    checklist_weight,
    evaluate_checklist,
    round_half_up,
)
from engine.scoring.geo import geo_checks
from engine.scoring.seo import seo_checks

TEXT_CHECK_KEYS = {
    "seo": frozenset({"single_h1", "h2_present"}),
    "aeo": frozenset(
        {
            "questions",
            "faq",
            "answer_structure",
            "answer_depth",
            "freshness",
            "statistics",
            "quotations",
            "step_guide",
            "comparison",
            "case_study",
        }
    ),
    "geo": frozenset(
        {
            "content_length",
            "sectioning",
            "lexical_diversity",
            "freshness",
            "content_depth",
            "multilingual",
            "update_cadence",
        }
    ),
}

CHECK_SETS = {"seo": seo_checks, "aeo": aeo_checks, "geo": geo_checks}

HEADING_MAX_LENGTH = 80
_BULLET = re.compile(r"^\s*(?:[-*•·]|\d+[.)])\s+")
_ORDERED = re.compile(r"^\s*\d+[.)]\s+")
_TERMINAL_PUNCTUATION = (".", "!", "?", "。", "？", "！", ":", ";", ",")


def _looks_like_heading(line: str, next_line: str) -> bool:
    return (
        0 < len(line) <= HEADING_MAX_LENGTH
        and not line.endswith(_TERMINAL_PUNCTUATION)
        and not _BULLET.match(line)
        and len(next_line) > len(line)
    )


def text_to_document(text: str) -> PageDocument:
    """Rebuild a minimal HTML document from plain text."""
    lines = [line.strip() for line in (text or "").splitlines()]
    lines = [line for line in lines if line]

    parts: list[str] = []
    open_list: str | None = None
    seen_heading = False

    for index, line in enumerate(lines):
        next_line = lines[index + 1] if index + 1 < len(lines) else ""
        bullet = _BULLET.match(line)

        if bullet:
            list_tag = "ol" if _ORDERED.match(line) else "ul"
            if open_list != list_tag:
                if open_list:
                    parts.append(f"</{open_list}>")
                parts.append(f"<{list_tag}>")
                open_list = list_tag
            parts.append(f"<li>{escape(line[bullet.end():])}</li>")
            continue

        if open_list:
            parts.append(f"</{open_list}>")
            open_list = None

        if _looks_like_heading(line, next_line):
            tag = "h2" if seen_heading else "h1"
            seen_heading = True
            parts.append(f"<{tag}>{escape(line)}</{tag}>")
        else:
            parts.append(f"<p>{escape(line)}</p>")

    if open_list:
        parts.append(f"</{open_list}>")

    return PageDocument("<html><body>" + "".join(parts) + "</body></html>")


@dataclass
class TextEvaluation:
    checklists: dict[str, ChecklistResult]

    def passed(self) -> set[tuple[str, str]]:
        return {
            (axis, result.key)
            for axis, checklist in self.checklists.items()
            for result in checklist.results
            if result.passed
        }


def evaluate_text(text: str, options: ScoringOptions) -> TextEvaluation:
    document = text_to_document(text)
    checklists = {}
    for axis, check_set in CHECK_SETS.items():
        checks = tuple(c for c in check_set(options) if c.key in TEXT_CHECK_KEYS[axis])
        checklists[axis] = evaluate_checklist(axis, checks, document, checklist_weight(checks))
    return TextEvaluation(checklists=checklists)


def _axis_ceiling(axis: str, options: ScoringOptions) -> int:
    return checklist_weight(CHECK_SETS[axis](options))


def estimate_revised_scores(
    original: AnalysisResult,
    original_text: str,
    revised_text: str,
) -> tuple[PredictedScores, list[str]]:
    """
    Predict scores of the revised text and list newly passing checks.

    Returns:
        (PredictedScores, improvement strings)
    """
    options = ScoringOptions(is_website=not original.is_blog)
    before = evaluate_text(original_text, options)
    after = evaluate_text(revised_text, options)

    baseline = {"seo": original.seo_score, "aeo": original.aeo_score, "geo": original.geo_score}
    predicted: dict[str, int] = {}
    for axis, score in baseline.items():
        delta_points = after.checklists[axis].score - before.checklists[axis].score
        delta = delta_points / _axis_ceiling(axis, options) * 100
        predicted[axis] = max(0, min(100, round_half_up(score + delta)))

    scores = PredictedScores(
        seo=predicted["seo"],
        aeo=predicted["aeo"],
        geo=predicted["geo"],
        overall=round_half_up(sum(predicted.values()) / 3),
    )
    return scores, diff_improvements(before, after)


def diff_improvements(before: TextEvaluation, after: TextEvaluation) -> list[str]:
    """Labels of checks that pass after revision but did not before."""
    newly_passing = after.passed() - before.passed()
    improvements = []
    for axis, checklist in after.checklists.items():
        for result in checklist.results:
            if (axis, result.key) in newly_passing:
                improvements.append(f"[{axis.upper()}] {result.label}")
    if not improvements:
        improvements.append("Content revised; no additional checklist items newly pass")
    return improvements
