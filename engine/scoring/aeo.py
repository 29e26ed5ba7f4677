"""Enhanced AEO score (0-130).

Answer engines reward content that already looks like an answer:
questions, FAQs, definitions, lists and tables. The advanced checks add
author-attributed Q&A, step-by-step guides, comparisons and case studies.
"""

import structlog

from engine.document import PageDocument
from engine.scoring.checklist import (
    DEFAULT_OPTIONS,
    Check,
    ChecklistResult,
    ScoringOptions,
    evaluate_checklist,
    select_checks,
)
from engine.scoring.signals import (
    has_author,
    has_date_element,
    has_faq,
    has_list,
    has_question_text,
    has_quotations,
    mentions_case_study,
    mentions_comparison,
    mentions_recency,
    mentions_statistics,
    mentions_steps,
)

logger = structlog.get_logger(__name__)

AEO_MAX_SCORE = 130

MIN_ANSWER_WORDS = 300
MIN_STEP_ITEMS = 5
MIN_STEP_ITEM_LENGTH = 50


def has_questions(document: PageDocument) -> bool:
    return has_question_text(document.text)


def has_answer_structure(document: PageDocument) -> bool:
    """H2 + H3 + list, or a list backed by several paragraphs."""
    if document.has("h2") and document.has("h3") and has_list(document):
        return True
    return has_list(document) and document.count("p") > 3


def is_fresh(document: PageDocument) -> bool:
    return has_date_element(document) or mentions_recency(document.text)


def has_expert_answers(document: PageDocument) -> bool:
    return (has_faq(document) or has_questions(document)) and has_author(document)


def has_step_guide(document: PageDocument) -> bool:
    if not document.has("ol") or not mentions_steps(document.text):
        return False
    detailed = [
        item for item in document.select("ol li") if len(item.get_text(" ", strip=True)) > MIN_STEP_ITEM_LENGTH
    ]
    return len(detailed) >= MIN_STEP_ITEMS


def has_comparison(document: PageDocument) -> bool:
    if not mentions_comparison(document.text):
        return False
    return document.has("table") or document.count("ul, ol") >= 2 or document.has("dl")


def has_case_study(document: PageDocument) -> bool:
    return mentions_case_study(document.text) or document.has_class_or_id("case-study", "casestudy")


BASELINE_CHECKS = (
    Check(
        "questions",
        "Question-form content",
        20,
        has_questions,
        tip="Phrase headings and intros as the questions readers ask",
        steps=("Collect real user questions", "Use them as H2/H3 headings", "Answer directly below"),
    ),
    Check(
        "faq",
        "FAQ section",
        15,
        has_faq,
        tip="Add an FAQ section with FAQPage markup",
        steps=("List 5-10 common questions", "Answer each in 2-3 sentences", "Mark up with FAQPage JSON-LD"),
    ),
    Check(
        "answer_structure",
        "Structured answers (headings and lists)",
        20,
        has_answer_structure,
        tip="Structure answers with subheadings and bullet lists",
    ),
    Check(
        "answer_depth",
        "At least 300 words",
        10,
        lambda document: document.word_count >= MIN_ANSWER_WORDS,
        tip="Expand thin content to at least 300 words",
    ),
    Check(
        "definitions_or_tables",
        "Definition list or table",
        10,
        lambda document: document.has("dl, table"),
        tip="Present key facts in a table or definition list",
    ),
    Check(
        "freshness",
        "Freshness signals",
        10,
        is_fresh,
        tip="Show publish and update dates",
    ),
    Check(
        "glossary",
        "Abbreviation or definition markup",
        7,
        lambda document: document.has("abbr, dfn"),
        tip="Mark up defined terms and abbreviations (dfn, abbr)",
    ),
    Check(
        "statistics",
        "Statistics or research",
        5,
        lambda document: mentions_statistics(document.text),
        tip="Back claims with statistics and studies",
    ),
    Check(
        "quotations",
        "Quotations or cited sources",
        3,
        lambda document: has_quotations(document.text),
        tip="Quote and attribute sources",
    ),
)

ADVANCED_CHECKS = (
    Check(
        "expert_answers",
        "Author-attributed Q&A",
        10,
        has_expert_answers,
        tip="Attribute answers to a named expert author",
        steps=("Add an author byline", "Include author credentials", "Add author to Article JSON-LD"),
    ),
    Check(
        "step_guide",
        "Step-by-step guide",
        8,
        has_step_guide,
        tip="Write procedures as numbered steps with detail",
    ),
    Check(
        "comparison",
        "Comparison table or lists",
        7,
        has_comparison,
        tip="Compare options side by side in a table",
    ),
    Check(
        "case_study",
        "Case study",
        5,
        has_case_study,
        tip="Include a real case study with outcomes",
    ),
)


def aeo_checks(options: ScoringOptions = DEFAULT_OPTIONS) -> tuple:
    return select_checks(BASELINE_CHECKS, ADVANCED_CHECKS, options)


def evaluate_aeo(
    document: PageDocument,
    options: ScoringOptions | None = None,
) -> ChecklistResult:
    """Run the AEO checklist and return the full breakdown."""
    result = evaluate_checklist("aeo", aeo_checks(options or DEFAULT_OPTIONS), document, AEO_MAX_SCORE)
    logger.debug("aeo_scored", score=result.score, max_score=result.max_score)
    return result


def calculate_enhanced_aeo_score(
    document: PageDocument,
    options: ScoringOptions | None = None,
) -> int:
    """Raw AEO score in [0, 130]; 0 for an empty document."""
    return evaluate_aeo(document, options).score
