"""Enhanced GEO score (0-140).

Generative engines favor long, varied, well-sectioned pages with media,
structured data and visible freshness. Advanced checks reward research-
grade depth: data tables and charts, infographics, video, multilingual
reach and a stated update cadence.
"""

import structlog

from engine.document import PageDocument
from engine.scoring.checklist import (
    DEFAULT_OPTIONS,
    Check,
    ChecklistResult,
    ScoringOptions,
    TieredCheck,
    evaluate_checklist,
    select_checks,
)
from engine.scoring.signals import (
    CADENCE_RX,
    has_chart,
    has_date_element,
    has_list,
    has_video,
    image_count,
    mentions_languages,
    mentions_recency,
    mentions_statistics,
    mentions_update_cadence,
)

logger = structlog.get_logger(__name__)

GEO_MAX_SCORE = 140

LEXICAL_DIVERSITY_THRESHOLD = 0.3
SNIPPET_MAX_CHARS = 200
SCHEMA_TYPES = ("FAQPage", "Article", "BlogPosting", "HowTo")


def words_at_least(count: int):
    def predicate(document: PageDocument) -> bool:
        return document.word_count >= count

    return predicate


def has_rich_sections(document: PageDocument) -> bool:
    return document.has("h2") and document.has("h3") and has_list(document)


def has_sections(document: PageDocument) -> bool:
    return document.has("section, article, h2")


def has_featured_snippet(document: PageDocument) -> bool:
    """Speakable markup, or an H2 answered by a snippet-length paragraph."""
    if document.json_ld_mentions("speakable", "SpeakableSpecification"):
        return True
    for heading in document.select("h2"):
        paragraph = heading.find_next("p")
        if paragraph is not None and 0 < len(paragraph.get_text(strip=True)) < SNIPPET_MAX_CHARS:
            return True
    return False


def og_count(document: PageDocument) -> int:
    return document.count_meta_prefix("og:")


def twitter_count(document: PageDocument) -> int:
    return document.count_meta_prefix("twitter:")


def has_schema_type(document: PageDocument) -> bool:
    return document.json_ld_mentions(*SCHEMA_TYPES)


def has_professional_data(document: PageDocument) -> bool:
    return (document.has("table") or has_chart(document)) and mentions_statistics(document.text)


def has_infographic(document: PageDocument) -> bool:
    if document.has_class_or_id("infographic"):
        return True
    return image_count(document) >= 5 and (has_chart(document) or document.has("table"))


def is_multilingual(document: PageDocument) -> bool:
    return (
        document.count("link[hreflang]") >= 2
        or document.count("[lang]") >= 2
        or mentions_languages(document.text)
    )


def has_update_cadence(document: PageDocument) -> bool:
    if mentions_update_cadence(document.text):
        return True
    return bool(CADENCE_RX.search(document.text)) and has_date_element(document)


BASELINE_CHECKS = (
    TieredCheck(
        "content_length",
        "Comprehensive length",
        (
            (20, words_at_least(2000)),
            (18, words_at_least(1500)),
            (15, words_at_least(1000)),
            (10, words_at_least(500)),
        ),
        tip="Grow the page toward 1,500-2,000 words of substantive content",
    ),
    TieredCheck(
        "media",
        "Images and video",
        (
            (15, lambda document: image_count(document) >= 3 or has_video(document)),
            (10, lambda document: image_count(document) >= 1),
        ),
        tip="Add at least three images or an embedded video",
    ),
    TieredCheck(
        "sectioning",
        "Sections with subheadings and bullets",
        (
            (15, has_rich_sections),
            (10, has_sections),
        ),
        tip="Organize content into H2/H3 sections with bullet lists",
    ),
    Check(
        "lexical_diversity",
        "Varied vocabulary",
        10,
        lambda document: document.text_context.lexical_diversity > LEXICAL_DIVERSITY_THRESHOLD,
        tip="Vary vocabulary and cover related terms",
    ),
    TieredCheck(
        "freshness",
        "Dated and current",
        (
            (10, lambda document: has_date_element(document) and mentions_recency(document.text)),
            (7, lambda document: has_date_element(document) or mentions_recency(document.text)),
        ),
        tip="Show a machine-readable date and reference current information",
    ),
    TieredCheck(
        "social_meta",
        "Open Graph and Twitter cards",
        (
            (10, lambda document: og_count(document) >= 3 and twitter_count(document) >= 2),
            (6, lambda document: og_count(document) > 0 or twitter_count(document) > 0),
        ),
        tip="Add Open Graph and Twitter card metadata",
    ),
    TieredCheck(
        "structured_data",
        "Structured data with a content schema",
        (
            (15, has_schema_type),
            (10, lambda document: document.has_json_ld),
        ),
        tip="Use Article, BlogPosting, FAQPage or HowTo JSON-LD",
    ),
    Check(
        "featured_snippet",
        "Snippet-ready answer",
        5,
        has_featured_snippet,
        tip="Answer each H2 in a short paragraph under 200 characters",
    ),
)

ADVANCED_CHECKS = (
    TieredCheck(
        "content_depth",
        "In-depth coverage",
        (
            (10, words_at_least(2000)),
            (7, words_at_least(1500)),
        ),
        tip="Cover the topic exhaustively (2,000+ words)",
    ),
    Check(
        "professional_data",
        "Data tables or charts with statistics",
        8,
        has_professional_data,
        tip="Present original data in tables or charts",
    ),
    Check(
        "infographic",
        "Infographics",
        7,
        has_infographic,
        tip="Summarize key data in an infographic",
    ),
    Check(
        "video",
        "Embedded video",
        8,
        has_video,
        tip="Embed an explanatory video",
    ),
    Check(
        "multilingual",
        "Multilingual reach",
        4,
        is_multilingual,
        tip="Offer language alternates with hreflang",
    ),
    Check(
        "update_cadence",
        "Stated update cadence",
        3,
        has_update_cadence,
        tip="State how often the content is reviewed and updated",
    ),
)


def geo_checks(options: ScoringOptions = DEFAULT_OPTIONS) -> tuple:
    return select_checks(BASELINE_CHECKS, ADVANCED_CHECKS, options)


def evaluate_geo(
    document: PageDocument,
    options: ScoringOptions | None = None,
) -> ChecklistResult:
    """Run the GEO checklist and return the full breakdown."""
    result = evaluate_checklist("geo", geo_checks(options or DEFAULT_OPTIONS), document, GEO_MAX_SCORE)
    logger.debug("geo_scored", score=result.score, max_score=result.max_score)
    return result


def calculate_enhanced_geo_score(
    document: PageDocument,
    options: ScoringOptions | None = None,
) -> int:
    """Raw GEO score in [0, 140]."""
    return evaluate_geo(document, options).score
