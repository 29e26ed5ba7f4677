"""Enhanced SEO score (0-120).

Baseline (100): classic on-page signals search engines rely on.
Advanced (20): site-level discovery signals only a website controls.
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

logger = structlog.get_logger(__name__)

SEO_MAX_SCORE = 120

TITLE_MAX_LENGTH = 60
DESCRIPTION_MAX_LENGTH = 160
ALT_COVERAGE_THRESHOLD = 0.8

OG_QUAD = ("og:title", "og:description", "og:image", "og:url")


def single_h1(document: PageDocument) -> bool:
    return document.count("h1") == 1


def title_within(minimum: int, maximum: int):
    def predicate(document: PageDocument) -> bool:
        return minimum <= len(document.title) <= maximum

    return predicate


def description_within(minimum: int, maximum: int):
    def predicate(document: PageDocument) -> bool:
        return minimum <= len(document.meta("description")) <= maximum

    return predicate


def alt_coverage(document: PageDocument) -> float:
    """Share of images with an alt attribute; 1.0 when there are no images."""
    images = document.count("img")
    if not images:
        return 1.0
    return document.count("img[alt]") / images


def has_internal_links(document: PageDocument) -> bool:
    return document.has('a[href^="/"], a[href^="./"]')


def has_sitemap_or_feed(document: PageDocument) -> bool:
    return document.has(
        'a[href*="sitemap"], link[href*="sitemap"], '
        'link[rel="alternate"][type="application/rss+xml"], '
        'link[rel="alternate"][type="application/atom+xml"]'
    )


def has_breadcrumb(document: PageDocument) -> bool:
    return (
        document.json_ld_mentions("BreadcrumbList")
        or document.has_class_or_id("breadcrumb")
        or document.has('nav[aria-label*="breadcrumb" i]')
    )


def has_language_targeting(document: PageDocument) -> bool:
    return document.has('link[rel="alternate"][hreflang], html[lang]')


def has_complete_open_graph(document: PageDocument) -> bool:
    return all(document.meta_property(prop) for prop in OG_QUAD)


BASELINE_CHECKS = (
    Check(
        "single_h1",
        "Exactly one H1 heading",
        20,
        single_h1,
        tip="Use exactly one H1 that states the page topic",
        steps=("Keep a single H1 per page", "Demote extra H1s to H2"),
    ),
    Check(
        "title_length",
        "Title of 1-60 characters",
        15,
        title_within(1, TITLE_MAX_LENGTH),
        tip="Write a title tag under 60 characters",
        steps=("Lead with the primary keyword", "Keep it under 60 characters"),
    ),
    Check(
        "meta_description",
        "Meta description of 1-160 characters",
        15,
        description_within(1, DESCRIPTION_MAX_LENGTH),
        tip="Add a meta description under 160 characters",
        steps=("Summarize the page in one or two sentences", "Stay under 160 characters"),
    ),
    Check(
        "image_alt",
        "Alt text on at least 80% of images",
        10,
        lambda document: alt_coverage(document) >= ALT_COVERAGE_THRESHOLD,
        tip="Describe images with alt text",
        steps=("Add alt attributes to content images", "Describe what the image shows"),
    ),
    Check(
        "structured_data",
        "JSON-LD structured data",
        10,
        lambda document: document.has_json_ld,
        tip="Add JSON-LD structured data",
        steps=("Pick a schema.org type (Article, Product, FAQPage)", "Embed it as application/ld+json"),
    ),
    Check(
        "meta_keywords",
        "Keywords meta tag",
        5,
        lambda document: bool(document.meta("keywords")),
        tip="Declare target keywords in a keywords meta tag",
    ),
    Check(
        "og_title",
        "Open Graph title",
        10,
        lambda document: bool(document.meta_property("og:title")),
        tip="Add an og:title tag for link previews",
    ),
    Check(
        "canonical",
        "Canonical URL",
        5,
        lambda document: document.has('link[rel="canonical"]'),
        tip="Declare a canonical URL to consolidate duplicates",
    ),
    Check(
        "internal_links",
        "Internal links",
        5,
        has_internal_links,
        tip="Link to related pages on the same site",
    ),
    Check(
        "h2_present",
        "H2 subheadings",
        5,
        lambda document: document.has("h2"),
        tip="Break content into H2 sections",
    ),
)

ADVANCED_CHECKS = (
    Check(
        "sitemap",
        "Sitemap or feed link",
        5,
        has_sitemap_or_feed,
        tip="Link a sitemap or RSS feed",
    ),
    Check(
        "robots_meta",
        "Robots meta tag",
        3,
        lambda document: document.has('meta[name="robots"]'),
        tip="Add a robots meta tag with explicit indexing directives",
    ),
    Check(
        "breadcrumb",
        "Breadcrumb navigation",
        4,
        has_breadcrumb,
        tip="Add breadcrumb navigation with BreadcrumbList markup",
    ),
    Check(
        "hreflang",
        "Language targeting (hreflang or html lang)",
        3,
        has_language_targeting,
        tip="Declare the page language and hreflang alternates",
    ),
    Check(
        "open_graph_complete",
        "Complete Open Graph (title, description, image, url)",
        5,
        has_complete_open_graph,
        tip="Fill in og:title, og:description, og:image and og:url",
    ),
)

STRICT_OVERRIDES = {
    "title_length": Check(
        "title_length",
        "Title of 30-60 characters",
        15,
        title_within(30, TITLE_MAX_LENGTH),
        tip="Write a descriptive title of 30-60 characters",
    ),
    "meta_description": Check(
        "meta_description",
        "Meta description of 70-160 characters",
        15,
        description_within(70, DESCRIPTION_MAX_LENGTH),
        tip="Write a meta description of 70-160 characters",
    ),
}


def seo_checks(options: ScoringOptions = DEFAULT_OPTIONS) -> tuple:
    return select_checks(BASELINE_CHECKS, ADVANCED_CHECKS, options, STRICT_OVERRIDES)


def evaluate_seo(
    document: PageDocument,
    options: ScoringOptions | None = None,
) -> ChecklistResult:
    """Run the SEO checklist and return the full breakdown."""
    result = evaluate_checklist("seo", seo_checks(options or DEFAULT_OPTIONS), document, SEO_MAX_SCORE)
    logger.debug("seo_scored", score=result.score, max_score=result.max_score)
    return result


def calculate_enhanced_seo_score(
    document: PageDocument,
    options: ScoringOptions | None = None,
) -> int:
    """Raw SEO score in [0, 120]."""
    return evaluate_seo(document, options).score
