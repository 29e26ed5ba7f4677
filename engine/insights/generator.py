"""Insight generation.

Website insights come from the structure, trust and interaction analyses:
one insight per failed condition, always in the same order so output is
stable. Score insights explain weak SEO/AEO/GEO axes and AI-citation gaps.
"""

import structlog

from engine.document import PageDocument
from engine.extraction.interactions import InteractionAnalysis
from engine.extraction.structure import ContentStructureAnalysis
from engine.extraction.trust import TrustSignalsAnalysis
from engine.models import SEVERITY_ORDER, Insight, Severity
from engine.scoring.signals import has_faq, has_video, image_count, mentions_recency

logger = structlog.get_logger(__name__)

HIERARCHY_THRESHOLD = 60
CONNECTIVITY_THRESHOLD = 30
EEAT_THRESHOLD = 70
EEAT_DIMENSION_THRESHOLD = 60
AXIS_THRESHOLD = 70
STRONG_THRESHOLD = 80


def generate_website_insights(
    structure: ContentStructureAnalysis,
    trust: TrustSignalsAnalysis,
    interactions: InteractionAnalysis,
) -> list[Insight]:
    """
    Findings for general websites.

    Evaluation order is fixed: structure, E-E-A-T, business, security,
    interaction.
    """
    insights: list[Insight] = []
    hierarchy = structure.hierarchy

    if hierarchy.hierarchy_score < HIERARCHY_THRESHOLD:
        insights.append(
            Insight(
                Severity.MEDIUM,
                "structure",
                f"Heading hierarchy is weak (H1: {hierarchy.h1}, H2: {hierarchy.h2}, "
                f"H3: {hierarchy.h3}). Use one H1, three or more H2s and supporting H3s.",
            )
        )
    if structure.sections.connectivity < CONNECTIVITY_THRESHOLD:
        insights.append(
            Insight(
                Severity.LOW,
                "structure",
                f"Internal link connectivity is {structure.sections.connectivity}%. "
                "Link related pages on the site.",
            )
        )

    eeat = trust.eeat
    if eeat.overall < EEAT_THRESHOLD:
        insights.append(
            Insight(
                Severity.MEDIUM,
                "trust",
                f"E-E-A-T score is {eeat.overall}. Show experience, expertise, "
                "authority and trust signals.",
            )
        )
    if eeat.expertise < EEAT_DIMENSION_THRESHOLD:
        insights.append(
            Insight(
                Severity.MEDIUM,
                "expertise",
                "Expertise signals are missing. Add author credentials and qualifications.",
            )
        )
    if eeat.authoritativeness < EEAT_DIMENSION_THRESHOLD:
        insights.append(
            Insight(
                Severity.MEDIUM,
                "authority",
                "Authority signals are weak. Cite sources and show awards or media coverage.",
            )
        )

    business = trust.business
    if not business.company_info:
        insights.append(
            Insight(Severity.MEDIUM, "business", "Company information is missing. Add an About page.")
        )
    if not business.contact_info:
        insights.append(
            Insight(
                Severity.HIGH,
                "business",
                "Contact information is missing. Publish a phone number, email or address.",
            )
        )
    if not business.legal_pages:
        insights.append(
            Insight(
                Severity.MEDIUM,
                "business",
                "Legal pages are missing. Link terms of service and a privacy policy.",
            )
        )

    security = trust.security
    if not security.has_ssl:
        insights.append(
            Insight(Severity.HIGH, "security", "The page is not served over HTTPS.")
        )
    if not security.has_privacy_policy:
        insights.append(
            Insight(Severity.MEDIUM, "security", "No privacy policy was found.")
        )

    if interactions.forms == 0:
        insights.append(
            Insight(
                Severity.LOW,
                "interaction",
                "No forms found. Add a contact or inquiry form to engage visitors.",
            )
        )
    if not interactions.social_share:
        insights.append(
            Insight(Severity.LOW, "interaction", "No social sharing buttons found.")
        )

    logger.debug("website_insights_generated", count=len(insights))
    return insights


def generate_score_insights(
    document: PageDocument,
    seo_score: int,
    aeo_score: int,
    geo_score: int,
) -> list[Insight]:
    """Findings explaining weak axes and AI-citation gaps."""
    insights: list[Insight] = []
    word_count = document.word_count

    if seo_score < AXIS_THRESHOLD:
        insights.extend(_seo_findings(document))

    if aeo_score < AXIS_THRESHOLD:
        if "?" not in document.text and "？" not in document.text:
            insights.append(
                Insight(Severity.MEDIUM, "AEO", "Few question-form passages. Include the questions users ask.")
            )
        if not has_faq(document):
            insights.append(
                Insight(Severity.LOW, "AEO", "Add an FAQ section to be cited by answer engines.")
            )
        if word_count < 300:
            insights.append(
                Insight(
                    Severity.MEDIUM,
                    "AEO",
                    f"Content is too short ({word_count} words). Aim for at least 300 words.",
                )
            )

    if geo_score < AXIS_THRESHOLD:
        if word_count < 500:
            insights.append(
                Insight(
                    Severity.MEDIUM,
                    "GEO",
                    f"Content is thin ({word_count} words). Generative engines favor 500+ words.",
                )
            )
        if image_count(document) == 0:
            insights.append(
                Insight(Severity.LOW, "GEO", "Add images or video to enrich the content.")
            )
        if not document.has_json_ld:
            insights.append(
                Insight(
                    Severity.MEDIUM,
                    "GEO",
                    "Add JSON-LD structured data so generative engines understand the page.",
                )
            )
        if document.count_meta_prefix("og:") < 3:
            insights.append(
                Insight(Severity.MEDIUM, "GEO", "Open Graph tags are incomplete.")
            )

    if not document.has_json_ld:
        insights.append(
            Insight(
                Severity.HIGH,
                "AIO",
                "No structured data (JSON-LD). Every AI model relies on it to understand content.",
            )
        )
    if not has_faq(document) and (aeo_score < STRONG_THRESHOLD or geo_score < STRONG_THRESHOLD):
        insights.append(
            Insight(
                Severity.MEDIUM,
                "AIO",
                "An FAQ section improves citation by ChatGPT, Perplexity and other models.",
            )
        )
    if not mentions_recency(document.text) and word_count > 500:
        insights.append(
            Insight(
                Severity.LOW,
                "AIO",
                "State an update date to be cited by real-time engines such as Perplexity.",
            )
        )
    if image_count(document) == 0 and not has_video(document) and geo_score < STRONG_THRESHOLD:
        insights.append(
            Insight(
                Severity.MEDIUM,
                "AIO",
                "Images or video improve citation by media-oriented models such as Gemini.",
            )
        )

    if min(seo_score, aeo_score, geo_score) >= STRONG_THRESHOLD:
        insights.append(
            Insight(Severity.LOW, "Overall", "Great work: the content is well optimized for AI search.")
        )

    return insights


def _seo_findings(document: PageDocument) -> list[Insight]:
    findings: list[Insight] = []

    h1_count = document.count("h1")
    if h1_count == 0:
        findings.append(Insight(Severity.HIGH, "SEO", "No H1 heading. Add a single H1."))
    elif h1_count > 1:
        findings.append(
            Insight(Severity.MEDIUM, "SEO", f"Found {h1_count} H1 headings. Use exactly one.")
        )

    title = document.title
    if not title:
        findings.append(Insight(Severity.HIGH, "SEO", "Missing title tag."))
    elif len(title) > 60:
        findings.append(
            Insight(
                Severity.MEDIUM,
                "SEO",
                f"Title is {len(title)} characters. Keep it under 60.",
            )
        )

    if not document.meta("description"):
        findings.append(
            Insight(Severity.HIGH, "SEO", "Missing meta description for search result snippets.")
        )

    images = document.select("img")
    missing_alt = sum(1 for image in images if not image.get("alt"))
    if missing_alt:
        findings.append(
            Insight(
                Severity.HIGH if missing_alt == len(images) else Severity.MEDIUM,
                "SEO",
                f"{missing_alt} image(s) lack alt text.",
            )
        )
    return findings


def sort_insights_by_severity(insights: list[Insight]) -> list[Insight]:
    """Stable sort, High first."""
    return sorted(insights, key=lambda insight: SEVERITY_ORDER[insight.severity])
