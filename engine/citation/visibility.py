"""AI visibility score.

A single 0-100 figure for how discoverable and citable a page is across
AI search:

    40%  mean per-model citation score
    25%  structured data and metadata quality
    20%  content quality and trust signals
    15%  freshness
"""

import re
from dataclasses import dataclass

from engine.document import PageDocument
from engine.models import AIOCitationScores
from engine.scoring.checklist import round_half_up
from engine.scoring.signals import (
    CERTIFICATION_RX,
    DATE_SELECTOR,
    PRIMARY_SOURCE_RX,
    RECENT_RX,
    REFERENCE_RX,
    has_author,
)

UPDATE_FREQUENCY_RX = re.compile(r"업데이트|update|최신|fresh|갱신", re.IGNORECASE)
LATEST_INFO_RX = re.compile(r"최신|latest|\bnew\b|새로운|recent", re.IGNORECASE)
CALENDAR_DATE_RX = re.compile(r"\d{4}[-/]\d{1,2}[-/]\d{1,2}|\d{1,2}/\d{1,2}/\d{4}")
AUTHORITATIVE_SOURCE_RX = re.compile(r"\.edu|\.gov|primary source", re.IGNORECASE)


@dataclass
class AIVisibilityBreakdown:
    score: int
    aio_average: float
    structured_data: int
    quality: int
    freshness: int

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "aioAverage": round(self.aio_average, 1),
            "structuredData": self.structured_data,
            "quality": self.quality,
            "freshness": self.freshness,
        }


def structured_data_score(document: PageDocument) -> int:
    score = 0
    if document.has_json_ld:
        score += 30
        if document.json_ld_mentions("FAQPage"):
            score += 20
        if document.json_ld_mentions("Article", "BlogPosting"):
            score += 15
        if document.json_ld_mentions("Organization", "LocalBusiness"):
            score += 10
        if document.json_ld_mentions("Person", "author"):
            score += 10
    if document.count_meta_prefix("og:"):
        score += 5
    return min(100, score)


def quality_score(document: PageDocument, aeo: float, geo: float, seo: float) -> int:
    score = (aeo + geo + seo) / 3 * 0.5

    words = document.word_count
    if words >= 2000:
        score += 20
    elif words >= 1500:
        score += 15
    elif words >= 1000:
        score += 10
    elif words >= 500:
        score += 5

    author = has_author(document)
    credentials = bool(CERTIFICATION_RX.search(document.text))
    dated = document.has(DATE_SELECTOR)
    if author and credentials and dated:
        score += 15
    elif author and (credentials or dated):
        score += 10
    elif author or credentials or dated:
        score += 5

    if PRIMARY_SOURCE_RX.search(document.text) or AUTHORITATIVE_SOURCE_RX.search(document.text):
        score += 10
    elif REFERENCE_RX.search(document.text):
        score += 5

    if document.has('dfn, abbr[title], [class*="definition"]'):
        score += 5

    return min(100, round_half_up(score))


def freshness_score(document: PageDocument) -> int:
    text = document.text
    score = 0
    if document.has(DATE_SELECTOR):
        score += 30
        if RECENT_RX.search(text):
            score += 25
    if UPDATE_FREQUENCY_RX.search(text):
        score += 20
    if LATEST_INFO_RX.search(text):
        score += 15
    if CALENDAR_DATE_RX.search(text):
        score += 10
    return min(100, score)


def calculate_ai_visibility(
    document: PageDocument,
    aio_scores: AIOCitationScores,
    aeo_score: float,
    geo_score: float,
    seo_score: float,
) -> AIVisibilityBreakdown:
    structured = structured_data_score(document)
    quality = quality_score(document, aeo_score, geo_score, seo_score)
    freshness = freshness_score(document)
    total = (
        aio_scores.average * 0.40 + structured * 0.25 + quality * 0.20 + freshness * 0.15
    )
    return AIVisibilityBreakdown(
        score=max(0, min(100, round_half_up(total))),
        aio_average=aio_scores.average,
        structured_data=structured,
        quality=quality,
        freshness=freshness,
    )


def calculate_ai_visibility_score(
    document: PageDocument,
    aio_scores: AIOCitationScores,
    aeo_score: float,
    geo_score: float,
    seo_score: float,
) -> int:
    """Overall AI visibility, 0-100."""
    return calculate_ai_visibility(document, aio_scores, aeo_score, geo_score, seo_score).score


def generate_ai_visibility_recommendations(breakdown: AIVisibilityBreakdown) -> list[str]:
    recommendations: list[str] = []

    if breakdown.score >= 80:
        recommendations.append("AI visibility is strong; keep the content regularly updated.")
        return recommendations

    if breakdown.score >= 60:
        if breakdown.structured_data < 70:
            recommendations.append("Add JSON-LD structured data so AI engines can parse the page.")
        if breakdown.freshness < 60:
            recommendations.append("Show current dates and update the content on a schedule.")
        return recommendations

    if breakdown.structured_data < 50:
        recommendations.append("Add FAQPage or Article schema markup.")
    if breakdown.quality < 50:
        recommendations.append("Lengthen the content and show author expertise.")
    if breakdown.freshness < 50:
        recommendations.append("State publish and update dates and refresh the content regularly.")
    if breakdown.aio_average < 60:
        recommendations.append("Follow the per-model citation recommendations.")
    return recommendations
