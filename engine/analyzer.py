"""Page analysis pipeline.

Parses the page once, classifies it as blog or website, runs the three
checklist scorers under the matching profile, estimates per-model citation
scores, and assembles insights, priorities and guidelines into an
AnalysisResult.
"""

import time
from dataclasses import dataclass, field

import structlog

from core.logging import page_context
from engine.citation.estimator import generate_aio_citation_analysis
from engine.citation.visibility import (
    calculate_ai_visibility,
    generate_ai_visibility_recommendations,
)
from engine.document import PageDocument
from engine.extraction.interactions import InteractionAnalysis, analyze_interactions
from engine.extraction.platform import BlogDetectionResult, detect_blog_platform
from engine.extraction.structure import ContentStructureAnalysis, analyze_content_structure
from engine.extraction.trust import TrustSignalsAnalysis, analyze_trust_signals
from engine.insights.generator import generate_score_insights, generate_website_insights
from engine.insights.guidelines import get_content_writing_guidelines, get_improvement_priorities
from engine.models import AnalysisResult
from engine.scoring.aeo import evaluate_aeo
from engine.scoring.checklist import ChecklistResult, ScoringOptions, round_half_up
from engine.scoring.geo import evaluate_geo
from engine.scoring.seo import evaluate_seo

logger = structlog.get_logger(__name__)


@dataclass
class WebsiteAnalysis:
    """Structure, trust and interaction breakdown for general websites."""

    structure: ContentStructureAnalysis
    trust: TrustSignalsAnalysis
    interactions: InteractionAnalysis

    def to_dict(self) -> dict:
        return {
            "contentStructure": self.structure.to_dict(),
            "trustSignals": self.trust.to_dict(),
            "interactions": self.interactions.to_dict(),
        }


@dataclass
class AnalysisContext:
    """Intermediate products of one analysis, kept for callers that need them."""

    document: PageDocument
    detection: BlogDetectionResult
    options: ScoringOptions
    checklists: dict[str, ChecklistResult] = field(default_factory=dict)
    website: WebsiteAnalysis | None = None


class ContentAnalyzer:
    """Runs the full analysis for a single page."""

    def __init__(self, strict_mode: bool = False):
        self.strict_mode = strict_mode

    def analyze(self, url: str, html: str) -> AnalysisResult:
        return self.analyze_with_context(url, html)[0]

    def analyze_with_context(self, url: str, html: str) -> tuple[AnalysisResult, AnalysisContext]:
        with page_context(url):
            return self._run(url, html)

    def _run(self, url: str, html: str) -> tuple[AnalysisResult, AnalysisContext]:
        start_time = time.perf_counter()

        document = PageDocument(html, url)
        detection = detect_blog_platform(url, html)
        options = ScoringOptions(is_website=not detection.is_blog, strict_mode=self.strict_mode)
        context = AnalysisContext(document=document, detection=detection, options=options)

        context.checklists = {
            "seo": evaluate_seo(document, options),
            "aeo": evaluate_aeo(document, options),
            "geo": evaluate_geo(document, options),
        }
        seo = context.checklists["seo"].normalized
        aeo = context.checklists["aeo"].normalized
        geo = context.checklists["geo"].normalized
        overall = round_half_up((seo + aeo + geo) / 3)

        aio_analysis = generate_aio_citation_analysis(
            document, aeo, geo, seo, is_website=options.is_website
        )
        visibility = calculate_ai_visibility(document, aio_analysis.scores, aeo, geo, seo)

        insights = generate_score_insights(document, seo, aeo, geo)
        if options.is_website:
            context.website = WebsiteAnalysis(
                structure=analyze_content_structure(document),
                trust=analyze_trust_signals(document, url),
                interactions=analyze_interactions(document),
            )
            insights.extend(
                generate_website_insights(
                    context.website.structure,
                    context.website.trust,
                    context.website.interactions,
                )
            )

        result = AnalysisResult(
            seo_score=seo,
            aeo_score=aeo,
            geo_score=geo,
            overall_score=overall,
            insights=insights,
            improvement_priorities=get_improvement_priorities(aeo, geo, seo, context.checklists),
            aio_analysis=aio_analysis,
            content_guidelines=get_content_writing_guidelines(aeo, geo, seo),
            url=url,
            blog_detection=detection,
            ai_visibility_score=visibility.score,
            ai_visibility_recommendations=generate_ai_visibility_recommendations(visibility),
            website_analysis=context.website.to_dict() if context.website else None,
        )

        logger.info(
            "analysis_completed",
            url=url,
            platform=detection.platform.type.value,
            is_blog=detection.is_blog,
            seo=seo,
            aeo=aeo,
            geo=geo,
            overall=overall,
            insights=len(insights),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 1),
        )
        return result, context


def analyze_content(url: str, html: str, strict_mode: bool = False) -> AnalysisResult:
    """
    Convenience function to analyze a page.

    Args:
        url: Page URL (used for platform detection and HTTPS checks)
        html: Raw page HTML
        strict_mode: Tighter title/description bounds

    Returns:
        AnalysisResult; to_dict() gives the JSON contract
    """
    return ContentAnalyzer(strict_mode=strict_mode).analyze(url, html)
