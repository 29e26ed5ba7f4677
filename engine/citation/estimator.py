"""AI citation probability per answer engine.

score(model) = clamp(round(blend(seo, aeo, geo) + baseline + bonus), 0, 100)

The blend uses the normalized axis scores and the model's BlendWeights.
The bonus is the model's bonus checklist, capped at 30 for blogs and 45
for websites (which also evaluate the authority checks). Websites also get
a flat baseline credit (0 for blogs). The blend is shared and the website
table is a superset with a higher cap, so a website bonus is always strictly
larger than the blog bonus for the same page.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

import structlog

from engine.citation.weights import (
    DEFAULT_BLEND_WEIGHTS,
    BlendWeights,
    baseline_bonus,
    bonus_cap,
    bonus_checks,
)
from engine.document import PageDocument
from engine.models import (
    AIOCitationAnalysis,
    AIOCitationScores,
    AIOModel,
    AIOModelInsight,
    CitationLevel,
)
from engine.scoring.checklist import ChecklistResult, evaluate_checklist, round_half_up

logger = structlog.get_logger(__name__)


@dataclass
class ModelEstimate:
    """Score with its bonus breakdown for one model."""

    model: AIOModel
    base: float
    bonus: ChecklistResult
    score: int
    baseline: int = 0

    @property
    def total_bonus(self) -> int:
        return self.baseline + self.bonus.score

    @property
    def recommendations(self) -> list[str]:
        """Tips for unmet bonus conditions, highest weight first."""
        return [result.tip for result in self.bonus.failed() if result.tip]


@dataclass
class CitationEstimate:
    estimates: dict[AIOModel, ModelEstimate] = field(default_factory=dict)

    @property
    def scores(self) -> AIOCitationScores:
        return AIOCitationScores(**{model.value: e.score for model, e in self.estimates.items()})


class AICitationEstimator:
    """Estimates citation likelihood for each AI model."""

    def __init__(self, weights: Mapping[AIOModel, BlendWeights] | None = None):
        self.weights = weights or DEFAULT_BLEND_WEIGHTS

    def estimate(
        self,
        document: PageDocument,
        aeo_score: float,
        geo_score: float,
        seo_score: float,
        is_website: bool = True,
    ) -> CitationEstimate:
        result = CitationEstimate()
        cap = bonus_cap(is_website)
        baseline = baseline_bonus(is_website)

        for model in AIOModel:
            base = self.weights[model].blend(seo=seo_score, aeo=aeo_score, geo=geo_score)
            bonus = evaluate_checklist(model.value, bonus_checks(model, is_website), document, cap)
            score = max(0, min(100, round_half_up(base + baseline + bonus.score)))
            result.estimates[model] = ModelEstimate(
                model=model, base=base, bonus=bonus, score=score, baseline=baseline
            )

        logger.debug(
            "aio_scores_estimated",
            is_website=is_website,
            **result.scores.to_dict(),
        )
        return result


def estimate_aio_scores(
    document: PageDocument,
    aeo_score: float,
    geo_score: float,
    seo_score: float,
    weights: Mapping[AIOModel, BlendWeights] | None = None,
    is_website: bool = True,
) -> AIOCitationScores:
    """
    Estimate per-model citation scores.

    Args:
        document: Parsed page
        aeo_score: Normalized AEO score (0-100)
        geo_score: Normalized GEO score (0-100)
        seo_score: Normalized SEO score (0-100)
        weights: Optional blend weight overrides per model
        is_website: Website profile (authority bonuses, higher cap)

    Returns:
        AIOCitationScores with every model in [0, 100]
    """
    estimator = AICitationEstimator(weights)
    return estimator.estimate(document, aeo_score, geo_score, seo_score, is_website).scores


def generate_aio_citation_analysis(
    document: PageDocument,
    aeo_score: float,
    geo_score: float,
    seo_score: float,
    weights: Mapping[AIOModel, BlendWeights] | None = None,
    is_website: bool = True,
) -> AIOCitationAnalysis:
    """Scores plus per-model level and recommendations."""
    estimate = AICitationEstimator(weights).estimate(
        document, aeo_score, geo_score, seo_score, is_website
    )
    insights = [
        AIOModelInsight(
            model=model,
            score=model_estimate.score,
            level=CitationLevel.from_score(model_estimate.score),
            recommendations=model_estimate.recommendations,
        )
        for model, model_estimate in estimate.estimates.items()
    ]
    return AIOCitationAnalysis(scores=estimate.scores, insights=insights)
