"""Result models shared across the analysis pipeline.

Everything here serializes to the camelCase JSON contract consumed by
clients via to_dict(); from_dict() is the inverse used when a stored
result comes back in with a revision request.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from engine.extraction.platform import BlogDetectionResult


class Severity(StrEnum):
    """Insight severity levels."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


SEVERITY_ORDER = {Severity.HIGH: 0, Severity.MEDIUM: 1, Severity.LOW: 2}


class AIOModel(StrEnum):
    """AI answer engines with a citation estimate."""

    CHATGPT = "chatgpt"
    PERPLEXITY = "perplexity"
    GROK = "grok"
    GEMINI = "gemini"
    CLAUDE = "claude"


class CitationLevel(StrEnum):
    """Coarse citation likelihood band."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def from_score(cls, score: float) -> "CitationLevel":
        if score >= 80:
            return cls.HIGH
        if score >= 60:
            return cls.MEDIUM
        return cls.LOW


@dataclass(frozen=True)
class Insight:
    """A single finding about the page."""

    severity: Severity
    category: str
    message: str

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "category": self.category,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Insight":
        return cls(
            severity=Severity(data["severity"]),
            category=data["category"],
            message=data["message"],
        )


@dataclass
class ActionableTip:
    """Concrete fix for one failed check."""

    title: str
    steps: list[str] = field(default_factory=list)
    expected_impact: str = ""

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "steps": list(self.steps),
            "expectedImpact": self.expected_impact,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ActionableTip":
        return cls(
            title=data["title"],
            steps=list(data.get("steps", [])),
            expected_impact=data.get("expectedImpact", ""),
        )


@dataclass
class ImprovementPriority:
    """One scoring axis ranked by urgency (1 is most urgent)."""

    category: str
    priority: int
    reason: str
    actionable_tips: list[ActionableTip] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "priority": self.priority,
            "reason": self.reason,
            "actionableTips": [tip.to_dict() for tip in self.actionable_tips],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ImprovementPriority":
        return cls(
            category=data["category"],
            priority=int(data["priority"]),
            reason=data.get("reason", ""),
            actionable_tips=[ActionableTip.from_dict(t) for t in data.get("actionableTips", [])],
        )


@dataclass
class AIOCitationScores:
    """Per-model citation probability, each in [0, 100]."""

    chatgpt: int = 0
    perplexity: int = 0
    grok: int = 0
    gemini: int = 0
    claude: int = 0

    def get(self, model: AIOModel) -> int:
        return int(getattr(self, model.value))

    def items(self) -> list[tuple[AIOModel, int]]:
        return [(model, self.get(model)) for model in AIOModel]

    @property
    def average(self) -> float:
        values = [score for _, score in self.items()]
        return sum(values) / len(values)

    def to_dict(self) -> dict:
        return {model.value: score for model, score in self.items()}

    @classmethod
    def from_dict(cls, data: dict) -> "AIOCitationScores":
        return cls(**{model.value: int(data.get(model.value, 0)) for model in AIOModel})


@dataclass
class AIOModelInsight:
    """Citation outlook and recommendations for one model."""

    model: AIOModel
    score: int
    level: CitationLevel
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "model": self.model.value,
            "score": self.score,
            "level": self.level.value,
            "recommendations": list(self.recommendations),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AIOModelInsight":
        return cls(
            model=AIOModel(data["model"]),
            score=int(data["score"]),
            level=CitationLevel(data["level"]),
            recommendations=list(data.get("recommendations", [])),
        )


@dataclass
class AIOCitationAnalysis:
    """Scores plus per-model insights."""

    scores: AIOCitationScores
    insights: list[AIOModelInsight] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "scores": self.scores.to_dict(),
            "insights": [insight.to_dict() for insight in self.insights],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AIOCitationAnalysis":
        return cls(
            scores=AIOCitationScores.from_dict(data.get("scores", {})),
            insights=[AIOModelInsight.from_dict(i) for i in data.get("insights", [])],
        )


@dataclass
class AnalysisResult:
    """Complete assessment of one page."""

    seo_score: int
    aeo_score: int
    geo_score: int
    overall_score: int
    insights: list[Insight] = field(default_factory=list)
    improvement_priorities: list[ImprovementPriority] = field(default_factory=list)
    aio_analysis: AIOCitationAnalysis | None = None
    content_guidelines: list[str] = field(default_factory=list)

    # Optional extras, omitted from the payload when unset
    url: str | None = None
    blog_detection: BlogDetectionResult | None = None
    ai_visibility_score: int | None = None
    ai_visibility_recommendations: list[str] | None = None
    website_analysis: dict[str, Any] | None = None

    @property
    def is_blog(self) -> bool:
        return bool(self.blog_detection and self.blog_detection.is_blog)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {
            "seoScore": self.seo_score,
            "aeoScore": self.aeo_score,
            "geoScore": self.geo_score,
            "overallScore": self.overall_score,
            "insights": [insight.to_dict() for insight in self.insights],
            "improvementPriorities": [p.to_dict() for p in self.improvement_priorities],
            "aioAnalysis": self.aio_analysis.to_dict() if self.aio_analysis else None,
            "contentGuidelines": list(self.content_guidelines),
        }
        if self.url is not None:
            payload["url"] = self.url
        if self.blog_detection is not None:
            payload["blogDetection"] = self.blog_detection.to_dict()
        if self.ai_visibility_score is not None:
            payload["aiVisibilityScore"] = self.ai_visibility_score
        if self.ai_visibility_recommendations is not None:
            payload["aiVisibilityRecommendations"] = list(self.ai_visibility_recommendations)
        if self.website_analysis is not None:
            payload["websiteAnalysis"] = self.website_analysis
        return payload

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisResult":
        """Rebuild from a payload already validated by engine.schemas."""
        aio = data.get("aioAnalysis")
        detection = data.get("blogDetection")
        return cls(
            seo_score=int(data["seoScore"]),
            aeo_score=int(data["aeoScore"]),
            geo_score=int(data["geoScore"]),
            overall_score=int(data["overallScore"]),
            insights=[Insight.from_dict(i) for i in data.get("insights", [])],
            improvement_priorities=[
                ImprovementPriority.from_dict(p) for p in data.get("improvementPriorities", [])
            ],
            aio_analysis=AIOCitationAnalysis.from_dict(aio) if aio else None,
            content_guidelines=list(data.get("contentGuidelines", [])),
            url=data.get("url"),
            blog_detection=BlogDetectionResult.from_dict(detection) if detection else None,
            ai_visibility_score=data.get("aiVisibilityScore"),
            ai_visibility_recommendations=data.get("aiVisibilityRecommendations"),
            website_analysis=data.get("websiteAnalysis"),
        )


@dataclass
class RevisionRequest:
    """Original HTML plus the analysis that motivates the rewrite."""

    original_content: str
    analysis_result: AnalysisResult
    url: str = ""


@dataclass
class PredictedScores:
    """Estimated scores of the revised content."""

    seo: int
    aeo: int
    geo: int
    overall: int

    def to_dict(self) -> dict:
        return {
            "seo": self.seo,
            "aeo": self.aeo,
            "geo": self.geo,
            "overall": self.overall,
        }


@dataclass
class RevisionResult:
    """Revised plain text with its estimated effect."""

    revised_content: str
    predicted_scores: PredictedScores
    improvements: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "revisedContent": self.revised_content,
            "predictedScores": self.predicted_scores.to_dict(),
            "improvements": list(self.improvements),
        }
