"""Pydantic schemas for the AnalysisResult JSON contract.

Used at the boundary when a stored analysis comes back with a revision
request: the payload is validated here, then converted into the engine's
dataclasses.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ValidationError
from engine.extraction.platform import BlogPlatformType
from engine.models import AIOModel, AnalysisResult, CitationLevel, RevisionRequest, Severity


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class InsightSchema(CamelModel):
    severity: Severity
    category: str
    message: str


class ActionableTipSchema(CamelModel):
    title: str
    steps: list[str] = Field(default_factory=list)
    expected_impact: str = Field(default="", alias="expectedImpact")


class ImprovementPrioritySchema(CamelModel):
    category: str
    priority: int = Field(ge=1, le=3)
    reason: str = ""
    actionable_tips: list[ActionableTipSchema] = Field(default_factory=list, alias="actionableTips")


class AIOScoresSchema(CamelModel):
    chatgpt: int = Field(default=0, ge=0, le=100)
    perplexity: int = Field(default=0, ge=0, le=100)
    grok: int = Field(default=0, ge=0, le=100)
    gemini: int = Field(default=0, ge=0, le=100)
    claude: int = Field(default=0, ge=0, le=100)


class AIOModelInsightSchema(CamelModel):
    model: AIOModel
    score: int = Field(ge=0, le=100)
    level: CitationLevel
    recommendations: list[str] = Field(default_factory=list)


class AIOAnalysisSchema(CamelModel):
    scores: AIOScoresSchema
    insights: list[AIOModelInsightSchema] = Field(default_factory=list)


class BlogPlatformSchema(CamelModel):
    type: BlogPlatformType
    confidence: float = Field(ge=0.0, le=1.0)
    indicators: list[str] = Field(default_factory=list)


class BlogDetectionSchema(CamelModel):
    is_blog: bool = Field(alias="isBlog")
    platform: BlogPlatformSchema
    reason: str = ""


class AnalysisResultSchema(CamelModel):
    """Wire shape of an analysis result."""

    seo_score: int = Field(ge=0, le=100, alias="seoScore")
    aeo_score: int = Field(ge=0, le=100, alias="aeoScore")
    geo_score: int = Field(ge=0, le=100, alias="geoScore")
    overall_score: int = Field(ge=0, le=100, alias="overallScore")
    insights: list[InsightSchema] = Field(default_factory=list)
    improvement_priorities: list[ImprovementPrioritySchema] = Field(
        default_factory=list, alias="improvementPriorities"
    )
    aio_analysis: AIOAnalysisSchema | None = Field(default=None, alias="aioAnalysis")
    content_guidelines: list[str] = Field(default_factory=list, alias="contentGuidelines")
    url: str | None = None
    blog_detection: BlogDetectionSchema | None = Field(default=None, alias="blogDetection")
    ai_visibility_score: int | None = Field(default=None, ge=0, le=100, alias="aiVisibilityScore")
    ai_visibility_recommendations: list[str] | None = Field(
        default=None, alias="aiVisibilityRecommendations"
    )
    website_analysis: dict[str, Any] | None = Field(default=None, alias="websiteAnalysis")


class RevisionRequestSchema(CamelModel):
    """Inbound revision request."""

    original_content: str = Field(min_length=1, alias="originalContent")
    analysis_result: AnalysisResultSchema = Field(alias="analysisResult")
    url: str = ""


def _first_error_field(exc: PydanticValidationError) -> str | None:
    errors = exc.errors()
    if not errors:
        return None
    return ".".join(str(part) for part in errors[0]["loc"])


def parse_analysis_result(payload: dict[str, Any]) -> AnalysisResult:
    """Validate a camelCase payload and convert it to an AnalysisResult."""
    try:
        schema = AnalysisResultSchema.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError("Invalid analysis result payload", field=_first_error_field(e)) from e
    return AnalysisResult.from_dict(schema.model_dump(mode="json", by_alias=True, exclude_none=True))


def parse_revision_request(payload: dict[str, Any]) -> RevisionRequest:
    """Validate a revision request payload."""
    try:
        schema = RevisionRequestSchema.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError("Invalid revision request payload", field=_first_error_field(e)) from e
    analysis = AnalysisResult.from_dict(
        schema.analysis_result.model_dump(mode="json", by_alias=True, exclude_none=True)
    )
    return RevisionRequest(
        original_content=schema.original_content,
        analysis_result=analysis,
        url=schema.url,
    )
