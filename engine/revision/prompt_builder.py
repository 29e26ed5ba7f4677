"""Revision prompt assembly.

Turns an AnalysisResult and the original HTML into instructions for the
generative service. The prompt carries the heading outline and flattened
text of the page (never its markup), the current scores, improvement
items bucketed by axis, and output constraints: plain text only, original
structure and section order preserved, original tone kept.
"""

import re
from dataclasses import dataclass, field

import structlog

from core.config import get_settings
from engine.extraction.platform import (
    detect_blog_platform,
    get_blog_platform_name,
    is_known_blog_platform,
)
from engine.models import AnalysisResult, RevisionRequest, Severity
from engine.revision.outline import extract_structure, flatten_html, strip_tags

logger = structlog.get_logger(__name__)

MAX_HIGH_INSIGHTS = 5
MAX_GUIDELINES = 5
RECOMMENDATIONS_PER_MODEL = 2
TARGET_SCORE = 80
TRUNCATION_MARKER = "..."

BUCKETS = ("SEO", "AEO", "GEO", "Other")
_TAGGED = re.compile(r"^\[(SEO|AEO|GEO)\]")
_MENTIONS = re.compile(r"\b(SEO|AEO|GEO)\b")

CORE_RULES = (
    "Output plain text only: no HTML tags, no Markdown syntax, no code blocks.",
    "Preserve structure: keep every section in its original order and keep each heading on its own line.",
    "Keep the original tone, style and key message.",
    "Integrate the improvements naturally and avoid keyword stuffing.",
)
BLOG_RULES = (
    "The page lives on a blog platform whose editor controls layout: improve the text inside the "
    "existing sections only, without adding tables, embeds or new sections.",
)
WEBSITE_RULES = (
    "When an improvement calls for it, you may append short new sections (for example an FAQ) "
    "after the existing ones.",
)


@dataclass
class PromptContent:
    """Page content as it will appear in the prompt."""

    outline: str
    text: str
    structure_failed: bool = False
    constrained: bool = False
    platform_name: str = ""
    notes: list[str] = field(default_factory=list)


def collect_improvement_items(result: AnalysisResult) -> list[str]:
    """Checklist lines from insights, priorities, AIO advice and guidelines."""
    items: list[str] = []

    high = [i for i in result.insights if i.severity == Severity.HIGH][:MAX_HIGH_INSIGHTS]
    items.extend(f"[{insight.category}] {insight.message}" for insight in high)

    for priority in result.improvement_priorities:
        for tip in priority.actionable_tips:
            step = tip.steps[0] if tip.steps else ""
            line = f"[{priority.category}] {tip.title}"
            if step and step != tip.title:
                line += f": {step}"
            items.append(line)

    if result.aio_analysis:
        for insight in result.aio_analysis.insights:
            for recommendation in insight.recommendations[:RECOMMENDATIONS_PER_MODEL]:
                items.append(f"[AIO {insight.model.value}] {recommendation}")

    items.extend(result.content_guidelines[:MAX_GUIDELINES])

    deduplicated = list(dict.fromkeys(strip_tags(item).strip() for item in items))
    return [item for item in deduplicated if item]


def bucket_items(items: list[str]) -> dict[str, list[str]]:
    """Group items by axis tag, falling back to axis mentions, then Other."""
    buckets: dict[str, list[str]] = {name: [] for name in BUCKETS}
    for item in items:
        match = _TAGGED.match(item) or _MENTIONS.search(item)
        buckets[match.group(1) if match else "Other"].append(item)
    return buckets


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + TRUNCATION_MARKER


def prepare_content(request: RevisionRequest, max_chars: int) -> PromptContent:
    """Detect the platform and extract outline and text, degrading to flat text."""
    detection = detect_blog_platform(request.url, request.original_content)
    is_blog_platform = detection.is_blog and is_known_blog_platform(detection.platform.type)

    try:
        structure = extract_structure(request.original_content)
        content = PromptContent(
            outline=structure.outline,
            text=truncate(structure.text, max_chars),
            constrained=is_blog_platform or structure.has_frames,
        )
    except Exception as e:
        logger.warning("structure_extraction_failed", url=request.url, error=str(e))
        content = PromptContent(
            outline="",
            text=truncate(flatten_html(request.original_content), max_chars),
            structure_failed=True,
            constrained=is_blog_platform,
            notes=["Structure extraction failed; the content below is flattened text without headings."],
        )

    content.platform_name = get_blog_platform_name(detection.platform.type)
    return content


def build_revision_prompt(request: RevisionRequest, max_content_chars: int | None = None) -> str:
    """
    Build the instruction prompt for a content revision.

    Args:
        request: Original HTML, its analysis and URL
        max_content_chars: Text budget (defaults to settings.prompt_max_content_chars)

    Returns:
        Prompt text containing no markup from the original page
    """
    limit = max_content_chars or get_settings().prompt_max_content_chars
    result = request.analysis_result
    content = prepare_content(request, limit)
    buckets = bucket_items(collect_improvement_items(result))

    sections: list[str] = [
        "You are a content editor specializing in SEO, AEO (answer engine optimization) and "
        "GEO (generative engine optimization). Revise the page content below using the "
        "analysis results.",
        "",
        "[Page]",
        f"URL: {request.url or 'unknown'}",
        f"Platform: {content.platform_name}",
        "",
        "[Current scores]",
        f"- SEO: {result.seo_score}/100 (target: {TARGET_SCORE}+)",
        f"- AEO: {result.aeo_score}/100 (target: {TARGET_SCORE}+)",
        f"- GEO: {result.geo_score}/100 (target: {TARGET_SCORE}+)",
        f"- Overall: {result.overall_score}/100",
        "",
        "[Improvements needed]",
    ]
    for name in BUCKETS:
        if buckets[name]:
            sections.append(f"{name}:")
            sections.extend(f"- {item}" for item in buckets[name])
    if not any(buckets.values()):
        sections.append("- No specific issues; polish clarity and completeness.")

    sections.append("")
    for note in content.notes:
        sections.extend([f"[Note] {note}", ""])

    if not content.structure_failed:
        sections.append("[Original outline]")
        sections.append(content.outline or "(no headings found)")
        sections.append("")

    sections.append("[Original content]")
    sections.append(content.text or "(empty)")
    sections.append("")

    rules = CORE_RULES + (BLOG_RULES if content.constrained else WEBSITE_RULES)
    sections.append("[Revision rules]")
    sections.extend(f"{number}. {rule}" for number, rule in enumerate(rules, start=1))
    sections.append("")
    sections.append("Return only the revised content as plain text.")

    prompt = "\n".join(sections)
    logger.debug(
        "revision_prompt_built",
        url=request.url,
        constrained=content.constrained,
        structure_failed=content.structure_failed,
        length=len(prompt),
    )
    return prompt
