"""Improvement priorities and content-writing guidelines."""

from engine.models import ActionableTip, ImprovementPriority
from engine.scoring.checklist import ChecklistResult

URGENT_THRESHOLD = 60
GOOD_THRESHOLD = 80
MAX_TIPS_PER_CATEGORY = 3

REASONS = {
    "SEO": (
        "Core SEO elements are missing",
        "SEO has room to improve",
        "SEO is in good shape",
    ),
    "AEO": (
        "Answer engine optimization needs urgent work",
        "AEO needs improvement",
        "AEO is in good shape",
    ),
    "GEO": (
        "Generative engine optimization is needed",
        "GEO has room to improve",
        "GEO is in good shape",
    ),
}

SEO_GUIDELINES = (
    "[SEO] Use exactly one H1 per page",
    "[SEO] Keep the title tag within 50-60 characters",
    "[SEO] Write a clear meta description of 150-160 characters",
    "[SEO] Give every image meaningful alt text",
    "[SEO] Include JSON-LD structured data",
)
AEO_GUIDELINES = (
    "[AEO] Summarize the key answer at the start of the content",
    "[AEO] Add an FAQ section that answers questions directly",
    "[AEO] Use step-by-step guides and numbered lists",
    "[AEO] Define technical terms where they first appear",
)
GEO_GUIDELINES = (
    "[GEO] Aim for 2,000 or more words of substantive content",
    "[GEO] Include images, video and tables",
    "[GEO] Include current information and statistics",
    "[GEO] Set Open Graph tags for social sharing",
)
COMMON_GUIDELINES = (
    "State accurate facts and cite trustworthy sources",
    "Show the content update date clearly",
    "Link related content internally",
    "Use a layout optimized for mobile",
)

EXPECTED_IMPACT = {1: "High", 2: "Medium", 3: "Low"}


def priority_for(score: int) -> int:
    """1 below 60, 2 below 80, otherwise 3."""
    if score < URGENT_THRESHOLD:
        return 1
    if score < GOOD_THRESHOLD:
        return 2
    return 3


def actionable_tips(checklist: ChecklistResult | None, priority: int) -> list[ActionableTip]:
    """Tips for the largest unmet checks of an axis."""
    if checklist is None:
        return []
    tips = []
    for result in checklist.failed()[:MAX_TIPS_PER_CATEGORY]:
        if not result.tip:
            continue
        tips.append(
            ActionableTip(
                title=result.tip,
                steps=list(result.steps) or [result.tip],
                expected_impact=f"{EXPECTED_IMPACT[priority]} (+{result.missing_points} pts)",
            )
        )
    return tips


def get_improvement_priorities(
    aeo_score: int,
    geo_score: int,
    seo_score: int,
    checklists: dict[str, ChecklistResult] | None = None,
) -> list[ImprovementPriority]:
    """Axes ordered by urgency with tips drawn from their failed checks."""
    checklists = checklists or {}
    priorities = []
    for category, score in (("SEO", seo_score), ("AEO", aeo_score), ("GEO", geo_score)):
        priority = priority_for(score)
        priorities.append(
            ImprovementPriority(
                category=category,
                priority=priority,
                reason=REASONS[category][priority - 1],
                actionable_tips=actionable_tips(checklists.get(category.lower()), priority),
            )
        )
    return sorted(priorities, key=lambda p: p.priority)


def get_content_writing_guidelines(aeo_score: int, geo_score: int, seo_score: int) -> list[str]:
    guidelines: list[str] = []
    if seo_score < GOOD_THRESHOLD:
        guidelines.extend(SEO_GUIDELINES)
    if aeo_score < GOOD_THRESHOLD:
        guidelines.extend(AEO_GUIDELINES)
    if geo_score < GOOD_THRESHOLD:
        guidelines.extend(GEO_GUIDELINES)
    guidelines.extend(COMMON_GUIDELINES)
    return guidelines
