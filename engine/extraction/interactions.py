"""Interactive element detection (forms, calculators, comments, sharing)."""

from dataclasses import dataclass

import structlog

from engine.document import PageDocument

logger = structlog.get_logger(__name__)


@dataclass
class InteractionAnalysis:
    """Counts and presence flags for interactive features."""

    forms: int = 0
    calculators: int = 0
    comments: bool = False
    social_share: bool = False
    subscription: bool = False

    def to_dict(self) -> dict:
        return {
            "forms": self.forms,
            "calculators": self.calculators,
            "comments": self.comments,
            "socialShare": self.social_share,
            "subscription": self.subscription,
        }


def analyze_interactions(document: PageDocument) -> InteractionAnalysis:
    """Detect interactive elements via tag and class/id pattern queries."""
    analysis = InteractionAnalysis(
        forms=document.count("form"),
        calculators=document.count_class_or_id("calculator", "calc"),
        comments=document.has_class_or_id("comment", "reply"),
        social_share=document.has_class_or_id("share", "social"),
        subscription=document.has_class_or_id("subscribe", "newsletter"),
    )
    logger.debug("interactions_analyzed", **analysis.to_dict())
    return analysis
