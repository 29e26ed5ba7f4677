"""Per-model blend weights and bonus tables for citation estimates.

Blend weights mix the three normalized axis scores per model: structure-
sensitive models lean on AEO, recency-sensitive models on GEO. Bonus
tables are checklists of model-specific signals; websites additionally
get the authority table, a higher bonus cap and a flat baseline credit.
"""

from dataclasses import dataclass
from types import MappingProxyType

from engine.document import PageDocument
from engine.models import AIOModel
from engine.scoring.checklist import Check, TieredCheck
from engine.scoring.signals import (
    CERTIFICATION_RX,
    METHODOLOGY_RX,
    PRIMARY_SOURCE_RX,
    REFERENCE_RX,
    has_chart,
    has_date_element,
    has_faq,
    has_quotations,
    has_video,
    image_count,
    mentions_recency,
    mentions_statistics,
    mentions_steps,
)

BLOG_BONUS_CAP = 30
WEBSITE_BONUS_CAP = 45
# Flat authority credit every website gets on top of its bonus checklist
WEBSITE_BASELINE_BONUS = 3


@dataclass(frozen=True)
class BlendWeights:
    """Share of each axis in a model's base score; sums to 1.0."""

    seo: float
    aeo: float
    geo: float

    @property
    def total(self) -> float:
        return self.seo + self.aeo + self.geo

    def blend(self, seo: float, aeo: float, geo: float) -> float:
        return seo * self.seo + aeo * self.aeo + geo * self.geo


DEFAULT_BLEND_WEIGHTS: MappingProxyType = MappingProxyType(
    {
        AIOModel.CHATGPT: BlendWeights(seo=0.40, aeo=0.35, geo=0.25),
        AIOModel.PERPLEXITY: BlendWeights(seo=0.30, aeo=0.25, geo=0.45),
        AIOModel.GROK: BlendWeights(seo=0.30, aeo=0.25, geo=0.45),
        AIOModel.GEMINI: BlendWeights(seo=0.35, aeo=0.25, geo=0.40),
        AIOModel.CLAUDE: BlendWeights(seo=0.25, aeo=0.40, geo=0.35),
    }
)


# Signal helpers


def has_definitions(document: PageDocument) -> bool:
    return document.has('dfn, abbr[title], [class*="definition"]')


def keyword_count(document: PageDocument) -> int:
    keywords = document.meta("keywords")
    return len([k for k in keywords.split(",") if k.strip()]) if keywords else 0


def external_links_at_least(count: int):
    def predicate(document: PageDocument) -> bool:
        return len(document.external_links) >= count

    return predicate


def words_at_least(count: int):
    def predicate(document: PageDocument) -> bool:
        return document.word_count >= count

    return predicate


def sections_at_least(count: int):
    def predicate(document: PageDocument) -> bool:
        return document.count('section, article, [class*="section"], [class*="article"]') >= count

    return predicate


def paragraphs_at_least(count: int):
    def predicate(document: PageDocument) -> bool:
        return document.count("p") >= count

    return predicate


def has_references(document: PageDocument) -> bool:
    return bool(REFERENCE_RX.search(document.text)) or document.has('[class*="citation"]')


def has_primary_sources(document: PageDocument) -> bool:
    if PRIMARY_SOURCE_RX.search(document.text):
        return True
    return any(PRIMARY_SOURCE_RX.search(href) for href in document.external_links)


def has_language_metadata(document: PageDocument) -> bool:
    return document.has('html[lang], meta[property="og:locale:alternate"]')


def has_twitter_card(document: PageDocument) -> bool:
    return document.count_meta_prefix("twitter:") > 0


# Blog-level bonus tables (also applied to websites)

BASE_BONUSES: MappingProxyType = MappingProxyType(
    {
        AIOModel.CHATGPT: (
            Check("structured_data", "Structured data", 10, lambda d: d.has_json_ld,
                  tip="Add JSON-LD structured data so ChatGPT can parse the page"),
            Check("faq", "FAQ section", 8, has_faq,
                  tip="Add an FAQ section that answers user questions directly"),
            Check("step_guide", "Step-by-step guide", 7,
                  lambda d: d.has("ol") and mentions_steps(d.text),
                  tip="Present procedures as numbered step-by-step guides"),
            Check("definitions", "Term definitions", 5, has_definitions,
                  tip="Define key terms with dfn markup or titled abbreviations"),
        ),
        AIOModel.PERPLEXITY: (
            Check("date", "Visible update date", 10, has_date_element,
                  tip="State when the content was last updated"),
            Check("recency", "Current information", 8, lambda d: mentions_recency(d.text),
                  tip="Reference current-year data and recent developments"),
            TieredCheck("source_links", "Source links",
                        ((7, external_links_at_least(5)), (4, external_links_at_least(2))),
                        tip="Link to at least five external sources"),
            Check("keywords", "Keyword metadata", 5, lambda d: keyword_count(d) >= 3,
                  tip="List three or more target keywords in the keywords meta tag"),
        ),
        AIOModel.GROK: (
            Check("date", "Visible update date", 10, has_date_element,
                  tip="Timestamp the content so real-time engines trust it"),
            Check("recency", "Current information", 8, lambda d: mentions_recency(d.text),
                  tip="Lead with the latest developments on the topic"),
            Check("social_card", "Social card metadata", 7, has_twitter_card,
                  tip="Add Twitter/X card metadata"),
            Check("quotations", "Attributed quotes", 5, lambda d: has_quotations(d.text),
                  tip="Quote and attribute primary sources"),
        ),
        AIOModel.GEMINI: (
            TieredCheck("media", "Images and video",
                        ((10, lambda d: image_count(d) >= 3 or has_video(d)),
                         (5, lambda d: image_count(d) >= 1)),
                        tip="Add images and video to enrich the page visually"),
            TieredCheck("tables_lists", "Tables and lists",
                        ((8, lambda d: d.has("table") and d.count("ul, ol") >= 2),
                         (4, lambda d: d.has("table") or d.count("ul, ol") >= 2)),
                        tip="Organize information into tables and lists"),
            Check("structured_data", "Structured data", 7, lambda d: d.has_json_ld,
                  tip="Add schema.org structured data"),
            Check("language", "Language metadata", 5, has_language_metadata,
                  tip="Declare the page language and locale alternates"),
        ),
        AIOModel.CLAUDE: (
            TieredCheck("length", "Long-form depth",
                        ((10, words_at_least(2000)), (6, words_at_least(1000)),
                         (3, words_at_least(500))),
                        tip="Write more detailed, comprehensive content"),
            TieredCheck("sections", "Sectioned structure",
                        ((8, sections_at_least(5)), (4, sections_at_least(3))),
                        tip="Split the content into clearly labeled sections"),
            TieredCheck("paragraphs", "Detailed explanation",
                        ((7, paragraphs_at_least(10)), (4, paragraphs_at_least(5))),
                        tip="Explain each point in its own paragraph"),
            Check("references", "References", 5, has_references,
                  tip="Cite references and sources"),
        ),
    }
)


# Authority signals that only count for websites

OUTBOUND_CITATIONS = TieredCheck(
    "outbound_citations",
    "Outbound citation density",
    ((8, external_links_at_least(10)), (5, external_links_at_least(5))),
    tip="Cite ten or more authoritative external sources",
)
CERTIFIED_DATA = Check(
    "certified_statistics",
    "Certifications and statistics",
    6,
    lambda d: bool(CERTIFICATION_RX.search(d.text)) and mentions_statistics(d.text),
    tip="Show certifications alongside quantified results",
)
CHARTS = Check(
    "charts",
    "Charts",
    5,
    has_chart,
    tip="Visualize data with charts",
)
METHODOLOGY = Check(
    "methodology",
    "Methodology",
    5,
    lambda d: bool(METHODOLOGY_RX.search(d.text)),
    tip="Explain how data was collected and analyzed",
)
PRIMARY_SOURCES = Check(
    "primary_sources",
    "Primary sources",
    6,
    has_primary_sources,
    tip="Link primary research (PubMed, arXiv, DOI)",
)

WEBSITE_BONUSES: MappingProxyType = MappingProxyType(
    {
        AIOModel.CHATGPT: (CERTIFIED_DATA, METHODOLOGY),
        AIOModel.PERPLEXITY: (OUTBOUND_CITATIONS, CERTIFIED_DATA, CHARTS),
        AIOModel.GROK: (OUTBOUND_CITATIONS, PRIMARY_SOURCES),
        AIOModel.GEMINI: (CERTIFIED_DATA, CHARTS),
        AIOModel.CLAUDE: (PRIMARY_SOURCES, METHODOLOGY, OUTBOUND_CITATIONS),
    }
)


def bonus_checks(model: AIOModel, is_website: bool) -> tuple:
    checks = BASE_BONUSES[model]
    if is_website:
        checks = checks + WEBSITE_BONUSES[model]
    return checks


def bonus_cap(is_website: bool) -> int:
    return WEBSITE_BONUS_CAP if is_website else BLOG_BONUS_CAP


def baseline_bonus(is_website: bool) -> int:
    return WEBSITE_BASELINE_BONUS if is_website else 0
