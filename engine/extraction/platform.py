"""Blog platform detection.

Classifies a page as a hosted-blog post (and which platform) or a general
website. Two independent signals are computed:

- URL signal: hostname matched against a fixed table of blog hosts.
- HTML signal: the generator meta tag, then platform-specific markers in
  the page's own frame, asset, link-element and og:url references where
  the platform's domain and a blog/post path appear together (e.g.
  "blog.naver.com", "velog.io/@"). Outbound anchors never count.

The signals are fused by an ordered rule chain; the first rule with an
opinion wins. The outcome selects the scoring profile downstream.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import StrEnum
from types import MappingProxyType
from urllib.parse import urlparse

import structlog
from bs4 import BeautifulSoup

logger = structlog.get_logger(__name__)


class BlogPlatformType(StrEnum):
    """Supported blog platforms."""

    NAVER = "naver"
    TISTORY = "tistory"
    BRUNCH = "brunch"
    WORDPRESS = "wordpress"
    MEDIUM = "medium"
    VELOG = "velog"
    NONE = "none"


@dataclass(frozen=True)
class BlogPlatform:
    """Detected platform with confidence in [0, 1]."""

    type: BlogPlatformType
    confidence: float
    indicators: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "confidence": round(self.confidence, 2),
            "indicators": list(self.indicators),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BlogPlatform":
        return cls(
            type=BlogPlatformType(data["type"]),
            confidence=float(data["confidence"]),
            indicators=tuple(data.get("indicators", ())),
        )


@dataclass(frozen=True)
class BlogDetectionResult:
    """Final blog/website classification."""

    is_blog: bool
    platform: BlogPlatform
    reason: str

    def to_dict(self) -> dict:
        return {
            "isBlog": self.is_blog,
            "platform": self.platform.to_dict(),
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BlogDetectionResult":
        return cls(
            is_blog=bool(data["isBlog"]),
            platform=BlogPlatform.from_dict(data["platform"]),
            reason=data.get("reason", ""),
        )


@dataclass(frozen=True)
class HostRule:
    """Hostname suffix rule for the URL signal."""

    platform: BlogPlatformType
    hosts: tuple[str, ...]
    confidence: float

    def matches(self, hostname: str) -> bool:
        return any(hostname == host or hostname.endswith("." + host) for host in self.hosts)


@dataclass(frozen=True)
class MarkupRule:
    """Platform marker in raw HTML for the HTML signal."""

    platform: BlogPlatformType
    pattern: re.Pattern
    label: str


# Ordered most to least specific; first match wins
URL_RULES: tuple[HostRule, ...] = (
    HostRule(BlogPlatformType.NAVER, ("blog.naver.com",), 0.95),
    HostRule(BlogPlatformType.TISTORY, ("tistory.com",), 0.90),
    HostRule(BlogPlatformType.BRUNCH, ("brunch.co.kr",), 0.90),
    HostRule(BlogPlatformType.WORDPRESS, ("wordpress.com", "wp.com"), 0.85),
    HostRule(BlogPlatformType.MEDIUM, ("medium.com",), 0.85),
    HostRule(BlogPlatformType.VELOG, ("velog.io",), 0.85),
)

GENERATOR_CONFIDENCE = 0.80
MARKUP_CONFIDENCE = 0.70
AGREEMENT_BOOST = 0.10

# generator meta content fragment -> platform
GENERATOR_PLATFORMS: MappingProxyType = MappingProxyType(
    {
        "wordpress": BlogPlatformType.WORDPRESS,
        "tistory": BlogPlatformType.TISTORY,
    }
)

# (tag, attribute) pairs whose URLs count as markup evidence
STRUCTURAL_ATTRS: tuple[tuple[str, str], ...] = (
    ("iframe", "src"),
    ("frame", "src"),
    ("link", "href"),
    ("script", "src"),
    ("img", "src"),
)

# Each pattern requires the platform domain and a blog/post path in one
# token, so a bare "naver" next to an unrelated "blog" does not count.
MARKUP_RULES: tuple[MarkupRule, ...] = (
    MarkupRule(
        BlogPlatformType.NAVER,
        re.compile(r"blog\.naver\.com|postview\.naver", re.IGNORECASE),
        "Naver blog markup",
    ),
    MarkupRule(
        BlogPlatformType.TISTORY,
        re.compile(r"[a-z0-9-]+\.tistory\.com/(?:entry|m/|\d)|tistory[-_](?:blog|post|entry)", re.IGNORECASE),
        "Tistory post markup",
    ),
    MarkupRule(
        BlogPlatformType.BRUNCH,
        re.compile(r"brunch\.co\.kr/@", re.IGNORECASE),
        "Brunch post markup",
    ),
    MarkupRule(
        BlogPlatformType.WORDPRESS,
        re.compile(r"wp-content/(?:themes|plugins|uploads)|[a-z0-9-]+\.wordpress\.com/\d{4}/", re.IGNORECASE),
        "WordPress post markup",
    ),
    MarkupRule(
        BlogPlatformType.MEDIUM,
        re.compile(r"medium\.com/(?:@|p/)", re.IGNORECASE),
        "Medium post markup",
    ),
    MarkupRule(
        BlogPlatformType.VELOG,
        re.compile(r"velog\.io/@", re.IGNORECASE),
        "Velog post markup",
    ),
)

PLATFORM_NAMES: MappingProxyType = MappingProxyType(
    {
        BlogPlatformType.NAVER: "Naver Blog",
        BlogPlatformType.TISTORY: "Tistory",
        BlogPlatformType.BRUNCH: "Brunch",
        BlogPlatformType.WORDPRESS: "WordPress",
        BlogPlatformType.MEDIUM: "Medium",
        BlogPlatformType.VELOG: "Velog",
        BlogPlatformType.NONE: "Website",
    }
)

NOT_A_BLOG = BlogDetectionResult(
    is_blog=False,
    platform=BlogPlatform(
        type=BlogPlatformType.NONE,
        confidence=0.9,
        indicators=("no blog platform signals",),
    ),
    reason="General website (no blog platform characteristics)",
)


@dataclass(frozen=True)
class Signals:
    """Per-source detection signals fed to the fusion rules."""

    url: BlogPlatform | None
    html: BlogPlatform | None


FusionRule = Callable[[Signals], BlogDetectionResult | None]


def _describe(source: str, platform: BlogPlatform) -> str:
    return f"{source}: {platform.type.value} (confidence {platform.confidence * 100:.0f}%)"


def strong_url_rule(signals: Signals) -> BlogDetectionResult | None:
    """A well-known blog host is decisive on its own."""
    if signals.url and signals.url.confidence >= 0.85:
        return BlogDetectionResult(True, signals.url, _describe("URL pattern", signals.url))
    return None


def html_rule(signals: Signals) -> BlogDetectionResult | None:
    """Markup evidence, boosted when the URL names the same platform."""
    html = signals.html
    if not html or html.confidence < 0.70:
        return None
    if signals.url and signals.url.type == html.type:
        html = replace(
            html,
            confidence=min(1.0, round(html.confidence + AGREEMENT_BOOST, 2)),
            indicators=html.indicators + ("URL agrees",),
        )
    return BlogDetectionResult(True, html, _describe("HTML metadata", html))


def weak_url_rule(signals: Signals) -> BlogDetectionResult | None:
    if signals.url and signals.url.confidence >= 0.70:
        return BlogDetectionResult(
            True, signals.url, _describe("URL pattern (low confidence)", signals.url)
        )
    return None


FUSION_RULES: tuple[FusionRule, ...] = (strong_url_rule, html_rule, weak_url_rule)


@dataclass(frozen=True)
class PlatformDetector:
    """Detects blog platforms from URL and markup."""

    url_rules: tuple[HostRule, ...] = URL_RULES
    markup_rules: tuple[MarkupRule, ...] = MARKUP_RULES
    fusion_rules: tuple[FusionRule, ...] = field(default=FUSION_RULES)

    def detect(self, url: str, html: str) -> BlogDetectionResult:
        signals = Signals(url=self.from_url(url), html=self.from_html(html))

        for rule in self.fusion_rules:
            result = rule(signals)
            if result is not None:
                logger.debug(
                    "platform_detected",
                    url=url,
                    platform=result.platform.type.value,
                    confidence=result.platform.confidence,
                    rule=rule.__name__,
                )
                return result

        return NOT_A_BLOG

    def from_url(self, url: str) -> BlogPlatform | None:
        """Match the URL's hostname against the host table."""
        if not url:
            return None
        try:
            hostname = (urlparse(url).hostname or "").lower()
        except ValueError:
            logger.warning("platform_url_unparseable", url=url)
            return None
        if not hostname:
            return None

        for rule in self.url_rules:
            if rule.matches(hostname):
                return BlogPlatform(
                    type=rule.platform,
                    confidence=rule.confidence,
                    indicators=(f"{hostname} host",),
                )
        return None

    def from_html(self, html: str) -> BlogPlatform | None:
        """Strongest markup signal: generator meta, then platform markers."""
        if not html:
            return None

        soup = BeautifulSoup(html, "html.parser")
        generator = _generator(soup)
        if generator:
            for fragment, platform in GENERATOR_PLATFORMS.items():
                if fragment in generator:
                    return BlogPlatform(
                        type=platform,
                        confidence=GENERATOR_CONFIDENCE,
                        indicators=(f"generator: {generator}",),
                    )

        references = structural_references(soup)
        for rule in self.markup_rules:
            if any(rule.pattern.search(ref) for ref in references):
                return BlogPlatform(
                    type=rule.platform,
                    confidence=MARKUP_CONFIDENCE,
                    indicators=(rule.label,),
                )
        return None


def _generator(soup: BeautifulSoup) -> str:
    for tag in soup.find_all("meta"):
        if (tag.get("name") or "").lower() == "generator":
            return (tag.get("content") or "").strip().lower()
    return ""


def structural_references(soup: BeautifulSoup) -> list[str]:
    """URLs that describe the page itself rather than where it links to.

    Frame, asset and link-element URLs plus URL-valued meta tags (og:url
    and similar). Anchor hrefs and body text are excluded: a site linking
    to its own Naver blog is not a Naver blog.
    """
    references: list[str] = []
    for tag_name, attr in STRUCTURAL_ATTRS:
        for tag in soup.find_all(tag_name):
            value = tag.get(attr)
            if isinstance(value, str) and value:
                references.append(value)
    for tag in soup.find_all("meta"):
        key = (tag.get("property") or tag.get("name") or "").lower()
        if key.endswith("url") and tag.get("content"):
            references.append(tag["content"])
    return references


_default_detector = PlatformDetector()


def detect_blog_platform(url: str, html: str) -> BlogDetectionResult:
    """
    Convenience function to classify a page as blog or website.

    Args:
        url: Page URL
        html: Raw page HTML

    Returns:
        BlogDetectionResult; never raises on malformed input
    """
    return _default_detector.detect(url, html)


def get_blog_platform_name(platform_type: BlogPlatformType | str) -> str:
    """Human-readable platform name."""
    try:
        return PLATFORM_NAMES[BlogPlatformType(platform_type)]
    except ValueError:
        return "Unknown"


def is_known_blog_platform(platform_type: BlogPlatformType) -> bool:
    return platform_type != BlogPlatformType.NONE
