"""HTML page builders shared by the unit tests.

Filler text is built from consonant-only tokens so it never trips the
keyword heuristics (dates, questions, statistics, ...) by accident.
"""

import json
from itertools import product

_CONSONANTS = "bcdfghjklmnrstvwxz"


def filler_words(count: int) -> str:
    """`count` distinct neutral words separated by spaces."""
    tokens = ("zq" + "".join(letters) for letters in product(_CONSONANTS, repeat=3))
    return " ".join(token for _, token in zip(range(count), tokens))


def json_ld(data: dict) -> str:
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'


def page(body: str = "", head: str = "", lang: str | None = None) -> str:
    lang_attr = f' lang="{lang}"' if lang else ""
    return f"<html{lang_attr}><head>{head}</head><body>{body}</body></html>"


def blank_page() -> str:
    return page()


def seo_baseline_page() -> str:
    """Every baseline SEO signal, no advanced ones."""
    head = (
        "<title>Choosing a Trail Running Shoe</title>"
        '<meta name="description" content="A short guide to picking trail running shoes.">'
        '<meta name="keywords" content="trail, running, shoes">'
        '<meta property="og:title" content="Choosing a Trail Running Shoe">'
        '<link rel="canonical" href="https://shop.example.com/guides/trail-shoes">'
        + json_ld({"@context": "https://schema.org", "@type": "Thing", "name": "Trail shoes"})
    )
    body = (
        "<h1>Choosing a Trail Running Shoe</h1>"
        '<img src="/a.jpg" alt="Shoe sole"><img src="/b.jpg" alt="Shoe side">'
        "<h2>Grip</h2><p>Lugs matter on mud.</p>"
        '<a href="/guides">More guides</a>'
    )
    return page(body, head)


def seo_advanced_page() -> str:
    """Baseline signals plus sitemap, robots, breadcrumb, lang and full Open Graph."""
    head = (
        "<title>Choosing a Trail Running Shoe</title>"
        '<meta name="description" content="A short guide to picking trail running shoes.">'
        '<meta name="keywords" content="trail, running, shoes">'
        '<meta name="robots" content="index, follow">'
        '<meta property="og:title" content="Choosing a Trail Running Shoe">'
        '<meta property="og:description" content="Pick the right trail shoe.">'
        '<meta property="og:image" content="https://shop.example.com/og.jpg">'
        '<meta property="og:url" content="https://shop.example.com/guides/trail-shoes">'
        '<link rel="canonical" href="https://shop.example.com/guides/trail-shoes">'
        '<link rel="sitemap" href="/sitemap.xml">'
        + json_ld({"@context": "https://schema.org", "@type": "BreadcrumbList", "itemListElement": []})
    )
    body = (
        '<nav class="breadcrumb"><a href="/">Home</a> / <a href="/guides">Guides</a></nav>'
        "<h1>Choosing a Trail Running Shoe</h1>"
        '<img src="/a.jpg" alt="Shoe sole">'
        "<h2>Grip</h2><p>Lugs matter on mud.</p>"
    )
    return page(body, head, lang="en")


def aeo_rich_page() -> str:
    """FAQ, step-by-step guide, comparison table and case study."""
    steps = "".join(
        f"<li>Step {n}: {filler_words(12)} and then check the result carefully.</li>"
        for n in range(1, 6)
    )
    body = (
        "<h1>How do you brew pour-over coffee?</h1>"
        '<p class="date">Updated 2025</p>'
        f"<p>{filler_words(320)}</p>"
        "<h2>Step by step</h2>"
        "<h3>Equipment</h3>"
        f"<ol>{steps}</ol>"
        "<h2>Pour-over vs French press comparison</h2>"
        "<table><tr><th>Method</th><th>Body</th></tr>"
        "<tr><td>Pour-over</td><td>Light</td></tr>"
        "<tr><td>French press</td><td>Heavy</td></tr></table>"
        "<h2>Case study</h2>"
        '<p>A survey found 72% of baristas prefer it. "Clarity wins," one said.</p>'
        '<section class="faq"><h2>FAQ</h2>'
        "<h3>What grind should I use?</h3><p>Medium fine.</p></section>"
    )
    return page(body, "<title>Pour-over coffee guide</title>")


def geo_rich_page(words: int = 2100) -> str:
    """Long, sectioned page with media, social meta and Article schema."""
    head = (
        "<title>Field guide</title>"
        '<meta property="og:title" content="Field guide">'
        '<meta property="og:description" content="Everything in one place">'
        '<meta property="og:image" content="https://example.com/og.jpg">'
        '<meta name="twitter:card" content="summary">'
        '<meta name="twitter:title" content="Field guide">'
        + json_ld({"@context": "https://schema.org", "@type": "Article", "headline": "Field guide"})
    )
    body = (
        "<h1>Field guide</h1>"
        '<time datetime="2025-03-01">Latest revision 2025</time>'
        "<h2>Overview</h2><p>Short answer first.</p>"
        "<h3>Details</h3>"
        f"<p>{filler_words(words)}</p>"
        "<ul><li>One</li><li>Two</li></ul>"
        + "".join(f'<img src="/img{n}.png" alt="Figure {n}">' for n in range(3))
    )
    return page(body, head)


def website_page() -> str:
    """Company page with contact, legal links, trust badge and share buttons."""
    body = (
        "<h1>Acme Analytics</h1>"
        "<h2>About us</h2><p>Our company builds research tools. Contact us by email.</p>"
        "<h2>Services</h2><p>Expert consulting by certified PhD researchers.</p>"
        "<h2>Press</h2><p>Award-winning work cited as a source by media.</p>"
        '<div class="security-badge">Verified</div>'
        '<form action="/contact"><input name="email"></form>'
        '<div class="social-share"><a href="https://twitter.com/share">Share</a></div>'
        '<a href="/privacy">Privacy Policy</a> <a href="/terms">Terms</a>'
    )
    return page(body, "<title>Acme Analytics</title>")
