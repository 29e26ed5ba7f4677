"""Test fixtures: HTML page builders."""

from tests.fixtures.pages import (
    aeo_rich_page,
    blank_page,
    filler_words,
    geo_rich_page,
    page,
    seo_advanced_page,
    seo_baseline_page,
    website_page,
)

__all__ = [
    "page",
    "blank_page",
    "filler_words",
    "seo_baseline_page",
    "seo_advanced_page",
    "aeo_rich_page",
    "geo_rich_page",
    "website_page",
]
