"""Pytest configuration and fixtures."""

import os

import pytest

# Set test environment before any app code runs
os.environ["ENV"] = "test"
os.environ.pop("GEMINI_API_KEY", None)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Clear the settings cache so each test sees its own environment."""
    from core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_html() -> str:
    """Small article page with headings, a list and a link."""
    return """
    <html>
    <head>
        <title>Sample Article</title>
        <meta name="description" content="A sample article for tests.">
    </head>
    <body>
        <h1>Sample Article</h1>
        <p>Intro paragraph with a <a href="/related">related link</a>.</p>
        <h2>First section</h2>
        <ul><li>Point one</li><li>Point two</li></ul>
        <script>var tracking = "ignored";</script>
    </body>
    </html>
    """
