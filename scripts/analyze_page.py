#!/usr/bin/env python
"""Analyze a single page for SEO, AEO and GEO readiness.

Reads the HTML from a file or fetches it, runs the analysis pipeline and
prints the AnalysisResult JSON. With --revise, also asks the configured
generative service for a revised plain-text version and prints the
predicted scores.

Usage:
    python scripts/analyze_page.py https://example.com/post
    python scripts/analyze_page.py https://example.com/post --html-file page.html --pretty
    python scripts/analyze_page.py https://blog.naver.com/user/123 --revise
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

import httpx
import structlog

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.exceptions import ContentScopeError  # noqa: E402
from core.logging import setup_logging  # noqa: E402
from engine.analyzer import analyze_content  # noqa: E402
from engine.models import RevisionRequest  # noqa: E402
from engine.revision.engine import revise_content  # noqa: E402

logger = structlog.get_logger(__name__)

USER_AGENT = "ContentScope/0.1 (+page analysis)"


def fetch_html(url: str, timeout: float = 20.0) -> str:
    """Fetch a page, following redirects."""
    with httpx.Client(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    ) as client:
        response = client.get(url)
        response.raise_for_status()
        return response.text


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Analyze a page for SEO/AEO/GEO readiness.")
    parser.add_argument("url", help="Page URL (used for platform detection and HTTPS checks)")
    parser.add_argument("--html-file", type=Path, help="Read HTML from this file instead of fetching")
    parser.add_argument("--strict", action="store_true", help="Use strict SEO length bounds")
    parser.add_argument("--revise", action="store_true", help="Also request a content revision")
    parser.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> dict:
    if args.html_file:
        html = args.html_file.read_text(encoding="utf-8")
    else:
        html = fetch_html(args.url)

    result = analyze_content(args.url, html, strict_mode=args.strict)
    output = {"analysis": result.to_dict()}

    if args.revise:
        revision = await revise_content(
            RevisionRequest(original_content=html, analysis_result=result, url=args.url)
        )
        output["revision"] = revision.to_dict()

    return output


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging()

    url = args.url
    # Ensure URL has protocol
    if not url.startswith(("http://", "https://")):
        args.url = f"https://{url}"

    try:
        output = asyncio.run(run(args))
    except httpx.HTTPError as e:
        logger.error("page_fetch_failed", url=args.url, error=str(e))
        return 1
    except ContentScopeError as e:
        logger.error("analysis_failed", url=args.url, **e.to_dict())
        return 1

    print(json.dumps(output, indent=2 if args.pretty else None, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
