"""Crawler-aware share responses.

Social preview bots do not run the single-page app, so they get a static
document carrying Open Graph / Twitter-card tags. Everyone else is redirected
to the real page on the same origin.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from html import escape
from typing import Mapping

CRAWLER_MARKERS: tuple[str, ...] = (
    "bot",
    "crawler",
    "spider",
    "linkedinbot",
    "facebookexternalhit",
    "twitterbot",
    "whatsapp",
    "slackbot",
    "discordbot",
    "telegrambot",
)

_CRAWLER_PATTERN = re.compile("|".join(re.escape(m) for m in CRAWLER_MARKERS), re.IGNORECASE)


@dataclass(frozen=True)
class SharePage:
    """Fixed preview metadata for one shareable page."""

    title: str
    description: str
    document_title: str
    site_name: str
    share_path: str
    redirect_path: str
    image_path: str
    image_width: int
    image_height: int
    image_alt: str
    og_type: str = "article"


MAIC_WORKFLOW_PAGE = SharePage(
    title="MAIC AI Analysis Ecosystem - Workflow & Reliability Architecture",
    description=(
        "AI-Enhanced Matching-Adjusted Indirect Comparison Platform featuring the "
        "CLARA System: Clinical AI Reliability Assessment System"
    ),
    document_title="MAIC AI Analysis Ecosystem - Paul Mattheneus",
    site_name="Paul Mattheneus",
    share_path="/api/share-maic-workflow",
    redirect_path="/maic-workflow",
    image_path="/maic-workflow-og.jpg?v=1",
    image_width=1200,
    image_height=627,
    image_alt=(
        "MAIC Analysis Ecosystem - AI-Enhanced Clinical Research Workflow "
        "featuring CLARA System by Paul Mattheneus"
    ),
)


def is_crawler(user_agent: str | None) -> bool:
    """Return True when the User-Agent looks like a bot or link-preview fetcher.

    Examples:
        >>> is_crawler("Mozilla/5.0 (compatible; Googlebot/2.1)")
        True
        >>> is_crawler("Mozilla/5.0 (Macintosh) Safari/605.1.15")
        False
        >>> is_crawler(None)
        False
    """
    if not isinstance(user_agent, str) or not user_agent:
        return False
    return _CRAWLER_PATTERN.search(user_agent) is not None


def resolve_base_url(headers: Mapping[str, str]) -> str | None:
    """Rebuild the public origin from forwarding headers.

    Args:
        headers: Request headers (lower-case keys or a case-insensitive mapping).

    Returns:
        ``"{proto}://{host}"`` or None when the Host header is absent.
    """
    host = (headers.get("host") or "").strip()
    if not host:
        return None
    proto = (headers.get("x-forwarded-proto") or "https").split(",")[0].strip() or "https"
    return f"{proto}://{host}"


def _absolute(base_url: str | None, path: str) -> str:
    return f"{base_url}{path}" if base_url else path


def build_redirect_url(page: SharePage, base_url: str | None) -> str:
    return _absolute(base_url, page.redirect_path)


def render_share_html(page: SharePage, base_url: str | None) -> str:
    """Render the metadata-only HTML document served to crawlers."""
    title = escape(page.title)
    description = escape(page.description)
    share_url = escape(_absolute(base_url, page.share_path))
    image_url = escape(_absolute(base_url, page.image_path))

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta property="og:title" content="{title}" />
    <meta property="og:description" content="{description}" />
    <meta property="og:type" content="{escape(page.og_type)}" />
    <meta property="og:url" content="{share_url}" />
    <meta property="og:image" content="{image_url}" />
    <meta property="og:image:secure_url" content="{image_url}" />
    <meta property="og:image:width" content="{page.image_width}" />
    <meta property="og:image:height" content="{page.image_height}" />
    <meta property="og:image:alt" content="{escape(page.image_alt)}" />
    <meta property="og:site_name" content="{escape(page.site_name)}" />
    <meta name="description" content="{description}" />
    <meta name="twitter:card" content="summary_large_image" />
    <meta name="twitter:title" content="{title}" />
    <meta name="twitter:description" content="{description}" />
    <meta name="twitter:image" content="{image_url}" />
    <title>{escape(page.document_title)}</title>
</head>
<body></body>
</html>"""
