"""
URL helpers shared by the extractors, consent decoder and classifier.
"""

from __future__ import annotations

import re
from urllib import parse

GOOGLE_TAG_HOST = "googletagmanager.com"
GOOGLE_ANALYTICS_HOST = "google-analytics.com"


def extract_domain(url: str) -> str:
    """Extract the hostname from a URL string."""
    try:
        parsed = parse.urlparse(url)
        return parsed.hostname or "unknown"
    except ValueError:
        return "unknown"


def is_tag_manager_host(url: str) -> bool:
    """Return ``True`` when *url* is served from ``googletagmanager.com``."""
    return GOOGLE_TAG_HOST in extract_domain(url)


def is_google_analytics_host(url: str) -> bool:
    """Return ``True`` when *url* is served from ``google-analytics.com``."""
    return GOOGLE_ANALYTICS_HOST in extract_domain(url)


def is_google_host(url: str) -> bool:
    """Return ``True`` when *url* targets Google's own GTM or GA hosts."""
    host = extract_domain(url)
    return GOOGLE_TAG_HOST in host or GOOGLE_ANALYTICS_HOST in host


def query_param(url: str, name: str) -> str | None:
    """Return the raw value of the first ``name=`` query parameter.

    The value is returned exactly as it appears in the URL (no
    percent-decoding), which is what the consent parameters need.
    """
    match = re.search(rf"[?&]{re.escape(name)}=([^&#]*)", url)
    return match.group(1) if match else None


def preview(url: str, limit: int = 200) -> str:
    """Shorten *url* for log output."""
    if len(url) <= limit:
        return url
    return url[:limit] + "..."
