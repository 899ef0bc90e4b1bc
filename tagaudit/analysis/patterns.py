"""
Compiled identifier and endpoint patterns.

Query-parameter patterns are case-insensitive, matching how tag loaders
and collection endpoints are requested in the wild.  Text patterns used on
page and script bodies are built per minimum id length (see
``content_id_patterns``).
"""

from __future__ import annotations

import functools
import re

# ============================================================================
# GTM container ids in request URLs
# ============================================================================

# Each shape is tried; matches are unioned rather than first-wins.
GTM_ID_PARAM = re.compile(r"[?&]id=(GTM-[A-Z0-9]+)", re.I)
GTM_JS_LOAD = re.compile(r"/gtm\.js\?id=(GTM-[A-Z0-9]+)", re.I)
# Bare scan stays case-sensitive so paths like "/gtm-loader.js" are ignored.
GTM_ID_ANYWHERE = re.compile(r"(GTM-[A-Z0-9]+)")

GTM_URL_PATTERNS: tuple[re.Pattern[str], ...] = (GTM_ID_PARAM, GTM_JS_LOAD, GTM_ID_ANYWHERE)

# ============================================================================
# GA4 measurement ids in request URLs
# ============================================================================

# GA4 id riding on a gtag.js / GTM load.
GA4_ID_PARAM = re.compile(r"[?&]id=(G-[A-Z0-9]+)", re.I)
# GA4 id on a collection hit.
GA4_TID_PARAM = re.compile(r"[?&]tid=(G-[A-Z0-9]+)", re.I)

# Hints that a non-Google URL might be a first-party / server-side
# collection endpoint.
CUSTOM_ENDPOINT_HINTS: tuple[str, ...] = ("/g/collect", "analytics.")

# ============================================================================
# Runtime objects
# ============================================================================

# Matches case-sensitively: container keys and dataLayer JSON are verbatim.
GTM_RUNTIME_ID = re.compile(r"GTM-[A-Z0-9]+")

# ============================================================================
# Tag loader paths used by the classifier
# ============================================================================

GTM_CONTAINER_LOAD = "googletagmanager.com/gtm.js"
GTAG_LOAD = "googletagmanager.com/gtag/js"
COOKIELESS_PING = "gcs=G100"


@functools.lru_cache(maxsize=8)
def content_id_patterns(min_length: int) -> tuple[re.Pattern[str], re.Pattern[str]]:
    """Return ``(gtm, ga4)`` text patterns for ids of at least *min_length*.

    Both are anchored on a left word boundary so ``G-`` inside
    ``GTM-`` or ``PNG-`` never yields a GA4 id.
    """
    return (
        re.compile(rf"\bGTM-[A-Z0-9]{{{min_length},}}"),
        re.compile(rf"\bG-[A-Z0-9]{{{min_length},}}"),
    )
