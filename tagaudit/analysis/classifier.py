"""
Tracking implementation classifier.

Turns a finished ``AggregateState`` into the single tracking-type label,
plus the consent tool name and the two request-log booleans.  The
cascade favours evidence of active collection over mere code presence,
and client-side GTM over everything else; the order of the checks in
``classify_tracking_type`` must not change.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from tagaudit.analysis import patterns
from tagaudit.consent import tools
from tagaudit.models import consent, tracking
from tagaudit.models.verdict import UNKNOWN_TRACKING_TYPE
from tagaudit.utils import logger
from tagaudit.utils import url as url_utils

log = logger.create_logger("Classifier")

GTM_CLIENT_SIDE = "GTM (client-side)"
GA4_SERVER_SIDE = "GA4 Server-Side (custom endpoint)"
GA4_GTAG_CLIENT_SIDE = "GA4 gtag.js (client-side)"
GA_CLIENT_SIDE = "Google Analytics (client-side)"
POSSIBLY_SERVER_SIDE = "Possibly server-side (no GTM/GA requests detected)"
GA4_CONSENT_BLOCKED = "GA4 loaded but consent-blocked"
UNKNOWN = UNKNOWN_TRACKING_TYPE

TRACKING_TYPES: tuple[str, ...] = (
    GTM_CLIENT_SIDE,
    GA4_SERVER_SIDE,
    GA4_GTAG_CLIENT_SIDE,
    GA_CLIENT_SIDE,
    POSSIBLY_SERVER_SIDE,
    GA4_CONSENT_BLOCKED,
    UNKNOWN,
)


class Classification(NamedTuple):
    """Classifier output for one site."""

    tracking_type: str
    consent_tool: str
    consent_tool_states: consent.ConsentToolStates


def _any_contains(urls: Iterable[str], fragment: str) -> bool:
    return any(fragment in u for u in urls)


def has_custom_endpoint_signal(urls: Iterable[str]) -> bool:
    """Whether any non-Google URL looks like a GA4 collection hit."""
    return any(
        not url_utils.is_google_host(u)
        and ("/g/collect" in u or patterns.GA4_TID_PARAM.search(u) is not None)
        for u in urls
    )


def gtm_loaded_initially(urls: Iterable[str]) -> bool:
    """Whether the GTM container script was requested."""
    return _any_contains(urls, patterns.GTM_CONTAINER_LOAD)


def ga_cookieless_hits(urls: Iterable[str]) -> bool:
    """Whether GA received Consent Mode v2 cookieless (``gcs=G100``) pings."""
    return any(url_utils.GOOGLE_ANALYTICS_HOST in u and patterns.COOKIELESS_PING in u for u in urls)


def classify_tracking_type(aggregate: tracking.AggregateState) -> str:
    """Return the tracking-type label for *aggregate*; first matching rule wins."""
    if aggregate.is_empty:
        return UNKNOWN

    urls = aggregate.tracking_urls
    counts = aggregate.counts
    has_ga4 = bool(aggregate.ga4_ids)

    if _any_contains(urls, patterns.GTM_CONTAINER_LOAD):
        return GTM_CLIENT_SIDE
    if has_ga4 and has_custom_endpoint_signal(urls):
        return GA4_SERVER_SIDE
    if has_ga4 and _any_contains(urls, patterns.GTAG_LOAD):
        return GA4_GTAG_CLIENT_SIDE
    if _any_contains(urls, url_utils.GOOGLE_ANALYTICS_HOST):
        return GA_CLIENT_SIDE
    if counts.gtm == 0 and counts.ga == 0 and not has_ga4:
        return POSSIBLY_SERVER_SIDE
    if has_ga4 and counts.ga == 0:
        return GA4_CONSENT_BLOCKED
    return UNKNOWN


def classify(aggregate: tracking.AggregateState) -> Classification:
    """Classify the tracking implementation and identify the consent tool.

    Args:
        aggregate: Final aggregator state for the site.

    Returns:
        The tracking-type label, the consent tool named in page or
        script text, and the runtime consent tool report.
    """
    tracking_type = classify_tracking_type(aggregate)
    consent_tool = tools.detect_consent_tool(aggregate.scanned_texts)
    tool_states = tools.read_consent_tool_states(aggregate.snapshot)

    log.info("Tracking implementation classified", {
        "trackingType": tracking_type,
        "consentTool": consent_tool,
        "gtmIds": len(aggregate.gtm_ids),
        "ga4Ids": len(aggregate.ga4_ids),
    })
    if tracking_type == GA4_CONSENT_BLOCKED:
        log.warn("GA4 code present but no collection requests seen", {"ga4Ids": ", ".join(aggregate.ga4_ids)})

    return Classification(tracking_type, consent_tool, tool_states)
