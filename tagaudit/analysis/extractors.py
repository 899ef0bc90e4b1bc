"""
Signal extractors.

Pure functions that scan a single piece of evidence (a request URL, a
page or script body, a runtime snapshot) for GTM container ids and GA4
measurement ids.  None of them keep state; the aggregator folds their
results.
"""

from __future__ import annotations

from collections.abc import Iterable

from tagaudit.analysis import patterns
from tagaudit.models import evidence, tracking
from tagaudit.utils import url as url_utils


def _unique(ids: Iterable[tracking.TrackingIdentifier]) -> list[tracking.TrackingIdentifier]:
    """Drop duplicates, keeping first-seen order."""
    return list(dict.fromkeys(ids))


def looks_like_custom_endpoint(url: str) -> bool:
    """Heuristic for first-party / server-side GA collection URLs.

    Intentionally broad (any ``analytics.`` host fragment qualifies);
    callers additionally require a ``tid=G-`` parameter before treating
    the URL as GA traffic.
    """
    if any(hint in url for hint in patterns.CUSTOM_ENDPOINT_HINTS):
        return True
    return patterns.GA4_TID_PARAM.search(url) is not None


def extract_from_url(url: str) -> tracking.UrlExtraction:
    """Categorise a request URL and pull out any identifiers it carries.

    Args:
        url: Full request URL.

    Returns:
        The request category (``gtm``, ``ga`` or ``other``) and the ids
        found.  ``custom_endpoint`` is set for GA hits recovered from a
        non-Google collection endpoint.
    """
    if url_utils.is_tag_manager_host(url):
        found = [
            tracking.TrackingIdentifier.gtm(match.group(1))
            for pattern in patterns.GTM_URL_PATTERNS
            for match in pattern.finditer(url)
        ]
        ga4 = patterns.GA4_ID_PARAM.search(url)
        if ga4:
            found.append(tracking.TrackingIdentifier.ga4(ga4.group(1)))
        return tracking.UrlExtraction(category="gtm", identifiers=_unique(found))

    tid = patterns.GA4_TID_PARAM.search(url)

    if url_utils.is_google_analytics_host(url):
        ids = [tracking.TrackingIdentifier.ga4(tid.group(1))] if tid else []
        return tracking.UrlExtraction(category="ga", identifiers=ids)

    # Only counted as GA traffic when an id is actually recoverable, so
    # unrelated "analytics."-named hosts stay in "other".
    if tid and looks_like_custom_endpoint(url):
        return tracking.UrlExtraction(
            category="ga",
            identifiers=[tracking.TrackingIdentifier.ga4(tid.group(1))],
            custom_endpoint=True,
        )

    return tracking.UrlExtraction(category="other")


def extract_from_content(text: str, min_length: int = 6) -> list[tracking.TrackingIdentifier]:
    """Find every distinct GTM and GA4 id mentioned in a page or script body."""
    if not text:
        return []
    gtm_re, ga4_re = patterns.content_id_patterns(min_length)
    found = [tracking.TrackingIdentifier.gtm(m.group(0)) for m in gtm_re.finditer(text)]
    found += [tracking.TrackingIdentifier.ga4(m.group(0)) for m in ga4_re.finditer(text)]
    return _unique(found)


def extract_from_snapshot(snapshot: evidence.RuntimeSnapshot) -> list[tracking.TrackingIdentifier]:
    """Read GTM container ids from ``google_tag_manager`` keys and the dataLayer."""
    found: list[tracking.TrackingIdentifier] = []
    if snapshot.has_tag_manager_object:
        for key in snapshot.tag_manager_object_keys:
            match = patterns.GTM_RUNTIME_ID.search(key)
            if match:
                found.append(tracking.TrackingIdentifier.gtm(match.group(0)))
    if snapshot.data_layer_serialized:
        found += [
            tracking.TrackingIdentifier.gtm(m.group(0))
            for m in patterns.GTM_RUNTIME_ID.finditer(snapshot.data_layer_serialized)
        ]
    return _unique(found)
