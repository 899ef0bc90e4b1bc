"""
Instrumentation event log digest.

The in-page debugger records ``gtag(...)`` calls, ``dataLayer.push``
objects and GA hits sent through ``sendBeacon``/``fetch`` as loosely
shaped payloads.  This module reads only the keys it needs from them
and ignores anything of an unexpected shape.

The debugger emits paired records for the same call (a ``gtag`` record
plus a ``consent`` record for consent commands, a ``dataLayer.push``
plus an ``ecommerce`` record for commerce pushes).  The dedicated record
type is preferred; the generic one is only used when no dedicated
records exist.
"""

from __future__ import annotations

import collections
from collections.abc import Mapping, Sequence
from urllib import parse

from tagaudit.models import events
from tagaudit.utils import url as url_utils

ECOMMERCE_EVENT_NAMES: frozenset[str] = frozenset({
    "purchase",
    "add_to_cart",
    "remove_from_cart",
    "view_item",
    "begin_checkout",
})

CUSTOM_DIMENSION_PREFIXES: tuple[str, ...] = ("custom_", "user_")

CUSTOM_METRIC_MARKER = "metric"

GTAG_PARAMETER_COMMANDS: tuple[str, ...] = ("event", "config")


def _mapping(value: events.EventValue) -> Mapping[str, events.EventValue]:
    return value if isinstance(value, Mapping) else {}


def _text(value: events.EventValue) -> str | None:
    return value if isinstance(value, str) else None


def _consent_states(value: events.EventValue) -> dict[str, str]:
    return {k: str(v) for k, v in _mapping(value).items() if isinstance(v, (str, bool, int, float))}


def _pushed_object(event: events.InstrumentationEvent) -> Mapping[str, events.EventValue]:
    return _mapping(event.payload.get("event"))


def is_ecommerce_push(pushed: Mapping[str, events.EventValue]) -> bool:
    """Whether a dataLayer object describes an e-commerce interaction."""
    if "ecommerce" in pushed or "items" in pushed:
        return True
    return _text(pushed.get("event")) in ECOMMERCE_EVENT_NAMES


def _consent_commands(log: Sequence[events.InstrumentationEvent]) -> list[events.ConsentCommand]:
    dedicated = [e for e in log if e.type == "consent"]
    if dedicated:
        return [
            events.ConsentCommand(
                action=_text(e.payload.get("action")) or "unknown",
                states=_consent_states(e.payload.get("consent_types")),
            )
            for e in dedicated
        ]
    return [
        events.ConsentCommand(
            action=_text(e.payload.get("targetId")) or "unknown",
            states=_consent_states(e.payload.get("parameters")),
        )
        for e in log
        if e.type == "gtag" and e.payload.get("command") == "consent"
    ]


def _ecommerce_events(log: Sequence[events.InstrumentationEvent]) -> list[str]:
    dedicated = [e for e in log if e.type == "ecommerce"]
    if not dedicated:
        dedicated = [e for e in log if e.type == "dataLayer.push" and is_ecommerce_push(_pushed_object(e))]
    return [
        _text(e.payload.get("eventName")) or _text(_pushed_object(e).get("event")) or "ecommerce_event"
        for e in dedicated
    ]


def _analytics_hit(event: events.InstrumentationEvent) -> events.AnalyticsHit | None:
    hit_url = _text(event.payload.get("url"))
    if not hit_url:
        return None
    try:
        params = parse.parse_qs(parse.urlsplit(hit_url).query)
    except ValueError:
        params = {}

    def first(name: str) -> str | None:
        values = params.get(name)
        return values[0] if values else None

    return events.AnalyticsHit(
        transport="beacon" if event.type == "sendBeacon" else "fetch",
        host=url_utils.extract_domain(hit_url),
        measurement_id=first("tid"),
        event_name=first("en"),
        page_title=first("dt"),
        consent_state=first("gcs"),
    )


def _gtag_parameter_keys(event: events.InstrumentationEvent) -> list[str]:
    if event.payload.get("command") not in GTAG_PARAMETER_COMMANDS:
        return []
    return [k for k in _mapping(event.payload.get("parameters")) if k.startswith(CUSTOM_DIMENSION_PREFIXES)]


def summarize_events(log: Sequence[events.InstrumentationEvent]) -> events.EventLogSummary:
    """Reduce an instrumentation event log to its reportable facts.

    Custom keys pushed to the dataLayer always count as dimensions;
    custom keys passed as gtag ``event``/``config`` parameters count as
    metrics when their name contains ``metric``.

    Args:
        log: Events in the order they were recorded.

    Returns:
        Per-type counts, consent commands, e-commerce event names,
        beacon/fetch analytics hits, custom dimension and metric keys
        and gtag ``config`` targets.
    """
    counts = collections.Counter(e.type for e in log)

    dimensions: set[str] = set()
    metrics: set[str] = set()
    targets: dict[str, None] = {}
    hits: list[events.AnalyticsHit] = []
    for event in log:
        if event.type == "dataLayer.push":
            dimensions.update(k for k in _pushed_object(event) if k.startswith(CUSTOM_DIMENSION_PREFIXES))
        elif event.type == "gtag":
            for key in _gtag_parameter_keys(event):
                (metrics if CUSTOM_METRIC_MARKER in key else dimensions).add(key)
            if event.payload.get("command") == "config":
                target = _text(event.payload.get("targetId"))
                if target:
                    targets[target] = None
        elif event.type in ("sendBeacon", "fetch"):
            hit = _analytics_hit(event)
            if hit is not None:
                hits.append(hit)

    return events.EventLogSummary(
        event_counts=dict(counts),
        consent_commands=_consent_commands(log),
        ecommerce_events=_ecommerce_events(log),
        analytics_hits=hits,
        custom_dimensions=sorted(dimensions),
        custom_metrics=sorted(metrics),
        config_targets=list(targets),
    )
